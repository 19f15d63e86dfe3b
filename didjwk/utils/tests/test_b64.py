import json

import pytest

from .. import b64 as test_module


class TestB64:
    def test_pad_unpad(self):
        assert test_module.pad("YQ") == "YQ=="
        assert test_module.pad("YWI") == "YWI="
        assert test_module.pad("YWJj") == "YWJj"
        assert test_module.unpad("YQ==") == "YQ"

    def test_bytes_b64(self):
        assert test_module.bytes_to_b64(b"\xfb\xff") == "+/8="
        assert test_module.bytes_to_b64(b"\xfb\xff", urlsafe=True) == "-_8="
        assert test_module.bytes_to_b64(b"\xfb\xff", urlsafe=True, pad=False) == "-_8"

    def test_b64url_strict(self):
        assert test_module.b64url_to_bytes("-_8") == b"\xfb\xff"
        assert test_module.bytes_to_b64url(b"\xfb\xff") == "-_8"
        assert test_module.bytes_to_b64url(b"\xfb\xff", padding=True) == "-_8="
        assert test_module.b64url_to_bytes("-_8=", padding=True) == b"\xfb\xff"

        for bad in ("+/8", "not-valid-base64!!!", "-_8=", "abcde"):
            with pytest.raises(ValueError):
                test_module.b64url_to_bytes(bad)
        with pytest.raises(ValueError):
            test_module.b64url_to_bytes("-_8", padding=True)
        with pytest.raises(ValueError):
            test_module.b64url_to_bytes(None)

    def test_dict_round_trip(self):
        value = {"x": "abc", "kty": "OKP"}
        token = test_module.dict_to_b64(value)
        assert "=" not in token
        assert test_module.b64url_to_bytes(token) == b'{"kty":"OKP","x":"abc"}'
        assert test_module.b64_to_dict(token) == value

    def test_b64_to_dict_x(self):
        with pytest.raises(ValueError):
            test_module.b64_to_dict(test_module.bytes_to_b64url(b"\xff\xfe"))
        with pytest.raises(json.JSONDecodeError):
            test_module.b64_to_dict(test_module.bytes_to_b64url(b"{not json"))

    @pytest.mark.parametrize("nested", [b"[" * 100000, b'{"a":' * 100000])
    def test_b64_to_dict_x_deeply_nested(self, nested):
        with pytest.raises(ValueError):
            test_module.b64_to_dict(test_module.bytes_to_b64url(nested))

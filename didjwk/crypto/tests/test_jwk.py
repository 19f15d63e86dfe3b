import base64
import json

import pytest

from ...utils.b64 import b64url_to_bytes
from ..error import MalformedKey
from ..jwk import Jwk

# RFC 8037, appendix A
ED25519_D = "nWGxne_9WmC6hEr0kuwsxERJxWl7MmkZcDusAxyuf2A"
ED25519_X = "11qYAYKxCrfVS_7TyWQHOg7hcvPapiMlrwIaaPcHURo"
ED25519_THUMBPRINT = "kPrK_qmxVWaYVA9wwBF6Iuo3vVzz7TxHCTwXBygrS4k"

P256_JWK = {
    "crv": "P-256",
    "kty": "EC",
    "x": "acbIQiuMs3i8_uszEjJ2tpTtRM4EU3yz91PH6CdH2V0",
    "y": "_KcyLj9vWMptnmKtm46GqDz8wf74I5LKgrl2GzH3nSE",
}


def encode(value) -> str:
    raw = value if isinstance(value, bytes) else json.dumps(value).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


class TestJwk:
    def test_serialize_drops_missing_members(self):
        jwk = Jwk(kty="OKP", alg="EdDSA", crv="Ed25519", x=ED25519_X)
        assert jwk.serialize() == {
            "kty": "OKP",
            "alg": "EdDSA",
            "crv": "Ed25519",
            "x": ED25519_X,
        }
        assert not jwk.is_private

    def test_private_to_public(self):
        private = Jwk(kty="OKP", crv="Ed25519", x=ED25519_X, d=ED25519_D)
        assert private.is_private
        public = private.to_public()
        assert public is not private
        assert not public.is_private
        assert private.d == ED25519_D
        assert "d" not in public.serialize()
        assert ED25519_D not in repr(private)

    def test_thumbprint(self):
        jwk = Jwk(kty="OKP", alg="EdDSA", crv="Ed25519", x=ED25519_X, d=ED25519_D)
        assert jwk.compute_thumbprint() == ED25519_THUMBPRINT
        assert jwk.to_public().compute_thumbprint() == ED25519_THUMBPRINT
        assert Jwk.parse(P256_JWK).compute_thumbprint()

        with pytest.raises(MalformedKey):
            Jwk(kty="RSA", x="AQAB").compute_thumbprint()
        with pytest.raises(MalformedKey):
            Jwk(kty="EC", crv="secp256k1", x=ED25519_X).compute_thumbprint()

    def test_b64url_round_trip(self):
        jwk = Jwk(kty="OKP", alg="EdDSA", crv="Ed25519", x=ED25519_X)
        token = jwk.to_b64url()
        assert "=" not in token
        assert json.loads(b64url_to_bytes(token)) == jwk.serialize()
        assert Jwk.from_b64url(token) == jwk
        assert token == Jwk.from_b64url(token).to_b64url()

    def test_parse_foreign_curves(self):
        assert Jwk.parse(P256_JWK).y == P256_JWK["y"]
        x25519 = Jwk.parse(
            {
                "kty": "OKP",
                "crv": "X25519",
                "use": "enc",
                "x": "3p7bfXt9wbTTW2HC7OQ1Nz-DQ8hbeGdNrfx-FG-IK08",
            }
        )
        assert x25519.use == "enc"

    def test_parse_ignores_unknown_members(self):
        jwk = Jwk.parse({"kty": "OKP", "crv": "Ed25519", "x": ED25519_X, "ext": True})
        assert "ext" not in jwk.serialize()

    @pytest.mark.parametrize(
        "value",
        [
            {"kty": "bogus"},
            {"kty": "RSA", "n": "AQAB", "e": "AQAB"},
            {"kty": "OKP", "crv": "Ed25519"},
            {"kty": "OKP", "x": ED25519_X},
            {"kty": "OKP", "crv": "Ed25519", "x": "not base64url!"},
            {"kty": "OKP", "crv": "Ed25519", "x": 42},
            {"kty": "EC", "crv": "secp256k1", "x": ED25519_X},
            {"kty": "EC", "crv": "Ed25519", "x": ED25519_X, "y": ED25519_X},
            {"kty": "OKP", "crv": "Ed25519", "alg": "ES256K", "x": ED25519_X},
            {"kty": "OKP", "crv": "Ed25519", "x": ED25519_X, "use": "both"},
            ["kty", "OKP"],
            "OKP",
        ],
    )
    def test_parse_x(self, value):
        with pytest.raises(MalformedKey):
            Jwk.parse(value)

    @pytest.mark.parametrize(
        "token",
        [
            "not-valid-base64!!!",
            "abcde",
            encode(b"\xff\xfe\xfd"),
            encode(b"{not json"),
            encode([1, 2, 3]),
            encode({"kty": "bogus"}),
            None,
        ],
    )
    def test_from_b64url_x(self, token):
        with pytest.raises(MalformedKey):
            Jwk.from_b64url(token)

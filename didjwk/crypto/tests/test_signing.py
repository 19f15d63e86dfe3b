import pytest

from .. import signing as test_module
from ..dsa import DsaName
from ..ed25519 import Ed25519
from ..error import SignatureInvalid, UnsupportedAlgorithm
from ..jwk import Jwk
from ..secp256k1 import Secp256k1


class TestSigning:
    @pytest.mark.parametrize(
        "name, dsa_class",
        [
            (DsaName.ED25519, Ed25519),
            ("ed25519", Ed25519),
            (DsaName.SECP256K1, Secp256k1),
            ("secp256k1", Secp256k1),
        ],
    )
    def test_get_dsa(self, name, dsa_class):
        assert isinstance(test_module.get_dsa(name), dsa_class)

    @pytest.mark.parametrize("name", ["rsa", "ED25519", None, 3])
    def test_get_dsa_unsupported(self, name):
        with pytest.raises(UnsupportedAlgorithm):
            test_module.get_dsa(name)

    def test_every_name_dispatches(self):
        for name in DsaName:
            assert test_module.get_dsa(name).name == name

    def test_dsa_for_jwk(self):
        assert isinstance(
            test_module.dsa_for_jwk(Jwk(kty="OKP", crv="Ed25519", x="AA")), Ed25519
        )
        assert isinstance(
            test_module.dsa_for_jwk(Jwk(kty="EC", crv="secp256k1", x="AA", y="AA")),
            Secp256k1,
        )
        assert isinstance(
            test_module.dsa_for_jwk(Jwk(kty="EC", alg="ES256K", x="AA", y="AA")),
            Secp256k1,
        )
        with pytest.raises(UnsupportedAlgorithm):
            test_module.dsa_for_jwk(Jwk(kty="EC", crv="P-256", x="AA", y="AA"))

    @pytest.mark.parametrize("name", list(DsaName))
    def test_round_trip(self, name):
        private_key = test_module.generate_private_key(name)
        public_key = test_module.compute_public_key(private_key)
        signature = test_module.sign(private_key, b"payload")
        test_module.verify(public_key, b"payload", signature)
        with pytest.raises(SignatureInvalid):
            test_module.verify(public_key, b"tampered", signature)

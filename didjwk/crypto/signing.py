"""Algorithm dispatch for key generation, signing and verification."""

import logging
from typing import Union

from .dsa import BaseDsa, DsaName
from .ed25519 import Ed25519
from .error import UnsupportedAlgorithm
from .jwk import Jwk
from .secp256k1 import Secp256k1

LOGGER = logging.getLogger(__name__)


def get_dsa(name: Union[DsaName, str]) -> BaseDsa:
    """
    Get the signature algorithm implementation for an algorithm tag.

    Args:
        name: The algorithm tag, as a DsaName or its value

    Raises:
        UnsupportedAlgorithm: If the tag is not a supported algorithm

    Returns:
        The algorithm implementation

    """
    dsa_name = DsaName.from_value(name)
    if dsa_name == DsaName.ED25519:
        return Ed25519()
    elif dsa_name == DsaName.SECP256K1:
        return Secp256k1()
    else:
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {name}")


def dsa_for_jwk(jwk: Jwk) -> BaseDsa:
    """
    Get the signature algorithm implementation able to use a key.

    Raises:
        UnsupportedAlgorithm: If no supported algorithm matches the key

    """
    dsa_name = DsaName.from_jwk(jwk)
    if not dsa_name:
        raise UnsupportedAlgorithm(
            f"No supported algorithm for key {jwk.kty}/{jwk.crv}/{jwk.alg}"
        )
    return get_dsa(dsa_name)


def generate_private_key(name: Union[DsaName, str]) -> Jwk:
    """Generate a private key for an algorithm tag."""
    return get_dsa(name).generate_private_key()


def compute_public_key(private_key: Jwk) -> Jwk:
    """Derive the public key of a private key."""
    return dsa_for_jwk(private_key).compute_public_key(private_key)


def sign(private_key: Jwk, payload: bytes) -> bytes:
    """Sign a payload with a private key."""
    return dsa_for_jwk(private_key).sign(private_key, payload)


def verify(public_key: Jwk, payload: bytes, signature: bytes) -> None:
    """
    Verify a signature over a payload using the algorithm of the public key.

    Raises:
        SignatureInvalid: If the signature does not validate
        MalformedKey: If the public key cannot be used
        UnsupportedAlgorithm: If no supported algorithm matches the key

    """
    dsa = dsa_for_jwk(public_key)
    LOGGER.debug("Verifying %s signature", dsa.algorithm)
    dsa.verify(public_key, payload, signature)

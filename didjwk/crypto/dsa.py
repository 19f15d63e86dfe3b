"""Digital signature algorithm interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

from ..utils.b64 import b64url_to_bytes
from .error import InvalidPrivateKey, MalformedKey
from .jwk import Jwk


class DsaName(Enum):
    """Supported digital signature algorithms."""

    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"

    @classmethod
    def from_value(cls, value: Union["DsaName", str]) -> Optional["DsaName"]:
        """Get DsaName instance from an instance or its value. Returns None if not found."""
        if isinstance(value, DsaName):
            return value
        for dsa_name in DsaName:
            if dsa_name.value == value:
                return dsa_name

        return None

    @classmethod
    def from_jwk(cls, jwk: Jwk) -> Optional["DsaName"]:
        """Get the DsaName able to operate on a key. Returns None if not found.

        The curve identifies the algorithm; `ES256K` alone also selects secp256k1.
        """
        if jwk.crv == "Ed25519":
            return DsaName.ED25519
        elif jwk.crv == "secp256k1" or (jwk.crv is None and jwk.alg == "ES256K"):
            return DsaName.SECP256K1

        return None


class BaseDsa(ABC):
    """Uniform contract over a signature algorithm and its key encoding.

    Implementations are stateless; one instance may be shared between callers.
    """

    NAME: DsaName = None
    KEY_TYPE: str = None
    ALGORITHM: str = None
    CURVE: str = None

    @property
    def name(self) -> DsaName:
        """Accessor for the algorithm tag."""
        return self.NAME

    @property
    def key_type(self) -> str:
        """Accessor for the JOSE key type."""
        return self.KEY_TYPE

    @property
    def algorithm(self) -> str:
        """Accessor for the JOSE algorithm identifier."""
        return self.ALGORITHM

    @property
    def curve(self) -> str:
        """Accessor for the JOSE curve identifier."""
        return self.CURVE

    @abstractmethod
    def generate_private_key(self) -> Jwk:
        """Generate a fresh private key with both `d` and the public components."""

    @abstractmethod
    def compute_public_key(self, private_key: Jwk) -> Jwk:
        """Derive the public key from a private key.

        Raises:
            InvalidPrivateKey: if `d` is missing or unusable for the algorithm

        """

    @abstractmethod
    def sign(self, private_key: Jwk, payload: bytes) -> bytes:
        """Sign a payload with a private key."""

    @abstractmethod
    def verify(self, public_key: Jwk, payload: bytes, signature: bytes) -> None:
        """Verify a signature over a payload.

        Raises:
            SignatureInvalid: if the signature does not validate
            MalformedKey: if the public key cannot be used

        """

    @abstractmethod
    def bytes_to_public_key(self, public_key: bytes) -> Jwk:
        """Wrap raw public key bytes into a public Jwk."""

    def _private_bytes(self, private_key: Jwk, length: int) -> bytes:
        """Decode the private component of a key and check its length."""
        if not private_key.d:
            raise InvalidPrivateKey("Private key component d is missing")
        try:
            value = b64url_to_bytes(private_key.d)
        except ValueError as err:
            raise InvalidPrivateKey("Private key component is not base64url") from err
        if len(value) != length:
            raise InvalidPrivateKey(
                f"{self.CURVE} private key must be {length} bytes in length"
            )
        return value

    def _public_bytes(self, public_key: Jwk, member: str, length: int) -> bytes:
        """Decode a public component of a key and check its length."""
        if public_key.kty != self.KEY_TYPE or public_key.crv != self.CURVE:
            raise MalformedKey(
                f"Key {public_key.kty}/{public_key.crv} is not a {self.CURVE} key"
            )
        encoded = getattr(public_key, member)
        if not encoded:
            raise MalformedKey(f"Public key component {member} is missing")
        try:
            value = b64url_to_bytes(encoded)
        except ValueError as err:
            raise MalformedKey(f"Public key component {member} is not base64url") from err
        if len(value) != length:
            raise MalformedKey(
                f"{self.CURVE} public key component {member} must be {length} bytes"
            )
        return value

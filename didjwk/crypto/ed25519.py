"""Ed25519 signature algorithm."""

import nacl.bindings
import nacl.exceptions
import nacl.utils

from ..utils.b64 import bytes_to_b64url
from .dsa import BaseDsa, DsaName
from .error import MalformedKey, SignatureInvalid
from .jwk import Jwk


class Ed25519(BaseDsa):
    """Ed25519 keys as OKP JWKs; `d` holds the 32-byte seed."""

    NAME = DsaName.ED25519
    KEY_TYPE = "OKP"
    ALGORITHM = "EdDSA"
    CURVE = "Ed25519"

    SEED_LENGTH = nacl.bindings.crypto_sign_SEEDBYTES
    PUBLIC_KEY_LENGTH = nacl.bindings.crypto_sign_PUBLICKEYBYTES
    SIGNATURE_LENGTH = nacl.bindings.crypto_sign_BYTES

    def generate_private_key(self) -> Jwk:
        """Generate a private key from a random seed."""
        seed = nacl.utils.random(self.SEED_LENGTH)
        public_key, _ = nacl.bindings.crypto_sign_seed_keypair(seed)
        return Jwk(
            kty=self.KEY_TYPE,
            alg=self.ALGORITHM,
            crv=self.CURVE,
            x=bytes_to_b64url(public_key),
            d=bytes_to_b64url(seed),
        )

    def compute_public_key(self, private_key: Jwk) -> Jwk:
        """Derive the public key from the seed."""
        seed = self._private_bytes(private_key, self.SEED_LENGTH)
        public_key, _ = nacl.bindings.crypto_sign_seed_keypair(seed)
        return self.bytes_to_public_key(public_key)

    def sign(self, private_key: Jwk, payload: bytes) -> bytes:
        """Produce a deterministic 64-byte signature."""
        seed = self._private_bytes(private_key, self.SEED_LENGTH)
        _, secret = nacl.bindings.crypto_sign_seed_keypair(seed)
        signed = nacl.bindings.crypto_sign(payload, secret)
        return signed[: self.SIGNATURE_LENGTH]

    def verify(self, public_key: Jwk, payload: bytes, signature: bytes) -> None:
        """Verify a signature, raising SignatureInvalid on mismatch."""
        verkey = self._public_bytes(public_key, "x", self.PUBLIC_KEY_LENGTH)
        if len(signature) != self.SIGNATURE_LENGTH:
            raise SignatureInvalid(
                f"Ed25519 signature must be {self.SIGNATURE_LENGTH} bytes"
            )
        try:
            nacl.bindings.crypto_sign_open(signature + payload, verkey)
        except nacl.exceptions.BadSignatureError as err:
            raise SignatureInvalid("Integrity check failed") from err

    def bytes_to_public_key(self, public_key: bytes) -> Jwk:
        """Wrap a raw 32-byte public key."""
        if len(public_key) != self.PUBLIC_KEY_LENGTH:
            raise MalformedKey(
                f"Ed25519 public key must be {self.PUBLIC_KEY_LENGTH} bytes in length"
            )
        return Jwk(
            kty=self.KEY_TYPE,
            alg=self.ALGORITHM,
            crv=self.CURVE,
            x=bytes_to_b64url(public_key),
        )

"""secp256k1 signature algorithm (ES256K)."""

import hashlib

from ecdsa import (
    SECP256k1,
    BadSignatureError,
    MalformedPointError,
    SigningKey,
    VerifyingKey,
)
from ecdsa.util import MalformedSignature, sigdecode_string, sigencode_string_canonize

from ..utils.b64 import bytes_to_b64url
from .dsa import BaseDsa, DsaName
from .error import InvalidPrivateKey, MalformedKey, SignatureInvalid
from .jwk import Jwk


class Secp256k1(BaseDsa):
    """secp256k1 keys as EC JWKs with SHA-256 digests and `r || s` signatures."""

    NAME = DsaName.SECP256K1
    KEY_TYPE = "EC"
    ALGORITHM = "ES256K"
    CURVE = "secp256k1"

    PRIVATE_KEY_LENGTH = 32
    COORDINATE_LENGTH = 32
    SIGNATURE_LENGTH = 64
    UNCOMPRESSED_PREFIX = b"\x04"

    def generate_private_key(self) -> Jwk:
        """Generate a private key from the system random source."""
        signing_key = SigningKey.generate(curve=SECP256k1)
        return self._to_jwk(signing_key.get_verifying_key(), signing_key.to_string())

    def compute_public_key(self, private_key: Jwk) -> Jwk:
        """Derive the public point from the private scalar."""
        signing_key = self._signing_key(private_key)
        return self._to_jwk(signing_key.get_verifying_key())

    def sign(self, private_key: Jwk, payload: bytes) -> bytes:
        """Sign with an RFC 6979 nonce, normalized to low-S."""
        signing_key = self._signing_key(private_key)
        return signing_key.sign_deterministic(
            payload,
            hashfunc=hashlib.sha256,
            sigencode=sigencode_string_canonize,
        )

    def verify(self, public_key: Jwk, payload: bytes, signature: bytes) -> None:
        """Verify a signature, raising SignatureInvalid on mismatch."""
        x = self._public_bytes(public_key, "x", self.COORDINATE_LENGTH)
        y = self._public_bytes(public_key, "y", self.COORDINATE_LENGTH)
        try:
            verifying_key = VerifyingKey.from_string(x + y, curve=SECP256k1)
        except MalformedPointError as err:
            raise MalformedKey("Public key is not a point on secp256k1") from err

        if len(signature) != self.SIGNATURE_LENGTH:
            raise SignatureInvalid(
                f"ES256K signature must be {self.SIGNATURE_LENGTH} bytes"
            )
        try:
            verifying_key.verify(
                signature,
                payload,
                hashfunc=hashlib.sha256,
                sigdecode=sigdecode_string,
            )
        except (BadSignatureError, MalformedSignature) as err:
            raise SignatureInvalid("Integrity check failed") from err

    def bytes_to_public_key(self, public_key: bytes) -> Jwk:
        """Wrap an uncompressed (65-byte) or raw `x || y` (64-byte) public key."""
        if (
            len(public_key) == 1 + 2 * self.COORDINATE_LENGTH
            and public_key[:1] == self.UNCOMPRESSED_PREFIX
        ):
            public_key = public_key[1:]
        if len(public_key) != 2 * self.COORDINATE_LENGTH:
            raise MalformedKey(
                "secp256k1 public key must be 65 bytes uncompressed or 64 bytes raw"
            )
        return Jwk(
            kty=self.KEY_TYPE,
            alg=self.ALGORITHM,
            crv=self.CURVE,
            x=bytes_to_b64url(public_key[: self.COORDINATE_LENGTH]),
            y=bytes_to_b64url(public_key[self.COORDINATE_LENGTH :]),
        )

    def _signing_key(self, private_key: Jwk) -> SigningKey:
        secret = self._private_bytes(private_key, self.PRIVATE_KEY_LENGTH)
        try:
            return SigningKey.from_string(secret, curve=SECP256k1)
        except MalformedPointError as err:
            raise InvalidPrivateKey("Private key is out of range for secp256k1") from err

    def _to_jwk(self, verifying_key: VerifyingKey, secret: bytes = None) -> Jwk:
        public_key = self.bytes_to_public_key(verifying_key.to_string())
        if secret is None:
            return public_key
        return Jwk(
            kty=public_key.kty,
            alg=public_key.alg,
            crv=public_key.crv,
            x=public_key.x,
            y=public_key.y,
            d=bytes_to_b64url(secret),
        )

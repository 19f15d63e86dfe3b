"""Signature-layer exceptions."""

from ..core.error import BaseError


class DsaError(BaseError):
    """General digital signature algorithm exception."""


class UnsupportedAlgorithm(DsaError):
    """Requested signature algorithm is not supported."""


class MalformedKey(DsaError):
    """Key material could not be decoded or does not satisfy the JWK schema."""


class InvalidPrivateKey(DsaError):
    """Private key component is missing or unusable for the algorithm."""


class SignatureInvalid(DsaError):
    """Signature does not validate for the payload and public key."""

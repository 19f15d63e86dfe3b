"""Key manager exceptions."""

from ..core.error import BaseError


class KeyManagerError(BaseError):
    """General key manager exception."""


class UnknownAlias(KeyManagerError):
    """No key is stored under the requested alias."""

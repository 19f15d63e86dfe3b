"""Settings implementation."""

from typing import Mapping

from .base import BaseSettings, SettingsError

# Default signature algorithm used when minting a did:jwk
DID_JWK_ALGORITHM = "did.jwk.algorithm"


class Settings(BaseSettings):
    """Settings held in a plain dictionary, fixed at construction."""

    def __init__(self, values: Mapping[str, object] = None):
        """Initialize a Settings object.

        Args:
            values: An optional mapping of setting names to values

        Raises:
            SettingsError: if a setting name is not a non-empty string

        """
        values = dict(values or {})
        for name in values:
            if not isinstance(name, str) or not name:
                raise SettingsError(f"Invalid setting name: {name!r}")
        self._values = values

    def get_value(self, *var_names, default=None):
        """Fetch the first defined setting among name alternatives."""
        for name in var_names:
            if name in self._values:
                return self._values[name]
        return default

    def __iter__(self):
        """Iterate setting names."""
        return iter(self._values)

    def __len__(self):
        """Count defined settings."""
        return len(self._values)

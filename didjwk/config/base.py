"""Configuration base classes."""

from abc import abstractmethod
from typing import Any, Iterator, Mapping, Optional

from ..core.error import BaseError


class ConfigError(BaseError):
    """A base exception for all configuration errors."""


class SettingsError(ConfigError):
    """Raised when settings are built from invalid keys."""


class BaseSettings(Mapping[str, Any]):
    """Read-only view over dotted setting names such as `did.jwk.algorithm`."""

    @abstractmethod
    def get_value(self, *var_names, default: Optional[Any] = None) -> Any:
        """Fetch the first defined setting among name alternatives.

        Args:
            var_names: setting names, tried in order
            default: returned when none of the names is defined
        """

    def get_str(self, *var_names, default: Optional[str] = None) -> Optional[str]:
        """Fetch a setting as a string, keeping an undefined setting as the default."""
        value = self.get_value(*var_names, default=default)
        return None if value is None else str(value)

    def __getitem__(self, index):
        """Fetch a setting by name, raising KeyError when undefined."""
        if not isinstance(index, str):
            raise TypeError(f"Setting name {index!r} must be a string")
        missing = object()
        result = self.get_value(index, default=missing)
        if result is missing:
            raise KeyError(index)
        return result

    @abstractmethod
    def __iter__(self) -> Iterator[str]:
        """Iterate setting names."""

    @abstractmethod
    def __len__(self) -> int:
        """Count defined settings."""

    def __repr__(self) -> str:
        """Provide a human readable representation of this object."""
        items = ("{}={}".format(k, self[k]) for k in self)
        return "<{}({})>".format(self.__class__.__name__, ", ".join(items))

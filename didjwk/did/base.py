"""Base class for DIDs bound to a key manager."""

from abc import ABC, abstractmethod
from typing import Optional

from ..keys.base import BaseKeyManager
from ..resolver.base import DIDResolutionResult


class BaseDID(ABC):
    """A DID, optionally bound to the key manager holding its private key."""

    METHOD: str = None

    def __init__(self, uri: str, key_manager: Optional[BaseKeyManager] = None):
        """Initialize a DID instance.

        Args:
            uri: the DID string
            key_manager: key manager holding the private key, if any
        """
        self._uri = uri
        self._key_manager = key_manager

    @property
    def uri(self) -> str:
        """Accessor for the DID string."""
        return self._uri

    @property
    def key_manager(self) -> Optional[BaseKeyManager]:
        """Accessor for the bound key manager."""
        return self._key_manager

    @property
    def method(self) -> str:
        """Accessor for the DID method name."""
        return self.METHOD

    @classmethod
    @abstractmethod
    def resolve(cls, did: str) -> DIDResolutionResult:
        """Resolve a DID of this method."""

    def __str__(self) -> str:
        """Return the DID string."""
        return self._uri

    def __repr__(self) -> str:
        """Return a human readable representation of this DID."""
        return "<{}(uri={})>".format(self.__class__.__name__, self._uri)

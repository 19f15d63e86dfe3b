"""Key manager interface."""

from abc import ABC, abstractmethod
from typing import Union

from ..crypto.dsa import DsaName
from ..crypto.jwk import Jwk


class BaseKeyManager(ABC):
    """Abstract key manager interface.

    A key manager owns private key material and hands out aliases in its place.
    Callers refer to keys by alias only; private keys never leave the manager.
    """

    @abstractmethod
    async def generate_private_key(self, algorithm: Union[DsaName, str]) -> str:
        """
        Generate and store a new private key.

        Args:
            algorithm: The signature algorithm of the key

        Returns:
            The alias of the stored key

        Raises:
            UnsupportedAlgorithm: If the algorithm is not supported

        """

    @abstractmethod
    async def import_private_key(self, private_key: Jwk) -> str:
        """
        Store an existing private key.

        Args:
            private_key: The private key to store

        Returns:
            The alias of the stored key

        Raises:
            InvalidPrivateKey: If the key holds no usable private component

        """

    @abstractmethod
    async def get_public_key(self, alias: str) -> Jwk:
        """
        Fetch the public key for an alias.

        Raises:
            UnknownAlias: If no key is stored under the alias

        """

    @abstractmethod
    async def sign(self, alias: str, payload: bytes) -> bytes:
        """
        Sign a payload with the key stored under an alias.

        Raises:
            UnknownAlias: If no key is stored under the alias

        """

    @abstractmethod
    async def alias_exists(self, alias: str) -> bool:
        """Check whether a key is stored under an alias."""

    def __repr__(self) -> str:
        """Get a human readable string."""
        return "<{}>".format(self.__class__.__name__)

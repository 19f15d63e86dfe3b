"""In-memory implementation of the key manager interface."""

import asyncio
import logging
from typing import Dict, Union

from ..crypto.dsa import DsaName
from ..crypto.error import InvalidPrivateKey
from ..crypto.jwk import Jwk
from ..crypto.signing import dsa_for_jwk, get_dsa
from .base import BaseKeyManager
from .error import UnknownAlias

LOGGER = logging.getLogger(__name__)


class InMemoryKeyManager(BaseKeyManager):
    """Key manager holding private keys in process memory.

    Keys are stored under their JWK thumbprint. A single lock guards the store.
    """

    def __init__(self):
        """Initialize an `InMemoryKeyManager` instance."""
        self._keys: Dict[str, Jwk] = {}
        self._lock = asyncio.Lock()

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
        dsa = get_dsa(algorithm)
        private_key = dsa.generate_private_key()
        alias = await self._store(private_key)
        LOGGER.debug("Generated %s key", dsa.name.value)
        return alias

    async def import_private_key(self, private_key: Jwk) -> str:
        """
        Store an existing private key.

        The public components are recomputed from `d`, so an imported key always
        carries the public key matching its private component.

        Raises:
            InvalidPrivateKey: If the key holds no usable private component
            UnsupportedAlgorithm: If no supported algorithm matches the key

        """
        if not private_key.is_private:
            raise InvalidPrivateKey("Only private keys can be imported")
        dsa = dsa_for_jwk(private_key)
        public_key = dsa.compute_public_key(private_key)
        stored = Jwk(
            kty=public_key.kty,
            alg=public_key.alg,
            crv=public_key.crv,
            kid=private_key.kid,
            x=public_key.x,
            y=public_key.y,
            d=private_key.d,
        )
        alias = await self._store(stored)
        LOGGER.debug("Imported %s key", dsa.name.value)
        return alias

    async def get_public_key(self, alias: str) -> Jwk:
        """
        Fetch the public key for an alias.

        Raises:
            UnknownAlias: If no key is stored under the alias

        """
        private_key = await self._retrieve(alias)
        return dsa_for_jwk(private_key).compute_public_key(private_key)

    async def sign(self, alias: str, payload: bytes) -> bytes:
        """
        Sign a payload with the key stored under an alias.

        Raises:
            UnknownAlias: If no key is stored under the alias

        """
        private_key = await self._retrieve(alias)
        return dsa_for_jwk(private_key).sign(private_key, payload)

    async def alias_exists(self, alias: str) -> bool:
        """Check whether a key is stored under an alias."""
        async with self._lock:
            return alias in self._keys

    async def _store(self, private_key: Jwk) -> str:
        alias = private_key.compute_thumbprint()
        async with self._lock:
            self._keys[alias] = private_key
        return alias

    async def _retrieve(self, alias: str) -> Jwk:
        async with self._lock:
            private_key = self._keys.get(alias)
        if not private_key:
            raise UnknownAlias("Key not found: {}".format(alias))
        return private_key

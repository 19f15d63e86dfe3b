"""the did resolver.

responsible for keeping track of all method resolvers and dispatching a DID to
the resolver registered for its method.
"""

import logging
from typing import Dict, List, Optional, Sequence

from pydid import DIDError, DIDUrl, VerificationMethod
from pydid.doc.doc import IDNotFoundError

from .base import (
    BaseDIDResolver,
    DIDMethodAlreadyRegistered,
    DIDResolutionResult,
    InvalidDid,
    ResolverError,
    parse_did,
)

LOGGER = logging.getLogger(__name__)


class DIDResolver:
    """Registry of method resolvers, keyed by DID method name."""

    def __init__(self, resolvers: Optional[List[BaseDIDResolver]] = None):
        """Create DID Resolver."""
        self._resolvers: Dict[str, BaseDIDResolver] = {}
        for resolver in resolvers or []:
            self.register_resolver(resolver)

    @property
    def resolvers(self) -> Sequence[BaseDIDResolver]:
        """Accessor for a list of all registered resolvers."""
        return list(self._resolvers.values())

    def register_resolver(self, resolver: BaseDIDResolver):
        """Register a new resolver.

        Raises:
            DIDMethodAlreadyRegistered: if a resolver already claims the method

        """
        if not resolver.method:
            raise ResolverError(f"Resolver {resolver} declares no DID method")
        if resolver.method in self._resolvers:
            raise DIDMethodAlreadyRegistered(
                f"A resolver is already registered for did:{resolver.method}"
            )
        LOGGER.debug("Registering resolver %s", resolver)
        self._resolvers[resolver.method] = resolver

    def resolver_for(self, method: str) -> Optional[BaseDIDResolver]:
        """Get the resolver registered for a DID method, if any."""
        return self._resolvers.get(method)

    async def resolve(self, did: str) -> DIDResolutionResult:
        """Resolve a DID with the resolver registered for its method.

        Input that is not a DID resolves to `invalidDid`, a DID with an unregistered
        method to `methodNotSupported`.
        """
        try:
            parsed = parse_did(did)
        except InvalidDid:
            LOGGER.debug("Not a DID: %r", did)
            return DIDResolutionResult.invalid_did()

        resolver = self._resolvers.get(parsed.method)
        if not resolver:
            LOGGER.debug("No resolver registered for DID method %s", parsed.method)
            return DIDResolutionResult.method_not_supported()

        LOGGER.debug("Resolving DID %s with %s", did, resolver)
        result = await resolver.resolve(did)
        LOGGER.debug("Resolved DID %s with %s: %s", did, resolver, result)
        return result

    async def dereference_verification_method(self, did_url: str) -> VerificationMethod:
        """Dereference a DID URL to a verification method.

        Raises:
            ResolverError: if the URL cannot be parsed, its DID does not resolve, or
                it does not name a verification method of the resolved document

        """
        try:
            parsed = DIDUrl.parse(did_url)
        except DIDError as err:
            raise ResolverError(
                "Failed to parse DID URL from {}".format(did_url)
            ) from err
        if not parsed.did:
            raise ResolverError("DID URL must be absolute")

        result = await self.resolve(str(parsed.did))
        if not result.is_valid:
            raise ResolverError(
                "Failed to resolve {}: {}".format(parsed.did, result.error)
            )

        try:
            dereferenced = result.did_document.dereference(parsed)
        except IDNotFoundError as err:
            raise ResolverError(
                "Failed to dereference DID URL: {}".format(err)
            ) from err
        if not isinstance(dereferenced, VerificationMethod):
            raise ResolverError("DID URL does not dereference to a verification method")
        return dereferenced

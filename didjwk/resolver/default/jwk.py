"""did:jwk: resolver implementation."""

from ...did.did_jwk import DIDJwk
from ..base import BaseDIDResolver, DIDResolutionResult


class JwkDIDResolver(BaseDIDResolver):
    """did:jwk: resolver implementation."""

    METHOD = DIDJwk.METHOD

    async def resolve(self, did: str) -> DIDResolutionResult:
        """Resolve a did:jwk; resolution is local and never raises."""
        return DIDJwk.resolve(did)

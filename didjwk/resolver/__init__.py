"""Interfaces and base classes for DID Resolution."""

import logging

from .did_resolver import DIDResolver

LOGGER = logging.getLogger(__name__)


def setup(registry: DIDResolver = None) -> DIDResolver:
    """Register the default method resolvers, creating a registry if needed."""
    from .default.jwk import JwkDIDResolver

    registry = registry if registry is not None else DIDResolver()
    jwk_resolver = JwkDIDResolver()
    registry.register_resolver(jwk_resolver)
    LOGGER.debug("Registered default resolvers: %s", registry.resolvers)
    return registry

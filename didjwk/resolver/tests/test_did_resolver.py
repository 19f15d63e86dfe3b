"""Test did resolver registry."""

from unittest import mock

import pytest

from ...did.did_jwk import DIDJwk
from ...keys.in_memory import InMemoryKeyManager
from ...utils.b64 import bytes_to_b64url
from .. import setup
from ..base import (
    INVALID_DID,
    METHOD_NOT_SUPPORTED,
    BaseDIDResolver,
    DIDMethodAlreadyRegistered,
    DIDResolutionResult,
    ResolverError,
)
from ..default.jwk import JwkDIDResolver
from ..did_resolver import DIDResolver

TEST_DID_EXAMPLE = "did:example:123"
TEST_DID_OTHER = "did:other:456"


class MockResolver(BaseDIDResolver):
    def __init__(self, method, resolved=None):
        self.METHOD = method
        self.resolved = resolved or DIDResolutionResult.invalid_did()
        self.resolve = mock.AsyncMock(return_value=self.resolved)

    async def resolve(self, did):
        return self.resolved


@pytest.fixture
def example_resolver():
    yield MockResolver("example")


@pytest.fixture
def other_resolver():
    yield MockResolver("other")


@pytest.fixture
def resolver(example_resolver, other_resolver):
    yield DIDResolver([example_resolver, other_resolver])


@pytest.fixture
def key_manager():
    yield InMemoryKeyManager()


def test_create_resolver(resolver, example_resolver, other_resolver):
    assert resolver.resolvers == [example_resolver, other_resolver]
    assert resolver.resolver_for("example") is example_resolver
    assert resolver.resolver_for("jwk") is None


def test_register_resolver_x_duplicate(resolver):
    with pytest.raises(DIDMethodAlreadyRegistered):
        resolver.register_resolver(MockResolver("example"))
    assert len(resolver.resolvers) == 2


def test_register_resolver_x_no_method():
    with pytest.raises(ResolverError):
        DIDResolver().register_resolver(MockResolver(None))


def test_setup():
    registry = setup()
    assert isinstance(registry.resolver_for("jwk"), JwkDIDResolver)

    existing = DIDResolver()
    assert setup(existing) is existing
    with pytest.raises(DIDMethodAlreadyRegistered):
        setup(existing)


@pytest.mark.asyncio
async def test_resolve_dispatches_once(resolver, example_resolver, other_resolver):
    result = await resolver.resolve(TEST_DID_EXAMPLE)
    assert result is example_resolver.resolved
    example_resolver.resolve.assert_awaited_once_with(TEST_DID_EXAMPLE)
    other_resolver.resolve.assert_not_awaited()

    await resolver.resolve(TEST_DID_OTHER)
    other_resolver.resolve.assert_awaited_once_with(TEST_DID_OTHER)
    assert example_resolver.resolve.await_count == 1


@pytest.mark.asyncio
async def test_resolve_x_method_not_supported(resolver, example_resolver):
    result = await resolver.resolve("did:unknown:123")
    assert not result.is_valid
    assert result.error == METHOD_NOT_SUPPORTED
    example_resolver.resolve.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("did", ["", "not a did", "did:example", "did:example:1#0"])
async def test_resolve_x_invalid_did(resolver, example_resolver, did):
    result = await resolver.resolve(did)
    assert not result.is_valid
    assert result.error == INVALID_DID
    example_resolver.resolve.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_jwk(key_manager):
    did = await DIDJwk.create(key_manager)
    result = await setup().resolve(did.uri)
    assert result.is_valid
    assert result == DIDJwk.resolve(did.uri)


@pytest.mark.asyncio
async def test_dereference_verification_method(key_manager):
    did = await DIDJwk.create(key_manager)
    method = await setup().dereference_verification_method(did.key_id)
    assert str(method.id) == did.key_id
    assert str(method.controller) == did.uri
    assert method.public_key_jwk == did.public_key.serialize()


@pytest.mark.asyncio
async def test_dereference_x_unknown_fragment(key_manager):
    did = await DIDJwk.create(key_manager)
    with pytest.raises(ResolverError):
        await setup().dereference_verification_method(did.uri + "#1")


@pytest.mark.asyncio
async def test_dereference_x_unresolvable():
    with pytest.raises(ResolverError):
        await setup().dereference_verification_method("did:jwk:e30#0")
    with pytest.raises(ResolverError):
        await setup().dereference_verification_method("did:unknown:123#0")


@pytest.mark.asyncio
async def test_dereference_x_not_a_url():
    with pytest.raises(ResolverError):
        await setup().dereference_verification_method("not a did url")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [b"[" * 100000, b'{"kty":' * 100000])
async def test_resolve_jwk_x_deeply_nested(payload):
    result = await setup().resolve("did:jwk:" + bytes_to_b64url(payload))
    assert not result.is_valid
    assert result.error == INVALID_DID

"""Base classes for DID resolution."""

from abc import ABC, abstractmethod
from typing import Optional

from pydid import DID, DIDDocument, DIDError

from ..core.error import BaseError

INVALID_DID = "invalidDid"
METHOD_NOT_SUPPORTED = "methodNotSupported"


class ResolverError(BaseError):
    """Base class for resolver exceptions."""


class InvalidDid(ResolverError):
    """Raised when a DID is malformed or does not belong to the expected method."""


class DIDMethodAlreadyRegistered(ResolverError):
    """Raised when a second resolver claims an already registered method."""


def parse_did(did: str) -> DID:
    """Parse a DID string into its method and method-specific identifier.

    Raises:
        InvalidDid: if the value is not a DID

    """
    if not isinstance(did, str):
        raise InvalidDid(f"Invalid DID: {did!r}")
    try:
        return DID(did)
    except DIDError as err:
        raise InvalidDid(f"Invalid DID: {did}") from err


class DIDResolutionResult:
    """Outcome of resolving a DID: a document, or an error and no document."""

    def __init__(
        self,
        did_document: Optional[DIDDocument] = None,
        did_resolution_metadata: Optional[dict] = None,
        did_document_metadata: Optional[dict] = None,
    ):
        """Initialize a resolution result.

        Args:
            did_document: the resolved document, None when resolution failed
            did_resolution_metadata: resolution metadata, holding `error` on failure
            did_document_metadata: metadata about the document
        """
        self.did_document = did_document
        self.did_resolution_metadata = did_resolution_metadata or {}
        self.did_document_metadata = did_document_metadata or {}

    @classmethod
    def invalid_did(cls) -> "DIDResolutionResult":
        """Result for an input that is not a resolvable DID."""
        return cls(did_resolution_metadata={"error": INVALID_DID})

    @classmethod
    def method_not_supported(cls) -> "DIDResolutionResult":
        """Result for a DID whose method has no registered resolver."""
        return cls(did_resolution_metadata={"error": METHOD_NOT_SUPPORTED})

    @property
    def error(self) -> Optional[str]:
        """Accessor for the resolution error code."""
        return self.did_resolution_metadata.get("error")

    @property
    def is_valid(self) -> bool:
        """Check whether resolution produced a document."""
        return self.did_document is not None and not self.error

    def serialize(self) -> dict:
        """Return serialized resolution result."""
        return {
            "didDocument": (
                self.did_document.serialize() if self.did_document else None
            ),
            "didResolutionMetadata": dict(self.did_resolution_metadata),
            "didDocumentMetadata": dict(self.did_document_metadata),
        }

    def __eq__(self, other) -> bool:
        """Compare results by their serialized form."""
        if not isinstance(other, DIDResolutionResult):
            return NotImplemented
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        """Return a human readable representation of this result."""
        if self.is_valid:
            return "<DIDResolutionResult(did={})>".format(self.did_document.id)
        return "<DIDResolutionResult(error={})>".format(self.error)


class BaseDIDResolver(ABC):
    """Base class for DID method resolvers.

    Resolvers are total: any string input yields a result, never an exception.
    """

    METHOD: str = None

    @property
    def method(self) -> str:
        """Accessor for the DID method handled by this resolver."""
        return self.METHOD

    def supports(self, did: str) -> bool:
        """Return if this resolver handles the method of the given DID."""
        try:
            return parse_did(did).method == self.method
        except InvalidDid:
            return False

    @abstractmethod
    async def resolve(self, did: str) -> DIDResolutionResult:
        """Resolve a DID using this resolver."""

    def __repr__(self) -> str:
        """Return a human readable representation of this resolver."""
        return "<{}(method={})>".format(self.__class__.__name__, self.method)

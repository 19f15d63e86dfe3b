"""DID JWK class and resolver methods."""

import logging
from typing import Optional, Union

from pydid import DIDDocument

from ..config.base import BaseSettings
from ..config.settings import DID_JWK_ALGORITHM
from ..crypto.dsa import DsaName
from ..crypto.error import MalformedKey
from ..crypto.jwk import Jwk
from ..crypto.signing import verify
from ..keys.base import BaseKeyManager
from ..keys.error import KeyManagerError
from ..resolver.base import DIDResolutionResult, InvalidDid, parse_did
from .base import BaseDID

LOGGER = logging.getLogger(__name__)

DID_V1_CONTEXT_URL = "https://www.w3.org/ns/did/v1"
JWS_2020_CONTEXT_URL = "https://w3id.org/security/suites/jws-2020/v1"
VERIFICATION_METHOD_TYPE = "JsonWebKey2020"

# upper bound on the encoded key; OKP and EC keys encode to a few hundred characters
MAX_METHOD_SPECIFIC_ID_LENGTH = 4096


class DIDJwk(BaseDID):
    """DID JWK parser and resolver.

    The method-specific identifier is the unpadded base64url encoding of the
    canonical JSON form of a public key. Resolution decodes it locally.
    """

    METHOD = "jwk"
    DEFAULT_ALGORITHM = DsaName.ED25519

    def __init__(
        self,
        uri: str,
        key_manager: Optional[BaseKeyManager] = None,
        key_alias: Optional[str] = None,
    ):
        """Initialize a DIDJwk instance.

        Args:
            uri: the did:jwk string
            key_manager: key manager holding the private key, if any
            key_alias: alias of the private key in the key manager; defaults to the
                thumbprint of the public key
        """
        super().__init__(uri, key_manager)
        self._key_alias = key_alias
        self._public_key = None

    @classmethod
    async def create(
        cls,
        key_manager: BaseKeyManager,
        algorithm: Union[DsaName, str] = None,
        settings: BaseSettings = None,
    ) -> "DIDJwk":
        """Create a new did:jwk from a freshly generated key.

        The algorithm defaults to the `did.jwk.algorithm` setting, then to Ed25519.

        Raises:
            UnsupportedAlgorithm: if the algorithm is not supported

        """
        if not algorithm:
            algorithm = (
                settings.get_str(DID_JWK_ALGORITHM) if settings is not None else None
            ) or cls.DEFAULT_ALGORITHM
        alias = await key_manager.generate_private_key(algorithm)
        public_key = await key_manager.get_public_key(alias)
        did = cls(
            "did:jwk:" + public_key.to_b64url(),
            key_manager=key_manager,
            key_alias=alias,
        )
        did._public_key = public_key
        LOGGER.debug("Created %s", did.uri)
        return did

    @classmethod
    def from_uri(
        cls, uri: str, key_manager: Optional[BaseKeyManager] = None
    ) -> "DIDJwk":
        """Parse a did:jwk string.

        Raises:
            InvalidDid: if the value is not a did:jwk or does not hold a valid key

        """
        did = cls(uri, key_manager=key_manager)
        did._public_key = cls.decode_public_key(uri)
        return did

    @classmethod
    def decode_public_key(cls, uri: str) -> Jwk:
        """Decode the public key embedded in a did:jwk string.

        Raises:
            InvalidDid: if the value is not a did:jwk or does not hold a valid key

        """
        parsed = parse_did(uri)
        if parsed.method != cls.METHOD:
            raise InvalidDid(f"Not a did:{cls.METHOD}: {uri}")
        if len(parsed.method_specific_id) > MAX_METHOD_SPECIFIC_ID_LENGTH:
            raise InvalidDid(f"Encoded key in did:{cls.METHOD} is too long")
        try:
            jwk = Jwk.from_b64url(parsed.method_specific_id)
        except MalformedKey as err:
            raise InvalidDid(f"Invalid key in {uri}: {err.roll_up}") from err
        return jwk.to_public()

    @classmethod
    def build_document(cls, uri: str, public_key: Jwk) -> DIDDocument:
        """Build the DID document of a did:jwk.

        The document holds a single verification method `<uri>#0`, referenced from
        every verification relationship.
        """
        key_id = uri + "#0"
        return DIDDocument.deserialize(
            {
                "@context": [DID_V1_CONTEXT_URL, JWS_2020_CONTEXT_URL],
                "id": uri,
                "verificationMethod": [
                    {
                        "id": key_id,
                        "type": VERIFICATION_METHOD_TYPE,
                        "controller": uri,
                        "publicKeyJwk": public_key.to_public().serialize(),
                    }
                ],
                "authentication": [key_id],
                "assertionMethod": [key_id],
                "capabilityInvocation": [key_id],
                "capabilityDelegation": [key_id],
            }
        )

    @classmethod
    def resolve(cls, did: str) -> DIDResolutionResult:
        """Resolve a did:jwk without external lookups.

        Never raises: any failure yields an `invalidDid` result.
        """
        try:
            public_key = cls.decode_public_key(did)
            document = cls.build_document(did, public_key)
        except InvalidDid as err:
            LOGGER.debug("Failed to resolve %r: %s", did, err.roll_up)
            return DIDResolutionResult.invalid_did()
        except ValueError as err:
            LOGGER.debug("Failed to build document for %r: %s", did, err)
            return DIDResolutionResult.invalid_did()
        return DIDResolutionResult(did_document=document)

    @property
    def public_key(self) -> Jwk:
        """Accessor for the public key embedded in this DID."""
        if self._public_key is None:
            self._public_key = self.decode_public_key(self.uri)
        return self._public_key

    @property
    def key_alias(self) -> str:
        """Accessor for the alias of the private key in the key manager."""
        if self._key_alias is None:
            self._key_alias = self.public_key.compute_thumbprint()
        return self._key_alias

    @property
    def key_id(self) -> str:
        """Accessor for the verification method id."""
        return self.uri + "#0"

    @property
    def did_document(self) -> DIDDocument:
        """Accessor for the DID document of this DID."""
        return self.build_document(self.uri, self.public_key)

    async def sign(self, payload: bytes) -> bytes:
        """Sign a payload with the private key of this DID.

        Raises:
            KeyManagerError: if no key manager is bound or it lacks the key

        """
        if not self.key_manager:
            raise KeyManagerError(f"No key manager bound to {self.uri}")
        return await self.key_manager.sign(self.key_alias, payload)

    def verify(self, payload: bytes, signature: bytes):
        """Verify a signature over a payload with the public key of this DID.

        Raises:
            SignatureInvalid: if the signature does not validate

        """
        verify(self.public_key, payload, signature)

"""JSON Web Key model."""

import hashlib
import json
import logging
from typing import Any, Mapping

from marshmallow import EXCLUDE, ValidationError, fields, validate, validates_schema

from ..messaging.models.base import BaseModel, BaseModelError, BaseModelSchema
from ..utils.b64 import b64_to_dict, bytes_to_b64url, dict_to_b64
from .error import MalformedKey

LOGGER = logging.getLogger(__name__)

KTY_OKP = "OKP"
KTY_EC = "EC"

# curve -> (kty, alg) for the curves whose parameters must travel together
KNOWN_CURVES = {
    "Ed25519": (KTY_OKP, "EdDSA"),
    "secp256k1": (KTY_EC, "ES256K"),
}

# RFC 7638 required members, per key type
THUMBPRINT_MEMBERS = {
    KTY_OKP: ("crv", "kty", "x"),
    KTY_EC: ("crv", "kty", "x", "y"),
}

B64URL_VALIDATOR = validate.Regexp(
    r"^[A-Za-z0-9_-]+$", error="Value is not base64url encoded"
)


class Jwk(BaseModel):
    """JSON Web Key for the OKP and EC key families.

    A key holding the private component `d` is a private key; without it the key is
    public-only. Instances are treated as immutable: derived keys are new instances.
    """

    class Meta:
        """Jwk metadata."""

        schema_class = "JwkSchema"
        repr_exclude = ["d"]

    def __init__(
        self,
        *,
        kty: str,
        x: str = None,
        alg: str = None,
        crv: str = None,
        y: str = None,
        d: str = None,
        kid: str = None,
        use: str = None,
    ):
        """Initialize a Jwk instance.

        Args:
            kty: key type, `OKP` or `EC`
            x: base64url public component (x coordinate for EC)
            alg: JOSE algorithm identifier
            crv: curve name
            y: base64url y coordinate, EC keys only
            d: base64url private component
            kid: optional key identifier
            use: optional intended use, `sig` or `enc`
        """
        super().__init__()
        self.kty = kty
        self.alg = alg
        self.crv = crv
        self.kid = kid
        self.use = use
        self.x = x
        self.y = y
        self.d = d

    @property
    def is_private(self) -> bool:
        """Check whether this key carries private key material."""
        return self.d is not None

    def to_public(self) -> "Jwk":
        """Return a copy of this key without the private component."""
        return Jwk(
            kty=self.kty,
            alg=self.alg,
            crv=self.crv,
            kid=self.kid,
            use=self.use,
            x=self.x,
            y=self.y,
        )

    def compute_thumbprint(self) -> str:
        """Compute the RFC 7638 thumbprint of this key, base64url encoded."""
        members = THUMBPRINT_MEMBERS.get(self.kty)
        if not members:
            raise MalformedKey(f"Cannot compute thumbprint for key type {self.kty}")
        required = {name: getattr(self, name) for name in members}
        if None in required.values():
            raise MalformedKey("Key is missing members required for its thumbprint")
        digest = hashlib.sha256(
            json.dumps(required, sort_keys=True, separators=(",", ":")).encode("utf-8")
        ).digest()
        return bytes_to_b64url(digest)

    def to_b64url(self) -> str:
        """Encode this key as a canonical base64url token without padding."""
        return dict_to_b64(self.serialize())

    @classmethod
    def parse(cls, value: Mapping[str, Any]) -> "Jwk":
        """Load and validate a key from a JSON-compatible mapping.

        Raises:
            MalformedKey: if the value does not satisfy the JWK schema

        """
        if not isinstance(value, Mapping):
            raise MalformedKey("JWK must be a JSON object")
        try:
            return cls.deserialize(dict(value))
        except BaseModelError as err:
            raise MalformedKey("JWK does not satisfy the key schema") from err

    @classmethod
    def from_b64url(cls, token: str) -> "Jwk":
        """Decode a key from a base64url token.

        Raises:
            MalformedKey: if the token is not base64url, not a JSON object, or the
                object does not satisfy the JWK schema

        """
        try:
            value = b64_to_dict(token)
        except ValueError as err:
            raise MalformedKey("JWK token is not base64url encoded JSON") from err
        return cls.parse(value)


class JwkSchema(BaseModelSchema):
    """Jwk schema."""

    class Meta:
        """JwkSchema metadata."""

        model_class = Jwk
        unknown = EXCLUDE

    kty = fields.Str(
        required=True,
        validate=validate.OneOf([KTY_OKP, KTY_EC]),
        metadata={"description": "Key type", "example": KTY_OKP},
    )
    alg = fields.Str(
        required=False,
        metadata={"description": "JOSE algorithm", "example": "EdDSA"},
    )
    crv = fields.Str(
        required=True,
        metadata={"description": "Curve name", "example": "Ed25519"},
    )
    kid = fields.Str(required=False, metadata={"description": "Key identifier"})
    use = fields.Str(
        required=False,
        validate=validate.OneOf(["sig", "enc"]),
        metadata={"description": "Intended key use", "example": "sig"},
    )
    x = fields.Str(
        required=True,
        validate=B64URL_VALIDATOR,
        metadata={"description": "Public component, base64url encoded"},
    )
    y = fields.Str(
        required=False,
        validate=B64URL_VALIDATOR,
        metadata={"description": "EC y coordinate, base64url encoded"},
    )
    d = fields.Str(
        required=False,
        validate=B64URL_VALIDATOR,
        metadata={"description": "Private component, base64url encoded"},
    )

    @validates_schema
    def validate_key_family(self, data, **kwargs):
        """Check that key type, algorithm and curve belong together."""
        kty = data.get("kty")
        if kty == KTY_EC and not data.get("y"):
            raise ValidationError("EC keys require the y coordinate", "y")

        family = KNOWN_CURVES.get(data.get("crv"))
        if not family:
            return
        family_kty, family_alg = family
        if kty != family_kty:
            raise ValidationError(
                f"Curve {data['crv']} requires key type {family_kty}", "kty"
            )
        if data.get("alg") and data["alg"] != family_alg:
            raise ValidationError(
                f"Curve {data['crv']} requires algorithm {family_alg}", "alg"
            )

"""Base64 and JSON token helpers."""

import base64
import json
import re
from typing import Any, Mapping

B64URL_PATTERN = re.compile(r"^[A-Za-z0-9_-]*$")


def pad(val: str) -> str:
    """Pad base64 values if need be: JWT calls to omit trailing padding."""
    padlen = 4 - len(val) % 4
    return val if padlen > 2 else (val + "=" * padlen)


def unpad(val: str) -> str:
    """Remove padding from base64 values if need be."""
    return val.rstrip("=")


def bytes_to_b64(val: bytes, urlsafe=False, pad=True, encoding: str = "ascii") -> str:
    """Convert a byte string to base 64."""
    b64 = (
        base64.urlsafe_b64encode(val).decode(encoding)
        if urlsafe
        else base64.b64encode(val).decode(encoding)
    )
    return b64 if pad else unpad(b64)


def b64url_to_bytes(val: str, padding: bool = False) -> bytes:
    """Strictly decode a base64url value.

    Raises:
        ValueError: if the value holds characters outside the url-safe alphabet
            or is not a valid base64 length

    """
    if not isinstance(val, str):
        raise ValueError("Base64url value must be a string")
    body = val.rstrip("=") if padding else val
    if not B64URL_PATTERN.match(body):
        raise ValueError("Value is not base64url encoded")
    if padding and len(val) % 4:
        raise ValueError("Padded base64url value has invalid length")
    return base64.urlsafe_b64decode(pad(body))


def bytes_to_b64url(val: bytes, padding: bool = False) -> str:
    """Encode bytes as base64url, without padding unless requested."""
    return bytes_to_b64(val, urlsafe=True, pad=padding)


def canonical_json(value: Mapping[str, Any]) -> bytes:
    """Serialize a mapping with sorted keys and no insignificant whitespace."""
    return json.dumps(value, sort_keys=True, separators=(",", ":")).encode("utf-8")


def dict_to_b64(value: Mapping[str, Any], padding: bool = False) -> str:
    """Encode a dictionary as a base64url token."""
    return bytes_to_b64url(canonical_json(value), padding=padding)


def b64_to_dict(value: str, padding: bool = False) -> Any:
    """Decode a JSON value from a base64url token.

    Raises:
        ValueError: if the token is not base64url, not UTF-8, not JSON or nested
            beyond what the decoder supports

    """
    raw = b64url_to_bytes(value, padding=padding).decode("utf-8")
    try:
        return json.loads(raw)
    except RecursionError as err:
        raise ValueError("JSON value is nested too deeply") from err

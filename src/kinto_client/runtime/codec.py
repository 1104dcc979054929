"""
Kinto document codec.

Serializes request bodies to the JSON wire format and parses response
bodies back, mapping every failure to SerializationError.
"""

from __future__ import annotations
import json
from typing import Any, Dict, Union

from .errors import ErrorCode, SerializationError


def encode_json(value: Any) -> str:
    """
    Encode a document to compact JSON.

    ``None`` encodes to an empty payload.

    Raises:
        SerializationError: If the value is not JSON serializable
    """
    if value is None:
        return ""
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SerializationError("Cannot encode document", cause=e)


def loads(s: Union[str, bytes]) -> Any:
    """
    Deserialize a JSON response body.

    An empty body parses as an empty object.

    Raises:
        SerializationError: If the body is not valid JSON
    """
    if not s or not s.strip():
        return {}
    try:
        return json.loads(s)
    except ValueError as e:
        raise SerializationError("Invalid JSON response", ErrorCode.INVALID_JSON, cause=e)


def timestamp_to_etag(timestamp: int) -> str:
    """Transform an integer timestamp into a quoted ETag token."""
    return f'"{timestamp}"'


def etag_to_timestamp(etag: str) -> int:
    """Parse a quoted ETag token back into a timestamp."""
    try:
        return int(etag.strip().strip('"'))
    except ValueError as e:
        raise SerializationError(f"Invalid ETag: {etag!r}", ErrorCode.UNEXPECTED_SHAPE, cause=e)


def to_dict(obj: Any) -> Dict[str, Any]:
    """
    Convert a Pydantic model to its wire dictionary, keyed by alias.
    """
    if hasattr(obj, "model_dump"):
        return obj.model_dump(by_alias=True)
    return dict(obj)


__all__ = ["encode_json", "loads", "timestamp_to_etag", "etag_to_timestamp", "to_dict"]

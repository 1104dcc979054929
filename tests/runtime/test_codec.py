"""
Tests for the document codec.
"""

import pytest

from kinto_client.runtime.codec import encode_json, loads, timestamp_to_etag, etag_to_timestamp
from kinto_client.runtime.errors import ErrorCode, SerializationError


def test_encode_none_is_empty_payload():
    assert encode_json(None) == ""


def test_encode_is_compact():
    assert encode_json({"data": {"a": 1}}) == '{"data":{"a":1}}'


def test_encode_rejects_unserializable():
    with pytest.raises(SerializationError) as exc_info:
        encode_json({"data": object()})
    assert isinstance(exc_info.value.cause, TypeError)


def test_loads_empty_body():
    assert loads("") == {}
    assert loads("  ") == {}


def test_loads_malformed_body():
    with pytest.raises(SerializationError) as exc_info:
        loads("{not json")
    assert exc_info.value.code == ErrorCode.INVALID_JSON


def test_etag_round_trip():
    assert timestamp_to_etag(1500000000001) == '"1500000000001"'
    assert etag_to_timestamp('"1500000000001"') == 1500000000001


def test_invalid_etag():
    with pytest.raises(SerializationError):
        etag_to_timestamp('"abc"')

"""
Kinto server paths.

Builds the canonical REST path of every endpoint the client talks to and
parses those paths back into resource identifiers.
"""

from __future__ import annotations
import re
from typing import Dict, Optional

_VERSION_PREFIX = re.compile(r"^/v\d+(?=/|$)")


class Paths:
    """Known paths in the Kinto server. Ids are used verbatim."""

    ROOT = "/"
    BATCH = "/batch"
    BUCKETS = "/buckets"
    FLUSH = "/__flush__"

    @staticmethod
    def batch() -> str:
        return Paths.BATCH

    @staticmethod
    def buckets() -> str:
        return Paths.BUCKETS

    @staticmethod
    def bucket(bucket_id: str) -> str:
        return f"/buckets/{bucket_id}"

    @staticmethod
    def groups(bucket_id: str) -> str:
        return f"/buckets/{bucket_id}/groups"

    @staticmethod
    def group(bucket_id: str, group_id: str) -> str:
        return f"/buckets/{bucket_id}/groups/{group_id}"

    @staticmethod
    def collections(bucket_id: str) -> str:
        return f"/buckets/{bucket_id}/collections"

    @staticmethod
    def collection(bucket_id: str, collection_id: str) -> str:
        return f"/buckets/{bucket_id}/collections/{collection_id}"

    @staticmethod
    def records(bucket_id: str, collection_id: str) -> str:
        return f"/buckets/{bucket_id}/collections/{collection_id}/records"

    @staticmethod
    def record(bucket_id: str, collection_id: str, record_id: str) -> str:
        return f"/buckets/{bucket_id}/collections/{collection_id}/records/{record_id}"


def strip_version(path: str) -> str:
    """Remove a leading API version segment (e.g. ``/v1``) from a path."""
    stripped = _VERSION_PREFIX.sub("", path)
    return stripped or "/"


def extract_ids_from_path(path: str) -> Dict[str, Optional[str]]:
    """
    Split a path into a resource name mapping.

    ``/buckets/food/collections/meat`` becomes
    ``{"buckets": "food", "collections": "meat"}``. A trailing resource name
    without an id (plural endpoint) maps to ``None``.

    Args:
        path: Request path, optionally version-prefixed

    Returns:
        Mapping of resource kind to id
    """
    path = strip_version(path)
    segments = [segment for segment in path.split("/") if segment]

    ids: Dict[str, Optional[str]] = {}
    for index in range(0, len(segments), 2):
        key = segments[index]
        ids[key] = segments[index + 1] if index + 1 < len(segments) else None
    return ids


__all__ = ["Paths", "strip_version", "extract_ids_from_path"]

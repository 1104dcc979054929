"""
Request descriptors for the Kinto client.

A RequestDescriptor holds everything needed to perform one exchange. The
conditional helpers return new descriptors, so a descriptor can be reused or
re-issued (pagination, batch) without shared mutable state.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Any
from urllib.parse import urlencode

from ..runtime.codec import timestamp_to_etag


GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"


@dataclass
class RequestDescriptor:
    """One HTTP exchange: method, path, query, headers and optional body."""
    method: str
    path: str
    query: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    def copy(self, **changes) -> "RequestDescriptor":
        """Duplicate the descriptor, applying ``changes``."""
        duplicate = replace(
            self,
            query=dict(self.query),
            headers=dict(self.headers),
        )
        return replace(duplicate, **changes) if changes else duplicate

    @property
    def query_string(self) -> str:
        """URL-encoded query, empty when there are no parameters."""
        return urlencode(self.query) if self.query else ""

    def with_body(self, body: Optional[Any]) -> "RequestDescriptor":
        """Attach a JSON body."""
        headers = dict(self.headers)
        headers["Content-Type"] = "application/json"
        return self.copy(body=body, headers=headers)

    def if_match(self, timestamp: Optional[int] = None) -> "RequestDescriptor":
        """
        Require the server version to match ``timestamp``.

        Without a timestamp, only require that the resource exists.
        """
        token = timestamp_to_etag(timestamp) if timestamp is not None else "*"
        return self._with_header("If-Match", token)

    def if_none_match(self, timestamp: Optional[int] = None) -> "RequestDescriptor":
        """
        Require the server version to differ from ``timestamp``.

        Without a timestamp, require that the resource does not exist yet.
        """
        token = timestamp_to_etag(timestamp) if timestamp is not None else "*"
        return self._with_header("If-None-Match", token)

    def limit(self, limit: int) -> "RequestDescriptor":
        """Set the page size of a plural endpoint."""
        query = dict(self.query)
        query["_limit"] = limit
        return self.copy(query=query)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a batch sub-request."""
        return {
            "method": self.method,
            "path": self.path + ("?" + self.query_string if self.query else ""),
            "body": self.body if self.body is not None else {},
            "headers": dict(self.headers),
        }

    def _with_header(self, name: str, value: str) -> "RequestDescriptor":
        headers = dict(self.headers)
        headers[name] = value
        return self.copy(headers=headers)


# Factories, one per endpoint shape.

def get_record(path: str) -> RequestDescriptor:
    return RequestDescriptor(GET, path)


def create_record(path: str) -> RequestDescriptor:
    return RequestDescriptor(POST, path)


def update_record(path: str) -> RequestDescriptor:
    return RequestDescriptor(PUT, path)


def delete_record(path: str) -> RequestDescriptor:
    return RequestDescriptor(DELETE, path)


def get_collection(path: str, limit: Optional[int] = None) -> RequestDescriptor:
    descriptor = RequestDescriptor(GET, path)
    return descriptor.limit(limit) if limit is not None else descriptor


def delete_collection(path: str, limit: Optional[int] = None) -> RequestDescriptor:
    descriptor = RequestDescriptor(DELETE, path)
    return descriptor.limit(limit) if limit is not None else descriptor


__all__ = [
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "RequestDescriptor",
    "get_record",
    "create_record",
    "update_record",
    "delete_record",
    "get_collection",
    "delete_collection",
]

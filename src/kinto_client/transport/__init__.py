"""
Transport layer for the Kinto client.

Provides the synchronous HTTP transport implementation.
"""

from .http import RequestsTransport, TransportResponse

__all__ = [
    "RequestsTransport",
    "TransportResponse",
]

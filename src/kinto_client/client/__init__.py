"""
Request/response plumbing of the Kinto client.

Re-exports descriptors, the exchange protocol, pagination and batching.
"""

from .requests import RequestDescriptor
from .response import ResponseEnvelope
from .exchange import send
from .pagination import iter_pages, paginate
from .batch import BatchRequest, BatchResponse

__all__ = [
    "RequestDescriptor",
    "ResponseEnvelope",
    "send",
    "iter_pages",
    "paginate",
    "BatchRequest",
    "BatchResponse",
]

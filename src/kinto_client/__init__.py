"""
Kinto Python Client

This package provides a client for the Kinto document-storage HTTP API:
buckets, collections, groups and records with optimistic concurrency,
transparent pagination and request batching.
"""

from .config import BasicAuth, ClientConfig, __version__
from .api_client import KintoClient, ServerInfo, local_client
from .runtime.errors import *
from .runtime.paths import Paths, extract_ids_from_path
from .client import RequestDescriptor, ResponseEnvelope, BatchRequest, BatchResponse
from .resources import *
from .transport import RequestsTransport, TransportResponse

__all__ = [
    "__version__",

    # Client
    "KintoClient",
    "ServerInfo",
    "local_client",
    "BasicAuth",
    "ClientConfig",

    # Requests
    "RequestDescriptor",
    "ResponseEnvelope",
    "BatchRequest",
    "BatchResponse",
    "Paths",
    "extract_ids_from_path",

    # Transport
    "RequestsTransport",
    "TransportResponse",

    # Resources
    "Resource",
    "Bucket",
    "Collection",
    "Group",
    "Record",
    "Permissions",
    "BucketPermissions",
    "CollectionPermissions",
    "GroupPermissions",
    "RecordPermissions",

    # Errors
    "ErrorCode",
    "KintoError",
    "TransportError",
    "NotModified",
    "PreconditionFailed",
    "UndefinedIdentity",
    "UnsupportedOperation",
    "SerializationError",
    "error_for_status",
]

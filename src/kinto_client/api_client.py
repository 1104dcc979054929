"""
Kinto API Client

This module provides the entry point of the library: a client bound to one
server configuration that hands out bucket resources, performs exchanges,
follows pagination and composes batches.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .client.batch import BatchRequest
from .client.exchange import send
from .client.pagination import paginate
from .client.requests import RequestDescriptor, create_record, get_collection, delete_collection, get_record
from .client.response import ResponseEnvelope
from .config import BasicAuth, ClientConfig
from .resources.bucket import Bucket
from .runtime.errors import ErrorCode, SerializationError
from .runtime.paths import Paths
from .transport.http import RequestsTransport


PACKAGE_LOGGER = "kinto_client"


class ServerInfo(BaseModel):
    """Description of a Kinto server (``GET /``)."""
    project_name: Optional[str] = None
    project_version: Optional[str] = None
    http_api_version: Optional[str] = None
    url: Optional[str] = None
    capabilities: Dict[str, Any] = Field(default_factory=dict)
    settings: Dict[str, Any] = Field(default_factory=dict)
    user: Optional[Dict[str, Any]] = None

    model_config = {"extra": "allow"}


class KintoClient:
    """
    Client for the Kinto HTTP API.

    Example:
        ```python
        client = KintoClient(ClientConfig("http://localhost:8888/v1",
                                          auth=BasicAuth("user", "secret")))
        bucket = client.bucket("food").set()
        record = bucket.collection("meat").set().record("entrecote")
        record.data = {"price": 12}
        record.create()
        ```
    """

    def __init__(
        self,
        config: Union[str, ClientConfig],
        auth: Optional[BasicAuth] = None,
        transport: Optional[Any] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Either a server URL string or a ClientConfig object
            auth: Credentials, used only when ``config`` is a URL string
            transport: Object performing HTTP exchanges (defaults to a
                RequestsTransport owning its session)
        """
        if isinstance(config, str):
            self.config = ClientConfig(server_url=config, auth=auth)
        else:
            self.config = config

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            # Module loggers (exchange, pagination, batch, resources) inherit from the package logger.
            logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

        self._owns_transport = transport is None
        self.transport = transport if transport is not None else RequestsTransport()

    @property
    def server_url(self) -> str:
        return self.config.server_url

    def close(self) -> None:
        """Close the transport if owned by this client."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> KintoClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Exchanges
    # =========================================================================

    def send(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        """Perform one exchange (see ``kinto_client.client.exchange.send``)."""
        return send(descriptor, self.config, self.transport)

    def paginate(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        """Perform a plural request, following and merging every page."""
        return paginate(self.send, descriptor, self.config.server_url)

    def batch(self) -> BatchRequest:
        """Start an empty batch bound to this client."""
        return BatchRequest(self.send)

    # =========================================================================
    # Buckets
    # =========================================================================

    def bucket(self, id: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> Bucket:
        """Select a bucket (nothing is sent)."""
        return Bucket(self, id=id, data=data)

    def new_bucket(self, data: Optional[Dict[str, Any]] = None) -> Bucket:
        """Create a bucket with a server-generated id."""
        return Bucket(self, data=data).create()

    def list_buckets(self, limit: Optional[int] = None) -> List[Bucket]:
        """List every readable bucket, following pagination."""
        envelope = self.paginate(self.list_buckets_request(limit))
        return Bucket.unwrap_collection(self, envelope)

    def delete_buckets(self) -> List[Bucket]:
        """Delete every bucket; returns the tombstones."""
        envelope = self.paginate(self.delete_buckets_request())
        return Bucket.unwrap_collection(self, envelope)

    def create_bucket_request(self) -> RequestDescriptor:
        return create_record(Paths.buckets())

    def list_buckets_request(self, limit: Optional[int] = None) -> RequestDescriptor:
        return get_collection(Paths.buckets(), limit)

    def delete_buckets_request(self) -> RequestDescriptor:
        return delete_collection(Paths.buckets())

    # =========================================================================
    # Server
    # =========================================================================

    def server_info(self) -> ServerInfo:
        """
        Fetch the server description.

        Raises:
            SerializationError: If the server answers with an unexpected shape
        """
        envelope = self.send(get_record(Paths.ROOT))
        try:
            return ServerInfo.model_validate(envelope.body)
        except ValidationError as e:
            raise SerializationError("Invalid server info", ErrorCode.UNEXPECTED_SHAPE, cause=e)

    def flush(self) -> None:
        """Flush the server (only if its flush endpoint is enabled)."""
        self.logger.debug("Flushing %s", self.server_url)
        self.send(create_record(Paths.FLUSH))


def local_client(auth: Optional[BasicAuth] = None) -> KintoClient:
    """Create a client for a Kinto server on localhost."""
    return KintoClient(ClientConfig(server_url="local", auth=auth))


__all__ = ["ServerInfo", "KintoClient", "local_client"]

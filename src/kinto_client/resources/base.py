"""
Generic Kinto resource.

Every resource kind (bucket, collection, group, record) shares the same
load/create/update/set/delete protocol. A concrete kind only supplies its
plural path and how to rebuild itself (and its parents) from the ids found in
a response path; everything else is derived from the resource's id, data,
permissions and timestamp.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar, TYPE_CHECKING

from pydantic import ValidationError

from ..client.requests import (
    RequestDescriptor, get_record, create_record, update_record, delete_record,
)
from ..client.response import ResponseEnvelope
from ..runtime.codec import etag_to_timestamp
from ..runtime.errors import ErrorCode, SerializationError, UndefinedIdentity
from ..runtime.paths import extract_ids_from_path
from .permissions import Permissions

if TYPE_CHECKING:
    from ..api_client import KintoClient


logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Resource")


class Resource(ABC):
    """
    Kinto core resource.

    Attributes:
        client: Client the resource talks through
        data: Document payload (``None`` until known)
        permissions: Permission model of the resource kind
        timestamp: Server version, trustworthy right after a server round trip
    """

    kind: ClassVar[str]
    permissions_class: ClassVar[Type[Permissions]] = Permissions

    def __init__(
        self,
        client: "KintoClient",
        id: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        permissions: Optional[Permissions] = None,
        timestamp: Optional[int] = None,
    ):
        self.client = client
        self._id = id
        self.data = data
        self.permissions = permissions if permissions is not None else self.permissions_class()
        self.timestamp = timestamp

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.resource_path_or_none()}/{self.id}>"

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.resource_path_or_none() == other.resource_path_or_none()
            and self.id == other.id
            and self.data == other.data
            and self.permissions == other.permissions
            and self.timestamp == other.timestamp
        )

    __hash__ = None

    # =========================================================================
    # Identity
    # =========================================================================

    @property
    def id(self) -> Optional[str]:
        """Explicit id if given, else the ``id`` of the data, else None."""
        if self._id is not None:
            return self._id
        if isinstance(self.data, dict):
            return self.data.get("id")
        return None

    @abstractmethod
    def resource_path(self) -> str:
        """Path of the plural endpoint holding this resource."""

    def require_id(self) -> str:
        """
        The effective id.

        Raises:
            UndefinedIdentity: If the resource has no id yet
        """
        if self.id is None:
            raise UndefinedIdentity(
                f"{type(self).__name__} has no id",
                details={"path": self.resource_path_or_none()},
            )
        return self.id

    @abstractmethod
    def record_path(self) -> str:
        """
        Path of this resource.

        Raises:
            UndefinedIdentity: If the resource (or an ancestor) has no id yet
        """

    def resource_path_or_none(self) -> Optional[str]:
        try:
            return self.resource_path()
        except UndefinedIdentity:
            return None

    # =========================================================================
    # Request factories
    # =========================================================================

    def get_body(self) -> Dict[str, Any]:
        """Wire envelope of the current state; permissions omitted when empty."""
        data = dict(self.data) if self.data else {}
        if self.id is not None:
            data["id"] = self.id
        body: Dict[str, Any] = {"data": data}
        if not self.permissions.is_empty():
            body["permissions"] = self.permissions.to_wire()
        return body

    def load_request(self) -> RequestDescriptor:
        """Custom load (GET) request for the resource."""
        return get_record(self.record_path())

    def create_request(self) -> RequestDescriptor:
        """Custom create (POST) request on the plural endpoint."""
        return create_record(self.resource_path())

    def update_request(self) -> RequestDescriptor:
        """Custom update (PUT) request for the resource."""
        return update_record(self.record_path())

    def delete_request(self) -> RequestDescriptor:
        """Custom delete request for the resource."""
        return delete_record(self.record_path())

    # =========================================================================
    # CRUD protocol
    # =========================================================================

    def load(self: R) -> R:
        """Load the resource from the server."""
        envelope = self.client.send(self.load_request())
        self.unwrap_response(envelope)
        return self

    def create(self: R) -> R:
        """
        Create the resource, failing if it already exists.

        Raises:
            PreconditionFailed: If a resource with the same id exists
        """
        request = self.create_request().with_body(self.get_body()).if_none_match()
        self.unwrap_response(self.client.send(request))
        return self

    def update(self: R) -> R:
        """
        Replace the existing resource.

        With a known timestamp, the server version must still match it;
        otherwise the resource only has to exist.

        Raises:
            PreconditionFailed: On version mismatch or missing resource
            UndefinedIdentity: If the resource has no id
        """
        request = self.update_request().with_body(self.get_body()).if_match(self.timestamp)
        self.unwrap_response(self.client.send(request))
        return self

    def set(self: R) -> R:
        """
        Create or replace the resource without any version check.

        Without an id this is exactly ``create()``.
        """
        if self.id is None:
            return self.create()
        request = self.update_request().with_body(self.get_body())
        self.unwrap_response(self.client.send(request))
        return self

    def delete(self: R) -> R:
        """Delete the resource; the instance then holds the server tombstone."""
        envelope = self.client.send(self.delete_request())
        self.unwrap_response(envelope)
        return self

    # =========================================================================
    # Reconstruction
    # =========================================================================

    @classmethod
    @abstractmethod
    def rebuild(cls: Type[R], client: "KintoClient", path_ids: Dict[str, Optional[str]], **state) -> R:
        """
        Instantiate the kind with parents built from ``path_ids``.

        ``state`` holds ``id``, ``data``, ``permissions`` and ``timestamp``.
        """

    @classmethod
    def from_envelope(cls: Type[R], client: "KintoClient", envelope: ResponseEnvelope) -> R:
        """
        Build a resource from a single-object response.

        Raises:
            SerializationError: If the body is not a resource envelope
        """
        if not isinstance(envelope.body, dict) or not isinstance(envelope.body.get("data"), dict):
            raise SerializationError(
                f"Response to {envelope.path} holds no resource data",
                ErrorCode.UNEXPECTED_SHAPE,
            )
        data = envelope.body["data"]
        permissions = cls.parse_permissions(envelope.body.get("permissions"))
        timestamp = cls.parse_timestamp(data, envelope)
        path_ids = extract_ids_from_path(envelope.path)
        return cls.rebuild(client, path_ids, id=data.get("id"), data=data,
                           permissions=permissions, timestamp=timestamp)

    @classmethod
    def unwrap_collection(cls: Type[R], client: "KintoClient", envelope: ResponseEnvelope) -> List[R]:
        """
        Build resources from a plural response.

        Raises:
            SerializationError: If the body holds no list of objects
        """
        entries = envelope.data
        if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
            raise SerializationError(
                f"Response to {envelope.path} holds no resource list",
                ErrorCode.UNEXPECTED_SHAPE,
            )
        path_ids = extract_ids_from_path(envelope.path)
        return [
            cls.rebuild(client, path_ids, id=entry.get("id"), data=entry,
                        permissions=cls.permissions_class(),
                        timestamp=cls.parse_timestamp(entry))
            for entry in entries
        ]

    @classmethod
    def parse_permissions(cls, raw: Any) -> Permissions:
        try:
            return cls.permissions_class.model_validate(raw or {})
        except ValidationError as e:
            raise SerializationError("Invalid permissions", ErrorCode.UNEXPECTED_SHAPE, cause=e)

    @staticmethod
    def parse_timestamp(data: Dict[str, Any], envelope: Optional[ResponseEnvelope] = None) -> Optional[int]:
        value = data.get("last_modified")
        if value is None:
            etag = envelope.headers.get("ETag") if envelope is not None else None
            return etag_to_timestamp(etag) if etag else None
        if isinstance(value, bool) or not isinstance(value, int):
            raise SerializationError(f"Invalid last_modified: {value!r}", ErrorCode.UNEXPECTED_SHAPE)
        return value

    @staticmethod
    def parent_id(path_ids: Dict[str, Optional[str]], kind: str) -> str:
        """Id of the ``kind`` ancestor in a response path."""
        value = path_ids.get(kind)
        if not value:
            raise SerializationError(f"Response path has no {kind} id", ErrorCode.UNEXPECTED_SHAPE)
        return value

    def unwrap_response(self, envelope: ResponseEnvelope) -> None:
        """Replace the current state (parents included) with the server's."""
        fresh = type(self).from_envelope(self.client, envelope)
        vars(self).update(vars(fresh))
        logger.debug("Refreshed %r at timestamp %s", self, self.timestamp)


__all__ = ["Resource"]

"""
Kinto collections.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..client.requests import RequestDescriptor, create_record, get_collection, delete_collection
from ..runtime.paths import Paths
from .base import Resource
from .permissions import CollectionPermissions
from .record import Record

if TYPE_CHECKING:
    from ..api_client import KintoClient
    from .bucket import Bucket


class Collection(Resource):
    """Bucket-scoped container of records."""

    kind = "collections"
    permissions_class = CollectionPermissions

    def __init__(self, bucket: "Bucket", id: Optional[str] = None, **state):
        super().__init__(bucket.client, id=id, **state)
        self.bucket = bucket

    def resource_path(self) -> str:
        return Paths.collections(self.bucket.require_id())

    def record_path(self) -> str:
        return Paths.collection(self.bucket.require_id(), self.require_id())

    @classmethod
    def rebuild(cls, client: "KintoClient", path_ids: Dict[str, Optional[str]], **state) -> "Collection":
        from .bucket import Bucket

        bucket = Bucket(client, id=cls.parent_id(path_ids, "buckets"))
        return cls(bucket, **state)

    # =========================================================================
    # Records
    # =========================================================================

    def record(self, id: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> Record:
        """Select a record of this collection (nothing is sent)."""
        return Record(self, id=id, data=data)

    def new_record(self, data: Optional[Dict[str, Any]] = None) -> Record:
        """Create a record with a server-generated id."""
        return Record(self, data=data).create()

    def list_records(self, limit: Optional[int] = None) -> List[Record]:
        """
        List every record of the collection.

        Args:
            limit: Page size; all pages are followed regardless

        Returns:
            Records in server order
        """
        envelope = self.client.paginate(self.list_records_request(limit))
        return Record.unwrap_collection(self.client, envelope)

    def delete_records(self) -> List[Record]:
        """Delete every record of the collection; returns the tombstones."""
        envelope = self.client.paginate(self.delete_records_request())
        return Record.unwrap_collection(self.client, envelope)

    def list_records_request(self, limit: Optional[int] = None) -> RequestDescriptor:
        return get_collection(Paths.records(self.bucket.require_id(), self.require_id()), limit)

    def delete_records_request(self) -> RequestDescriptor:
        return delete_collection(Paths.records(self.bucket.require_id(), self.require_id()))

    def create_record_request(self) -> RequestDescriptor:
        return create_record(Paths.records(self.bucket.require_id(), self.require_id()))


__all__ = ["Collection"]

"""
Kinto records.
"""

from __future__ import annotations
from typing import Dict, Optional, TYPE_CHECKING

from ..runtime.paths import Paths
from .base import Resource
from .permissions import RecordPermissions

if TYPE_CHECKING:
    from ..api_client import KintoClient
    from .bucket import Bucket
    from .collection import Collection


class Record(Resource):
    """Collection-scoped document."""

    kind = "records"
    permissions_class = RecordPermissions

    def __init__(self, collection: "Collection", id: Optional[str] = None, **state):
        super().__init__(collection.client, id=id, **state)
        self.collection = collection

    @property
    def bucket(self) -> "Bucket":
        return self.collection.bucket

    def resource_path(self) -> str:
        return Paths.records(self.bucket.require_id(), self.collection.require_id())

    def record_path(self) -> str:
        return Paths.record(self.bucket.require_id(), self.collection.require_id(), self.require_id())

    @classmethod
    def rebuild(cls, client: "KintoClient", path_ids: Dict[str, Optional[str]], **state) -> "Record":
        from .bucket import Bucket
        from .collection import Collection

        bucket = Bucket(client, id=cls.parent_id(path_ids, "buckets"))
        collection = Collection(bucket, id=cls.parent_id(path_ids, "collections"))
        return cls(collection, **state)


__all__ = ["Record"]

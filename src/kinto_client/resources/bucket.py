"""
Kinto buckets.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..client.requests import RequestDescriptor, create_record, get_collection, delete_collection
from ..runtime.paths import Paths
from .base import Resource
from .collection import Collection
from .group import Group
from .permissions import BucketPermissions

if TYPE_CHECKING:
    from ..api_client import KintoClient


class Bucket(Resource):
    """Top-level container of collections and groups."""

    kind = "buckets"
    permissions_class = BucketPermissions

    def resource_path(self) -> str:
        return Paths.buckets()

    def record_path(self) -> str:
        return Paths.bucket(self.require_id())

    @classmethod
    def rebuild(cls, client: "KintoClient", path_ids: Dict[str, Optional[str]], **state) -> "Bucket":
        return cls(client, **state)

    # =========================================================================
    # Collections
    # =========================================================================

    def collection(self, id: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> Collection:
        """Select a collection of this bucket (nothing is sent)."""
        return Collection(self, id=id, data=data)

    def new_collection(self, data: Optional[Dict[str, Any]] = None) -> Collection:
        """Create a collection with a server-generated id."""
        return Collection(self, data=data).create()

    def list_collections(self, limit: Optional[int] = None) -> List[Collection]:
        """List every collection of the bucket, following pagination."""
        envelope = self.client.paginate(self.list_collections_request(limit))
        return Collection.unwrap_collection(self.client, envelope)

    def delete_collections(self) -> List[Collection]:
        """Delete every collection of the bucket; returns the tombstones."""
        envelope = self.client.paginate(self.delete_collections_request())
        return Collection.unwrap_collection(self.client, envelope)

    def list_collections_request(self, limit: Optional[int] = None) -> RequestDescriptor:
        return get_collection(Paths.collections(self.require_id()), limit)

    def delete_collections_request(self) -> RequestDescriptor:
        return delete_collection(Paths.collections(self.require_id()))

    def create_collection_request(self) -> RequestDescriptor:
        return create_record(Paths.collections(self.require_id()))

    # =========================================================================
    # Groups
    # =========================================================================

    def group(self, id: Optional[str] = None, members: Optional[List[str]] = None) -> Group:
        """Select a group of this bucket (nothing is sent)."""
        data = {"members": list(members)} if members is not None else None
        return Group(self, id=id, data=data)

    def new_group(self, members: Optional[List[str]] = None) -> Group:
        """Create a group with a server-generated id."""
        return self.group(members=members or []).create()

    def list_groups(self, limit: Optional[int] = None) -> List[Group]:
        """List every group of the bucket, following pagination."""
        envelope = self.client.paginate(self.list_groups_request(limit))
        return Group.unwrap_collection(self.client, envelope)

    def delete_groups(self) -> List[Group]:
        """Delete every group of the bucket; returns the tombstones."""
        envelope = self.client.paginate(self.delete_groups_request())
        return Group.unwrap_collection(self.client, envelope)

    def list_groups_request(self, limit: Optional[int] = None) -> RequestDescriptor:
        return get_collection(Paths.groups(self.require_id()), limit)

    def delete_groups_request(self) -> RequestDescriptor:
        return delete_collection(Paths.groups(self.require_id()))

    def create_group_request(self) -> RequestDescriptor:
        return create_record(Paths.groups(self.require_id()))


__all__ = ["Bucket"]

"""
Kinto groups.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..runtime.paths import Paths
from .base import Resource
from .permissions import GroupPermissions

if TYPE_CHECKING:
    from ..api_client import KintoClient
    from .bucket import Bucket


class Group(Resource):
    """Bucket-scoped named set of principals."""

    kind = "groups"
    permissions_class = GroupPermissions

    def __init__(self, bucket: "Bucket", id: Optional[str] = None, **state):
        super().__init__(bucket.client, id=id, **state)
        self.bucket = bucket

    @property
    def members(self) -> List[str]:
        if isinstance(self.data, dict):
            return list(self.data.get("members", []))
        return []

    def resource_path(self) -> str:
        return Paths.groups(self.bucket.require_id())

    def record_path(self) -> str:
        return Paths.group(self.bucket.require_id(), self.require_id())

    def get_body(self) -> Dict[str, Any]:
        # The server rejects groups without a members list.
        body = super().get_body()
        body["data"].setdefault("members", [])
        return body

    @classmethod
    def rebuild(cls, client: "KintoClient", path_ids: Dict[str, Optional[str]], **state) -> "Group":
        from .bucket import Bucket

        bucket = Bucket(client, id=cls.parent_id(path_ids, "buckets"))
        return cls(bucket, **state)


__all__ = ["Group"]

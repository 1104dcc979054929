# Permission models for Kinto resources
# One list of principals per action, keyed on the wire by the server's action names

from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, List

from ..runtime.codec import to_dict


class Permissions(BaseModel):
    """Permissions shared by every resource kind."""
    read: List[str] = Field(default_factory=list)
    write: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def is_empty(self) -> bool:
        return not any(self.to_wire().values())

    def to_wire(self) -> Dict[str, List[str]]:
        """Non-empty actions only, keyed by their wire names."""
        return {action: principals for action, principals in to_dict(self).items() if principals}


class BucketPermissions(Permissions):
    """Bucket permissions."""
    create_collection: List[str] = Field(default_factory=list, alias="collection:create")
    create_group: List[str] = Field(default_factory=list, alias="group:create")


class CollectionPermissions(Permissions):
    """Collection permissions."""
    create_record: List[str] = Field(default_factory=list, alias="record:create")


class GroupPermissions(Permissions):
    """Group permissions."""


class RecordPermissions(Permissions):
    """Record permissions."""


__all__ = [
    "Permissions",
    "BucketPermissions",
    "CollectionPermissions",
    "GroupPermissions",
    "RecordPermissions",
]

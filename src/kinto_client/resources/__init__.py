"""
Kinto resource kinds.

Buckets hold collections and groups; collections hold records. All of them
share the CRUD protocol of ::class:Resource.
"""

from .base import Resource
from .permissions import (
    Permissions, BucketPermissions, CollectionPermissions, GroupPermissions, RecordPermissions,
)
from .record import Record
from .group import Group
from .collection import Collection
from .bucket import Bucket

__all__ = [
    "Resource",
    "Permissions",
    "BucketPermissions",
    "CollectionPermissions",
    "GroupPermissions",
    "RecordPermissions",
    "Bucket",
    "Collection",
    "Group",
    "Record",
]

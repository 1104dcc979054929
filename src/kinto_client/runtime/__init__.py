"""Runtime helpers for the Kinto client"""

from .errors import KintoError
from .paths import Paths, extract_ids_from_path
from .codec import encode_json, loads

__all__ = [
    "KintoError",
    "Paths",
    "extract_ids_from_path",
    "encode_json",
    "loads"
]

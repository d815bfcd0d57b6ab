"""Content-addressed object store for OmniBOR documents."""

from ._paths import ensure_dir_tree
from .local import OBJECTS_DIR, LocalObjectStore, StoredObject

__all__ = [
    "OBJECTS_DIR",
    "LocalObjectStore",
    "StoredObject",
    "ensure_dir_tree",
]

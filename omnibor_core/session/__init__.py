"""Build session state: dependency registry, gitoid cache, note references."""

from .cache import DigestCache, DigestRecord
from .notes import NoteLookup, NoteReference, NoteReferenceTable
from .registry import DependencyRegistry, path_key
from .session import BuildSession

__all__ = [
    "BuildSession",
    "DependencyRegistry",
    "DigestCache",
    "DigestRecord",
    "NoteLookup",
    "NoteReference",
    "NoteReferenceTable",
    "path_key",
]

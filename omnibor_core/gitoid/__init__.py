"""Gitoid computation for blobs and files."""

from ._types import GitoidHex, HashAlgorithm
from .hashing import gitoid_for_content, gitoid_for_file, hash_content, hash_file, is_gitoid, to_hex

__all__ = [
    "GitoidHex",
    "HashAlgorithm",
    "gitoid_for_content",
    "gitoid_for_file",
    "hash_content",
    "hash_file",
    "is_gitoid",
    "to_hex",
]

"""OmniBOR Core - gitoids and Artifact Dependency Graph documents for build steps.

A build step (an assembler, a compiler driver) registers every file it reads.
At the end, OmniBOR Core hashes those files into gitoids, composes the
canonical OmniBOR document listing them, and stores that document under its
own gitoid in a sharded object tree. The returned gitoid is what the build
embeds in its output so the next step can reference it.

Quick Start:
    >>> from omnibor_core import BuildSession
    >>>
    >>> session = BuildSession()
    >>> session.enable_omnibor()
    >>> for path in ("main.s", "macros.inc"):
    ...     session.register_dependency(path)
    >>> sha1_gitoid = session.write_document("sha1", "build/omnibor")
    >>> sha256_gitoid = session.write_document("sha256", "build/omnibor")

Resulting layout:
    build/omnibor/objects/gitoid_blob_sha1/<gitoid[:2]>/<gitoid[2:]>
    build/omnibor/objects/gitoid_blob_sha256/<gitoid[:2]>/<gitoid[2:]>

Environment Variables:
    - OMNIBOR_DIR: Default result directory
    - OMNIBOR_ENABLED: Enable document generation in sessions built from settings
    - OMNIBOR_LOG_LEVEL: Log level for omnibor_core loggers
"""

from .document import compose_document, render_document, sort_records
from .exceptions import DigestCoverageError, ObjectStoreError, OmniborCoreError, UnsupportedAlgorithmError
from .gitoid import GitoidHex, HashAlgorithm, gitoid_for_content, gitoid_for_file, hash_content, hash_file, to_hex
from .logging import LoggingConfig, get_omnibor_logger, setup_logging
from .makedeps import quote_for_make, write_dependency_file
from .object_store import LocalObjectStore, StoredObject, ensure_dir_tree
from .session import BuildSession, DigestRecord, NoteReference
from .settings import Settings, settings

__version__ = "0.1.0"

__all__ = [
    # Session
    "BuildSession",
    "DigestRecord",
    "NoteReference",
    # Gitoids
    "GitoidHex",
    "HashAlgorithm",
    "gitoid_for_content",
    "gitoid_for_file",
    "hash_content",
    "hash_file",
    "to_hex",
    # Documents
    "compose_document",
    "render_document",
    "sort_records",
    # Object store
    "LocalObjectStore",
    "StoredObject",
    "ensure_dir_tree",
    # Make rules
    "quote_for_make",
    "write_dependency_file",
    # Config / logging
    "Settings",
    "settings",
    "LoggingConfig",
    "get_omnibor_logger",
    "setup_logging",
    # Exceptions
    "OmniborCoreError",
    "UnsupportedAlgorithmError",
    "DigestCoverageError",
    "ObjectStoreError",
]

"""Exception hierarchy for OmniBOR Core.

This module defines the exception hierarchy used throughout the OmniBOR Core library.
All exceptions inherit from OmniborCoreError, providing a consistent error handling interface.
"""


class OmniborCoreError(Exception):
    """Base exception for all OmniBOR Core errors."""


class UnsupportedAlgorithmError(OmniborCoreError, ValueError):
    """Raised when a hash algorithm is neither SHA1 nor SHA256."""


class DigestCoverageError(OmniborCoreError):
    """Raised when records disagree on whether the active algorithm's digest is present."""


class ObjectStoreError(OmniborCoreError):
    """Raised when a document cannot be persisted in the object store."""

"""Domain-specific types for gitoid computation."""

from enum import StrEnum
from typing import NewType

from omnibor_core.exceptions import UnsupportedAlgorithmError

GitoidHex = NewType("GitoidHex", str)
"""Lowercase hex rendering of a gitoid (40 chars for SHA1, 64 for SHA256)."""


class HashAlgorithm(StrEnum):
    """Digest family used for gitoids and the documents that list them."""

    SHA1 = "sha1"
    SHA256 = "sha256"

    @property
    def digest_size(self) -> int:
        """Raw digest length in bytes."""
        return _DIGEST_SIZES[self]

    @property
    def hex_length(self) -> int:
        return 2 * self.digest_size

    @property
    def header(self) -> str:
        """First line of a document for this family, without the newline."""
        return f"gitoid:blob:{self.value}"

    @property
    def object_dir(self) -> str:
        """Directory under ``objects/`` holding documents for this family."""
        return f"gitoid_blob_{self.value}"

    @classmethod
    def parse(cls, value: "HashAlgorithm | str | int") -> "HashAlgorithm":
        """Resolve a member, a case-insensitive name or a digest size in bytes.

        Raises:
            UnsupportedAlgorithmError: If the value names neither family.
        """
        if isinstance(value, HashAlgorithm):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            for member in cls:
                if member.digest_size == value:
                    return member
        elif isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(f"Unsupported gitoid hash algorithm: {value!r}")


_DIGEST_SIZES = {HashAlgorithm.SHA1: 20, HashAlgorithm.SHA256: 32}

__all__ = ["GitoidHex", "HashAlgorithm"]

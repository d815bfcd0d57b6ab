"""Gitoid hashing: ``HASH(b"blob " + decimal length + b"\\0" + content)``.

The framing matches git's blob object hashing, so a SHA1 gitoid of a file equals
``git hash-object`` of the same bytes.
"""

import hashlib
import os
import re

from ._types import GitoidHex, HashAlgorithm

_HEX_DIGITS = "0123456789abcdef"
_HEX_PATTERN = re.compile(r"[0-9a-f]+")


def hash_content(content: bytes, algorithm: HashAlgorithm | str) -> bytes:
    """Return the raw gitoid digest of ``content``.

    The length prefix is the ASCII decimal byte count, and content bytes are hashed
    verbatim (embedded NULs included).
    """
    algorithm = HashAlgorithm.parse(algorithm)
    h = hashlib.new(algorithm.value)
    h.update(b"blob ")
    h.update(str(len(content)).encode("ascii"))
    h.update(b"\x00")
    h.update(content)
    return h.digest()


def hash_file(path: str | os.PathLike[str], algorithm: HashAlgorithm | str) -> bytes:
    """Read the whole file and return its raw gitoid digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(path, "rb") as f:
        content = f.read()
    return hash_content(content, algorithm)


def to_hex(digest: bytes) -> str:
    """Render raw digest bytes as lowercase hex, two characters per byte."""
    return "".join(_HEX_DIGITS[b >> 4] + _HEX_DIGITS[b & 0x0F] for b in digest)


def gitoid_for_content(content: bytes, algorithm: HashAlgorithm | str) -> GitoidHex:
    """Hex gitoid of an in-memory buffer."""
    return GitoidHex(to_hex(hash_content(content, algorithm)))


def gitoid_for_file(path: str | os.PathLike[str], algorithm: HashAlgorithm | str) -> GitoidHex:
    """Hex gitoid of a file's contents. Propagates ``OSError`` from reading."""
    return GitoidHex(to_hex(hash_file(path, algorithm)))


def is_gitoid(value: str, algorithm: HashAlgorithm | str) -> bool:
    """Check that ``value`` is lowercase hex of the algorithm's rendered length."""
    algorithm = HashAlgorithm.parse(algorithm)
    return len(value) == algorithm.hex_length and _HEX_PATTERN.fullmatch(value) is not None


__all__ = [
    "gitoid_for_content",
    "gitoid_for_file",
    "hash_content",
    "hash_file",
    "is_gitoid",
    "to_hex",
]

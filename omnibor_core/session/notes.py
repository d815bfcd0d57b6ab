"""Cross-reference table of OmniBOR document gitoids already embedded in dependencies.

An assembler input that was itself built with OmniBOR enabled carries its own
document gitoid (in a ``.note.omnibor`` section for ELF objects). Whoever reads
that section records it here, and the composer emits it as a ``bom`` reference
next to the dependency's blob line.
"""

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, field_validator

from omnibor_core.gitoid import HashAlgorithm, is_gitoid
from omnibor_core.logging import get_omnibor_logger

from .registry import path_key

logger = get_omnibor_logger(__name__)

NoteLookup = Callable[[str, HashAlgorithm], str | None]
"""Returns the embedded document gitoid of a dependency for one algorithm, or None."""


class NoteReference(BaseModel):
    """Document gitoids embedded in one dependency, one optional value per algorithm."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    sha1: str | None = None
    sha256: str | None = None

    @field_validator("sha1")
    @classmethod
    def validate_sha1(cls, v: str | None) -> str | None:
        if v is not None and not is_gitoid(v, HashAlgorithm.SHA1):
            raise ValueError(f"Invalid SHA1 document gitoid: {v!r}")
        return v

    @field_validator("sha256")
    @classmethod
    def validate_sha256(cls, v: str | None) -> str | None:
        if v is not None and not is_gitoid(v, HashAlgorithm.SHA256):
            raise ValueError(f"Invalid SHA256 document gitoid: {v!r}")
        return v

    def digest(self, algorithm: HashAlgorithm | str) -> str | None:
        return self.sha1 if HashAlgorithm.parse(algorithm) is HashAlgorithm.SHA1 else self.sha256


class NoteReferenceTable:
    """Embedded document references keyed by dependency path. The first entry for a path wins."""

    def __init__(self) -> None:
        self._notes: dict[str, NoteReference] = {}

    def add(self, path: str, *, sha1: str | None = None, sha256: str | None = None) -> NoteReference:
        """Record the references read from ``path``.

        Raises:
            pydantic.ValidationError: If a gitoid is not lowercase hex of the right length.
        """
        note = NoteReference(path=path, sha1=sha1, sha256=sha256)
        key = path_key(path)
        existing = self._notes.get(key)
        if existing is not None:
            if (existing.sha1, existing.sha256) != (note.sha1, note.sha256):
                logger.warning(f"Ignoring second note reference for '{path}'; keeping the first one")
            return existing
        self._notes[key] = note
        return note

    def lookup(self, path: str, algorithm: HashAlgorithm) -> str | None:
        note = self._notes.get(path_key(path))
        return note.digest(algorithm) if note else None

    def clear(self) -> None:
        self._notes.clear()

    def __len__(self) -> int:
        return len(self._notes)


__all__ = ["NoteLookup", "NoteReference", "NoteReferenceTable"]

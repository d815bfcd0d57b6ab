"""Canonical OmniBOR document rendering.

Document grammar (byte-exact)::

    gitoid:blob:sha1
    blob <gitoid>[ bom <document gitoid>]
    ...

One blob line per dependency, newline-terminated, in ascending lexicographic
order of ``<gitoid>``. The header names the algorithm family (``sha1`` or
``sha256``) shared by every gitoid in the document.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from omnibor_core.exceptions import DigestCoverageError
from omnibor_core.gitoid import HashAlgorithm, is_gitoid
from omnibor_core.logging import get_omnibor_logger

if TYPE_CHECKING:
    from omnibor_core.session.cache import DigestRecord
    from omnibor_core.session.notes import NoteLookup

logger = get_omnibor_logger(__name__)


def check_coverage(records: Sequence[DigestRecord], algorithm: HashAlgorithm) -> None:
    """Require that either every record or no record holds the algorithm's gitoid.

    Raises:
        DigestCoverageError: If some records have the gitoid and others do not.
    """
    present = {record.has_digest(algorithm) for record in records}
    if len(present) > 1:
        missing = [record.path for record in records if not record.has_digest(algorithm)]
        raise DigestCoverageError(f"{len(missing)} of {len(records)} dependencies lack a {algorithm} gitoid: {missing[:5]}")


def sort_records(records: Sequence[DigestRecord], algorithm: HashAlgorithm) -> list[DigestRecord]:
    """Return a new list ordered by the algorithm's hex gitoid. The input sequence is left untouched."""
    check_coverage(records, algorithm)
    return sorted(records, key=lambda record: record.digest(algorithm) or "")


def render_document(
    sorted_records: Sequence[DigestRecord],
    algorithm: HashAlgorithm,
    lookup: NoteLookup | None = None,
) -> bytes:
    """Render records, already in gitoid order, as document bytes.

    A note from ``lookup`` is emitted as a ``bom`` reference only when it is a
    gitoid of the same family. Anything else is logged and left out.
    """
    lines = [f"{algorithm.header}\n"]
    for record in sorted_records:
        gitoid = record.digest(algorithm)
        if gitoid is None:
            raise DigestCoverageError(f"Dependency '{record.path}' has no {algorithm} gitoid")
        line = f"blob {gitoid}"
        note = lookup(record.path, algorithm) if lookup else None
        if note is not None:
            if isinstance(note, str) and is_gitoid(note, algorithm):
                line += f" bom {note}"
            else:
                logger.warning(f"Ignoring invalid {algorithm} note reference for '{record.path}': {note!r}")
        lines.append(line + "\n")
    return "".join(lines).encode("ascii")


def compose_document(
    records: Sequence[DigestRecord],
    algorithm: HashAlgorithm,
    lookup: NoteLookup | None = None,
) -> bytes:
    """Sort and render in one step."""
    return render_document(sort_records(records, algorithm), algorithm, lookup)


__all__ = ["check_coverage", "compose_document", "render_document", "sort_records"]

"""Build session: dependency tracking plus OmniBOR document generation.

A session owns the dependency registry, the gitoid cache and the note
reference table. One session serves one build step. Call ``reset()`` before
reusing it for an unrelated build.

Example:
    >>> session = BuildSession()
    >>> session.enable_omnibor()
    >>> session.register_dependency("foo.s")
    >>> session.register_dependency("include/bar.inc")
    >>> gitoid = session.write_document("sha1", ".omnibor")
    >>> if gitoid:
    ...     embed_note_section(gitoid)
"""

import os

from omnibor_core.document.compose import compose_document
from omnibor_core.exceptions import DigestCoverageError, ObjectStoreError, UnsupportedAlgorithmError
from omnibor_core.gitoid import HashAlgorithm, gitoid_for_content
from omnibor_core.logging import get_omnibor_logger
from omnibor_core.makedeps import write_dependency_file
from omnibor_core.object_store.local import LocalObjectStore
from omnibor_core.settings import Settings

from .cache import DigestCache
from .notes import NoteLookup, NoteReference, NoteReferenceTable
from .registry import DependencyRegistry

logger = get_omnibor_logger(__name__)


class BuildSession:
    """Dependency registry, gitoid cache and note references for one build step.

    Args:
        note_lookup: External source of embedded document gitoids. Defaults to
            the session's own ``notes`` table.
    """

    def __init__(self, *, note_lookup: NoteLookup | None = None) -> None:
        self.registry = DependencyRegistry()
        self.cache = DigestCache()
        self.notes = NoteReferenceTable()
        self._note_lookup = note_lookup

    @classmethod
    def from_settings(cls, settings: Settings) -> "BuildSession":
        """Session with tracking flags preset from configuration."""
        session = cls()
        if settings.dependency_file:
            session.start_dependencies(settings.dependency_file)
        if settings.enabled:
            session.enable_omnibor()
        return session

    @property
    def note_lookup(self) -> NoteLookup:
        return self._note_lookup or self.notes.lookup

    # --- Dependency tracking ---

    def start_dependencies(self, dependency_file: str) -> None:
        """Request a Make-style dependency file; also turns on tracking."""
        self.registry.start_dependencies(dependency_file)

    def enable_omnibor(self) -> None:
        """Turn on tracking for document generation without a dependency file."""
        self.registry.enable_omnibor()

    def is_omnibor_enabled(self) -> bool:
        return self.registry.is_omnibor_enabled()

    def is_tracking_enabled(self) -> bool:
        return self.registry.is_tracking_enabled()

    def register_dependency(self, path: str | os.PathLike[str]) -> bool:
        """Record a file read by the build. No-op while tracking is off or for already seen paths."""
        return self.registry.register(path)

    def add_note_reference(self, path: str, *, sha1: str | None = None, sha256: str | None = None) -> NoteReference:
        """Record the document gitoids embedded in dependency ``path``."""
        return self.notes.add(path, sha1=sha1, sha256=sha256)

    def print_dependencies(self, target: str) -> bool:
        """Write ``target: <dependencies>`` to the requested dependency file, if any."""
        dependency_file = self.registry.dependency_file
        if dependency_file is None:
            return False
        return write_dependency_file(dependency_file, target, self.registry)

    # --- OmniBOR documents ---

    def write_document(self, algorithm: HashAlgorithm | str | int, result_dir: str | os.PathLike[str]) -> str:
        """Hash dependencies, compose the document, store it under its own gitoid.

        Returns:
            The document's hex gitoid, or ``""`` when no document was written. An
            empty result means no reference should be embedded in the build output.
        """
        try:
            algorithm = HashAlgorithm.parse(algorithm)
        except UnsupportedAlgorithmError as e:
            logger.warning(f"Not writing OmniBOR document: {e}")
            return ""

        hashed = self.cache.fill(self.registry, algorithm)
        records = self.cache.records_for(algorithm)
        logger.debug(f"Hashed {hashed} new dependencies; {len(records)} of {len(self.registry)} have a {algorithm} gitoid")

        try:
            document = compose_document(records, algorithm, self.note_lookup)
        except DigestCoverageError as e:
            logger.error(f"Inconsistent {algorithm} gitoid cache, document not written: {e}")
            return ""

        gitoid = gitoid_for_content(document, algorithm)
        try:
            LocalObjectStore(result_dir).write_object(algorithm, gitoid, document)
        except ObjectStoreError as e:
            logger.warning(f"OmniBOR {algorithm} document not written to '{os.fspath(result_dir)}': {e}")
            return ""
        return gitoid

    def write_sha1_document(self, result_dir: str | os.PathLike[str]) -> str:
        return self.write_document(HashAlgorithm.SHA1, result_dir)

    def write_sha256_document(self, result_dir: str | os.PathLike[str]) -> str:
        return self.write_document(HashAlgorithm.SHA256, result_dir)

    def write_documents(
        self,
        result_dir: str | os.PathLike[str],
        algorithms: tuple[HashAlgorithm, ...] = (HashAlgorithm.SHA1, HashAlgorithm.SHA256),
    ) -> dict[HashAlgorithm, str]:
        """Write one document per algorithm; values follow ``write_document``."""
        return {algorithm: self.write_document(algorithm, result_dir) for algorithm in algorithms}

    def reset(self) -> None:
        """Clear registry, cache, note references and tracking flags."""
        self.registry.clear()
        self.cache.clear()
        self.notes.clear()


__all__ = ["BuildSession"]

"""Per-dependency gitoid cache with one independently filled slot per hash algorithm."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from omnibor_core.gitoid import HashAlgorithm, gitoid_for_file
from omnibor_core.logging import get_omnibor_logger

from .registry import path_key

logger = get_omnibor_logger(__name__)


@dataclass(slots=True)
class DigestRecord:
    """Cached gitoids of one dependency. A slot is None until computed and never changes afterwards."""

    path: str
    sha1: str | None = None
    sha256: str | None = None

    def digest(self, algorithm: HashAlgorithm | str) -> str | None:
        return self.sha1 if HashAlgorithm.parse(algorithm) is HashAlgorithm.SHA1 else self.sha256

    def has_digest(self, algorithm: HashAlgorithm | str) -> bool:
        return self.digest(algorithm) is not None

    def set_digest(self, algorithm: HashAlgorithm | str, gitoid: str) -> None:
        """Fill the algorithm's slot.

        Raises:
            ValueError: If the slot already holds a gitoid.
        """
        algorithm = HashAlgorithm.parse(algorithm)
        if self.has_digest(algorithm):
            raise ValueError(f"{algorithm} gitoid of '{self.path}' is already set")
        if algorithm is HashAlgorithm.SHA1:
            self.sha1 = gitoid
        else:
            self.sha256 = gitoid


class DigestCache:
    """Digest records keyed by dependency path, in first-computed order."""

    def __init__(self) -> None:
        self._records: dict[str, DigestRecord] = {}  # path_key -> record

    def get(self, path: str) -> DigestRecord | None:
        return self._records.get(path_key(path))

    def fill(self, paths: Iterable[str], algorithm: HashAlgorithm) -> int:
        """Hash every path whose record lacks this algorithm's gitoid. Returns the number of files hashed.

        Unreadable files are skipped for this pass and stay absent from the algorithm's records.
        """
        hashed = 0
        for path in paths:
            key = path_key(path)
            record = self._records.get(key)
            if record is not None and record.has_digest(algorithm):
                continue
            try:
                gitoid = gitoid_for_file(path, algorithm)
            except OSError as e:
                logger.debug(f"Skipping unreadable dependency '{path}' for {algorithm}: {e}")
                continue
            if record is None:
                record = self._records[key] = DigestRecord(path=path)
            record.set_digest(algorithm, gitoid)
            hashed += 1
        return hashed

    def records_for(self, algorithm: HashAlgorithm) -> list[DigestRecord]:
        """Records holding this algorithm's gitoid."""
        return [record for record in self._records.values() if record.has_digest(algorithm)]

    def clear(self) -> None:
        self._records.clear()

    def __iter__(self) -> Iterator[DigestRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["DigestCache", "DigestRecord"]

"""Local filesystem object store for OmniBOR documents.

Layout:
    {result_dir}/objects/gitoid_blob_sha1/{gitoid[:2]}/{gitoid[2:]}
    {result_dir}/objects/gitoid_blob_sha256/{gitoid[:2]}/{gitoid[2:]}
"""

import os
from contextlib import ExitStack, suppress
from dataclasses import dataclass
from pathlib import Path

from omnibor_core.exceptions import ObjectStoreError
from omnibor_core.gitoid import GitoidHex, HashAlgorithm, is_gitoid
from omnibor_core.logging import get_omnibor_logger

from ._paths import open_directory_tree, open_subdirectory

logger = get_omnibor_logger(__name__)

OBJECTS_DIR = "objects"
SHARD_LENGTH = 2
_FILE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
_FILE_MODE = 0o666


@dataclass(frozen=True, slots=True)
class StoredObject:
    """A document persisted under its own gitoid."""

    algorithm: HashAlgorithm
    gitoid: GitoidHex
    path: Path


def _write_file_at(dir_fd: int, name: str, content: bytes) -> None:
    """Write ``content`` to ``name`` under ``dir_fd`` via a temporary file and rename."""
    tmp_name = f".{name}.{os.getpid()}.tmp"
    try:
        fd = os.open(tmp_name, _FILE_FLAGS, _FILE_MODE, dir_fd=dir_fd)
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_name, name, src_dir_fd=dir_fd, dst_dir_fd=dir_fd)
    except OSError as e:
        with suppress(OSError):
            os.unlink(tmp_name, dir_fd=dir_fd)
        raise ObjectStoreError(f"Cannot write object file '{name}': {e}") from e


class LocalObjectStore:
    """Sharded, content-addressed store of OmniBOR documents rooted at a result directory.

    The result directory may be relative or absolute, multi-segment, and need not exist yet.
    Directories created before a failure are left in place.
    """

    def __init__(self, result_dir: str | os.PathLike[str]) -> None:
        self._result_dir = os.fspath(result_dir)

    @property
    def result_dir(self) -> str:
        return self._result_dir

    def _validate(self, algorithm: HashAlgorithm | str, gitoid: str) -> HashAlgorithm:
        algorithm = HashAlgorithm.parse(algorithm)
        if not is_gitoid(gitoid, algorithm):
            raise ObjectStoreError(f"Object name is not a {algorithm} gitoid: {gitoid!r}")
        return algorithm

    def object_path(self, algorithm: HashAlgorithm | str, gitoid: str) -> Path:
        """On-disk location of the object named ``gitoid``."""
        algorithm = self._validate(algorithm, gitoid)
        return Path(self._result_dir, OBJECTS_DIR, algorithm.object_dir, gitoid[:SHARD_LENGTH], gitoid[SHARD_LENGTH:])

    def write_object(self, algorithm: HashAlgorithm | str, gitoid: str, content: bytes) -> StoredObject:
        """Persist ``content`` verbatim under its gitoid. Rewriting an existing object is harmless.

        Raises:
            UnsupportedAlgorithmError: If the algorithm names neither family.
            ObjectStoreError: If the gitoid is malformed or any directory or the file cannot be written.
        """
        algorithm = self._validate(algorithm, gitoid)
        with ExitStack() as stack:
            root_fd = open_directory_tree(self._result_dir, stack)
            objects_fd = open_subdirectory(root_fd, OBJECTS_DIR, stack)
            family_fd = open_subdirectory(objects_fd, algorithm.object_dir, stack)
            shard_fd = open_subdirectory(family_fd, gitoid[:SHARD_LENGTH], stack)
            _write_file_at(shard_fd, gitoid[SHARD_LENGTH:], content)

        path = self.object_path(algorithm, gitoid)
        logger.info(f"Wrote OmniBOR {algorithm} document {gitoid} ({len(content)} bytes) to {path}")
        return StoredObject(algorithm=algorithm, gitoid=GitoidHex(gitoid), path=path)

    def has_object(self, algorithm: HashAlgorithm | str, gitoid: str) -> bool:
        return self.object_path(algorithm, gitoid).is_file()

    def read_object(self, algorithm: HashAlgorithm | str, gitoid: str) -> bytes:
        """Return a stored document's bytes.

        Raises:
            ObjectStoreError: If the object does not exist or cannot be read.
        """
        path = self.object_path(algorithm, gitoid)
        try:
            return path.read_bytes()
        except OSError as e:
            raise ObjectStoreError(f"Cannot read object {gitoid}: {e}") from e


__all__ = ["OBJECTS_DIR", "LocalObjectStore", "StoredObject"]

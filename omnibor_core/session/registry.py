"""Ordered set of dependency paths observed during a build session."""

import os
from collections.abc import Iterator
from pathlib import PurePath


def path_key(path: str | os.PathLike[str]) -> str:
    """Filesystem equality key.

    Redundant separators and ``.`` segments are dropped and case is folded where
    the host folds it. ``..`` is kept: ``link/../x`` and ``x`` may name different
    files when ``link`` is a symlink.
    """
    return os.path.normcase(str(PurePath(os.fspath(path))))


class DependencyRegistry:
    """Unique dependency paths in registration order.

    Registration is a no-op until tracking is enabled, either by naming a
    Make-style dependency file or by turning on OmniBOR document generation.
    Membership never shrinks except through ``clear()``.
    """

    def __init__(self) -> None:
        self._paths: dict[str, str] = {}  # path_key -> path as first supplied
        self._dependency_file: str | None = None
        self._omnibor_enabled = False

    @property
    def dependency_file(self) -> str | None:
        """Target of the Make-style dependency listing, if one was requested."""
        return self._dependency_file

    def start_dependencies(self, dependency_file: str) -> None:
        self._dependency_file = dependency_file

    def enable_omnibor(self) -> None:
        self._omnibor_enabled = True

    def is_omnibor_enabled(self) -> bool:
        return self._omnibor_enabled

    def is_tracking_enabled(self) -> bool:
        return self._dependency_file is not None or self._omnibor_enabled

    def register(self, path: str | os.PathLike[str]) -> bool:
        """Record ``path`` unless tracking is off or an equal path is present. Returns True if added."""
        if not self.is_tracking_enabled():
            return False
        key = path_key(path)
        if key in self._paths:
            return False
        self._paths[key] = os.fspath(path)
        return True

    def clear(self) -> None:
        """Forget all paths and turn tracking off."""
        self._paths.clear()
        self._dependency_file = None
        self._omnibor_enabled = False

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths.values()))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return path_key(path) in self._paths


__all__ = ["DependencyRegistry", "path_key"]

"""Directory tree creation over directory file descriptors.

Each path segment is created relative to its parent's descriptor
(``mkdir(..., dir_fd=...)``) and then opened. All descriptors are pushed onto a
caller-owned ``ExitStack``, which closes them however the write ends.
"""

import os
from contextlib import ExitStack
from pathlib import PurePath

from omnibor_core.exceptions import ObjectStoreError

DIR_MODE = 0o700
_DIR_FLAGS = os.O_RDONLY | getattr(os, "O_DIRECTORY", 0)


def _open_dir(path: str, stack: ExitStack, *, dir_fd: int | None = None) -> int:
    fd = os.open(path, _DIR_FLAGS, dir_fd=dir_fd)
    stack.callback(os.close, fd)
    return fd


def open_subdirectory(parent_fd: int, name: str, stack: ExitStack) -> int:
    """Open ``name`` under ``parent_fd``, creating it first when it does not exist.

    Raises:
        ObjectStoreError: If the directory can be neither opened nor created.
    """
    try:
        return _open_dir(name, stack, dir_fd=parent_fd)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise ObjectStoreError(f"Cannot open directory '{name}': {e}") from e

    try:
        os.mkdir(name, DIR_MODE, dir_fd=parent_fd)
    except FileExistsError:
        pass  # created concurrently, or not a directory; the open below decides
    except OSError as e:
        raise ObjectStoreError(f"Cannot create directory '{name}': {e}") from e

    try:
        return _open_dir(name, stack, dir_fd=parent_fd)
    except OSError as e:
        raise ObjectStoreError(f"Cannot open directory '{name}': {e}") from e


def split_result_dir(result_dir: str | os.PathLike[str]) -> tuple[str, list[str]]:
    """Split into (anchor, segments). The anchor is empty for relative paths.

    Repeated separators and ``.`` segments are dropped, e.g. ``"/a//b/./c/"``
    becomes ``("/", ["a", "b", "c"])``.
    """
    path = PurePath(result_dir)
    if path.anchor:
        return path.anchor, list(path.parts[1:])
    return "", list(path.parts)


def open_directory_tree(result_dir: str | os.PathLike[str], stack: ExitStack) -> int:
    """Open (creating as needed) every directory of ``result_dir``; return the last one's descriptor.

    Absolute paths are walked from the filesystem root, relative ones from the
    current directory. Existing segments are reused.

    Raises:
        ObjectStoreError: If the path is empty or a segment cannot be opened or created.
    """
    if not os.fspath(result_dir):
        raise ObjectStoreError("Result directory path is empty")

    anchor, segments = split_result_dir(result_dir)
    start = anchor or os.curdir
    try:
        fd = _open_dir(start, stack)
    except OSError as e:
        raise ObjectStoreError(f"Cannot open '{start}': {e}") from e

    walked = anchor
    for segment in segments:
        walked = os.path.join(walked, segment) if walked else segment
        try:
            fd = open_subdirectory(fd, segment, stack)
        except ObjectStoreError as e:
            raise ObjectStoreError(f"Invalid result directory '{os.fspath(result_dir)}' at '{walked}': {e}") from e
    return fd


def ensure_dir_tree(result_dir: str | os.PathLike[str]) -> None:
    """Create every missing directory of ``result_dir``, releasing all descriptors before returning."""
    with ExitStack() as stack:
        open_directory_tree(result_dir, stack)


__all__ = ["DIR_MODE", "ensure_dir_tree", "open_directory_tree", "open_subdirectory", "split_result_dir"]

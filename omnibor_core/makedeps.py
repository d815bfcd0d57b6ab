"""Make-style dependency rule files (``target: dep1 dep2 ...``).

File names are quoted the way GNU make reads them, and long rules are wrapped
with backslash continuations so no line exceeds ``MAX_COLUMNS``.

Dependencies are listed in the order they were first registered. GNU as
prepends each new dependency, so its ``.d`` files list them newest first; the
same set compared line by line against gas output will appear reversed.
"""

from collections.abc import Iterable
from typing import TextIO

from omnibor_core.logging import get_omnibor_logger

logger = get_omnibor_logger(__name__)

MAX_COLUMNS = 72


def quote_for_make(name: str) -> str:
    """Quote a file name for a make rule.

    GNU make reads a space or tab preceded by 2N+1 backslashes as N backslashes
    followed by a literal blank, and 2N backslashes at the end of a name as N
    backslashes. Backslashes elsewhere are left alone. ``$`` becomes ``$$``.
    """
    out: list[str] = []
    backslashes = 0
    for ch in name:
        if ch in " \t":
            out.append("\\" * backslashes + "\\" + ch)
        elif ch == "$":
            out.append("$$")
        else:
            out.append(ch)
        backslashes = backslashes + 1 if ch == "\\" else 0
    out.append("\\" * backslashes)
    return "".join(out)


class DependencyWriter:
    """Writes one make rule, wrapping at MAX_COLUMNS."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._column = 0

    def _emit(self, name: str, spacer: str) -> None:
        quoted = quote_for_make(name)
        if not quoted:
            return

        # leave room for the spacer and a trailing " \"
        if self._column and MAX_COLUMNS - 1 - 2 < self._column + len(quoted):
            self._stream.write(" \\\n ")
            self._column = 0
            if spacer == " ":
                spacer = ""

        if spacer == " ":
            self._stream.write(spacer)
            self._column += 1

        self._stream.write(quoted)
        self._column += len(quoted)

        if spacer == ":":
            self._stream.write(spacer)
            self._column += 1

    def write_rule(self, target: str, dependencies: Iterable[str]) -> None:
        self._column = 0
        self._emit(target, ":")
        for dependency in dependencies:
            self._emit(dependency, " ")
        self._stream.write("\n")


def write_dependency_file(dependency_file: str, target: str, dependencies: Iterable[str]) -> bool:
    """Write ``target: dependencies`` to ``dependency_file``. Failures are logged, never raised.

    Returns:
        True if the file was written and closed successfully.
    """
    try:
        f = open(dependency_file, "w", encoding="utf-8")
    except OSError as e:
        logger.warning(f"can't open `{dependency_file}' for writing: {e}")
        return False

    written = True
    try:
        DependencyWriter(f).write_rule(target, dependencies)
    except OSError as e:
        logger.warning(f"can't write `{dependency_file}': {e}")
        written = False
    try:
        f.close()
    except OSError as e:
        logger.warning(f"can't close `{dependency_file}': {e}")
        written = False
    return written


__all__ = ["MAX_COLUMNS", "DependencyWriter", "quote_for_make", "write_dependency_file"]

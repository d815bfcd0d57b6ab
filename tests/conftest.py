"""Common test fixtures for OmniBOR Core."""

from collections.abc import Callable
from pathlib import Path

import pytest

from omnibor_core.session import BuildSession


@pytest.fixture
def session() -> BuildSession:
    """Session with document generation enabled, so registration is active."""
    s = BuildSession()
    s.enable_omnibor()
    return s


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes | str], Path]:
    """Create a file under tmp_path/src and return its path."""

    def _make(name: str, content: bytes | str) -> Path:
        path = tmp_path / "src" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8") if isinstance(content, str) else content)
        return path

    return _make

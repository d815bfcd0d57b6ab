"""Tests for the omnibor CLI."""

from pathlib import Path
from unittest.mock import patch

import pytest

from omnibor_core.cli import _algorithm_for_gitoid, _parse_bom, main
from omnibor_core.exceptions import UnsupportedAlgorithmError
from omnibor_core.gitoid import HashAlgorithm, gitoid_for_content
from omnibor_core.settings import Settings

EMPTY_SHA1 = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
EMPTY_SHA256 = "473a0f4c3be8a93681a267e3b1e9a7dcda1185436fe141f7749120a303721813"


@pytest.fixture(autouse=True)
def isolated_settings():
    """CLI defaults come from a clean Settings, not the developer's environment."""
    with patch("omnibor_core.cli.settings", Settings(result_dir="", enabled=False, dependency_file="")):
        yield


class TestHelpers:
    def test_algorithm_from_length(self):
        assert _algorithm_for_gitoid("a" * 40) is HashAlgorithm.SHA1
        assert _algorithm_for_gitoid("a" * 64) is HashAlgorithm.SHA256

    def test_algorithm_from_bad_length(self):
        with pytest.raises(UnsupportedAlgorithmError):
            _algorithm_for_gitoid("abc")

    def test_parse_bom(self):
        assert _parse_bom(f"dir=x/lib.o={EMPTY_SHA1}") == ("dir=x/lib.o", HashAlgorithm.SHA1, EMPTY_SHA1)

    @pytest.mark.parametrize("value", ["no-separator", f"={EMPTY_SHA1}", "lib.o="])
    def test_parse_bom_rejects(self, value: str):
        with pytest.raises(ValueError):
            _parse_bom(value)


class TestHashObject:
    def test_empty_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        f = tmp_path / "empty"
        f.write_bytes(b"")
        assert main(["hash-object", str(f)]) == 0
        assert capsys.readouterr().out.strip() == EMPTY_SHA1

    def test_sha256(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        f = tmp_path / "empty"
        f.write_bytes(b"")
        assert main(["hash-object", "-a", "sha256", str(f)]) == 0
        assert capsys.readouterr().out.strip() == EMPTY_SHA256

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        assert main(["hash-object", str(tmp_path / "nope")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_bad_algorithm_is_usage_error(self, tmp_path: Path):
        with pytest.raises(SystemExit):
            main(["hash-object", "-a", "md5", str(tmp_path)])


class TestWrite:
    def test_writes_both_documents(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dep = make_file("a.s", "nop\n")
        out = tmp_path / "out"

        assert main(["write", "-d", str(out), str(dep)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert [line.split()[0] for line in lines] == ["sha1", "sha256"]
        sha1_id = lines[0].split()[1]
        stored = out / "objects" / "gitoid_blob_sha1" / sha1_id[:2] / sha1_id[2:]
        assert gitoid_for_content(stored.read_bytes(), "sha1") == sha1_id

    def test_selected_algorithm_only(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dep = make_file("a.s", "x")
        assert main(["write", "-d", str(tmp_path / "out"), "-a", "sha256", str(dep)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 1
        assert out[0].startswith("sha256 ")
        assert not (tmp_path / "out" / "objects" / "gitoid_blob_sha1").exists()

    def test_result_dir_from_settings(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dep = make_file("a.s", "x")
        with patch("omnibor_core.cli.settings", Settings(result_dir=str(tmp_path / "env"))):
            assert main(["write", "-a", "sha1", str(dep)]) == 0
        assert (tmp_path / "env" / "objects" / "gitoid_blob_sha1").is_dir()

    def test_missing_result_dir(self, make_file, capsys: pytest.CaptureFixture[str]):
        assert main(["write", str(make_file("a.s", "x"))]) == 1
        assert "OMNIBOR_DIR" in capsys.readouterr().err

    def test_bom_reference(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dep = make_file("lib.o", "obj")
        out = tmp_path / "out"
        assert main(["write", "-d", str(out), "-a", "sha1", "--bom", f"{dep}={EMPTY_SHA1}", str(dep)]) == 0

        capsys.readouterr()
        assert main(["cat-object", "-d", str(out), _only_id(out, "sha1")]) == 0
        assert f" bom {EMPTY_SHA1}\n" in capsys.readouterr().out

    def test_invalid_bom(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dep = make_file("lib.o", "obj")
        assert main(["write", "-d", str(tmp_path / "out"), "--bom", f"{dep}=NOTHEX", str(dep)]) == 1
        assert "invalid --bom" in capsys.readouterr().err

    def test_unwritable_result_dir(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        (tmp_path / "file").write_text("x")
        assert main(["write", "-d", str(tmp_path / "file" / "out"), str(make_file("a.s", "x"))]) == 1
        assert "was not written" in capsys.readouterr().err

    def test_dependency_file(self, make_file, tmp_path: Path):
        dep = make_file("a.s", "x")
        rules = tmp_path / "out.d"
        args = ["write", "-d", str(tmp_path / "out"), "--dependency-file", str(rules), "--target", "a.o", str(dep)]
        assert main(args) == 0
        assert rules.read_text().replace(" \\\n ", " ") == f"a.o: {dep}\n"


class TestCatObject:
    def test_prints_document(self, make_file, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        out = tmp_path / "out"
        main(["write", "-d", str(out), "-a", "sha256", str(make_file("a.s", "x"))])
        gitoid = capsys.readouterr().out.split()[1]

        assert main(["cat-object", "-d", str(out), gitoid]) == 0
        assert capsys.readouterr().out.startswith("gitoid:blob:sha256\nblob ")

    def test_unknown_object(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        assert main(["cat-object", "-d", str(tmp_path), "00" * 20]) == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_gitoid_length(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        assert main(["cat-object", "-d", str(tmp_path), "abc"]) == 1


def test_log_level_option(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "empty"
    f.write_bytes(b"")
    with patch("omnibor_core.cli.setup_logging") as mock_setup:
        assert main(["--log-level", "debug", "hash-object", str(f)]) == 0
    mock_setup.assert_called_once_with(level="DEBUG")


def test_unknown_log_level_is_usage_error(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["--log-level", "chatty", "hash-object", str(tmp_path)])


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()


def _only_id(result_dir: Path, family: str) -> str:
    shard = next((result_dir / "objects" / f"gitoid_blob_{family}").iterdir())
    return shard.name + next(shard.iterdir()).name

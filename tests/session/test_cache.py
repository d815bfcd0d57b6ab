"""Tests for DigestCache and DigestRecord."""

from unittest.mock import patch

import pytest

from omnibor_core.gitoid import HashAlgorithm, gitoid_for_content
from omnibor_core.session import DigestCache, DigestRecord
from omnibor_core.session import cache as cache_module


class TestDigestRecord:
    def test_slots_start_empty(self):
        record = DigestRecord(path="a.s")
        assert record.digest(HashAlgorithm.SHA1) is None
        assert record.digest(HashAlgorithm.SHA256) is None

    def test_set_digest_fills_only_its_slot(self):
        record = DigestRecord(path="a.s")
        record.set_digest(HashAlgorithm.SHA256, "ab" * 32)
        assert record.sha256 == "ab" * 32
        assert record.sha1 is None
        assert record.has_digest(HashAlgorithm.SHA256)
        assert not record.has_digest(HashAlgorithm.SHA1)

    def test_slot_is_immutable_once_set(self):
        record = DigestRecord(path="a.s", sha1="aa" * 20)
        with pytest.raises(ValueError, match="already set"):
            record.set_digest(HashAlgorithm.SHA1, "bb" * 20)
        assert record.sha1 == "aa" * 20

    def test_accepts_algorithm_names(self):
        record = DigestRecord(path="a.s", sha1="aa" * 20)
        assert record.digest("sha1") == "aa" * 20
        assert record.digest("SHA256") is None
        assert record.has_digest("sha1")
        record.set_digest("sha256", "bb" * 32)
        assert record.sha256 == "bb" * 32
        assert record.sha1 == "aa" * 20


class TestFill:
    def test_hashes_each_path(self, make_file):
        a = make_file("a.s", "mov r0, r1\n")
        b = make_file("b.inc", "")
        cache = DigestCache()

        assert cache.fill([str(a), str(b)], HashAlgorithm.SHA1) == 2
        assert cache.get(str(a)).sha1 == gitoid_for_content(b"mov r0, r1\n", "sha1")
        assert cache.get(str(b)).sha1 == gitoid_for_content(b"", "sha1")
        assert cache.get(str(a)).sha256 is None

    def test_memoizes_per_algorithm(self, make_file):
        a = make_file("a.s", "x")
        cache = DigestCache()
        cache.fill([str(a)], HashAlgorithm.SHA1)

        with patch.object(cache_module, "gitoid_for_file", wraps=cache_module.gitoid_for_file) as spy:
            assert cache.fill([str(a)], HashAlgorithm.SHA1) == 0
            spy.assert_not_called()
            assert cache.fill([str(a)], HashAlgorithm.SHA256) == 1
            spy.assert_called_once_with(str(a), HashAlgorithm.SHA256)

    def test_cached_digest_survives_file_change(self, make_file):
        a = make_file("a.s", "before")
        cache = DigestCache()
        cache.fill([str(a)], HashAlgorithm.SHA1)
        a.write_text("after")
        cache.fill([str(a)], HashAlgorithm.SHA1)
        assert cache.get(str(a)).sha1 == gitoid_for_content(b"before", "sha1")

    def test_unreadable_path_is_skipped(self, make_file, tmp_path):
        a = make_file("a.s", "x")
        missing = tmp_path / "gone.inc"
        cache = DigestCache()

        assert cache.fill([str(missing), str(a)], HashAlgorithm.SHA1) == 1
        assert cache.get(str(missing)) is None
        assert len(cache) == 1

    def test_one_slot_when_file_disappears_between_passes(self, make_file):
        a = make_file("a.s", "x")
        cache = DigestCache()
        cache.fill([str(a)], HashAlgorithm.SHA256)
        a.unlink()
        cache.fill([str(a)], HashAlgorithm.SHA1)

        record = cache.get(str(a))
        assert record.sha256 is not None
        assert record.sha1 is None

    def test_records_for(self, make_file, tmp_path):
        a = make_file("a.s", "x")
        b = make_file("b.s", "y")
        cache = DigestCache()
        cache.fill([str(a), str(b)], HashAlgorithm.SHA1)
        b.unlink()
        cache.fill([str(a), str(b)], HashAlgorithm.SHA256)

        assert [r.path for r in cache.records_for(HashAlgorithm.SHA1)] == [str(a), str(b)]
        assert [r.path for r in cache.records_for(HashAlgorithm.SHA256)] == [str(a)]

    def test_equal_paths_share_a_record(self, make_file):
        a = make_file("a.s", "x")
        cache = DigestCache()
        cache.fill([str(a)], HashAlgorithm.SHA1)
        doubled = str(a).replace("/src/", "/src//")
        assert cache.get(doubled) is cache.get(str(a))

    def test_clear(self, make_file):
        a = make_file("a.s", "x")
        cache = DigestCache()
        cache.fill([str(a)], HashAlgorithm.SHA1)
        cache.clear()
        assert len(cache) == 0
        assert list(cache) == []

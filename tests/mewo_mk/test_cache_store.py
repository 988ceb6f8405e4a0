"""Tests for the append-only environment cache."""

import os

import pytest

from mewo_mk.primitives.cache_store import CacheEntry, CacheStore
from mewo_mk.primitives.errors import CacheError


class TestCacheEntry:
    """CacheEntry record formatting."""

    def test_to_line(self):
        """Record line is directory, one space, environment path."""
        entry = CacheEntry("/proj", "/proj/.venv")
        assert entry.to_line() == "/proj /proj/.venv"


class TestCacheStoreLoad:
    """CacheStore.load lookups."""

    def test_missing_file_is_no_match(self, tmp_path):
        """An absent cache file yields None, not an error."""
        store = CacheStore(tmp_path / "nope" / "cache")
        assert store.load("/proj") is None
        assert not store.exists()

    def test_single_match(self, tmp_path):
        """A matching record returns its environment path."""
        path = tmp_path / "cache"
        path.write_text("/other /other/.venv\n/proj /envs/proj\n")
        assert CacheStore(path).load("/proj") == "/envs/proj"

    def test_last_match_wins(self, tmp_path):
        """With several records for a directory the last one counts."""
        path = tmp_path / "cache"
        path.write_text(
            "/proj /envs/old\n"
            "/other /envs/other\n"
            "/proj /envs/new\n"
        )
        assert CacheStore(path).load("/proj") == "/envs/new"

    def test_prefix_directory_does_not_match(self, tmp_path):
        """/proj does not match a record for /proj2."""
        path = tmp_path / "cache"
        path.write_text("/proj2 /envs/proj2\n")
        assert CacheStore(path).load("/proj") is None

    def test_environment_path_with_spaces(self, tmp_path):
        """Everything after the directory and separator is the path."""
        path = tmp_path / "cache"
        path.write_text("/proj /home/me/My Envs/proj\n")
        assert CacheStore(path).load("/proj") == "/home/me/My Envs/proj"

    def test_empty_remainder_ignored(self, tmp_path):
        """A record with no environment path does not shadow an earlier one."""
        path = tmp_path / "cache"
        path.write_text("/proj /envs/proj\n/proj \n")
        assert CacheStore(path).load("/proj") == "/envs/proj"

    def test_unreadable_file_raises(self, tmp_path):
        """A cache path that is a directory cannot be read."""
        path = tmp_path / "cache"
        path.mkdir()
        with pytest.raises(CacheError) as exc_info:
            CacheStore(path).load("/proj")
        assert exc_info.value.path == str(path)


class TestCacheStoreAppend:
    """CacheStore.append writes."""

    def test_creates_file_and_parents(self, tmp_path):
        """First append creates the cache directory and file."""
        path = tmp_path / "a" / "b" / "cache"
        store = CacheStore(path)

        entry = store.append("/proj", "/proj/.venv")

        assert entry == CacheEntry("/proj", "/proj/.venv")
        assert path.read_text() == "/proj /proj/.venv\n"

    def test_never_rewrites_existing_lines(self, tmp_path):
        """Appending keeps stale records on disk."""
        path = tmp_path / "cache"
        path.write_text("/proj /envs/old\n")
        store = CacheStore(path)

        store.append("/proj", "/envs/new")

        assert path.read_text() == "/proj /envs/old\n/proj /envs/new\n"
        assert store.load("/proj") == "/envs/new"

    def test_entries_in_file_order(self, tmp_path):
        """entries() lists well-formed records in order."""
        path = tmp_path / "cache"
        path.write_text("/a /envs/a\ngarbage\n/b /envs/b\n")
        assert CacheStore(path).entries() == [
            CacheEntry("/a", "/envs/a"),
            CacheEntry("/b", "/envs/b"),
        ]

    def test_parent_is_a_file_raises(self, tmp_path):
        """A cache directory that cannot be created is fatal."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = CacheStore(blocker / "cache")

        with pytest.raises(CacheError) as exc_info:
            store.append("/proj", "/proj/.venv")
        assert "cache directory" in exc_info.value.message

    def test_unwritable_path_raises(self, tmp_path):
        """A cache path that is a directory cannot be opened for append."""
        path = tmp_path / "cache"
        path.mkdir()

        with pytest.raises(CacheError) as exc_info:
            CacheStore(path).append("/proj", "/proj/.venv")
        assert exc_info.value.cause is not None


class TestUndecodableNames:
    """Directory names that are not valid UTF-8."""

    def test_non_utf8_directory_round_trips(self, tmp_path):
        """A surrogate-escaped name is stored as its original bytes and found again."""
        directory = os.fsdecode(os.fsencode(str(tmp_path)) + b"/caf\xe9")
        path = tmp_path / "cache"
        store = CacheStore(path)

        store.append(directory, "/envs/x")

        assert path.read_bytes() == os.fsencode(directory) + b" /envs/x\n"
        assert store.load(directory) == "/envs/x"
        assert store.entries() == [CacheEntry(directory, "/envs/x")]

    def test_non_utf8_bytes_in_existing_file(self, tmp_path):
        """Records written by other tools with raw bytes do not break reads."""
        path = tmp_path / "cache"
        path.write_bytes(b"/na\xefve /envs/naive\n/proj /envs/proj\n")

        store = CacheStore(path)

        assert store.load("/proj") == "/envs/proj"
        assert store.load(os.fsdecode(b"/na\xefve")) == "/envs/naive"

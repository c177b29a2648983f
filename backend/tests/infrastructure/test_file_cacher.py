"""File Cacher — tests for mtime freshness, atomic writes and storage errors.

Tests cover:
    - No entry → stale; entry newer than sources → fresh
    - Source touched after the write → stale
    - Missing source → stale
    - Changed sources or filters (definition digest mismatch) → stale
    - write() leaves no temp files behind and read() returns the exact bytes
    - OSErrors surface as CacheStorageError
"""

import os
from pathlib import Path

import pytest

from miniasset.core.domain_types import Build
from miniasset.core.errors import CacheStorageError
from miniasset.infrastructure.file_cacher import FileCacher, definition_digest


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "src" / "a.js"
    path.parent.mkdir()
    path.write_text("var a;", encoding="utf-8")
    os.utime(path, (1_000_000, 1_000_000))
    return path


@pytest.fixture
def cacher(tmp_path):
    return FileCacher(tmp_path / "out")


def test_no_entry_is_stale(cacher, source):
    assert not cacher.is_fresh(Build("app.js", (source,)))


def test_written_entry_is_fresh_and_readable(cacher, source):
    build = Build("app.js", (source,))
    cacher.write(build, b"compiled")
    assert cacher.is_fresh(build)
    assert cacher.read(build) == b"compiled"
    assert cacher.cache_path(build) == cacher.output_dir / "app.js"


def test_source_newer_than_entry_is_stale(cacher, source):
    build = Build("app.js", (source,))
    cacher.write(build, b"compiled")
    os.utime(cacher.cache_path(build), (2_000_000, 2_000_000))
    os.utime(source, (3_000_000, 3_000_000))
    assert not cacher.is_fresh(build)


def test_missing_source_is_stale(cacher, source, tmp_path):
    build = Build("app.js", (source, tmp_path / "gone.js"))
    cacher.write(build, b"compiled")
    assert not cacher.is_fresh(build)


def test_write_is_atomic_and_cleans_up(cacher, source):
    build = Build("app.js", (source,))
    cacher.write(build, b"first")
    cacher.write(build, b"second")
    assert cacher.read(build) == b"second"
    assert sorted(os.listdir(cacher.output_dir)) == [".app.js.digest", "app.js"]


def test_read_missing_entry_is_storage_error(cacher):
    with pytest.raises(CacheStorageError) as exc:
        cacher.read(Build("app.js"))
    assert exc.value.operation == "read"


def test_write_into_unusable_dir_is_storage_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a dir")
    cacher = FileCacher(blocker)
    with pytest.raises(CacheStorageError) as exc:
        cacher.write(Build("app.js"), b"x")
    assert exc.value.operation == "write"
    assert exc.value.message.startswith("Cache write failed for 'app.js'")


def test_invalidate_removes_entry(cacher, source):
    build = Build("app.js", (source,))
    cacher.write(build, b"compiled")
    cacher.invalidate(build)
    assert not cacher.is_fresh(build)
    cacher.invalidate(build)


def test_changed_filters_make_entry_stale(cacher, source):
    cacher.write(Build("app.js", (source,)), b"compiled")
    assert not cacher.is_fresh(Build("app.js", (source,), ("jsmin",)))


def test_changed_sources_make_entry_stale(cacher, source, tmp_path):
    other = tmp_path / "src" / "b.js"
    other.write_text("var b;", encoding="utf-8")
    os.utime(other, (1_000_000, 1_000_000))
    cacher.write(Build("app.js", (source, other)), b"compiled")
    assert cacher.is_fresh(Build("app.js", (source, other)))
    assert not cacher.is_fresh(Build("app.js", (other,)))
    assert not cacher.is_fresh(Build("app.js", (other, source)))


def test_entry_without_digest_is_stale(cacher, source):
    build = Build("app.js", (source,))
    cacher.write(build, b"compiled")
    cacher.digest_path(build).unlink()
    assert not cacher.is_fresh(build)
    assert cacher.read(build) == b"compiled"


def test_digest_tracks_definition_only():
    a = Build("app.js", (Path("x.js"),), ("jsmin",))
    assert definition_digest(a) == definition_digest(Build("app.js", (Path("x.js"),), ("jsmin",)))
    assert definition_digest(a) != definition_digest(Build("app.js", (Path("x.js"),)))


def test_invalidate_removes_digest(cacher, source):
    build = Build("app.js", (source,))
    cacher.write(build, b"compiled")
    cacher.invalidate(build)
    assert not cacher.digest_path(build).exists()

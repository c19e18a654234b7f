import os

import pytest

from wishtree.sinks.fs_sink import FilesystemSink


@pytest.fixture
def target(tmp_path):
    return tmp_path / "out"


def test_begin_creates_target(target):
    sink = FilesystemSink(target)
    sink.begin()
    assert target.is_dir()


def test_enter_directory_creates_empty_directory(target):
    sink = FilesystemSink(target)
    sink.begin()
    sink.enter_directory("dist")
    sink.enter_directory("dist/empty")
    sink.finish()

    assert (target / "dist" / "empty").is_dir()
    assert list((target / "dist" / "empty").iterdir()) == []


def test_write_file_creates_parents(target):
    sink = FilesystemSink(target)
    sink.begin()
    sink.write_file("doc/sub/c.md", b"# C")
    sink.finish()

    assert (target / "doc" / "sub" / "c.md").read_bytes() == b"# C"


def test_write_file_overwrites(target):
    (target / "dist").mkdir(parents=True)
    (target / "dist" / "readme.txt").write_text("old")

    sink = FilesystemSink(target)
    sink.begin()
    sink.write_file("dist/readme.txt", b"new")
    sink.finish()

    assert (target / "dist" / "readme.txt").read_text() == "new"


def test_finish_applies_timestamp(target):
    sink = FilesystemSink(target, timestamp=1000000000)
    sink.begin()
    sink.enter_directory("dist")
    sink.write_file("dist/readme.txt", b"hello")
    sink.finish()

    assert os.stat(target / "dist" / "readme.txt").st_mtime == 1000000000
    assert os.stat(target / "dist").st_mtime == 1000000000


def test_finish_is_idempotent(target):
    sink = FilesystemSink(target, timestamp=1000000000)
    sink.begin()
    sink.write_file("a.txt", b"a")
    sink.finish()
    os.utime(target / "a.txt", (5, 5))
    sink.finish()

    assert os.stat(target / "a.txt").st_mtime == 5


def test_abort_leaves_written_files(target):
    sink = FilesystemSink(target)
    sink.begin()
    sink.write_file("a.txt", b"a")
    sink.abort()

    assert (target / "a.txt").read_bytes() == b"a"


def test_discard_removes_created_output(tmp_path):
    target = tmp_path / "out"
    sink = FilesystemSink(target)
    sink.begin()
    sink.enter_directory("dist")
    sink.enter_directory("dist/empty")
    sink.write_file("dist/readme.txt", b"hello")
    sink.abort()
    sink.discard()

    assert not target.exists()
    assert tmp_path.is_dir()


def test_discard_keeps_pre_existing_content(target):
    (target / "keep").mkdir(parents=True)
    (target / "keep" / "old.txt").write_text("old")

    sink = FilesystemSink(target)
    sink.begin()
    sink.write_file("keep/new.txt", b"new")
    sink.write_file("fresh/file.txt", b"fresh")
    sink.abort()
    sink.discard()

    assert (target / "keep" / "old.txt").read_text() == "old"
    assert not (target / "keep" / "new.txt").exists()
    assert not (target / "fresh").exists()
    assert target.is_dir()

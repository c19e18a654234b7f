import gzip
import tarfile

import pytest

from wishtree.sinks.tar_sink import TarGzSink

TIMESTAMP = 1577836800


def write_example(sink):
    sink.begin()
    sink.enter_directory("dist")
    sink.enter_directory("dist/empty")
    sink.write_file("dist/readme.txt", b"hello")


def test_entries(tmp_path):
    archive = tmp_path / "dist.tar.gz"
    sink = TarGzSink(archive, TIMESTAMP)
    write_example(sink)
    sink.finish()

    with tarfile.open(archive, "r:gz") as tf:
        members = tf.getmembers()
        assert [member.name for member in members] == ["dist", "dist/empty", "dist/readme.txt"]

        directory, empty, readme = members
        assert directory.isdir() and empty.isdir()
        assert empty.mode == 0o755
        assert readme.isfile()
        assert readme.mode == 0o644
        assert readme.size == 5
        assert tf.extractfile(readme).read() == b"hello"

        for member in members:
            assert member.mtime == TIMESTAMP
            assert member.uid == 0 and member.gid == 0
            assert member.uname == "" and member.gname == ""


def test_gzip_header_is_reproducible(tmp_path):
    archive = tmp_path / "dist.tar.gz"
    sink = TarGzSink(archive, TIMESTAMP)
    write_example(sink)
    sink.finish()

    header = archive.read_bytes()[:10]
    assert header[:2] == b"\x1f\x8b"
    # No embedded file name and the fixed modification time
    assert header[3] == 0
    assert int.from_bytes(header[4:8], "little") == TIMESTAMP


def test_identical_timestamps_give_identical_bytes(tmp_path):
    for name in ("first.tar.gz", "second.tar.gz"):
        sink = TarGzSink(tmp_path / name, TIMESTAMP)
        write_example(sink)
        sink.finish()

    assert (tmp_path / "first.tar.gz").read_bytes() == (tmp_path / "second.tar.gz").read_bytes()


def test_abort_skips_end_of_archive(tmp_path):
    finished = tmp_path / "finished.tar.gz"
    sink = TarGzSink(finished, TIMESTAMP)
    write_example(sink)
    sink.finish()

    aborted = tmp_path / "aborted.tar.gz"
    sink = TarGzSink(aborted, TIMESTAMP)
    write_example(sink)
    sink.abort()

    complete = gzip.decompress(finished.read_bytes())
    partial = gzip.decompress(aborted.read_bytes())
    assert len(partial) < len(complete)
    assert complete.startswith(partial)
    assert not partial.endswith(b"\0" * 1024)


def test_discard_removes_archive(tmp_path):
    archive = tmp_path / "dist.tar.gz"
    sink = TarGzSink(archive, TIMESTAMP)
    write_example(sink)
    sink.abort()
    sink.discard()

    assert not archive.exists()


def test_write_before_begin(tmp_path):
    sink = TarGzSink(tmp_path / "dist.tar.gz", TIMESTAMP)
    with pytest.raises(ValueError):
        sink.enter_directory("dist")

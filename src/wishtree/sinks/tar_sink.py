"""Sink writing rendered entries into a gzip-compressed tar archive."""

import gzip
import io
import logging
import tarfile
from pathlib import Path
from typing import BinaryIO, Optional

from wishtree.types import PathType

from .base_sink import Sink

logger = logging.getLogger(__name__)


class TarGzSink(Sink):
    """Writes entries into a tar archive (GNU format) compressed with gzip.

    The sink stacks three layers: a tarfile writer over a gzip compressor over the raw
    output file. Finishing closes them from the top down: the tar end-of-archive
    blocks must be written before the gzip trailer, which must be written before the
    file is closed. Closing the gzip layer first would corrupt the archive.

    Every entry carries the same timestamp, root ownership with empty owner names and
    fixed permissions. The gzip header stores the same timestamp and no file name, so
    archives rendered from the same tree with the same timestamp are identical.

    Attributes:
        archive_path (Path): Location of the .tar.gz file to create.
        timestamp (int): Epoch seconds stamped on every entry and on the gzip header.
    """

    def __init__(self, archive_path: PathType, timestamp: int) -> None:
        self.archive_path = Path(archive_path)
        self.timestamp = timestamp
        self._file: Optional[BinaryIO] = None
        self._gzip: Optional[gzip.GzipFile] = None
        self._tar: Optional[tarfile.TarFile] = None

    def begin(self) -> None:
        logger.debug("Writing tar.gz archive %s", self.archive_path)
        self.archive_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.archive_path, "wb")
        self._gzip = gzip.GzipFile(filename="", mode="wb", fileobj=self._file, mtime=self.timestamp)
        self._tar = tarfile.open(fileobj=self._gzip, mode="w", format=tarfile.GNU_FORMAT)

    def _writer(self) -> tarfile.TarFile:
        if self._tar is None:
            raise ValueError("Cannot write to a tar sink that is not open")
        return self._tar

    def _info(self, name: str, mode: int) -> tarfile.TarInfo:
        info = tarfile.TarInfo(name)
        info.mtime = self.timestamp
        info.mode = mode
        info.uid = 0
        info.gid = 0
        info.uname = ""
        info.gname = ""
        return info

    def enter_directory(self, path: str) -> None:
        info = self._info(path, 0o755)
        info.type = tarfile.DIRTYPE
        self._writer().addfile(info)

    def write_file(self, path: str, content: bytes) -> None:
        info = self._info(path, 0o644)
        info.size = len(content)
        self._writer().addfile(info, io.BytesIO(content))

    def finish(self) -> None:
        try:
            if self._tar is not None:
                self._tar.close()
        finally:
            self._tar = None
            self._close_compressed()

    def abort(self) -> None:
        # The tar writer is dropped without its end-of-archive blocks
        self._tar = None
        self._close_compressed()

    def _close_compressed(self) -> None:
        try:
            if self._gzip is not None:
                self._gzip.close()
        finally:
            self._gzip = None
            if self._file is not None:
                self._file.close()
                self._file = None

    def discard(self) -> None:
        if self.archive_path.exists():
            self.archive_path.unlink()
            logger.debug("Removed partial archive %s", self.archive_path)

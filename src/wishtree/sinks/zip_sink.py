"""Sink writing rendered entries into a zip archive."""

import logging
import time
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from wishtree.types import PathType

from .base_sink import Sink

logger = logging.getLogger(__name__)

# Earliest timestamp a zip entry can carry
ZIP_EPOCH = int(datetime(1980, 1, 1, tzinfo=timezone.utc).timestamp())

FILE_MODE = 0o100644
DIR_MODE = 0o040755
# MS-DOS directory attribute, set alongside the unix mode for directory entries
MSDOS_DIRECTORY = 0x10


def zip_date_time(timestamp: int) -> Tuple[int, int, int, int, int, int]:
    """Convert epoch seconds to a zip entry date_time tuple in UTC.

    Zip timestamps cannot predate 1980, so earlier values are clamped.

    Example:
        >>> zip_date_time(0)
        (1980, 1, 1, 0, 0, 0)
    """
    return tuple(time.gmtime(max(timestamp, ZIP_EPOCH))[:6])  # type: ignore[return-value]


class ZipSink(Sink):
    """Writes entries into a zip archive.

    Every entry is stamped with the same timestamp and fixed unix permissions (0644
    for files, 0755 for directories), so two renders of the same tree with the same
    timestamp produce identical archives. Declared directories get explicit entries,
    which keeps empty directories in the archive.

    Attributes:
        archive_path (Path): Location of the zip file to create.
        timestamp (int): Epoch seconds stamped on every entry.
        compress (bool): Deflate file entries when True, store them otherwise.
    """

    def __init__(self, archive_path: PathType, timestamp: int, compress: bool = True) -> None:
        self.archive_path = Path(archive_path)
        self.timestamp = timestamp
        self.compress = compress
        self._date_time = zip_date_time(timestamp)
        self._file: Optional[BinaryIO] = None
        self._zip: Optional[zipfile.ZipFile] = None

    def begin(self) -> None:
        logger.debug("Writing zip archive %s", self.archive_path)
        self.archive_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.archive_path, "wb")
        self._zip = zipfile.ZipFile(self._file, mode="w")

    def _writer(self) -> zipfile.ZipFile:
        if self._zip is None:
            raise ValueError("Cannot write to a zip sink that is not open")
        return self._zip

    def _info(self, name: str, mode: int) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(name, date_time=self._date_time)
        info.external_attr = mode << 16
        return info

    def enter_directory(self, path: str) -> None:
        info = self._info(path + "/", DIR_MODE)
        info.external_attr |= MSDOS_DIRECTORY
        self._writer().writestr(info, b"")

    def write_file(self, path: str, content: bytes) -> None:
        info = self._info(path, FILE_MODE)
        info.compress_type = zipfile.ZIP_DEFLATED if self.compress else zipfile.ZIP_STORED
        self._writer().writestr(info, content)

    def finish(self) -> None:
        try:
            if self._zip is not None:
                self._zip.close()
        finally:
            self._zip = None
            self._close_file()

    def abort(self) -> None:
        try:
            if self._zip is not None and self._file is not None:
                # ZipFile always writes the central directory on close, right after the last
                # entry; truncating there leaves only the local entries
                end_of_entries = self._file.tell()
                self._zip.close()
                self._file.truncate(end_of_entries)
        finally:
            self._zip = None
            self._close_file()

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def discard(self) -> None:
        if self.archive_path.exists():
            self.archive_path.unlink()
            logger.debug("Removed partial archive %s", self.archive_path)

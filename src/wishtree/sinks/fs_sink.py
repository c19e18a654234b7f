"""Sink writing rendered entries into a directory on the local filesystem."""

import logging
import os
from pathlib import Path
from typing import List, Optional

from wishtree.types import PathType

from .base_sink import Sink

logger = logging.getLogger(__name__)


class FilesystemSink(Sink):
    """Writes entries as real directories and files below a target directory.

    Parent directories are created as needed, so entries coming from filtered
    directories (which carry no directory entries of their own) land correctly.
    Existing files are overwritten.

    The sink remembers which files it wrote and which directories it created, so
    discard() can remove them again; directories that already existed are kept, and
    a directory is only removed once it is empty.

    Attributes:
        target_dir (Path): The output root.
        timestamp (Optional[int]): Epoch seconds applied as the modification time of
            every written entry on finish, or None to keep the filesystem's own times.

    Example:
        >>> sink = FilesystemSink("out")  # doctest: +SKIP
        >>> sink.begin()  # doctest: +SKIP
        >>> sink.write_file("dist/readme.txt", b"hello")  # doctest: +SKIP
        >>> sink.finish()  # doctest: +SKIP
    """

    def __init__(self, target_dir: PathType, timestamp: Optional[int] = None) -> None:
        self.target_dir = Path(target_dir)
        self.timestamp = timestamp
        self._created_dirs: List[Path] = []
        self._entered_dirs: List[Path] = []
        self._written_files: List[Path] = []
        self._closed = False

    def _resolve(self, path: str) -> Path:
        return self.target_dir.joinpath(*path.split("/"))

    def _make_dirs(self, directory: Path) -> None:
        """Create directory and any missing ancestors, recording each one created."""
        missing = []
        current = directory
        while not current.exists():
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent
        for path in reversed(missing):
            path.mkdir()
            self._created_dirs.append(path)

    def begin(self) -> None:
        logger.debug("Writing to directory %s", self.target_dir)
        self._make_dirs(self.target_dir)

    def enter_directory(self, path: str) -> None:
        directory = self._resolve(path)
        self._make_dirs(directory)
        self._entered_dirs.append(directory)

    def write_file(self, path: str, content: bytes) -> None:
        file_path = self._resolve(path)
        self._make_dirs(file_path.parent)
        with open(file_path, "wb") as f:
            f.write(content)
        self._written_files.append(file_path)

    def finish(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.timestamp is None:
            return
        times = (self.timestamp, self.timestamp)
        for file_path in self._written_files:
            os.utime(file_path, times)
        # Deepest directories first; touching a child would not change its parent again
        for directory in sorted(self._entered_dirs, key=lambda p: len(p.parts), reverse=True):
            os.utime(directory, times)

    def abort(self) -> None:
        self._closed = True

    def discard(self) -> None:
        for file_path in reversed(self._written_files):
            if file_path.is_file():
                file_path.unlink()
        for directory in reversed(self._created_dirs):
            if directory.is_dir() and not any(directory.iterdir()):
                directory.rmdir()
        logger.debug("Removed partial output below %s", self.target_dir)
        self._written_files.clear()
        self._created_dirs.clear()
        self._entered_dirs.clear()

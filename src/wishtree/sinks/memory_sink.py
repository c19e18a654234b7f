"""In-memory sink used for dry runs and previews."""

from typing import Dict, List, Tuple

from .base_sink import Sink


class MemorySink(Sink):
    """Keeps every rendered entry in memory.

    Attributes:
        directories (List[str]): Declared directory paths, in order.
        files (Dict[str, bytes]): File contents by path, in write order.
        events (List[Tuple[str, str]]): Every call received, as (operation, path).
        finished (bool): True once finish() was called.
        aborted (bool): True once abort() was called.

    Example:
        >>> sink = MemorySink()
        >>> sink.begin()
        >>> sink.enter_directory("dist")
        >>> sink.write_file("dist/readme.txt", b"hello")
        >>> sink.finish()
        >>> sink.files
        {'dist/readme.txt': b'hello'}
    """

    def __init__(self) -> None:
        self.directories: List[str] = []
        self.files: Dict[str, bytes] = {}
        self.events: List[Tuple[str, str]] = []
        self.finished = False
        self.aborted = False

    def begin(self) -> None:
        self.events.append(("begin", ""))

    def enter_directory(self, path: str) -> None:
        self.directories.append(path)
        self.events.append(("enter", path))

    def leave_directory(self, path: str) -> None:
        self.events.append(("leave", path))

    def write_file(self, path: str, content: bytes) -> None:
        self.files[path] = content
        self.events.append(("write", path))

    def finish(self) -> None:
        self.finished = True

    def abort(self) -> None:
        self.aborted = True

    def discard(self) -> None:
        self.directories.clear()
        self.files.clear()

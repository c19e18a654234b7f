"""Sink base class defining the interface every render target implements.

A sink receives the concrete entries of a rendered tree, one call per entry, and owns
whatever handle the output needs (an open archive, a target directory). The render
engine drives a sink through a fixed lifecycle:

1. begin - acquire resources
2. enter_directory / leave_directory / write_file - one call per entry, in tree order
3. finish - finalize and release, or abort (release without finalizing) on failure
4. discard - optionally delete partial output after abort
"""

from abc import ABC, abstractmethod


class Sink(ABC):
    """Abstract base class for render targets.

    Paths passed to a sink are relative to the output root and use forward slashes.
    A sink writes entries in the order it receives them and never reorders or
    deduplicates them; duplicate paths are rejected before a sink is involved.

    Example:
        >>> class PrintSink(Sink):
        ...     def enter_directory(self, path: str) -> None:
        ...         print(path + "/")
        ...
        ...     def write_file(self, path: str, content: bytes) -> None:
        ...         print(path, len(content))
        ...
        ...     def finish(self) -> None:
        ...         pass
        >>> sink = PrintSink()
        >>> sink.enter_directory("dist")
        dist/
        >>> sink.write_file("dist/readme.txt", b"hello")
        dist/readme.txt 5
    """

    def begin(self) -> None:
        """Acquire the resources needed for writing. Called once before any entry."""
        pass

    @abstractmethod
    def enter_directory(self, path: str) -> None:
        """Declare a directory at the given relative path.

        Called before the directory's children. Sinks that can express empty
        directories must create one here; sinks that derive directories from file
        paths may record it or do nothing.

        Args:
            path: Relative path of the directory.
        """
        pass

    def leave_directory(self, path: str) -> None:
        """Called after all children of a directory were written. No-op by default."""
        pass

    @abstractmethod
    def write_file(self, path: str, content: bytes) -> None:
        """Create or overwrite a file at the given relative path.

        Any parent directories implied by the path must be created implicitly.

        Args:
            path: Relative path of the file.
            content: Complete file content.
        """
        pass

    @abstractmethod
    def finish(self) -> None:
        """Finalize the output and release all resources.

        After finish() returns the output is complete and valid, holding every entry
        written so far. Calling finish() again has no effect.
        """
        pass

    def abort(self) -> None:
        """Release all resources without finalizing the output.

        Archive sinks skip their trailing structures, so an aborted archive is left
        truncated. The default delegates to finish() for sinks with nothing to skip.
        """
        self.finish()

    def discard(self) -> None:
        """Delete the output written so far. Only valid after finish() or abort()."""
        pass

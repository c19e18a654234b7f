from typing import Optional


class WishTreeError(Exception):
    """
    Base class for every error raised while declaring or rendering a tree.

    Each error carries the relative output path it concerns (when known) and the kind
    of operation that failed, so callers can report exactly which entry went wrong.

    Attributes:
        path (Optional[str]): Relative output path (forward-slash separated), if known.
        operation (str): Short name of the failed operation (e.g. "read", "write").

    Example:
        >>> error = WishTreeError("something broke", path="dist/a.txt", operation="write")
        >>> error.path
        'dist/a.txt'
        >>> str(error)
        'something broke'
    """

    def __init__(self, message: str, *, path: Optional[str] = None, operation: str = "render") -> None:
        self.path = path
        self.operation = operation
        super().__init__(message)


class InvalidEntryNameError(WishTreeError, ValueError):
    """
    Exception raised when a directory entry name is empty or contains a path separator.

    Example:
        >>> error = InvalidEntryNameError("a/b")
        >>> str(error)
        "Invalid entry name 'a/b': names must be non-empty and must not contain path separators"
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Invalid entry name {name!r}: names must be non-empty and must not contain path separators",
            path=name,
            operation="declare",
        )


class InvalidPatternError(WishTreeError, ValueError):
    """
    Exception raised when an include pattern cannot be compiled.

    Attributes:
        pattern (str): The offending pattern.
        reason (str): Why the pattern was rejected.

    Example:
        >>> error = InvalidPatternError("[abc", "unclosed character class")
        >>> str(error)
        "Invalid include pattern '[abc': unclosed character class"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid include pattern {pattern!r}: {reason}", operation="compile pattern")


class RenderError(WishTreeError):
    """
    Exception raised when a tree cannot be rendered to a sink.

    Subclasses narrow the failure down; a plain RenderError is used for structural
    problems such as a root node that is not a directory.
    """

    pass


class SourceUnavailableError(RenderError):
    """
    Exception raised when a copied file or filtered directory source cannot be read.

    Attributes:
        source_path (str): Path on the invoking filesystem that could not be read.
        cause (Optional[BaseException]): Underlying I/O error, if any.

    Example:
        >>> error = SourceUnavailableError("dist/notes.txt", "/missing/notes.txt")
        >>> str(error)
        "Cannot read source '/missing/notes.txt' for 'dist/notes.txt' (read)"
    """

    def __init__(
        self,
        path: str,
        source_path: str,
        cause: Optional[BaseException] = None,
        operation: str = "read",
    ) -> None:
        self.source_path = source_path
        self.cause = cause
        message = f"Cannot read source {source_path!r} for {path!r} ({operation})"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, path=path, operation=operation)


class DuplicatePathError(RenderError):
    """
    Exception raised when two tree nodes resolve to the same output path.

    This also covers a path claimed both as a file and as a parent directory.

    Example:
        >>> str(DuplicatePathError("x"))
        "Duplicate output path 'x'"
    """

    def __init__(self, path: str, detail: Optional[str] = None) -> None:
        message = f"Duplicate output path {path!r}"
        if detail:
            message += f": {detail}"
        super().__init__(message, path=path, operation="plan")


class SinkError(RenderError):
    """
    Exception raised when an output sink fails to perform a write.

    Attributes:
        cause (Optional[BaseException]): The underlying I/O or archive error.
    """

    def __init__(self, path: Optional[str], operation: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        target = repr(path) if path else "output"
        message = f"Failed to {operation} {target}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, path=path, operation=operation)


class ManifestError(WishTreeError, ValueError):
    """
    Exception raised when a manifest does not describe a valid tree.

    Attributes:
        location (str): Slash-separated location of the offending node in the manifest,
            or the manifest file itself for errors that concern the whole document.

    Example:
        >>> str(ManifestError("dist/readme.txt", "expected a string for 'text'"))
        "Invalid manifest entry 'dist/readme.txt': expected a string for 'text'"
    """

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Invalid manifest entry {location!r}: {reason}", path=location, operation="load manifest")

from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(Enum):
    """Enumeration of tree node kinds used when dispatching during a render.

    Attributes:
        DIRECTORY: Directory with explicitly declared entries
        EMPTY_DIRECTORY: Directory declared without entries
        TEXT_FILE: File with literal in-memory content
        COPIED_FILE: File copied verbatim from a source path at render time
        FILTERED_DIRECTORY: Directory expanded from a source root and include patterns
    """

    DIRECTORY = "directory"
    EMPTY_DIRECTORY = "empty_directory"
    TEXT_FILE = "text_file"
    COPIED_FILE = "copied_file"
    FILTERED_DIRECTORY = "filtered_directory"


class EntryKind(Enum):
    """Kind of a concrete output entry produced by the render planner."""

    DIRECTORY = "directory"
    FILE = "file"

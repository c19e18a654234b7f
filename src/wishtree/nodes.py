"""Declarative tree nodes describing a desired directory structure.

A tree is assembled from the builder functions at the bottom of this module and is
pure data: building it never touches the filesystem. Copied files and filtered
directories only remember source paths, which are read when the tree is rendered.

Example:
    >>> tree = directory({
    ...     "dist": directory({
    ...         "empty": empty_directory(),
    ...         "readme.txt": text("hello"),
    ...     }),
    ... })
    >>> [name for name, _ in tree.entries]
    ['dist']
    >>> tree["dist"]["readme.txt"].content
    b'hello'
"""

from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

from wishtree.exceptions import InvalidEntryNameError
from wishtree.include_rules.glob_rules import GlobInclusionRules
from wishtree.types import NodeKind, PathType

_FORBIDDEN_NAMES = ("", ".", "..")


def validate_entry_name(name: str) -> None:
    """Check that a directory entry name denotes exactly one path segment.

    Raises:
        InvalidEntryNameError: If the name is empty, "." or "..", or contains "/" or "\\".
        TypeError: If the name is not a string.
    """
    if not isinstance(name, str):
        raise TypeError(f"Entry names must be strings, got {type(name).__name__}")
    if name in _FORBIDDEN_NAMES or "/" in name or "\\" in name:
        raise InvalidEntryNameError(name)


class TreeNode:
    """Base class of all tree nodes.

    Subclasses set the class attribute ``kind``, which the render engine dispatches on.
    Nodes are immutable once built and compare equal by value.
    """

    kind: NodeKind

    def _key(self) -> Tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.kind is other.kind and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self.kind, self._key()))


EntriesType = Union[Mapping[str, TreeNode], Iterable[Tuple[str, TreeNode]]]


class Directory(TreeNode):
    """A directory with explicitly declared entries, kept in insertion order.

    Entries can be given as a mapping or as an iterable of (name, node) pairs. Names
    are validated here; uniqueness of the final output paths is checked when the tree
    is planned for rendering, so that the error names the full output path.

    Attributes:
        entries (Tuple[Tuple[str, TreeNode], ...]): The (name, node) pairs in order.
    """

    kind = NodeKind.DIRECTORY

    def __init__(self, entries: Optional[EntriesType] = None) -> None:
        if entries is None:
            pairs: Iterable[Tuple[str, TreeNode]] = ()
        elif isinstance(entries, Mapping):
            pairs = entries.items()
        else:
            pairs = entries

        validated = []
        for name, node in pairs:
            validate_entry_name(name)
            if not isinstance(node, TreeNode):
                raise TypeError(f"Entry {name!r} must be a tree node, got {type(node).__name__}")
            validated.append((name, node))
        self._entries: Tuple[Tuple[str, TreeNode], ...] = tuple(validated)

    @property
    def entries(self) -> Tuple[Tuple[str, TreeNode], ...]:
        return self._entries

    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._entries)

    def __getitem__(self, name: str) -> TreeNode:
        for entry_name, node in self._entries:
            if entry_name == name:
                return node
        raise KeyError(name)

    def __iter__(self) -> Iterator[Tuple[str, TreeNode]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _key(self) -> Tuple[Any, ...]:
        return self._entries

    def __repr__(self) -> str:
        inner = ", ".join(f"{name!r}: {node!r}" for name, node in self._entries)
        return f"Directory({{{inner}}})"


class EmptyDirectory(Directory):
    """A directory declared without any entries."""

    kind = NodeKind.EMPTY_DIRECTORY

    def __init__(self) -> None:
        super().__init__(())

    def __repr__(self) -> str:
        return "EmptyDirectory()"


class TextFile(TreeNode):
    """A file whose content is given literally.

    Attributes:
        content (bytes): The file content. String input is encoded on construction.
    """

    kind = NodeKind.TEXT_FILE

    def __init__(self, content: Union[str, bytes], encoding: str = "utf-8") -> None:
        if isinstance(content, str):
            content = content.encode(encoding)
        elif not isinstance(content, (bytes, bytearray)):
            raise TypeError(f"Text content must be str or bytes, got {type(content).__name__}")
        self._content = bytes(content)

    @property
    def content(self) -> bytes:
        return self._content

    def _key(self) -> Tuple[Any, ...]:
        return (self._content,)

    def __repr__(self) -> str:
        preview = self._content if len(self._content) <= 32 else self._content[:29] + b"..."
        return f"TextFile({preview!r})"


class CopiedFile(TreeNode):
    """A file copied byte for byte from an existing path when the tree is rendered.

    When the path is a directory, the whole directory is copied: every subdirectory,
    empty ones included, and every file below it, at the same relative locations.

    Attributes:
        source_path (Path): Location of the file or directory on the invoking filesystem.
    """

    kind = NodeKind.COPIED_FILE

    def __init__(self, source_path: PathType) -> None:
        self._source_path = Path(source_path)

    @property
    def source_path(self) -> Path:
        return self._source_path

    def _key(self) -> Tuple[Any, ...]:
        return (self._source_path,)

    def __repr__(self) -> str:
        return f"CopiedFile({str(self._source_path)!r})"


class FilteredDirectory(TreeNode):
    """A directory expanded at render time from the files of an existing directory.

    Every file below ``source_root`` whose root-relative path matches at least one
    include pattern is copied to the same relative location below this node. No
    patterns means no files. See GlobInclusionRules for the pattern syntax.

    Attributes:
        source_root (Path): Directory on the invoking filesystem to select files from.
        patterns (Tuple[str, ...]): Include patterns in order.
        rules (GlobInclusionRules): The compiled patterns. Like the node, they cannot change.

    Example:
        >>> node = filtered("docs").include("**/*.md", "**/*.png")
        >>> node.patterns
        ('**/*.md', '**/*.png')
    """

    kind = NodeKind.FILTERED_DIRECTORY

    def __init__(self, source_root: PathType, patterns: Iterable[str] = ()) -> None:
        self._source_root = Path(source_root)
        self._rules = GlobInclusionRules(patterns)

    @property
    def source_root(self) -> Path:
        return self._source_root

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._rules.patterns

    @property
    def rules(self) -> GlobInclusionRules:
        return self._rules

    def include(self, *patterns: str) -> "FilteredDirectory":
        """Return a new filtered directory with the given patterns appended."""
        return FilteredDirectory(self._source_root, self.patterns + patterns)

    def _key(self) -> Tuple[Any, ...]:
        return (self._source_root, self.patterns)

    def __repr__(self) -> str:
        return f"FilteredDirectory({str(self._source_root)!r}, {list(self.patterns)!r})"


def directory(entries: Optional[EntriesType] = None, /, **named: TreeNode) -> Directory:
    """Build a directory from a mapping or (name, node) pairs, plus keyword entries.

    Keyword arguments are appended after the positional entries and are convenient
    for names that are valid Python identifiers. Called without entries, this returns
    an EmptyDirectory.

    Example:
        >>> directory(notes=text("n"), src=empty_directory()).names()
        ('notes', 'src')
        >>> directory()
        EmptyDirectory()
    """
    pairs = []
    if entries is not None:
        pairs.extend(entries.items() if isinstance(entries, Mapping) else entries)
    pairs.extend(named.items())
    if not pairs:
        return EmptyDirectory()
    return Directory(pairs)


def empty_directory() -> EmptyDirectory:
    """Build a directory without entries."""
    return EmptyDirectory()


def text(content: Union[str, bytes], encoding: str = "utf-8") -> TextFile:
    """Build a file with the given literal content."""
    return TextFile(content, encoding)


def source_file(path: PathType) -> CopiedFile:
    """Build a file copied from ``path`` at render time."""
    return CopiedFile(path)


def filtered(path: PathType, include: Iterable[str] = ()) -> FilteredDirectory:
    """Build a directory holding the files below ``path`` that match ``include``."""
    return FilteredDirectory(path, include)


def source_dir(path: PathType) -> FilteredDirectory:
    """Start a filtered directory without patterns, to be followed by ``.include(...)``."""
    return FilteredDirectory(path)

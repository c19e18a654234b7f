"""Render engine turning a declared tree into sink calls.

Rendering happens in two phases. Planning walks the tree depth-first in pre-order,
expands filtered and copied directories by listing their sources, and checks that no
two entries claim the same output path. Execution then feeds the planned entries to a
sink, reading copied files as it goes. Because planning finishes before the sink is
opened, a tree with conflicting paths or unlistable sources never produces any output.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional

from wishtree.exceptions import DuplicatePathError, RenderError, SinkError, SourceUnavailableError, WishTreeError
from wishtree.nodes import CopiedFile, Directory, FilteredDirectory, TextFile, TreeNode
from wishtree.render.options import FailurePolicy, RenderOptions
from wishtree.sinks.base_sink import Sink
from wishtree.source_tree.source_tree import SourceTree
from wishtree.types import EntryKind, NodeKind

logger = logging.getLogger(__name__)


class PlannedEntry(NamedTuple):
    """One concrete output entry.

    Attributes:
        kind: Whether the entry is a directory or a file.
        path: Relative output path, "/" separated.
        content: Literal content for text files, None otherwise.
        source_path: File to copy the content from, None for literal content and directories.
    """

    kind: EntryKind
    path: str
    content: Optional[bytes] = None
    source_path: Optional[Path] = None


def _join(prefix: str, name: str) -> str:
    return f"{prefix}/{name}" if prefix else name


class RenderPlanner:
    """Resolves a tree into the ordered list of entries a sink will receive.

    Directory entries come in insertion order. Files found below a filtered directory
    come sorted by their path relative to the source root, without directory entries
    of their own, so a filtered directory without matches contributes nothing. A copied
    file whose source is a directory becomes a directory entry followed by every
    directory and file below the source, in sorted pre-order.

    A planner is used for a single tree; create a new one per render.

    Attributes:
        follow_symlinks (bool): Whether listed source directories follow symbolic links.
    """

    def __init__(self, follow_symlinks: bool = False) -> None:
        self.follow_symlinks = follow_symlinks
        self._claimed: Dict[str, EntryKind] = {}
        self._entries: List[PlannedEntry] = []

    def plan(self, tree: TreeNode) -> List[PlannedEntry]:
        """Plan the given root node.

        Args:
            tree: Root of the tree. Must be a directory, empty directory or filtered
                directory; it stands for the output root itself and gets no entry.

        Returns:
            The planned entries in render order.

        Raises:
            RenderError: If the root is a file node.
            DuplicatePathError: If two entries resolve to the same output path.
            SourceUnavailableError: If the source of a filtered directory or of a copied
                directory cannot be listed.
        """
        if not isinstance(tree, (Directory, FilteredDirectory)):
            raise RenderError(
                f"The root of a tree must be a directory, got {type(tree).__name__}", path="", operation="plan"
            )
        self._claimed.clear()
        self._entries = []
        self._visit(tree, "")
        return self._entries

    def _claim(self, path: str, kind: EntryKind) -> None:
        if path in self._claimed:
            raise DuplicatePathError(path)
        parts = path.split("/")
        for i in range(1, len(parts)):
            ancestor = "/".join(parts[:i])
            if self._claimed.get(ancestor) is EntryKind.FILE:
                raise DuplicatePathError(ancestor, "used as both a file and a directory")
        self._claimed[path] = kind

    def _visit(self, node: TreeNode, path: str) -> None:
        kind = node.kind
        if kind is NodeKind.DIRECTORY or kind is NodeKind.EMPTY_DIRECTORY:
            assert isinstance(node, Directory)
            if path:
                self._claim(path, EntryKind.DIRECTORY)
                self._entries.append(PlannedEntry(EntryKind.DIRECTORY, path))
            for name, child in node.entries:
                self._visit(child, _join(path, name))
        elif kind is NodeKind.TEXT_FILE:
            assert isinstance(node, TextFile)
            self._claim(path, EntryKind.FILE)
            self._entries.append(PlannedEntry(EntryKind.FILE, path, content=node.content))
        elif kind is NodeKind.COPIED_FILE:
            assert isinstance(node, CopiedFile)
            if node.source_path.is_dir():
                self._expand_copied_directory(node, path)
            else:
                self._claim(path, EntryKind.FILE)
                self._entries.append(PlannedEntry(EntryKind.FILE, path, source_path=node.source_path))
        elif kind is NodeKind.FILTERED_DIRECTORY:
            assert isinstance(node, FilteredDirectory)
            self._expand_filtered(node, path)
        else:
            raise RenderError(f"Unsupported node kind: {kind}", path=path, operation="plan")

    def _expand_filtered(self, node: FilteredDirectory, path: str) -> None:
        if path:
            # Claimed so that a sibling with the same name is caught even without matches
            self._claim(path, EntryKind.DIRECTORY)

        source_tree = SourceTree(node.source_root, node.rules, follow_symlinks=self.follow_symlinks)
        try:
            files = list(source_tree.iterate_files())
        except OSError as e:
            raise SourceUnavailableError(path or ".", str(node.source_root), e, operation="list") from e

        logger.debug("Filtered directory %s selected %d file(s) from %s", path or ".", len(files), node.source_root)
        for source_path, relative_path in files:
            entry_path = _join(path, relative_path)
            self._claim(entry_path, EntryKind.FILE)
            self._entries.append(PlannedEntry(EntryKind.FILE, entry_path, source_path=Path(source_path)))

    def _expand_copied_directory(self, node: CopiedFile, path: str) -> None:
        self._claim(path, EntryKind.DIRECTORY)
        self._entries.append(PlannedEntry(EntryKind.DIRECTORY, path))

        source_tree = SourceTree(node.source_path, follow_symlinks=self.follow_symlinks)
        try:
            found = list(source_tree.iterate_entries())
        except OSError as e:
            raise SourceUnavailableError(path, str(node.source_path), e, operation="list") from e

        logger.debug("Copying directory %s with %d entries to %s", node.source_path, len(found), path)
        for source_path, relative_path, is_dir in found:
            entry_path = _join(path, relative_path)
            if is_dir:
                self._claim(entry_path, EntryKind.DIRECTORY)
                self._entries.append(PlannedEntry(EntryKind.DIRECTORY, entry_path))
            else:
                self._claim(entry_path, EntryKind.FILE)
                self._entries.append(PlannedEntry(EntryKind.FILE, entry_path, source_path=Path(source_path)))


def plan(tree: TreeNode, options: Optional[RenderOptions] = None) -> List[PlannedEntry]:
    """Resolve a tree into its planned entries without writing anything.

    Example:
        >>> from wishtree.nodes import directory, empty_directory, text
        >>> tree = directory({"dist": directory({"empty": empty_directory(), "readme.txt": text("hello")})})
        >>> [(entry.kind.value, entry.path) for entry in plan(tree)]
        [('directory', 'dist'), ('directory', 'dist/empty'), ('file', 'dist/readme.txt')]
    """
    options = options or RenderOptions()
    return RenderPlanner(follow_symlinks=options.follow_symlinks).plan(tree)


def _read_content(entry: PlannedEntry) -> bytes:
    if entry.content is not None:
        return entry.content
    assert entry.source_path is not None
    try:
        return entry.source_path.read_bytes()
    except OSError as e:
        raise SourceUnavailableError(entry.path, str(entry.source_path), e) from e


def _call_sink(operation: str, path: Optional[str], method: Callable[..., None], *args: object) -> None:
    """Invoke a sink method, wrapping unexpected failures with the path being written."""
    try:
        method(*args)
    except WishTreeError:
        raise
    except Exception as e:
        raise SinkError(path, operation, e) from e


def _execute(entries: List[PlannedEntry], sink: Sink) -> None:
    open_dirs: List[str] = []
    for entry in entries:
        while open_dirs and not entry.path.startswith(open_dirs[-1] + "/"):
            closed = open_dirs.pop()
            _call_sink("leave directory", closed, sink.leave_directory, closed)

        if entry.kind is EntryKind.DIRECTORY:
            logger.debug("Creating directory %s", entry.path)
            _call_sink("create directory", entry.path, sink.enter_directory, entry.path)
            open_dirs.append(entry.path)
        else:
            content = _read_content(entry)
            logger.debug("Writing %s (%d bytes)", entry.path, len(content))
            _call_sink("write", entry.path, sink.write_file, entry.path, content)

    while open_dirs:
        closed = open_dirs.pop()
        _call_sink("leave directory", closed, sink.leave_directory, closed)


def _apply_failure_policy(sink: Sink, policy: FailurePolicy) -> None:
    if policy is FailurePolicy.LEAVE_PARTIAL:
        sink.finish()
    else:
        sink.abort()
        if policy is FailurePolicy.CLEAN_UP:
            sink.discard()


def render(tree: TreeNode, sink: Sink, options: Optional[RenderOptions] = None) -> None:
    """Render a tree into a sink and finalize it.

    The sink is opened with begin(), receives one call per planned entry, and is
    finalized with finish(). If anything fails after the sink was opened, the sink is
    released according to ``options.on_failure`` before the error propagates, so no
    handle is leaked.

    Args:
        tree: Root directory node of the tree to render.
        sink: The sink to write to. It is used for this render only.
        options: Render options. Defaults to RenderOptions().

    Raises:
        RenderError: If the root is not a directory.
        DuplicatePathError: If two entries resolve to the same output path. Raised
            before the sink is opened.
        SourceUnavailableError: If a copied file or filtered directory source cannot
            be read.
        SinkError: If the sink fails to write or finalize an entry.

    Example:
        >>> from wishtree.nodes import directory, text
        >>> from wishtree.sinks.memory_sink import MemorySink
        >>> sink = MemorySink()
        >>> render(directory({"notes.txt": text("Some notes")}), sink)
        >>> sink.files, sink.finished
        ({'notes.txt': b'Some notes'}, True)
    """
    options = options or RenderOptions()
    entries = plan(tree, options)
    logger.info("Rendering %d entries to %s", len(entries), type(sink).__name__)

    try:
        _call_sink("open", None, sink.begin)
        _execute(entries, sink)
    except BaseException as e:
        failed_path = getattr(e, "path", None)
        logger.warning(
            "Render failed at %s; applying %s policy", failed_path or "output", options.on_failure.value
        )
        try:
            _apply_failure_policy(sink, options.on_failure)
        except Exception:
            # The original error is what the caller needs to see
            logger.exception("Failed to release %s after render error", type(sink).__name__)
        raise

    _call_sink("finalize", None, sink.finish)
    logger.info("Rendered %d entries to %s", len(entries), type(sink).__name__)

"""Tree-style text listing of what a render would produce.

Used for dry runs: the tree is planned (which lists filtered source directories) but
nothing is written.
"""

from typing import Iterable, Iterator, Optional

from wishtree.nodes import TreeNode
from wishtree.render.engine import PlannedEntry, plan
from wishtree.render.options import RenderOptions
from wishtree.source_tree.path_node import PathNode
from wishtree.types import EntryKind


def build_entry_tree(entries: Iterable[PlannedEntry], root_name: str = ".") -> PathNode:
    """Arrange planned entries into a PathNode tree.

    Directories implied by file paths (files selected from filtered directories) are
    added as directory nodes. Children keep the order in which they were planned.
    """
    root = PathNode(root_name, is_dir=True)
    for entry in entries:
        parent = root
        *parents, name = entry.path.split("/")
        for segment in parents:
            existing = parent.child(segment)
            parent = existing if existing is not None else PathNode(segment, parent=parent, is_dir=True)
        if parent.child(name) is None:
            source = str(entry.source_path) if entry.source_path is not None else None
            PathNode(name, parent=parent, is_dir=entry.kind is EntryKind.DIRECTORY, source_path=source)
    return root


def stream_tree_representation(root: PathNode, show_sources: bool = False) -> Iterator[str]:
    """Generate a tree listing one line at a time, in the style of the Unix tree command.

    Args:
        root: Root of the tree to list.
        show_sources: Append the source file of copied entries as "<- path".

    Yields:
        Lines of the listing, without trailing newlines.

    Example:
        >>> from wishtree.nodes import directory, empty_directory, text
        >>> tree = directory({"dist": directory({"empty": empty_directory(), "readme.txt": text("hello")})})
        >>> for line in stream_tree_representation(build_entry_tree(plan(tree), "out")):
        ...     print(line)
        out/
        └── dist/
            ├── empty/
            └── readme.txt
    """

    def write_node(node: PathNode, prefix: str, is_last: bool) -> Iterator[str]:
        connector = "└── " if is_last else "├── "
        suffix = "/" if node.is_dir else ""
        if show_sources and node.source_path:
            suffix += f" <- {node.source_path}"
        yield f"{prefix}{connector}{node.name}{suffix}"

        children = node.children
        for i, child in enumerate(children):
            new_prefix = prefix + ("    " if is_last else "│   ")
            yield from write_node(child, new_prefix, i == len(children) - 1)

    yield f"{root.name}/"
    children = root.children
    for i, child in enumerate(children):
        yield from write_node(child, "", i == len(children) - 1)


def get_tree_representation(
    tree: TreeNode,
    root_name: str = ".",
    options: Optional[RenderOptions] = None,
    show_sources: bool = False,
) -> str:
    """Plan a tree and return its complete listing as a string.

    Raises:
        RenderError: If the tree cannot be planned (see wishtree.render.engine.plan).
    """
    entries = plan(tree, options)
    return "\n".join(stream_tree_representation(build_entry_tree(entries, root_name), show_sources))

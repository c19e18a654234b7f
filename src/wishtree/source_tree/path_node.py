"""Node representation for listed source paths and planned output entries."""

from typing import Any, Optional

from anytree import Node


class PathNode(Node):  # type: ignore
    """Node class representing a file or directory at some relative path.

    Extends anytree.Node with a directory flag and the absolute location of the file on
    the invoking filesystem, when there is one. The same node type is used to list a
    filtered directory's source root and to lay out a render plan for previews.

    Attributes:
        name (str): The basename of the file or directory.
        parent (Optional[PathNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory.
        source_path (Optional[str]): Absolute path of the backing file, if any.

    Example:
        >>> root = PathNode("root", is_dir=True)
        >>> child = PathNode("file.txt", parent=root)
        >>> child.relative_path
        'file.txt'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["PathNode"] = None,
        is_dir: bool = False,
        source_path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.source_path = source_path

    @property
    def relative_path(self) -> str:
        """Forward-slash path from (but excluding) the root node."""
        return "/".join(node.name for node in self.path[1:])

    def child(self, name: str) -> Optional["PathNode"]:
        """Return the direct child with the given name, if present."""
        for node in self.children:
            if node.name == name:
                return node  # type: ignore[no-any-return]
        return None

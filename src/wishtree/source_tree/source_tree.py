"""Sorted listing of an existing source directory with optional inclusion rules.

This module provides the SourceTree class, which walks a directory on the invoking
filesystem, builds a tree of PathNode objects and yields the files that the inclusion
rules select (and, for whole-directory copies, every directory), in a deterministic
order.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from anytree import PreOrderIter

from wishtree.include_rules.base_rules import BaseInclusionRules
from wishtree.source_tree.file_identifier import FileIdentifier
from wishtree.source_tree.path_node import PathNode
from wishtree.types import PathType

logger = logging.getLogger(__name__)


class SourceTree:
    """A tree representation of an existing directory used as a render source.

    The tree is built lazily on first access and cached for the lifetime of the
    object. Entries are reported with paths relative to the root, using forward
    slashes, in sorted order so that identical directory contents always expand to
    identical output.

    Symbolic Link Behavior:
        By default symbolic links are skipped entirely. With follow_symlinks=True, links
        are resolved and their targets listed as if they were regular entries; a link
        that leads back into a directory already being walked is skipped to avoid
        infinite recursion.

    Attributes:
        root_path (Path): The directory being listed.
        inclusion_rules (Optional[BaseInclusionRules]): Rules selecting files. None
            selects every file.
        follow_symlinks (bool): Whether to follow symbolic links.

    Example:
        >>> tree = SourceTree("docs")  # doctest: +SKIP
        >>> [rel for _, rel in tree.iterate_files()]  # doctest: +SKIP
        ['guide.md', 'img/logo.png']
    """

    def __init__(
        self,
        root_path: PathType,
        inclusion_rules: Optional[BaseInclusionRules] = None,
        follow_symlinks: bool = False,
    ) -> None:
        self.root_path = Path(root_path)
        self.inclusion_rules = inclusion_rules
        self.follow_symlinks = follow_symlinks
        self._tree: Optional[PathNode] = None

    def get_tree(self) -> PathNode:
        """Get the root node of the listed tree, building it if needed.

        Returns:
            The root PathNode. Its children are sorted by name.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If a directory inside the tree cannot be listed.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise FileNotFoundError(f"Source directory does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {self.root_path}")

        root = PathNode(self.root_path.name or str(self.root_path), is_dir=True, source_path=str(self.root_path))
        visited: Set[FileIdentifier] = set()
        self._add_children(root, self.root_path, visited)
        self._tree = root

    def _add_children(self, node: PathNode, path: Path, visited: Set[FileIdentifier]) -> None:
        """Recursively add the entries of the directory at path below node."""
        file_id = FileIdentifier.from_stat(path.stat())
        visited.add(file_id)

        try:
            names = sorted(os.listdir(path))
        except PermissionError as e:
            raise PermissionError(f"Access denied to {path}: {e}") from e

        for name in names:
            child_path = path / name
            if child_path.is_symlink():
                if not self.follow_symlinks:
                    logger.debug("Skipping symbolic link %s", child_path)
                    continue
                if not child_path.exists():
                    logger.warning("Skipping broken symbolic link %s", child_path)
                    continue

            if child_path.is_dir():
                if FileIdentifier.from_stat(child_path.stat()) in visited:
                    logger.warning("Skipping symbolic link loop at %s", child_path)
                    continue
                child = PathNode(name, parent=node, is_dir=True, source_path=str(child_path))
                self._add_children(child, child_path, visited)
            elif child_path.is_file():
                PathNode(name, parent=node, is_dir=False, source_path=str(child_path))
            else:
                logger.debug("Skipping special file %s", child_path)

        # Allow the same directory to be reached again through an unrelated branch
        visited.discard(file_id)

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over the selected files in the tree.

        Yields:
            Pairs of (absolute_path, relative_path), sorted by relative path.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If a directory inside the tree cannot be listed.

        Example:
            >>> from wishtree.include_rules.glob_rules import GlobInclusionRules
            >>> tree = SourceTree("doc", GlobInclusionRules(["**/*.md"]))  # doctest: +SKIP
            >>> [rel for _, rel in tree.iterate_files()]  # doctest: +SKIP
            ['a.md', 'sub/c.md']
        """
        root = self.get_tree()
        selected: List[Tuple[str, str]] = []
        for node in PreOrderIter(root, filter_=lambda n: not n.is_dir):
            relative_path = node.relative_path
            if self.inclusion_rules is None or self.inclusion_rules.include(relative_path):
                selected.append((node.source_path, relative_path))
        selected.sort(key=lambda item: item[1])
        yield from selected

    def iterate_entries(self) -> Iterator[Tuple[str, str, bool]]:
        """Iterate over every directory and selected file below the root.

        Entries come depth-first in pre-order with siblings sorted by name, so a
        directory always precedes its contents. Empty directories are included.
        Inclusion rules, if any, apply to files only.

        Yields:
            Triples of (absolute_path, relative_path, is_dir). The root itself is
            not yielded.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If a directory inside the tree cannot be listed.
        """
        root = self.get_tree()
        for node in PreOrderIter(root):
            if node is root:
                continue
            relative_path = node.relative_path
            if node.is_dir or self.inclusion_rules is None or self.inclusion_rules.include(relative_path):
                yield node.source_path, relative_path, node.is_dir

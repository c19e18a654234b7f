import os

from wishtree.source_tree.file_identifier import FileIdentifier
from wishtree.source_tree.path_node import PathNode


def test_path_node_defaults():
    node = PathNode("file.txt")
    assert node.name == "file.txt"
    assert node.is_dir is False
    assert node.source_path is None
    assert node.parent is None


def test_relative_path_excludes_root():
    root = PathNode("root", is_dir=True)
    doc = PathNode("doc", parent=root, is_dir=True)
    sub = PathNode("sub", parent=doc, is_dir=True)
    leaf = PathNode("c.md", parent=sub, source_path="/src/doc/sub/c.md")

    assert root.relative_path == ""
    assert doc.relative_path == "doc"
    assert leaf.relative_path == "doc/sub/c.md"
    assert leaf.source_path == "/src/doc/sub/c.md"


def test_child_lookup():
    root = PathNode("root", is_dir=True)
    first = PathNode("a", parent=root)
    second = PathNode("b", parent=root)

    assert root.child("a") is first
    assert root.child("b") is second
    assert root.child("c") is None


def test_file_identifier_equality():
    assert FileIdentifier(1, 2) == FileIdentifier(1, 2)
    assert FileIdentifier(1, 2) != FileIdentifier(1, 3)
    assert FileIdentifier(1, 2) != (1, 2)
    assert len({FileIdentifier(1, 2), FileIdentifier(1, 2), FileIdentifier(2, 2)}) == 2
    assert repr(FileIdentifier(1, 2)) == "FileIdentifier(device_id=1, inode_number=2)"


def test_file_identifier_from_stat(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.touch()
    stat_info = os.stat(file_path)

    identifier = FileIdentifier.from_stat(stat_info)
    assert identifier.device_id == stat_info.st_dev
    assert identifier.inode_number == stat_info.st_ino
    assert identifier == FileIdentifier.from_stat(file_path.stat())

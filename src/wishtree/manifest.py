"""Loading trees from JSON manifests.

A manifest describes one node per JSON object, tagged by exactly one key:

- ``{"dir": {"name": <node>, ...}}`` a directory (``{"dir": {}}`` is an empty one)
- ``{"text": "content"}`` a file with literal content
- ``{"copy": "path/to/file"}`` a file, or a whole directory, copied at render time
- ``{"filter": "path/to/dir", "include": ["**/*.md"]}`` a filtered directory

The root must be a directory or filtered directory. Relative source paths are
resolved against a base directory, which for manifest files is the directory the
manifest lives in.

Example:
    >>> tree = parse_manifest({"dir": {"notes.txt": {"text": "Some notes"}, "empty": {"dir": {}}}})
    >>> tree.names()
    ('notes.txt', 'empty')
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from wishtree.exceptions import ManifestError, WishTreeError
from wishtree.nodes import CopiedFile, Directory, EmptyDirectory, FilteredDirectory, TextFile, TreeNode
from wishtree.types import PathType

NODE_KEYS = ("dir", "text", "copy", "filter")


def _expect_string(value: Any, key: str, location: str) -> str:
    if not isinstance(value, str):
        raise ManifestError(location or ".", f"expected a string for {key!r}, got {type(value).__name__}")
    return value


def _parse_node(value: Any, location: str, base_dir: Path) -> TreeNode:
    if not isinstance(value, dict):
        raise ManifestError(location or ".", f"expected an object, got {type(value).__name__}")

    keys = [key for key in NODE_KEYS if key in value]
    if len(keys) != 1:
        raise ManifestError(location or ".", f"expected exactly one of {', '.join(NODE_KEYS)}, got {sorted(value)}")
    key = keys[0]

    allowed = {key, "include"} if key == "filter" else {key}
    unknown = sorted(set(value) - allowed)
    if unknown:
        raise ManifestError(location or ".", f"unknown key(s) for a {key!r} node: {', '.join(unknown)}")

    payload = value[key]
    try:
        if key == "dir":
            if not isinstance(payload, dict):
                raise ManifestError(location or ".", f"expected an object for 'dir', got {type(payload).__name__}")
            if not payload:
                return EmptyDirectory()
            entries: List[Tuple[str, TreeNode]] = []
            for name, child in payload.items():
                child_location = f"{location}/{name}" if location else name
                entries.append((name, _parse_node(child, child_location, base_dir)))
            return Directory(entries)
        if key == "text":
            return TextFile(_expect_string(payload, key, location))
        if key == "copy":
            return CopiedFile(base_dir / _expect_string(payload, key, location))

        include = value.get("include", [])
        if not isinstance(include, list):
            raise ManifestError(location or ".", f"expected a list for 'include', got {type(include).__name__}")
        patterns = [_expect_string(pattern, "include", location) for pattern in include]
        return FilteredDirectory(base_dir / _expect_string(payload, key, location), patterns)
    except ManifestError:
        raise
    except WishTreeError as e:
        raise ManifestError(location or ".", str(e)) from e


def parse_manifest(data: Dict[str, Any], base_dir: PathType = ".") -> TreeNode:
    """Build a tree from an already decoded manifest.

    Args:
        data: The decoded JSON document.
        base_dir: Directory that relative source paths are resolved against.

    Returns:
        The root node.

    Raises:
        ManifestError: If the document does not describe a valid tree.
    """
    root = _parse_node(data, "", Path(base_dir))
    if not isinstance(root, (Directory, FilteredDirectory)):
        raise ManifestError(".", "the root must be a 'dir' or 'filter' node")
    return root


def load_manifest(path: PathType) -> TreeNode:
    """Read a manifest file and build its tree.

    Relative source paths are resolved against the manifest's own directory.

    Raises:
        FileNotFoundError: If the manifest does not exist.
        ManifestError: If the file is not valid JSON or does not describe a valid tree.
    """
    manifest_path = Path(path)
    with open(manifest_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(str(manifest_path), f"invalid JSON: {e}") from e
    return parse_manifest(data, manifest_path.parent)

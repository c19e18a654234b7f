"""Declarative directory trees rendered to a directory, a zip archive or a tar.gz archive.

A tree is built from immutable nodes (directories, empty directories, text files,
copied files and glob-filtered source directories) and materialized through a single
render engine, so every output format receives the same entries in the same order.

Example:
    >>> from wishtree import directory, empty_directory, text, render_to_zip
    >>> tree = directory({"dist": directory({"empty": empty_directory(), "readme.txt": text("hello")})})
    >>> render_to_zip(tree, "dist.zip")  # doctest: +SKIP
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("wishtree")
except PackageNotFoundError:
    __version__ = "unknown"

from wishtree.exceptions import (  # noqa: E402
    DuplicatePathError,
    InvalidEntryNameError,
    InvalidPatternError,
    ManifestError,
    RenderError,
    SinkError,
    SourceUnavailableError,
    WishTreeError,
)
from wishtree.manifest import load_manifest, parse_manifest  # noqa: E402
from wishtree.nodes import (  # noqa: E402
    CopiedFile,
    Directory,
    EmptyDirectory,
    FilteredDirectory,
    TextFile,
    TreeNode,
    directory,
    empty_directory,
    filtered,
    source_dir,
    source_file,
    text,
)
from wishtree.render import FailurePolicy, RenderOptions, plan, render  # noqa: E402
from wishtree.sinks import FilesystemSink, MemorySink, Sink, SinkKind, TarGzSink, ZipSink  # noqa: E402
from wishtree.wishtree import render_to, render_to_fs, render_to_tar_gz, render_to_zip  # noqa: E402

__all__ = [
    "CopiedFile",
    "Directory",
    "DuplicatePathError",
    "EmptyDirectory",
    "FailurePolicy",
    "FilesystemSink",
    "FilteredDirectory",
    "InvalidEntryNameError",
    "InvalidPatternError",
    "ManifestError",
    "MemorySink",
    "RenderError",
    "RenderOptions",
    "Sink",
    "SinkError",
    "SinkKind",
    "SourceUnavailableError",
    "TarGzSink",
    "TextFile",
    "TreeNode",
    "WishTreeError",
    "ZipSink",
    "__version__",
    "directory",
    "empty_directory",
    "filtered",
    "load_manifest",
    "parse_manifest",
    "plan",
    "render",
    "render_to",
    "render_to_fs",
    "render_to_tar_gz",
    "render_to_zip",
    "source_dir",
    "source_file",
    "text",
]

"""Render entry points, one per output kind.

Each entry point creates the matching sink for a destination and hands it to the
render engine, which owns the sink for the duration of the render and releases it
even when rendering fails.
"""

import logging
from typing import Optional, Union

from wishtree.nodes import TreeNode
from wishtree.render.engine import render
from wishtree.render.options import RenderOptions
from wishtree.sinks.base_sink import Sink
from wishtree.sinks.fs_sink import FilesystemSink
from wishtree.sinks.sink_kind import SinkKind
from wishtree.sinks.tar_sink import TarGzSink
from wishtree.sinks.zip_sink import ZipSink
from wishtree.types import PathType

logger = logging.getLogger(__name__)


def create_sink(kind: Union[str, SinkKind], destination: PathType, options: Optional[RenderOptions] = None) -> Sink:
    """Create the sink for an output kind and destination.

    Archives always get a timestamp: the fixed one from the options, SOURCE_DATE_EPOCH,
    or the current time. The filesystem sink only stamps entries when the timestamp is
    reproducible and otherwise keeps the times the filesystem assigns.

    Args:
        kind: Output kind ("fs", "zip" or "tar.gz").
        destination: Target directory or archive file.
        options: Render options. Defaults to RenderOptions().

    Returns:
        A new, unopened sink.
    """
    options = options or RenderOptions()
    kind = SinkKind.parse(kind)
    if kind is SinkKind.FS:
        timestamp = options.resolve_timestamp() if options.is_reproducible else None
        return FilesystemSink(destination, timestamp=timestamp)
    if kind is SinkKind.ZIP:
        return ZipSink(destination, options.resolve_timestamp(), compress=options.compress)
    return TarGzSink(destination, options.resolve_timestamp())


def render_to_fs(tree: TreeNode, target_dir: PathType, options: Optional[RenderOptions] = None) -> None:
    """Create the tree's directories and files below ``target_dir``.

    Example:
        >>> from wishtree.nodes import directory, empty_directory, text
        >>> tree = directory({"dist": directory({"empty": empty_directory(), "readme.txt": text("hello")})})
        >>> render_to_fs(tree, "out")  # doctest: +SKIP
    """
    render_to(tree, target_dir, SinkKind.FS, options)


def render_to_zip(tree: TreeNode, archive_path: PathType, options: Optional[RenderOptions] = None) -> None:
    """Write the tree into a zip archive at ``archive_path``."""
    render_to(tree, archive_path, SinkKind.ZIP, options)


def render_to_tar_gz(tree: TreeNode, archive_path: PathType, options: Optional[RenderOptions] = None) -> None:
    """Write the tree into a gzip-compressed tar archive at ``archive_path``."""
    render_to(tree, archive_path, SinkKind.TAR_GZ, options)


def render_to(
    tree: TreeNode,
    destination: PathType,
    kind: Optional[Union[str, SinkKind]] = None,
    options: Optional[RenderOptions] = None,
) -> None:
    """Render the tree to a destination of the given kind.

    Args:
        tree: Root directory node.
        destination: Target directory or archive file.
        kind: Output kind. When None it is inferred from the destination's suffix
            (".zip", ".tar.gz" or ".tgz", anything else is a directory).
        options: Render options. Defaults to RenderOptions().

    Raises:
        RenderError: See wishtree.render.engine.render.
    """
    options = options or RenderOptions()
    resolved_kind = SinkKind.from_destination(destination) if kind is None else SinkKind.parse(kind)
    logger.info("Rendering tree to %s (%s)", destination, resolved_kind.value)
    render(tree, create_sink(resolved_kind, destination, options), options)

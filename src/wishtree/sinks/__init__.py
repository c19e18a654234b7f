"""Render targets: the sink interface and its filesystem and archive implementations."""

from .base_sink import Sink
from .fs_sink import FilesystemSink
from .memory_sink import MemorySink
from .sink_kind import SinkKind
from .tar_sink import TarGzSink
from .zip_sink import ZipSink

__all__ = [
    "FilesystemSink",
    "MemorySink",
    "Sink",
    "SinkKind",
    "TarGzSink",
    "ZipSink",
]

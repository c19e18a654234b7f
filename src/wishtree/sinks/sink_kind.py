"""Output kinds and their inference from a destination path."""

from enum import Enum
from pathlib import Path
from typing import Union

from wishtree.types import PathType


class SinkKind(str, Enum):
    """Kind of render target.

    Values:
        FS: A directory on the local filesystem
        ZIP: A zip archive
        TAR_GZ: A gzip-compressed tar archive
    """

    FS = "fs"
    ZIP = "zip"
    TAR_GZ = "tar.gz"

    @classmethod
    def parse(cls, value: Union[str, "SinkKind"]) -> "SinkKind":
        """Accept an enum member or one of "fs", "zip", "tar.gz" (also "tgz")."""
        if isinstance(value, SinkKind):
            return value
        normalized = value.lower()
        if normalized == "tgz":
            return cls.TAR_GZ
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported output kind: {value}. Must be one of: 'fs', 'zip', 'tar.gz'")

    @classmethod
    def from_destination(cls, destination: PathType) -> "SinkKind":
        """Infer the kind from a destination's suffix.

        Example:
            >>> SinkKind.from_destination("build/dist.tar.gz")
            <SinkKind.TAR_GZ: 'tar.gz'>
            >>> SinkKind.from_destination("build/dist.ZIP")
            <SinkKind.ZIP: 'zip'>
            >>> SinkKind.from_destination("build/dist")
            <SinkKind.FS: 'fs'>
        """
        name = Path(destination).name.lower()
        if name.endswith(".zip"):
            return cls.ZIP
        if name.endswith(".tar.gz") or name.endswith(".tgz"):
            return cls.TAR_GZ
        return cls.FS

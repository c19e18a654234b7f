"""Command-line argument parsing for wishtree.

This module defines the command-line interface for wishtree,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from wishtree import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with wishtree's options.
    """
    description = """
    wishtree: Materialize a declared directory tree as a directory, zip or tar.gz archive.

    The tree is described in a JSON manifest. Every node is an object with exactly one
    of these keys:

      {"dir": {"name": <node>, ...}}                   directory ({"dir": {}} is empty)
      {"text": "content"}                              file with literal content
      {"copy": "path/to/file"}                         file (or whole directory) copied from disk
      {"filter": "path/to/dir", "include": ["*.md"]}   files selected by glob patterns

    Relative source paths are resolved against the directory containing the manifest.
    Include patterns use gitignore-style globs: "*" stays within one path segment,
    "**" crosses segments, and an empty include list selects nothing. A file is
    selected when any pattern matches it; a leading "!" is part of the name.
    """

    epilog = """
    Examples:
      # Render into a directory
      wishtree layout.json -o build/dist

      # Render into archives; the format follows the destination suffix
      wishtree layout.json -o build/dist.zip
      wishtree layout.json -o build/dist.tar.gz

      # Reproducible archive with a pinned timestamp
      wishtree layout.json -o dist.tar.gz --timestamp 0

      # Remove partial output if anything fails
      wishtree layout.json -o dist.zip --on-failure clean-up

      # Show what would be written without writing anything
      wishtree layout.json --dry-run

      # Display version information and exit
      wishtree -V
    """

    parser = argparse.ArgumentParser(
        prog="wishtree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"wishtree {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "manifest",
        type=Path,
        help="JSON manifest describing the tree to render.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="DEST",
        help="Target directory or archive file. Required unless --dry-run is given.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["fs", "zip", "tar.gz"],
        help="Output format (default: inferred from DEST; .zip, .tar.gz and .tgz are archives).",
    )
    parser.add_argument(
        "--timestamp",
        type=int,
        metavar="EPOCH",
        help=(
            "Seconds since the epoch stamped on every entry, for reproducible output. "
            "Defaults to $SOURCE_DATE_EPOCH when set, otherwise the current time."
        ),
    )
    parser.add_argument(
        "--on-failure",
        choices=["abort", "leave-partial", "clean-up"],
        default="abort",
        help=(
            "What to do with partial output when rendering fails: stop and leave it as is, "
            "finalize what was written, or delete it (default: abort)."
        ),
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links inside filtered directories. By default they are skipped.",
    )
    parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Store zip entries without compression.",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print the entries that would be written, as a tree, without writing anything.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr; repeat for debug output.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if not args.dry_run and args.output is None:
        raise ValueError("-o/--output is required unless --dry-run is given")
    if args.timestamp is not None and args.timestamp < 0:
        raise ValueError("--timestamp must not be negative")

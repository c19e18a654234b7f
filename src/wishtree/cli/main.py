"""Command-line interface for wishtree.

This module provides the command-line interface for wishtree, which reads a JSON
manifest describing a directory tree and renders it into a directory, a zip archive
or a gzip-compressed tar archive.

Exit Codes:
    0: Successful completion
    1: Invalid manifest or render error
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Render a manifest into a zip archive
    $ wishtree layout.json -o dist.zip

    # Display version information
    $ wishtree --version
"""

import logging
import sys
from typing import List, Optional

from wishtree.cli.argparser import create_parser, validate_args
from wishtree.exceptions import WishTreeError
from wishtree.manifest import load_manifest
from wishtree.preview import get_tree_representation
from wishtree.render.options import RenderOptions
from wishtree.wishtree import render_to

logger = logging.getLogger("wishtree.cli")

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the number of -v flags."""
    level = LOG_LEVELS.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr, force=True)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the wishtree command-line interface.

    Args:
        argv: Arguments to parse instead of sys.argv[1:].

    Exit codes:
        0: Successful completion
        1: Invalid manifest or render error
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        validate_args(args)
        tree = load_manifest(args.manifest)
        options = RenderOptions(
            fixed_timestamp=args.timestamp,
            on_failure=args.on_failure,
            compress=not args.no_compress,
            follow_symlinks=args.follow_symlinks,
        )

        if args.dry_run:
            root_name = args.output.name if args.output is not None else "."
            print(get_tree_representation(tree, root_name, options, show_sources=True))
            return

        render_to(tree, args.output, args.format, options)
        logger.info("Wrote %s", args.output)

    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)
    except WishTreeError as e:
        logger.debug("Failed during %s of %s", e.operation, e.path or "output", exc_info=True)
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

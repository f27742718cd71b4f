"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Command-line interface for SQLAR (``sqlar``).

This module implements a small CLI on top of the SQLAR library. It only
depends on the Python standard library.

Supported commands (via ``python -m sqlar``):

- ``list`` (``l``)    : List entries in an archive
- ``create`` (``c``)  : Create a new archive from files and directories
- ``extract`` (``x``) : Extract all entries to a directory

Example usages:

    # List entries
    python -m sqlar list archive.sqlar

    # Create archive.sqlar from everything under ./data
    python -m sqlar create archive.sqlar data

    # Extract everything into ./archive (or a given directory)
    python -m sqlar extract archive.sqlar output
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .creator import create
from .errors import SqlarError, SqlarOpenError
from .extractor import extract
from .lister import format_listing, list_entries

logger = logging.getLogger(__name__)


def _print_error(message: str, exit_code: int = 1, suggestion: Optional[str] = None) -> None:
    """Print an error message to stderr and exit with the given code.

    Args:
        message: Error message to display.
        exit_code: Exit code to use.
        suggestion: Optional suggestion to help the user resolve the error.
    """
    sys.stderr.write(f"sqlar: {message}\n")
    if suggestion:
        sys.stderr.write(f"sqlar: Suggestion: {suggestion}\n")
    sys.exit(exit_code)


def _configure_logging(verbose: bool) -> None:
    """Warnings and errors always reach stderr; ``verbose`` adds per-entry messages."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _cmd_list(archive: Path) -> None:
    """Print a table with metadata for each entry."""
    for line in format_listing(list_entries(archive)):
        print(line)


def _cmd_create(archive: Path, sources: List[Path]) -> None:
    """Create *archive* from the given list of source paths."""
    logger.info("Creating new archive %s with files: %s", archive, [str(p) for p in sources])
    create(archive, sources)


def _cmd_extract(archive: Path, destination: Optional[Path], keep_going: bool = False) -> None:
    """Extract all entries in *archive* into *destination*."""
    count = extract(archive, destination, strict=not keep_going)
    logger.info("Extracted %d entries", count)


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="sqlar",
        description="SQLAR - SQLite Archive utility (library and CLI).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print informational messages for every entry in addition to warnings",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # list
    p_list = subparsers.add_parser("list", aliases=["l"], help="List contents of an archive")
    p_list.add_argument("archive", type=Path, help="Path to the archive file")
    p_list.set_defaults(command="list")

    # create
    p_create = subparsers.add_parser("create", aliases=["c"], help="Create a new archive")
    p_create.add_argument("archive", type=Path, help="Path of the archive to create")
    p_create.add_argument("path", type=Path, help="File or directory to include")
    p_create.add_argument("paths", type=Path, nargs="*", help="Additional files or directories to include")
    p_create.set_defaults(command="create")

    # extract
    p_extract = subparsers.add_parser("extract", aliases=["x"], help="Extract files from an archive")
    p_extract.add_argument("archive", type=Path, help="Path to the archive file")
    p_extract.add_argument(
        "destination",
        type=Path,
        nargs="?",
        default=None,
        help="Destination directory. Defaults to the archive file name without extension.",
    )
    p_extract.add_argument(
        "--keep-going",
        action="store_true",
        help="Log and skip entries that cannot be written instead of aborting",
    )
    p_extract.set_defaults(command="extract")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the SQLAR CLI.

    This function is invoked when running:

        python -m sqlar ...

    or, via the console script:

        sqlar ...
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    if not argv:
        parser.print_help()
        return

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "list":
            _cmd_list(args.archive)
        elif args.command == "create":
            _cmd_create(args.archive, [args.path, *args.paths])
        elif args.command == "extract":
            _cmd_extract(args.archive, args.destination, keep_going=args.keep_going)
        else:  # pragma: no cover - argparse enforces the choices
            _print_error(f"Unknown command: {args.command}", exit_code=2)
    except SqlarOpenError as e:
        _print_error(str(e), exit_code=1, suggestion="Check that the archive path is correct.")
    except SqlarError as e:
        _print_error(str(e), exit_code=1)
    except FileNotFoundError as e:
        _print_error(f"File not found: {e.filename}", exit_code=2)
    except PermissionError as e:
        _print_error(f"Permission denied: {e.filename}", exit_code=2)
    except KeyboardInterrupt:
        _print_error("Interrupted by user", exit_code=130)


if __name__ == "__main__":
    main()

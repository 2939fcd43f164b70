"""CLI entry point for inodekit — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys

from inodekit import InodekitError
from inodekit.filter import PatternFilter
from inodekit.fsinfo import describe
from inodekit.lookup import NOT_FOUND, binary_search, linear_search
from inodekit.params import ParseStatus, parse_parameters
from inodekit.walker import WalkOptions, WalkStatus, walk

_LOGGER_NAME = "inodekit"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``inodekit`` command.
    """
    parser = argparse.ArgumentParser(
        prog="inodekit",
        description="list inode trees and read name=value parameter files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    walk_parser = subparsers.add_parser("walk", help="List the inodes under a path")
    walk_parser.add_argument("path", help="Directory or file to list")
    walk_parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Descend into subdirectories",
    )
    walk_parser.add_argument(
        "--no-hidden",
        action="store_false",
        dest="include_hidden",
        help="Skip entries starting with .",
    )
    walk_parser.add_argument(
        "--no-follow",
        action="store_false",
        dest="follow_symlinks",
        help="Do not treat symlinks to directories as directories",
    )
    walk_parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Skip entries matched by the root .gitignore",
    )
    walk_parser.add_argument(
        "-I",
        "--exclude",
        action="append",
        default=[],
        dest="patterns",
        help="Exclude entries matching pattern (can be specified multiple times)",
    )

    params_parser = subparsers.add_parser(
        "params", help="Print the records of a parameter file"
    )
    params_parser.add_argument("file", help="Parameter file to read")
    params_parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Print only the value of this parameter",
    )
    params_parser.add_argument(
        "--linear",
        action="store_true",
        help="Look the name up with a linear scan instead of binary search",
    )

    info_parser = subparsers.add_parser("info", help="Print mode, owner and size of a path")
    info_parser.add_argument("path", help="Path to describe")
    return parser


def run_inodekit(argv: list[str] | None = None) -> str:
    """Run inodekit with provided CLI args and return formatted output.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Final rendered output.

    Raises:
        InodekitError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _run_walk(args: argparse.Namespace) -> str:
    options = WalkOptions(
        include_hidden=args.include_hidden,
        follow_symlinks=args.follow_symlinks,
        gitignore=args.gitignore,
    )
    entry_filter = PatternFilter(args.patterns) if args.patterns else None
    inodes = walk(args.path, args.recursive, options=options, entry_filter=entry_filter)

    if inodes.status is WalkStatus.NOT_FOUND:
        raise InodekitError(f"'{args.path}' is not a file or a directory")
    if inodes.status is WalkStatus.UNREADABLE:
        raise InodekitError(f"cannot open directory '{args.path}'")
    return "\n".join(inodes)


def _run_params(args: argparse.Namespace) -> str:
    result = parse_parameters(args.file)
    if result.status is ParseStatus.UNREADABLE:
        raise InodekitError(f"cannot read '{args.file}': {result.error}")

    records = result.records
    if args.name is None:
        return "\n".join(f"{record.name}={record.value}" for record in records)

    search = linear_search if args.linear else binary_search
    index = search(records, args.name)
    if index == NOT_FOUND:
        raise InodekitError(f"parameter '{args.name}' not found in '{args.file}'")
    return records[index].value


def _run_info(args: argparse.Namespace) -> str:
    info = describe(args.path)
    if info is None:
        raise InodekitError(f"cannot stat '{args.path}'")
    return info.format()


def _run_with_args(args: argparse.Namespace) -> str:
    """Dispatch parsed arguments to the selected subcommand.

    Raises:
        InodekitError: On any user-facing validation or I/O error.
    """
    _configure_logging(args.verbose)
    if args.command == "walk":
        return _run_walk(args)
    if args.command == "params":
        return _run_params(args)
    return _run_info(args)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Writes output to stdout. Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()

    try:
        output = _run_with_args(args)
    except InodekitError as exc:
        sys.stderr.write(f"inodekit: {exc}\n")
        sys.exit(1)

    if output:
        sys.stdout.write(output + "\n")

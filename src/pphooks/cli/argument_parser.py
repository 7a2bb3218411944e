"""CLI argument parser for pphooks commands.

Supported commands:
- run: validate the working tree (what the pre-commit hook executes)
- install: install the pre-commit hook into the current repository
- categories: list the file categories and the tool that checks each

Usage:
    from pphooks.cli.argument_parser import parse_args

    args = parse_args(["install", "--force"])
    print(f"Command: {args.subcommand}")
"""

import argparse
import sys
from typing import List, Optional

from .. import __version__
from ..types.enums import FileCategoryKind

SUBCOMMANDS = ["run", "install", "categories"]
DEFAULT_SUBCOMMAND = "run"


def _add_color_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable coloured output (also PPHOOKS_NO_COLOR=true or NO_COLOR)"
    )


def _create_run_parser(subparsers) -> argparse.ArgumentParser:
    """Create parser for the run command."""
    parser = subparsers.add_parser(
        "run",
        help="Validate Puppet manifests, templates, Ruby and YAML in the working tree",
        description="Run puppet-lint, puppet parser validate, ERB/EPP template checks, "
                   "ruby -c and a YAML load against every matching file. "
                   "Exits 1 if any file fails."
    )
    _add_color_argument(parser)
    return parser


def _create_install_parser(subparsers) -> argparse.ArgumentParser:
    """Create parser for the install command."""
    parser = subparsers.add_parser(
        "install",
        help="Install the pre-commit hook into the current git repository",
        description="Write an executable pre-commit hook that runs pphooks-pre-commit. "
                   "A different existing hook is backed up to pre-commit.bak."
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Rewrite the hook even if pphooks already installed it"
    )
    return parser


def _create_categories_parser(subparsers) -> argparse.ArgumentParser:
    """Create parser for the categories command."""
    parser = subparsers.add_parser(
        "categories",
        help="List the checked file categories",
        description="List every file category with its glob, tool and excluded subtree."
    )
    parser.add_argument(
        "kind",
        nargs="?",
        choices=FileCategoryKind.get_all_kinds(),
        metavar="KIND",
        help="Show a single category (%(choices)s)"
    )
    _add_color_argument(parser)
    return parser


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="pphooks",
        description="Puppet pre-commit checks - lint and syntax-validate a Puppet code base",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # install the hook once per clone
  pphooks install

  # run the same checks by hand
  pphooks run

Environment:
  PPHOOKS_DEBUG        debug logging, timing and memory use (true/false)
  PPHOOKS_LOG_LEVEL    log level (DEBUG/INFO/WARNING/ERROR)
  PPHOOKS_LOG_FILE     also write JSON logs to this file
  PPHOOKS_NO_COLOR     disable coloured output (true/false)
        """
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(
        dest="subcommand",
        help="Available commands",
        metavar="COMMAND"
    )

    _create_run_parser(subparsers)
    _create_install_parser(subparsers)
    _create_categories_parser(subparsers)

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    With no subcommand the hook check (``run``) is selected.

    Raises:
        SystemExit: If parsing fails (exit code 2)
    """
    parser = create_parser()
    argv = list(sys.argv[1:] if args is None else args)
    parsed_args = parser.parse_args(argv)

    if not parsed_args.subcommand:
        parsed_args = parser.parse_args([DEFAULT_SUBCOMMAND, *argv])

    return parsed_args

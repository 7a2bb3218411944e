"""Command line interface for pphooks.

Key modules:
- argument_parser: argparse parser for the ``pphooks`` command
- main: console script entry points (``pphooks``, ``pphooks-pre-commit``)
- commands/: one module per subcommand (install, categories)
"""

from .argument_parser import create_parser, parse_args

__all__ = [
    "parse_args",
    "create_parser"
]

"""List the file categories the hook checks."""

import argparse
import sys
from typing import List, Optional, Sequence, TextIO

from ...models.categories import FileCategory, get_category, list_categories
from ...output_utils import EXIT_SUCCESS
from ...utils.formatters import ConsoleReporter


def format_category_rows(categories: Sequence[FileCategory]) -> List[str]:
    rows = [("CATEGORY", "FILES", "TOOL", "EXCLUDED")]
    for category in categories:
        rows.append((
            category.kind.value,
            category.pattern,
            category.tool.executable,
            category.excluded_prefix or "-",
        ))
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]


def execute_list_categories(args: argparse.Namespace,
                            file: Optional[TextIO] = None) -> int:
    """Entry point for ``pphooks categories [KIND]``."""
    kind = getattr(args, "kind", None)
    categories = [get_category(kind)] if kind else list_categories()

    reporter = ConsoleReporter(file or sys.stdout, color=getattr(args, "color", None))
    header, *rows = format_category_rows(categories)
    reporter.line(reporter.bold(header))
    for row in rows:
        reporter.line(row)
    return EXIT_SUCCESS

"""Console report output for the pre-commit hook.

The report is human-facing and streamed: one bold header per category, one
coloured PASSED/FAILED line per file as soon as it is checked, and a final
summary line. It is not meant to be parsed.
"""

import os
import sys
from typing import Iterable, Optional, TextIO

from ..models.categories import SYNTAX_OK_SENTINEL
from ..models.validation import AggregateStatus, ValidationOutcome

PASSED_LABEL = "PASSED"
FAILED_LABEL = "FAILED"
SUCCESS_SUMMARY = "No Errors Found"
FAILURE_SUMMARY = "Errors Found"

DIAGNOSTIC_INDENT = "    "


def check_color_support(file: TextIO = sys.stdout) -> bool:
    """Check whether ``file`` is a terminal that accepts ANSI colour."""
    return (
        hasattr(file, 'isatty') and file.isatty() and
        os.environ.get('TERM', '').lower() != 'dumb' and
        os.environ.get('NO_COLOR') is None
    )


def strip_sentinel(text: str, sentinel: str = SYNTAX_OK_SENTINEL) -> str:
    """Drop lines that only carry the success sentinel."""
    lines = [line for line in text.splitlines() if line.strip() != sentinel]
    return "\n".join(lines).strip("\n")


class ConsoleReporter:
    """Writes the colourised validation report.

    Args:
        file: output stream, defaults to stdout
        color: force colour on or off; None detects from the stream
    """

    def __init__(self, file: Optional[TextIO] = None, color: Optional[bool] = None):
        self.file = file or sys.stdout
        self._supports_color = check_color_support(self.file) if color is None else color

    # 颜色代码
    @property
    def _reset(self) -> str:
        return "\033[0m" if self._supports_color else ""

    @property
    def _bold(self) -> str:
        return "\033[1m" if self._supports_color else ""

    @property
    def _green(self) -> str:
        return "\033[32m" if self._supports_color else ""

    @property
    def _red(self) -> str:
        return "\033[31m" if self._supports_color else ""

    def _write(self, text: str) -> None:
        print(text, file=self.file, flush=True)

    def bold(self, text: str) -> str:
        return f"{self._bold}{text}{self._reset}"

    def format_header(self, title: str) -> str:
        return self.bold(f"{title}...")

    def format_outcome(self, outcome: ValidationOutcome) -> str:
        if outcome.passed:
            line = f"{self._green}{PASSED_LABEL}{self._reset}: {outcome.path}"
        else:
            line = f"{self._red}{FAILED_LABEL}{self._reset}: {outcome.path}"
        if outcome.diagnostics:
            line += "\n" + self._indent(outcome.diagnostics.splitlines())
        return line

    def format_summary(self, status: AggregateStatus) -> str:
        if status.failed:
            return f"{self._bold}{self._red}{FAILURE_SUMMARY}{self._reset}"
        return f"{self._bold}{self._green}{SUCCESS_SUMMARY}{self._reset}"

    def header(self, title: str) -> None:
        self._write(self.format_header(title))

    def outcome(self, outcome: ValidationOutcome) -> None:
        self._write(self.format_outcome(outcome))

    def summary(self, status: AggregateStatus) -> None:
        self._write(self.format_summary(status))

    def line(self, text: str = "") -> None:
        self._write(text)

    @staticmethod
    def _indent(lines: Iterable[str]) -> str:
        return "\n".join(f"{DIAGNOSTIC_INDENT}{line}" for line in lines)


__all__ = [
    "PASSED_LABEL",
    "FAILED_LABEL",
    "SUCCESS_SUMMARY",
    "FAILURE_SUMMARY",
    "ConsoleReporter",
    "check_color_support",
    "strip_sentinel",
]

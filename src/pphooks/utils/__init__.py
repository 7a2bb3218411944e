"""Utility modules for pphooks."""

from .formatters import ConsoleReporter, check_color_support, strip_sentinel
from .logging import configure_logging, get_logger, log_error, log_operation

__all__ = [
    "ConsoleReporter",
    "check_color_support",
    "strip_sentinel",
    "configure_logging",
    "get_logger",
    "log_error",
    "log_operation",
]

"""Services that make up the pre-commit check."""

from .file_enumerator import iter_category_files, iter_matching_files
from .runner import ValidationRunner
from .tool_resolver import resolve_tools, resolve_working_tree, select_strategy
from .validator import ValidatorDispatch, run_validation

__all__ = [
    "iter_category_files",
    "iter_matching_files",
    "ValidationRunner",
    "resolve_tools",
    "resolve_working_tree",
    "select_strategy",
    "ValidatorDispatch",
    "run_validation",
]

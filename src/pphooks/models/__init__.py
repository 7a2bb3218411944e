"""Data models for the pphooks pre-commit hook."""

from .categories import (
    DEFAULT_CATEGORIES,
    RESERVED_SUBTREE,
    SYNTAX_OK_SENTINEL,
    FileCategory,
    ValidationCommand,
    get_category,
    list_categories,
)
from .tools import BundledInvocation, DirectInvocation, InvocationStrategy, ToolSet
from .validation import AggregateStatus, ValidationOutcome

__all__ = [
    "DEFAULT_CATEGORIES",
    "RESERVED_SUBTREE",
    "SYNTAX_OK_SENTINEL",
    "FileCategory",
    "ValidationCommand",
    "get_category",
    "list_categories",
    "BundledInvocation",
    "DirectInvocation",
    "InvocationStrategy",
    "ToolSet",
    "AggregateStatus",
    "ValidationOutcome",
]

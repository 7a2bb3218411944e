"""Type definitions for pphooks."""

from .enums import FileCategoryKind, InvocationMode, ToolName

__all__ = [
    "FileCategoryKind",
    "InvocationMode",
    "ToolName",
]

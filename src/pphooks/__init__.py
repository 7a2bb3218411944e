"""Puppet pre-commit hooks Python module.
Copyright (c) 2025 Haoyuan Li
MIT License

This module validates a Puppet code base before a commit is accepted:
puppet-lint style checks and parser validation for manifests, ERB and EPP
template checks, Ruby syntax checks and YAML loading. Every matching file
is checked, each result is printed as it happens, and the process exits 1
if anything failed so git blocks the commit.

Basic Usage:
    pphooks install          # once per clone
    git commit               # runs pphooks-pre-commit

    from pphooks import ValidationRunner

    exit_code = ValidationRunner("/path/to/repo").run()

File Categories:
    - style-check: *.pp, puppet-lint
    - syntax-check: *.pp, puppet parser validate
    - compiled-template: *.erb, erb -P -x -T - | ruby -c
    - script-template: *.epp, puppet epp validate
    - interpreted-script: *.rb, ruby -c
    - structured-data: *.yaml, YAML.load_file via ruby -e
"""

__version__ = "1.0.0"

from .exceptions import (
    BundleEnvironmentError,
    HookInstallError,
    PPHooksError,
    PreconditionError,
    ToolNotFoundError,
    WorkingTreeError,
)
from .models import (
    DEFAULT_CATEGORIES,
    AggregateStatus,
    FileCategory,
    ToolSet,
    ValidationCommand,
    ValidationOutcome,
)
from .services import ValidationRunner, resolve_tools, resolve_working_tree
from .types import FileCategoryKind, InvocationMode, ToolName

__all__ = [
    "__version__",
    # Runner
    "ValidationRunner",
    "resolve_tools",
    "resolve_working_tree",
    # Models
    "DEFAULT_CATEGORIES",
    "AggregateStatus",
    "FileCategory",
    "ToolSet",
    "ValidationCommand",
    "ValidationOutcome",
    # Types
    "FileCategoryKind",
    "InvocationMode",
    "ToolName",
    # Exceptions
    "PPHooksError",
    "PreconditionError",
    "ToolNotFoundError",
    "BundleEnvironmentError",
    "WorkingTreeError",
    "HookInstallError",
]

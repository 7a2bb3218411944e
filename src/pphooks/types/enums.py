"""Enumerations for the pphooks pre-commit hook.

All enums inherit from str and Enum so values print cleanly in log records
and in the `pphooks categories` listing.
"""

from enum import Enum
from typing import List


class ToolName(str, Enum):
    """External tools the hook depends on.

    The value is the executable name looked up on PATH, or passed to
    `bundle exec` when a Gemfile routes invocations through bundler.

    Values:
        STYLE_LINTER: puppet-lint, style checks for manifests
        SYNTAX_VALIDATOR: puppet, parser and epp validation
        TEMPLATE_COMPILER: erb, turns templates into Ruby source
        INTERPRETER: ruby, syntax checks and the YAML loader snippet
    """
    STYLE_LINTER = "puppet-lint"
    SYNTAX_VALIDATOR = "puppet"
    TEMPLATE_COMPILER = "erb"
    INTERPRETER = "ruby"

    @property
    def executable(self) -> str:
        return self.value

    @classmethod
    def required(cls) -> List["ToolName"]:
        """Tools that must resolve before any file is checked."""
        return list(cls)


class FileCategoryKind(str, Enum):
    """Kinds of files the hook validates, in the order they are checked."""
    STYLE_CHECK = "style-check"
    SYNTAX_CHECK = "syntax-check"
    COMPILED_TEMPLATE = "compiled-template"
    SCRIPT_TEMPLATE = "script-template"
    INTERPRETED_SCRIPT = "interpreted-script"
    STRUCTURED_DATA = "structured-data"

    @classmethod
    def from_string(cls, value: str) -> "FileCategoryKind":
        """Parse a category kind from string.

        Raises:
            ValueError: If value is not a valid category kind
        """
        try:
            return cls(value)
        except ValueError:
            valid_values = [kind.value for kind in cls]
            raise ValueError(f"Invalid file category '{value}'. Valid values: {valid_values}")

    @classmethod
    def get_all_kinds(cls) -> List[str]:
        return [kind.value for kind in cls]


class InvocationMode(str, Enum):
    """How external tools are started.

    Values:
        DIRECT: absolute path found on PATH
        BUNDLED: wrapped as `bundle exec <tool>`
    """
    DIRECT = "direct"
    BUNDLED = "bundled"

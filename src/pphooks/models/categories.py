"""File categories checked by the pre-commit hook.

Each category knows which files it matches and how to build the external
command that validates one of them. Categories run in the order of
DEFAULT_CATEGORIES.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from .tools import ToolSet
from ..types.enums import FileCategoryKind, ToolName

# Test fixtures pulled in by rspec-puppet; never part of the module itself.
RESERVED_SUBTREE = "spec/fixtures"

# Printed by `ruby -c` on success.
SYNTAX_OK_SENTINEL = "Syntax OK"

YAML_LOAD_SNIPPET = "require 'yaml'; YAML.load_file(ARGV[0])"


@dataclass(frozen=True)
class ValidationCommand:
    """External command pipeline for a single file.

    Attributes:
        stages: argv per stage; each stage's stdout feeds the next stage's stdin
        decisive_stage: index of the stage whose exit status decides pass/fail
    """
    stages: Tuple[Tuple[str, ...], ...]
    decisive_stage: int = 0

    def __post_init__(self) -> None:
        if not self.stages:
            raise ValueError("A validation command needs at least one stage")
        if not 0 <= self.decisive_stage < len(self.stages):
            raise ValueError(
                f"Decisive stage {self.decisive_stage} out of range for {len(self.stages)} stage(s)"
            )

    @classmethod
    def single(cls, argv: Sequence[str]) -> ValidationCommand:
        return cls(stages=(tuple(argv),))

    @classmethod
    def pipeline(cls, *stages: Sequence[str], decisive_stage: int) -> ValidationCommand:
        return cls(stages=tuple(tuple(argv) for argv in stages), decisive_stage=decisive_stage)

    def display(self) -> str:
        return " | ".join(" ".join(argv) for argv in self.stages)


@dataclass(frozen=True)
class FileCategory:
    """A kind of file and the validator that checks it.

    Attributes:
        kind: category tag
        title: header printed before the category's results
        pattern: fnmatch glob applied to file names
        tool: primary tool, shown by `pphooks categories`
        excluded_prefix: subtree relative to the root that is never scanned
        suppress_sentinel: drop `Syntax OK` lines from displayed diagnostics
    """
    kind: FileCategoryKind
    title: str
    pattern: str
    tool: ToolName
    excluded_prefix: str = RESERVED_SUBTREE
    suppress_sentinel: bool = False

    def build_command(
        self,
        tools: ToolSet,
        path: Union[str, Path],
        lint_options: Sequence[str] = (),
    ) -> ValidationCommand:
        """Build the command that validates ``path``.

        ``lint_options`` only applies to the style check.
        """
        target = str(path)
        kind = self.kind

        if kind == FileCategoryKind.STYLE_CHECK:
            return ValidationCommand.single(
                tools.command(ToolName.STYLE_LINTER, *lint_options, target)
            )
        if kind == FileCategoryKind.SYNTAX_CHECK:
            return ValidationCommand.single(
                tools.command(ToolName.SYNTAX_VALIDATOR, "parser", "validate", target)
            )
        if kind == FileCategoryKind.COMPILED_TEMPLATE:
            # erb only translates; ruby -c is the parser that decides
            return ValidationCommand.pipeline(
                tools.command(ToolName.TEMPLATE_COMPILER, "-P", "-x", "-T", "-", target),
                tools.command(ToolName.INTERPRETER, "-c"),
                decisive_stage=1,
            )
        if kind == FileCategoryKind.SCRIPT_TEMPLATE:
            return ValidationCommand.single(
                tools.command(ToolName.SYNTAX_VALIDATOR, "epp", "validate", target)
            )
        if kind == FileCategoryKind.INTERPRETED_SCRIPT:
            return ValidationCommand.single(tools.command(ToolName.INTERPRETER, "-c", target))
        if kind == FileCategoryKind.STRUCTURED_DATA:
            return ValidationCommand.single(
                tools.command(ToolName.INTERPRETER, "-e", YAML_LOAD_SNIPPET, target)
            )
        raise ValueError(f"Unsupported file category: {kind}")

    def is_excluded(self, relative_path: Union[str, Path]) -> bool:
        """Whether a root-relative path lies in the excluded subtree."""
        if not self.excluded_prefix:
            return False
        excluded = Path(self.excluded_prefix).parts
        return Path(relative_path).parts[: len(excluded)] == excluded


DEFAULT_CATEGORIES: Tuple[FileCategory, ...] = (
    FileCategory(
        kind=FileCategoryKind.STYLE_CHECK,
        title="Running puppet-lint",
        pattern="*.pp",
        tool=ToolName.STYLE_LINTER,
    ),
    FileCategory(
        kind=FileCategoryKind.SYNTAX_CHECK,
        title="Validating manifest syntax",
        pattern="*.pp",
        tool=ToolName.SYNTAX_VALIDATOR,
    ),
    FileCategory(
        kind=FileCategoryKind.COMPILED_TEMPLATE,
        title="Validating ERB templates",
        pattern="*.erb",
        tool=ToolName.TEMPLATE_COMPILER,
        suppress_sentinel=True,
    ),
    FileCategory(
        kind=FileCategoryKind.SCRIPT_TEMPLATE,
        title="Validating EPP templates",
        pattern="*.epp",
        tool=ToolName.SYNTAX_VALIDATOR,
    ),
    FileCategory(
        kind=FileCategoryKind.INTERPRETED_SCRIPT,
        title="Validating Ruby scripts",
        pattern="*.rb",
        tool=ToolName.INTERPRETER,
        suppress_sentinel=True,
    ),
    FileCategory(
        kind=FileCategoryKind.STRUCTURED_DATA,
        title="Validating YAML files",
        pattern="*.yaml",
        tool=ToolName.INTERPRETER,
    ),
)


def get_category(kind: Union[str, FileCategoryKind]) -> FileCategory:
    """Look up one of the default categories by kind."""
    if isinstance(kind, str) and not isinstance(kind, FileCategoryKind):
        kind = FileCategoryKind.from_string(kind)
    for category in DEFAULT_CATEGORIES:
        if category.kind == kind:
            return category
    raise KeyError(kind)


def list_categories() -> List[FileCategory]:
    return list(DEFAULT_CATEGORIES)

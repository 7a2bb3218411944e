"""Validation result models.

ValidationOutcome is the result of checking one file. AggregateStatus is the
accumulator threaded through every category pass; it decides the exit code.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..output_utils import EXIT_FAILURE, EXIT_SUCCESS
from ..types.enums import FileCategoryKind


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of running one validator against one file.

    Attributes:
        path: file path relative to the working-tree root
        passed: whether the decisive stage exited with status 0
        diagnostics: validator output kept for display, if any
        category: category that produced the outcome
        exit_status: exit status of the decisive stage
    """
    path: Path
    passed: bool
    diagnostics: Optional[str] = None
    category: Optional[FileCategoryKind] = None
    exit_status: Optional[int] = None

    @classmethod
    def success(cls, path: Union[str, Path], **kwargs: Any) -> ValidationOutcome:
        return cls(path=Path(path), passed=True, **kwargs)

    @classmethod
    def failure(
        cls, path: Union[str, Path], diagnostics: Optional[str] = None, **kwargs: Any
    ) -> ValidationOutcome:
        return cls(path=Path(path), passed=False, diagnostics=diagnostics, **kwargs)

    @property
    def failed(self) -> bool:
        return not self.passed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {
            "path": str(self.path),
            "passed": self.passed,
        }
        if self.diagnostics:
            result["diagnostics"] = self.diagnostics
        if self.category is not None:
            result["category"] = self.category.value
        if self.exit_status is not None:
            result["exit_status"] = self.exit_status
        return result


@dataclass(frozen=True)
class AggregateStatus:
    """Run-wide pass/fail accumulator.

    ``failed`` starts false and, once set by a failing outcome, is never
    reset. Each ``record`` returns a new value instead of mutating.

    Attributes:
        failed: whether any outcome so far has failed
        checked: number of outcomes recorded
        failures: number of failed outcomes recorded
    """
    failed: bool = False
    checked: int = 0
    failures: int = 0

    def record(self, outcome: ValidationOutcome) -> AggregateStatus:
        return replace(
            self,
            failed=self.failed or outcome.failed,
            checked=self.checked + 1,
            failures=self.failures + (1 if outcome.failed else 0),
        )

    @property
    def exit_code(self) -> int:
        return EXIT_FAILURE if self.failed else EXIT_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "failed": self.failed,
            "checked": self.checked,
            "failures": self.failures,
            "exit_code": self.exit_code,
        }

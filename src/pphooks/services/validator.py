"""Run one external validator against one file.

Stages of a ValidationCommand run one after another, each stage's stdout
feeding the next stage's stdin. Pass/fail comes from the decisive stage's
exit status; the sentinel filter only changes what is displayed.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..models.categories import FileCategory, ValidationCommand
from ..models.tools import ToolSet
from ..models.validation import ValidationOutcome
from ..types.enums import FileCategoryKind
from ..utils.formatters import strip_sentinel

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


def run_validation(command: ValidationCommand,
                   path: Union[str, Path],
                   cwd: Union[str, Path, None] = None,
                   suppress_sentinel: bool = False,
                   category: Optional[FileCategoryKind] = None,
                   run: Runner = subprocess.run) -> ValidationOutcome:
    """Run ``command`` and turn its exit status into a ValidationOutcome."""
    cwd = str(cwd) if cwd is not None else None
    stage_input: Optional[str] = None
    returncodes: List[int] = []
    output: List[str] = []
    last = len(command.stages) - 1

    for index, argv in enumerate(command.stages):
        logger.debug("Running %s", " ".join(argv))
        try:
            result = run(
                list(argv),
                cwd=cwd,
                input=stage_input if index > 0 else None,
                stdin=subprocess.DEVNULL if index == 0 else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if index == last else subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            # tool disappeared after resolution; record it and keep going
            logger.warning("Could not start %s: %s", argv[0], e)
            return ValidationOutcome.failure(path, diagnostics=str(e), category=category)

        returncodes.append(result.returncode)
        if index == last:
            output.append(result.stdout or "")
        else:
            if result.stderr:
                output.append(result.stderr)
            stage_input = result.stdout or ""

    exit_status = returncodes[command.decisive_stage]
    diagnostics = "".join(output).strip("\n")
    if suppress_sentinel:
        diagnostics = strip_sentinel(diagnostics)

    logger.debug("%s: stage exit statuses %s, decisive %d", path, returncodes, exit_status)
    if exit_status == 0:
        return ValidationOutcome.success(
            path, diagnostics=diagnostics or None, category=category, exit_status=exit_status
        )
    return ValidationOutcome.failure(
        path, diagnostics=diagnostics or None, category=category, exit_status=exit_status
    )


class ValidatorDispatch:
    """Single entry point for running a category's validator on a file."""

    def __init__(self,
                 tools: ToolSet,
                 root: Union[str, Path],
                 lint_options: Optional[List[str]] = None,
                 run: Runner = subprocess.run):
        self.tools = tools
        self.root = Path(root)
        self.lint_options = list(lint_options or [])
        self._run = run

    def validate(self, category: FileCategory, path: Union[str, Path]) -> ValidationOutcome:
        command = category.build_command(self.tools, path, self.lint_options)
        return run_validation(
            command,
            path,
            cwd=self.root,
            suppress_sentinel=category.suppress_sentinel,
            category=category.kind,
            run=self._run,
        )

"""ValidationRunner: the pre-commit check from tool resolution to exit status.

The run is linear. Tools are resolved first; a precondition failure raises
before any file is enumerated. Then each category runs in order, every file
is validated and reported immediately, and an AggregateStatus is threaded
through all category passes. Failures never stop the run.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Union

from ..config import resolve_lint_options
from ..models.categories import DEFAULT_CATEGORIES, FileCategory
from ..models.tools import ToolSet
from ..models.validation import AggregateStatus
from ..utils.formatters import ConsoleReporter
from ..utils.logging import log_operation
from .file_enumerator import iter_category_files
from .tool_resolver import resolve_tools
from .validator import ValidatorDispatch

logger = logging.getLogger(__name__)


class ValidationRunner:
    """Runs every file category against a working tree.

    Args:
        root: working-tree root; file paths are reported relative to it
        reporter: console report writer
        categories: categories to run, in order
        tools: pre-resolved tools; resolved from ``root`` when omitted
        lint_options: puppet-lint options; derived from ``root`` when omitted
        run: subprocess runner used for every external command
    """

    def __init__(self,
                 root: Union[str, Path],
                 reporter: Optional[ConsoleReporter] = None,
                 categories: Sequence[FileCategory] = DEFAULT_CATEGORIES,
                 tools: Optional[ToolSet] = None,
                 lint_options: Optional[Sequence[str]] = None,
                 run: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.root = Path(root)
        self.reporter = reporter or ConsoleReporter()
        self.categories = tuple(categories)
        self._tools = tools
        self._lint_options = lint_options
        self._run = run

    def resolve(self) -> ValidatorDispatch:
        """Resolve tools and lint options.

        Raises:
            PreconditionError: If a tool is missing or bundler is inconsistent
        """
        tools = self._tools or resolve_tools(self.root, run=self._run)
        lint_options = self._lint_options
        if lint_options is None:
            lint_options = resolve_lint_options(self.root)
        logger.debug("puppet-lint options: %s", lint_options or "(from .puppet-lint.rc)")
        return ValidatorDispatch(tools, self.root, list(lint_options), run=self._run)

    def run_category(self,
                     category: FileCategory,
                     dispatch: ValidatorDispatch,
                     status: AggregateStatus) -> AggregateStatus:
        """Validate every file of one category and return the updated status."""
        self.reporter.header(category.title)
        with log_operation("category", logger=logger, category=category.kind.value):
            for path in iter_category_files(self.root, category):
                outcome = dispatch.validate(category, path)
                self.reporter.outcome(outcome)
                logger.debug("Validated %s", outcome.path, extra={"outcome": outcome.to_dict()})
                status = status.record(outcome)
        return status

    def run_categories(self,
                       dispatch: ValidatorDispatch,
                       categories: Optional[Iterable[FileCategory]] = None) -> AggregateStatus:
        status = AggregateStatus()
        for category in categories if categories is not None else self.categories:
            status = self.run_category(category, dispatch, status)
        return status

    def run(self) -> int:
        """Run the whole check and return the process exit status (0 or 1).

        Raises:
            PreconditionError: Before any file is checked
        """
        dispatch = self.resolve()
        status = self.run_categories(dispatch)
        self.reporter.summary(status)
        logger.info("Checked %d file(s), %d failed", status.checked, status.failures,
                    extra={"status": status.to_dict()})
        return status.exit_code

"""Tool and working-tree resolution.

Everything here runs before any file is checked. A failure raises a
PreconditionError, which the CLI turns into exit status 1.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..config import BUNDLE_RUNNER, GEMFILE_NAME
from ..exceptions import BundleEnvironmentError, ToolNotFoundError, WorkingTreeError
from ..models.tools import BundledInvocation, DirectInvocation, InvocationStrategy, ToolSet
from ..types.enums import ToolName

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]
Runner = Callable[..., subprocess.CompletedProcess]


def resolve_working_tree(cwd: Union[str, Path, None] = None,
                         which: Optional[Which] = None,
                         run: Optional[Runner] = None) -> Path:
    """Return the top-level directory of the git working tree.

    Raises:
        WorkingTreeError: If git is missing or ``cwd`` is not inside a work tree
    """
    which = which or shutil.which
    run = run or subprocess.run
    git = which("git")
    if git is None:
        raise WorkingTreeError("git not found on PATH", path=cwd)

    result = run(
        [git, "rev-parse", "--show-toplevel"],
        cwd=str(cwd) if cwd is not None else None,
        capture_output=True,
        text=True,
    )
    toplevel = result.stdout.strip()
    if result.returncode != 0 or not toplevel:
        detail = result.stderr.strip() or "git rev-parse --show-toplevel failed"
        raise WorkingTreeError(f"Not inside a git working tree: {detail}", path=cwd)

    logger.debug("Working tree root: %s", toplevel)
    return Path(toplevel)


def _missing_bundled_tools(runner: str,
                           root: Path,
                           tools: Iterable[ToolName],
                           run: Runner) -> List[str]:
    """Return the tools that ``bundle exec`` cannot start."""
    missing = []
    for tool in tools:
        result = run(
            [runner, "exec", tool.executable, "--version"],
            cwd=str(root),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            logger.debug("bundle exec %s failed: %s", tool.executable, result.stderr.strip())
            missing.append(tool.executable)
    return missing


def select_strategy(root: Union[str, Path],
                    tools: Iterable[ToolName],
                    which: Optional[Which] = None,
                    run: Optional[Runner] = None) -> InvocationStrategy:
    """Pick bundled or direct invocation for ``root``.

    Bundler is used when a Gemfile exists and ``bundle`` is on PATH. If
    ``bundle check`` then fails the environment is inconsistent, which is
    fatal rather than a reason to fall back to direct invocation. Each tool
    must also start under ``bundle exec``.

    Raises:
        BundleEnvironmentError: If bundler reports missing gems
        ToolNotFoundError: If any required tool is missing, in either mode
    """
    which = which or shutil.which
    run = run or subprocess.run
    root = Path(root)
    gemfile = root / GEMFILE_NAME
    runner = which(BUNDLE_RUNNER) if gemfile.is_file() else None

    if runner is not None:
        result = run(
            [runner, "check"],
            cwd=str(root),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise BundleEnvironmentError(output=result.stdout + result.stderr, gemfile=gemfile)
        unavailable = _missing_bundled_tools(runner, root, tools, run)
        if unavailable:
            raise ToolNotFoundError(unavailable)
        logger.debug("Routing tools through %s exec", runner)
        return BundledInvocation(runner)

    if gemfile.is_file():
        logger.info("%s found but %s is not installed; using tools from PATH",
                    GEMFILE_NAME, BUNDLE_RUNNER)

    paths = {}
    missing: List[str] = []
    for tool in tools:
        location = which(tool.executable)
        if location is None:
            missing.append(tool.executable)
        else:
            paths[tool] = location
    if missing:
        raise ToolNotFoundError(missing)

    return DirectInvocation(paths)


def resolve_tools(root: Union[str, Path],
                  which: Optional[Which] = None,
                  run: Optional[Runner] = None) -> ToolSet:
    """Resolve every required tool into an immutable ToolSet."""
    tools = ToolName.required()
    strategy = select_strategy(root, tools, which=which, run=run)
    toolset = strategy.build_toolset(tools)
    logger.debug("Resolved tools (%s): %s", toolset.mode.value, toolset.describe())
    return toolset

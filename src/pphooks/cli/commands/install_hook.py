"""Install the pphooks pre-commit hook into a git repository.

The installed hook is a tiny shell script that execs ``pphooks-pre-commit``.
A pre-existing hook that pphooks did not write is backed up to
``pre-commit.bak`` before it is replaced.
"""

import argparse
import logging
import os
import shutil
import stat
import subprocess
from pathlib import Path
from typing import Callable, Optional, Union

from ...exceptions import HookInstallError, WorkingTreeError
from ...output_utils import EXIT_SUCCESS
from ...services.tool_resolver import resolve_working_tree

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"
HOOK_MARKER = "# installed by pphooks"
HOOK_CONTENT = f"""#!/bin/sh
{HOOK_MARKER}
exec pphooks-pre-commit "$@"
"""


def find_hooks_dir(root: Union[str, Path],
                   which: Optional[Callable[[str], Optional[str]]] = None,
                   run: Optional[Callable[..., subprocess.CompletedProcess]] = None) -> Path:
    """Return the hooks directory git uses for ``root``.

    Raises:
        WorkingTreeError: If git cannot report the hooks path
    """
    root = Path(root)
    which = which or shutil.which
    run = run or subprocess.run
    git = which("git")
    if git is None:
        raise WorkingTreeError("git not found on PATH", path=root)
    result = run(
        [git, "rev-parse", "--git-path", "hooks"],
        cwd=str(root),
        capture_output=True,
        text=True,
    )
    hooks = result.stdout.strip()
    if result.returncode != 0 or not hooks:
        raise WorkingTreeError(f"Cannot locate the hooks directory: {result.stderr.strip()}", path=root)
    hooks_dir = Path(hooks)
    if not hooks_dir.is_absolute():
        hooks_dir = root / hooks_dir
    return hooks_dir


def is_pphooks_hook(hook_path: Path) -> bool:
    try:
        return HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hook(hooks_dir: Union[str, Path], force: bool = False) -> Path:
    """Write the pre-commit hook into ``hooks_dir``.

    Returns:
        Path of the installed hook

    Raises:
        HookInstallError: If the hook cannot be written
    """
    hooks_dir = Path(hooks_dir)
    hook_path = hooks_dir / HOOK_NAME

    if hook_path.exists():
        if is_pphooks_hook(hook_path):
            if not force:
                logger.info("pphooks hook already installed at %s", hook_path)
                return hook_path
        else:
            backup = hook_path.with_name(f"{HOOK_NAME}.bak")
            try:
                shutil.copy2(hook_path, backup)
            except OSError as e:
                raise HookInstallError(f"Cannot back up existing hook: {e}", hook_path=hook_path) from e
            print(f"Backed up existing hook to {backup}")

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(HOOK_CONTENT, encoding="utf-8")
        # Make executable on Unix
        if os.name != "nt":
            hook_path.chmod(hook_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise HookInstallError(f"Cannot write hook: {e}", hook_path=hook_path) from e

    return hook_path


def execute_install_hook(args: argparse.Namespace, cwd: Union[str, Path, None] = None) -> int:
    """Entry point for ``pphooks install``."""
    root = resolve_working_tree(cwd)
    hooks_dir = find_hooks_dir(root)
    hook_path = install_hook(hooks_dir, force=getattr(args, "force", False))
    print(f"Installed pre-commit hook to {hook_path}")
    return EXIT_SUCCESS

"""Runtime configuration for pphooks.

Settings come from environment variables and are read once at startup.
The only file-based setting is the optional `.puppet-lint.rc` at the
working-tree root, which puppet-lint reads on its own.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Union

LINT_CONFIG_FILENAME = ".puppet-lint.rc"
GEMFILE_NAME = "Gemfile"
BUNDLE_RUNNER = "bundle"

# Used only when the repository has no .puppet-lint.rc
DEFAULT_LINT_EXCLUSIONS = (
    "--no-80chars-check",
    "--no-140chars-check",
    "--no-documentation-check",
    "--no-autoloader_layout-check",
)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class HookSettings:
    """Settings for one hook run.

    Attributes:
        debug: verbose log format plus timing and memory logs (PPHOOKS_DEBUG)
        log_level: stdlib logging level name (PPHOOKS_LOG_LEVEL)
        log_file: optional JSON log file (PPHOOKS_LOG_FILE)
        color: ANSI colour allowed (PPHOOKS_NO_COLOR / NO_COLOR turn it off)
    """
    debug: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    color: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "HookSettings":
        env = os.environ if env is None else env
        debug = _env_flag(env, "PPHOOKS_DEBUG")
        log_level = env.get("PPHOOKS_LOG_LEVEL", "DEBUG" if debug else "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = "WARNING"
        log_file = env.get("PPHOOKS_LOG_FILE")
        color = not (_env_flag(env, "PPHOOKS_NO_COLOR") or env.get("NO_COLOR") is not None)
        return cls(
            debug=debug,
            log_level=log_level,
            log_file=Path(log_file) if log_file else None,
            color=color,
        )

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


def resolve_lint_options(root: Union[str, Path]) -> List[str]:
    """Return the puppet-lint options for a repository.

    A `.puppet-lint.rc` at the root replaces the default exclusions entirely.
    """
    if (Path(root) / LINT_CONFIG_FILENAME).is_file():
        return []
    return list(DEFAULT_LINT_EXCLUSIONS)

"""Candidate file discovery.

Files are yielded lazily in os.walk order, which is not stable across
platforms. Each file is validated on its own so the order does not matter.
"""

import fnmatch
import os
from pathlib import Path
from typing import Iterator, Union

from ..models.categories import FileCategory

# Never descend into version-control metadata
SKIPPED_DIRECTORIES = {".git"}


def _is_under(relative: Path, prefix: Path) -> bool:
    return relative.parts[: len(prefix.parts)] == prefix.parts


def iter_matching_files(root: Union[str, Path],
                        pattern: str,
                        excluded_prefix: str = "") -> Iterator[Path]:
    """Yield root-relative paths of files whose name matches ``pattern``.

    Args:
        root: working-tree root to walk
        pattern: fnmatch glob applied to the file name
        excluded_prefix: root-relative subtree that is never entered
    """
    root = Path(root)
    excluded = Path(excluded_prefix) if excluded_prefix else None

    for dirpath, dirnames, filenames in os.walk(root):
        relative_dir = Path(dirpath).relative_to(root)

        # prune in place so os.walk skips these subtrees
        kept = []
        for name in dirnames:
            if name in SKIPPED_DIRECTORIES:
                continue
            if excluded is not None and _is_under(relative_dir / name, excluded):
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in filenames:
            if not fnmatch.fnmatch(name, pattern):
                continue
            relative = relative_dir / name
            if excluded is not None and _is_under(relative, excluded):
                continue
            if not (root / relative).is_file():
                continue
            yield relative


def iter_category_files(root: Union[str, Path], category: FileCategory) -> Iterator[Path]:
    """Yield the files a category should validate."""
    return iter_matching_files(root, category.pattern, category.excluded_prefix)

"""
Walks a projects root and yields candidate project directories.
Excluded and hidden directories are pruned before descending, so node_modules, .git,
virtualenvs etc. are never visited.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

# Common VCS, build and cache directories (exact names or wildcard patterns)
DEFAULT_EXCLUDED = frozenset([
    ".git",
    "node_modules",
    "__pycache__",
    "target",
    ".idea",
    ".vscode",
    ".env",
    ".mypy_cache",
    "venv",
    ".gradio",
    "__MACOSX",
    "build",
    "dist",
    ".next",
    ".cache",
    ".pytest_cache",
    ".tox",
    ".eggs",
    "*.egg-info",
    "coverage",
    "htmlcov",
    ".coverage",
    ".DS_Store",
])

_GLOB_CHARS = set("*?[")


def parse_exclusions(value: str | None) -> frozenset[str]:
    """Split a comma-separated list of directory names ("a, b,,c") into a set."""
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def is_excluded(name: str, excluded_names: Iterable[str]) -> bool:
    """True if a directory base name is hidden or matches an exclusion entry."""
    if name.startswith("."):
        return True
    for pattern in excluded_names:
        if name == pattern:
            return True
        if _GLOB_CHARS & set(pattern) and fnmatch.fnmatchcase(name, pattern):
            return True
    return False


def _log_walk_error(err: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror or err)


def walk_candidates(
    root: str | Path,
    min_depth: int,
    max_depth: int,
    excluded_names: Iterable[str] = DEFAULT_EXCLUDED,
) -> Iterator[Path]:
    """
    Yield directories whose depth below root (root = 0) lies in [min_depth, max_depth].
    Symlinked directories are neither yielded nor followed.
    """
    root = Path(root)
    excluded = frozenset(excluded_names)
    if min_depth == 0:
        yield root
    for current, dirs, _files in os.walk(root, onerror=_log_walk_error, followlinks=False):
        current_path = Path(current)
        depth = len(current_path.relative_to(root).parts)
        kept = []
        for name in sorted(dirs):
            child = current_path / name
            if is_excluded(name, excluded):
                logger.debug("Pruned %s", child)
                continue
            try:
                if child.is_symlink():
                    logger.debug("Not following symlink %s", child)
                    continue
            except OSError as e:
                logger.warning("Skipping %s: %s", child, e)
                continue
            kept.append(name)
        # Children sit at depth + 1; only descend while that is still above max_depth
        dirs[:] = kept if depth + 1 < max_depth else []
        if not min_depth <= depth + 1 <= max_depth:
            continue
        for name in kept:
            child = current_path / name
            if ".git" in child.relative_to(root).parts:
                continue
            yield child

"""
Project status detection.
GitStatusProvider shells out to `git status` and only looks at the exit code; a repo can
additionally be marked archived by a marker file or (optionally) by commit age.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Protocol

from .models import ProjectStatus

logger = logging.getLogger(__name__)

ARCHIVE_MARKERS = ("ARCHIVED.md", ".archived")
SECONDS_PER_DAY = 86400


class StatusProvider(Protocol):
    def detect(self, path: Path) -> ProjectStatus: ...


class GitStatusProvider:
    """
    Status from git:
    - no .git in the directory, or the directory is inside .git  -> UNKNOWN
    - `git status` fails to run, times out or exits non-zero      -> UNKNOWN
    - otherwise ACTIVE, or ARCHIVED if a marker file is present or the last
      commit is older than archive_after_days (when set)
    """

    def __init__(
        self,
        git_executable: str = "git",
        timeout: float = 5.0,
        archive_after_days: int | None = None,
    ):
        self.git_executable = git_executable
        self.timeout = timeout
        self.archive_after_days = archive_after_days

    def _run_git(self, path: Path, *args: str) -> subprocess.CompletedProcess | None:
        try:
            return subprocess.run(
                [self.git_executable, *args],
                cwd=path,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("git %s timed out after %ss in %s", args[0], self.timeout, path)
        except OSError as e:
            logger.warning("Could not run git in %s: %s", path, e)
        return None

    def detect(self, path: Path) -> ProjectStatus:
        path = Path(path)
        if ".git" in path.parts:
            return ProjectStatus.UNKNOWN
        try:
            if not (path / ".git").exists():
                return ProjectStatus.UNKNOWN
        except OSError as e:
            logger.warning("Cannot inspect %s: %s", path, e)
            return ProjectStatus.UNKNOWN

        result = self._run_git(path, "status")
        if result is None or result.returncode != 0:
            logger.debug("git status failed in %s", path)
            return ProjectStatus.UNKNOWN

        try:
            archived = self._has_archive_marker(path)
        except OSError as e:
            logger.warning("Cannot check archive marker in %s: %s", path, e)
            archived = False
        if archived or self._is_stale(path):
            return ProjectStatus.ARCHIVED
        return ProjectStatus.ACTIVE

    def _has_archive_marker(self, path: Path) -> bool:
        return any((path / marker).is_file() for marker in ARCHIVE_MARKERS)

    def _is_stale(self, path: Path) -> bool:
        if self.archive_after_days is None:
            return False
        result = self._run_git(path, "log", "-1", "--format=%ct")
        if result is None or result.returncode != 0:
            # no commits yet, or log failed: nothing to judge age by
            return False
        try:
            last_commit = int(result.stdout.strip())
        except ValueError:
            return False
        age_days = (time.time() - last_commit) / SECONDS_PER_DAY
        return age_days > self.archive_after_days

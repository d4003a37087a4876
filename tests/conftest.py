"""
Pytest configuration and fixtures
"""
from pathlib import Path

import pytest

from src.indexer.errors import EnrichmentError
from src.indexer.models import ProjectStatus


def make_dirs(root: Path, *relative: str) -> Path:
    """Create each relative directory under root and return root."""
    for rel in relative:
        (root / rel).mkdir(parents=True, exist_ok=True)
    return root


class FakeStatusProvider:
    """Status by project name; everything else is UNKNOWN."""

    def __init__(self, statuses: dict[str, ProjectStatus] | None = None):
        self.statuses = statuses or {}
        self.calls: list[Path] = []

    def detect(self, path: Path) -> ProjectStatus:
        self.calls.append(Path(path))
        return self.statuses.get(Path(path).name, ProjectStatus.UNKNOWN)


class FakeTagSource:
    """Returns canned tags per project name; names in `failing` raise EnrichmentError."""

    def __init__(self, tags: dict[str, list[str]] | None = None, failing: set[str] | None = None):
        self.tags = tags or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []

    def enrich(self, project_name: str, project_path: str) -> list[str]:
        self.calls.append((project_name, project_path))
        if project_name in self.failing:
            raise EnrichmentError(f"service down for {project_name}")
        return list(self.tags.get(project_name, []))


@pytest.fixture
def projects_root(tmp_path: Path) -> Path:
    """
    projects/
      tools/alpha/.git
      tools/beta
      web/site
      web/node_modules/left-pad
    """
    root = tmp_path / "projects"
    make_dirs(
        root,
        "tools/alpha/.git",
        "tools/alpha/src",
        "tools/beta",
        "web/site",
        "web/node_modules/left-pad",
    )
    return root

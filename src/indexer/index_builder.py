"""
Builds the project index: walk the projects root, turn each candidate directory into a
Project (category, git status, tags), sort, and write the result as JSON.
"""

import json
import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Protocol

from .classifier import classify
from .config import IndexerConfig
from .errors import EnrichmentError, SerializationError
from .models import Project, normalize_tags
from .status import StatusProvider
from .walker import walk_candidates

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class TagSource(Protocol):
    def enrich(self, project_name: str, project_path: str) -> list[str]: ...


def _project_tags(
    name: str,
    path: Path,
    tag_source: TagSource | None,
    default_tags: tuple[str, ...],
) -> tuple[str, ...]:
    if tag_source is None:
        return default_tags
    try:
        tags = normalize_tags(tag_source.enrich(name, str(path)))
    except EnrichmentError as e:
        logger.error("Failed to generate tags for %s: %s", name, e)
        return default_tags
    return tags or default_tags


def build_project(
    path: Path,
    config: IndexerConfig,
    status_provider: StatusProvider,
    tag_source: TagSource | None = None,
) -> Project:
    """Populate a single Project for a candidate directory."""
    name = path.name
    project = Project(
        name=name,
        path=str(path),
        category=classify(path, config.projects_dir, config.category_level),
        status=status_provider.detect(path),
        tags=_project_tags(name, path, tag_source, config.default_tags),
    )
    logger.debug("Indexed %s (%s, %s)", name, project.category, project.status.value)
    return project


def sort_projects(projects: Iterable[Project]) -> list[Project]:
    """Order by (category, name) so unchanged input always serializes identically."""
    return sorted(projects, key=lambda p: (p.category, p.name, p.path))


def build_index(
    config: IndexerConfig,
    status_provider: StatusProvider,
    tag_source: TagSource | None = None,
    progress: ProgressCallback | None = None,
) -> list[Project]:
    """
    Walk config.projects_dir and return the sorted list of Projects.
    Traversal is sequential; with config.workers > 1 status detection and tag
    generation run on a thread pool once the walk has finished.
    """
    config.validate()
    logger.info("Starting project indexing from: %s", config.projects_dir)

    projects: list[Project] = []
    pending: list[Path] = []
    for path in walk_candidates(
        config.projects_dir, config.min_depth, config.max_depth, config.excluded_names
    ):
        if not path.name:
            continue
        if progress is not None:
            progress(path.name)
        if config.workers > 1:
            pending.append(path)
        else:
            projects.append(build_project(path, config, status_provider, tag_source))

    if pending:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            projects.extend(
                pool.map(lambda p: build_project(p, config, status_provider, tag_source), pending)
            )

    logger.info("Found %d projects", len(projects))
    return sort_projects(projects)


def write_index(projects: Iterable[Project], output_path: str | Path) -> Path:
    """
    Write projects as a pretty-printed JSON array.
    The file is written next to the target and renamed over it, so an
    interrupted run never leaves a half-written index behind.
    """
    out_path = Path(output_path)
    try:
        payload = json.dumps([p.to_dict() for p in projects], indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not encode index: {e}") from e

    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=out_path.parent, prefix=f".{out_path.name}.", suffix=".tmp")
    except OSError as e:
        raise SerializationError(f"Could not write index to {out_path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, out_path)
    except BaseException as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        if isinstance(e, OSError):
            raise SerializationError(f"Could not write index to {out_path}: {e}") from e
        raise

    logger.info("Wrote index file: %s", out_path)
    return out_path


def load_index(index_path: str | Path) -> list[Project]:
    """Read an index written by write_index. Missing file raises FileNotFoundError."""
    index_path = Path(index_path)
    with open(index_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SerializationError(f"Index file is not valid UTF-8 JSON: {index_path}: {e}") from e
    if not isinstance(data, list):
        raise SerializationError(f"Index file must contain a JSON array: {index_path}")
    return [Project.from_dict(entry) for entry in data]

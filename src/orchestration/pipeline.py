"""
End-to-end indexing run: config → git status + Ollama tags → sorted index file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from src.indexer.config import IndexerConfig
from src.indexer.errors import ConfigurationError, EnrichmentError, SerializationError
from src.indexer.index_builder import ProgressCallback, TagSource, build_index, write_index
from src.indexer.models import Project
from src.indexer.status import GitStatusProvider, StatusProvider

logger = logging.getLogger(__name__)


@dataclass
class IndexRunResult:
    """Result of one indexing run."""
    index_file: Path
    projects: list[Project] = field(default_factory=list)
    ollama_available: bool | None = None  # None when enrichment was not requested
    error: str | None = None


def _make_tag_source(config: IndexerConfig) -> tuple[TagSource | None, bool | None]:
    from src.tagging import OllamaTagSource, check_availability, ensure_model_available

    if not config.enable_ollama:
        # the builder falls back to config.default_tags
        return None, None

    source = OllamaTagSource(model=config.model, host=config.ollama_host, timeout=config.timeout)
    if not check_availability(source.client):
        logger.warning("Ollama service is not available - tags will not be generated")
        return None, False
    try:
        ensure_model_available(source.client, source.model, pull=config.pull_model)
    except EnrichmentError as e:
        logger.warning("%s - tags will not be generated", e)
        return None, False
    return source, True


def run_indexing(
    config: IndexerConfig,
    *,
    progress: ProgressCallback | None = None,
    status_provider: StatusProvider | None = None,
    tag_source: TagSource | None = None,
) -> IndexRunResult:
    """
    Index config.projects_dir and write config.index_file.
    Configuration and write failures come back in result.error; per-project
    problems (unreadable dirs, git failures, Ollama errors) only degrade that project.
    """
    try:
        config.validate()
    except ConfigurationError as e:
        return IndexRunResult(index_file=config.index_file, error=f"Invalid configuration: {e}")

    if status_provider is None:
        status_provider = GitStatusProvider(archive_after_days=config.archive_after_days)
    ollama_available = None
    if tag_source is None:
        tag_source, ollama_available = _make_tag_source(config)

    try:
        projects = build_index(config, status_provider, tag_source, progress)
        write_index(projects, config.index_file)
    except ConfigurationError as e:
        return IndexRunResult(index_file=config.index_file, error=f"Invalid configuration: {e}")
    except SerializationError as e:
        return IndexRunResult(
            index_file=config.index_file,
            ollama_available=ollama_available,
            error=f"Failed to write index: {e}",
        )

    logger.info("Successfully indexed %d projects", len(projects))
    return IndexRunResult(
        index_file=config.index_file,
        projects=projects,
        ollama_available=ollama_available,
    )

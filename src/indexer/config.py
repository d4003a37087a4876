"""
Indexer settings.
Values come from explicit arguments first, then environment variables, then the defaults below.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError
from .models import normalize_tags
from .walker import DEFAULT_EXCLUDED

DEFAULT_PROJECTS_DIR = "~/projects"
DEFAULT_INDEX_FILE = "projects_index.json"
DEFAULT_MODEL = "gemma3:1b"
DEFAULT_MIN_DEPTH = 2
DEFAULT_MAX_DEPTH = 2

MODEL_ENV = "PROJECTS_INDEXER_MODEL"
INDEX_FILE_ENV = "PROJECTS_INDEXER_INDEX"


def get_model_name(model: str | None = None) -> str:
    """Ollama model for tag generation: argument, then PROJECTS_INDEXER_MODEL, then gemma3:1b."""
    return model or os.environ.get(MODEL_ENV) or DEFAULT_MODEL


def get_index_path(index_file: str | Path | None = None) -> Path:
    """Index file location: argument, then PROJECTS_INDEXER_INDEX, then ./projects_index.json."""
    value = index_file or os.environ.get(INDEX_FILE_ENV) or DEFAULT_INDEX_FILE
    return Path(value).expanduser()


@dataclass
class IndexerConfig:
    """Everything one indexing run needs; passed explicitly to the builder."""
    projects_dir: Path
    index_file: Path
    enable_ollama: bool = False
    min_depth: int = DEFAULT_MIN_DEPTH
    max_depth: int = DEFAULT_MAX_DEPTH
    excluded_names: frozenset[str] = DEFAULT_EXCLUDED
    category_level: int = 1
    default_tags: tuple[str, ...] = field(default_factory=tuple)
    model: str = field(default_factory=get_model_name)
    ollama_host: str | None = None  # None lets the ollama client read OLLAMA_HOST
    timeout: float = 30.0
    workers: int = 1
    archive_after_days: int | None = None
    pull_model: bool = False  # download the model when the server lacks it

    def __post_init__(self):
        self.projects_dir = Path(self.projects_dir).expanduser()
        self.index_file = Path(self.index_file).expanduser()
        self.excluded_names = frozenset(self.excluded_names)
        self.default_tags = normalize_tags(self.default_tags)

    def validate(self) -> "IndexerConfig":
        """Raise ConfigurationError for settings that would make the run meaningless."""
        if not self.projects_dir.is_dir():
            raise ConfigurationError(f"Projects directory is not a directory: {self.projects_dir}")
        if self.min_depth < 0 or self.max_depth < 0:
            raise ConfigurationError(
                f"Depth bounds must be non-negative (min={self.min_depth}, max={self.max_depth})"
            )
        if self.min_depth > self.max_depth:
            raise ConfigurationError(
                f"min_depth ({self.min_depth}) is greater than max_depth ({self.max_depth})"
            )
        if self.category_level < 1:
            raise ConfigurationError(f"category_level must be at least 1, got {self.category_level}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")
        if self.archive_after_days is not None and self.archive_after_days < 0:
            raise ConfigurationError("archive_after_days must be non-negative")
        if self.index_file.is_dir():
            raise ConfigurationError(f"Index file path is a directory: {self.index_file}")
        return self

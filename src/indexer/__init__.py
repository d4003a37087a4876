"""
Project discovery and indexing.
Walks a projects root, classifies each project directory, detects its git status,
attaches tags and writes a sorted JSON index.
"""

from .config import IndexerConfig
from .errors import ConfigurationError, EnrichmentError, IndexerError, SerializationError
from .index_builder import build_index, load_index, write_index
from .models import Project, ProjectStatus
from .status import GitStatusProvider

__all__ = [
    "IndexerConfig",
    "IndexerError",
    "ConfigurationError",
    "EnrichmentError",
    "SerializationError",
    "build_index",
    "write_index",
    "load_index",
    "Project",
    "ProjectStatus",
    "GitStatusProvider",
]

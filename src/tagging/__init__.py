"""
Tag enrichment (Ollama).
Given a project name and path, asks a local model for a handful of technical tags.
"""

from .tag_generator import (
    OllamaTagSource,
    StaticTagSource,
    check_availability,
    ensure_model_available,
    extract_tags,
    make_client,
)

__all__ = [
    "OllamaTagSource",
    "StaticTagSource",
    "check_availability",
    "ensure_model_available",
    "extract_tags",
    "make_client",
]

"""
Error types for the project indexer.
Per-project failures are handled where they happen; these are the ones that cross module boundaries.
"""


class IndexerError(Exception):
    """Base class for indexer errors."""


class ConfigurationError(IndexerError):
    """Invalid root path, depth bounds or other settings. Raised before any traversal."""


class SerializationError(IndexerError):
    """The index could not be encoded, written or read back."""


class EnrichmentError(IndexerError):
    """Tag generation failed (network, HTTP status, malformed response)."""

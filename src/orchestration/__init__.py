"""
Orchestration: one indexing run from configuration to written index.
"""

from .pipeline import run_indexing, IndexRunResult

__all__ = ["run_indexing", "IndexRunResult"]

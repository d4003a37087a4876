"""
Reading a written index back: search and statistics.
"""

from .search import search_projects
from .stats import IndexStats, compute_stats, format_project, format_stats

__all__ = ["search_projects", "IndexStats", "compute_stats", "format_stats", "format_project"]

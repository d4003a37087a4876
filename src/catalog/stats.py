"""
Statistics over an index: status counts, projects per category, tag frequencies.
Also renders the per-project lines printed after an indexing run.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from src.indexer.models import Project, ProjectStatus


@dataclass
class IndexStats:
    total: int = 0
    active: int = 0
    archived: int = 0
    unknown: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
    total_tags: int = 0
    tag_counts: list[tuple[str, int]] = field(default_factory=list)  # most common first
    # category -> status value -> count, for the detailed view
    category_status: dict[str, dict[str, int]] = field(default_factory=dict)


def compute_stats(projects: Iterable[Project]) -> IndexStats:
    projects = list(projects)
    status_counts = Counter(p.status for p in projects)
    by_category = Counter(p.category for p in projects)
    tags = Counter(tag for p in projects for tag in p.tags)

    category_status: dict[str, dict[str, int]] = {}
    for p in projects:
        per_cat = category_status.setdefault(p.category, {})
        per_cat[p.status.value] = per_cat.get(p.status.value, 0) + 1

    return IndexStats(
        total=len(projects),
        active=status_counts[ProjectStatus.ACTIVE],
        archived=status_counts[ProjectStatus.ARCHIVED],
        unknown=status_counts[ProjectStatus.UNKNOWN],
        by_category=dict(sorted(by_category.items())),
        total_tags=sum(tags.values()),
        tag_counts=sorted(tags.items(), key=lambda kv: (-kv[1], kv[0])),
        category_status=dict(sorted(category_status.items())),
    )


def format_stats(stats: IndexStats, detailed: bool = False, top_tags: int = 10) -> str:
    """Plain-text summary for the terminal."""
    parts = [
        "## Project statistics",
        f"Total projects: {stats.total}",
        f"Active: {stats.active}",
        f"Archived: {stats.archived}",
        f"Unknown: {stats.unknown}",
        f"Total tags: {stats.total_tags}",
        "",
        "## Projects by category",
    ]
    if not stats.by_category:
        parts.append("(none)")
    for category, count in stats.by_category.items():
        parts.append(f"- {category}: {count}")
        if detailed:
            for status, n in sorted(stats.category_status.get(category, {}).items()):
                parts.append(f"    {status}: {n}")
    if stats.tag_counts:
        parts.append("")
        shown = stats.tag_counts if detailed else stats.tag_counts[:top_tags]
        parts.append(f"## Top tags ({len(shown)} of {len(stats.tag_counts)})")
        for tag, count in shown:
            parts.append(f"- {tag}: {count}")
    return "\n".join(parts)


def format_project(project: Project) -> str:
    tags = ", ".join(project.tags) if project.tags else "(no tags)"
    return f"- {project.name} [{project.category}] ({project.status.value}) {tags}\n    {project.path}"

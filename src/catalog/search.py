"""Search an index by name, category or tags."""

from typing import Iterable

from src.indexer.models import Project


def matches(project: Project, query: str, tags_only: bool = False, category_only: bool = False) -> bool:
    """Case-insensitive substring match. An empty query matches every project."""
    q = query.strip().lower()
    if not q:
        return True
    if tags_only:
        return any(q in tag.lower() for tag in project.tags)
    if category_only:
        return q in project.category.lower()
    return (
        q in project.name.lower()
        or q in project.category.lower()
        or any(q in tag.lower() for tag in project.tags)
    )


def search_projects(
    projects: Iterable[Project],
    query: str,
    tags_only: bool = False,
    category_only: bool = False,
) -> list[Project]:
    """Return matching projects in index order."""
    if tags_only and category_only:
        raise ValueError("tags_only and category_only are mutually exclusive")
    return [p for p in projects if matches(p, query, tags_only, category_only)]

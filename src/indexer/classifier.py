"""Derives a project's category from where it sits under the projects root."""

from pathlib import Path

from .models import UNCATEGORIZED


def classify(path: str | Path, root: str | Path, level: int = 1) -> str:
    """
    Return the `level`-th directory name below root (1 = the folder right under root).
    A project sitting at or above that level has no grouping folder and is "uncategorized".
    """
    try:
        parts = Path(path).relative_to(Path(root)).parts
    except ValueError:
        return UNCATEGORIZED
    # the last part is the project itself, never its own category
    if level < 1 or len(parts) <= level:
        return UNCATEGORIZED
    return parts[level - 1] or UNCATEGORIZED

"""
Project record and status enum as stored in the index file.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import SerializationError

UNCATEGORIZED = "uncategorized"


class ProjectStatus(Enum):
    """Activity status derived from the project's git repository."""
    ACTIVE = "active"
    ARCHIVED = "archived"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Project:
    name: str
    path: str
    category: str = UNCATEGORIZED
    status: ProjectStatus = ProjectStatus.UNKNOWN
    tags: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        # key order is the on-disk field order
        return {
            "name": self.name,
            "path": self.path,
            "category": self.category,
            "status": self.status.value,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Rebuild a Project from one index entry."""
        if not isinstance(data, dict):
            raise SerializationError(f"Index entry is not an object: {data!r}")
        try:
            name = str(data["name"])
            path = str(data["path"])
        except KeyError as e:
            raise SerializationError(f"Index entry is missing field {e}") from None
        raw_status = str(data.get("status", ProjectStatus.UNKNOWN.value)).lower()
        try:
            status = ProjectStatus(raw_status)
        except ValueError:
            raise SerializationError(f"Unknown project status: {raw_status!r}") from None
        tags = data.get("tags") or []
        if not isinstance(tags, list):
            raise SerializationError(f"Tags for {name!r} must be a list")
        return cls(
            name=name,
            path=path,
            category=str(data.get("category") or UNCATEGORIZED),
            status=status,
            tags=tuple(str(t) for t in tags),
        )


# Characters models like to wrap tags in ("**Rust**", "1. cli", "[web]")
TAG_STRIP_CHARS = "*:.()[]{}"
_TAG_STRIP_TABLE = str.maketrans("", "", TAG_STRIP_CHARS)


def normalize_tags(tokens) -> tuple[str, ...]:
    """Trim, lowercase and strip punctuation from each token; drop what ends up empty."""
    out = []
    for token in tokens:
        tag = str(token).strip().lower().translate(_TAG_STRIP_TABLE).strip()
        if tag:
            out.append(tag)
    return tuple(out)

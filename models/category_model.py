"""Category metadata models and helpers.

Updates: v0.2.0 - 2026-09-28 - Keep unknown category keys on round trips.
Updates: v0.1.0 - 2026-09-14 - Introduce Category dataclass and seed table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")

DEFAULT_CATEGORY_COLOR = "#6b7280"


def slugify_category(value: Optional[str]) -> str:
    """Return a URL-safe slug derived from the provided value."""

    text = (value or "").strip().lower()
    if not text:
        return ""
    slug = _SLUG_PATTERN.sub("-", text).strip("-")
    return slug


@dataclass(slots=True)
class Category:
    """Structured representation of a prompt category."""

    id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_record(self) -> Dict[str, Any]:
        """Serialize the category into a plain dictionary."""

        record = dict(self.extra)
        record.update({"id": self.id, "name": self.name, "color": self.color})
        return record

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "Category":
        """Hydrate a Category from a mapping."""

        identifier = str(data.get("id") or "")
        return cls(
            id=identifier,
            name=str(data.get("name") or identifier),
            color=str(data.get("color") or DEFAULT_CATEGORY_COLOR),
            extra={
                str(key): value
                for key, value in data.items()
                if key not in {"id", "name", "color"}
            },
        )


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="general", name="General", color="#6b7280"),
    Category(id="coding", name="Coding", color="#059669"),
    Category(id="writing", name="Writing", color="#7c3aed"),
    Category(id="analysis", name="Analysis", color="#dc2626"),
    Category(id="creative", name="Creative", color="#ea580c"),
)


__all__ = ["Category", "DEFAULT_CATEGORIES", "DEFAULT_CATEGORY_COLOR", "slugify_category"]

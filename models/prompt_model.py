"""Prompt data model definitions.

Records are persisted with the camelCase keys used by the export document, while
the dataclasses expose snake_case attributes. Unknown keys found on stored records
are kept in :attr:`Prompt.extra` so that a read/write cycle never drops data. The
mapping a prompt was loaded from is kept as well: fields that no operation changed
are written back with their stored values, so legacy and partial records survive
rewrites of the collection untouched.

Updates: v0.5.0 - 2026-10-19 - Re-emit stored values for fields left unchanged since load.
Updates: v0.4.0 - 2026-10-02 - Preserve unknown record keys for lossless round trips.
Updates: v0.3.0 - 2026-09-25 - Add typed PromptUpdate replacing free-form merges.
Updates: v0.2.0 - 2026-09-18 - Accept epoch-millisecond and ``Z`` suffixed timestamps.
Updates: v0.1.0 - 2026-09-14 - Initial Prompt schema with serialization helpers.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

DEFAULT_CATEGORY_ID = "general"

RECORD_KEYS: tuple[str, ...] = (
    "id",
    "title",
    "content",
    "description",
    "tags",
    "category",
    "isFavorite",
    "usageCount",
    "createdAt",
    "updatedAt",
    "lastUsed",
)

_FIELD_KEYS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("title", "title"),
    ("content", "content"),
    ("description", "description"),
    ("tags", "tags"),
    ("category", "category"),
    ("is_favorite", "isFavorite"),
    ("usage_count", "usageCount"),
    ("created_at", "createdAt"),
    ("updated_at", "updatedAt"),
    ("last_used", "lastUsed"),
)

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})

_EPOCH = datetime.fromtimestamp(0, UTC)

logger = logging.getLogger("keepprompt.models")


def utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse ISO-8601 strings, epoch milliseconds, or datetimes; ``None`` when unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Ignoring unparseable timestamp", extra={"value": text})
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Return an ISO-8601 UTC string with millisecond precision and a ``Z`` suffix."""
    aware = value if value.tzinfo else value.replace(tzinfo=UTC)
    text = aware.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def timestamp_or_epoch(value: datetime | None) -> datetime:
    """Return *value* or the Unix epoch when it is missing."""
    return value if value is not None else _EPOCH


def normalise_tags(value: Iterable[Any] | str | None) -> list[str]:
    """Return lowercase, trimmed, de-duplicated tags preserving first-seen order."""
    if value is None:
        return []
    items: Iterable[Any] = [value] if isinstance(value, str) else value
    tags: list[str] = []
    seen: set[str] = set()
    for raw in items:
        text = str(raw).strip().lower()
        if not text or text in seen:
            continue
        seen.add(text)
        tags.append(text)
    return tags


def _coerce_tag_list(value: Any) -> list[str]:
    """Read stored tags leniently without rewriting their contents."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value]
    return [str(value)]


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _record_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return the attribute values read leniently from a stored record."""
    description = data.get("description")
    return {
        "id": str(data.get("id") or ""),
        "title": str(data.get("title") or ""),
        "content": str(data.get("content") or ""),
        "description": None if description is None else str(description),
        "tags": _coerce_tag_list(data.get("tags")),
        "category": str(data.get("category") or DEFAULT_CATEGORY_ID),
        "is_favorite": _coerce_bool(data.get("isFavorite", False)),
        "usage_count": max(_coerce_int(data.get("usageCount")), 0),
        "created_at": parse_timestamp(data.get("createdAt")),
        "updated_at": parse_timestamp(data.get("updatedAt")),
        "last_used": parse_timestamp(data.get("lastUsed")),
    }


@dataclass(slots=True)
class Prompt:
    """Dataclass representation of a stored prompt record."""

    id: str
    title: str
    content: str
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    category: str = DEFAULT_CATEGORY_ID
    is_favorite: bool = False
    usage_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_used: datetime | None = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False)
    raw: dict[str, Any] | None = field(default=None, repr=False, compare=False)

    def matches(self, term: str) -> bool:
        """Return True when the lowercased *term* occurs in any searchable field."""
        needle = term.strip().lower()
        if not needle:
            return True
        haystacks = [self.title, self.content, self.description or "", *self.tags]
        return any(needle in str(text).lower() for text in haystacks)

    def to_record(self) -> dict[str, Any]:
        """Return the camelCase dictionary persisted to storage and exports.

        Prompts read from storage keep their stored value for every field whose
        attribute still matches what was loaded; only changed fields are written
        in canonical form.
        """
        canonical = self._canonical_record()
        if self.raw is None:
            return canonical
        loaded = _record_fields(self.raw)
        record: dict[str, Any] = {
            key: value
            for key, value in self.raw.items()
            if key in RECORD_KEYS or key in self.extra
        }
        record.update(self.extra)
        for attr, key in _FIELD_KEYS:
            if getattr(self, attr) == loaded[attr]:
                continue
            if key in canonical:
                record[key] = canonical[key]
            else:
                record.pop(key, None)
        return record

    def _canonical_record(self) -> dict[str, Any]:
        record: dict[str, Any] = dict(self.extra)
        record.update(
            {
                "id": self.id,
                "title": self.title,
                "content": self.content,
                "tags": list(self.tags),
                "category": self.category,
                "isFavorite": self.is_favorite,
                "usageCount": self.usage_count,
            }
        )
        if self.description is not None:
            record["description"] = self.description
        if self.created_at is not None:
            record["createdAt"] = format_timestamp(self.created_at)
        if self.updated_at is not None:
            record["updatedAt"] = format_timestamp(self.updated_at)
        if self.last_used is not None:
            record["lastUsed"] = format_timestamp(self.last_used)
        return record

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a stored dictionary, tolerating partial records."""
        return cls(
            **_record_fields(data),
            extra={str(key): value for key, value in data.items() if key not in RECORD_KEYS},
            raw=dict(data),
        )


@dataclass(slots=True)
class PromptDraft:
    """Caller-supplied fields for a new prompt."""

    title: str
    content: str
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    category: str = DEFAULT_CATEGORY_ID
    is_favorite: bool = False

    def __post_init__(self) -> None:
        """Normalise tags to the stored lowercase form."""
        self.tags = normalise_tags(self.tags)
        self.category = (self.category or "").strip() or DEFAULT_CATEGORY_ID

    def build(self, prompt_id: str, now: datetime) -> Prompt:
        """Return the canonical record created from this draft."""
        return Prompt(
            id=prompt_id,
            title=self.title,
            content=self.content,
            description=self.description,
            tags=list(self.tags),
            category=self.category,
            is_favorite=self.is_favorite,
            usage_count=0,
            created_at=now,
            updated_at=now,
        )


@dataclass(slots=True)
class PromptUpdate:
    """Partial update restricted to the mutable prompt fields.

    ``None`` means "leave unchanged"; pass an empty string to clear the description.
    """

    title: str | None = None
    content: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    category: str | None = None
    is_favorite: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields supplied by the caller."""
        supplied: dict[str, Any] = {}
        if self.title is not None:
            supplied["title"] = self.title
        if self.content is not None:
            supplied["content"] = self.content
        if self.description is not None:
            supplied["description"] = self.description
        if self.tags is not None:
            supplied["tags"] = normalise_tags(self.tags)
        if self.category is not None:
            supplied["category"] = self.category.strip() or DEFAULT_CATEGORY_ID
        if self.is_favorite is not None:
            supplied["is_favorite"] = bool(self.is_favorite)
        return supplied

    def apply_to(self, prompt: Prompt, now: datetime) -> Prompt:
        """Return a copy of *prompt* with the supplied fields merged and ``updated_at`` bumped."""
        updated_at = now
        if prompt.created_at is not None and updated_at < prompt.created_at:
            updated_at = prompt.created_at
        fields: dict[str, Any] = {"tags": list(prompt.tags), "extra": dict(prompt.extra)}
        fields.update(self.changes())
        return replace(prompt, updated_at=updated_at, **fields)


__all__ = [
    "DEFAULT_CATEGORY_ID",
    "RECORD_KEYS",
    "Prompt",
    "PromptDraft",
    "PromptUpdate",
    "format_timestamp",
    "normalise_tags",
    "parse_timestamp",
    "timestamp_or_epoch",
    "utc_now",
]

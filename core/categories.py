"""Category lookup table persisted alongside prompts.

Updates:
  v0.2.0 - 2026-10-03 - Enforce unique category ids on add and bulk save.
  v0.1.0 - 2026-09-28 - Extract category persistence from the prompt store.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from models.category_model import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    Category,
    slugify_category,
)

from .exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    StorageReadError,
    StorageWriteError,
)
from .storage import StorageKeys, read_json, write_json

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .notifications import NotificationQueue
    from .storage import StorageBackend

logger = logging.getLogger("keepprompt.categories")


def default_categories() -> list[Category]:
    """Return fresh copies of the seed categories."""
    return [replace(category, extra={}) for category in DEFAULT_CATEGORIES]


class CategoryStore:
    """Persist the ``{id, name, color}`` category table."""

    def __init__(
        self,
        backend: StorageBackend,
        *,
        keys: StorageKeys | None = None,
        notifications: NotificationQueue | None = None,
    ) -> None:
        """Store backend and notification collaborators."""
        self._backend = backend
        self._keys = keys or StorageKeys()
        self._notifications = notifications

    @property
    def key(self) -> str:
        return self._keys.categories

    def get_all(self) -> list[Category]:
        """Return stored categories, or the seed table when nothing is stored."""
        try:
            raw = read_json(self._backend, self.key)
        except StorageReadError as exc:
            logger.error("Failed to load categories: %s", exc)
            self._report("Failed to load categories")
            return default_categories()
        if raw is None:
            return default_categories()
        if not isinstance(raw, list):
            logger.error("Stored categories are not a JSON array; using defaults")
            self._report("Failed to load categories")
            return default_categories()
        return [Category.from_record(entry) for entry in raw if isinstance(entry, Mapping)]

    def get(self, category_id: str) -> Category | None:
        for category in self.get_all():
            if category.id == category_id:
                return category
        return None

    def save_all(self, categories: Iterable[Category | Mapping[str, Any]]) -> None:
        """Replace the table; raise on duplicate ids or storage failure."""
        records = [
            category.to_record() if isinstance(category, Category) else dict(category)
            for category in categories
        ]
        seen: set[str] = set()
        for record in records:
            identifier = str(record.get("id") or "")
            if identifier in seen:
                raise DuplicateCategoryError(f"Duplicate category id: {identifier!r}")
            seen.add(identifier)
        write_json(self._backend, self.key, records)

    def add(
        self,
        name: str,
        *,
        color: str = DEFAULT_CATEGORY_COLOR,
        category_id: str | None = None,
    ) -> Category:
        """Append a category; ids derive from *name* unless given explicitly."""
        categories = self.get_all()
        existing = {category.id for category in categories}
        if category_id is not None:
            if category_id in existing:
                raise DuplicateCategoryError(f"Category {category_id!r} already exists")
            identifier = category_id
        else:
            base = slugify_category(name) or "category"
            identifier = base
            suffix = 2
            while identifier in existing:
                identifier = f"{base}-{suffix}"
                suffix += 1
        category = Category(id=identifier, name=name.strip() or identifier, color=color)
        categories.append(category)
        self._persist(categories, "Failed to add category")
        return category

    def update(
        self,
        category_id: str,
        *,
        name: str | None = None,
        color: str | None = None,
    ) -> Category:
        """Rename or recolour a category."""
        categories = self.get_all()
        for index, category in enumerate(categories):
            if category.id != category_id:
                continue
            updated = replace(
                category,
                name=category.name if name is None else name,
                color=category.color if color is None else color,
            )
            categories[index] = updated
            self._persist(categories, "Failed to update category")
            return updated
        raise CategoryNotFoundError(f"Category {category_id!r} not found")

    def delete(self, category_id: str) -> bool:
        categories = self.get_all()
        remaining = [category for category in categories if category.id != category_id]
        if len(remaining) == len(categories):
            return False
        self._persist(remaining, "Failed to delete category")
        return True

    def _persist(self, categories: list[Category], failure_message: str) -> None:
        try:
            self.save_all(categories)
        except StorageWriteError:
            logger.exception(failure_message)
            self._report(failure_message)
            raise

    def _report(self, message: str) -> None:
        if self._notifications is not None:
            self._notifications.error(message)


__all__ = ["CategoryStore", "default_categories"]

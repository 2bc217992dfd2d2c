"""Boundary between callers (CLI, UI) and the prompt store.

The workspace validates write candidates, forwards every new record snapshot to
the query pipeline, and reports outcomes through the notification queue.

Updates:
  v0.3.1 - 2026-10-19 - Report storage failures while clearing data.
  v0.3.0 - 2026-10-09 - Report import/export outcomes through the notification queue.
  v0.2.0 - 2026-10-04 - Validate merged records before persisting updates.
  v0.1.0 - 2026-09-26 - Initial workspace facade.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.prompt_model import utc_now

from .exceptions import ImportFormatError, KeepPromptError, PromptValidationError
from .validation import validate_prompt

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path
    from typing import Any

    from models.prompt_model import Prompt, PromptDraft, PromptUpdate

    from .categories import CategoryStore
    from .data_transfer import DataTransfer, ImportSummary
    from .notifications import NotificationQueue
    from .preferences import SettingsStore
    from .query import QueryPipeline, SortKey, SortOrder
    from .record_store import PromptStore

logger = logging.getLogger("keepprompt.workspace")

COPY_TOAST_MS = 2000


class PromptWorkspace:
    """High-level prompt workflows used by front ends."""

    def __init__(
        self,
        *,
        store: PromptStore,
        categories: CategoryStore,
        settings: SettingsStore,
        transfer: DataTransfer,
        pipeline: QueryPipeline,
        notifications: NotificationQueue,
    ) -> None:
        """Wire collaborators and publish the initial snapshot to the pipeline."""
        self.store = store
        self.categories = categories
        self.settings = settings
        self.transfer = transfer
        self.pipeline = pipeline
        self.notifications = notifications
        self.refresh()

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def refresh(self) -> list[Prompt]:
        """Reload prompts and hand the snapshot to the pipeline."""
        prompts = self.store.get_all()
        self.pipeline.set_prompts(prompts)
        return prompts

    @property
    def visible(self) -> list[Prompt]:
        return self.pipeline.visible

    # ------------------------------------------------------------------
    # Prompt workflows
    # ------------------------------------------------------------------
    def create_prompt(self, draft: PromptDraft) -> Prompt | None:
        """Validate and store *draft*; raise PromptValidationError on rule violations."""
        self._validate(draft)
        prompt = self.store.add(draft)
        if prompt is None:
            return None
        self.notifications.success("Prompt created successfully!")
        self.refresh()
        return prompt

    def update_prompt(self, prompt_id: str, changes: PromptUpdate) -> Prompt | None:
        """Validate the merged record and persist *changes*."""
        current = self.store.get(prompt_id)
        if current is None:
            self.notifications.error("Prompt not found")
            return None
        self._validate(changes.apply_to(current, utc_now()))
        updated = self.store.update(prompt_id, changes)
        if updated is None:
            return None
        self.notifications.success("Prompt updated successfully!")
        self.refresh()
        return updated

    def delete_prompt(self, prompt_id: str) -> bool:
        if self.store.get(prompt_id) is None:
            self.notifications.error("Prompt not found")
            return False
        if not self.store.delete(prompt_id):
            return False
        self.notifications.success("Prompt deleted successfully!")
        self.refresh()
        return True

    def toggle_favorite(self, prompt_id: str) -> Prompt | None:
        prompt = self.store.toggle_favorite(prompt_id)
        if prompt is None:
            self.notifications.error("Failed to update favorite")
            return None
        self.notifications.info(
            "Added to favorites" if prompt.is_favorite else "Removed from favorites"
        )
        self.refresh()
        return prompt

    def use_prompt(self, prompt_id: str) -> Prompt | None:
        """Record one use of the prompt (e.g. a clipboard copy) and return it."""
        if not self.store.increment_usage(prompt_id):
            self.notifications.error("Failed to copy prompt")
            return None
        self.notifications.success("Copied to clipboard!", COPY_TOAST_MS)
        prompts = self.refresh()
        return next((prompt for prompt in prompts if prompt.id == prompt_id), None)

    # ------------------------------------------------------------------
    # Query pass-throughs
    # ------------------------------------------------------------------
    def search(self, term: str) -> None:
        self.pipeline.set_search_term(term)

    def filter_category(self, category: str) -> None:
        self.pipeline.set_category(category)

    def sort(self, key: SortKey | str, order: SortOrder | str | None = None) -> None:
        self.pipeline.set_sort(key, order)

    def toggle_sort_order(self) -> None:
        self.pipeline.toggle_sort_order()

    def clear_search(self) -> None:
        self.pipeline.clear()

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------
    def export_data(self) -> str | None:
        try:
            data = self.transfer.export_data()
        except KeepPromptError as exc:
            logger.error("Export failed: %s", exc)
            self.notifications.error("Failed to export data")
            return None
        self.notifications.success("Data exported successfully!")
        return data

    def export_to_file(self, path: Path) -> Path | None:
        try:
            destination = self.transfer.export_to_file(path)
        except (KeepPromptError, OSError) as exc:
            logger.error("Export failed: %s", exc)
            self.notifications.error("Failed to export data")
            return None
        self.notifications.success("Data exported successfully!")
        return destination

    def import_data(self, payload: str | bytes | Mapping[str, Any]) -> bool:
        """Apply an export document; storage is untouched when this returns False."""
        return self._import(lambda: self.transfer.import_payload(payload)) is not None

    def import_from_file(self, path: Path) -> ImportSummary | None:
        return self._import(lambda: self.transfer.import_payload(self.transfer.read_file(path)))

    def clear_all_data(self) -> bool:
        """Remove every stored key; False when storage refused a removal."""
        try:
            self.transfer.clear_all()
        except KeepPromptError as exc:
            logger.error("Clear failed: %s", exc)
            self.notifications.error("Failed to clear data")
            return False
        self.notifications.info("All data cleared")
        self.refresh()
        return True

    def close(self) -> None:
        """Cancel pending recomputation and drop queued notifications."""
        self.pipeline.cancel()
        self.notifications.clear()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _import(self, action: Callable[[], ImportSummary]) -> ImportSummary | None:
        try:
            summary = action()
        except ImportFormatError as exc:
            logger.warning("Rejected import payload: %s", exc)
            self.notifications.error("Failed to import data - invalid format")
            return None
        except KeepPromptError as exc:
            logger.error("Import failed: %s", exc)
            self.notifications.error("Failed to import data")
            return None
        self.notifications.success("Data imported successfully!")
        self.refresh()
        return summary

    def _validate(self, candidate: object) -> None:
        result = validate_prompt(candidate)
        if result.is_valid:
            return
        self.notifications.error("; ".join(result.errors))
        raise PromptValidationError(result.errors)


__all__ = ["COPY_TOAST_MS", "PromptWorkspace"]

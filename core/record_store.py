"""Canonical prompt collection persisted through a key/value backend.

Every mutation performs a full read-modify-write of the ``prompts`` blob. Reads
that hit a corrupt payload are logged, reported through the notification queue,
and treated as an empty collection; failed writes are reported the same way and
the operation returns ``None``/``False`` instead of raising.

Updates:
  v0.4.0 - 2026-10-07 - Route write failures to the notification queue.
  v0.3.0 - 2026-10-01 - Retry id generation on collisions with stored records.
  v0.2.0 - 2026-09-25 - Accept typed PromptDraft/PromptUpdate payloads.
  v0.1.0 - 2026-09-16 - Initial CRUD and usage tracking.
"""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from models.prompt_model import Prompt, PromptDraft, PromptUpdate, utc_now

from .exceptions import KeepPromptError, StorageReadError, StorageWriteError
from .storage import StorageKeys, read_json, write_json

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import datetime

    from .notifications import NotificationQueue
    from .storage import StorageBackend

logger = logging.getLogger("keepprompt.record_store")

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
MAX_ID_ATTEMPTS = 16


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a millisecond timestamp in base 36 followed by 64 random bits."""
    millis = time.time_ns() // 1_000_000
    return f"{_to_base36(millis)}{secrets.token_hex(8)}"


class PromptStore:
    """Atomic-per-call CRUD over the persisted prompt collection."""

    def __init__(
        self,
        backend: StorageBackend,
        *,
        keys: StorageKeys | None = None,
        notifications: NotificationQueue | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        """Store the backend and the collaborators used for ids, time, and messages."""
        self._backend = backend
        self._keys = keys or StorageKeys()
        self._notifications = notifications
        self._clock = clock
        self._id_factory = id_factory

    @property
    def key(self) -> str:
        return self._keys.prompts

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_all(self) -> list[Prompt]:
        """Return every stored prompt in insertion order."""
        try:
            return self.load()
        except StorageReadError as exc:
            logger.error("Failed to load prompts: %s", exc)
            self._report("Failed to load prompts")
            return []

    def get(self, prompt_id: str) -> Prompt | None:
        """Return the prompt with *prompt_id* or ``None``."""
        for prompt in self.get_all():
            if prompt.id == prompt_id:
                return prompt
        return None

    def load(self) -> list[Prompt]:
        """Return stored prompts, raising :class:`StorageReadError` on a corrupt payload."""
        raw = read_json(self._backend, self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageReadError(f"Stored value for {self.key!r} must be a JSON array")
        prompts: list[Prompt] = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, Mapping):
                logger.warning(
                    "Skipping stored prompt entry that is not an object",
                    extra={"index": index},
                )
                continue
            prompts.append(Prompt.from_record(entry))
        return prompts

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save_all(self, prompts: Iterable[Prompt | Mapping[str, Any]]) -> None:
        """Replace the whole collection, raising :class:`StorageWriteError` on failure."""
        records = [
            prompt.to_record() if isinstance(prompt, Prompt) else dict(prompt)
            for prompt in prompts
        ]
        write_json(self._backend, self.key, records)

    def add(self, draft: PromptDraft) -> Prompt | None:
        """Create, persist, and return a new prompt (``None`` if it could not be saved)."""
        prompts = self.get_all()
        prompt_id = self._allocate_id({prompt.id for prompt in prompts})
        prompt = draft.build(prompt_id, self._clock())
        prompts.append(prompt)
        if not self._persist(prompts, "Failed to add prompt"):
            return None
        logger.info("Prompt added", extra={"prompt_id": prompt.id})
        return prompt

    def update(self, prompt_id: str, changes: PromptUpdate) -> Prompt | None:
        """Merge *changes* into the stored prompt; ``None`` when absent or unsaved."""
        prompts = self.get_all()
        index = self._index_of(prompts, prompt_id)
        if index is None:
            logger.info("Prompt not found for update", extra={"prompt_id": prompt_id})
            return None
        updated = changes.apply_to(prompts[index], self._clock())
        prompts[index] = updated
        if not self._persist(prompts, "Failed to update prompt"):
            return None
        return updated

    def delete(self, prompt_id: str) -> bool:
        """Remove the prompt; return False when it was absent or the write failed."""
        prompts = self.get_all()
        remaining = [prompt for prompt in prompts if prompt.id != prompt_id]
        if len(remaining) == len(prompts):
            return False
        if not self._persist(remaining, "Failed to delete prompt"):
            return False
        logger.info("Prompt deleted", extra={"prompt_id": prompt_id})
        return True

    def increment_usage(self, prompt_id: str) -> bool:
        """Bump ``usage_count`` by one and stamp ``last_used``; ``updated_at`` is untouched."""
        prompts = self.get_all()
        index = self._index_of(prompts, prompt_id)
        if index is None:
            return False
        prompt = prompts[index]
        prompt.usage_count += 1
        prompt.last_used = self._clock()
        return self._persist(prompts, "Failed to update usage")

    def toggle_favorite(self, prompt_id: str) -> Prompt | None:
        """Flip ``is_favorite`` through :meth:`update`."""
        current = self.get(prompt_id)
        if current is None:
            return None
        return self.update(prompt_id, PromptUpdate(is_favorite=not current.is_favorite))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _allocate_id(self, existing: set[str]) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate and candidate not in existing:
                return candidate
            logger.warning("Generated prompt id collided; retrying", extra={"prompt_id": candidate})
        raise KeepPromptError("Unable to allocate a unique prompt id")

    @staticmethod
    def _index_of(prompts: Sequence[Prompt], prompt_id: str) -> int | None:
        for index, prompt in enumerate(prompts):
            if prompt.id == prompt_id:
                return index
        return None

    def _persist(self, prompts: Sequence[Prompt], failure_message: str) -> bool:
        try:
            self.save_all(prompts)
        except StorageWriteError as exc:
            logger.error("%s: %s", failure_message, exc)
            self._report(failure_message)
            return False
        return True

    def _report(self, message: str) -> None:
        if self._notifications is not None:
            self._notifications.error(message)


__all__ = ["MAX_ID_ATTEMPTS", "PromptStore", "generate_id"]

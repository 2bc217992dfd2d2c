"""Storage backend protocol, key layout, and JSON helpers.

Updates:
  v0.2.0 - 2026-09-21 - Raise StorageReadError/StorageWriteError from JSON helpers.
  v0.1.0 - 2026-09-14 - Introduce key/value backend protocol.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..exceptions import StorageReadError, StorageWriteError

logger = logging.getLogger("keepprompt.storage")

DEFAULT_KEY_PREFIX = "keepprompt_"


@runtime_checkable
class StorageBackend(Protocol):
    """Opaque durable key/value store holding text values."""

    def get(self, key: str) -> str | None:
        """Return the stored value for *key* or ``None`` when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Persist *value* under *key*, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete *key*; missing keys are ignored."""
        ...


@dataclass(slots=True, frozen=True)
class StorageKeys:
    """Names of the independent blobs kept in the backend."""

    prefix: str = DEFAULT_KEY_PREFIX

    @property
    def prompts(self) -> str:
        return f"{self.prefix}prompts"

    @property
    def categories(self) -> str:
        return f"{self.prefix}categories"

    @property
    def settings(self) -> str:
        return f"{self.prefix}settings"

    @property
    def templates(self) -> str:
        # Reserved; nothing reads or writes it besides clear_all().
        return f"{self.prefix}templates"

    def all(self) -> tuple[str, ...]:
        return (self.prompts, self.categories, self.settings, self.templates)


def read_json(backend: StorageBackend, key: str) -> Any | None:
    """Return the decoded JSON value stored under *key* (``None`` when absent)."""
    raw = backend.get(key)
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageReadError(f"Stored value for {key!r} is not valid JSON") from exc


def write_json(backend: StorageBackend, key: str, value: Any) -> None:
    """Encode *value* as JSON and persist it under *key*."""
    try:
        payload = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise StorageWriteError(f"Value for {key!r} is not JSON serialisable") from exc
    backend.set(key, payload)
    logger.debug("Stored key", extra={"key": key, "size": len(payload)})


__all__ = [
    "DEFAULT_KEY_PREFIX",
    "StorageBackend",
    "StorageKeys",
    "logger",
    "read_json",
    "write_json",
]

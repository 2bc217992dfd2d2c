"""Dictionary-backed storage used by tests and the ``memory`` backend setting.

Updates:
  v0.1.1 - 2026-09-21 - Add optional byte quota to emulate browser storage limits.
  v0.1.0 - 2026-09-14 - Initial in-memory backend.
"""

from __future__ import annotations

from ..exceptions import StorageWriteError


class InMemoryStorage:
    """Volatile key/value store with an optional size quota."""

    def __init__(
        self,
        initial: dict[str, str] | None = None,
        *,
        quota_bytes: int | None = None,
    ) -> None:
        """Seed the store with *initial* values and remember the quota."""
        self._data: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            others = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if others + len(value.encode("utf-8")) > self._quota_bytes:
                raise StorageWriteError(f"Storage quota exceeded while writing {key!r}")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored key/value pair."""
        return dict(self._data)


__all__ = ["InMemoryStorage"]

"""Persisted user settings (theme and behaviour toggles).

Updates:
  v0.1.0 - 2026-09-28 - Extract settings persistence from the prompt store.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from models.settings_model import THEME_CHOICES, UserSettings

from .exceptions import StorageReadError, StorageWriteError
from .storage import StorageKeys, read_json, write_json

if TYPE_CHECKING:
    from .notifications import NotificationQueue
    from .storage import StorageBackend

logger = logging.getLogger("keepprompt.preferences")

_FIELD_ALIASES = {
    "theme": "theme",
    "default_category": "defaultCategory",
    "show_usage_stats": "showUsageStats",
    "enable_keyboard_shortcuts": "enableKeyboardShortcuts",
    "confirm_delete": "confirmDelete",
}


class SettingsStore:
    """Load and save the settings object."""

    def __init__(
        self,
        backend: StorageBackend,
        *,
        keys: StorageKeys | None = None,
        notifications: NotificationQueue | None = None,
    ) -> None:
        self._backend = backend
        self._keys = keys or StorageKeys()
        self._notifications = notifications

    @property
    def key(self) -> str:
        return self._keys.settings

    def get(self) -> UserSettings:
        """Return stored settings merged over defaults."""
        try:
            raw = read_json(self._backend, self.key)
        except StorageReadError as exc:
            logger.error("Failed to load settings: %s", exc)
            self._report("Failed to load settings")
            return UserSettings()
        if not isinstance(raw, Mapping):
            return UserSettings()
        return UserSettings.from_record(raw)

    def save(self, settings: UserSettings | Mapping[str, Any]) -> None:
        """Persist *settings*, raising :class:`StorageWriteError` on failure."""
        record = settings.to_record() if isinstance(settings, UserSettings) else dict(settings)
        write_json(self._backend, self.key, record)

    def update(self, **changes: Any) -> UserSettings | None:
        """Merge snake_case or camelCase *changes* into the stored settings."""
        record = self.get().to_record()
        for name, value in changes.items():
            record[_FIELD_ALIASES.get(name, name)] = value
        settings = UserSettings.from_record(record)
        try:
            self.save(settings)
        except StorageWriteError as exc:
            logger.error("Failed to save settings: %s", exc)
            self._report("Failed to save settings")
            return None
        return settings

    def toggle_theme(self) -> UserSettings | None:
        """Switch between light and dark and mark the choice as a user override."""
        current = self.get()
        light, dark = THEME_CHOICES
        theme = light if current.theme == dark else dark
        return self.update(theme=theme, themeOverride=True)

    def _report(self, message: str) -> None:
        if self._notifications is not None:
            self._notifications.error(message)


__all__ = ["SettingsStore"]

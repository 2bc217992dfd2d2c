"""User-facing application settings persisted next to prompts.

Updates: v0.1.0 - 2026-09-28 - Introduce UserSettings with stored-key passthrough.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

THEME_CHOICES = ("light", "dark")

_SETTINGS_KEYS = {
    "theme",
    "defaultCategory",
    "showUsageStats",
    "enableKeyboardShortcuts",
    "confirmDelete",
}


def _flag(value: Any) -> bool:
    # Only an explicit ``false`` disables a flag.
    return value is not False


@dataclass(slots=True)
class UserSettings:
    """Theme and behaviour preferences."""

    theme: str = "dark"
    default_category: str = "general"
    show_usage_stats: bool = True
    enable_keyboard_shortcuts: bool = True
    confirm_delete: bool = True
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    def to_record(self) -> dict[str, Any]:
        """Return the camelCase settings object."""
        record = dict(self.extra)
        record.update(
            {
                "theme": self.theme,
                "defaultCategory": self.default_category,
                "showUsageStats": self.show_usage_stats,
                "enableKeyboardShortcuts": self.enable_keyboard_shortcuts,
                "confirmDelete": self.confirm_delete,
            }
        )
        return record

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> UserSettings:
        """Hydrate settings, filling missing keys with defaults."""
        theme = str(data.get("theme") or "dark").strip().lower()
        return cls(
            theme=theme if theme in THEME_CHOICES else "dark",
            default_category=str(data.get("defaultCategory") or "general"),
            show_usage_stats=_flag(data.get("showUsageStats")),
            enable_keyboard_shortcuts=_flag(data.get("enableKeyboardShortcuts")),
            confirm_delete=_flag(data.get("confirmDelete")),
            extra={str(key): value for key, value in data.items() if key not in _SETTINGS_KEYS},
        )


__all__ = ["THEME_CHOICES", "UserSettings"]

"""Tests for persisted user settings."""

from __future__ import annotations

import json

from core.notifications import NotificationQueue
from core.preferences import SettingsStore
from core.storage import InMemoryStorage
from models.settings_model import UserSettings


def test_defaults_when_nothing_stored(backend: InMemoryStorage) -> None:
    settings = SettingsStore(backend).get()

    assert settings == UserSettings()
    assert settings.to_record() == {
        "theme": "dark",
        "defaultCategory": "general",
        "showUsageStats": True,
        "enableKeyboardShortcuts": True,
        "confirmDelete": True,
    }


def test_only_explicit_false_disables_flags(backend: InMemoryStorage) -> None:
    backend.set(
        "keepprompt_settings",
        json.dumps({"theme": "light", "confirmDelete": False, "showUsageStats": None}),
    )

    settings = SettingsStore(backend).get()

    assert settings.theme == "light"
    assert settings.confirm_delete is False
    assert settings.show_usage_stats is True


def test_update_accepts_snake_case_and_keeps_unknown_keys(backend: InMemoryStorage) -> None:
    backend.set("keepprompt_settings", json.dumps({"customFlag": 1}))
    store = SettingsStore(backend)

    updated = store.update(confirm_delete=False, default_category="coding")

    assert updated is not None
    stored = json.loads(backend.get("keepprompt_settings") or "{}")
    assert stored["confirmDelete"] is False
    assert stored["defaultCategory"] == "coding"
    assert stored["customFlag"] == 1


def test_toggle_theme_marks_override(backend: InMemoryStorage) -> None:
    store = SettingsStore(backend)

    assert store.toggle_theme().theme == "light"  # type: ignore[union-attr]
    assert store.toggle_theme().theme == "dark"  # type: ignore[union-attr]
    assert json.loads(backend.get("keepprompt_settings") or "{}")["themeOverride"] is True


def test_corrupt_settings_fall_back_and_notify(scheduler) -> None:
    notifications = NotificationQueue(scheduler)
    backend = InMemoryStorage({"keepprompt_settings": "nope"})

    assert SettingsStore(backend, notifications=notifications).get() == UserSettings()
    assert [entry.message for entry in notifications.entries()] == ["Failed to load settings"]


def test_update_write_failure_returns_none(scheduler) -> None:
    notifications = NotificationQueue(scheduler)
    store = SettingsStore(InMemoryStorage(quota_bytes=5), notifications=notifications)

    assert store.update(theme="light") is None
    assert [entry.message for entry in notifications.entries()] == ["Failed to save settings"]

"""Configuration helpers for KeepPrompt.

Updates: v0.1.1 - 2026-10-10 - Expose timing defaults.
Updates: v0.1.0 - 2026-09-20 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_DB_PATH,
    DEFAULT_SEARCH_DEBOUNCE_MS,
    DEFAULT_STORAGE_PREFIX,
    DEFAULT_TOAST_DURATION_MS,
    DEFAULT_TOAST_GRACE_MS,
    KeepPromptSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_SEARCH_DEBOUNCE_MS",
    "DEFAULT_STORAGE_PREFIX",
    "DEFAULT_TOAST_DURATION_MS",
    "DEFAULT_TOAST_GRACE_MS",
    "KeepPromptSettings",
    "SettingsError",
    "load_settings",
]

"""Settings management utilities for KeepPrompt configuration.

Updates:
  v0.2.1 - 2026-10-10 - Validate notification timings alongside the search debounce.
  v0.2.0 - 2026-10-01 - Load optional JSON config files ahead of environment variables.
  v0.1.0 - 2026-09-20 - Introduce pydantic-settings model for storage and timing options.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_DB_PATH = Path("data") / "keepprompt.db"
DEFAULT_STORAGE_PREFIX = "keepprompt_"
DEFAULT_SEARCH_DEBOUNCE_MS = 300
DEFAULT_TOAST_DURATION_MS = 3000
DEFAULT_TOAST_GRACE_MS = 300

_CONFIG_KEYS = (
    "storage_backend",
    "db_path",
    "storage_prefix",
    "search_debounce_ms",
    "toast_duration_ms",
    "toast_grace_ms",
)

logger = logging.getLogger("keepprompt.settings")


class SettingsError(Exception):
    """Raised when KeepPrompt configuration cannot be loaded or validated."""


class KeepPromptSettings(BaseSettings):
    """Application configuration sourced from keyword overrides, JSON files, or the env."""

    storage_backend: Literal["sqlite", "memory"] = Field(
        default="sqlite",
        description="Key/value backend used for prompts, categories, and settings.",
    )
    db_path: Path = Field(default=DEFAULT_DB_PATH)
    storage_prefix: str = Field(
        default=DEFAULT_STORAGE_PREFIX,
        description="Prefix prepended to every storage key.",
    )
    search_debounce_ms: int = Field(default=DEFAULT_SEARCH_DEBOUNCE_MS)
    toast_duration_ms: int = Field(default=DEFAULT_TOAST_DURATION_MS)
    toast_grace_ms: int = Field(default=DEFAULT_TOAST_GRACE_MS)

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "KEEPPROMPT_",
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("storage_backend", mode="before")
    @classmethod
    def _normalise_backend(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("db_path", mode="before")
    @classmethod
    def _normalise_path(cls, value: Any) -> Path:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("a filesystem path is required")
        return Path(str(value)).expanduser()

    @field_validator("storage_prefix")
    @classmethod
    def _strip_prefix(cls, value: str) -> str:
        return value.strip()

    @field_validator("search_debounce_ms", "toast_grace_ms")
    @classmethod
    def _validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("timings must not be negative")
        return value

    @field_validator("toast_duration_ms")
    @classmethod
    def _validate_duration(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("toast_duration_ms must be greater than zero")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(storage_backend="memory")).
            2. JSON configuration file.
            3. Environment variables (``KEEPPROMPT_*``).
        """
        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            env_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv("KEEPPROMPT_CONFIG_JSON")
            candidates: list[Path] = []
            if explicit_path:
                candidates.append(Path(explicit_path).expanduser())
            candidates.append(Path("config") / "config.json")

            for path in candidates:
                if not path.exists():
                    if explicit_path and path == candidates[0]:
                        raise SettingsError(f"Configuration file not found: {path}")
                    continue
                try:
                    raw_contents = path.read_text(encoding="utf-8")
                except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                    raise SettingsError(f"Unable to read configuration file: {path}") from exc
                try:
                    data = json.loads(raw_contents)
                except json.JSONDecodeError as exc:
                    raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
                if not isinstance(data, Mapping):
                    raise SettingsError(f"Configuration file {path} must contain a JSON object")
                mapping_data = cast("Mapping[object, Any]", data)
                unknown = sorted(str(key) for key in mapping_data if key not in _CONFIG_KEYS)
                if unknown:
                    logger.warning(
                        "Ignoring unknown key(s) %s in configuration file %s",
                        ", ".join(unknown),
                        path,
                    )
                return {
                    str(key): value for key, value in mapping_data.items() if key in _CONFIG_KEYS
                }
            return {}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> KeepPromptSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return KeepPromptSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid KeepPrompt configuration") from exc


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

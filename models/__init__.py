"""Data models for KeepPrompt.

Updates: v0.3.0 - 2026-09-28 - Export Category and UserSettings dataclasses.
Updates: v0.2.0 - 2026-09-25 - Export PromptDraft and PromptUpdate.
Updates: v0.1.0 - 2026-09-14 - Export Prompt dataclass.
"""

from .category_model import DEFAULT_CATEGORIES, Category, slugify_category
from .prompt_model import DEFAULT_CATEGORY_ID, Prompt, PromptDraft, PromptUpdate
from .settings_model import UserSettings

__all__ = [
    "Category",
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY_ID",
    "Prompt",
    "PromptDraft",
    "PromptUpdate",
    "UserSettings",
    "slugify_category",
]

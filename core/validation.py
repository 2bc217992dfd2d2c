"""Write-path validation for prompt payloads.

Updates:
  v0.1.1 - 2026-09-25 - Accept PromptDraft/PromptUpdate/Prompt objects and raw records.
  v0.1.0 - 2026-09-15 - Introduce prompt validation rules.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import PromptValidationError

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 10_000
DESCRIPTION_MAX_LENGTH = 300


@dataclass(slots=True, frozen=True)
class ValidationResult:
    """Outcome of validating a candidate prompt."""

    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise :class:`PromptValidationError` when any rule failed."""
        if self.errors:
            raise PromptValidationError(self.errors)


def _field(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def validate_prompt(candidate: Any) -> ValidationResult:
    """Check title, content, and description rules independently.

    *candidate* may be a mapping (record or form payload) or any object exposing
    ``title``, ``content``, and ``description`` attributes.
    """
    errors: list[str] = []

    title = str(_field(candidate, "title") or "").strip()
    if not title:
        errors.append("Title is required")
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Title must be less than {TITLE_MAX_LENGTH} characters")

    content = str(_field(candidate, "content") or "").strip()
    if not content:
        errors.append("Content is required")
    elif len(content) > CONTENT_MAX_LENGTH:
        errors.append(f"Content must be less than {CONTENT_MAX_LENGTH:,} characters")

    description = _field(candidate, "description")
    if description and len(str(description)) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters")

    return ValidationResult(tuple(errors))


__all__ = [
    "CONTENT_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "ValidationResult",
    "validate_prompt",
]

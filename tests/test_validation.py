"""Tests for prompt validation rules."""

from __future__ import annotations

import pytest

from core.exceptions import PromptValidationError
from core.validation import (
    CONTENT_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    validate_prompt,
)
from models.prompt_model import PromptDraft


def test_valid_candidate_has_no_errors() -> None:
    result = validate_prompt({"title": "Title", "content": "Body"})

    assert result.is_valid
    result.raise_for_errors()


def test_whitespace_only_fields_are_required() -> None:
    result = validate_prompt(PromptDraft(title="   ", content="\n\t"))

    assert result.errors == ("Title is required", "Content is required")


def test_length_limits_are_checked_independently() -> None:
    result = validate_prompt(
        {
            "title": "t" * (TITLE_MAX_LENGTH + 1),
            "content": "c" * (CONTENT_MAX_LENGTH + 1),
            "description": "d" * (DESCRIPTION_MAX_LENGTH + 1),
        }
    )

    assert result.errors == (
        "Title must be less than 100 characters",
        "Content must be less than 10,000 characters",
        "Description must be less than 300 characters",
    )


def test_limits_are_inclusive() -> None:
    result = validate_prompt(
        {
            "title": "t" * TITLE_MAX_LENGTH,
            "content": "c" * CONTENT_MAX_LENGTH,
            "description": "d" * DESCRIPTION_MAX_LENGTH,
        }
    )

    assert result.is_valid


def test_raise_for_errors_carries_messages() -> None:
    result = validate_prompt({"title": "", "content": "Body"})

    with pytest.raises(PromptValidationError) as excinfo:
        result.raise_for_errors()

    assert excinfo.value.errors == ["Title is required"]

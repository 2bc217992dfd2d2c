"""Tests for prompt record serialisation and partial updates."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from models.prompt_model import (
    Prompt,
    PromptDraft,
    PromptUpdate,
    format_timestamp,
    normalise_tags,
    parse_timestamp,
)


def _stored_record() -> dict[str, object]:
    return {
        "id": "abc",
        "title": "Loop helper",
        "content": "Write a for loop",
        "description": "Iteration",
        "tags": ["python", "basics"],
        "category": "coding",
        "isFavorite": True,
        "usageCount": 4,
        "createdAt": "2026-01-02T03:04:05.000Z",
        "updatedAt": "2026-01-03T03:04:05.000Z",
        "lastUsed": "2026-01-04T03:04:05.000Z",
        "colour": "teal",
    }


def test_from_record_reads_camel_case_fields() -> None:
    prompt = Prompt.from_record(_stored_record())

    assert prompt.title == "Loop helper"
    assert prompt.is_favorite is True
    assert prompt.usage_count == 4
    assert prompt.created_at == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert prompt.extra == {"colour": "teal"}


def test_to_record_round_trips_unknown_keys() -> None:
    record = _stored_record()

    assert Prompt.from_record(record).to_record() == record


def _legacy_record() -> dict[str, object]:
    return {
        "id": "b",
        "title": None,
        "content": "y",
        "tags": "Mixed",
        "createdAt": "yesterday",
        "updatedAt": 1700000000000,
        "usageCount": -1,
        "isFavorite": "false",
    }


def test_to_record_keeps_stored_values_of_legacy_record() -> None:
    record = _legacy_record()

    prompt = Prompt.from_record(record)

    assert prompt.is_favorite is False
    assert prompt.to_record() == record
    assert list(prompt.to_record()) == list(record)


def test_to_record_canonicalises_only_changed_fields() -> None:
    record = _legacy_record()
    later = datetime(2026, 3, 1, tzinfo=UTC)

    updated = PromptUpdate(title="Named").apply_to(Prompt.from_record(record), later)
    written = updated.to_record()

    assert written == {**record, "title": "Named", "updatedAt": "2026-03-01T00:00:00.000Z"}


def test_to_record_keeps_timestamp_text_of_unchanged_fields() -> None:
    record = {"id": "a", "title": "T", "content": "C", "createdAt": "2024-01-01T00:00:00Z"}
    prompt = Prompt.from_record(record)

    prompt.usage_count += 1
    prompt.last_used = datetime(2026, 3, 1, tzinfo=UTC)
    written = prompt.to_record()

    assert written["createdAt"] == "2024-01-01T00:00:00Z"
    assert written["usageCount"] == 1
    assert written["lastUsed"] == "2026-03-01T00:00:00.000Z"
    assert "category" not in written


def test_to_record_applies_extra_changes_over_stored_record() -> None:
    prompt = Prompt.from_record(_stored_record())

    prompt.extra["colour"] = "navy"
    prompt.extra["pinned"] = True

    written = prompt.to_record()

    assert written["colour"] == "navy"
    assert written["pinned"] is True


def test_to_record_omits_missing_optional_fields() -> None:
    record = Prompt(id="x", title="T", content="C").to_record()

    assert "description" not in record
    assert "createdAt" not in record
    assert "lastUsed" not in record
    assert record["category"] == "general"


def test_from_record_tolerates_partial_and_bad_values() -> None:
    prompt = Prompt.from_record({"id": "x", "usageCount": "many", "updatedAt": "yesterday"})

    assert prompt.title == ""
    assert prompt.usage_count == 0
    assert prompt.updated_at is None
    assert prompt.tags == []


def test_parse_timestamp_accepts_epoch_milliseconds() -> None:
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=UTC)
    assert parse_timestamp(True) is None
    assert parse_timestamp("") is None


def test_format_timestamp_uses_z_suffix() -> None:
    stamp = datetime(2026, 5, 6, 7, 8, 9, 123456, tzinfo=UTC)

    assert format_timestamp(stamp) == "2026-05-06T07:08:09.123Z"


def test_normalise_tags_lowercases_and_deduplicates() -> None:
    assert normalise_tags([" Python", "python", "", "Loops"]) == ["python", "loops"]
    assert normalise_tags("Single") == ["single"]


def test_matches_searches_tags_and_description() -> None:
    prompt = Prompt(id="1", title="A", content="B", description="About LOOPS", tags=["iter"])

    assert prompt.matches("loop")
    assert prompt.matches("ITER")
    assert not prompt.matches("recursion")
    assert prompt.matches("   ")


def test_draft_build_sets_timestamps_and_defaults() -> None:
    now = datetime(2026, 2, 1, tzinfo=UTC)
    draft = PromptDraft(title="T", content="C", tags=["A", "a"], category="  ")

    prompt = draft.build("id-1", now)

    assert prompt.tags == ["a"]
    assert prompt.category == "general"
    assert prompt.usage_count == 0
    assert prompt.created_at == prompt.updated_at == now
    assert prompt.last_used is None


def test_update_merges_only_supplied_fields() -> None:
    created = datetime(2026, 2, 1, tzinfo=UTC)
    original = Prompt(
        id="1",
        title="Old",
        content="Body",
        tags=["keep"],
        usage_count=3,
        created_at=created,
        updated_at=created,
        extra={"custom": 1},
    )

    updated = PromptUpdate(title="New").apply_to(original, created + timedelta(minutes=5))

    assert updated.title == "New"
    assert updated.content == "Body"
    assert updated.tags == ["keep"]
    assert updated.usage_count == 3
    assert updated.id == "1"
    assert updated.created_at == created
    assert updated.updated_at == created + timedelta(minutes=5)
    assert updated.extra == {"custom": 1}
    assert original.title == "Old"


def test_update_never_moves_updated_at_before_created_at() -> None:
    created = datetime(2026, 2, 1, tzinfo=UTC)
    original = Prompt(id="1", title="T", content="C", created_at=created, updated_at=created)

    updated = PromptUpdate(content="D").apply_to(original, created - timedelta(days=1))

    assert updated.updated_at == created


def test_update_changes_normalise_tags_and_category() -> None:
    changes = PromptUpdate(tags=["X", "x"], category=" ", is_favorite=False).changes()

    assert changes == {"tags": ["x"], "category": "general", "is_favorite": False}

"""Tests for search, filtering, sorting, and the debounced query pipeline."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from core.query import (
    ALL_CATEGORIES,
    QueryPipeline,
    QueryState,
    SortKey,
    SortOrder,
    apply_query,
    filter_by_category,
    search_prompts,
    sort_prompts,
)
from models.prompt_model import Prompt

_BASE = datetime(2026, 1, 1, tzinfo=UTC)


def _prompt(identifier: str, **fields) -> Prompt:
    fields.setdefault("title", identifier)
    fields.setdefault("content", "body")
    return Prompt(id=identifier, **fields)


def test_search_is_case_insensitive_across_fields() -> None:
    prompts = [
        _prompt("title", title="For LOOP basics"),
        _prompt("content", content="write a while-loop"),
        _prompt("description", description="Loop unrolling"),
        _prompt("tag", tags=["loops"]),
        _prompt("none", title="Recursion"),
    ]

    assert [prompt.id for prompt in search_prompts(prompts, "loop")] == [
        "title",
        "content",
        "description",
        "tag",
    ]


def test_blank_search_keeps_everything() -> None:
    prompts = [_prompt("a"), _prompt("b")]

    assert search_prompts(prompts, "  ") == prompts


def test_category_filter_matches_category_or_tag() -> None:
    prompts = [
        _prompt("cat", category="coding"),
        _prompt("tag", category="general", tags=["coding"]),
        _prompt("other", category="writing"),
    ]

    assert [prompt.id for prompt in filter_by_category(prompts, "coding")] == ["cat", "tag"]
    assert filter_by_category(prompts, ALL_CATEGORIES) == prompts


def test_sort_is_stable_for_equal_keys() -> None:
    prompts = [
        _prompt("a", usage_count=5),
        _prompt("b", usage_count=5),
        _prompt("c", usage_count=2),
    ]

    descending = sort_prompts(prompts, SortKey.USAGE_COUNT, SortOrder.DESC)
    ascending = sort_prompts(prompts, SortKey.USAGE_COUNT, SortOrder.ASC)

    assert [prompt.id for prompt in descending] == ["a", "b", "c"]
    assert [prompt.id for prompt in ascending] == ["c", "a", "b"]


def test_missing_timestamps_sort_as_oldest() -> None:
    prompts = [
        _prompt("never"),
        _prompt("recent", last_used=_BASE + timedelta(days=2)),
        _prompt("older", last_used=_BASE),
    ]

    ordered = sort_prompts(prompts, "lastUsed", "desc")

    assert [prompt.id for prompt in ordered] == ["recent", "older", "never"]


def test_title_sort_ignores_case() -> None:
    prompts = [_prompt("1", title="beta"), _prompt("2", title="Alpha"), _prompt("3", title="gamma")]

    ordered = sort_prompts(prompts, SortKey.TITLE, SortOrder.ASC)

    assert [prompt.title for prompt in ordered] == ["Alpha", "beta", "gamma"]


def test_unknown_sort_key_is_rejected() -> None:
    with pytest.raises(ValueError):
        sort_prompts([], "rating", "asc")


def test_apply_query_combines_search_filter_and_sort() -> None:
    prompts = [
        _prompt("a", title="Loop one", category="coding", updated_at=_BASE),
        _prompt("b", title="Loop two", category="coding", updated_at=_BASE + timedelta(hours=1)),
        _prompt("c", title="Loop three", category="writing"),
        _prompt("d", title="Other", category="coding"),
    ]
    state = QueryState(search_term="loop", category="coding")

    assert [prompt.id for prompt in apply_query(prompts, state)] == ["b", "a"]


def test_pipeline_computes_initial_visible_set(scheduler) -> None:
    pipeline = QueryPipeline(scheduler, prompts=[_prompt("a"), _prompt("b")])

    assert [prompt.id for prompt in pipeline.visible] == ["a", "b"]
    assert pipeline.recompute_count == 1
    assert not pipeline.pending


def test_pipeline_collapses_bursts_into_one_recompute(scheduler) -> None:
    pipeline = QueryPipeline(
        scheduler,
        prompts=[_prompt("loop", title="loop"), _prompt("other", title="other")],
    )

    for partial in ("l", "lo", "loo", "loop", "loop"):
        pipeline.set_search_term(partial)
        scheduler.advance(0.1)

    assert pipeline.recompute_count == 1
    assert len(pipeline.visible) == 2

    scheduler.advance(0.3)

    assert pipeline.recompute_count == 2
    assert [prompt.id for prompt in pipeline.visible] == ["loop"]


def test_pipeline_ignores_unchanged_values(scheduler) -> None:
    pipeline = QueryPipeline(scheduler)

    pipeline.set_category(ALL_CATEGORIES)
    pipeline.set_search_term("")
    pipeline.set_sort(SortKey.UPDATED_AT, SortOrder.DESC)

    assert not pipeline.pending


def test_pipeline_flush_and_cancel(scheduler) -> None:
    pipeline = QueryPipeline(scheduler, prompts=[_prompt("a")])

    pipeline.set_search_term("zzz")
    assert pipeline.cancel() is True
    scheduler.advance(1)
    assert len(pipeline.visible) == 1

    pipeline.set_search_term("zz")
    assert pipeline.flush() is True
    assert pipeline.visible == []
    assert pipeline.flush() is False


def test_pipeline_notifies_subscribers(scheduler) -> None:
    pipeline = QueryPipeline(scheduler)
    seen: list[list[str]] = []
    unsubscribe = pipeline.subscribe(lambda visible: seen.append([p.id for p in visible]))

    pipeline.set_prompts([_prompt("a")])
    scheduler.advance(0.3)
    unsubscribe()
    pipeline.set_prompts([])
    scheduler.advance(0.3)

    assert seen == [["a"]]


def test_toggle_and_clear_reset_state(scheduler) -> None:
    pipeline = QueryPipeline(scheduler)

    pipeline.toggle_sort_order()
    pipeline.set_category("coding")
    pipeline.set_search_term("x")
    assert pipeline.state.sort_order is SortOrder.ASC

    pipeline.clear()

    assert pipeline.state == QueryState()

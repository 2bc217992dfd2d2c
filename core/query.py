"""Search, category filtering, and sorting of the visible prompt set.

:class:`QueryPipeline` keeps the latest search term, category filter, sort
key and order, and record snapshot, and recomputes the visible set on a debounce timer so
bursts of edits (e.g. typing) collapse into a single recomputation.

Updates:
  v0.3.0 - 2026-10-08 - Skip rescheduling when a setter receives an unchanged value.
  v0.2.0 - 2026-10-04 - Debounce recomputation through the Debouncer helper.
  v0.1.0 - 2026-09-22 - Extract search/filter/sort helpers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from models.prompt_model import Prompt, timestamp_or_epoch

from .scheduling import Debouncer

if TYPE_CHECKING:
    from .scheduling import Scheduler

logger = logging.getLogger("keepprompt.query")

ALL_CATEGORIES = "all"
SEARCH_DEBOUNCE_MS = 300


class SortKey(str, Enum):
    """Record attributes the visible set can be ordered by."""
    TITLE = "title"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    USAGE_COUNT = "usageCount"
    LAST_USED = "lastUsed"


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortOrder:
        return SortOrder.ASC if self is SortOrder.DESC else SortOrder.DESC


@dataclass(slots=True, frozen=True)
class QueryState:
    """Inputs that determine the visible set."""

    search_term: str = ""
    category: str = ALL_CATEGORIES
    sort_key: SortKey = SortKey.UPDATED_AT
    sort_order: SortOrder = SortOrder.DESC


def search_prompts(prompts: Iterable[Prompt], term: str) -> list[Prompt]:
    """Return prompts whose title, content, description, or tags contain *term*."""
    if not term.strip():
        return list(prompts)
    return [prompt for prompt in prompts if prompt.matches(term)]


def filter_by_category(prompts: Iterable[Prompt], category: str) -> list[Prompt]:
    """Keep prompts in *category* or tagged with it; ``"all"`` keeps everything."""
    if not category or category == ALL_CATEGORIES:
        return list(prompts)
    return [
        prompt for prompt in prompts if prompt.category == category or category in prompt.tags
    ]


def _sort_value(key: SortKey) -> Callable[[Prompt], Any]:
    if key is SortKey.TITLE:
        return lambda prompt: prompt.title.casefold()
    if key is SortKey.CREATED_AT:
        return lambda prompt: timestamp_or_epoch(prompt.created_at)
    if key is SortKey.USAGE_COUNT:
        return lambda prompt: prompt.usage_count or 0
    if key is SortKey.LAST_USED:
        return lambda prompt: timestamp_or_epoch(prompt.last_used)
    return lambda prompt: timestamp_or_epoch(prompt.updated_at)


def sort_prompts(
    prompts: Iterable[Prompt],
    key: SortKey | str = SortKey.UPDATED_AT,
    order: SortOrder | str = SortOrder.DESC,
) -> list[Prompt]:
    """Return prompts stably sorted by *key*; equal keys keep their input order."""
    # sorted(reverse=True) preserves the relative order of equal elements.
    return sorted(
        prompts,
        key=_sort_value(SortKey(key)),
        reverse=SortOrder(order) is SortOrder.DESC,
    )


def apply_query(prompts: Iterable[Prompt], state: QueryState) -> list[Prompt]:
    """Run search, category filter, and sort for *state*."""
    matched = search_prompts(prompts, state.search_term)
    filtered = filter_by_category(matched, state.category)
    return sort_prompts(filtered, state.sort_key, state.sort_order)


class QueryPipeline:
    """Debounced derivation of the visible set from a record snapshot."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        prompts: Iterable[Prompt] = (),
        delay_ms: int = SEARCH_DEBOUNCE_MS,
        state: QueryState | None = None,
    ) -> None:
        """Compute the initial visible set and prepare the debounce timer."""
        self._lock = threading.RLock()
        self._prompts: tuple[Prompt, ...] = tuple(prompts)
        self._state = state or QueryState()
        self._visible: tuple[Prompt, ...] = ()
        self._recompute_count = 0
        self._listeners: list[Callable[[Sequence[Prompt]], None]] = []
        self._debouncer = Debouncer(scheduler, delay_ms / 1000, self._recompute)
        self._recompute()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def visible(self) -> list[Prompt]:
        """Return the visible set as of the last recomputation."""
        with self._lock:
            return list(self._visible)

    @property
    def state(self) -> QueryState:
        with self._lock:
            return self._state

    @property
    def prompts(self) -> list[Prompt]:
        with self._lock:
            return list(self._prompts)

    @property
    def recompute_count(self) -> int:
        with self._lock:
            return self._recompute_count

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def subscribe(self, callback: Callable[[Sequence[Prompt]], None]) -> Callable[[], None]:
        """Call *callback* with each new visible set; return an unsubscribe function."""
        with self._lock:
            self._listeners.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def set_prompts(self, prompts: Iterable[Prompt]) -> None:
        """Replace the record snapshot."""
        with self._lock:
            self._prompts = tuple(prompts)
        self._debouncer.trigger()

    def set_search_term(self, term: str) -> None:
        self._change(search_term=term)

    def set_category(self, category: str) -> None:
        self._change(category=category or ALL_CATEGORIES)

    def set_sort(self, key: SortKey | str, order: SortOrder | str | None = None) -> None:
        """Change the sort key and, optionally, the direction."""
        changes: dict[str, Any] = {"sort_key": SortKey(key)}
        if order is not None:
            changes["sort_order"] = SortOrder(order)
        self._change(**changes)

    def toggle_sort_order(self) -> None:
        with self._lock:
            order = self._state.sort_order.toggled()
        self._change(sort_order=order)

    def clear(self) -> None:
        """Reset search term, category, and sort to their defaults."""
        defaults = QueryState()
        self._change(
            search_term=defaults.search_term,
            category=defaults.category,
            sort_key=defaults.sort_key,
            sort_order=defaults.sort_order,
        )

    def flush(self) -> bool:
        """Run a pending recomputation immediately."""
        return self._debouncer.flush()

    def cancel(self) -> bool:
        """Drop a pending recomputation."""
        return self._debouncer.cancel()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _change(self, **changes: Any) -> None:
        with self._lock:
            updated = replace(self._state, **changes)
            if updated == self._state:
                return
            self._state = updated
        self._debouncer.trigger()

    def _recompute(self) -> None:
        with self._lock:
            visible = tuple(apply_query(self._prompts, self._state))
            self._visible = visible
            self._recompute_count += 1
            listeners = list(self._listeners)
        logger.debug(
            "Visible set recomputed",
            extra={"visible": len(visible), "recompute_count": self._recompute_count},
        )
        for callback in listeners:
            try:
                callback(list(visible))
            except Exception:  # pragma: no cover - listener errors are logged
                logger.exception("Visible set listener raised an exception")


__all__ = [
    "ALL_CATEGORIES",
    "SEARCH_DEBOUNCE_MS",
    "QueryPipeline",
    "QueryState",
    "SortKey",
    "SortOrder",
    "apply_query",
    "filter_by_category",
    "search_prompts",
    "sort_prompts",
]

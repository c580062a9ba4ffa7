"""Pick room name suggestions from a suggestion bank."""

from __future__ import annotations

import random
from datetime import datetime
from typing import Collection, Final, Sequence

from integrations.suggestions import SuggestionBank
from wizard.types import SelectionMode

MAX_SUGGESTIONS: Final[int] = 3
MAX_RECENT_MEMORY: Final[int] = 12
MAX_MODE_SUGGESTIONS: Final[int] = 2

DEFAULT_SUGGESTIONS: Final[tuple[str, ...]] = (
    "Food Planning Group",
    "Meal Decision Squad",
    "Dinner Plans",
    "Food Adventure",
    "Dining Group",
)

_MODE_CATEGORIES: Final[frozenset[str]] = frozenset(
    mode.value for mode in SelectionMode if mode.is_selected
)


def time_category(now: datetime) -> str:
    """Return the time-of-day category for ``now``."""

    hour = now.hour
    if 5 <= hour < 11:
        return "morning"
    if 11 <= hour < 14:
        return "lunch"
    if 14 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "latenight"


def _unused(values: Sequence[str], recently_used: Collection[str]) -> list[str]:
    return [value for value in values if value not in recently_used]


def _shuffled(values: list[str], rng: random.Random) -> list[str]:
    copy = list(values)
    rng.shuffle(copy)
    return copy


def pick_suggestions(
    bank: SuggestionBank,
    mode: SelectionMode,
    *,
    now: datetime | None = None,
    recently_used: Collection[str] = (),
    rng: random.Random | None = None,
) -> list[str]:
    """Return up to :data:`MAX_SUGGESTIONS` fresh room names.

    Mode-specific names come first (at most two), then names for the current
    time of day (and the weekend), then occasion names, then everything else.
    Fixed defaults fill any remaining slots.
    """

    now = now or datetime.now()
    rng = rng or random.Random()
    primary_time = time_category(now)

    time_specific = _unused(bank.for_category(primary_time), recently_used)
    if now.weekday() >= 5:
        time_specific += _unused(bank.for_category("weekend"), recently_used)
    mode_specific = _unused(bank.for_category(mode.value), recently_used) if mode.is_selected else []
    occasion = _unused(bank.for_category("occasion"), recently_used)
    excluded = {primary_time, "weekend", "occasion"} | _MODE_CATEGORIES
    others = [
        value
        for category, values in bank.entries.items()
        if category not in excluded
        for value in _unused(values, recently_used)
    ]

    picked: list[str] = []

    def _take(pool: list[str], limit: int) -> None:
        for value in _shuffled(pool, rng):
            if len(picked) >= limit:
                return
            if value not in picked:
                picked.append(value)

    _take(mode_specific, MAX_MODE_SUGGESTIONS)
    for pool in (time_specific, occasion, others):
        _take(pool, MAX_SUGGESTIONS)

    picked = _shuffled(picked, rng)[:MAX_SUGGESTIONS]
    for default in DEFAULT_SUGGESTIONS:
        if len(picked) >= MAX_SUGGESTIONS:
            break
        if default not in picked:
            picked.append(default)
    return picked


def remember_suggestions(recent: Sequence[str], shown: Sequence[str], *, limit: int = MAX_RECENT_MEMORY) -> list[str]:
    """Append ``shown`` to ``recent`` keeping only the newest ``limit`` entries."""

    combined = [*recent, *shown]
    return combined[-limit:] if len(combined) > limit else combined


__all__ = [
    "DEFAULT_SUGGESTIONS",
    "MAX_RECENT_MEMORY",
    "MAX_SUGGESTIONS",
    "pick_suggestions",
    "remember_suggestions",
    "time_category",
]

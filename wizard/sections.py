"""Section completion tracking for the basic-info step.

Relevance and prerequisite rules are policy, so they live in two small
explicit tables instead of a generic dependency graph. The tracker itself only
stores raw flags; the controller decides what they mean via
:func:`effective_completion`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Iterable, Mapping

from wizard.types import CompletionMap, SectionKey, SelectionMode

MIN_TITLE_LENGTH_FOR_SECTIONS: Final[int] = 3

_DINING_MODES: Final[frozenset[SelectionMode]] = frozenset({SelectionMode.DINE_OUT, SelectionMode.BOTH})
_COOKING_MODES: Final[frozenset[SelectionMode]] = frozenset({SelectionMode.COOK, SelectionMode.BOTH})

RELEVANT_MODES: Final[Mapping[SectionKey, frozenset[SelectionMode]]] = MappingProxyType(
    {
        SectionKey.MODE_CHOICE: frozenset(SelectionMode),
        SectionKey.PRIMARY_OPTIONS: _DINING_MODES,
        SectionKey.CATEGORY_CHOICE: _DINING_MODES,
        SectionKey.SECONDARY_OPTIONS: _COOKING_MODES,
    }
)

# (section, mode) -> prerequisite sections. Missing modes use the ``None`` row.
_PREREQUISITES: Final[Mapping[SectionKey, Mapping[SelectionMode | None, tuple[SectionKey, ...]]]] = MappingProxyType(
    {
        SectionKey.MODE_CHOICE: {None: ()},
        SectionKey.PRIMARY_OPTIONS: {None: (SectionKey.MODE_CHOICE,)},
        SectionKey.CATEGORY_CHOICE: {
            SelectionMode.DINE_OUT: (SectionKey.MODE_CHOICE, SectionKey.PRIMARY_OPTIONS),
            SelectionMode.BOTH: (SectionKey.MODE_CHOICE, SectionKey.PRIMARY_OPTIONS),
            None: (SectionKey.MODE_CHOICE,),
        },
        SectionKey.SECONDARY_OPTIONS: {
            SelectionMode.BOTH: (SectionKey.MODE_CHOICE, SectionKey.CATEGORY_CHOICE),
            None: (SectionKey.MODE_CHOICE,),
        },
    }
)


def empty_completion() -> dict[SectionKey, bool]:
    """Return a completion map with every key present and ``False``."""

    return {key: False for key in SectionKey}


def is_relevant(key: SectionKey, mode: SelectionMode) -> bool:
    """Return ``True`` when ``key`` applies under ``mode``."""

    return mode in RELEVANT_MODES[key]


def prerequisites(key: SectionKey, mode: SelectionMode) -> tuple[SectionKey, ...]:
    """Return the sections that must be complete before ``key``."""

    rows = _PREREQUISITES[key]
    return rows.get(mode, rows[None])


def is_title_ready(title: str) -> bool:
    return len(title.strip()) >= MIN_TITLE_LENGTH_FOR_SECTIONS


def is_disabled(key: SectionKey, mode: SelectionMode, completion: CompletionMap, *, title: str = "") -> bool:
    """Return ``True`` when ``key`` cannot be interacted with yet.

    ``completion`` is accepted for symmetry with :func:`is_highlighted`; a
    section is never disabled because of completion, only because it is
    irrelevant to ``mode`` or the title gate is not met.
    """

    if key is SectionKey.MODE_CHOICE:
        return not is_title_ready(title)
    return not is_relevant(key, mode)


def is_highlighted(key: SectionKey, mode: SelectionMode, completion: CompletionMap, *, title: str = "") -> bool:
    """Return ``True`` when ``key`` is the next actionable section."""

    if is_disabled(key, mode, completion, title=title):
        return False
    if not is_relevant(key, mode) or completion.get(key, False):
        return False
    return all(completion.get(dependency, False) for dependency in prerequisites(key, mode))


def effective_completion(mode: SelectionMode, completion: CompletionMap) -> Mapping[SectionKey, bool]:
    """Return ``completion`` with entries masked whose prerequisites are unmet.

    Keys are resolved in declaration order, which is also dependency order, so
    a masked prerequisite masks its dependents too.
    """

    resolved: dict[SectionKey, bool] = {}
    for key in SectionKey:
        raw = bool(completion.get(key, False))
        resolved[key] = raw and all(resolved.get(dependency, False) for dependency in prerequisites(key, mode))
    return MappingProxyType(resolved)


class SectionCompletionTracker:
    """Mutable holder for the raw section completion flags."""

    def __init__(self, initial: Mapping[SectionKey, bool] | None = None) -> None:
        self._flags = empty_completion()
        if initial:
            for key, value in initial.items():
                self._flags[SectionKey(key)] = bool(value)

    def set_section_complete(self, key: SectionKey, value: bool) -> bool:
        """Overwrite a single flag and report whether it changed.

        Dependents are never inferred; callers recompute them.
        """

        key = SectionKey(key)
        changed = self._flags[key] != bool(value)
        self._flags[key] = bool(value)
        return changed

    def reset(self, keys: Iterable[SectionKey] | None = None) -> None:
        for key in keys if keys is not None else SectionKey:
            self._flags[SectionKey(key)] = False

    def snapshot(self) -> Mapping[SectionKey, bool]:
        """Return an immutable copy of the raw flags."""

        return MappingProxyType(dict(self._flags))

    def __getitem__(self, key: SectionKey) -> bool:
        return self._flags[SectionKey(key)]


__all__ = [
    "MIN_TITLE_LENGTH_FOR_SECTIONS",
    "RELEVANT_MODES",
    "SectionCompletionTracker",
    "effective_completion",
    "empty_completion",
    "is_disabled",
    "is_highlighted",
    "is_relevant",
    "is_title_ready",
    "prerequisites",
]

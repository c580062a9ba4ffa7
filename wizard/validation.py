"""Exit gates for wizard steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Mapping

from wizard.sections import empty_completion
from wizard.types import (
    CompletionMap,
    SectionKey,
    SelectionMode,
    SettingsCompletionMap,
    SettingsKey,
)

REQUIRED_SECTIONS_BY_MODE: Final[Mapping[SelectionMode, tuple[SectionKey, ...]]] = {
    SelectionMode.COOK: (SectionKey.SECONDARY_OPTIONS,),
    SelectionMode.DINE_OUT: (SectionKey.PRIMARY_OPTIONS, SectionKey.CATEGORY_CHOICE),
    SelectionMode.BOTH: (
        SectionKey.PRIMARY_OPTIONS,
        SectionKey.CATEGORY_CHOICE,
        SectionKey.SECONDARY_OPTIONS,
    ),
}


def _empty_settings() -> dict[SettingsKey, bool]:
    return {key: False for key in SettingsKey}


@dataclass(frozen=True)
class GateContext:
    """Snapshot of everything the exit gates look at."""

    title: str = ""
    mode: SelectionMode = SelectionMode.NONE
    completion: CompletionMap = field(default_factory=empty_completion)
    settings_completion: SettingsCompletionMap = field(default_factory=_empty_settings)

    @property
    def has_title(self) -> bool:
        return bool(self.title.strip())


def blocking_sections(step: int, context: GateContext) -> list[str]:
    """Return the unmet requirements that keep ``step`` from advancing."""

    if step == 1:
        missing: list[str] = []
        if not context.has_title:
            missing.append("title")
        if not context.mode.is_selected:
            missing.append(SectionKey.MODE_CHOICE.value)
            return missing
        for key in REQUIRED_SECTIONS_BY_MODE.get(context.mode, ()):
            if not context.completion.get(key, False):
                missing.append(key.value)
        return missing
    if step == 2:
        return [key.value for key in SettingsKey if not context.settings_completion.get(key, False)]
    if step == 3:
        return []
    return ["step"]


def can_advance(step: int, context: GateContext) -> bool:
    """Return ``True`` when the exit condition of ``step`` is satisfied.

    Step 3 has no exit gate because it leads to submission; unknown steps
    fail closed.
    """

    return not blocking_sections(step, context)


__all__ = [
    "GateContext",
    "REQUIRED_SECTIONS_BY_MODE",
    "blocking_sections",
    "can_advance",
]

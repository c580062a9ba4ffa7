"""Shared type aliases and enums for the wizard package."""

from __future__ import annotations

from enum import StrEnum
from typing import Mapping


LangPair = tuple[str, str]

# Bilingual text pair used throughout the wizard UI
LocalizedText = LangPair


class SelectionMode(StrEnum):
    """Top-level branching choice of the basic-info step."""

    COOK = "cooking"
    DINE_OUT = "dining-out"
    BOTH = "both"
    NONE = "none"

    @classmethod
    def normalize(cls, value: object) -> "SelectionMode":
        """Map ``None``, empty, ``"neutral"`` and unknown values to :attr:`NONE`."""

        if isinstance(value, SelectionMode):
            return value
        if not isinstance(value, str):
            return cls.NONE
        cleaned = value.strip().lower()
        if not cleaned or cleaned == "neutral":
            return cls.NONE
        try:
            return cls(cleaned)
        except ValueError:
            return cls.NONE

    @property
    def is_selected(self) -> bool:
        return self is not SelectionMode.NONE


class SectionKey(StrEnum):
    """Sub-sections of the basic-info step with their own completion flag."""

    MODE_CHOICE = "mode_choice"
    PRIMARY_OPTIONS = "primary_options"
    CATEGORY_CHOICE = "category_choice"
    SECONDARY_OPTIONS = "secondary_options"


class SettingsKey(StrEnum):
    """Sections of the settings step."""

    PARTICIPANT_ACCESS = "participant_access"
    DECISION_TIMER = "decision_timer"
    DEADLINE_NOTIFICATIONS = "deadline_notifications"


CompletionMap = Mapping[SectionKey, bool]
SettingsCompletionMap = Mapping[SettingsKey, bool]


__all__ = [
    "CompletionMap",
    "LangPair",
    "LocalizedText",
    "SectionKey",
    "SelectionMode",
    "SettingsCompletionMap",
    "SettingsKey",
]

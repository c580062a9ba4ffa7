"""Derive completion flags and timer values from a :class:`RoomDraft`."""

from __future__ import annotations

import logging

from models.room import RoomDraft
from wizard.types import SectionKey, SettingsKey

logger = logging.getLogger(__name__)

DEFAULT_TIMER_MINUTES = 30


def is_participant_access_complete(draft: RoomDraft) -> bool:
    limit = draft.participant_limit
    return limit is not None and limit > 0 and draft.access_control is not None


def is_decision_timer_complete(draft: RoomDraft) -> bool:
    option = draft.timer_option
    if not option:
        return False
    if option == "custom":
        return draft.custom_duration > 0
    return True


def is_deadline_complete(draft: RoomDraft) -> bool:
    """A deadline is only required once reminders are switched on."""

    return bool(draft.deadline.strip()) or not draft.reminders


def settings_completion(draft: RoomDraft) -> dict[SettingsKey, bool]:
    """Return the completion map of the settings step."""

    return {
        SettingsKey.PARTICIPANT_ACCESS: is_participant_access_complete(draft),
        SettingsKey.DECISION_TIMER: is_decision_timer_complete(draft),
        SettingsKey.DEADLINE_NOTIFICATIONS: is_deadline_complete(draft),
    }


def derive_section_completion(draft: RoomDraft) -> dict[SectionKey, bool]:
    """Return raw basic-info section flags as implied by the draft fields.

    The flags are not masked by prerequisites here; that happens when the
    controller reads them.
    """

    return {
        SectionKey.MODE_CHOICE: draft.mode.is_selected,
        SectionKey.PRIMARY_OPTIONS: bool(draft.price_range),
        SectionKey.CATEGORY_CHOICE: bool(draft.cuisines),
        SectionKey.SECONDARY_OPTIONS: bool(draft.recipe_difficulty),
    }


def timer_minutes(draft: RoomDraft) -> int:
    """Return the decision timer in minutes."""

    option = draft.timer_option
    if option == "custom":
        if draft.custom_duration <= 0:
            return DEFAULT_TIMER_MINUTES
        if draft.duration_unit == "hours":
            return draft.custom_duration * 60
        return draft.custom_duration
    try:
        minutes = int(option)
    except ValueError:
        logger.debug("Unrecognised timer option %r; using %s minutes", option, DEFAULT_TIMER_MINUTES)
        return DEFAULT_TIMER_MINUTES
    return minutes if minutes > 0 else DEFAULT_TIMER_MINUTES


__all__ = [
    "DEFAULT_TIMER_MINUTES",
    "derive_section_completion",
    "is_deadline_complete",
    "is_decision_timer_complete",
    "is_participant_access_complete",
    "settings_completion",
    "timer_minutes",
]

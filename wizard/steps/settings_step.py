from __future__ import annotations

from datetime import date, datetime, time
from typing import TYPE_CHECKING

import streamlit as st

from constants.keys import UIKeys
from core.room_settings import settings_completion, timer_minutes
from models.room import MAX_PARTICIPANTS, TIMER_OPTIONS
from utils.i18n import tr
from wizard.types import LocalizedText, SettingsKey

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from wizard.session import RoomWizard

__all__ = ["deadline_floor", "step_settings"]

_TIMER_LABELS: dict[str, LocalizedText] = {
    "15": ("15 Minuten", "15 minutes"),
    "30": ("30 Minuten", "30 minutes"),
    "60": ("1 Stunde", "1 hour"),
    "custom": ("Eigene Dauer", "Custom"),
}

_SETTINGS_HEADINGS: dict[SettingsKey, LocalizedText] = {
    SettingsKey.PARTICIPANT_ACCESS: ("Teilnehmer & Zugang", "Participants & access"),
    SettingsKey.DECISION_TIMER: ("Entscheidungs-Timer", "Decision timer"),
    SettingsKey.DEADLINE_NOTIFICATIONS: ("Deadline & Erinnerungen", "Deadline & reminders"),
}


def _heading(wizard: "RoomWizard", key: SettingsKey) -> None:
    done = settings_completion(wizard.draft)[key]
    marker = "✓ " if done else ""
    st.markdown(f"#### {marker}{tr(*_SETTINGS_HEADINGS[key])}")


def _update(wizard: "RoomWizard", field: str, key: str) -> None:
    wizard.update_draft(**{field: st.session_state.get(key)})


def _render_participant_access(wizard: "RoomWizard") -> None:
    _heading(wizard, SettingsKey.PARTICIPANT_ACCESS)
    st.session_state.setdefault(UIKeys.PARTICIPANT_LIMIT, wizard.draft.participant_limit or 0)
    st.slider(
        tr("Maximale Teilnehmer", "Maximum participants"),
        min_value=0,
        max_value=MAX_PARTICIPANTS,
        key=UIKeys.PARTICIPANT_LIMIT,
        on_change=lambda: _update(wizard, "participant_limit", UIKeys.PARTICIPANT_LIMIT),
    )
    access_options = [None, False, True]
    access_labels: dict[bool | None, LocalizedText] = {
        None: ("Bitte wählen", "Please choose"),
        False: ("Offen (Link genügt)", "Open (link is enough)"),
        True: ("Privat (Code nötig)", "Private (code required)"),
    }
    st.session_state.setdefault(UIKeys.ACCESS_CONTROL, wizard.draft.access_control)
    st.radio(
        tr("Zugang", "Access"),
        access_options,
        key=UIKeys.ACCESS_CONTROL,
        format_func=lambda value: tr(*access_labels[value]),
        horizontal=True,
        on_change=lambda: _update(wizard, "access_control", UIKeys.ACCESS_CONTROL),
    )


def _render_decision_timer(wizard: "RoomWizard") -> None:
    _heading(wizard, SettingsKey.DECISION_TIMER)
    st.session_state.setdefault(UIKeys.TIMER_OPTION, wizard.draft.timer_option or TIMER_OPTIONS[1])
    st.radio(
        tr("Dauer", "Duration"),
        list(TIMER_OPTIONS),
        key=UIKeys.TIMER_OPTION,
        format_func=lambda value: tr(*_TIMER_LABELS[value]),
        horizontal=True,
        on_change=lambda: _update(wizard, "timer_option", UIKeys.TIMER_OPTION),
    )
    if wizard.draft.timer_option == "custom":
        duration_col, unit_col = st.columns([2, 1])
        with duration_col:
            st.session_state.setdefault(UIKeys.CUSTOM_DURATION, wizard.draft.custom_duration)
            st.number_input(
                tr("Eigene Dauer", "Custom duration"),
                min_value=0,
                step=1,
                key=UIKeys.CUSTOM_DURATION,
                on_change=lambda: _update(wizard, "custom_duration", UIKeys.CUSTOM_DURATION),
            )
        with unit_col:
            st.session_state.setdefault(UIKeys.DURATION_UNIT, wizard.draft.duration_unit)
            st.selectbox(
                tr("Einheit", "Unit"),
                ["minutes", "hours"],
                key=UIKeys.DURATION_UNIT,
                format_func=lambda value: tr("Minuten", "minutes") if value == "minutes" else tr("Stunden", "hours"),
                on_change=lambda: _update(wizard, "duration_unit", UIKeys.DURATION_UNIT),
            )
    st.caption(tr("Timer: {minutes} Minuten", "Timer: {minutes} minutes").format(minutes=timer_minutes(wizard.draft)))


def _parse_deadline(raw: str) -> date | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        return None


def deadline_floor(current: object, today: date | None = None) -> date:
    """Earliest selectable deadline; never later than an already stored date."""

    today = today or date.today()
    if isinstance(current, datetime):
        current = current.date()
    if isinstance(current, date) and current < today:
        return current
    return today


def _render_deadline(wizard: "RoomWizard") -> None:
    _heading(wizard, SettingsKey.DEADLINE_NOTIFICATIONS)
    st.session_state.setdefault(UIKeys.REMINDERS, wizard.draft.reminders)
    st.toggle(
        tr("Erinnerungen senden", "Send reminders"),
        key=UIKeys.REMINDERS,
        on_change=lambda: _update(wizard, "reminders", UIKeys.REMINDERS),
    )
    st.session_state.setdefault(UIKeys.DEADLINE, _parse_deadline(wizard.draft.deadline))

    def _on_deadline_change() -> None:
        picked = st.session_state.get(UIKeys.DEADLINE)
        value = datetime.combine(picked, time(hour=18)).isoformat() if isinstance(picked, date) else ""
        wizard.update_draft(deadline=value)

    st.date_input(
        tr("Deadline", "Deadline"),
        key=UIKeys.DEADLINE,
        min_value=deadline_floor(st.session_state.get(UIKeys.DEADLINE)),
        on_change=_on_deadline_change,
    )
    if wizard.draft.reminders and not wizard.draft.deadline:
        st.caption(tr("Für Erinnerungen wird eine Deadline benötigt.", "Reminders need a deadline."))


def step_settings(wizard: "RoomWizard") -> None:
    """Render participant, timer and deadline settings."""

    _render_participant_access(wizard)
    _render_decision_timer(wizard)
    _render_deadline(wizard)

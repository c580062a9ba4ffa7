from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import streamlit as st

from constants.keys import UIKeys
from models.room import CUISINE_OPTIONS, PRICE_RANGES, RECIPE_DIFFICULTIES
from utils.i18n import tr
from wizard.sections import is_disabled, is_highlighted, is_relevant, is_title_ready
from wizard.types import LocalizedText, SectionKey, SelectionMode

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from wizard.session import RoomWizard

__all__ = ["step_basic_info"]

_MODE_LABELS: dict[SelectionMode, LocalizedText] = {
    SelectionMode.COOK: ("🍳 Selbst kochen", "🍳 Cooking"),
    SelectionMode.DINE_OUT: ("🍽️ Essen gehen", "🍽️ Dining out"),
    SelectionMode.BOTH: ("✨ Beides", "✨ Both"),
}

_SECTION_HEADINGS: dict[SectionKey, LocalizedText] = {
    SectionKey.MODE_CHOICE: ("Wie wollt ihr essen?", "How do you want to eat?"),
    SectionKey.PRIMARY_OPTIONS: ("Preisklasse & Umkreis", "Price range & distance"),
    SectionKey.CATEGORY_CHOICE: ("Küchen", "Cuisines"),
    SectionKey.SECONDARY_OPTIONS: ("Rezept-Schwierigkeit", "Recipe difficulty"),
}

_DIFFICULTY_LABELS: dict[str, LocalizedText] = {
    "easy": ("Einfach", "Easy"),
    "medium": ("Mittel", "Medium"),
    "hard": ("Anspruchsvoll", "Challenging"),
}


def _section_heading(wizard: "RoomWizard", key: SectionKey) -> bool:
    """Render the heading of ``key`` and return whether it is disabled."""

    completion = wizard.section_completion()
    disabled = is_disabled(key, wizard.mode, completion, title=wizard.draft.title)
    label = tr(*_SECTION_HEADINGS[key])
    if completion.get(key):
        label = f"✓ {label}"
    elif is_highlighted(key, wizard.mode, completion, title=wizard.draft.title):
        label = f"👉 {label}"
    st.markdown(f"#### {label}")
    return disabled


def _bind(wizard: "RoomWizard", field: str, key: str) -> Callable[[], None]:
    def _on_change() -> None:
        wizard.update_draft(**{field: st.session_state.get(key)})

    return _on_change


def _render_title(wizard: "RoomWizard") -> None:
    st.session_state.setdefault(UIKeys.ROOM_TITLE, wizard.draft.title)

    def _on_change() -> None:
        wizard.set_title(str(st.session_state.get(UIKeys.ROOM_TITLE) or ""))

    st.text_input(
        tr("Raumname", "Room name"),
        key=UIKeys.ROOM_TITLE,
        max_chars=50,
        on_change=_on_change,
        placeholder=tr("z. B. Freitagsessen", "e.g. Friday Dinner"),
    )
    suggestions: list[str] = []
    if not wizard.draft.title.strip():
        suggestions = wizard.current_suggestions or wizard.next_suggestions()
    if wizard.suggestions_loading:
        st.caption(tr("Vorschläge werden geladen …", "Loading suggestions…"))
    elif suggestions:
        if wizard.suggestions_degraded:
            st.caption(tr("Offline-Vorschläge", "Offline suggestions"))
        columns = st.columns(len(suggestions))
        for index, (column, suggestion) in enumerate(zip(columns, suggestions)):

            def _use(value: str = suggestion) -> None:
                st.session_state[UIKeys.ROOM_TITLE] = value
                wizard.set_title(value)

            with column:
                st.button(suggestion, key=f"ui.room.suggestion.{index}", on_click=_use)
        st.button("🎲", key="ui.room.suggestion.reroll", on_click=lambda: wizard.next_suggestions())


def _render_mode_choice(wizard: "RoomWizard") -> None:
    disabled = _section_heading(wizard, SectionKey.MODE_CHOICE)
    if disabled and not is_title_ready(wizard.draft.title):
        st.caption(tr("Gib zuerst einen Raumnamen ein.", "Enter a room name first."))
    columns = st.columns(len(_MODE_LABELS))
    for column, (mode, label) in zip(columns, _MODE_LABELS.items()):

        def _select(value: SelectionMode = mode) -> None:
            wizard.select_mode(value)

        with column:
            st.button(
                tr(*label),
                key=f"{UIKeys.MODE_SELECT}.{mode.value}",
                type="primary" if wizard.mode == mode else "secondary",
                disabled=disabled,
                on_click=_select,
                use_container_width=True,
            )


def _render_primary_options(wizard: "RoomWizard") -> None:
    disabled = _section_heading(wizard, SectionKey.PRIMARY_OPTIONS)
    options = [None, *PRICE_RANGES]
    st.session_state.setdefault(UIKeys.PRICE_RANGE, wizard.draft.price_range)
    st.radio(
        tr("Preisklasse", "Price range"),
        options,
        key=UIKeys.PRICE_RANGE,
        format_func=lambda value: value or "–",
        horizontal=True,
        disabled=disabled,
        on_change=_bind(wizard, "price_range", UIKeys.PRICE_RANGE),
    )
    st.session_state.setdefault(UIKeys.RADIUS, wizard.draft.radius_km)
    st.slider(
        tr("Umkreis (km)", "Radius (km)"),
        min_value=1.0,
        max_value=50.0,
        step=1.0,
        key=UIKeys.RADIUS,
        disabled=disabled,
        on_change=_bind(wizard, "radius_km", UIKeys.RADIUS),
    )


def _render_category_choice(wizard: "RoomWizard") -> None:
    disabled = _section_heading(wizard, SectionKey.CATEGORY_CHOICE)
    labels = dict(CUISINE_OPTIONS)
    st.session_state.setdefault(UIKeys.CUISINES, list(wizard.draft.cuisines))
    st.multiselect(
        tr("Küchen auswählen", "Pick cuisines"),
        list(labels),
        key=UIKeys.CUISINES,
        format_func=lambda value: labels.get(value, value),
        disabled=disabled,
        on_change=_bind(wizard, "cuisines", UIKeys.CUISINES),
    )


def _render_secondary_options(wizard: "RoomWizard") -> None:
    disabled = _section_heading(wizard, SectionKey.SECONDARY_OPTIONS)
    options = [None, *RECIPE_DIFFICULTIES]
    st.session_state.setdefault(UIKeys.RECIPE_DIFFICULTY, wizard.draft.recipe_difficulty)
    st.radio(
        tr("Schwierigkeit", "Difficulty"),
        options,
        key=UIKeys.RECIPE_DIFFICULTY,
        format_func=lambda value: tr(*_DIFFICULTY_LABELS[value]) if value else "–",
        horizontal=True,
        disabled=disabled,
        on_change=_bind(wizard, "recipe_difficulty", UIKeys.RECIPE_DIFFICULTY),
    )


def step_basic_info(wizard: "RoomWizard") -> None:
    """Render the room name and dining preference sections."""

    _render_title(wizard)
    _render_mode_choice(wizard)
    mode = wizard.mode
    if not mode.is_selected:
        for key in (UIKeys.PRICE_RANGE, UIKeys.CUISINES, UIKeys.RECIPE_DIFFICULTY):
            st.session_state.pop(key, None)
    if is_relevant(SectionKey.PRIMARY_OPTIONS, mode):
        _render_primary_options(wizard)
    if is_relevant(SectionKey.CATEGORY_CHOICE, mode):
        _render_category_choice(wizard)
    if is_relevant(SectionKey.SECONDARY_OPTIONS, mode):
        _render_secondary_options(wizard)

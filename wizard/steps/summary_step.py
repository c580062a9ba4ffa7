from __future__ import annotations

from typing import TYPE_CHECKING

import streamlit as st

from constants.keys import UIKeys
from core.room_settings import timer_minutes
from integrations.contacts import CONTACTS, contacts_by_id, filter_contacts
from models.room import CUISINE_OPTIONS
from utils.i18n import tr
from wizard.types import SelectionMode

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from wizard.session import RoomWizard

__all__ = ["step_summary"]


def _render_room_summary(wizard: "RoomWizard") -> None:
    draft = wizard.draft
    cuisine_labels = dict(CUISINE_OPTIONS)
    participants = (
        tr("{count} Personen max.", "{count} people max").format(count=draft.participant_limit)
        if draft.participant_limit
        else tr("Offene Einladung", "Open invite")
    )
    rows = [
        (tr("Raumname", "Room name"), draft.title.strip() or "–"),
        (tr("Modus", "Mode"), draft.mode.value if draft.mode is not SelectionMode.NONE else "–"),
        (tr("Teilnehmer", "Participants"), participants),
        (tr("Timer", "Timer"), tr("{m} Minuten", "{m} minutes").format(m=timer_minutes(draft))),
    ]
    if draft.cuisines:
        rows.append((tr("Küchen", "Cuisines"), ", ".join(cuisine_labels.get(c, c) for c in draft.cuisines)))
    if draft.deadline:
        rows.append((tr("Deadline", "Deadline"), draft.deadline.replace("T", " ")))
    for label, value in rows:
        st.markdown(f"**{label}:** {value}")


def _render_contacts(wizard: "RoomWizard") -> None:
    st.markdown(f"#### {tr('Freunde einladen', 'Invite friends')}")
    search = st.text_input(
        tr("Kontakte durchsuchen", "Search contacts"),
        key=UIKeys.CONTACT_SEARCH,
    )
    selected = set(wizard.draft.selected_contacts)
    for contact in filter_contacts(CONTACTS, search or ""):
        label = f"{'⭐ ' if contact.favorite else ''}{contact.name}"
        st.checkbox(
            label,
            value=contact.id in selected,
            key=f"ui.room.contact.{contact.id}",
            on_change=wizard.toggle_contact,
            args=(contact.id,),
        )
    invited = contacts_by_id(CONTACTS, wizard.draft.selected_contacts)
    if invited:
        st.caption(
            tr("Eingeladen: {names}", "Invited: {names}").format(names=", ".join(c.name for c in invited))
        )


def _render_template_option(wizard: "RoomWizard") -> None:
    st.markdown(f"#### {tr('Als Vorlage speichern', 'Save as template')}")
    st.session_state.setdefault(UIKeys.SAVE_AS_TEMPLATE, wizard.draft.save_as_template)
    st.toggle(
        tr("Für später speichern", "Save for future use"),
        key=UIKeys.SAVE_AS_TEMPLATE,
        on_change=lambda: wizard.update_draft(save_as_template=bool(st.session_state.get(UIKeys.SAVE_AS_TEMPLATE))),
    )
    if not wizard.draft.save_as_template:
        return
    st.session_state.setdefault(UIKeys.TEMPLATE_NAME, wizard.draft.template_name)
    st.text_input(
        tr("Name der Vorlage", "Template name"),
        key=UIKeys.TEMPLATE_NAME,
        max_chars=80,
        placeholder=tr("z. B. Wochenend-Lunch, Team-Dinner", "e.g. Weekend Lunch, Team Dinner"),
        on_change=lambda: wizard.update_draft(template_name=st.session_state.get(UIKeys.TEMPLATE_NAME) or ""),
    )
    st.caption(
        tr(
            "Die Einstellungen werden gespeichert und können später wiederverwendet werden.",
            "These settings are stored so you can reuse them for future rooms.",
        )
    )


def step_summary(wizard: "RoomWizard") -> None:
    """Render the room summary, the contact picker and the template option."""

    _render_room_summary(wizard)
    st.divider()
    _render_contacts(wizard)
    st.divider()
    _render_template_option(wizard)

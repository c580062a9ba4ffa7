"""Streamlit host for the room wizard.

Each rerun drains due timers, adopts browser back/forward navigation, forwards
the context-owned mode, renders the active step and finally executes the
effects queued by button callbacks.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, MutableMapping, cast

import streamlit as st

from config import (
    HINT_STORE_PATH,
    HTTP_TIMEOUT_SECONDS,
    MODE_SYNC_DELAY_SECONDS,
    PERSISTENCE_BASE_URL,
    SUGGESTIONS_BASE_URL,
    TIMER_POLL_SECONDS,
    VALIDATION_FLASH_SECONDS,
    WIZARD_ROOT_PATH,
)
from constants.keys import StateKeys
from core.errors import RoomWizardError
from integrations.persistence import HttpPersistenceService, InMemoryPersistenceService, PersistenceService
from integrations.suggestions import HttpSuggestionSource, StaticSuggestionSource, SuggestionSource
from models.room import CreatedRoom
from state.hints import HintStore, JsonFileHintStore, SessionHintStore
from utils.errors import display_error
from utils.i18n import tr
from utils.logging_context import set_session_id
from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation.location import STEP_QUERY_PARAM, LocationSynchronizer, QueryParamLocation
from wizard.navigation.router import NavigationEffect, TransitionResult
from wizard.navigation.ui import (
    apply_effects,
    inject_navigation_style,
    render_navigation,
    render_stepper,
    render_validation_message,
)
from wizard.session import RoomWizard
from wizard.step_registry import get_step
from wizard.types import SelectionMode

logger = logging.getLogger(__name__)

SESSION_KEYS = WizardSessionKeys(wizard_id="room")


def _build_persistence() -> PersistenceService:
    if PERSISTENCE_BASE_URL:
        return HttpPersistenceService(PERSISTENCE_BASE_URL, timeout=HTTP_TIMEOUT_SECONDS)
    return InMemoryPersistenceService()


def _build_suggestion_source() -> SuggestionSource:
    if SUGGESTIONS_BASE_URL:
        return HttpSuggestionSource(SUGGESTIONS_BASE_URL, timeout=HTTP_TIMEOUT_SECONDS)
    return StaticSuggestionSource()


def _build_hint_store(session_state: MutableMapping[str, object]) -> HintStore:
    if HINT_STORE_PATH:
        return JsonFileHintStore(HINT_STORE_PATH)
    return SessionHintStore(session_state)


def build_wizard(
    session_state: MutableMapping[str, object],
    *,
    query_params: MutableMapping[str, object] | None = None,
    persistence: PersistenceService | None = None,
    suggestion_source: SuggestionSource | None = None,
) -> RoomWizard:
    """Create a wizard bound to ``session_state`` and the query parameters."""

    def _push_mode(mode: SelectionMode) -> None:
        session_state[StateKeys.CONTEXT_MODE] = mode.value

    def _leave() -> None:
        session_state[StateKeys.WIZARD_DISMISSED] = True

    location = LocationSynchronizer(
        QueryParamLocation(query_params, root_path=WIZARD_ROOT_PATH),
        root_path=WIZARD_ROOT_PATH,
    )
    resume = session_state.pop(StateKeys.RESUME_STEP, None)
    return RoomWizard(
        location=location,
        persistence=persistence or _build_persistence(),
        suggestion_source=suggestion_source or _build_suggestion_source(),
        hint_store=_build_hint_store(session_state),
        context_mode=session_state.get(StateKeys.CONTEXT_MODE),
        push_mode_to_context=_push_mode,
        on_leave=_leave,
        resume_segment=resume if isinstance(resume, str) else None,
        mode_sync_delay=MODE_SYNC_DELAY_SECONDS,
        flash_delay=VALIDATION_FLASH_SECONDS,
    )


def _pending_effects() -> list[NavigationEffect]:
    effects = st.session_state.get(SESSION_KEYS.pending_effects)
    if not isinstance(effects, list):
        effects = []
        st.session_state[SESSION_KEYS.pending_effects] = effects
    return effects


def _record(result: TransitionResult) -> None:
    if result.effects:
        _pending_effects().extend(result.effects)


def _make_submit(wizard: RoomWizard) -> Callable[[], None]:
    def _submit() -> None:
        outcome = wizard.submit()
        if outcome.created is not None:
            st.session_state[StateKeys.CREATED_ROOM] = outcome.created.model_dump()
            st.session_state.pop(SESSION_KEYS.wizard, None)
        elif outcome.transition is not None:
            _record(outcome.transition)

    return _submit


def _discard_wizard() -> None:
    wizard = st.session_state.pop(SESSION_KEYS.wizard, None)
    if isinstance(wizard, RoomWizard):
        logger.info("Room wizard dismissed on step %s", wizard.current_step)
        wizard.dispose()
    st.session_state.pop(SESSION_KEYS.pending_effects, None)
    st.query_params.pop(STEP_QUERY_PARAM, None)


def _render_created_room(payload: object) -> None:
    created = CreatedRoom.model_validate(payload)
    st.success(tr("Raum erstellt!", "Room created!"))
    st.markdown(tr("Einladungscode: **{code}**", "Share code: **{code}**").format(code=created.share_code))

    def _start_over() -> None:
        st.session_state.pop(StateKeys.CREATED_ROOM, None)
        st.query_params.pop(STEP_QUERY_PARAM, None)

    st.button(tr("Weiteren Raum erstellen", "Create another room"), on_click=_start_over)


def _render_timer_poller(wizard: RoomWizard) -> None:
    """Poll pending timers and background loads without user interaction."""

    if not (wizard.scheduler.pending or wizard.suggestions_loading):
        return

    @st.fragment(run_every=TIMER_POLL_SECONDS)
    def _poll() -> None:
        loading = wizard.suggestions_loading
        fired = wizard.tick()
        if fired or (loading and not wizard.suggestions_loading):
            st.rerun()

    _poll()


def _get_or_create_wizard() -> RoomWizard:
    wizard = st.session_state.get(SESSION_KEYS.wizard)
    if isinstance(wizard, RoomWizard) and not wizard.disposed:
        return wizard
    wizard = build_wizard(cast(MutableMapping[str, object], st.session_state))
    logger.debug("Started room wizard on step %s", wizard.current_step)
    st.session_state[SESSION_KEYS.wizard] = wizard
    _record(wizard.initial_transition)
    return wizard


def _run_wizard() -> None:
    created = st.session_state.get(StateKeys.CREATED_ROOM)
    if created:
        _render_created_room(created)
        return
    if st.session_state.pop(StateKeys.WIZARD_DISMISSED, False):
        _discard_wizard()
        st.info(tr("Raumerstellung abgebrochen.", "Room creation cancelled."))
        st.button(tr("Neu starten", "Start again"))
        return

    wizard = _get_or_create_wizard()
    wizard.tick()
    _record(wizard.sync_from_location())
    wizard.context_mode_changed(st.session_state.get(StateKeys.CONTEXT_MODE))

    inject_navigation_style()
    step = get_step(wizard.current_step)
    if step is None:  # pragma: no cover - controller never leaves the catalog
        return
    st.subheader(tr(*step.panel_header))
    st.caption(tr(*step.panel_subheader))
    render_stepper(wizard, _record)
    step.renderer(wizard)
    render_validation_message(wizard.validation_message)
    if wizard.submission_error:
        display_error(wizard.submission_error)
    render_navigation(wizard, _record, on_submit=_make_submit(wizard))

    effects = list(_pending_effects())
    _pending_effects().clear()
    apply_effects(effects)
    _render_timer_poller(wizard)


def run_wizard() -> None:
    """Run the room configuration wizard."""

    session_id = st.session_state.setdefault(StateKeys.SESSION_ID, uuid.uuid4().hex[:12])
    set_session_id(str(session_id))
    try:
        _run_wizard()
    except RoomWizardError as error:
        display_error(
            (
                "Der Assistent konnte nicht vollständig geladen werden. Bitte versuche es erneut.",
                "The wizard could not finish loading. Please try again.",
            ),
            error,
        )


__all__ = ["SESSION_KEYS", "build_wizard", "run_wizard"]

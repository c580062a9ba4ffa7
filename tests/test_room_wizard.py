from __future__ import annotations

import pytest

from constants.keys import StateKeys
from core.errors import GENERIC_FAILURE_MESSAGE, PersistenceError
from integrations.persistence import InMemoryPersistenceService
from integrations.suggestions import StaticSuggestionSource
from models.room import CreatedRoom, RoomDraft
from state.hints import SessionHintStore
from utils.scheduler import PollingScheduler
from wizard.navigation.location import LocationSynchronizer, MemoryLocation
from wizard.navigation.router import EffectKind
from wizard.runner import build_wizard
from wizard.session import RoomWizard
from wizard.types import SectionKey, SelectionMode

ROOT_PATH = "/create/custom"


class _FailingPersistence:
    def __init__(self) -> None:
        self.calls = 0

    def submit(
        self,
        title: str,
        timer_minutes: int,
        *,
        mode: SelectionMode | None = None,
        template_name: str | None = None,
    ) -> CreatedRoom:
        self.calls += 1
        raise PersistenceError("service unavailable")


def _make_wizard(scheduler: PollingScheduler, **kwargs: object) -> tuple[RoomWizard, list[SelectionMode]]:
    pushed: list[SelectionMode] = []
    kwargs.setdefault("persistence", InMemoryPersistenceService())
    wizard = RoomWizard(
        location=LocationSynchronizer(MemoryLocation(ROOT_PATH), root_path=ROOT_PATH),
        scheduler=scheduler,
        hint_store=SessionHintStore({}),
        push_mode_to_context=pushed.append,
        mode_sync_delay=0.15,
        flash_delay=0.5,
        **kwargs,  # type: ignore[arg-type]
    )
    return wizard, pushed


def _fill_cooking_room(wizard: RoomWizard) -> None:
    wizard.set_title("Friday Dinner")
    wizard.select_mode("cooking")
    wizard.update_draft(recipe_difficulty="easy")


def _fill_settings(wizard: RoomWizard) -> None:
    wizard.update_draft(participant_limit=4, access_control=False)


def test_walkthrough_creates_room(scheduler: PollingScheduler) -> None:
    persistence = InMemoryPersistenceService()
    wizard, _ = _make_wizard(scheduler, persistence=persistence)

    _fill_cooking_room(wizard)
    assert wizard.advance().state.current_step == 2
    _fill_settings(wizard)
    final = wizard.advance()
    assert final.state.current_step == 3
    assert final.has_effect(EffectKind.SHOW_HINT)

    outcome = wizard.submit()
    assert outcome.succeeded
    assert outcome.created is not None
    assert persistence.rooms[outcome.created.resource_id].title == "Friday Dinner"
    assert persistence.rooms[outcome.created.resource_id].mode is SelectionMode.COOK
    assert wizard.disposed
    assert persistence.rooms[outcome.created.resource_id].template_name is None


def test_walkthrough_saves_room_as_template(scheduler: PollingScheduler) -> None:
    persistence = InMemoryPersistenceService()
    wizard, _ = _make_wizard(scheduler, persistence=persistence)

    _fill_cooking_room(wizard)
    wizard.advance()
    _fill_settings(wizard)
    wizard.advance()
    wizard.update_draft(save_as_template=True, template_name="  Team Dinner ")

    outcome = wizard.submit()
    assert outcome.created is not None
    assert persistence.rooms[outcome.created.resource_id].template_name == "Team Dinner"


def test_template_name_falls_back_to_title(scheduler: PollingScheduler) -> None:
    wizard, _ = _make_wizard(scheduler)
    wizard.set_title("Friday Dinner")
    wizard.update_draft(template_name="Ignored")
    assert wizard.template_name is None

    wizard.update_draft(save_as_template=True, template_name="   ")
    assert wizard.template_name == "Friday Dinner"


def test_submission_failure_returns_to_first_step(scheduler: PollingScheduler) -> None:
    persistence = _FailingPersistence()
    wizard, _ = _make_wizard(scheduler, persistence=persistence)
    _fill_cooking_room(wizard)
    wizard.advance()
    _fill_settings(wizard)
    wizard.advance()

    outcome = wizard.submit()

    assert not outcome.succeeded
    assert outcome.error == GENERIC_FAILURE_MESSAGE
    assert outcome.transition is not None and outcome.transition.changed
    assert wizard.current_step == 1
    assert wizard.submission_error == GENERIC_FAILURE_MESSAGE
    assert wizard.draft.title == "Friday Dinner"
    assert not wizard.disposed
    assert persistence.calls == 1

    assert wizard.jump_to(3).changed
    assert wizard.submission_error is None


def test_submit_outside_final_step_is_ignored(scheduler: PollingScheduler) -> None:
    persistence = InMemoryPersistenceService()
    wizard, _ = _make_wizard(scheduler, persistence=persistence)
    _fill_cooking_room(wizard)

    outcome = wizard.submit()
    assert outcome.created is None and outcome.error is None
    assert persistence.rooms == {}


def test_missing_title_flashes_and_expires(scheduler: PollingScheduler, clock) -> None:
    wizard, _ = _make_wizard(scheduler)
    result = wizard.advance()
    assert result.has_effect(EffectKind.SHOW_VALIDATION_MESSAGE)
    assert wizard.validation_message is not None

    clock.advance(0.6)
    assert wizard.tick() == 1
    assert wizard.validation_message is None


def test_local_mode_is_pushed_to_context_after_delay(scheduler: PollingScheduler, clock) -> None:
    wizard, pushed = _make_wizard(scheduler)
    wizard.set_title("Friday Dinner")
    wizard.select_mode("dining-out")

    assert wizard.mode is SelectionMode.DINE_OUT
    assert wizard.section_completion()[SectionKey.MODE_CHOICE]
    assert pushed == []
    clock.advance(0.2)
    wizard.tick()
    assert pushed == [SelectionMode.DINE_OUT]


def test_context_mode_reaches_wizard_after_delay(scheduler: PollingScheduler, clock) -> None:
    wizard, pushed = _make_wizard(scheduler)

    assert wizard.context_mode_changed("both")
    assert wizard.mode is SelectionMode.NONE
    clock.advance(0.2)
    wizard.tick()
    assert wizard.mode is SelectionMode.BOTH
    assert wizard.draft.mode is SelectionMode.BOTH
    assert pushed == []
    assert not wizard.context_mode_changed("both")


def test_initial_context_mode_preselects_wizard(scheduler: PollingScheduler) -> None:
    wizard, _ = _make_wizard(scheduler, context_mode="cooking")
    assert wizard.mode is SelectionMode.COOK
    assert wizard.draft.mode is SelectionMode.COOK
    assert wizard.section_completion()[SectionKey.MODE_CHOICE]


def test_disagreeing_draft_and_context_modes_converge(scheduler: PollingScheduler, clock) -> None:
    wizard, pushed = _make_wizard(scheduler, draft=RoomDraft(mode="cooking"), context_mode="dining-out")
    assert wizard.mode is SelectionMode.COOK

    assert wizard.context_mode_changed("dining-out")
    clock.advance(0.2)
    wizard.tick()
    assert wizard.mode is SelectionMode.DINE_OUT
    assert wizard.draft.mode is SelectionMode.DINE_OUT
    assert pushed == []
    assert not wizard.context_mode_changed("dining-out")


def test_toggling_mode_off_clears_dependent_sections(scheduler: PollingScheduler) -> None:
    wizard, _ = _make_wizard(scheduler)
    _fill_cooking_room(wizard)
    assert 1 in wizard.controller.state.completed_steps

    assert wizard.select_mode("cooking") is SelectionMode.NONE
    assert wizard.draft.recipe_difficulty is None
    assert not any(wizard.section_completion().values())
    assert 1 not in wizard.controller.state.completed_steps


def test_section_flags_are_masked_until_prerequisites_are_met(scheduler: PollingScheduler) -> None:
    wizard, _ = _make_wizard(scheduler)
    wizard.set_title("Friday Dinner")
    wizard.select_mode("dining-out")
    wizard.update_draft(cuisines=["thai"])

    assert wizard.tracker[SectionKey.CATEGORY_CHOICE]
    assert not wizard.section_completion()[SectionKey.CATEGORY_CHOICE]

    wizard.update_draft(price_range="$$")
    completion = wizard.section_completion()
    assert completion[SectionKey.PRIMARY_OPTIONS]
    assert completion[SectionKey.CATEGORY_CHOICE]
    assert wizard.advance().changed


def test_toggle_contact(scheduler: PollingScheduler) -> None:
    wizard, _ = _make_wizard(scheduler)
    wizard.toggle_contact("2")
    wizard.toggle_contact("3")
    wizard.toggle_contact("2")
    assert wizard.draft.selected_contacts == ["3"]


def test_dispose_cancels_every_pending_timer(scheduler: PollingScheduler, clock) -> None:
    wizard, pushed = _make_wizard(scheduler)
    wizard.advance()
    wizard.select_mode("cooking")
    assert scheduler.pending == 2

    wizard.dispose()
    assert scheduler.pending == 0
    clock.advance(5)
    assert wizard.tick() == 0
    assert pushed == []
    assert not wizard.advance().changed
    assert not wizard.submit().succeeded
    assert wizard.suggestion_bank is None


def test_build_wizard_binds_session_state_and_query_params(query_params) -> None:
    session_state: dict[str, object] = {StateKeys.RESUME_STEP: "settings"}
    wizard = build_wizard(
        session_state,
        query_params=query_params,
        persistence=InMemoryPersistenceService(),
        suggestion_source=StaticSuggestionSource(),
    )
    try:
        assert wizard.current_step == 2
        assert query_params["step"] == "settings"
        assert StateKeys.RESUME_STEP not in session_state

        wizard.jump_to(1)
        assert query_params["step"] == "basic-info"
        wizard.retreat()
        assert session_state[StateKeys.WIZARD_DISMISSED] is True
    finally:
        wizard.dispose()


@pytest.mark.parametrize("segment", ["summary", "bogus"])
def test_build_wizard_resumes_from_query_params(query_params, segment: str) -> None:
    query_params["step"] = segment
    wizard = build_wizard({}, query_params=query_params, persistence=InMemoryPersistenceService())
    try:
        expected = 3 if segment == "summary" else 1
        assert wizard.current_step == expected
    finally:
        wizard.dispose()

"""The room wizard: one object per mounted wizard instance.

``RoomWizard`` wires the navigation controller, the section tracker, the mode
mirror and the external collaborators together. It lives in
``st.session_state`` between reruns and is discarded on dismissal or after a
successful submission.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping

from core.errors import GENERIC_FAILURE_MESSAGE, PersistenceError
from core.room_settings import derive_section_completion, settings_completion, timer_minutes
from core.suggestions import pick_suggestions, remember_suggestions
from integrations.persistence import PersistenceService
from integrations.suggestions import SuggestionBank, SuggestionLoader, SuggestionSource
from models.room import CreatedRoom, RoomDraft
from state.hints import HintStore
from utils.scheduler import PollingScheduler
from wizard.mode_mirror import DEFAULT_SYNC_DELAY_SECONDS, ModeMirror
from wizard.navigation.location import LocationSynchronizer
from wizard.navigation.router import (
    DEFAULT_VALIDATION_FLASH_SECONDS,
    NavigationController,
    TransitionResult,
)
from wizard.sections import SectionCompletionTracker, effective_completion
from wizard.types import LocalizedText, SectionKey, SelectionMode
from wizard.validation import GateContext

logger = logging.getLogger(__name__)

# Draft fields that drive a basic-info section flag.
_SECTION_FIELDS: Mapping[str, SectionKey] = {
    "price_range": SectionKey.PRIMARY_OPTIONS,
    "cuisines": SectionKey.CATEGORY_CHOICE,
    "recipe_difficulty": SectionKey.SECONDARY_OPTIONS,
}


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of :meth:`RoomWizard.submit`."""

    created: CreatedRoom | None = None
    error: LocalizedText | None = None
    transition: TransitionResult | None = None

    @property
    def succeeded(self) -> bool:
        return self.created is not None


class RoomWizard:
    """Controller facade used by the Streamlit host and by tests."""

    def __init__(
        self,
        *,
        location: LocationSynchronizer,
        persistence: PersistenceService,
        scheduler: PollingScheduler | None = None,
        suggestion_source: SuggestionSource | None = None,
        hint_store: HintStore | None = None,
        draft: RoomDraft | None = None,
        context_mode: object = None,
        push_mode_to_context: Callable[[SelectionMode], None] | None = None,
        on_leave: Callable[[], None] | None = None,
        resume_segment: str | None = None,
        mode_sync_delay: float = DEFAULT_SYNC_DELAY_SECONDS,
        flash_delay: float = DEFAULT_VALIDATION_FLASH_SECONDS,
    ) -> None:
        self.scheduler = scheduler or PollingScheduler()
        self.draft = draft or RoomDraft()
        self._persistence = persistence
        self._push_mode_to_context = push_mode_to_context
        self._disposed = False
        self._submission_error: LocalizedText | None = None
        self._recent_suggestions: list[str] = []
        self.current_suggestions: list[str] = []

        self.tracker = SectionCompletionTracker(derive_section_completion(self.draft))
        self.mirror = ModeMirror(
            scheduler=self.scheduler,
            push_to_context=self._push_mode,
            initial_local=self.draft.mode,
            initial_context=context_mode,
            delay=mode_sync_delay,
            on_local_change=self._on_local_mode_change,
        )
        if self.mirror.local_mode != self.draft.mode:
            self._on_local_mode_change(self.draft.mode, self.mirror.local_mode)

        self.controller = NavigationController(
            context_provider=self.gate_context,
            location=location,
            scheduler=self.scheduler,
            on_leave=on_leave,
            hint_store=hint_store,
            flash_delay=flash_delay,
        )
        self.initial_transition = self.controller.bootstrap(resume_segment)

        self._suggestions: SuggestionLoader | None = None
        if suggestion_source is not None:
            self._suggestions = SuggestionLoader(suggestion_source)
            self._suggestions.start()

    # ----------------------------------------------------------------- state

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def mode(self) -> SelectionMode:
        return self.mirror.local_mode

    @property
    def current_step(self) -> int:
        return self.controller.current_step

    @property
    def validation_message(self) -> LocalizedText | None:
        return self.controller.validation_message

    @property
    def submission_error(self) -> LocalizedText | None:
        return self._submission_error

    def section_completion(self) -> Mapping[SectionKey, bool]:
        """Return the section flags with unmet prerequisites masked out."""

        return effective_completion(self.mode, self.tracker.snapshot())

    def gate_context(self) -> GateContext:
        return GateContext(
            title=self.draft.title,
            mode=self.mode,
            completion=self.section_completion(),
            settings_completion=settings_completion(self.draft),
        )

    # ---------------------------------------------------------------- inputs

    def set_title(self, title: str) -> None:
        self.draft.title = title
        self.controller.recompute_completed_steps()

    def update_draft(self, **changes: Any) -> None:
        """Assign draft fields and refresh the section flags they drive."""

        for name, value in changes.items():
            setattr(self.draft, name, value)
        derived = derive_section_completion(self.draft)
        for name in changes:
            key = _SECTION_FIELDS.get(name)
            if key is not None:
                self.tracker.set_section_complete(key, derived[key])
        self.controller.recompute_completed_steps()

    def select_mode(self, mode: object) -> SelectionMode:
        """Apply an in-wizard mode selection; re-selecting clears it."""

        return self.mirror.select(mode)

    def context_mode_changed(self, value: object) -> bool:
        """Forward the enclosing context's mode; returns whether an update was scheduled."""

        return self.mirror.context_changed(value)

    def toggle_contact(self, contact_id: str) -> None:
        selected = list(self.draft.selected_contacts)
        if contact_id in selected:
            selected.remove(contact_id)
        else:
            selected.append(contact_id)
        self.draft.selected_contacts = selected

    # ------------------------------------------------------------ navigation

    def advance(self) -> TransitionResult:
        result = self.controller.advance()
        if result.changed:
            self._submission_error = None
        return result

    def retreat(self) -> TransitionResult:
        return self.controller.retreat()

    def jump_to(self, target: int) -> TransitionResult:
        result = self.controller.jump_to(target)
        if result.changed:
            self._submission_error = None
        return result

    def sync_from_location(self) -> TransitionResult:
        return self.controller.sync_from_location()

    def tick(self) -> int:
        """Fire due timers and return how many ran."""

        if self._disposed:
            return 0
        return self.scheduler.run_due()

    # ----------------------------------------------------------- suggestions

    @property
    def suggestion_bank(self) -> SuggestionBank | None:
        if self._suggestions is None or self._disposed:
            return None
        return self._suggestions.poll()

    @property
    def suggestions_loading(self) -> bool:
        return self._suggestions is not None and self._suggestions.loading and self.suggestion_bank is None

    @property
    def suggestions_degraded(self) -> bool:
        bank = self.suggestion_bank
        return bank is not None and bank.degraded

    def next_suggestions(self, *, now: datetime | None = None, rng: random.Random | None = None) -> list[str]:
        """Return fresh room name suggestions; empty while still loading."""

        bank = self.suggestion_bank
        if bank is None:
            return []
        picked = pick_suggestions(bank, self.mode, now=now, recently_used=self._recent_suggestions, rng=rng)
        self._recent_suggestions = remember_suggestions(self._recent_suggestions, picked)
        self.current_suggestions = picked
        return picked

    @property
    def template_name(self) -> str | None:
        """Name to store the configuration under, or ``None`` when not saving."""

        if not self.draft.save_as_template:
            return None
        return self.draft.template_name.strip() or self.draft.title.strip() or None

    # ------------------------------------------------------------ submission

    def submit(self) -> SubmissionOutcome:
        """Create the room from the final step.

        Failures surface a generic retryable message and send the user back
        to the first step; nothing is retried automatically.
        """

        if self._disposed or not self.controller.is_final_step:
            logger.debug("Submit ignored outside the final step")
            return SubmissionOutcome()
        self._submission_error = None
        minutes = timer_minutes(self.draft)
        mode = self.mode if self.mode.is_selected else None
        try:
            created = self._persistence.submit(
                self.draft.title.strip(),
                minutes,
                mode=mode,
                template_name=self.template_name,
            )
        except PersistenceError as exc:
            logger.warning("Room submission failed: %s", exc)
            if self._disposed:
                return SubmissionOutcome()
            self._submission_error = GENERIC_FAILURE_MESSAGE
            transition = self.controller.jump_to(1)
            return SubmissionOutcome(error=GENERIC_FAILURE_MESSAGE, transition=transition)
        if self._disposed:
            logger.info("Discarding submission result for a dismissed wizard")
            return SubmissionOutcome()
        logger.info("Room %s submitted (%s minutes)", created.resource_id, minutes)
        self.dispose()
        return SubmissionOutcome(created=created)

    # -------------------------------------------------------------- teardown

    def dispose(self) -> None:
        """Cancel all timers and ignore any late external results."""

        if self._disposed:
            return
        self._disposed = True
        self.mirror.dispose()
        self.controller.dispose()
        if self._suggestions is not None:
            self._suggestions.dispose()
        self.scheduler.cancel_all()
        logger.debug("Wizard disposed")

    # -------------------------------------------------------------- internal

    def _push_mode(self, mode: SelectionMode) -> None:
        if self._push_mode_to_context is not None:
            self._push_mode_to_context(mode)

    def _on_local_mode_change(self, previous: SelectionMode, current: SelectionMode) -> None:
        self.draft.mode = current
        if not current.is_selected:
            # Clearing the mode starts the dependent sections over.
            self.draft.price_range = None
            self.draft.cuisines = []
            self.draft.recipe_difficulty = None
            self.tracker.reset()
        else:
            self.tracker.set_section_complete(SectionKey.MODE_CHOICE, True)
        logger.debug("Mode %s -> %s", previous, current)
        # Also called from __init__ before the controller exists.
        controller = getattr(self, "controller", None)
        if controller is not None:
            controller.recompute_completed_steps()


__all__ = ["RoomWizard", "SubmissionOutcome"]

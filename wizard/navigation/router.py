from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Callable, Final

from state.hints import FINAL_STEP_SHORTCUT_HINT, HintStore
from utils.logging_context import set_wizard_step
from utils.scheduler import Debouncer, Scheduler
from wizard.navigation.location import LocationSynchronizer
from wizard.step_registry import WIZARD_STEPS, StepDefinition, get_step, location_by_ordinal, step_count
from wizard.types import LocalizedText
from wizard.validation import GateContext, can_advance

logger = logging.getLogger(__name__)

DEFAULT_VALIDATION_FLASH_SECONDS = 0.5

MISSING_TITLE_MESSAGE: Final[LocalizedText] = (
    "Bitte gib einen Raumnamen ein",
    "Please enter a room name",
)


class EffectKind(StrEnum):
    """Follow-up commands the host executes after a transition."""

    SCROLL_TO_TOP = "scroll_to_top"
    SET_PAGE_TITLE = "set_page_title"
    SHOW_HINT = "show_hint"
    LEAVE_WIZARD = "leave_wizard"
    SHOW_VALIDATION_MESSAGE = "show_validation_message"


@dataclass(frozen=True)
class NavigationEffect:
    kind: EffectKind
    payload: str | None = None


@dataclass(frozen=True)
class WizardState:
    """Immutable navigation state of one wizard instance."""

    current_step: int = 1
    direction: int = 0
    completed_steps: tuple[int, ...] = ()
    has_reached_final_step: bool = False


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a navigation request plus the effects it requires."""

    changed: bool
    state: WizardState
    effects: tuple[NavigationEffect, ...] = ()

    def has_effect(self, kind: EffectKind) -> bool:
        return any(effect.kind is kind for effect in self.effects)


@dataclass(frozen=True)
class StepProgressSnapshot:
    """Represents the stepper status of a single wizard step."""

    step: StepDefinition
    status: str
    reachable: bool


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class NavigationController:
    """Own the wizard step state machine outside the UI layer.

    Every internal transition runs in the same order: completed steps are
    recomputed, the exit gate is evaluated, then the location is written.
    External location changes (browser back/forward) are adopted through
    :meth:`sync_from_location` without consulting the gate.
    """

    def __init__(
        self,
        *,
        context_provider: Callable[[], GateContext],
        location: LocationSynchronizer,
        scheduler: Scheduler,
        on_leave: Callable[[], None] | None = None,
        hint_store: HintStore | None = None,
        flash_delay: float = DEFAULT_VALIDATION_FLASH_SECONDS,
    ) -> None:
        self._context_provider = context_provider
        self._location = location
        self._on_leave = on_leave
        self._hint_store = hint_store
        self._flash = Debouncer(scheduler, flash_delay)
        self._validation_message: LocalizedText | None = None
        self._state = WizardState()
        self._disposed = False

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def current_step(self) -> int:
        return self._state.current_step

    @property
    def last_step(self) -> int:
        return step_count()

    @property
    def is_final_step(self) -> bool:
        return self._state.current_step == self.last_step

    @property
    def validation_message(self) -> LocalizedText | None:
        return self._validation_message

    @property
    def disposed(self) -> bool:
        return self._disposed

    def bootstrap(self, resume_segment: str | None = None) -> TransitionResult:
        """Resolve the initial step from the resume input or the location."""

        ordinal = self._location.mount(resume_segment)
        self._state = WizardState(
            current_step=ordinal,
            direction=0,
            completed_steps=(),
            has_reached_final_step=ordinal == self.last_step,
        )
        self.recompute_completed_steps()
        segment = location_by_ordinal(ordinal)
        set_wizard_step(segment)
        logger.info("Wizard mounted at step %s ('%s')", ordinal, segment)
        return TransitionResult(
            changed=True,
            state=self._state,
            effects=(NavigationEffect(EffectKind.SET_PAGE_TITLE, segment),),
        )

    def advance(self) -> TransitionResult:
        """Move one step forward when the current step's gate is satisfied."""

        if self._disposed:
            return self._unchanged()
        context = self._context_provider()
        self.recompute_completed_steps(context)
        current = self._state.current_step
        if not can_advance(current, context):
            if current == 1 and not context.has_title:
                self._flash_validation_message(MISSING_TITLE_MESSAGE)
                return self._unchanged((NavigationEffect(EffectKind.SHOW_VALIDATION_MESSAGE),))
            logger.debug("Advance from step %s blocked by the exit gate", current)
            return self._unchanged()
        if current >= self.last_step:
            logger.debug("Advance ignored on the final step; submission handles it")
            return self._unchanged()
        return self._commit(current + 1, 1)

    def retreat(self) -> TransitionResult:
        """Move one step back, or hand off to the leave collaborator on step 1."""

        if self._disposed:
            return self._unchanged()
        current = self._state.current_step
        if current <= 1:
            logger.info("Leaving wizard from the first step")
            if self._on_leave is not None:
                self._on_leave()
            return self._unchanged((NavigationEffect(EffectKind.LEAVE_WIZARD),))
        return self._commit(current - 1, -1)

    def can_jump_to(self, target: int) -> bool:
        if get_step(target) is None:
            return False
        state = self._state
        return target == 1 or target in state.completed_steps or state.has_reached_final_step or target <= state.current_step

    def jump_to(self, target: int) -> TransitionResult:
        """Jump to ``target``; disallowed targets are ignored silently.

        Step 1 is always allowed. Jumping to the step already shown is a
        successful no-op: the result reports ``changed=False`` and carries no
        effects.
        """

        if self._disposed:
            return self._unchanged()
        self.recompute_completed_steps()
        current = self._state.current_step
        if target == current or not self.can_jump_to(target):
            logger.debug("Ignoring jump from step %s to %s", current, target)
            return self._unchanged()
        return self._commit(target, _sign(target - current))

    def sync_from_location(self) -> TransitionResult:
        """Adopt a location change that was not written by this controller."""

        if self._disposed:
            return self._unchanged()
        ordinal = self._location.poll()
        current = self._state.current_step
        if ordinal is None or ordinal == current:
            return self._unchanged()
        logger.info("Adopting external navigation from step %s to %s", current, ordinal)
        return self._commit(ordinal, _sign(ordinal - current), write_location=False)

    def is_step_complete(self, ordinal: int, context: GateContext | None = None) -> bool:
        """Return ``True`` when every gate up to ``ordinal`` passes.

        The final step has no gate of its own; it counts as complete once all
        earlier steps are complete.
        """

        if get_step(ordinal) is None:
            return False
        ctx = context if context is not None else self._context_provider()
        last_gated = ordinal - 1 if ordinal == self.last_step else ordinal
        return all(can_advance(step, ctx) for step in range(1, last_gated + 1))

    def recompute_completed_steps(self, context: GateContext | None = None) -> tuple[int, ...]:
        """Derive the completed steps from the current context.

        The stored tuple is only replaced when its contents change, so
        repeated calls with unchanged inputs return the same object.
        """

        ctx = context if context is not None else self._context_provider()
        computed = tuple(step.ordinal for step in WIZARD_STEPS if self.is_step_complete(step.ordinal, ctx))
        if computed != self._state.completed_steps:
            self._state = replace(self._state, completed_steps=computed)
        return self._state.completed_steps

    def clear_validation_message(self) -> None:
        self._flash.cancel()
        self._validation_message = None

    def build_progress_snapshots(self) -> tuple[StepProgressSnapshot, ...]:
        """Return stepper metadata for every step in canonical order."""

        state = self._state
        snapshots: list[StepProgressSnapshot] = []
        for step in WIZARD_STEPS:
            if step.ordinal == state.current_step:
                status = "current"
            elif step.ordinal in state.completed_steps:
                status = "completed"
            else:
                status = "upcoming"
            snapshots.append(StepProgressSnapshot(step=step, status=status, reachable=self.can_jump_to(step.ordinal)))
        return tuple(snapshots)

    def progress_ratio(self) -> float:
        total = self.last_step
        if total <= 1:
            return 1.0
        return (self._state.current_step - 1) / (total - 1)

    def dispose(self) -> None:
        self._disposed = True
        self._flash.cancel()

    def _flash_validation_message(self, message: LocalizedText) -> None:
        self._validation_message = message
        self._flash.schedule(self._expire_validation_message)

    def _expire_validation_message(self) -> None:
        self._validation_message = None

    def _unchanged(self, effects: tuple[NavigationEffect, ...] = ()) -> TransitionResult:
        return TransitionResult(changed=False, state=self._state, effects=effects)

    def _commit(self, target: int, direction: int, *, write_location: bool = True) -> TransitionResult:
        previous = self._state
        arrived_at_final = target == self.last_step
        self._state = replace(
            previous,
            current_step=target,
            direction=direction,
            has_reached_final_step=previous.has_reached_final_step or arrived_at_final,
        )
        self.clear_validation_message()
        if write_location:
            self._location.write(target)
        segment = location_by_ordinal(target)
        set_wizard_step(segment)
        logger.info("Wizard step %s -> %s", previous.current_step, target)

        effects = [
            NavigationEffect(EffectKind.SCROLL_TO_TOP),
            NavigationEffect(EffectKind.SET_PAGE_TITLE, segment),
        ]
        if arrived_at_final and not previous.has_reached_final_step and self._hint_store is not None:
            if not self._hint_store.has_seen(FINAL_STEP_SHORTCUT_HINT):
                effects.append(NavigationEffect(EffectKind.SHOW_HINT, FINAL_STEP_SHORTCUT_HINT))
                self._hint_store.mark_seen(FINAL_STEP_SHORTCUT_HINT)
        return TransitionResult(changed=True, state=self._state, effects=tuple(effects))


__all__ = [
    "DEFAULT_VALIDATION_FLASH_SECONDS",
    "EffectKind",
    "MISSING_TITLE_MESSAGE",
    "NavigationController",
    "NavigationEffect",
    "StepProgressSnapshot",
    "TransitionResult",
    "WizardState",
]

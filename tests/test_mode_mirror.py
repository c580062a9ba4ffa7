from __future__ import annotations

from utils.scheduler import PollingScheduler
from wizard.mode_mirror import ModeMirror
from wizard.types import SelectionMode


def _mirror(scheduler: PollingScheduler, pushed: list[SelectionMode], **kwargs: object) -> ModeMirror:
    return ModeMirror(scheduler=scheduler, push_to_context=pushed.append, delay=0.15, **kwargs)


def test_context_value_equal_to_local_schedules_nothing(scheduler: PollingScheduler) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed, initial_local="cooking", initial_context="dining-out")

    assert not mirror.context_changed("cooking")
    assert scheduler.pending == 0
    assert mirror.local_mode is SelectionMode.COOK


def test_context_change_reaches_local_after_delay(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed)

    assert mirror.context_changed("both")
    clock.advance(0.1)
    scheduler.run_due()
    assert mirror.local_mode is SelectionMode.NONE
    clock.advance(0.1)
    scheduler.run_due()
    assert mirror.local_mode is SelectionMode.BOTH
    assert pushed == []


def test_local_selection_is_pushed_once(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed)

    mirror.select("cooking")
    mirror.select("dining-out")
    clock.advance(0.2)
    scheduler.run_due()
    assert pushed == [SelectionMode.DINE_OUT]

    # The host echoes the pushed value back; nothing new is scheduled.
    assert not mirror.context_changed("dining-out")
    assert scheduler.pending == 0


def test_reselecting_active_mode_toggles_it_off(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    changes: list[tuple[SelectionMode, SelectionMode]] = []
    mirror = _mirror(
        scheduler,
        pushed,
        initial_local="cooking",
        initial_context="cooking",
        on_local_change=lambda previous, current: changes.append((previous, current)),
    )

    assert mirror.select("cooking") is SelectionMode.NONE
    assert mirror.local_mode is SelectionMode.NONE
    assert changes == [(SelectionMode.COOK, SelectionMode.NONE)]
    clock.advance(0.2)
    scheduler.run_due()
    assert pushed == [SelectionMode.NONE]


def test_local_write_cancels_pending_context_update(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed)

    mirror.context_changed("both")
    mirror.select("cooking")
    clock.advance(0.2)
    scheduler.run_due()
    assert mirror.local_mode is SelectionMode.COOK
    assert pushed == [SelectionMode.COOK]


def test_neutral_and_unknown_values_normalize_to_none(scheduler: PollingScheduler) -> None:
    mirror = _mirror(scheduler, [], initial_context="neutral")
    assert mirror.context_mode is SelectionMode.NONE
    assert not mirror.context_changed("garbage")


def test_initial_local_falls_back_to_context(scheduler: PollingScheduler) -> None:
    mirror = _mirror(scheduler, [], initial_local=None, initial_context="both")
    assert mirror.local_mode is SelectionMode.BOTH


def test_dispose_cancels_pending_updates(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed)
    mirror.select("cooking")
    mirror.dispose()
    clock.advance(1)
    scheduler.run_due()
    assert pushed == []
    assert not mirror.context_changed("both")


def test_disagreeing_initial_modes_converge_on_context(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed, initial_local="cooking", initial_context="dining-out")

    assert mirror.context_changed("dining-out")
    clock.advance(0.2)
    scheduler.run_due()
    assert mirror.local_mode is SelectionMode.DINE_OUT
    assert mirror.context_mode is SelectionMode.DINE_OUT
    assert pushed == []
    assert not mirror.context_changed("dining-out")


def test_repeated_context_value_waits_for_pending_push(scheduler: PollingScheduler, clock) -> None:
    pushed: list[SelectionMode] = []
    mirror = _mirror(scheduler, pushed, initial_local="cooking", initial_context="cooking")

    mirror.select("both")
    assert not mirror.context_changed("cooking")
    clock.advance(0.2)
    scheduler.run_due()
    assert pushed == [SelectionMode.BOTH]
    assert mirror.local_mode is SelectionMode.BOTH

from __future__ import annotations

import pytest

from wizard.sections import empty_completion
from wizard.types import SectionKey, SelectionMode, SettingsKey
from wizard.validation import GateContext, blocking_sections, can_advance


def _context(title: str = "Friday Dinner", mode: SelectionMode = SelectionMode.NONE, **flags: bool) -> GateContext:
    completion = empty_completion()
    for name, value in flags.items():
        completion[SectionKey(name)] = value
    return GateContext(title=title, mode=mode, completion=completion)


def test_cooking_requires_only_secondary_options() -> None:
    assert not can_advance(1, _context(mode=SelectionMode.COOK, mode_choice=True))
    assert can_advance(1, _context(mode=SelectionMode.COOK, mode_choice=True, secondary_options=True))


def test_both_requires_every_relevant_section() -> None:
    context = _context(
        mode=SelectionMode.BOTH,
        mode_choice=True,
        primary_options=True,
        category_choice=True,
        secondary_options=False,
    )
    assert not can_advance(1, context)
    assert blocking_sections(1, context) == ["secondary_options"]


def test_dine_out_requires_primary_and_category() -> None:
    context = _context(mode=SelectionMode.DINE_OUT, mode_choice=True, primary_options=True)
    assert blocking_sections(1, context) == ["category_choice"]
    context = _context(mode=SelectionMode.DINE_OUT, mode_choice=True, primary_options=True, category_choice=True)
    assert can_advance(1, context)


def test_missing_title_blocks_step_one() -> None:
    context = _context(title="   ", mode=SelectionMode.COOK, mode_choice=True, secondary_options=True)
    assert blocking_sections(1, context) == ["title"]


def test_unselected_mode_blocks_step_one() -> None:
    assert not can_advance(1, _context())


def test_settings_gate_requires_every_section() -> None:
    settings = {key: True for key in SettingsKey}
    assert can_advance(2, GateContext(settings_completion=settings))
    settings[SettingsKey.DECISION_TIMER] = False
    assert blocking_sections(2, GateContext(settings_completion=settings)) == ["decision_timer"]


def test_final_step_has_no_gate() -> None:
    assert can_advance(3, GateContext())


@pytest.mark.parametrize("step", [0, 4, -1, 99])
def test_unknown_step_fails_closed(step: int) -> None:
    assert not can_advance(step, _context(mode=SelectionMode.COOK, mode_choice=True, secondary_options=True))

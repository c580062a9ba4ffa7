from __future__ import annotations

from wizard.step_registry import (
    WIZARD_STEPS,
    get_step,
    location_by_ordinal,
    step_by_location,
    step_count,
    step_segments,
)


def test_step_registry_order() -> None:
    assert step_segments() == ("basic-info", "settings", "summary")
    assert [step.ordinal for step in WIZARD_STEPS] == [1, 2, 3]
    assert step_count() == 3


def test_step_registry_segments_are_unique() -> None:
    segments = [step.location_segment for step in WIZARD_STEPS]
    assert len(segments) == len(set(segments))


def test_step_registry_round_trips_every_step() -> None:
    for step in WIZARD_STEPS:
        resolved = step_by_location(location_by_ordinal(step.ordinal))
        assert resolved is step


def test_step_registry_lookup() -> None:
    step = get_step(2)
    assert step is not None
    assert step.location_segment == "settings"
    assert step.label_for("en") == "Settings"
    assert step.label_for("de") == "Einstellungen"
    assert get_step(0) is None
    assert get_step(4) is None


def test_unknown_segment_and_ordinal() -> None:
    assert step_by_location("bogus") is None
    assert step_by_location("") is None
    assert step_by_location(None) is None
    assert step_by_location("/summary/") is WIZARD_STEPS[2]
    assert location_by_ordinal(99) == "basic-info"

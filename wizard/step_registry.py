"""Registry for wizard steps, metadata, and canonical order."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from wizard.types import LocalizedText

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from wizard.session import RoomWizard

logger = logging.getLogger(__name__)

StepRenderer = Callable[["RoomWizard"], None]


@dataclass(frozen=True)
class StepDefinition:
    """Metadata + rendering contract for an individual wizard step."""

    ordinal: int
    location_segment: str
    label: LocalizedText
    panel_header: LocalizedText
    panel_subheader: LocalizedText
    renderer: StepRenderer

    def label_for(self, lang: str) -> str:
        """Return the localised label for the step."""

        return self.label[0] if lang.lower().startswith("de") else self.label[1]


def _render_basic_info_step(wizard: "RoomWizard") -> None:
    from wizard.steps import basic_info_step

    basic_info_step.step_basic_info(wizard)


def _render_settings_step(wizard: "RoomWizard") -> None:
    from wizard.steps import settings_step

    settings_step.step_settings(wizard)


def _render_summary_step(wizard: "RoomWizard") -> None:
    from wizard.steps import summary_step

    summary_step.step_summary(wizard)


WIZARD_STEPS: Final[tuple[StepDefinition, ...]] = (
    StepDefinition(
        ordinal=1,
        location_segment="basic-info",
        label=("Grunddaten", "Basic Info"),
        panel_header=("Raum einrichten", "Set up your room"),
        panel_subheader=(
            "Raumname und Essensvorlieben festlegen",
            "Set up your room details and dining preferences",
        ),
        renderer=_render_basic_info_step,
    ),
    StepDefinition(
        ordinal=2,
        location_segment="settings",
        label=("Einstellungen", "Settings"),
        panel_header=("Einstellungen", "Settings"),
        panel_subheader=(
            "Timer, Teilnehmerlimit und Abstimmungsregeln konfigurieren",
            "Configure timers, participant limits, and voting rules",
        ),
        renderer=_render_settings_step,
    ),
    StepDefinition(
        ordinal=3,
        location_segment="summary",
        label=("Einladen", "Invite"),
        panel_header=("Zusammenfassung & Einladung", "Summary & invite"),
        panel_subheader=(
            "Freunde hinzufügen und Raum erstellen",
            "Add friends and create your room",
        ),
        renderer=_render_summary_step,
    ),
)

_STEPS_BY_SEGMENT: Final[dict[str, StepDefinition]] = {step.location_segment: step for step in WIZARD_STEPS}
_STEPS_BY_ORDINAL: Final[dict[int, StepDefinition]] = {step.ordinal: step for step in WIZARD_STEPS}


def step_count() -> int:
    """Return the number of wizard steps."""

    return len(WIZARD_STEPS)


def step_segments() -> tuple[str, ...]:
    """Return location segments in canonical order."""

    return tuple(step.location_segment for step in WIZARD_STEPS)


def get_step(ordinal: int) -> StepDefinition | None:
    """Lookup step metadata by ordinal."""

    return _STEPS_BY_ORDINAL.get(ordinal)


def step_by_location(segment: str | None) -> StepDefinition | None:
    """Return the step whose location segment matches ``segment``."""

    if not segment:
        return None
    return _STEPS_BY_SEGMENT.get(segment.strip().strip("/"))


def location_by_ordinal(ordinal: int) -> str:
    """Return the location segment for ``ordinal``, falling back to the first step."""

    step = _STEPS_BY_ORDINAL.get(ordinal)
    if step is None:
        logger.warning("Unknown step ordinal %r; using '%s'", ordinal, WIZARD_STEPS[0].location_segment)
        return WIZARD_STEPS[0].location_segment
    return step.location_segment


__all__ = [
    "StepDefinition",
    "StepRenderer",
    "WIZARD_STEPS",
    "get_step",
    "location_by_ordinal",
    "step_by_location",
    "step_count",
    "step_segments",
]

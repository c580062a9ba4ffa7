"""Navigation helpers for the Streamlit wizard."""

from __future__ import annotations

from wizard.navigation.location import LocationSynchronizer, MemoryLocation, QueryParamLocation
from wizard.navigation.router import (
    EffectKind,
    NavigationController,
    NavigationEffect,
    StepProgressSnapshot,
    TransitionResult,
    WizardState,
)

__all__ = [
    "EffectKind",
    "LocationSynchronizer",
    "MemoryLocation",
    "NavigationController",
    "NavigationEffect",
    "QueryParamLocation",
    "StepProgressSnapshot",
    "TransitionResult",
    "WizardState",
]

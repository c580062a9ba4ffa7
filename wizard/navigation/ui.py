from __future__ import annotations

import html
import json
from typing import TYPE_CHECKING, Callable

import streamlit as st
import streamlit.components.v1 as components

from utils.i18n import (
    FINAL_STEP_SHORTCUT_HINT_TEXT,
    NAV_BACK_LABEL,
    NAV_CREATE_LABEL,
    NAV_NEXT_LABEL,
    tr,
    tr_pair,
)
from wizard.navigation.router import EffectKind, NavigationEffect, TransitionResult
from wizard.step_registry import WIZARD_STEPS
from wizard.types import LocalizedText

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from wizard.session import RoomWizard

ResultSink = Callable[[TransitionResult], None]

_NAVIGATION_STYLE = """
<style>
.wizard-nav-warning-area {
    min-height: 1.6rem;
    margin: 0.4rem 0 0.6rem;
}

.wizard-nav-warning {
    color: #b42318;
    font-size: 0.92rem;
    transition: opacity 0.2s ease-out;
}

.wizard-nav-warning--empty {
    opacity: 0;
}

.wizard-stepper {
    display: flex;
    gap: 0.5rem;
    margin-bottom: 1rem;
}

.wizard-stepper__dot--completed {
    color: #12b76a;
}

.wizard-stepper__dot--current {
    font-weight: 650;
}
</style>
"""

_STATUS_ICONS = {"completed": "✓", "current": "●", "upcoming": "○"}


def inject_navigation_style() -> None:
    st.markdown(_NAVIGATION_STYLE, unsafe_allow_html=True)


def render_stepper(wizard: "RoomWizard", on_result: ResultSink) -> None:
    """Render one button per step; unreachable steps are disabled."""

    snapshots = wizard.controller.build_progress_snapshots()
    st.progress(wizard.controller.progress_ratio())
    columns = st.columns(len(snapshots))
    for column, snapshot in zip(columns, snapshots):
        label = f"{_STATUS_ICONS[snapshot.status]} {tr(*snapshot.step.label)}"

        def _jump(target: int = snapshot.step.ordinal) -> None:
            on_result(wizard.jump_to(target))

        with column:
            st.button(
                label,
                key=f"wizard_stepper_{snapshot.step.ordinal}",
                disabled=not snapshot.reachable or snapshot.status == "current",
                on_click=_jump,
                use_container_width=True,
            )


def render_navigation(
    wizard: "RoomWizard",
    on_result: ResultSink,
    *,
    on_submit: Callable[[], None],
) -> None:
    """Render back/next buttons; the final step's forward action submits."""

    back_col, next_col = st.columns(2)
    with back_col:
        st.button(
            tr_pair(NAV_BACK_LABEL),
            key="wizard_nav_back",
            on_click=lambda: on_result(wizard.retreat()),
            use_container_width=True,
        )
    with next_col:
        if wizard.controller.is_final_step:
            st.button(
                tr_pair(NAV_CREATE_LABEL),
                key="wizard_nav_submit",
                type="primary",
                on_click=on_submit,
                use_container_width=True,
            )
        else:
            st.button(
                tr_pair(NAV_NEXT_LABEL),
                key="wizard_nav_next",
                type="primary",
                on_click=lambda: on_result(wizard.advance()),
                use_container_width=True,
            )


def render_validation_message(message: LocalizedText | None) -> None:
    text = tr(*message) if message else ""
    warning_class = "wizard-nav-warning--active" if text else "wizard-nav-warning--empty"
    st.markdown(
        f"""
        <div class="wizard-nav-warning-area">
            <div class="wizard-nav-warning {warning_class}">{html.escape(text)}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def scroll_to_top() -> None:
    components.html(
        """
        <script>
        (function() {
            const target = window.parent.document.querySelector('section.main');
            if (target) {
                target.scrollIntoView({ behavior: 'smooth', block: 'start' });
            } else {
                window.parent.scrollTo({ top: 0, behavior: 'smooth' });
            }
        })();
        </script>
        """,
        height=0,
    )


def set_page_title(segment: str | None) -> None:
    step = next((candidate for candidate in WIZARD_STEPS if candidate.location_segment == segment), None)
    if step is None:
        return
    title = json.dumps(tr(*step.label))
    components.html(f"<script>window.parent.document.title = {title};</script>", height=0)


def apply_effects(effects: list[NavigationEffect]) -> None:
    """Execute the presentation side of queued transition effects."""

    for effect in effects:
        if effect.kind is EffectKind.SCROLL_TO_TOP:
            scroll_to_top()
        elif effect.kind is EffectKind.SET_PAGE_TITLE:
            set_page_title(effect.payload)
        elif effect.kind is EffectKind.SHOW_HINT:
            st.toast(tr_pair(FINAL_STEP_SHORTCUT_HINT_TEXT))


__all__ = [
    "apply_effects",
    "inject_navigation_style",
    "render_navigation",
    "render_stepper",
    "render_validation_message",
    "scroll_to_top",
    "set_page_title",
]

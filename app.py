# app.py: Room Wizard entrypoint
from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
for candidate in (APP_ROOT, APP_ROOT.parent):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from config import DEFAULT_LANGUAGE, LOG_LEVEL  # noqa: E402
from constants.keys import StateKeys, UIKeys  # noqa: E402
from utils.i18n import tr  # noqa: E402
from utils.logging_context import configure_logging  # noqa: E402
from utils.telemetry import setup_tracing  # noqa: E402
from wizard import run_wizard  # noqa: E402
from wizard.types import SelectionMode  # noqa: E402

APP_VERSION = "1.0.0"

configure_logging(level=LOG_LEVEL)
setup_tracing()

st.set_page_config(
    page_title="Room Wizard",
    page_icon="🍽️",
    layout="centered",
)

st.session_state.setdefault(StateKeys.LANG, DEFAULT_LANGUAGE)
st.session_state.setdefault("app_version", APP_VERSION)

_CONTEXT_MODE_LABELS: dict[str, tuple[str, str]] = {
    SelectionMode.NONE.value: ("Keine Vorgabe", "No preset"),
    SelectionMode.COOK.value: ("Kochen", "Cooking"),
    SelectionMode.DINE_OUT.value: ("Essen gehen", "Dining out"),
    SelectionMode.BOTH.value: ("Beides", "Both"),
}


def render_sidebar() -> None:
    """Render language and template controls owned by the enclosing app."""

    with st.sidebar:
        st.selectbox(
            "Sprache / Language",
            ["de", "en"],
            key=UIKeys.LANG_SELECT,
            index=0 if st.session_state[StateKeys.LANG] == "de" else 1,
            on_change=lambda: st.session_state.update({StateKeys.LANG: st.session_state[UIKeys.LANG_SELECT]}),
        )
        current = SelectionMode.normalize(st.session_state.get(StateKeys.CONTEXT_MODE)).value
        options = list(_CONTEXT_MODE_LABELS)
        choice = st.radio(
            tr("Vorlage", "Template"),
            options,
            index=options.index(current),
            format_func=lambda value: tr(*_CONTEXT_MODE_LABELS[value]),
        )
        if choice != current:
            st.session_state[StateKeys.CONTEXT_MODE] = choice


st.title(tr("Raum erstellen", "Create a room"))
render_sidebar()
run_wizard()

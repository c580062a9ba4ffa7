"""Simple i18n helper utilities."""

from __future__ import annotations

from typing import Final

import streamlit as st

DEFAULT_LANGUAGE: Final[str] = "de"

NAV_BACK_LABEL: Final[tuple[str, str]] = ("Zurück", "Back")
NAV_NEXT_LABEL: Final[tuple[str, str]] = ("Weiter", "Next")
NAV_CREATE_LABEL: Final[tuple[str, str]] = ("Raum erstellen", "Create room")
FINAL_STEP_SHORTCUT_HINT_TEXT: Final[tuple[str, str]] = (
    "Tipp: Über die Schrittanzeige kannst du jetzt direkt zwischen allen Schritten wechseln.",
    "Tip: you can now jump between all steps straight from the step indicator.",
)


def tr(de: str, en: str, lang: str | None = None) -> str:
    """Return the string matching the current language.

    Args:
        de: German text.
        en: English text.
        lang: Optional language override (``"de"`` or ``"en"``).

    Returns:
        The localized string for the requested language.
    """
    code = lang or st.session_state.get("lang", DEFAULT_LANGUAGE)
    return de if code == "de" else en


def tr_pair(pair: tuple[str, str], lang: str | None = None) -> str:
    """Shorthand for ``tr(*pair, lang=lang)``."""

    return tr(pair[0], pair[1], lang=lang)

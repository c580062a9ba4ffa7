"""Render user-facing errors in Streamlit."""

from __future__ import annotations

import logging

import streamlit as st

from config import DEBUG_DETAILS
from utils.i18n import tr

logger = logging.getLogger(__name__)

LocalizedMessage = str | tuple[str, str]


def resolve_message(message: LocalizedMessage, *, lang: str | None = None) -> str:
    """Pick the active language from a ``(de, en)`` pair; plain strings pass through."""

    if isinstance(message, str):
        return message
    return tr(*message, lang=lang)


def display_error(
    msg: LocalizedMessage,
    detail: str | BaseException | None = None,
    *,
    lang: str | None = None,
) -> None:
    """Show ``msg`` as an error banner.

    ``detail`` is only revealed in an expander when ``DEBUG_DETAILS`` is
    enabled; exceptions are also logged with their traceback.
    """

    if isinstance(detail, BaseException):
        logger.warning("%s", resolve_message(msg, lang="en"), exc_info=detail)
        detail = f"{type(detail).__name__}: {detail}"
    st.error(resolve_message(msg, lang=lang))
    if DEBUG_DETAILS and detail:
        with st.expander("Details", expanded=False):
            st.code(detail)


__all__ = ["LocalizedMessage", "display_error", "resolve_message"]

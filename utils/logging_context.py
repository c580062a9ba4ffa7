"""Per-session logging context.

Every log record gains ``session_id`` and ``wizard_step`` attributes so a
single Streamlit session can be followed through interleaved reruns.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

UNSET = "-"
LOG_FORMAT = "%(asctime)s %(levelname)s [session=%(session_id)s step=%(wizard_step)s] %(name)s: %(message)s"

_FIELDS: dict[str, contextvars.ContextVar[str]] = {
    "session_id": contextvars.ContextVar("room_wizard_session_id", default=UNSET),
    "wizard_step": contextvars.ContextVar("room_wizard_step", default=UNSET),
}
_BASE_FACTORY = logging.getLogRecordFactory()
_factory_installed = False


def _normalise(value: str | None) -> str:
    return (value or "").strip() or UNSET


def _stamp(record: logging.LogRecord) -> logging.LogRecord:
    for field, var in _FIELDS.items():
        if not hasattr(record, field):
            setattr(record, field, var.get())
    return record


def _context_record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
    return _stamp(_BASE_FACTORY(*args, **kwargs))


class WizardContextFilter(logging.Filter):
    """Stamp records created before the record factory was swapped in."""

    def filter(self, record: logging.LogRecord) -> bool:
        _stamp(record)
        return True


def configure_logging(*, level: int | str = logging.INFO) -> None:
    """Install the context-aware record factory and a formatter on the root logger.

    Safe to call on every rerun; handlers configured elsewhere keep their
    formatter.
    """

    global _factory_installed
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    for handler in root.handlers:
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if not any(isinstance(existing, WizardContextFilter) for existing in root.filters):
        root.addFilter(WizardContextFilter())
    if not _factory_installed:
        logging.setLogRecordFactory(_context_record_factory)
        _factory_installed = True


def set_session_id(session_id: str | None) -> None:
    configure_logging()
    _FIELDS["session_id"].set(_normalise(session_id))


def set_wizard_step(step: str | None) -> None:
    _FIELDS["wizard_step"].set(_normalise(step))


def current_wizard_step() -> str:
    return _FIELDS["wizard_step"].get()


@contextmanager
def log_context(*, session_id: str | None = None, wizard_step: str | None = None) -> Iterator[None]:
    """Override context fields for the duration of the block."""

    overrides = {"session_id": session_id, "wizard_step": wizard_step}
    tokens = [
        (_FIELDS[field], _FIELDS[field].set(_normalise(value)))
        for field, value in overrides.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = [
    "LOG_FORMAT",
    "WizardContextFilter",
    "configure_logging",
    "current_wizard_step",
    "log_context",
    "set_session_id",
    "set_wizard_step",
]

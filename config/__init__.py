"""Central configuration for the room wizard.

Values are read once at import time from the process environment (after
``.env`` has been loaded). Invalid numbers log a warning and fall back to the
default so a typo never prevents the app from starting.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_float_env(value: str | None, *, env_var: str, default: float) -> float:
    """Return a positive float parsed from ``value`` or ``default``."""

    if value is None or not value.strip():
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        logger.warning("%s=%r is not a number; using %s", env_var, value, default)
        return default
    if parsed <= 0:
        logger.warning("%s must be positive; using %s", env_var, default)
        return default
    return parsed


def _parse_positive_int_env(value: str | None, *, env_var: str, default: int) -> int:
    """Return a positive integer parsed from ``value`` or ``default``."""

    if value is None or not value.strip():
        return default
    try:
        parsed = int(float(value.strip()))
    except ValueError:
        logger.warning("%s=%r is not a number; using %s", env_var, value, default)
        return default
    if parsed <= 0:
        logger.warning("%s must be positive; using %s", env_var, default)
        return default
    return parsed


WIZARD_ROOT_PATH = os.getenv("WIZARD_ROOT_PATH", "/create/custom").strip() or "/create/custom"
MODE_SYNC_DELAY_SECONDS = _parse_positive_float_env(
    os.getenv("MODE_SYNC_DELAY_SECONDS"), env_var="MODE_SYNC_DELAY_SECONDS", default=0.15
)
VALIDATION_FLASH_SECONDS = _parse_positive_float_env(
    os.getenv("VALIDATION_FLASH_SECONDS"), env_var="VALIDATION_FLASH_SECONDS", default=0.5
)
TIMER_POLL_SECONDS = _parse_positive_float_env(
    os.getenv("TIMER_POLL_SECONDS"), env_var="TIMER_POLL_SECONDS", default=0.25
)
PERSISTENCE_BASE_URL = os.getenv("PERSISTENCE_BASE_URL", "").strip().rstrip("/")
SUGGESTIONS_BASE_URL = os.getenv("SUGGESTIONS_BASE_URL", "").strip().rstrip("/")
HTTP_TIMEOUT_SECONDS = _parse_positive_int_env(
    os.getenv("HTTP_TIMEOUT_SECONDS"), env_var="HTTP_TIMEOUT_SECONDS", default=8
)
HINT_STORE_PATH = os.getenv("HINT_STORE_PATH", "").strip() or None
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
DEBUG_DETAILS = _is_truthy_flag(os.getenv("DEBUG_DETAILS"))
DEFAULT_LANGUAGE = os.getenv("LANGUAGE", "de").strip().lower() or "de"


__all__ = [
    "DEBUG_DETAILS",
    "DEFAULT_LANGUAGE",
    "HINT_STORE_PATH",
    "HTTP_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "MODE_SYNC_DELAY_SECONDS",
    "PERSISTENCE_BASE_URL",
    "SUGGESTIONS_BASE_URL",
    "TIMER_POLL_SECONDS",
    "VALIDATION_FLASH_SECONDS",
    "WIZARD_ROOT_PATH",
]

"""One-time hint flags ("has the user seen this before")."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import MutableMapping, Protocol

logger = logging.getLogger(__name__)

FINAL_STEP_SHORTCUT_HINT = "final_step_shortcut"
_SESSION_KEY = "hints.seen"


class HintStore(Protocol):
    """Small key-value capability injected into the navigation controller."""

    def has_seen(self, key: str) -> bool: ...

    def mark_seen(self, key: str) -> None: ...


class SessionHintStore:
    """Remember hints for the lifetime of a session mapping."""

    def __init__(self, session_state: MutableMapping[str, object]) -> None:
        self._session_state = session_state

    def _seen(self) -> list[str]:
        raw = self._session_state.get(_SESSION_KEY)
        if isinstance(raw, list):
            return raw
        seen: list[str] = []
        self._session_state[_SESSION_KEY] = seen
        return seen

    def has_seen(self, key: str) -> bool:
        return key in self._seen()

    def mark_seen(self, key: str) -> None:
        seen = self._seen()
        if key not in seen:
            seen.append(key)


class JsonFileHintStore:
    """Persist hint flags across sessions in a small JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, bool]:
        try:
            with self._path.open("r", encoding="utf-8") as file:
                payload = json.load(file)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Unable to read hint store %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(key): bool(value) for key, value in payload.items()}

    def has_seen(self, key: str) -> bool:
        return self._load().get(key, False)

    def mark_seen(self, key: str) -> None:
        payload = self._load()
        if payload.get(key):
            return
        payload[key] = True
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as file:
                json.dump(payload, file, indent=2, sort_keys=True)
        except OSError as exc:
            logger.warning("Unable to write hint store %s: %s", self._path, exc)


__all__ = [
    "FINAL_STEP_SHORTCUT_HINT",
    "HintStore",
    "JsonFileHintStore",
    "SessionHintStore",
]

"""Session state utilities."""

from .hints import FINAL_STEP_SHORTCUT_HINT, HintStore, JsonFileHintStore, SessionHintStore

__all__ = ["FINAL_STEP_SHORTCUT_HINT", "HintStore", "JsonFileHintStore", "SessionHintStore"]

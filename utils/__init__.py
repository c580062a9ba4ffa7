"""Utility helpers for the room wizard app."""

from __future__ import annotations

from .errors import display_error as display_error

__all__ = ["display_error"]

"""Pydantic models for room drafts and the persistence contract."""

from .room import CreatedRoom, RoomDraft, RoomSubmission

__all__ = ["CreatedRoom", "RoomDraft", "RoomSubmission"]

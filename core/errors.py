"""Custom exception types for the room wizard's external collaborators."""

from __future__ import annotations


class RoomWizardError(Exception):
    """Base exception for room wizard failures."""


GENERIC_FAILURE_MESSAGE = (
    "Es ist ein unerwarteter Fehler aufgetreten. Bitte versuche es erneut.",
    "An unexpected error occurred. Please try again.",
)


class PersistenceError(RoomWizardError):
    """Raised when the room could not be created by the persistence service."""


class SuggestionFetchError(RoomWizardError):
    """Raised when a suggestion category could not be fetched."""

    def __init__(self, category: str, message: str | None = None) -> None:
        super().__init__(message or f"Unable to fetch suggestions for '{category}'")
        self.category = category

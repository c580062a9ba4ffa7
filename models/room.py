"""Pydantic models for the room draft and the persistence contract."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wizard.types import SelectionMode

MAX_PARTICIPANTS = 25
TIMER_OPTIONS: tuple[str, ...] = ("15", "30", "60", "custom")
PRICE_RANGES: tuple[str, ...] = ("$", "$$", "$$$", "$$$$")
RECIPE_DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
CUISINE_OPTIONS: tuple[tuple[str, str], ...] = (
    ("italian", "Italian"),
    ("japanese", "Japanese"),
    ("mexican", "Mexican"),
    ("chinese", "Chinese"),
    ("indian", "Indian"),
    ("american", "American"),
    ("thai", "Thai"),
    ("mediterranean", "Mediterranean"),
    ("vietnamese", "Vietnamese"),
    ("korean", "Korean"),
    ("french", "French"),
    ("greek", "Greek"),
)

DurationUnit = Literal["minutes", "hours"]


class RoomDraft(BaseModel):
    """Everything the user entered while walking through the wizard.

    Attributes:
        title: Room name shown to participants.
        mode: Cooking, dining out, both, or unselected.
        price_range: Selected price symbol for dining out.
        radius_km: Search radius for restaurants.
        cuisines: Selected cuisine identifiers.
        recipe_difficulty: Preferred recipe difficulty when cooking.
        participant_limit: Maximum participants; ``None`` while unset.
        access_control: ``True`` requires a join code, ``False`` is open,
            ``None`` while unset.
        timer_option: One of :data:`TIMER_OPTIONS` or ``""``.
        custom_duration: Duration used when ``timer_option == "custom"``.
        duration_unit: Unit of ``custom_duration``.
        deadline: ISO date/time string or ``""``.
        reminders: Whether reminders should be sent before the deadline.
        selected_contacts: Identifiers of invited contacts.
        save_as_template: Whether the configuration is stored for reuse.
        template_name: Name of the stored template; falls back to ``title``.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = ""
    mode: SelectionMode = SelectionMode.NONE
    price_range: str | None = None
    radius_km: float = Field(5.0, ge=0.0, le=50.0)
    cuisines: list[str] = Field(default_factory=list)
    recipe_difficulty: str | None = None
    participant_limit: int | None = Field(None, ge=0, le=MAX_PARTICIPANTS)
    access_control: bool | None = None
    timer_option: str = "30"
    custom_duration: int = Field(15, ge=0)
    duration_unit: DurationUnit = "minutes"
    deadline: str = ""
    reminders: bool = False
    selected_contacts: list[str] = Field(default_factory=list)
    save_as_template: bool = False
    template_name: str = ""

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: object) -> SelectionMode:
        return SelectionMode.normalize(value)

    @field_validator("timer_option", mode="before")
    @classmethod
    def _normalize_timer_option(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()


class CreatedRoom(BaseModel):
    """Identifiers returned by the persistence service."""

    model_config = ConfigDict(populate_by_name=True)

    resource_id: str = Field(..., min_length=1, alias="resourceId")
    share_code: str = Field(..., min_length=1, alias="shareCode")


class RoomSubmission(BaseModel):
    """Payload sent to the persistence service."""

    title: str = Field(..., min_length=1)
    timer_minutes: int = Field(..., gt=0)
    mode: SelectionMode | None = None
    template_name: str | None = Field(None, min_length=1)


__all__ = [
    "CUISINE_OPTIONS",
    "CreatedRoom",
    "DurationUnit",
    "MAX_PARTICIPANTS",
    "PRICE_RANGES",
    "RECIPE_DIFFICULTIES",
    "RoomDraft",
    "RoomSubmission",
    "TIMER_OPTIONS",
]

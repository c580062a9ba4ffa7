"""Persistence service clients used to create the room on submission."""

from __future__ import annotations

import logging
import secrets
import string
import uuid
from typing import Protocol

import requests
from pydantic import ValidationError

from core.errors import PersistenceError
from models.room import CreatedRoom, RoomSubmission
from utils.telemetry import traced_span
from wizard.types import SelectionMode

logger = logging.getLogger(__name__)

SHARE_CODE_ALPHABET = string.ascii_uppercase + string.digits
SHARE_CODE_LENGTH = 6


def generate_share_code(length: int = SHARE_CODE_LENGTH) -> str:
    """Return a random join code made of ``A-Z`` and ``0-9``."""

    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(length))


class PersistenceService(Protocol):
    def submit(
        self,
        title: str,
        timer_minutes: int,
        *,
        mode: SelectionMode | None = None,
        template_name: str | None = None,
    ) -> CreatedRoom: ...


class InMemoryPersistenceService:
    """Keep created rooms in a dictionary; used offline and in tests."""

    def __init__(self) -> None:
        self.rooms: dict[str, RoomSubmission] = {}

    def submit(
        self,
        title: str,
        timer_minutes: int,
        *,
        mode: SelectionMode | None = None,
        template_name: str | None = None,
    ) -> CreatedRoom:
        try:
            submission = RoomSubmission(title=title, timer_minutes=timer_minutes, mode=mode, template_name=template_name)
        except ValidationError as exc:
            raise PersistenceError(f"Invalid room submission: {exc}") from exc
        resource_id = str(uuid.uuid4())
        self.rooms[resource_id] = submission
        return CreatedRoom(resource_id=resource_id, share_code=generate_share_code())


class HttpPersistenceService:
    """POST the room to ``{base_url}/rooms`` and validate the response."""

    def __init__(self, base_url: str, *, timeout: float = 8, session: requests.Session | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def submit(
        self,
        title: str,
        timer_minutes: int,
        *,
        mode: SelectionMode | None = None,
        template_name: str | None = None,
    ) -> CreatedRoom:
        try:
            submission = RoomSubmission(title=title, timer_minutes=timer_minutes, mode=mode, template_name=template_name)
        except ValidationError as exc:
            raise PersistenceError(f"Invalid room submission: {exc}") from exc

        with traced_span("room_wizard.submit", room__timer_minutes=timer_minutes) as span:
            try:
                response = self._session.post(
                    f"{self._base_url}/rooms",
                    json=submission.model_dump(mode="json", exclude_none=True),
                    timeout=self._timeout,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                payload = response.json()
            except requests.RequestException as exc:
                raise PersistenceError(f"Room creation request failed: {exc}") from exc
            except ValueError as exc:
                raise PersistenceError("Room creation returned invalid JSON") from exc

            try:
                created = CreatedRoom.model_validate(payload)
            except ValidationError as exc:
                raise PersistenceError(f"Unexpected room creation response: {exc}") from exc
            span.set_attribute("room.resource_id", created.resource_id)
        logger.info("Created room %s", created.resource_id)
        return created


__all__ = [
    "HttpPersistenceService",
    "InMemoryPersistenceService",
    "PersistenceService",
    "SHARE_CODE_ALPHABET",
    "generate_share_code",
]

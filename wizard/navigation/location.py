"""Two-way binding between the wizard step and the browser location.

The router writes the active step's segment whenever it navigates on its own
and reads the location on every rerun to pick up back/forward navigation.
Each write is remembered so the next read does not mistake the controller's
own echo for an external change.
"""

from __future__ import annotations

import logging
from typing import MutableMapping, Protocol, cast

import streamlit as st

from wizard.step_registry import WIZARD_STEPS, location_by_ordinal, step_by_location

logger = logging.getLogger(__name__)

DEFAULT_ROOT_PATH = "/create/custom"
STEP_QUERY_PARAM = "step"


def _normalize_root(root_path: str) -> str:
    cleaned = "/" + root_path.strip().strip("/")
    return cleaned if cleaned != "/" else ""


def join_location(root_path: str, segment: str) -> str:
    """Return ``root_path/segment`` (or the bare root when ``segment`` is empty)."""

    root = _normalize_root(root_path)
    segment = segment.strip().strip("/")
    if not segment:
        return root or "/"
    return f"{root}/{segment}"


def segment_from_location(location: str, root_path: str) -> str:
    """Return the step segment of ``location`` below ``root_path`` or ``""``."""

    root = _normalize_root(root_path)
    path = "/" + location.split("?", 1)[0].split("#", 1)[0].strip().strip("/")
    if root and path != root and not path.startswith(f"{root}/"):
        return ""
    remainder = path[len(root) :].strip("/")
    if not remainder:
        return ""
    return remainder.rsplit("/", 1)[-1]


class LocationPort(Protocol):
    """Address-bar-like location that can be read and replaced."""

    def read(self) -> str: ...

    def replace(self, location: str) -> None: ...


class QueryParamLocation:
    """Expose ``st.query_params['step']`` as a path below ``root_path``."""

    def __init__(
        self,
        query_params: MutableMapping[str, object] | None = None,
        *,
        root_path: str = DEFAULT_ROOT_PATH,
        param: str = STEP_QUERY_PARAM,
    ) -> None:
        self._query_params = cast(
            MutableMapping[str, object],
            query_params if query_params is not None else st.query_params,
        )
        self._root_path = root_path
        self._param = param

    def read(self) -> str:
        query_params = self._query_params
        if hasattr(query_params, "get_all"):
            values = list(query_params.get_all(self._param))  # type: ignore[attr-defined]
        else:
            raw = query_params.get(self._param)
            values = [raw] if raw is not None else []
        segment = str(values[0]) if values else ""
        return join_location(self._root_path, segment)

    def replace(self, location: str) -> None:
        segment = segment_from_location(location, self._root_path)
        if segment:
            self._query_params[self._param] = segment
        else:
            self._query_params.pop(self._param, None)


class MemoryLocation:
    """In-memory history used by headless hosts and tests."""

    def __init__(self, location: str = DEFAULT_ROOT_PATH) -> None:
        self._entries: list[str] = [location]
        self._index = 0
        self.replace_count = 0

    def read(self) -> str:
        return self._entries[self._index]

    def replace(self, location: str) -> None:
        self._entries[self._index] = location
        self.replace_count += 1

    def push(self, location: str) -> None:
        """Navigate to ``location`` as a user-initiated history entry."""

        del self._entries[self._index + 1 :]
        self._entries.append(location)
        self._index += 1

    def back(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        return True

    def forward(self) -> bool:
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        return True


class LocationSynchronizer:
    """Translate between step ordinals and location segments."""

    def __init__(self, port: LocationPort, *, root_path: str = DEFAULT_ROOT_PATH) -> None:
        self._port = port
        self._root_path = root_path
        self._last_location: str | None = None

    @property
    def root_path(self) -> str:
        return self._root_path

    def location_for(self, ordinal: int) -> str:
        return join_location(self._root_path, location_by_ordinal(ordinal))

    def current_segment(self) -> str:
        return segment_from_location(self._port.read(), self._root_path)

    def mount(self, resume_segment: str | None = None) -> int:
        """Resolve the initial step and normalise the location."""

        if resume_segment:
            resumed = step_by_location(resume_segment)
            if resumed is not None:
                self.write(resumed.ordinal)
                return resumed.ordinal
            logger.warning("Ignoring unknown resume step '%s'", resume_segment)

        segment = self.current_segment()
        step = step_by_location(segment)
        if step is None:
            if segment:
                logger.info("Unknown wizard location segment '%s'; redirecting to first step", segment)
            first = WIZARD_STEPS[0].ordinal
            self.write(first)
            return first
        self._last_location = self._port.read()
        return step.ordinal

    def write(self, ordinal: int) -> None:
        """Replace the location with the segment of ``ordinal``."""

        location = self.location_for(ordinal)
        self._last_location = location
        if self._port.read() != location:
            self._port.replace(location)

    def poll(self) -> int | None:
        """Return the ordinal of an external location change, if any."""

        location = self._port.read()
        if location == self._last_location:
            return None
        segment = segment_from_location(location, self._root_path)
        step = step_by_location(segment)
        if step is None:
            logger.info("External navigation to unknown segment '%s'; redirecting", segment)
            first = WIZARD_STEPS[0].ordinal
            self.write(first)
            return first
        self._last_location = location
        return step.ordinal


__all__ = [
    "DEFAULT_ROOT_PATH",
    "LocationPort",
    "LocationSynchronizer",
    "MemoryLocation",
    "QueryParamLocation",
    "STEP_QUERY_PARAM",
    "join_location",
    "segment_from_location",
]

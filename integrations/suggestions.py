"""Room name suggestion sources with a built-in fallback bank.

Fetches run off the script thread in a :class:`SuggestionLoader`; the result
is only picked up by :meth:`SuggestionLoader.poll` on the script thread, so a
response that arrives after the wizard was dismissed never touches its state.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Protocol, Sequence

import requests

from core.errors import RoomWizardError, SuggestionFetchError
from utils.retry import retry_with_backoff
from utils.telemetry import traced_span

logger = logging.getLogger(__name__)

FALLBACK_SUGGESTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "general": (
            "Food Group Chat",
            "Dinner Decisions",
            "Lunch Planners",
            "Foodie Friends",
            "Meal Planning Committee",
            "Tasty Times",
        ),
        "morning": ("Morning Food Hangout", "Breakfast Brigade", "Rise & Dine"),
        "evening": ("Dinner Discovery", "Evening Epicureans", "Twilight Tastings"),
        "cooking": ("Home Chef Gathering", "Kitchen Collective", "Recipe Roundup"),
        "dining-out": ("Restaurant Hunt", "Dining Adventure", "Food Explorer Group"),
        "both": ("Cook & Dine Experience", "Kitchen to Table Journey", "Food Adventure"),
    }
)

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "general",
    "morning",
    "lunch",
    "afternoon",
    "evening",
    "latenight",
    "weekend",
    "occasion",
    "cooking",
    "dining-out",
    "both",
)


class SuggestionSource(Protocol):
    def fetch_suggestions(self, category: str) -> list[str]: ...


@dataclass(frozen=True)
class SuggestionBank:
    """Suggestions grouped by category plus a degraded-mode marker."""

    entries: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    degraded: bool = False

    def for_category(self, category: str) -> tuple[str, ...]:
        return tuple(self.entries.get(category, ()))


def fallback_bank() -> SuggestionBank:
    return SuggestionBank(entries=dict(FALLBACK_SUGGESTIONS), degraded=True)


class StaticSuggestionSource:
    """Serve suggestions from an in-memory mapping."""

    def __init__(self, entries: Mapping[str, Sequence[str]] | None = None) -> None:
        self._entries = {key: list(values) for key, values in (entries or FALLBACK_SUGGESTIONS).items()}

    def fetch_suggestions(self, category: str) -> list[str]:
        return list(self._entries.get(category, []))


def _parse_payload(payload: object, category: str) -> list[str]:
    if isinstance(payload, Mapping):
        payload = payload.get("suggestions", [])
    if not isinstance(payload, list):
        raise SuggestionFetchError(category, f"Unexpected suggestion payload for '{category}'")
    texts: list[str] = []
    for item in payload:
        text = item.get("text") if isinstance(item, Mapping) else item
        if isinstance(text, str) and text.strip():
            texts.append(text.strip())
    return texts


class HttpSuggestionSource:
    """Fetch suggestions from ``GET {base_url}/suggestions?category=...``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 8,
        max_tries: int = 3,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._get = retry_with_backoff(max_tries=max_tries, logger=logger)(self._get_once)

    def _get_once(self, category: str) -> object:
        response = self._session.get(
            f"{self._base_url}/suggestions",
            params={"category": category},
            timeout=self._timeout,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        return response.json()

    def fetch_suggestions(self, category: str) -> list[str]:
        with traced_span("room_wizard.fetch_suggestions", suggestions__category=category):
            try:
                payload = self._get(category)
            except requests.RequestException as exc:
                raise SuggestionFetchError(category, f"Suggestion request failed: {exc}") from exc
            except ValueError as exc:
                raise SuggestionFetchError(category, "Suggestion response is not JSON") from exc
            return _parse_payload(payload, category)


def load_suggestion_bank(source: SuggestionSource, categories: Iterable[str] = DEFAULT_CATEGORIES) -> SuggestionBank:
    """Fetch every category, falling back to the built-in bank on any failure."""

    entries: dict[str, tuple[str, ...]] = {}
    for category in categories:
        try:
            entries[category] = tuple(source.fetch_suggestions(category))
        except RoomWizardError as exc:
            logger.warning("Suggestion fetch failed for '%s': %s; using fallback suggestions", category, exc)
            return fallback_bank()
    if not any(entries.values()):
        logger.warning("Suggestion source returned no suggestions; using fallback suggestions")
        return fallback_bank()
    return SuggestionBank(entries=entries, degraded=False)


class SuggestionLoader:
    """Load the suggestion bank in the background and hand it over on poll."""

    def __init__(
        self,
        source: SuggestionSource,
        *,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._source = source
        self._categories = tuple(categories)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="room-suggestions")
        self._future: Future[SuggestionBank] | None = None
        self._bank: SuggestionBank | None = None
        self._disposed = False

    @property
    def bank(self) -> SuggestionBank | None:
        return self._bank

    @property
    def loading(self) -> bool:
        return self._future is not None and self._bank is None and not self._disposed

    def start(self) -> None:
        if self._disposed or self._future is not None:
            return
        self._future = self._executor.submit(load_suggestion_bank, self._source, self._categories)

    def poll(self) -> SuggestionBank | None:
        """Return the loaded bank once available; ``None`` while pending or after dispose."""

        if self._disposed:
            return None
        if self._bank is not None:
            return self._bank
        future = self._future
        if future is None or not future.done():
            return None
        error = future.exception()
        if error is not None:
            logger.warning("Suggestion loading failed: %s; using fallback suggestions", error)
            self._bank = fallback_bank()
        else:
            self._bank = future.result()
        return self._bank

    def dispose(self) -> None:
        self._disposed = True
        if self._future is not None:
            self._future.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)


__all__ = [
    "DEFAULT_CATEGORIES",
    "FALLBACK_SUGGESTIONS",
    "HttpSuggestionSource",
    "StaticSuggestionSource",
    "SuggestionBank",
    "SuggestionLoader",
    "SuggestionSource",
    "fallback_bank",
    "load_suggestion_bank",
]

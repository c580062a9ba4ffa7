from pathlib import Path
import sys
from dataclasses import dataclass

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from utils.scheduler import PollingScheduler  # noqa: E402


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


class _QueryParamStore(dict[str, str]):
    """Dictionary with the ``get_all`` accessor of ``st.query_params``."""

    def get_all(self, key: str) -> list[str]:
        value = self.get(key)
        return [value] if value is not None else []


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture(autouse=True)
def _stub_streamlit_query_params(monkeypatch: pytest.MonkeyPatch) -> _QueryParamStore:
    """Replace ``st.query_params`` with an in-memory store."""

    query_params = _QueryParamStore()
    monkeypatch.setattr(st, "query_params", query_params, raising=False)
    return query_params


@pytest.fixture
def query_params(_stub_streamlit_query_params: _QueryParamStore) -> _QueryParamStore:
    return _stub_streamlit_query_params


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> PollingScheduler:
    return PollingScheduler(clock=clock)

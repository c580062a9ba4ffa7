from __future__ import annotations

from types import SimpleNamespace

import backoff
import pytest
import requests

from utils.retry import giveup_on_client_error, retry_with_backoff


def _http_error(status: int) -> requests.HTTPError:
    return requests.HTTPError(f"HTTP {status}", response=SimpleNamespace(status_code=status))  # type: ignore[arg-type]


def test_giveup_only_on_client_errors() -> None:
    assert giveup_on_client_error(_http_error(404))
    assert not giveup_on_client_error(_http_error(503))
    assert not giveup_on_client_error(requests.ConnectionError("offline"))


def test_transient_errors_are_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(backoff._sync.time, "sleep", lambda _seconds: None)
    attempts: list[int] = []

    @retry_with_backoff(max_tries=3)
    def _flaky() -> str:
        attempts.append(1)
        if len(attempts) < 3:
            raise requests.ConnectionError("offline")
        return "ok"

    assert _flaky() == "ok"
    assert len(attempts) == 3


def test_client_errors_are_not_retried() -> None:
    attempts: list[int] = []

    @retry_with_backoff(max_tries=3)
    def _missing() -> None:
        attempts.append(1)
        raise _http_error(404)

    with pytest.raises(requests.HTTPError):
        _missing()
    assert len(attempts) == 1

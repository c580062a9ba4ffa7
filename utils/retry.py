"""Retry helpers with exponential backoff for outbound HTTP calls."""

from __future__ import annotations

from typing import Any, Callable, Iterable, ParamSpec, TypeVar

import backoff
import requests

T = TypeVar("T")
P = ParamSpec("P")

# Transport-level failures worth another attempt. HTTP status errors are
# handled by ``giveup_on_client_error``.
HTTP_RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (
    requests.ConnectionError,
    requests.Timeout,
    requests.HTTPError,
)


def giveup_on_client_error(exc: Exception) -> bool:
    """Return ``True`` for 4xx responses, which will not improve on retry."""

    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return isinstance(status, int) and 400 <= status < 500


def retry_with_backoff(
    *,
    exceptions: Iterable[type[Exception]] = HTTP_RETRY_EXCEPTIONS,
    max_tries: int = 3,
    giveup: Callable[[Exception], bool] | None = None,
    on_giveup: Callable[[Any], None] | Iterable[Callable[[Any], None]] | None = None,
    jitter: Any = backoff.full_jitter,
    logger: Any = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Return a decorator applying exponential backoff for ``exceptions``."""

    exception_tuple: tuple[type[Exception], ...] = tuple(exceptions)
    resolved_giveup: Callable[[Exception], bool] = giveup or giveup_on_client_error

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        return backoff.on_exception(
            backoff.expo,
            exception_tuple,
            max_tries=max_tries,
            jitter=jitter,
            giveup=resolved_giveup,
            on_giveup=on_giveup,
            logger=logger,
        )(func)

    return decorator


__all__ = ["HTTP_RETRY_EXCEPTIONS", "giveup_on_client_error", "retry_with_backoff"]

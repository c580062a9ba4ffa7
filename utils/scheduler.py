"""Cancelable one-shot timers for the single-threaded wizard host.

Streamlit reruns the script for every interaction, so timers are not backed
by threads. The host calls :meth:`PollingScheduler.run_due` at the start of a
rerun (and from a polling fragment while timers are pending) and due callbacks
fire in deadline order on the script thread.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


@dataclass(order=True)
class TimerHandle:
    """Handle for a scheduled callback."""

    when: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired


class Scheduler(Protocol):
    """Anything able to run ``callback`` once after ``delay`` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class PollingScheduler:
    """Deadline queue drained explicitly by the host."""

    def __init__(self, *, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._queue: list[TimerHandle] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(
            when=self._clock() + max(0.0, delay),
            sequence=next(self._counter),
            callback=callback,
        )
        heapq.heappush(self._queue, handle)
        return handle

    def run_due(self) -> int:
        """Fire every callback whose deadline has passed and return the count."""

        fired = 0
        now = self._clock()
        while self._queue and self._queue[0].when <= now:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        return fired

    def next_deadline(self) -> float | None:
        self._discard_cancelled()
        return self._queue[0].when if self._queue else None

    @property
    def pending(self) -> int:
        self._discard_cancelled()
        return len(self._queue)

    def cancel_all(self) -> None:
        for handle in self._queue:
            handle.cancel()
        if self._queue:
            logger.debug("Cancelled %d pending timer(s)", len(self._queue))
        self._queue.clear()

    def _discard_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)


class Debouncer:
    """Single cancel-and-replace timer slot."""

    def __init__(self, scheduler: Scheduler, delay: float) -> None:
        self._scheduler = scheduler
        self.delay = delay
        self._handle: TimerHandle | None = None

    def schedule(self, callback: Callable[[], None]) -> TimerHandle:
        """Cancel the pending callback (if any) and schedule ``callback``."""

        self.cancel()

        def _fire() -> None:
            self._handle = None
            callback()

        self._handle = self._scheduler.call_later(self.delay, _fire)
        return self._handle

    def cancel(self) -> bool:
        """Cancel the pending callback and report whether one was pending."""

        handle, self._handle = self._handle, None
        if handle is not None and handle.active:
            handle.cancel()
            return True
        return False

    @property
    def pending(self) -> bool:
        return self._handle is not None and self._handle.active


__all__ = ["Debouncer", "PollingScheduler", "Scheduler", "TimerHandle"]

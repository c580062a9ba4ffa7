"""Debounced reconciliation of the selection mode between host and wizard.

The mode has two candidate writers: the enclosing context (session state,
templates, quick-create presets) and the in-wizard selector. Each direction
runs through its own :class:`~utils.scheduler.Debouncer`; a write from one
side cancels the pending write of the other, so the last writer wins and no
update is ever issued from inside another update of the same value.
"""

from __future__ import annotations

import logging
from typing import Callable

from utils.scheduler import Debouncer, Scheduler
from wizard.types import SelectionMode

logger = logging.getLogger(__name__)

DEFAULT_SYNC_DELAY_SECONDS = 0.15


class ModeMirror:
    """Keep a local mode and a context-owned mode eventually equal."""

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        push_to_context: Callable[[SelectionMode], None],
        initial_local: object = None,
        initial_context: object = None,
        delay: float = DEFAULT_SYNC_DELAY_SECONDS,
        on_local_change: Callable[[SelectionMode, SelectionMode], None] | None = None,
    ) -> None:
        self._push_to_context = push_to_context
        self._on_local_change = on_local_change
        self._context_mode = SelectionMode.normalize(initial_context)
        local = SelectionMode.normalize(initial_local)
        self._local_mode = local if local.is_selected else self._context_mode
        self._to_local = Debouncer(scheduler, delay)
        self._to_context = Debouncer(scheduler, delay)
        self._disposed = False

    @property
    def local_mode(self) -> SelectionMode:
        return self._local_mode

    @property
    def context_mode(self) -> SelectionMode:
        return self._context_mode

    @property
    def pending(self) -> bool:
        return self._to_local.pending or self._to_context.pending

    def context_changed(self, value: object) -> bool:
        """Record a context-side write; return ``True`` when a local update was scheduled."""

        if self._disposed:
            return False
        incoming = SelectionMode.normalize(value)
        if incoming == self._context_mode:
            # Repeated value: only reconcile a local mode that still disagrees.
            if incoming == self._local_mode or self.pending:
                return False
        else:
            self._context_mode = incoming
            self._to_context.cancel()
        if incoming == self._local_mode:
            self._to_local.cancel()
            return False
        logger.debug("Context mode changed to '%s'; scheduling local update", incoming)
        self._to_local.schedule(lambda: self._apply_local(incoming))
        return True

    def select(self, mode: object) -> SelectionMode:
        """Apply a user selection locally; re-selecting the active mode clears it."""

        if self._disposed:
            return self._local_mode
        requested = SelectionMode.normalize(mode)
        resolved = SelectionMode.NONE if requested == self._local_mode else requested
        self._to_local.cancel()
        self._set_local(resolved)
        if resolved != self._context_mode:
            logger.debug("Local mode changed to '%s'; scheduling context push", resolved)
            self._to_context.schedule(lambda: self._push(resolved))
        else:
            self._to_context.cancel()
        return resolved

    def dispose(self) -> None:
        self._disposed = True
        self._to_local.cancel()
        self._to_context.cancel()

    def _apply_local(self, value: SelectionMode) -> None:
        if self._disposed:
            return
        self._set_local(value)

    def _push(self, value: SelectionMode) -> None:
        if self._disposed:
            return
        # Record before pushing so an echo from the host is seen as a no-op.
        self._context_mode = value
        self._push_to_context(value)

    def _set_local(self, value: SelectionMode) -> None:
        previous = self._local_mode
        if previous == value:
            return
        self._local_mode = value
        if self._on_local_change is not None:
            self._on_local_change(previous, value)


__all__ = ["DEFAULT_SYNC_DELAY_SECONDS", "ModeMirror"]

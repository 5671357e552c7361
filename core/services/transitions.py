"""Enter/exit transition bookkeeping for stack entries.

The controller decides *when* a transition runs and keeps at most one
active handle per entry. Playback itself is delegated to an
`AnimationDriver`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import itertools
from typing import Any

from loguru import logger

from core.errors import TransitionConflict
from core.models import EntryState, StackEntry
from core.services.interfaces import AnimationDriver

ENTER = "enter"
EXIT = "exit"

DEFAULT_ENTER_MS = 600
DEFAULT_EXIT_MS = 1500

_handle_ids = itertools.count(1)


@dataclass(eq=False)
class TransitionHandle:
    """A running (or finished/cancelled) transition on one entry."""

    kind: str
    entry: StackEntry
    token: Any = None
    active: bool = True
    cancelled: bool = False
    id: int = field(default_factory=lambda: next(_handle_ids))


class TransitionController:
    """Starts, completes and cancels entry transitions.

    Args:
        driver: Animation collaborator performing the actual playback.
        enter_ms: Duration of the enter transition.
        exit_ms: Duration of the exit transition.
        on_entered: Called with the entry once its enter transition finished.
    """

    def __init__(
        self,
        driver: AnimationDriver,
        enter_ms: int = DEFAULT_ENTER_MS,
        exit_ms: int = DEFAULT_EXIT_MS,
        on_entered: Callable[[StackEntry], None] | None = None,
    ) -> None:
        self._driver = driver
        self._enter_ms = int(enter_ms)
        self._exit_ms = int(exit_ms)
        self.on_entered = on_entered

    def enter(self, entry: StackEntry) -> TransitionHandle:
        """Animate `entry` into view."""
        return self._start(entry, ENTER, self._enter_ms, EntryState.ENTERING)

    def exit(self, entry: StackEntry) -> TransitionHandle:
        """Animate `entry` out of view. It stays in the stack until covered."""
        return self._start(entry, EXIT, self._exit_ms)

    def cancel(self, handle: TransitionHandle | None) -> None:
        """Stop `handle` if still active; its completion callback never fires."""
        if handle is None or not handle.active:
            return
        handle.active = False
        handle.cancelled = True
        if handle.entry.transition is handle:
            handle.entry.transition = None
        logger.debug("Cancelled {} transition for {}", handle.kind, handle.entry.photo.name)
        self._driver.stop(handle.token)

    def _start(
        self, entry: StackEntry, kind: str, duration_ms: int, state: EntryState | None = None
    ) -> TransitionHandle:
        if entry.is_transitioning:
            raise TransitionConflict(
                f"{entry.photo.name!r} already has a {entry.transition.kind} transition"
            )
        if state is not None:
            entry.state = state
        handle = TransitionHandle(kind=kind, entry=entry)
        # Attach before starting: a synchronous driver may finish immediately
        entry.transition = handle
        handle.token = self._driver.start(
            entry, kind, duration_ms, lambda: self._finished(handle)
        )
        return handle

    def _finished(self, handle: TransitionHandle) -> None:
        if not handle.active:
            return
        handle.active = False
        entry = handle.entry
        if entry.transition is handle:
            entry.transition = None
        if handle.kind == ENTER:
            if entry.state is not EntryState.REMOVED:
                entry.state = EntryState.VISIBLE
            if self.on_entered is not None:
                self.on_entered(entry)

from __future__ import annotations

from collections.abc import Callable
import itertools
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Qt, Signal, Slot
from loguru import logger

from core.services.interfaces import DoneCallback


class _DecodeRelay(QObject):
    """Carries task results back to the thread that owns the relay.

    The relay is created on the GUI thread; the queued connection makes
    `_deliver` run there no matter which pool thread emitted `finished`.
    """

    finished = Signal(int, object, object)

    def __init__(self, handler: Callable[[int, Any, Any], None], parent: QObject | None = None):
        super().__init__(parent)
        self._handler = handler
        self.finished.connect(self._deliver, Qt.QueuedConnection)

    @Slot(int, object, object)
    def _deliver(self, ticket: int, result: Any, error: Any) -> None:
        self._handler(ticket, result, error)


class _DecodeTask(QRunnable):
    """QRunnable running one decode job.

    Emits `relay.finished(ticket, result, error)` upon completion.
    """

    def __init__(self, *, ticket: int, job: Callable[[], Any], relay: _DecodeRelay) -> None:
        super().__init__()
        self._ticket = ticket
        self._job = job
        self._relay = relay

    def run(self) -> None:  # type: ignore[override]
        result: Any = None
        error: Exception | None = None
        try:
            result = self._job()
        except Exception as ex:  # handed back to the coordinator
            logger.error("Decode task {} failed: {}", self._ticket, ex)
            error = ex
        self._relay.finished.emit(self._ticket, result, error)


class DecodeTaskRunner:
    """Serial background worker for decode jobs.

    Uses a private single-thread pool so jobs run one at a time in
    submission order, and completions reach the GUI thread in that order.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        self._pool = QThreadPool(parent)
        self._pool.setMaxThreadCount(1)
        self._relay = _DecodeRelay(self._on_finished, parent)
        self._callbacks: dict[int, DoneCallback] = {}
        self._tickets = itertools.count(1)

    @property
    def pending_count(self) -> int:
        """Jobs submitted whose completion has not been delivered yet."""
        return len(self._callbacks)

    def submit(self, job: Callable[[], Any], on_done: DoneCallback) -> int:
        """Queue `job`; `on_done(result, error)` runs later on the GUI thread."""
        ticket = next(self._tickets)
        self._callbacks[ticket] = on_done
        self._pool.start(_DecodeTask(ticket=ticket, job=job, relay=self._relay))
        return ticket

    def _on_finished(self, ticket: int, result: Any, error: Any) -> None:
        on_done = self._callbacks.pop(ticket, None)
        if on_done is None:
            logger.warning("Decode result for unknown ticket {}", ticket)
            return
        on_done(result, error)

"""Decode workers that need no event loop."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from core.services.interfaces import DoneCallback


class ImmediateWorker:
    """Runs each job inline on the calling thread.

    Useful for headless runs and tests; completions are trivially in
    submission order.
    """

    def submit(self, job: Callable[[], Any], on_done: DoneCallback) -> None:
        try:
            result = job()
        except Exception as ex:  # handed to the coordinator's failure policy
            on_done(None, ex)
            return
        on_done(result, None)

"""Debouncing over a pluggable scheduler.

"Schedule callback after delay D, cancel-and-reschedule on new input."
The scheduler decides where the callback runs: a timer thread, a UI event
loop, or a test harness that fires on demand.
"""

from __future__ import annotations

import threading
from typing import Callable, Protocol

DEFAULT_DELAY = 0.05  # 50ms


class TimerHandle(Protocol):
    """A scheduled callback that can still be cancelled."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ThreadingScheduler:
    """Scheduler backed by threading.Timer.

    Callbacks run on a timer thread, not the caller's thread.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer:
    """Collapses bursts of triggers into one callback after quiescence."""

    def __init__(self, delay: float = DEFAULT_DELAY, scheduler: Scheduler | None = None):
        self.delay = delay
        self._scheduler = scheduler or ThreadingScheduler()
        self._handle: TimerHandle | None = None
        self._callback: Callable[[], None] | None = None
        self._token = 0
        self._lock = threading.RLock()

    @property
    def pending(self) -> bool:
        """Whether a callback is waiting for its window to elapse."""
        return self._handle is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        """(Re)start the window; only the latest callback will run."""
        with self._lock:
            self._cancel_locked()
            self._callback = callback
            self._token += 1
            token = self._token
            self._handle = self._scheduler.call_later(self.delay, lambda: self._fire(token))

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        with self._lock:
            self._cancel_locked()

    def flush(self) -> bool:
        """Run the pending callback now.

        Returns:
            True if a callback was pending and ran.
        """
        with self._lock:
            callback = self._callback
            self._cancel_locked()
        if callback is None:
            return False
        callback()
        return True

    def _fire(self, token: int) -> None:
        with self._lock:
            # A timer that lost the race with trigger() or cancel()
            if token != self._token:
                return
            callback = self._callback
            self._handle = None
            self._callback = None
        if callback is not None:
            callback()

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

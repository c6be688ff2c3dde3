"""Deferred, fire-and-forget work used to complete started use cases."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_DELAY = 2.0


class CompletionScheduler:
    """Run callbacks once after a delay on daemon timer threads.

    Pending callbacks are best effort: :meth:`shutdown` cancels them and a
    process exit drops them without notice. Nothing reports a callback that
    never ran.
    """

    def __init__(self, delay: float = DEFAULT_COMPLETION_DELAY) -> None:
        """Create a scheduler whose callbacks fire ``delay`` seconds later."""
        if delay < 0:
            raise ValueError("Completion delay must not be negative")
        self.delay = delay
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()
        self._closed = False

    def schedule(self, callback: Callable[[], None]) -> bool:
        """Queue ``callback`` to run after :attr:`delay` seconds.

        Returns:
            ``False`` if the scheduler was already shut down and the callback
            was dropped.

        """
        timer: threading.Timer

        def run() -> None:
            try:
                callback()
            except Exception:
                logger.exception("Deferred completion failed")
            finally:
                with self._lock:
                    self._timers.discard(timer)

        timer = threading.Timer(self.delay, run)
        timer.daemon = True
        with self._lock:
            if self._closed:
                logger.debug("Scheduler closed, dropping deferred completion")
                return False
            self._timers.add(timer)
        timer.start()
        return True

    def pending(self) -> int:
        """Number of callbacks that have not run yet."""
        with self._lock:
            return len(self._timers)

    def shutdown(self) -> None:
        """Cancel every pending callback and refuse new ones."""
        with self._lock:
            self._closed = True
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if timers:
            logger.info("Dropped %d pending completion(s) on shutdown", len(timers))

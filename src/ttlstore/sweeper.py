"""Background expiration sweeper.

Runs a sweep callback every ``interval_ms`` on a daemon thread until
``stop()`` is called. The thread is owned by the store and must be stopped
explicitly during teardown.
"""

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class ExpirationSweeper:
    """Periodic trigger for a store's expiration sweep."""

    def __init__(self, sweep: Callable[[], int], interval_ms: int):
        self._sweep = sweep
        self.interval_seconds = interval_ms / 1000.0
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="ttlstore-sweeper", daemon=True
        )

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        self._thread.start()
        logger.info(f"Expiration sweeper started (interval={self.interval_seconds}s)")

    def stop(self) -> None:
        """Cancel further sweeps. Safe to call more than once."""
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        # A sweep callback may stop its own sweeper; joining would deadlock
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join()
        logger.info("Expiration sweeper stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self._sweep()
            except Exception:
                logger.exception("Expiration sweep failed")

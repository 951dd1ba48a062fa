"""
Periodic Sweeper
================
Background thread that runs a cleanup callable on a fixed interval.
"""

import threading
from typing import Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class PeriodicSweeper:
    """
    Repeating background task owned by a store.
    
    start() and stop() are idempotent, so test harnesses can build and tear
    down stores repeatedly without leaking threads.
    
    Example:
        sweeper = PeriodicSweeper("entries", store.sweep, interval_ms=60_000)
        sweeper.start()
        ...
        sweeper.stop()
    """
    
    def __init__(self, name: str, target: Callable[[], object], interval_ms: int):
        self.name = name
        self.interval_ms = interval_ms
        self._target = target
        self._stop: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
    
    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
    
    def start(self) -> None:
        """Start the sweep loop. No effect if already running."""
        with self._lock:
            if self.running:
                return
            # Each loop owns its stop event so a slow old loop can't be revived
            self._stop = threading.Event()
            self._thread = threading.Thread(
                target=self._loop,
                args=(self._stop,),
                name=f"sweeper-{self.name}",
                daemon=True,
            )
            self._thread.start()
        logger.info("sweeper_started", sweeper=self.name, interval_ms=self.interval_ms)
    
    def stop(self, timeout: float = 2.0) -> None:
        """Stop the sweep loop and wait for it to exit. No effect if stopped."""
        with self._lock:
            thread, stop_event = self._thread, self._stop
            if thread is None:
                return
            stop_event.set()
            self._thread = None
            self._stop = None
        thread.join(timeout=timeout)
        logger.info("sweeper_stopped", sweeper=self.name)
    
    def _loop(self, stop_event: threading.Event) -> None:
        interval = self.interval_ms / 1000.0
        while not stop_event.wait(interval):
            try:
                self._target()
            except Exception:
                logger.exception("sweep_failed", sweeper=self.name)

"""Background maintenance for conversation memory."""

import logging
import threading
from datetime import timedelta
from typing import Optional

from .conversation_memory import ConversationMemory

logger = logging.getLogger(__name__)


class MemorySweeper:
    """Periodically evicts stale interactions from a ConversationMemory."""

    def __init__(
        self,
        memory: ConversationMemory,
        max_age: timedelta = timedelta(hours=24),
        interval_seconds: float = 3600.0
    ):
        self.memory = memory
        self.max_age = max_age
        self.interval_seconds = interval_seconds
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def run_once(self) -> int:
        """Run a single sweep pass and return the number of evicted interactions."""
        return self.memory.sweep(self.max_age)

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        logger.info(
            f"Memory sweeper started (max_age={self.max_age}, "
            f"interval={self.interval_seconds}s)"
        )

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        logger.info("Memory sweeper stopped")

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval_seconds, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        try:
            self.run_once()
        except Exception as e:
            logger.error(f"Memory sweep failed: {e}")
        finally:
            with self._lock:
                if self._running:
                    self._schedule()

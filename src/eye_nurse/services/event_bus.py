"""Thread-safe event bus feeding the controller's event loop."""

from __future__ import annotations

import logging
import queue
from typing import List, Optional

from .events import StopEvent

logger = logging.getLogger("services.event_bus")


class EventBus:
    """Multi-producer, single-consumer FIFO inbox.

    Unbounded: a reminder event is never dropped because the queue is full.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue()

    def publish(self, event: object) -> None:
        self._queue.put_nowait(event)

    def get(self, timeout: Optional[float] = None) -> object:
        return self._queue.get(timeout=timeout)

    def get_nowait(self) -> object:
        return self._queue.get_nowait()

    def drain(self) -> List[object]:
        """Remove and return every message still queued."""
        pending: List[object] = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending

    def stop(self, reason: str | None = None) -> None:
        logger.debug("Stop requested: %s", reason)
        self.publish(StopEvent(reason=reason))

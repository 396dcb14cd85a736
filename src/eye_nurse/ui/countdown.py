"""Rest countdown ticker."""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable, Optional

logger = logging.getLogger("ui.countdown")


def format_remaining(seconds: float) -> str:
    """Render whole seconds as ``MM:SS``."""
    total = max(0, int(math.ceil(seconds)))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


class RestCountdown:
    """Counts the configured rest duration down on its own thread.

    Runs independently of the controller's rest timer; it only drives the
    display and stops on its own at zero or when ``stop()`` is called.
    """

    def __init__(
        self,
        total_seconds: float,
        render: Callable[[float], None],
        tick_interval_s: float = 1.0,
    ) -> None:
        if tick_interval_s <= 0:
            raise ValueError("tick_interval_s must be positive")
        self._total_seconds = total_seconds
        self._render = render
        self._tick_interval_s = tick_interval_s
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("countdown already started")
        self._thread = threading.Thread(target=self._run, name="RestCountdown", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run(self) -> None:
        left = self._total_seconds
        self._render(left)
        while left > 0:
            if self._stop_event.wait(self._tick_interval_s):
                logger.debug("Countdown stopped with %.1fs left.", left)
                return
            left = max(0.0, left - self._tick_interval_s)
            self._render(left)
        logger.debug("Countdown reached zero.")

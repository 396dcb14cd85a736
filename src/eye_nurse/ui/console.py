"""Console collaborator: renders state changes and forwards user commands."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, Dict, Optional, TextIO

from eye_nurse.core.entities import ReminderEvent, ReminderState
from eye_nurse.state_machine import ControllerClosedError

from .countdown import RestCountdown, format_remaining

logger = logging.getLogger("ui.console")

COMMANDS: Dict[str, ReminderEvent] = {
    "d": ReminderEvent.DELAY_REST,
    "delay": ReminderEvent.DELAY_REST,
    "s": ReminderEvent.SKIP_REST,
    "skip": ReminderEvent.SKIP_REST,
    "q": ReminderEvent.QUIT,
    "quit": ReminderEvent.QUIT,
}

REST_PROMPT = "Time to rest your eyes. [d]elay, [s]kip or [q]uit"


def parse_command(line: str) -> Optional[ReminderEvent]:
    return COMMANDS.get(line.strip().lower())


class ConsolePresenter:
    """Shows the reminder on a text stream.

    The rest commands are only forwarded while the presenter has observed
    Rest, the only window in which the reminder offers them.
    """

    def __init__(
        self,
        submit: Callable[[ReminderEvent], None],
        rest_seconds: float,
        stream: Optional[TextIO] = None,
        countdown: bool = True,
        tick_interval_s: float = 1.0,
    ) -> None:
        self._submit = submit
        self._rest_seconds = rest_seconds
        self._stream = stream or sys.stdout
        self._countdown_enabled = countdown
        self._tick_interval_s = tick_interval_s
        self._state: Optional[ReminderState] = None
        self._countdown: Optional[RestCountdown] = None
        self._lock = threading.Lock()
        self._closed = threading.Event()

    @property
    def state(self) -> Optional[ReminderState]:
        with self._lock:
            return self._state

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        return self._closed.wait(timeout)

    def on_state_change(self, state: ReminderState) -> None:
        with self._lock:
            self._state = state
            self._stop_countdown()
            if state is ReminderState.WORK:
                self._write("Work period started.")
            elif state is ReminderState.REST:
                self._write(REST_PROMPT)
                if self._countdown_enabled:
                    self._countdown = RestCountdown(self._rest_seconds, self._render_remaining, self._tick_interval_s)
                    self._countdown.start()
            elif state is ReminderState.DELAY:
                self._write("Rest delayed.")
            elif state is ReminderState.CLOSING:
                self._write("Goodbye.")
                self._closed.set()

    def handle_command(self, line: str) -> bool:
        """Forward a typed command; returns True if it reached the controller."""
        event = parse_command(line)
        if event is None:
            if line.strip():
                self._write(f"Unknown command: {line.strip()!r}")
            return False
        with self._lock:
            current = self._state
        if current is not ReminderState.REST:
            state = current.value if current else "startup"
            logger.warning("Command %s ignored during %s", event.value, state)
            self._write(f"'{event.value}' is only available during rest.")
            return False
        try:
            self._submit(event)
        except ControllerClosedError:
            logger.info("Command %s arrived after shutdown.", event.value)
            return False
        return True

    def read_commands(self, source: Optional[TextIO] = None) -> None:
        """Pump lines from ``source`` until it is exhausted or the reminder closes."""
        source = source or sys.stdin
        for line in source:
            if self._closed.is_set():
                break
            self.handle_command(line)

    def close(self) -> None:
        with self._lock:
            self._stop_countdown()
            self._closed.set()

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.stop()
            self._countdown = None

    def _render_remaining(self, seconds: float) -> None:
        self._write(f"Rest remaining: {format_remaining(seconds)}")

    def _write(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

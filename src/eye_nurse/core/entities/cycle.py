"""States and events of the work/rest cycle."""

from __future__ import annotations

from enum import Enum


class ReminderState(Enum):
    """Lifecycle states of the reminder. CLOSING is terminal."""

    WORK = "work"
    REST = "rest"
    DELAY = "delay"
    CLOSING = "closing"

    def __str__(self) -> str:
        return self.value


class ReminderEvent(Enum):
    """Signals driving the state controller."""

    WORK_COMPLETE = "work_complete"
    REST_COMPLETE = "rest_complete"
    DELAY_COMPLETE = "delay_complete"
    DELAY_REST = "delay_rest"
    SKIP_REST = "skip_rest"
    QUIT = "quit"

    def __str__(self) -> str:
        return self.value


# Events a UI may originate. The *_COMPLETE events come from timers only.
USER_EVENTS = frozenset({ReminderEvent.DELAY_REST, ReminderEvent.SKIP_REST, ReminderEvent.QUIT})

"""Messages travelling through the controller inbox."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from eye_nurse.core.entities import ReminderEvent


class TimerId(Enum):
    """Identifiers of the per-state timers."""

    WORK = "work_timer"
    REST = "rest_timer"
    DELAY = "delay_timer"


@dataclass(frozen=True)
class ControlEvent:
    """A reminder event submitted from outside the controller."""

    event: ReminderEvent


@dataclass(frozen=True)
class TimerEvent:
    """Completion signal published by a timer task when its duration elapses.

    ``token`` identifies the timer instance so the controller can tell a live
    timer from one that was cancelled after it had already fired.
    """

    timer_id: TimerId
    token: int
    event: ReminderEvent


@dataclass(frozen=True)
class StopEvent:
    """Request for the event loop to exit, with an optional reason."""

    reason: str | None = None

"""Data structures shared by the reminder state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from eye_nurse.core.entities import ReminderEvent, ReminderState

StateChangeCallback = Callable[[ReminderState], None]


@dataclass(frozen=True)
class ReminderOptions:
    """Immutable controller configuration.

    Durations are in seconds. ``on_state_change`` is called once for every
    committed transition. ``fast_start`` queues a bootstrap rest completion
    so the machine moves from the initial Rest to Work right away.
    ``strict`` makes an event that is invalid for the current state fatal.
    """

    work_seconds: float
    rest_seconds: float
    delay_seconds: float
    on_state_change: Optional[StateChangeCallback] = None
    fast_start: bool = True
    strict: bool = True
    poll_interval_s: float = 0.5
    timer_join_timeout_s: float = 1.0

    def __post_init__(self) -> None:
        for name in ("work_seconds", "rest_seconds", "delay_seconds"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.poll_interval_s <= 0:
            raise ValueError("poll_interval_s must be positive")


@dataclass(frozen=True)
class TransitionResult:
    """Result of evaluating one event against the current state."""

    previous_state: ReminderState
    event: ReminderEvent
    next_state: ReminderState
    accepted: bool
    message: str = ""

    @property
    def changed(self) -> bool:
        return self.accepted and self.previous_state is not self.next_state

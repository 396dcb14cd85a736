"""Eye Nurse: periodic work/rest reminder."""

from __future__ import annotations

from .core.entities import ReminderEvent, ReminderState
from .state_machine import (
    ControllerClosedError,
    ReminderOptions,
    StateController,
    TransitionResult,
    UnhandledEventError,
)

__version__ = "0.1.0"

__all__ = [
    "ControllerClosedError",
    "ReminderEvent",
    "ReminderOptions",
    "ReminderState",
    "StateController",
    "TransitionResult",
    "UnhandledEventError",
]

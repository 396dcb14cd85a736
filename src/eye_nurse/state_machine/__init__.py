"""State machine package exports."""

from .controller import StateController
from .errors import ControllerClosedError, EyeNurseError, UnhandledEventError
from .machine import ReminderStateMachine
from .model import ReminderOptions, TransitionResult

__all__ = [
    "ControllerClosedError",
    "EyeNurseError",
    "ReminderOptions",
    "ReminderStateMachine",
    "StateController",
    "TransitionResult",
    "UnhandledEventError",
]

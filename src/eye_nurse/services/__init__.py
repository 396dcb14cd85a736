"""Service layer shared by the reminder controller."""

from .event_bus import EventBus
from .events import ControlEvent, StopEvent, TimerEvent, TimerId
from .scheduler import TimerScheduler, TimerTask

__all__ = [
    "EventBus",
    "TimerScheduler",
    "TimerTask",
    "TimerId",
    "ControlEvent",
    "TimerEvent",
    "StopEvent",
]

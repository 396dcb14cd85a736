"""Core entities: reminder states and events."""

from .cycle import USER_EVENTS, ReminderEvent, ReminderState

__all__ = ["ReminderEvent", "ReminderState", "USER_EVENTS"]

"""Exceptions raised by the reminder controller."""

from __future__ import annotations

from eye_nurse.core.entities import ReminderEvent, ReminderState


class EyeNurseError(Exception):
    """Base class for reminder errors."""


class UnhandledEventError(EyeNurseError):
    """An event arrived that the current state has no transition for.

    This is a collaborator bug (a UI offering "skip" during work, say), not a
    runtime condition to recover from.
    """

    def __init__(self, state: ReminderState, event: ReminderEvent) -> None:
        super().__init__(f"state {state.value}, event {event.value}")
        self.state = state
        self.event = event


class ControllerClosedError(EyeNurseError):
    """An event was submitted after the controller shut down."""

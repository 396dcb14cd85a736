"""Transition table of the work/rest cycle."""

from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from eye_nurse.core.entities import ReminderEvent, ReminderState

from .model import TransitionResult


class ReminderStateMachine(StateMachine):
    """Work/Rest/Delay/Closing machine.

    Holds no timers and calls nothing outside itself; the controller performs
    the side effects of every accepted transition. Event names match
    ``ReminderEvent`` values so events are sent by value.
    """

    work = State("Work")
    rest = State("Rest", initial=True)
    delay = State("Delay")
    closing = State("Closing", final=True)

    work_complete = work.to(rest)
    rest_complete = rest.to(work)
    delay_rest = rest.to(delay)
    skip_rest = rest.to(work)
    quit = rest.to(closing)
    delay_complete = delay.to(rest)

    @property
    def reminder_state(self) -> ReminderState:
        return ReminderState(self.current_state.id)

    def apply(self, event: ReminderEvent) -> TransitionResult:
        """Send ``event`` and report the outcome instead of raising."""
        previous = self.reminder_state
        try:
            self.send(event.value)
        except TransitionNotAllowed:
            return TransitionResult(
                previous_state=previous,
                event=event,
                next_state=previous,
                accepted=False,
                message=f"Event '{event.value}' is not valid in state '{previous.value}'.",
            )
        current = self.reminder_state
        return TransitionResult(
            previous_state=previous,
            event=event,
            next_state=current,
            accepted=True,
            message=f"{previous.value} -> {current.value} on {event.value}.",
        )

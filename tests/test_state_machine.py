"""
Unit tests for ReminderStateMachine

The transition table, valid and invalid, without any timers involved.
"""

import pytest

from eye_nurse.core.entities import ReminderEvent, ReminderState
from eye_nurse.state_machine import ReminderStateMachine

E = ReminderEvent
S = ReminderState

# Events that lead from the initial Rest to each state.
PATH_TO = {
    S.REST: [],
    S.WORK: [E.REST_COMPLETE],
    S.DELAY: [E.DELAY_REST],
    S.CLOSING: [E.QUIT],
}

VALID = {
    (S.WORK, E.WORK_COMPLETE): S.REST,
    (S.REST, E.REST_COMPLETE): S.WORK,
    (S.REST, E.DELAY_REST): S.DELAY,
    (S.REST, E.SKIP_REST): S.WORK,
    (S.REST, E.QUIT): S.CLOSING,
    (S.DELAY, E.DELAY_COMPLETE): S.REST,
}

INVALID = [(state, event) for state in S for event in E if (state, event) not in VALID]


def machine_in(state: ReminderState) -> ReminderStateMachine:
    machine = ReminderStateMachine()
    for event in PATH_TO[state]:
        assert machine.apply(event).accepted
    assert machine.reminder_state is state
    return machine


def test_initial_state_is_rest():
    """The machine starts in Rest."""
    assert ReminderStateMachine().reminder_state is S.REST


@pytest.mark.parametrize(("state", "event"), sorted(VALID, key=lambda pair: (pair[0].value, pair[1].value)))
def test_valid_transition(state, event):
    machine = machine_in(state)

    result = machine.apply(event)

    assert result.accepted is True
    assert result.previous_state is state
    assert result.next_state is VALID[(state, event)]
    assert machine.reminder_state is VALID[(state, event)]
    assert result.changed is True


@pytest.mark.parametrize(("state", "event"), INVALID)
def test_invalid_transition_is_rejected_without_state_change(state, event):
    machine = machine_in(state)

    result = machine.apply(event)

    assert result.accepted is False
    assert result.next_state is state
    assert machine.reminder_state is state
    assert event.value in result.message
    assert result.changed is False


def test_closing_is_terminal():
    """Every event is rejected once Closing is reached."""
    machine = machine_in(S.CLOSING)

    rejected = [machine.apply(event).accepted for event in E]

    assert rejected == [False] * len(E)
    assert machine.reminder_state is S.CLOSING


def test_quit_only_from_rest():
    """Quit has no row for Work or Delay."""
    assert machine_in(S.WORK).apply(E.QUIT).accepted is False
    assert machine_in(S.DELAY).apply(E.QUIT).accepted is False

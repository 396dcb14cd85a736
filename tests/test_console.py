"""
Unit tests for the console presenter and rest countdown
"""

import io
import threading
import time
from unittest.mock import MagicMock

import pytest

from eye_nurse.core.entities import ReminderEvent, ReminderState
from eye_nurse.state_machine import ControllerClosedError
from eye_nurse.ui import ConsolePresenter, RestCountdown, format_remaining, parse_command


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def submit():
    return MagicMock()


@pytest.fixture
def presenter(submit, stream):
    presenter = ConsolePresenter(submit=submit, rest_seconds=300, stream=stream, countdown=False)
    yield presenter
    presenter.close()


class TestParseCommand:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("d\n", ReminderEvent.DELAY_REST),
            ("  Delay ", ReminderEvent.DELAY_REST),
            ("s", ReminderEvent.SKIP_REST),
            ("SKIP", ReminderEvent.SKIP_REST),
            ("q", ReminderEvent.QUIT),
            ("quit\n", ReminderEvent.QUIT),
            ("x", None),
            ("", None),
        ],
    )
    def test_mapping(self, line, expected):
        assert parse_command(line) is expected


class TestConsolePresenter:
    def test_commands_refused_outside_rest(self, presenter, submit, stream):
        presenter.on_state_change(ReminderState.WORK)

        assert presenter.handle_command("s") is False
        submit.assert_not_called()
        assert "only available during rest" in stream.getvalue()

    def test_commands_refused_before_first_state(self, presenter, submit):
        assert presenter.handle_command("q") is False
        submit.assert_not_called()

    @pytest.mark.parametrize(
        ("line", "event"),
        [("d", ReminderEvent.DELAY_REST), ("s", ReminderEvent.SKIP_REST), ("q", ReminderEvent.QUIT)],
    )
    def test_commands_forwarded_during_rest(self, presenter, submit, line, event):
        presenter.on_state_change(ReminderState.REST)

        assert presenter.handle_command(line) is True
        submit.assert_called_once_with(event)

    def test_unknown_command_reported(self, presenter, submit, stream):
        presenter.on_state_change(ReminderState.REST)

        assert presenter.handle_command("nap") is False
        submit.assert_not_called()
        assert "Unknown command: 'nap'" in stream.getvalue()

    def test_submit_after_shutdown_is_absorbed(self, presenter, submit):
        submit.side_effect = ControllerClosedError("closed")
        presenter.on_state_change(ReminderState.REST)

        assert presenter.handle_command("q") is False

    def test_rest_prompt_and_closing(self, presenter, stream):
        presenter.on_state_change(ReminderState.REST)
        presenter.on_state_change(ReminderState.CLOSING)

        output = stream.getvalue()
        assert "Time to rest your eyes" in output
        assert "Goodbye." in output
        assert presenter.wait_closed(timeout=0.1) is True
        assert presenter.state is ReminderState.CLOSING

    def test_read_commands_pumps_lines(self, presenter, submit):
        presenter.on_state_change(ReminderState.REST)

        presenter.read_commands(io.StringIO("x\ns\n"))

        submit.assert_called_once_with(ReminderEvent.SKIP_REST)

    def test_rest_countdown_started_and_stopped(self, submit, stream):
        presenter = ConsolePresenter(submit=submit, rest_seconds=0.3, stream=stream, countdown=True, tick_interval_s=0.1)

        presenter.on_state_change(ReminderState.REST)
        time.sleep(0.15)
        presenter.on_state_change(ReminderState.WORK)

        output = stream.getvalue()
        assert "Rest remaining: 00:01" in output
        assert "Work period started." in output


class TestRestCountdown:
    def test_counts_down_to_zero(self):
        renders = []
        done = threading.Event()

        def render(seconds):
            renders.append(seconds)
            if seconds == 0:
                done.set()

        countdown = RestCountdown(0.25, render, tick_interval_s=0.1)
        countdown.start()

        assert done.wait(timeout=2.0)
        countdown.stop()
        assert renders[0] == 0.25
        assert renders[-1] == 0.0
        assert len(renders) == 4

    def test_stop_ends_early(self):
        renders = []
        countdown = RestCountdown(10.0, renders.append, tick_interval_s=0.05)
        countdown.start()
        time.sleep(0.12)

        countdown.stop()

        assert countdown.running is False
        assert 0.0 not in renders

    @pytest.mark.parametrize("tick", [0.0, -1.0])
    def test_non_positive_tick_rejected(self, tick):
        with pytest.raises(ValueError):
            RestCountdown(300.0, lambda seconds: None, tick_interval_s=tick)

    def test_cannot_start_twice(self):
        countdown = RestCountdown(1.0, lambda seconds: None, tick_interval_s=0.05)
        countdown.start()
        try:
            with pytest.raises(RuntimeError):
                countdown.start()
        finally:
            countdown.stop()


@pytest.mark.parametrize(
    ("seconds", "text"),
    [(300, "05:00"), (59.2, "01:00"), (61, "01:01"), (0, "00:00"), (-3, "00:00")],
)
def test_format_remaining(seconds, text):
    assert format_remaining(seconds) == text

"""
Shared fixtures for the reminder tests.

Timing tests use sub-second intervals and bounded waits so the whole suite
stays fast while still exercising the real timer threads.
"""

import threading
import time
from typing import List, Optional, Tuple

import pytest

from eye_nurse.core.entities import ReminderState
from eye_nurse.state_machine import ReminderOptions, StateController


class StateRecorder:
    """Observer collecting (state, monotonic time) pairs."""

    def __init__(self) -> None:
        self.calls: List[Tuple[ReminderState, float]] = []
        self._cond = threading.Condition()

    def __call__(self, state: ReminderState) -> None:
        with self._cond:
            self.calls.append((state, time.monotonic()))
            self._cond.notify_all()

    @property
    def states(self) -> List[ReminderState]:
        with self._cond:
            return [state for state, _ in self.calls]

    def time_of(self, index: int) -> float:
        with self._cond:
            return self.calls[index][1]

    def wait_for(self, count: int, timeout: float = 2.0) -> bool:
        """Block until at least ``count`` notifications were recorded."""
        with self._cond:
            return self._cond.wait_for(lambda: len(self.calls) >= count, timeout=timeout)


class ControllerRunner:
    """Runs ``StateController.run`` on a thread and keeps its exception."""

    def __init__(self, controller: StateController) -> None:
        self.controller = controller
        self.error: Optional[BaseException] = None
        self.thread = threading.Thread(target=self._run, name="TestControllerRun", daemon=True)

    def _run(self) -> None:
        try:
            self.controller.run()
        except BaseException as exc:  # noqa: BLE001 - handed back to the test
            self.error = exc

    def start(self) -> "ControllerRunner":
        self.thread.start()
        return self

    def join(self, timeout: float = 3.0) -> bool:
        self.thread.join(timeout=timeout)
        return not self.thread.is_alive()


@pytest.fixture
def recorder():
    return StateRecorder()


@pytest.fixture
def make_controller(recorder):
    """Factory building controllers that are always shut down after the test."""
    created: List[StateController] = []

    def _make(
        work: float = 60.0,
        rest: float = 60.0,
        delay: float = 60.0,
        fast_start: bool = True,
        strict: bool = True,
        observer=None,
    ) -> StateController:
        options = ReminderOptions(
            work_seconds=work,
            rest_seconds=rest,
            delay_seconds=delay,
            on_state_change=observer if observer is not None else recorder,
            fast_start=fast_start,
            strict=strict,
            poll_interval_s=0.05,
            timer_join_timeout_s=1.0,
        )
        controller = StateController(options)
        created.append(controller)
        return controller

    yield _make

    for controller in created:
        controller.shutdown("test teardown")
        controller.scheduler.shutdown()


@pytest.fixture
def run_controller():
    """Start a controller's run loop on a background thread."""
    runners: List[ControllerRunner] = []

    def _run(controller: StateController) -> ControllerRunner:
        runner = ControllerRunner(controller).start()
        runners.append(runner)
        return runner

    yield _run

    for runner in runners:
        runner.controller.shutdown("test teardown")
        runner.join(timeout=3.0)

"""Reminder state controller: event loop, timers and observer notification."""

from __future__ import annotations

import logging
import queue
import threading
from typing import List, Optional

from eye_nurse.core.entities import USER_EVENTS, ReminderEvent, ReminderState
from eye_nurse.services import ControlEvent, EventBus, StopEvent, TimerEvent, TimerId, TimerScheduler, TimerTask

from .errors import ControllerClosedError, UnhandledEventError
from .machine import ReminderStateMachine
from .model import ReminderOptions, StateChangeCallback, TransitionResult

logger = logging.getLogger("control.state_machine")

# Timer armed on entry to each state and the event it publishes on expiry.
_STATE_TIMERS = {
    ReminderState.WORK: (TimerId.WORK, ReminderEvent.WORK_COMPLETE),
    ReminderState.REST: (TimerId.REST, ReminderEvent.REST_COMPLETE),
    ReminderState.DELAY: (TimerId.DELAY, ReminderEvent.DELAY_COMPLETE),
}


class StateController:
    """Drives the work/rest cycle from a single event-loop thread.

    External callers and timer tasks are both producers on one inbox; only
    the loop thread reads the machine state or touches the active timer.
    """

    def __init__(
        self,
        options: ReminderOptions,
        bus: Optional[EventBus] = None,
        scheduler: Optional[TimerScheduler] = None,
    ) -> None:
        self.options = options
        self.bus = bus or EventBus()
        self.scheduler = scheduler or TimerScheduler(self.bus, join_timeout_s=options.timer_join_timeout_s)
        self.machine = ReminderStateMachine()
        self._listeners: List[StateChangeCallback] = []
        if options.on_state_change is not None:
            self._listeners.append(options.on_state_change)
        self._active_timer: Optional[TimerTask] = None
        self._stop_event = threading.Event()
        self._closed_event = threading.Event()
        self._run_lock = threading.Lock()
        self._started = False
        self._loop_thread: Optional[threading.Thread] = None
        self._fault: Optional[BaseException] = None

        if options.fast_start:
            # Bootstrap: leave the initial Rest as soon as the loop runs.
            self.bus.publish(ControlEvent(event=ReminderEvent.REST_COMPLETE))

    # Public API ------------------------------------------------------------

    @property
    def state(self) -> ReminderState:
        return self.machine.reminder_state

    @property
    def active_timer(self) -> Optional[TimerTask]:
        return self._active_timer

    @property
    def fault(self) -> Optional[BaseException]:
        return self._fault

    @property
    def is_shutting_down(self) -> bool:
        return self._stop_event.is_set()

    def timer_duration(self, state: ReminderState) -> Optional[float]:
        """Duration of the timer armed when ``state`` is entered, if any."""
        return {
            ReminderState.WORK: self.options.work_seconds,
            ReminderState.REST: self.options.rest_seconds,
            ReminderState.DELAY: self.options.delay_seconds,
        }.get(state)

    def add_listener(self, listener: StateChangeCallback) -> None:
        """Register an extra observer; observers run in registration order."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateChangeCallback) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def submit_event(self, event: ReminderEvent) -> None:
        """Queue a user event for the loop.

        Must not be called once the controller is shutting down; doing so
        raises ``ControllerClosedError``.
        """
        if event not in USER_EVENTS:
            raise ValueError(f"{event.value} is emitted by timers and cannot be submitted")
        if self._stop_event.is_set():
            raise ControllerClosedError(f"controller is closed; cannot submit {event.value}")
        logger.debug("Event submitted: %s", event.value)
        self.bus.publish(ControlEvent(event=event))

    def run(self) -> None:
        """Run the event loop and block until it stops and all timers are joined."""
        with self._run_lock:
            if self._started:
                raise RuntimeError("StateController.run() may only be called once")
            self._started = True

        self._loop_thread = threading.Thread(target=self._event_loop, name="ReminderEventLoop", daemon=True)
        self._loop_thread.start()
        logger.info("State controller started in state %s.", self.state.value)
        try:
            self._loop_thread.join()
        finally:
            self.scheduler.shutdown()
            self._discard_pending()
            self._closed_event.set()
            logger.info("State controller stopped in state %s.", self.state.value)

        if self._fault is not None:
            raise self._fault

    def shutdown(self, reason: str = "external shutdown") -> None:
        """Request teardown without a state transition."""
        if self._stop_event.is_set():
            return
        logger.info("Shutdown requested: %s", reason)
        self._stop_event.set()
        self.bus.stop(reason)
        with self._run_lock:
            started = self._started
        if not started:
            self.scheduler.shutdown()
            self._closed_event.set()

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """Wait until ``run()`` has joined every thread it owns."""
        return self._closed_event.wait(timeout)

    def process_event(self, event: ReminderEvent) -> TransitionResult:
        """Evaluate one event against the current state.

        Invalid events are reported through the result and change nothing.
        Only the loop thread may call this while ``run()`` is active.
        """
        result = self.machine.apply(event)
        if not result.accepted:
            return result

        logger.info("Transition %s -> %s (%s)", result.previous_state.value, result.next_state.value, event.value)
        self._release_timer()
        if result.next_state is ReminderState.CLOSING:
            self._stop_event.set()
            self.scheduler.shutdown()
        else:
            self._arm_timer(result.next_state)
        self._notify(result.next_state)
        return result

    # Event loop ------------------------------------------------------------

    def _event_loop(self) -> None:
        if not self.options.fast_start and not self._stop_event.is_set():
            self._enter_initial_rest()

        while not self._stop_event.is_set():
            try:
                message = self.bus.get(timeout=self.options.poll_interval_s)
            except queue.Empty:
                continue

            if isinstance(message, StopEvent):
                logger.info("Event loop received stop: %s", message.reason)
                break

            try:
                self._dispatch(message)
            except UnhandledEventError as exc:
                logger.critical("Unhandled event, stopping controller: %s", exc)
                self._fault = exc
                self._stop_event.set()
                break

    def _dispatch(self, message: object) -> None:
        if isinstance(message, TimerEvent):
            active = self._active_timer
            if active is None or message.token != active.token:
                logger.debug("Discarding stale %s from timer #%d", message.event.value, message.token)
                return
            event = message.event
        elif isinstance(message, ControlEvent):
            event = message.event
        else:
            logger.warning("Ignoring unknown message type: %s", type(message).__name__)
            return

        logger.debug("Dispatching %s while in state %s", event.value, self.state.value)
        result = self.process_event(event)
        if result.accepted:
            return
        if self.options.strict:
            raise UnhandledEventError(result.previous_state, event)
        logger.error("%s Ignored; staying in %s.", result.message, result.previous_state.value)

    def _enter_initial_rest(self) -> None:
        logger.info("Entering initial state %s", self.state.value)
        self._arm_timer(self.state)
        self._notify(self.state)

    # Timers and observers --------------------------------------------------

    def _arm_timer(self, state: ReminderState) -> None:
        timer_id, event = _STATE_TIMERS[state]
        self._active_timer = self.scheduler.schedule_once(timer_id, self.timer_duration(state), event)

    def _release_timer(self) -> None:
        task = self._active_timer
        self._active_timer = None
        if task is not None:
            self.scheduler.cancel(task)

    def _notify(self, state: ReminderState) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State change listener %r failed for state %s", listener, state.value)

    def _discard_pending(self) -> None:
        pending = [message for message in self.bus.drain() if not isinstance(message, StopEvent)]
        if pending:
            logger.warning("Discarded %d event(s) queued after shutdown.", len(pending))

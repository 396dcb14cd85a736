"""One-shot timers publishing completion events on the bus."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from eye_nurse.core.entities import ReminderEvent

from .event_bus import EventBus
from .events import TimerEvent, TimerId

logger = logging.getLogger("services.scheduler")


@dataclass(eq=False)
class TimerTask:
    """A single armed timer bound to one state entry.

    Every task owns its cancellation event. Publishing and cancelling share
    ``_lock``, so once ``cancel()`` returns the task can no longer publish.
    """

    timer_id: TimerId
    token: int
    duration_s: float
    event: ReminderEvent
    thread: Optional[threading.Thread] = None
    stop_event: threading.Event = field(default_factory=threading.Event)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _fired: bool = field(default=False, repr=False)

    @property
    def cancelled(self) -> bool:
        return self.stop_event.is_set()

    @property
    def fired(self) -> bool:
        return self._fired

    def is_alive(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def cancel(self, join_timeout: Optional[float] = 1.0) -> None:
        """Cancel the task; a no-op once it has fired or was cancelled."""
        with self._lock:
            self.stop_event.set()
        self.join(join_timeout)

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self.thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.warning("Timer %s (#%d) did not stop within %.3fs", self.timer_id.value, self.token, timeout)

    def _run(self, bus: EventBus) -> None:
        logger.debug("Timer %s (#%d) armed for %.3fs", self.timer_id.value, self.token, self.duration_s)
        if self.stop_event.wait(self.duration_s):
            logger.debug("Timer %s (#%d) cancelled.", self.timer_id.value, self.token)
            return
        with self._lock:
            if self.stop_event.is_set():
                logger.debug("Timer %s (#%d) cancelled at expiry.", self.timer_id.value, self.token)
                return
            self._fired = True
            bus.publish(TimerEvent(timer_id=self.timer_id, token=self.token, event=self.event))
        logger.debug("Timer %s (#%d) fired %s.", self.timer_id.value, self.token, self.event.value)


class TimerScheduler:
    """Creates and tracks timer tasks publishing events on the bus."""

    def __init__(self, bus: EventBus, join_timeout_s: float = 1.0) -> None:
        self._bus = bus
        self._join_timeout_s = join_timeout_s
        self._tasks: Dict[int, TimerTask] = {}
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule_once(self, timer_id: TimerId, delay_s: float, event: ReminderEvent) -> TimerTask:
        """Arm a fresh timer that publishes ``event`` after ``delay_s`` seconds."""
        with self._lock:
            if self._closed:
                raise RuntimeError("Scheduler has been shut down.")
            task = TimerTask(timer_id=timer_id, token=next(self._tokens), duration_s=delay_s, event=event)
            task.thread = threading.Thread(
                target=task._run,
                args=(self._bus,),
                name=f"Timeout-{timer_id.value}-{task.token}",
                daemon=True,
            )
            self._tasks[task.token] = task
        task.thread.start()
        return task

    def cancel(self, task: TimerTask) -> None:
        with self._lock:
            self._tasks.pop(task.token, None)
        task.cancel(self._join_timeout_s)

    def live_tasks(self) -> list[TimerTask]:
        with self._lock:
            return [task for task in self._tasks.values() if task.is_alive()]

    def shutdown(self) -> None:
        """Cancel every tracked timer, join its thread and refuse new ones."""
        with self._lock:
            self._closed = True
            tasks = list(self._tasks.values())
            self._tasks.clear()
        for task in tasks:
            task.cancel(self._join_timeout_s)
        if tasks:
            logger.debug("Scheduler shut down %d timer(s).", len(tasks))

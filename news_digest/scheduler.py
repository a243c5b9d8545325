"""Periodic task scheduling for the ingestion and summarization cycles."""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

LOGGER = logging.getLogger(__name__)


class Clock:
    """Monotonic wall clock; tests substitute one that advances virtually."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, stop_event: threading.Event) -> None:
        stop_event.wait(seconds)


class TaskState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class PeriodicTask:
    """A named action run immediately and then every ``interval`` seconds."""

    def __init__(self, name: str, action: Callable[[], Any], interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.action = action
        self.interval = interval
        self.state = TaskState.IDLE
        self.next_run: float = 0.0
        self.runs = 0
        self.skipped = 0

    def run(self) -> Optional[Any]:
        if self.state is TaskState.RUNNING:
            self.skipped += 1
            LOGGER.warning("%s is still running; skipping this tick", self.name)
            return None

        self.state = TaskState.RUNNING
        context = "Startup" if self.runs == 0 else "Scheduled"
        try:
            return self.action()
        except Exception:
            LOGGER.exception("%s %s raised an unexpected error", context, self.name)
            return None
        finally:
            self.runs += 1
            self.state = TaskState.IDLE

    def reschedule(self, now: float) -> None:
        self.next_run += self.interval
        if self.next_run <= now:
            missed = int((now - self.next_run) // self.interval) + 1
            LOGGER.warning("%s overran its interval; skipping %d tick(s)", self.name, missed)
            self.next_run += missed * self.interval


class Scheduler:
    """Runs periodic tasks one after another on a single thread.

    Tasks never overlap each other, so store updates made by different tasks
    are serialized.
    """

    def __init__(self, tasks: Iterable[PeriodicTask], clock: Optional[Clock] = None) -> None:
        self.tasks: List[PeriodicTask] = list(tasks)
        self.clock = clock or Clock()
        self._stop_event = threading.Event()
        self._started = False

    def _start(self) -> None:
        if self._started:
            return
        now = self.clock.now()
        for task in self.tasks:
            task.next_run = now
        self._started = True

    def run_pending(self) -> int:
        """Run every task that is due and return how many ran."""

        self._start()
        ran = 0
        for task in self.tasks:
            if self._stop_event.is_set():
                break
            if self.clock.now() >= task.next_run:
                task.run()
                task.reschedule(self.clock.now())
                ran += 1
        return ran

    def run(self, until: Optional[float] = None) -> None:
        """Run tasks until :meth:`stop` is called or the clock passes ``until``."""

        self._start()
        LOGGER.info("Scheduler started with tasks: %s", ", ".join(task.name for task in self.tasks))
        while not self._stop_event.is_set():
            self.run_pending()
            if not self.tasks:
                break
            wake = min(task.next_run for task in self.tasks)
            if until is not None and wake > until:
                break
            self.clock.sleep(max(0.0, wake - self.clock.now()), self._stop_event)
        LOGGER.info("Scheduler stopped")

    def start_background(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="news-digest-scheduler", daemon=True)
        thread.start()
        return thread

    def stop(self) -> None:
        self._stop_event.set()


__all__ = ["Clock", "PeriodicTask", "Scheduler", "TaskState"]

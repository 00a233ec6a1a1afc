"""Threads with scheduling settings, and threads that time their own run."""

from __future__ import annotations

import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable

from rtkit.counting import SchedPolicy
from rtkit.timespec import MS_PER_S, from_ms, now, wait


class ThreadError(Exception):
    """Raised when a thread is used in a state that does not allow it."""


class PosixThread:
    """Runs one function on a thread, with a scheduling policy and priority.

    The scheduling settings are applied to the thread where the system
    allows it, and kept either way.
    """

    def __init__(self) -> None:
        self._thread: threading.Thread | None = None
        self._active = False
        self._policy = SchedPolicy.OTHER
        self._priority = 0

    @property
    def is_active(self) -> bool:
        """True from start until a successful join."""
        return self._active

    def start(self, target: Callable[..., Any], *args: Any) -> bool:
        """Run ``target(*args)`` on a new thread, unless one is still running."""
        if self._active and self._thread is not None and self._thread.is_alive():
            return False
        thread = threading.Thread(target=target, args=args, daemon=True)
        self._thread = thread
        self._active = True
        thread.start()
        self._apply_scheduling()
        return True

    def join(self, timeout_ms: float | None = None) -> bool:
        """Wait for the thread to end; False if it outlived ``timeout_ms``."""
        thread = self._thread
        if thread is None:
            raise ThreadError("the thread was never started")
        if timeout_ms is None:
            thread.join()
        else:
            thread.join(max(0.0, timeout_ms / MS_PER_S))
        if thread.is_alive():
            return False
        self._active = False
        return True

    def set_scheduling(self, policy: int, priority: int) -> bool:
        """Set the policy and priority; True if a running thread was updated."""
        self._policy = SchedPolicy.from_value(int(policy))
        self._priority = int(priority)
        if self._active:
            self._apply_scheduling()
        return self._active

    def get_scheduling(self) -> tuple[SchedPolicy, int]:
        """The policy and priority, read from the running thread if possible."""
        thread = self._thread
        if self._active and thread is not None and thread.is_alive():
            try:
                tid = thread.native_id
                policy = os.sched_getscheduler(tid)
                priority = os.sched_getparam(tid).sched_priority
                return SchedPolicy.from_value(policy), priority
            except (AttributeError, OSError, TypeError):
                pass
        return self._policy, self._priority

    def _apply_scheduling(self) -> None:
        thread = self._thread
        if thread is None or not thread.is_alive():
            return
        try:
            os.sched_setscheduler(
                thread.native_id, int(self._policy), os.sched_param(self._priority)
            )
        except (AttributeError, OSError, TypeError):
            pass


class Thread(PosixThread, ABC):
    """A thread whose work is :meth:`run`, timing each run it makes."""

    def __init__(self) -> None:
        super().__init__()
        self._started = False
        self._start_time = from_ms(0)
        self._stop_time = from_ms(0)

    @property
    def started(self) -> bool:
        """True while :meth:`run` is in progress."""
        return self._started

    def start(self) -> bool:  # type: ignore[override]
        """Start :meth:`run` on a new thread; False if it is already running."""
        if self._started:
            return False
        self._start_time = now()
        self._stop_time = from_ms(0)
        self._started = True
        if not PosixThread.start(self, self._call_run):
            self._started = False
            return False
        return True

    @abstractmethod
    def run(self) -> None:
        """The work the thread does."""

    @staticmethod
    def sleep_ms(delay_ms: float) -> None:
        """Sleep the calling thread for ``delay_ms`` milliseconds."""
        wait(from_ms(delay_ms))

    def start_time_ms(self) -> float:
        """When the last run began, in milliseconds since the epoch."""
        return self._start_time.to_ms()

    def stop_time_ms(self) -> float:
        """When the last run ended, or 0 while it is running."""
        return self._stop_time.to_ms()

    def exec_time_ms(self) -> float:
        """Milliseconds the current or last run has taken."""
        if self._started:
            return now().to_ms() - self.start_time_ms()
        return self.stop_time_ms() - self.start_time_ms()

    def _call_run(self) -> None:
        try:
            self.run()
        finally:
            self._stop_time = now()
            self._started = False
"""A recursive mutex with a condition variable, and scoped locks on it."""

from __future__ import annotations

import threading

from rtkit.timespec import MS_PER_S


def _seconds(timeout_ms: float) -> float:
    return max(0.0, timeout_ms / MS_PER_S)


class LockTimeout(Exception):
    """Raised when a mutex cannot be locked in time."""

    def __init__(self, message: str = "Timeout waiting for condition") -> None:
        super().__init__(message)


class Mutex:
    """A recursive mutex that carries one condition variable.

    It is locked and unlocked only through :class:`Lock` and :class:`TryLock`.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._condition = threading.Condition(self._lock)

    def _acquire(self, timeout_ms: float | None = None) -> bool:
        if timeout_ms is None:
            return self._lock.acquire()
        return self._lock.acquire(timeout=_seconds(timeout_ms))

    def _release(self) -> None:
        self._lock.release()


class Monitor:
    """Waits on and signals the condition of a mutex the caller holds."""

    def __init__(self, mutex: Mutex) -> None:
        self.mutex = mutex

    def wait(self, timeout_ms: float | None = None) -> bool:
        """Wait for a notification; False if ``timeout_ms`` ran out first."""
        if timeout_ms is None:
            self.mutex._condition.wait()
            return True
        return self.mutex._condition.wait(_seconds(timeout_ms))

    def notify(self) -> None:
        """Wake one waiting thread."""
        self.mutex._condition.notify()

    def notify_all(self) -> None:
        """Wake every waiting thread."""
        self.mutex._condition.notify_all()


class Lock(Monitor):
    """Holds a mutex from construction until released or the block ends.

    With ``timeout_ms``, raises :class:`LockTimeout` if the mutex could not
    be taken in time.
    """

    def __init__(self, mutex: Mutex, timeout_ms: float | None = None) -> None:
        super().__init__(mutex)
        self._held = False
        if not mutex._acquire(timeout_ms):
            raise LockTimeout()
        self._held = True

    def release(self) -> None:
        """Unlock the mutex; further calls do nothing."""
        if self._held:
            self._held = False
            self.mutex._release()

    def __enter__(self) -> Lock:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()


class TryLock(Lock):
    """A lock that raises :class:`LockTimeout` at once if the mutex is taken."""

    def __init__(self, mutex: Mutex) -> None:
        super().__init__(mutex, 0)
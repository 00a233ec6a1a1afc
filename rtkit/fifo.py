"""A thread-safe first-in first-out queue with blocking and timed pops."""

from __future__ import annotations

import time
from collections import deque
from typing import Generic, TypeVar

from rtkit.mutex import Lock, Mutex
from rtkit.timespec import MS_PER_S

T = TypeVar("T")


class EmptyFifo(Exception):
    """Raised when no element arrived before a pop timed out."""


class Fifo(Generic[T]):
    """A queue shared between threads."""

    def __init__(self) -> None:
        self._elements: deque[T] = deque()
        self._mutex = Mutex()

    def push(self, element: T) -> None:
        """Append ``element`` and wake the waiting consumers."""
        with Lock(self._mutex) as lock:
            self._elements.append(element)
            lock.notify_all()

    def pop(self, timeout_ms: float | None = None) -> T:
        """Remove and return the oldest element, waiting for one if needed.

        Raises :class:`EmptyFifo` if ``timeout_ms`` passes with none available.
        """
        with Lock(self._mutex) as lock:
            if timeout_ms is None:
                while not self._elements:
                    lock.wait()
                return self._elements.popleft()
            deadline = time.monotonic() + timeout_ms / MS_PER_S
            while not self._elements:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise EmptyFifo(f"no element within {timeout_ms} ms")
                lock.wait(remaining * MS_PER_S)
            return self._elements.popleft()

    def empty(self) -> bool:
        """True if the queue holds no element."""
        return not self._elements
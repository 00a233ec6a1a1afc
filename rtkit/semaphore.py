"""A counting semaphore built on the recursive mutex."""

from __future__ import annotations

import time

from rtkit.mutex import Lock, Mutex
from rtkit.timespec import MS_PER_S

UINT16_MAX = 65535


class Semaphore:
    """Hands out at most ``max_count`` tokens at a time.

    ``take`` claims a token, waiting while all are out; ``give`` returns one.
    ``init_count`` tokens are out from the start.
    """

    def __init__(self, init_count: int = 0, max_count: int = UINT16_MAX) -> None:
        if init_count < 0 or max_count < 0:
            raise ValueError("token counts must not be negative")
        self._count = init_count
        self._max_count = max_count
        self._mutex = Mutex()

    @property
    def count(self) -> int:
        """The number of tokens currently taken."""
        return self._count

    @property
    def max_count(self) -> int:
        """The number of tokens that may be taken at once."""
        return self._max_count

    def give(self) -> None:
        """Return a token, if any is out, and wake the waiting takers."""
        with Lock(self._mutex) as lock:
            if self._count > 0:
                self._count -= 1
                lock.notify_all()

    def take(self, timeout_ms: float | None = None) -> bool:
        """Claim a token; False if none came free within ``timeout_ms``."""
        with Lock(self._mutex) as lock:
            if timeout_ms is None:
                while self._count >= self._max_count:
                    lock.wait()
            else:
                deadline = time.monotonic() + timeout_ms / MS_PER_S
                while self._count >= self._max_count:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return False
                    lock.wait(remaining * MS_PER_S)
            self._count += 1
            return True
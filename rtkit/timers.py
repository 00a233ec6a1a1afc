"""One-shot and periodic timers whose callback runs on a background thread."""

from __future__ import annotations

import sys
import threading
import time
from abc import ABC, abstractmethod

from rtkit.timespec import MS_PER_S, from_ms, wait


class Timer(ABC):
    """A timer that calls :meth:`callback` once ``duration_ms`` after ``start``.

    Starting again re-arms the timer; a zero duration leaves it disarmed.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._cancel = threading.Event()
        self._cancel.set()
        self._thread: threading.Thread | None = None

    @property
    def armed(self) -> bool:
        """True while the timer may still fire."""
        thread = self._thread
        return not self._cancel.is_set() and thread is not None and thread.is_alive()

    def start(self, duration_ms: float) -> None:
        """Fire once after ``duration_ms`` milliseconds."""
        self._arm(duration_ms, 0.0)

    def _arm(self, value_ms: float, interval_ms: float) -> None:
        first_s = from_ms(value_ms).to_ms() / MS_PER_S
        period_s = from_ms(interval_ms).to_ms() / MS_PER_S
        with self._guard:
            self._cancel.set()
            if first_s <= 0:
                return
            cancel = threading.Event()
            thread = threading.Thread(
                target=self._run, args=(cancel, first_s, period_s), name="timer", daemon=True
            )
            self._cancel, self._thread = cancel, thread
            thread.start()

    def _run(self, cancel: threading.Event, first_s: float, period_s: float) -> None:
        deadline = time.monotonic() + first_s
        while not cancel.wait(max(0.0, deadline - time.monotonic())):
            self.callback()
            if period_s <= 0 or cancel.is_set():
                return
            deadline += period_s

    def stop(self) -> None:
        """Disarm the timer; no callback starts after this returns."""
        with self._guard:
            self._cancel.set()
            thread = self._thread
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join()

    @abstractmethod
    def callback(self) -> None:
        """Called each time the timer fires."""

    def __enter__(self) -> Timer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class PeriodicTimer(Timer):
    """A timer that fires every ``duration_ms`` milliseconds until stopped."""

    def start(self, duration_ms: float) -> None:
        """Fire after ``duration_ms`` and then every ``duration_ms``."""
        self._arm(duration_ms, duration_ms)


class CountDown(PeriodicTimer):
    """Counts down from ``n`` once a second, printing each value, and stops at zero."""

    def __init__(self, n: int) -> None:
        super().__init__()
        self._remaining = n

    @property
    def remaining(self) -> int:
        """The current value of the count."""
        return self._remaining

    def callback(self) -> None:
        self._remaining -= 1
        print(self._remaining, flush=True)
        if self._remaining == 0:
            self.stop()

    def start(self) -> None:
        """Count down at one step per second."""
        super().start(1000)


def main(argv: list[str] | None = None) -> int:
    """Run a countdown; the optional argument is where it starts (40)."""
    args = sys.argv[1:] if argv is None else list(argv)
    n = int(args[0]) if args else 40
    countdown = CountDown(n)
    print(f"Countdown started at {n}", flush=True)
    countdown.start()
    wait(from_ms((n + 1) * 1000))
    countdown.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
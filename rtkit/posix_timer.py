"""A timer that calls a handler once or periodically from a background thread."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from rtkit.timespec import MS_PER_S, Timespec, from_ms


class PosixTimer:
    """Calls ``handler(data)`` after ``value``, then every ``interval``.

    A zero (or negative) ``value`` leaves the timer disarmed; a zero
    ``interval`` makes it fire only once.
    """

    def __init__(
        self,
        handler: Callable[[Any], None],
        value: Timespec,
        interval: Timespec,
        data: Any = None,
    ) -> None:
        self._handler = handler
        self._data = data
        self._first_s = value.to_ms() / MS_PER_S
        self._period_s = interval.to_ms() / MS_PER_S
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, name="posix-timer", daemon=True)
        if self._first_s > 0:
            self._thread.start()

    @property
    def armed(self) -> bool:
        """True while the timer may still fire."""
        return self._thread.is_alive() and not self._cancelled.is_set()

    def _run(self) -> None:
        deadline = time.monotonic() + self._first_s
        while not self._cancelled.wait(max(0.0, deadline - time.monotonic())):
            self._handler(self._data)
            if self._period_s <= 0:
                return
            deadline += self._period_s

    def delete(self) -> None:
        """Disarm the timer; no call starts after this returns."""
        self._cancelled.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> PosixTimer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.delete()


@dataclass
class _Ticker:
    target: int
    count: int = 0
    done: threading.Event = field(default_factory=threading.Event)

    def __post_init__(self) -> None:
        if self.count >= self.target:
            self.done.set()


def _report_tick(ticker: _Ticker) -> None:
    print(ticker.count, flush=True)
    ticker.count += 1
    if ticker.count >= ticker.target:
        ticker.done.set()


def main(argv: list[str] | None = None) -> int:
    """Print a counter from a periodic timer until it reaches its target.

    Optional arguments: the period in milliseconds (500) and the number of
    iterations (15).
    """
    args = sys.argv[1:] if argv is None else list(argv)
    period_ms = float(args[0]) if args else 500.0
    iterations = int(args[1]) if len(args) > 1 else 15
    ticker = _Ticker(iterations)
    timer = PosixTimer(_report_tick, from_ms(period_ms), from_ms(period_ms), ticker)
    ticker.done.wait()
    timer.delete()
    print(f"The program stopped after {iterations} iterations.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""A stopwatch measuring elapsed wall-clock time in milliseconds."""

from __future__ import annotations

from rtkit.timespec import from_ms, now


class Chrono:
    """Starts running when created; ``stop`` freezes it and ``restart`` resets it."""

    def __init__(self) -> None:
        self._start = now()
        self._stop = from_ms(0)

    def stop(self) -> None:
        """Freeze the stopwatch at the current time."""
        self._stop = now()

    def restart(self) -> None:
        """Start timing again from now."""
        self._start = now()
        self._stop = from_ms(0)

    def is_active(self) -> bool:
        """True while the stopwatch has not been stopped."""
        return self.stop_time() == 0

    def start_time(self) -> float:
        """The start time, in milliseconds since the epoch."""
        return self._start.to_ms()

    def stop_time(self) -> float:
        """The stop time in milliseconds since the epoch, or 0 while running."""
        return self._stop.to_ms()

    def lap(self) -> float:
        """Milliseconds elapsed since the start, up to now or to the stop."""
        if self.is_active():
            return now().to_ms() - self.start_time()
        return self.stop_time() - self.start_time()
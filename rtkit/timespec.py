"""Time values with second/nanosecond fields and millisecond arithmetic."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass

NS_PER_S = 1_000_000_000
US_PER_S = 1_000_000
MS_PER_S = 1_000
NS_PER_MS = NS_PER_S // MS_PER_S


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass(frozen=True, eq=False)
class Timespec:
    """A point in time or a duration, split into seconds and nanoseconds.

    Arithmetic and comparisons go through whole milliseconds, so any
    sub-millisecond part is ignored by them.
    """

    sec: int = 0
    nsec: int = 0

    def to_ms(self) -> float:
        """Return the value in whole milliseconds, as a float."""
        return float(self.sec * MS_PER_S + _trunc_div(self.nsec, NS_PER_MS))

    def __neg__(self) -> Timespec:
        return negate(self)

    def __add__(self, other: object) -> Timespec:
        if not isinstance(other, Timespec):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: object) -> Timespec:
        if not isinstance(other, Timespec):
            return NotImplemented
        return subtract(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timespec):
            return NotImplemented
        return self.to_ms() == other.to_ms()

    def __hash__(self) -> int:
        return hash(self.to_ms())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Timespec):
            return NotImplemented
        return self.to_ms() < other.to_ms()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Timespec):
            return NotImplemented
        return self.to_ms() > other.to_ms()


def to_ms(ts: Timespec) -> float:
    """Return ``ts`` in whole milliseconds."""
    return ts.to_ms()


def from_ms(time_ms: float) -> Timespec:
    """Build a Timespec from milliseconds; nanoseconds are always non-negative."""
    sec = math.floor(time_ms / MS_PER_S)
    nsec = int(abs((time_ms - sec * MS_PER_S) * NS_PER_MS))
    if nsec < 0:
        nsec += NS_PER_S
    return Timespec(sec, nsec)


def now() -> Timespec:
    """Return the current wall-clock time."""
    sec, nsec = divmod(time.time_ns(), NS_PER_S)
    return Timespec(sec, nsec)


def format_time(ts: Timespec) -> str:
    """Describe the fields of ``ts`` on three lines."""
    return (
        f"seconds: {ts.sec}\n"
        f"nanoseconds: {ts.nsec}\n"
        f"milliseconds: {ts.to_ms():g}"
    )


def negate(ts: Timespec) -> Timespec:
    """Return ``-ts``."""
    return from_ms(-ts.to_ms())


def add(first: Timespec, second: Timespec) -> Timespec:
    """Return ``first + second``."""
    return from_ms(first.to_ms() + second.to_ms())


def subtract(first: Timespec, second: Timespec) -> Timespec:
    """Return ``first - second``."""
    return add(first, negate(second))


def try_wait(delay: Timespec) -> Timespec:
    """Sleep for ``delay`` once and return whatever time is left."""
    delay_s = delay.sec + delay.nsec / NS_PER_S
    if delay_s < 0:
        raise ValueError(f"cannot wait for a negative delay: {delay!r}")
    deadline = time.monotonic() + delay_s
    time.sleep(delay_s)
    remaining_ms = (deadline - time.monotonic()) * MS_PER_S
    return from_ms(max(0.0, remaining_ms))


def wait(delay: Timespec) -> Timespec:
    """Sleep for the whole of ``delay``; return the (zero) time left."""
    remaining = try_wait(delay)
    while remaining.to_ms() != 0:
        remaining = try_wait(remaining)
    return remaining
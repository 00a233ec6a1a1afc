"""Busy loops, timing them, and calibrating loop counts against time."""

from __future__ import annotations

import math
import re
import sys
import threading

from rtkit.posix_timer import PosixTimer
from rtkit.timespec import MS_PER_S, from_ms, now

UINT_MAX = 0xFFFFFFFF

_LEADING_DIGITS = re.compile(r"\s*\+?(\d+)")


def _parse_unsigned(text: str) -> int:
    """Read a leading unsigned decimal number; anything unreadable is 0."""
    match = _LEADING_DIGITS.match(text)
    return int(match.group(1)) & UINT_MAX if match else 0


def incr(n_loops: int) -> float:
    """Increment a counter ``n_loops`` times and return it."""
    counter = 0.0
    for _ in range(n_loops):
        counter += 1.0
    return counter


def incr_until(n_loops: int, stop: threading.Event) -> int:
    """Count up to ``n_loops`` unless ``stop`` is set first; return the count."""
    done = 0
    while done < n_loops and not stop.is_set():
        done += 1
    return done


def _set_event(event: threading.Event) -> None:
    event.set()


def get_loops(duration_ms: float) -> float:
    """Return how many loops run in ``duration_ms`` milliseconds."""
    if duration_ms <= 0:
        raise ValueError(f"duration must be positive, got {duration_ms}")
    stop = threading.Event()
    timer = PosixTimer(_set_event, from_ms(duration_ms), from_ms(0), stop)
    try:
        loops = incr_until(UINT_MAX, stop)
    finally:
        timer.delete()
    return float(loops)


def calibrate(t1: float, t2: float) -> tuple[float, float]:
    """Fit ``loops = a * ms + b`` from runs of ``t1`` and ``t2`` seconds."""
    if t1 == t2:
        raise ValueError("calibration needs two different durations")
    c1 = get_loops(t1 * MS_PER_S)
    c2 = get_loops(t2 * MS_PER_S)
    b = (c1 * t2 - c2 * t1) / (t2 - t1)
    a = (c1 - b) / (t1 * MS_PER_S)
    return a, b


def main_time(argv: list[str] | None = None) -> int:
    """Time a busy loop whose length is the first argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    n_loops = _parse_unsigned(args[0]) if args else 0
    start = now()
    counter = incr(n_loops)
    print(f"Final Value : {counter:g}")
    elapsed = now() - start
    print(f"Execution time (s) : {elapsed.to_ms() / MS_PER_S:g}")
    return 0


def main_calibrate(argv: list[str] | None = None) -> int:
    """Calibrate, predict the time of a long loop, then measure it.

    Optional arguments: the two calibration durations in seconds (4, 6) and
    the number of loops to predict (1e10).
    """
    args = sys.argv[1:] if argv is None else list(argv)
    t1 = float(args[0]) if args else 4.0
    t2 = float(args[1]) if len(args) > 1 else 6.0
    max_inc = float(args[2]) if len(args) > 2 else 10_000_000_000.0

    a, b = calibrate(t1, t2)
    print(f"a : {a:g} and b : {b:g}")
    estimated = (max_inc - b) / a if a else math.inf
    print(f"Estimated execution time for {max_inc:g} loops (ms) : {estimated:g}")

    start = now()
    incr(math.ceil(max_inc))
    measured = (now() - start).to_ms()
    print(f"Execution time (ms) : {measured:g}")

    if measured:
        error = 100 * (estimated - measured) / measured
    else:
        error = math.copysign(math.inf, estimated)
    print(f"Relative error : {error:g}%")
    return 0


if __name__ == "__main__":
    sys.exit(main_time())
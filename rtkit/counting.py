"""Shared counters incremented by several threads, with timing."""

from __future__ import annotations

import argparse
import os
import re
import sys
import threading
from collections.abc import Iterable, Iterator
from enum import IntEnum

from rtkit.timespec import MS_PER_S, now

_UINT_MAX = 0xFFFFFFFF
_LEADING_DIGITS = re.compile(r"\s*\+?(\d+)")


def _parse_unsigned(text: str) -> int:
    match = _LEADING_DIGITS.match(text)
    return int(match.group(1)) & _UINT_MAX if match else 0


class SchedPolicy(IntEnum):
    """Scheduling policies, numbered as the operating system numbers them."""

    OTHER = 0
    FIFO = 1
    RR = 2

    @classmethod
    def from_value(cls, value: int) -> SchedPolicy:
        """Map a number to a policy; unknown numbers mean OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


def _raise_calling_thread(policy: SchedPolicy) -> None:
    """Give the calling thread the top priority of ``policy``, where allowed."""
    try:
        priority = os.sched_get_priority_max(int(policy))
        os.sched_setscheduler(0, int(policy), os.sched_param(priority))
    except (AttributeError, OSError):
        pass


class SharedCounter:
    """A float counter that threads increment, optionally under a lock."""

    def __init__(self, mutex_enabled: bool = False) -> None:
        self.mutex_enabled = mutex_enabled
        self.value = 0.0
        self._lock = threading.Lock()

    def incr(self, n_loops: int) -> None:
        """Add one to the counter ``n_loops`` times."""
        if self.mutex_enabled:
            for _ in range(n_loops):
                with self._lock:
                    self.value += 1.0
        else:
            for _ in range(n_loops):
                self.value += 1.0


def get_execution_time(
    n_loops: int,
    n_tasks: int,
    policy: int = SchedPolicy.OTHER,
    mutex_enabled: bool = False,
) -> tuple[float, float]:
    """Run ``n_tasks`` threads of ``n_loops`` increments each.

    Returns the elapsed time in milliseconds and the final counter value.
    """
    _raise_calling_thread(SchedPolicy.from_value(int(policy)))
    counter = SharedCounter(mutex_enabled)
    workers = [
        threading.Thread(target=counter.incr, args=(n_loops,)) for _ in range(n_tasks)
    ]
    start = now()
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    elapsed = now() - start
    return elapsed.to_ms(), counter.value


def benchmark_grid(
    loop_steps: Iterable[int] = tuple(10_000_000 * i for i in range(1, 5)),
    task_counts: Iterable[int] = range(1, 7),
    policy: int = SchedPolicy.RR,
) -> Iterator[tuple[int, int, float]]:
    """Yield ``(loops, tasks, elapsed_ms)`` for every pair of settings."""
    task_counts = tuple(task_counts)
    for n_loops in loop_steps:
        for n_tasks in task_counts:
            elapsed_ms, _ = get_execution_time(n_loops, n_tasks, policy)
            yield n_loops, n_tasks, elapsed_ms


def main(argv: list[str] | None = None) -> int:
    """Time a multi-threaded count, and with --grid a table of timings."""
    parser = argparse.ArgumentParser(description="Time threads sharing a counter.")
    parser.add_argument("n_loops", nargs="?", default=0, type=_parse_unsigned)
    parser.add_argument("n_tasks", nargs="?", default=0, type=_parse_unsigned)
    parser.add_argument("policy", nargs="?", default=0, type=_parse_unsigned)
    parser.add_argument("mutex", nargs="?", default="0")
    parser.add_argument("--grid", action="store_true", help="also print a timing table")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    elapsed_ms, value = get_execution_time(
        args.n_loops, args.n_tasks, args.policy, args.mutex.startswith("1")
    )
    print(f"Execution time (s) : {elapsed_ms / MS_PER_S:g}")
    print(f"Counter's value (s) : {value:g}")

    if args.grid:
        print("Computing data to plot execution time graph...")
        print("Loops, Tasks, ExecutionTime")
        for n_loops, n_tasks, ms in benchmark_grid():
            print(f"{n_loops}, {n_tasks}, {ms:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
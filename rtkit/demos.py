"""Demonstrations of joins, mutexes, semaphores and queues between threads."""

from __future__ import annotations

import math
import sys

from rtkit.fifo import Fifo
from rtkit.mutex import Mutex
from rtkit.semaphore import Semaphore
from rtkit.thread import Thread
from rtkit.timespec import from_ms, now, wait
from rtkit.workers import AIncrementer, BIncrementer, CProducer, Counter, DProducer


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def _report(worker: Thread, counter: Counter) -> None:
    print(
        f"\tExecution time : {worker.exec_time_ms():g} \t\tCounter Value : {counter.value}",
        flush=True,
    )


def concurrent_sum(n_threads: int, count: int, locked: bool = False) -> int:
    """Have ``n_threads`` threads each add ``count`` to one counter; return it."""
    counter = Counter()
    if locked:
        mutex = Mutex()
        workers: list[Thread] = [
            BIncrementer(counter, count, mutex) for _ in range(n_threads)
        ]
    else:
        workers = [AIncrementer(counter, count) for _ in range(n_threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return counter.value


def run_semaphore_jobs(n_producers: int, n_tokens: int) -> float:
    """Run producers sharing ``n_tokens`` tokens; return the elapsed ms."""
    semaphore = Semaphore(0, n_tokens)
    producers = [CProducer(semaphore, i) for i in range(n_producers)]
    start = now()
    for producer in producers:
        producer.start()
    for producer in producers:
        producer.join()
    return (now() - start).to_ms()


def run_fifo_jobs(n_tasks: int, n_consumers: int, timeout_ms: float) -> bool:
    """Let consumers work through a queue of tasks; True if it ends empty."""
    fifo: Fifo[int] = Fifo()
    for i in range(n_tasks):
        fifo.push(n_tasks - i)
    producers = [DProducer(fifo, i, timeout_ms) for i in range(n_consumers)]
    for producer in producers:
        wait(from_ms(7))
        producer.start()
    for producer in producers:
        producer.join()
    return fifo.empty()


def main_join(argv: list[str] | None = None) -> int:
    """Show plain and timed joins, then unlocked concurrent counting.

    Optional arguments: the count for the join tests (100000000), the count
    per thread (1000000) and the number of threads (10).
    """
    args = _args(argv)
    join_count = int(args[0]) if args else 100_000_000
    total = int(args[1]) if len(args) > 1 else 1_000_000
    n_threads = int(args[2]) if len(args) > 2 else 10

    print("1 - Testing Join", flush=True)
    counter = Counter()
    worker = AIncrementer(counter, join_count)
    worker.start()
    _report(worker, counter)
    print("\tSleeping 100 ms", flush=True)
    Thread.sleep_ms(100)
    _report(worker, counter)
    print("\tJoining ...", flush=True)
    worker.join()
    _report(worker, counter)

    print("2 - Testing Join with timeout", flush=True)
    counter = Counter()
    worker = AIncrementer(counter, join_count)
    worker.start()
    _report(worker, counter)
    print("\tSleeping 50 ms", flush=True)
    Thread.sleep_ms(50)
    _report(worker, counter)
    print(f"\tJoining with 50ms timeout : {int(worker.join(50))}", flush=True)
    _report(worker, counter)
    print(f"\tJoining with 1000ms timeout : {int(worker.join(1000))}", flush=True)
    _report(worker, counter)
    print("\tJoining ...", flush=True)
    worker.join()
    _report(worker, counter)

    print("3 - Testing concurrency", flush=True)
    print(f"{n_threads} threads will count from 0 to {total}.")
    print(f"Expected result : {total * n_threads}.", flush=True)
    print(f"Result : {concurrent_sum(n_threads, total, locked=False)}")
    return 0


def main_mutex(argv: list[str] | None = None) -> int:
    """Show locked concurrent counting, then restarting a thread.

    Optional arguments: the count per thread (1000000) and the number of
    threads (10).
    """
    args = _args(argv)
    total = int(args[0]) if args else 1_000_000
    n_threads = int(args[1]) if len(args) > 1 else 10

    print("1 - Testing concurrency", flush=True)
    print(f"{n_threads} threads will count from 0 to {total}.")
    print(f"Expected result : {total * n_threads}.", flush=True)
    print(f"Result : {concurrent_sum(n_threads, total, locked=True)}")

    print("2 - Testing started field", flush=True)
    counter = Counter()
    worker = BIncrementer(counter, total, Mutex())

    def try_start() -> None:
        status = "success" if worker.start() else "failed"
        print(f"Starting Thread (status : {status})", flush=True)
        _report(worker, counter)

    for _ in range(2):
        try_start()
        try_start()
        print("Joining Thread...", flush=True)
        worker.join()
        _report(worker, counter)
    return 0


def main_semaphore(argv: list[str] | None = None) -> int:
    """Run producers limited by a semaphore and report the time taken.

    Optional arguments: the number of producers (10) and of tokens (5).
    """
    args = _args(argv)
    n_producers = int(args[0]) if args else 10
    n_tokens = int(args[1]) if len(args) > 1 else 5
    if n_tokens < 1:
        raise ValueError("at least one token is needed")
    elapsed = run_semaphore_jobs(n_producers, n_tokens)
    expected = math.ceil(n_producers / n_tokens) * CProducer.WORK_MS
    print(f"Tasks realised in {elapsed:g} ms (expected : {expected:g}ms)")
    return 0


def main_fifo(argv: list[str] | None = None) -> int:
    """Let consumers empty a task queue and report whether they did.

    Optional arguments: the number of tasks (5), of consumers (2) and the
    consumers' timeout in ms (500).
    """
    args = _args(argv)
    n_tasks = int(args[0]) if args else 5
    n_consumers = int(args[1]) if len(args) > 1 else 2
    timeout_ms = float(args[2]) if len(args) > 2 else 500.0
    if run_fifo_jobs(n_tasks, n_consumers, timeout_ms):
        print("Fifo is empty, all tasks have been consummed.")
    else:
        print("Fifo is not empty, There are remaining tasks to consume.")
    return 0


if __name__ == "__main__":
    sys.exit(main_join())
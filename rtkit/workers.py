"""Worker threads: counters incremented with and without a lock, and producers."""

from __future__ import annotations

from rtkit.fifo import EmptyFifo, Fifo
from rtkit.mutex import Lock, Mutex
from rtkit.semaphore import Semaphore
from rtkit.thread import Thread
from rtkit.timespec import from_ms, now, wait


class Counter:
    """An integer shared between threads."""

    def __init__(self) -> None:
        self.value = 0


class AIncrementer(Thread):
    """Adds one to a shared counter ``count`` times, with no locking."""

    def __init__(self, counter: Counter, count: int) -> None:
        super().__init__()
        self.counter = counter
        self.count = count

    def run(self) -> None:
        for _ in range(self.count):
            self.counter.value += 1


class BIncrementer(Thread):
    """Adds one to a shared counter ``count`` times, each under ``mutex``."""

    def __init__(self, counter: Counter, count: int, mutex: Mutex) -> None:
        super().__init__()
        self.counter = counter
        self.count = count
        self.mutex = mutex

    def run(self) -> None:
        for _ in range(self.count):
            with Lock(self.mutex):
                self.counter.value += 1


class CProducer(Thread):
    """Takes a token from a semaphore, works for 100 ms, then gives it back."""

    WORK_MS = 100.0

    def __init__(self, semaphore: Semaphore, ident: int) -> None:
        super().__init__()
        self.semaphore = semaphore
        self.ident = ident

    def run(self) -> None:
        self.semaphore.take()
        print(f"\tProducer {self.ident} took a token", flush=True)
        wait(from_ms(self.WORK_MS))
        self.semaphore.give()
        print(f"\tProducer {self.ident} gave a token", flush=True)


class DProducer(Thread):
    """Consumes tasks from a queue until ``timeout_ms`` has passed.

    Each task ``n`` takes 10 ms and, when positive, adds ``n - 1`` and,
    when above one, ``n - 2`` back to the queue.
    """

    WORK_MS = 10.0

    def __init__(self, fifo: Fifo[int], ident: int, timeout_ms: float) -> None:
        super().__init__()
        self.fifo = fifo
        self.ident = ident
        self.timeout_ms = timeout_ms
        self.processed: list[int] = []

    def run(self) -> None:
        deadline = now() + from_ms(self.timeout_ms)
        while now() < deadline:
            try:
                task = self.fifo.pop((deadline - now()).to_ms())
            except EmptyFifo:
                return
            wait(from_ms(self.WORK_MS))
            self.processed.append(task)
            if task > 0:
                self.fifo.push(task - 1)
                if task > 1:
                    self.fifo.push(task - 2)
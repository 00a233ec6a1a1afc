import threading
import time
from contextlib import contextmanager

import pytest

from rtkit.mutex import Lock, LockTimeout, Mutex, TryLock


@contextmanager
def _held_elsewhere(mutex):
    acquired = threading.Event()
    done = threading.Event()

    def hold():
        with Lock(mutex):
            acquired.set()
            done.wait(5)

    holder = threading.Thread(target=hold)
    holder.start()
    assert acquired.wait(5)
    try:
        yield
    finally:
        done.set()
        holder.join()


def _try_from_other_thread(mutex):
    result = []

    def attempt():
        try:
            with TryLock(mutex):
                result.append("acquired")
        except LockTimeout:
            result.append("timeout")

    worker = threading.Thread(target=attempt)
    worker.start()
    worker.join()
    return result[0]


def test_timeout_message():
    assert str(LockTimeout()) == "Timeout waiting for condition"


def test_lock_times_out_when_held_elsewhere():
    mutex = Mutex()
    with _held_elsewhere(mutex):
        start = time.monotonic()
        with pytest.raises(LockTimeout):
            Lock(mutex, 30)
        assert time.monotonic() - start >= 0.02


def test_trylock_raises_when_held_elsewhere():
    mutex = Mutex()
    with _held_elsewhere(mutex):
        with pytest.raises(LockTimeout):
            TryLock(mutex)


def test_trylock_blocks_others_until_released():
    mutex = Mutex()
    with TryLock(mutex):
        assert _try_from_other_thread(mutex) == "timeout"
    assert _try_from_other_thread(mutex) == "acquired"


def test_lock_is_recursive():
    mutex = Mutex()
    with Lock(mutex):
        with Lock(mutex, 0):
            assert _try_from_other_thread(mutex) == "timeout"
        assert _try_from_other_thread(mutex) == "timeout"
    assert _try_from_other_thread(mutex) == "acquired"


def test_release_is_idempotent():
    mutex = Mutex()
    lock = Lock(mutex)
    lock.release()
    lock.release()
    assert _try_from_other_thread(mutex) == "acquired"


def test_wait_times_out_without_notification():
    mutex = Mutex()
    with Lock(mutex) as lock:
        start = time.monotonic()
        assert lock.wait(50) is False
        assert time.monotonic() - start >= 0.04


def test_wait_releases_the_mutex():
    mutex = Mutex()
    outcome = []

    def probe():
        outcome.append(_try_from_other_thread(mutex))

    with Lock(mutex) as lock:
        prober = threading.Thread(target=probe)
        prober.start()
        waits = [lock.wait(10)]
        while prober.is_alive():
            waits.append(lock.wait(10))
        prober.join()
    assert set(waits) == {False}
    assert outcome == ["acquired"]


def test_notify_wakes_a_waiter():
    mutex = Mutex()
    ready = threading.Event()
    results = []

    def waiter():
        with Lock(mutex) as lock:
            ready.set()
            results.append(lock.wait(5000))

    worker = threading.Thread(target=waiter)
    worker.start()
    assert ready.wait(5)
    with Lock(mutex) as lock:
        lock.notify()
    worker.join(5)
    assert results == [True]
    with TryLock(mutex) as held:
        assert held.wait(5) is False


def test_notify_all_wakes_every_waiter():
    mutex = Mutex()
    readies = [threading.Event() for _ in range(2)]
    results = []

    def waiter(ready):
        with Lock(mutex) as lock:
            ready.set()
            results.append(lock.wait(5000))

    workers = [threading.Thread(target=waiter, args=(ready,)) for ready in readies]
    for worker in workers:
        worker.start()
    for ready in readies:
        assert ready.wait(5)
    with Lock(mutex) as lock:
        lock.notify_all()
    for worker in workers:
        worker.join(5)
    assert results == [True, True]
    with TryLock(mutex) as held:
        assert held.wait(5) is False
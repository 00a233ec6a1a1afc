import threading
import time

import pytest

from rtkit.fifo import EmptyFifo, Fifo


def test_new_fifo_is_empty():
    assert Fifo().empty() is True


def test_elements_come_out_in_order():
    fifo = Fifo()
    items = [5, 4, 3, 2, 1]
    for item in items:
        fifo.push(item)
    assert fifo.empty() is False
    assert [fifo.pop() for _ in items] == items
    assert fifo.empty() is True


def test_timed_pop_returns_available_element():
    fifo = Fifo()
    fifo.push("a")
    assert fifo.pop(100) == "a"


def test_timed_pop_on_empty_raises():
    fifo = Fifo()
    start = time.monotonic()
    with pytest.raises(EmptyFifo):
        fifo.pop(40)
    assert time.monotonic() - start >= 0.03


def test_timed_pop_receives_late_push():
    fifo = Fifo()
    results = []
    worker = threading.Thread(target=lambda: results.append(fifo.pop(5000)))
    worker.start()
    time.sleep(0.05)
    fifo.push(7)
    worker.join(5)
    assert results == [7]
    assert fifo.empty()


def test_blocking_pop_receives_push():
    fifo = Fifo()
    results = []
    worker = threading.Thread(target=lambda: results.append(fifo.pop()))
    worker.start()
    time.sleep(0.02)
    fifo.push("job")
    worker.join(5)
    assert results == ["job"]
    assert fifo.empty() is True


def test_many_consumers_share_elements_once():
    fifo = Fifo()
    items = list(range(50))
    for item in items:
        fifo.push(item)
    taken = []
    guard = threading.Lock()

    def consume():
        while True:
            try:
                item = fifo.pop(20)
            except EmptyFifo:
                return
            with guard:
                taken.append(item)

    workers = [threading.Thread(target=consume) for _ in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join(5)
    assert sorted(taken) == items
    assert fifo.empty() is True
    with pytest.raises(EmptyFifo):
        fifo.pop(0)
import threading
import time

from rtkit.posix_timer import PosixTimer, main
from rtkit.timespec import from_ms


def test_one_shot_timer_fires_once_with_data():
    calls = []
    timer = PosixTimer(calls.append, from_ms(20), from_ms(0), "payload")
    time.sleep(0.2)
    timer.delete()
    assert calls == ["payload"]


def test_periodic_timer_fires_repeatedly():
    calls = []
    reached = threading.Event()

    def handler(data):
        calls.append(data)
        if len(calls) >= 3:
            reached.set()

    timer = PosixTimer(handler, from_ms(10), from_ms(10), 7)
    assert reached.wait(5.0)
    assert timer.armed is True
    timer.delete()
    assert timer.armed is False
    assert len(calls) >= 3
    assert set(calls) == {7}


def test_delete_stops_further_calls():
    calls = []
    timer = PosixTimer(calls.append, from_ms(10), from_ms(10), 1)
    time.sleep(0.1)
    timer.delete()
    count = len(calls)
    time.sleep(0.1)
    assert len(calls) == count
    assert not timer.armed


def test_zero_value_leaves_timer_disarmed():
    calls = []
    timer = PosixTimer(calls.append, from_ms(0), from_ms(10), 1)
    time.sleep(0.1)
    timer.delete()
    assert calls == []


def test_delete_before_first_expiry():
    calls = []
    timer = PosixTimer(calls.append, from_ms(200), from_ms(0), 1)
    timer.delete()
    time.sleep(0.3)
    assert calls == []


def test_context_manager_deletes():
    calls = []
    with PosixTimer(calls.append, from_ms(10), from_ms(10), 1) as timer:
        time.sleep(0.05)
    count = len(calls)
    time.sleep(0.05)
    assert len(calls) == count
    assert not timer.armed


def test_main_counts_iterations(capsys):
    assert main(["5", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == ["0", "1", "2"]
    assert lines[-1] == "The program stopped after 3 iterations."
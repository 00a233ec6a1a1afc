import threading
import time

import pytest

from rtkit.counting import SchedPolicy
from rtkit.thread import PosixThread, Thread, ThreadError
from rtkit.timespec import now


class _Gate(Thread):
    def __init__(self):
        super().__init__()
        self.release = threading.Event()
        self.entered = threading.Event()
        self.runs = 0

    def run(self):
        self.runs += 1
        self.entered.set()
        self.release.wait(5)


def test_thread_is_abstract():
    with pytest.raises(TypeError):
        Thread()


def test_posix_thread_runs_target_with_args():
    results = []
    thread = PosixThread()
    assert thread.start(results.append, 42) is True
    assert thread.join() is True
    assert results == [42]
    assert thread.is_active is False


def test_join_before_start_raises():
    with pytest.raises(ThreadError):
        PosixThread().join()


def test_default_scheduling():
    assert PosixThread().get_scheduling() == (SchedPolicy.OTHER, 0)


def test_scheduling_round_trip_before_start():
    thread = PosixThread()
    assert thread.set_scheduling(SchedPolicy.RR, 5) is False
    assert thread.get_scheduling() == (SchedPolicy.RR, 5)


def test_start_twice_is_refused_while_running():
    gate = _Gate()
    assert Thread.start(gate) is True
    assert gate.entered.wait(5)
    assert gate.started is True
    assert Thread.start(gate) is False
    gate.release.set()
    assert PosixThread.join(gate) is True
    assert gate.started is False
    assert gate.runs == 1


def test_restart_after_join():
    gate = _Gate()
    gate.release.set()
    assert Thread.start(gate) is True
    assert PosixThread.join(gate) is True
    assert Thread.start(gate) is True
    assert PosixThread.join(gate) is True
    assert gate.runs == 2


def test_join_with_timeout():
    gate = _Gate()
    assert Thread.start(gate) is True
    assert gate.entered.wait(5)
    assert PosixThread.join(gate, 30) is False
    assert gate.is_active is True
    gate.release.set()
    assert PosixThread.join(gate, 5000) is True
    assert gate.is_active is False


def test_exec_time_before_start_is_zero():
    assert Thread.exec_time_ms(_Gate()) == 0.0


def test_exec_time_grows_while_running_and_freezes_after():
    gate = _Gate()
    Thread.start(gate)
    assert gate.entered.wait(5)
    assert Thread.stop_time_ms(gate) == 0.0
    time.sleep(0.05)
    assert Thread.exec_time_ms(gate) >= 40
    gate.release.set()
    PosixThread.join(gate)
    frozen = Thread.exec_time_ms(gate)
    assert frozen == Thread.stop_time_ms(gate) - Thread.start_time_ms(gate)
    assert frozen >= 40
    time.sleep(0.02)
    assert Thread.exec_time_ms(gate) == frozen


def test_sleep_ms_sleeps():
    start = now()
    Thread.sleep_ms(50)
    elapsed = (now() - start).to_ms()
    assert elapsed >= 45
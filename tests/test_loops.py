import threading

import pytest

from rtkit.loops import (
    calibrate,
    get_loops,
    incr,
    incr_until,
    main_calibrate,
    main_time,
)


@pytest.mark.parametrize("n", [0, 1, 1000])
def test_incr_counts_exactly(n):
    assert incr(n) == float(n)


def test_incr_until_runs_all_loops_when_not_stopped():
    assert incr_until(5000, threading.Event()) == 5000


def test_incr_until_stops_immediately_when_set():
    stop = threading.Event()
    stop.set()
    assert incr_until(5000, stop) == 0


def test_get_loops_counts_something():
    loops = get_loops(30)
    assert loops > 0
    assert loops == int(loops)


def test_get_loops_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        get_loops(0)


def test_calibrate_slope_is_positive():
    a, b = calibrate(0.02, 0.1)
    assert a > 0
    assert isinstance(b, float)


def test_calibrate_requires_distinct_durations():
    with pytest.raises(ValueError):
        calibrate(1, 1)


def test_main_time_reports_final_value(capsys):
    assert main_time(["1000"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Final Value : 1000"
    assert out[1].startswith("Execution time (s) : ")


def test_main_time_unreadable_argument_is_zero(capsys):
    assert main_time(["abc"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Final Value : 0"


def test_main_calibrate_reports_all_steps(capsys):
    assert main_calibrate(["0.02", "0.05", "1000"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("a : ")
    assert lines[1].startswith("Estimated execution time for 1000 loops (ms) : ")
    assert lines[2].startswith("Execution time (ms) : ")
    assert lines[3].startswith("Relative error : ")
    assert lines[3].endswith("%")
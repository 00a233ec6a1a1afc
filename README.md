# rtkit

Building blocks for real-time style programs in Python: millisecond time
arithmetic, one-shot and periodic timers, busy-loop calibration, threads that
time their own runs, a recursive mutex with a condition monitor, a counting
semaphore, a blocking FIFO and an active object serving requests on its own
thread. It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `rtkit.timespec` | `Timespec` (seconds and nanoseconds) with `+`, `-`, negation, `==`, `<`, `>`; `from_ms`, `to_ms`, `now`, `add`, `subtract`, `negate`, `try_wait`, `wait`, `format_time` |
| `rtkit.posix_timer` | `PosixTimer`, which calls `handler(data)` after a delay and then at an interval, until `delete()` |
| `rtkit.loops` | `incr`, `incr_until`, `get_loops` and `calibrate`, fitting `loops = a * ms + b` from two timed runs |
| `rtkit.counting` | `SharedCounter`, `SchedPolicy`, `get_execution_time` and `benchmark_grid` for timing threads that share one counter, with or without a lock |
| `rtkit.chrono` | `Chrono`, a stopwatch with `lap`, `stop`, `restart`, `is_active` |
| `rtkit.timers` | abstract `Timer` (one-shot), `PeriodicTimer` and `CountDown` |
| `rtkit.looper` | `Looper`, a counting loop that another thread can sample and stop |
| `rtkit.calibrator` | `Calibrator`, which samples a `Looper` from a periodic timer to fit `a` and `b`, and `CpuLoop`, which loops for a requested number of milliseconds |
| `rtkit.mutex` | `Mutex`, `Monitor`, `Lock`, `TryLock` and `LockTimeout` |
| `rtkit.semaphore` | `Semaphore` with `give` and `take` (optionally with a timeout) |
| `rtkit.fifo` | `Fifo` with blocking or time-limited `pop`, and `EmptyFifo` |
| `rtkit.thread` | `PosixThread` (start, join with optional timeout, scheduling settings) and abstract `Thread` with start, stop and execution times |
| `rtkit.workers` | `Counter` and example threads: `AIncrementer` (no lock), `BIncrementer` (under a `Mutex`), `CProducer` (semaphore token), `DProducer` (FIFO tasks) |
| `rtkit.demos` | `concurrent_sum`, `run_semaphore_jobs`, `run_fifo_jobs` |
| `rtkit.active` | `Request`, `Calculator`, `CrunchReq`, `ActiveObject`, `ActiveCalc`, `Client` |

Times are given in milliseconds throughout. `Timespec` arithmetic and
comparisons work on whole milliseconds, so sub-millisecond parts are dropped.

## Examples

Time arithmetic:

```python
from rtkit.timespec import from_ms, to_ms

a = from_ms(3200)
b = from_ms(-3200)
print(to_ms(a + b))   # 0.0
print(to_ms(-a))      # -3200.0
```

A stopwatch:

```python
from rtkit.chrono import Chrono
from rtkit.timespec import from_ms, wait

chrono = Chrono()
wait(from_ms(200))
print(chrono.lap())   # about 200
chrono.stop()
```

A FIFO between threads:

```python
from rtkit.fifo import EmptyFifo, Fifo

fifo = Fifo()
fifo.push(3)
print(fifo.pop(100))  # 3
try:
    fifo.pop(100)
except EmptyFifo:
    print("nothing arrived within 100 ms")
```

A scoped lock with a timeout:

```python
from rtkit.mutex import Lock, LockTimeout, Mutex

mutex = Mutex()
try:
    with Lock(mutex, 50):
        ...
except LockTimeout:
    print("mutex busy")
```

An active calculator:

```python
from rtkit.active import ActiveCalc, Calculator

acalc = ActiveCalc(Calculator(delay_ms=10))
acalc.start()
request = acalc.async_crunch(4.0)
print(request.wait_return())  # 4.0
```

## Commands

Each command runs one demonstration and prints its measurements. Arguments
are optional; the defaults are shown.

| Command | Arguments | What it does |
| --- | --- | --- |
| `rtkit-timer` | period ms (500), iterations (15) | prints a counter from a periodic timer until it reaches the target |
| `rtkit-loop-time` | loops (0) | times that many increments |
| `rtkit-loop-calibrate` | t1 s (4), t2 s (6), loops (1e10) | calibrates, predicts the time of the loop, measures it and prints the relative error |
| `rtkit-counting` | loops (0), tasks (0), policy (0), mutex (0), `--grid` | times threads sharing a counter; `--grid` also prints a table for 1–4 × 10⁷ loops and 1–6 threads |
| `rtkit-countdown` | start (40) | counts down once a second |
| `rtkit-calibrator` | period ms (1), samples (1000), durations ms (4000 6000) | calibrates by periodic sampling, then runs loops sized for each duration |
| `rtkit-join` | join count (1e8), count per thread (1e6), threads (10) | plain and timed joins, then unlocked concurrent counting |
| `rtkit-mutex` | count per thread (1e6), threads (10) | locked concurrent counting, then restarting a thread |
| `rtkit-semaphore` | producers (10), tokens (5) | producers sharing a limited number of tokens |
| `rtkit-fifo` | tasks (5), consumers (2), timeout ms (500) | consumers working through a task queue; reports whether it ended empty |
| `rtkit-active` | clients (10) | clients sending requests to one active calculator |

For example:

```
rtkit-loop-time 1000000
rtkit-counting 1000000 4 2 1 --grid
```

## What it does not do

- Timers run on background threads, not on operating-system signals; their
  callbacks therefore run on a separate thread, not interrupting the caller.
- Scheduling policies and priorities (`SchedPolicy`, `PosixThread.set_scheduling`)
  are applied only where the system allows it, usually Linux with sufficient
  privileges; otherwise they are recorded and silently not applied.
- Loop counts and timings reflect the Python interpreter, so calibration
  results are far lower than for compiled code and vary between runs.
- An `ActiveObject` serves requests for as long as the process lives; it has
  no stop method.
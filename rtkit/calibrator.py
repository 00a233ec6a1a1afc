"""Calibrating busy-loop counts against time, and loops of a given duration."""

from __future__ import annotations

import sys
from itertools import pairwise

from rtkit.looper import Looper
from rtkit.timers import PeriodicTimer
from rtkit.timespec import from_ms, now


class Calibrator(PeriodicTimer):
    """Fits ``loops = a * ms + b`` by sampling a busy loop periodically.

    Construction blocks for about ``sampling_period_ms * n_samples``.
    """

    def __init__(self, sampling_period_ms: float, n_samples: int) -> None:
        if n_samples < 2:
            raise ValueError(f"calibration needs at least 2 samples, got {n_samples}")
        if from_ms(sampling_period_ms).to_ms() <= 0:
            raise ValueError(
                f"sampling period must be at least 1 ms, got {sampling_period_ms}"
            )
        super().__init__()
        self._n_samples = n_samples
        self._samples: list[float] = []
        self._looper = Looper()
        self.start(sampling_period_ms)
        try:
            self._looper.run_loop()
        finally:
            self.stop()

        period = sampling_period_ms
        samples = self._samples[:n_samples]
        # a: mean slope between consecutive samples
        self.a = sum(later - earlier for earlier, later in pairwise(samples)) / (
            period * (n_samples - 1)
        )
        # b: mean intercept given that slope
        self.b = sum(
            sample - j * period * self.a for j, sample in enumerate(samples, start=1)
        ) / (period * n_samples)

    @property
    def samples(self) -> tuple[float, ...]:
        """The loop counts taken at each tick, the last one when stopping."""
        return tuple(self._samples)

    def n_loops(self, duration_ms: float) -> float:
        """The number of loops expected to run in ``duration_ms``."""
        return self.a * duration_ms + self.b

    def callback(self) -> None:
        if len(self._samples) < self._n_samples:
            sample = self._looper.get_sample()
        else:
            sample = self._looper.stop_loop()
            self.stop()
        self._samples.append(sample)


class CpuLoop(Looper):
    """A busy loop sized by a calibrator to last a given time."""

    def __init__(self, calibrator: Calibrator) -> None:
        super().__init__()
        self._calibrator = calibrator

    def runtime(self, duration_ms: float) -> float:
        """Loop for about ``duration_ms``; return the time it took, in ms."""
        n_loops = self._calibrator.n_loops(duration_ms)
        start = now()
        self.run_loop(n_loops)
        return (now() - start).to_ms()


def main(argv: list[str] | None = None) -> int:
    """Calibrate, then run loops sized for the given durations.

    Optional arguments: the sampling period in ms (1), the number of
    samples (1000), then durations in ms (4000 and 6000).
    """
    args = sys.argv[1:] if argv is None else list(argv)
    period_ms = float(args[0]) if args else 1.0
    n_samples = int(args[1]) if len(args) > 1 else 1000
    durations = [float(arg) for arg in args[2:]] or [4000.0, 6000.0]

    print("Calibration initiated", flush=True)
    calibrator = Calibrator(period_ms, n_samples)
    print(f"a = {calibrator.a:g}")
    print(f"b = {calibrator.b:g}")
    for duration_ms in durations:
        cpu_loop = CpuLoop(calibrator)
        print(f"Number of Loops = {calibrator.n_loops(duration_ms):g}", flush=True)
        practical_ms = cpu_loop.runtime(duration_ms)
        print(f"Theoretical time : {duration_ms:g} ms")
        print(f"Practical time : {practical_ms:g} ms", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
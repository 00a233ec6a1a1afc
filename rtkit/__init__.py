"""Real-time programming building blocks: time arithmetic, timers, loop calibration, threads, synchronisation and active objects."""

__version__ = "0.1.0"
[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtkit"
version = "0.1.0"
description = "Real-time programming toolkit: time arithmetic, timers, CPU loop calibration, threads, mutexes, semaphores, FIFOs and active objects"
requires-python = ">=3.10"
keywords = [
    "real-time",
    "timers",
    "threads",
    "mutex",
    "semaphore",
    "fifo",
    "active-object",
    "calibration",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rtkit-timer = "rtkit.posix_timer:main"
rtkit-loop-time = "rtkit.loops:main_time"
rtkit-loop-calibrate = "rtkit.loops:main_calibrate"
rtkit-counting = "rtkit.counting:main"
rtkit-countdown = "rtkit.timers:main"
rtkit-calibrator = "rtkit.calibrator:main"
rtkit-join = "rtkit.demos:main_join"
rtkit-mutex = "rtkit.demos:main_mutex"
rtkit-semaphore = "rtkit.demos:main_semaphore"
rtkit-fifo = "rtkit.demos:main_fifo"
rtkit-active = "rtkit.active:main"

[tool.hatch.build.targets.wheel]
packages = ["rtkit"]

[tool.pytest.ini_options]
addopts = "-ra"

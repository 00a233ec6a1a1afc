"""A busy loop that can be sampled and stopped from another thread."""

from __future__ import annotations

import math


class Looper:
    """Counts loop iterations; the count carries over between runs."""

    def __init__(self) -> None:
        self._do_stop = False
        self._i_loop = 0.0

    def run_loop(self, n_loops: float = math.inf) -> float:
        """Loop until the count reaches ``n_loops`` or the loop is stopped."""
        while not self._do_stop and self._i_loop < n_loops:
            self._i_loop += 1.0
        return self._i_loop

    def get_sample(self) -> float:
        """The current loop count."""
        return self._i_loop

    def stop_loop(self) -> float:
        """Ask the loop to stop and return the current count."""
        self._do_stop = True
        return self._i_loop
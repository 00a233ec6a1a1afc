"""An active object that serves calculation requests on its own thread."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod

from rtkit.fifo import Fifo
from rtkit.semaphore import Semaphore
from rtkit.thread import Thread
from rtkit.timespec import from_ms, now, wait


class Request(ABC):
    """A unit of work whose caller can wait until it has been executed."""

    def __init__(self) -> None:
        # The single token starts taken, so waiting blocks until execute gives it.
        self._return_sema = Semaphore(1, 1)

    @abstractmethod
    def execute(self) -> None:
        """Do the work, then release whoever waits on the result."""

    def _done(self) -> None:
        self._return_sema.give()

    def wait_return(self) -> None:
        """Block until the request has been executed."""
        self._return_sema.take()


class Calculator:
    """A slow calculation that returns its argument after ``delay_ms``."""

    def __init__(self, delay_ms: float = 500.0) -> None:
        self.delay_ms = delay_ms

    def crunch(self, param: float) -> float:
        wait(from_ms(self.delay_ms))
        return param


class CrunchReq(Request):
    """A request to run :meth:`Calculator.crunch` on one parameter."""

    def __init__(self, calc: Calculator, param: float) -> None:
        super().__init__()
        self.calc = calc
        self.param = param
        self.result: float | None = None

    def execute(self) -> None:
        self.result = self.calc.crunch(self.param)
        self._done()

    def wait_return(self) -> float:  # type: ignore[override]
        """Block until executed, then return the result."""
        super().wait_return()
        assert self.result is not None
        return self.result


class ActiveObject(Thread):
    """Executes queued requests one after another, for as long as it lives."""

    def __init__(self) -> None:
        super().__init__()
        self._requests: Fifo[Request] = Fifo()

    def _submit(self, request: Request) -> None:
        self._requests.push(request)

    def run(self) -> None:
        while True:
            self._requests.pop().execute()


class ActiveCalc(ActiveObject):
    """An active object whose requests are calculations."""

    def __init__(self, calc: Calculator | None = None) -> None:
        super().__init__()
        self.calc = calc if calc is not None else Calculator()

    def async_crunch(self, param: float) -> CrunchReq:
        """Queue a calculation of ``param`` and return its request."""
        request = CrunchReq(self.calc, param)
        self._submit(request)
        return request


class Client(Thread):
    """Requests a calculation, works 1500 ms, then waits for the result."""

    WORK_MS = 1500.0
    MAX_DURATION_MS = 5050.0

    def __init__(self, crunch_seed: float, acalc: ActiveCalc) -> None:
        super().__init__()
        self.crunch_seed = crunch_seed
        self.acalc = acalc
        self.result: float | None = None
        self.duration_ms: float | None = None

    def run(self) -> None:
        seed = self.crunch_seed
        print(f"Client {seed:g} started his job", flush=True)
        start = now()
        request = self.acalc.async_crunch(seed)
        wait(from_ms(self.WORK_MS))
        result = request.wait_return()
        duration_ms = (now() - start).to_ms()
        self.result, self.duration_ms = result, duration_ms
        if result == seed and duration_ms <= self.MAX_DURATION_MS:
            print(f"Client {seed:g} received the expected result in {duration_ms:g}")
        elif result != seed:
            print(
                f"Client {seed:g} received an unexpected result : {result:g} "
                f"in {duration_ms:g}"
            )
        else:
            print(
                f"Client {seed:g} received the expected result but waited too long : "
                f"{duration_ms:g}"
            )


def main(argv: list[str] | None = None) -> int:
    """Serve several clients with one active calculator and time the whole.

    The optional argument is the number of clients (10).
    """
    args = sys.argv[1:] if argv is None else list(argv)
    n_clients = int(args[0]) if args else 10
    acalc = ActiveCalc()
    clients = [Client(float(seed), acalc) for seed in range(n_clients)]

    start = now()
    acalc.start()
    for client in clients:
        client.start()
        wait(from_ms(1))
    for client in clients:
        client.join()
    duration_ms = (now() - start).to_ms()
    if duration_ms < 5100:
        print(f"All jobs have been processed within {duration_ms:g} ms.")
    else:
        print(f"Overall processing time exceeded 5100 ms : {duration_ms:g} ms.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
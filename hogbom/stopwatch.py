"""Wall-clock stopwatch used to time deconvolution runs."""

from __future__ import annotations

import time


class StopwatchError(RuntimeError):
    """Raised when the stopwatch is used out of order."""


class Stopwatch:
    """Measures elapsed wall-clock time in seconds between start and stop."""

    def __init__(self) -> None:
        self._start: float | None = None
        self.elapsed: float | None = None

    def start(self) -> None:
        """Record the starting instant."""
        self._start = time.monotonic()

    def stop(self) -> float:
        """Return the seconds elapsed since :meth:`start`."""
        now = time.monotonic()
        if self._start is None:
            raise StopwatchError("Start time not set")
        self.elapsed = now - self._start
        return self.elapsed

    def __enter__(self) -> Stopwatch:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
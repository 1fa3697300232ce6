"""Simulated clock and countdown timer with nanosecond ticks."""

from __future__ import annotations

import threading
from datetime import timedelta

from halmock.eh0.error import WouldBlock


def _to_nanoseconds(value: int | timedelta) -> int:
    if isinstance(value, timedelta):
        ns = (value // timedelta(microseconds=1)) * 1000
    elif isinstance(value, int) and not isinstance(value, bool):
        ns = value
    else:
        raise TypeError(f"expected nanoseconds or a timedelta, got {value!r}")
    if ns < 0:
        raise ValueError(f"duration must not be negative, got {value!r}")
    return ns


class MockClock:
    """A clock that only moves when told to; thread safe."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ticks = 0

    def now(self) -> int:
        """Return the current instant in nanoseconds since creation."""
        with self._lock:
            return self._ticks

    def elapsed(self) -> int:
        """Return the number of elapsed nanoseconds."""
        return self.now()

    def tick(self, ticks: int | timedelta) -> None:
        """Move the clock forward by nanoseconds or a ``timedelta``."""
        ns = _to_nanoseconds(ticks)
        with self._lock:
            self._ticks += ns

    def get_timer(self) -> MockTimer:
        """Return a new timer driven by this clock."""
        return MockTimer(self)


class MockTimer:
    """A periodic countdown timer driven by a :class:`MockClock`."""

    def __init__(self, clock: MockClock) -> None:
        self._clock = clock
        self._duration = 1
        self._expiration = clock.now()
        self._started = False

    def start(self, count: int | timedelta) -> None:
        """Start counting down ``count`` (nanoseconds or a ``timedelta``)."""
        self._duration = _to_nanoseconds(count)
        self._expiration = self._clock.now() + self._duration
        self._started = True

    def wait(self) -> None:
        """Return once the period has run out, else raise :class:`WouldBlock`.

        On success the next period starts from the current instant.
        """
        now = self._clock.now()
        if self._started and now >= self._expiration:
            self._expiration = now + self._duration
            return
        raise WouldBlock()

    def cancel(self) -> None:
        """Stop the timer."""
        self._started = False
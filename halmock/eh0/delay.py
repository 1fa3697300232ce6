"""Delay providers: one that returns at once and one that really sleeps."""

from __future__ import annotations

import time


def _check(n: int) -> int:
    if n < 0:
        raise ValueError(f"delay must not be negative, got {n}")
    return n


class NoopDelay:
    """A delay that does not block."""

    def delay_us(self, n: int) -> None:
        """Return at once instead of waiting ``n`` microseconds."""
        _check(n)

    def delay_ms(self, n: int) -> None:
        """Return at once instead of waiting ``n`` milliseconds."""
        _check(n)


class StdSleep:
    """A delay that puts the current thread to sleep."""

    def delay_us(self, n: int) -> None:
        """Sleep for ``n`` microseconds."""
        time.sleep(_check(n) / 1_000_000)

    def delay_ms(self, n: int) -> None:
        """Sleep for ``n`` milliseconds."""
        time.sleep(_check(n) / 1_000)
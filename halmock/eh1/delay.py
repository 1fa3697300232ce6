"""Delay providers, blocking and async, including one that checks its calls.

:class:`NoopDelay` returns at once, :class:`StdSleep` really waits, and
:class:`CheckedDelay` checks every call against a list of expected delays,
waiting only where a transaction asks for it with :meth:`Transaction.wait`.
The ``adelay_*`` methods are the async counterparts of the ``delay_*`` ones.
"""

from __future__ import annotations

import asyncio
import enum
import time
from dataclasses import dataclass, replace

from halmock.common import ExpectationError, Generic

NANOS_PER_US = 1_000
NANOS_PER_MS = 1_000_000
_U32_MAX = 0xFFFF_FFFF


def _u32(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{name} must be between 0 and {_U32_MAX}, got {value}")
    return value


class TransactionKind(enum.Enum):
    """Kind of delay a transaction expects."""

    DELAY_NS = "DelayNs"
    """Any delay, blocking or async."""
    BLOCKING_DELAY_NS = "BlockingDelayNs"
    """A blocking delay only."""
    ASYNC_DELAY_NS = "AsyncDelayNs"
    """An async delay only."""


@dataclass(frozen=True)
class Transaction:
    """An expected delay in nanoseconds, optionally really waited for."""

    kind: TransactionKind
    ns: int
    real_delay: bool = False

    def __str__(self) -> str:
        return f"{self.kind.value}({self.ns})"

    @classmethod
    def delay_ns(cls, ns: int) -> Transaction:
        """Expect a delay of ``ns`` nanoseconds, blocking or async."""
        return cls(TransactionKind.DELAY_NS, _u32(ns, "ns"))

    @classmethod
    def delay_us(cls, us: int) -> Transaction:
        """Expect a delay of ``us`` microseconds, blocking or async."""
        return cls(TransactionKind.DELAY_NS, _u32(us, "us") * NANOS_PER_US)

    @classmethod
    def delay_ms(cls, ms: int) -> Transaction:
        """Expect a delay of ``ms`` milliseconds, blocking or async."""
        return cls(TransactionKind.DELAY_NS, _u32(ms, "ms") * NANOS_PER_MS)

    @classmethod
    def blocking_delay_ns(cls, ns: int) -> Transaction:
        """Expect a blocking delay of ``ns`` nanoseconds."""
        return cls(TransactionKind.BLOCKING_DELAY_NS, _u32(ns, "ns"))

    @classmethod
    def blocking_delay_us(cls, us: int) -> Transaction:
        """Expect a blocking delay of ``us`` microseconds."""
        return cls(TransactionKind.BLOCKING_DELAY_NS, _u32(us, "us") * NANOS_PER_US)

    @classmethod
    def blocking_delay_ms(cls, ms: int) -> Transaction:
        """Expect a blocking delay of ``ms`` milliseconds."""
        return cls(TransactionKind.BLOCKING_DELAY_NS, _u32(ms, "ms") * NANOS_PER_MS)

    @classmethod
    def async_delay_ns(cls, ns: int) -> Transaction:
        """Expect an async delay of ``ns`` nanoseconds."""
        return cls(TransactionKind.ASYNC_DELAY_NS, _u32(ns, "ns"))

    @classmethod
    def async_delay_us(cls, us: int) -> Transaction:
        """Expect an async delay of ``us`` microseconds."""
        return cls(TransactionKind.ASYNC_DELAY_NS, _u32(us, "us") * NANOS_PER_US)

    @classmethod
    def async_delay_ms(cls, ms: int) -> Transaction:
        """Expect an async delay of ``ms`` milliseconds."""
        return cls(TransactionKind.ASYNC_DELAY_NS, _u32(ms, "ms") * NANOS_PER_MS)

    def wait(self) -> Transaction:
        """Return a copy of this transaction that really waits."""
        return replace(self, real_delay=True)


_BLOCKING_KINDS = (TransactionKind.DELAY_NS, TransactionKind.BLOCKING_DELAY_NS)
_ASYNC_KINDS = (TransactionKind.DELAY_NS, TransactionKind.ASYNC_DELAY_NS)


class CheckedDelay(Generic[Transaction]):
    """Delay mock that checks every call against its expected transactions."""

    def _check(
        self, ns: int, blocking: bool, mismatch_message: str = "wrong delay value"
    ) -> Transaction:
        transaction = self._pop("no expectation for delay call")
        allowed = _BLOCKING_KINDS if blocking else _ASYNC_KINDS
        if transaction.kind not in allowed:
            other = "BlockingDelayNs" if blocking else "AsyncDelayNs"
            raise ExpectationError(
                f"Wrong kind of delay. Expected DelayNs or {other} got {transaction}"
            )
        if transaction.ns != ns:
            raise ExpectationError(
                f"{mismatch_message}: expected {transaction.ns} ns, got {ns} ns"
            )
        return transaction

    def delay_ns(self, ns: int) -> None:
        """Block for ``ns`` nanoseconds, as the next expectation allows."""
        ns = _u32(ns, "ns")
        if self._check(ns, True).real_delay:
            time.sleep(ns / 1e9)

    def delay_us(self, us: int) -> None:
        """Block for ``us`` microseconds, as the next expectation allows."""
        us = _u32(us, "us")
        if self._check(us * NANOS_PER_US, True).real_delay:
            time.sleep(us / 1e6)

    def delay_ms(self, ms: int) -> None:
        """Block for ``ms`` milliseconds, as the next expectation allows."""
        ms = _u32(ms, "ms")
        if self._check(ms * NANOS_PER_MS, True).real_delay:
            time.sleep(ms / 1e3)

    async def adelay_ns(self, ns: int) -> None:
        """Wait asynchronously for ``ns`` nanoseconds, as expected."""
        ns = _u32(ns, "ns")
        if self._check(ns, False, "delay unexpected value").real_delay:
            await asyncio.sleep(ns / 1e9)

    async def adelay_us(self, us: int) -> None:
        """Wait asynchronously for ``us`` microseconds, as expected."""
        us = _u32(us, "us")
        if self._check(us * NANOS_PER_US, False).real_delay:
            await asyncio.sleep(us / 1e6)

    async def adelay_ms(self, ms: int) -> None:
        """Wait asynchronously for ``ms`` milliseconds, as expected."""
        ms = _u32(ms, "ms")
        if self._check(ms * NANOS_PER_MS, False).real_delay:
            await asyncio.sleep(ms / 1e3)


class NoopDelay:
    """A delay that returns at once."""

    def delay_ns(self, ns: int) -> None:
        """Return at once instead of waiting ``ns`` nanoseconds."""
        _u32(ns, "ns")

    def delay_us(self, us: int) -> None:
        """Return at once instead of waiting ``us`` microseconds."""
        _u32(us, "us")

    def delay_ms(self, ms: int) -> None:
        """Return at once instead of waiting ``ms`` milliseconds."""
        _u32(ms, "ms")

    async def adelay_ns(self, ns: int) -> None:
        """Return at once instead of waiting ``ns`` nanoseconds."""
        _u32(ns, "ns")

    async def adelay_us(self, us: int) -> None:
        """Return at once instead of waiting ``us`` microseconds."""
        _u32(us, "us")

    async def adelay_ms(self, ms: int) -> None:
        """Return at once instead of waiting ``ms`` milliseconds."""
        _u32(ms, "ms")


class StdSleep:
    """A delay that really waits."""

    def delay_ns(self, ns: int) -> None:
        """Sleep for ``ns`` nanoseconds."""
        time.sleep(_u32(ns, "ns") / 1e9)

    def delay_us(self, us: int) -> None:
        """Sleep for ``us`` microseconds."""
        time.sleep(_u32(us, "us") / 1e6)

    def delay_ms(self, ms: int) -> None:
        """Sleep for ``ms`` milliseconds."""
        time.sleep(_u32(ms, "ms") / 1e3)

    async def adelay_ns(self, ns: int) -> None:
        """Wait asynchronously for ``ns`` nanoseconds."""
        await asyncio.sleep(_u32(ns, "ns") / 1e9)

    async def adelay_us(self, us: int) -> None:
        """Wait asynchronously for ``us`` microseconds."""
        await asyncio.sleep(_u32(us, "us") / 1e6)

    async def adelay_ms(self, ms: int) -> None:
        """Wait asynchronously for ``ms`` milliseconds."""
        await asyncio.sleep(_u32(ms, "ms") / 1e3)
"""Mock analog-to-digital converter with one-shot reads."""

from __future__ import annotations

import typing
from dataclasses import dataclass, replace

from halmock.common import ExpectationError, Generic
from halmock.eh0.error import MockError

T = typing.TypeVar("T")


@dataclass(frozen=True)
class Transaction(typing.Generic[T]):
    """An expected ADC read on a channel and the value it returns."""

    expected_chan: int
    response: T
    err: MockError | None = None

    @classmethod
    def read(cls, chan: int, resp: T) -> Transaction[T]:
        """Expect a read on ``chan`` that returns ``resp``."""
        return cls(chan, resp)

    def with_error(self, error: MockError) -> Transaction[T]:
        """Return a copy of this transaction that fails with ``error``."""
        return replace(self, err=error)


class MockChan0:
    """Mock ADC channel 0."""

    channel = 0


class MockChan1:
    """Mock ADC channel 1."""

    channel = 1


class MockChan2:
    """Mock ADC channel 2."""

    channel = 2


class Mock(Generic[Transaction]):
    """Mock ADC that answers reads from its expectations."""

    def read(self, pin) -> typing.Any:
        """Read from ``pin`` (a channel class or instance)."""
        transaction = self._pop("unexpected read call")
        if transaction.expected_chan != pin.channel:
            raise ExpectationError(
                f"unexpected channel: expected {transaction.expected_chan}, "
                f"got {pin.channel}"
            )
        if transaction.err is not None:
            raise transaction.err
        return transaction.response
"""Mock digital input, output, toggleable and PWM pins."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any

from halmock.common import ExpectationError, Generic
from halmock.eh0.error import MockError


class State(enum.Enum):
    """Digital pin level."""

    LOW = "Low"
    HIGH = "High"


class TransactionKind(enum.Enum):
    """Kind of pin operation a transaction expects."""

    SET = "Set"
    GET = "Get"
    TOGGLE = "Toggle"
    DISABLE = "Disable"
    ENABLE = "Enable"
    GET_DUTY = "GetDuty"
    GET_MAX_DUTY = "GetMaxDuty"
    SET_DUTY = "SetDuty"

    @property
    def supports_errors(self) -> bool:
        """Whether the matching pin operation can report an error."""
        return self in (TransactionKind.SET, TransactionKind.GET, TransactionKind.TOGGLE)


@dataclass(frozen=True)
class Transaction:
    """An expected pin operation, its value and an optional error."""

    kind: TransactionKind
    value: Any = None
    err: MockError | None = None

    @classmethod
    def get(cls, state: State) -> Transaction:
        """Expect a read of the pin level, answering ``state``."""
        return cls(TransactionKind.GET, state)

    @classmethod
    def toggle(cls) -> Transaction:
        """Expect the pin to be toggled."""
        return cls(TransactionKind.TOGGLE)

    @classmethod
    def set(cls, state: State) -> Transaction:
        """Expect the pin to be driven to ``state``."""
        return cls(TransactionKind.SET, state)

    @classmethod
    def disable(cls) -> Transaction:
        """Expect the PWM pin to be disabled."""
        return cls(TransactionKind.DISABLE)

    @classmethod
    def enable(cls) -> Transaction:
        """Expect the PWM pin to be enabled."""
        return cls(TransactionKind.ENABLE)

    @classmethod
    def get_duty(cls, duty: int) -> Transaction:
        """Expect a duty query, answering ``duty``."""
        return cls(TransactionKind.GET_DUTY, duty)

    @classmethod
    def get_max_duty(cls, max_duty: int) -> Transaction:
        """Expect a maximum duty query, answering ``max_duty``."""
        return cls(TransactionKind.GET_MAX_DUTY, max_duty)

    @classmethod
    def set_duty(cls, expected_duty: int) -> Transaction:
        """Expect the duty to be set to ``expected_duty``."""
        return cls(TransactionKind.SET_DUTY, expected_duty)

    def with_error(self, error: MockError) -> Transaction:
        """Return a copy that fails with ``error``; only for operations that can fail."""
        if not self.kind.supports_errors:
            raise ExpectationError("the transaction kind supports errors")
        return replace(self, err=error)


class Mock(Generic[Transaction]):
    """Mock pin that checks each operation against its expectations."""

    def _expect_set(self, state: State, name: str) -> None:
        transaction = self._pop(f"no expectation for pin::{name} call")
        if (transaction.kind, transaction.value) != (TransactionKind.SET, state):
            raise ExpectationError(f"expected pin::{name}, got {transaction!r}")
        if transaction.err is not None:
            raise transaction.err

    def _read_level(self, name: str) -> State:
        transaction = self._pop(f"no expectation for pin::{name} call")
        if transaction.kind is not TransactionKind.GET:
            raise ExpectationError(f"expected pin::get, got {transaction!r}")
        if transaction.err is not None:
            raise transaction.err
        return transaction.value

    def _expect_plain(self, kind: TransactionKind, name: str) -> Transaction:
        transaction = self._pop(f"no expectation for pin::{name} call")
        if transaction.kind is not kind:
            raise ExpectationError(f"expected pin::{name}, got {transaction!r}")
        return transaction

    def set_low(self) -> None:
        """Drive the pin low."""
        self._expect_set(State.LOW, "set_low")

    def set_high(self) -> None:
        """Drive the pin high."""
        self._expect_set(State.HIGH, "set_high")

    def is_high(self) -> bool:
        """Return whether the pin reads high."""
        return self._read_level("is_high") is State.HIGH

    def is_low(self) -> bool:
        """Return whether the pin reads low."""
        return self._read_level("is_low") is State.LOW

    def toggle(self) -> None:
        """Toggle the pin level."""
        transaction = self._expect_plain(TransactionKind.TOGGLE, "toggle")
        if transaction.err is not None:
            raise transaction.err

    def disable(self) -> None:
        """Disable the PWM output."""
        self._expect_plain(TransactionKind.DISABLE, "disable")

    def enable(self) -> None:
        """Enable the PWM output."""
        self._expect_plain(TransactionKind.ENABLE, "enable")

    def get_duty(self) -> int:
        """Return the current duty."""
        return self._expect_plain(TransactionKind.GET_DUTY, "get_duty").value

    def get_max_duty(self) -> int:
        """Return the maximum duty."""
        return self._expect_plain(TransactionKind.GET_MAX_DUTY, "get_max_duty").value

    def set_duty(self, duty: int) -> None:
        """Set the duty."""
        transaction = self._pop("no expectation for pin::set_duty call")
        if (transaction.kind, transaction.value) != (TransactionKind.SET_DUTY, duty):
            raise ExpectationError(f"expected pin::set_duty, got {transaction!r}")
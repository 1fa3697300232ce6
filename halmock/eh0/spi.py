"""Mock SPI bus with write, transfer and full-duplex word operations."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from halmock.common import ExpectationError, Generic


class Mode(enum.Enum):
    """Kind of SPI operation a transaction expects."""

    WRITE = "Write"
    TRANSFER = "Transfer"
    SEND = "Send"
    READ = "Read"


@dataclass(frozen=True)
class Transaction:
    """An expected SPI operation with the data written and the response."""

    expected_mode: Mode
    expected_data: bytes = b""
    response: bytes = b""

    @classmethod
    def write(cls, expected: Iterable[int]) -> Transaction:
        """Expect a write of ``expected``."""
        return cls(Mode.WRITE, bytes(expected))

    @classmethod
    def transfer(cls, expected: Iterable[int], response: Iterable[int]) -> Transaction:
        """Expect a transfer writing ``expected`` and answering ``response``."""
        return cls(Mode.TRANSFER, bytes(expected), bytes(response))

    @classmethod
    def send(cls, expected: int) -> Transaction:
        """Expect a single word to be sent."""
        return cls(Mode.SEND, bytes([expected]))

    @classmethod
    def read(cls, response: int) -> Transaction:
        """Expect a single word to be read, answering ``response``."""
        return cls(Mode.READ, b"", bytes([response]))


class Mock(Generic[Transaction]):
    """Mock SPI bus that checks each operation against its expectations."""

    def _next(self, mode: Mode, name: str, label: str | None = None) -> Transaction:
        transaction = self._pop(f"no expectation for spi::{name} call")
        if transaction.expected_mode is not mode:
            raise ExpectationError(
                f"spi::{label or name} unexpected mode: expected "
                f"{transaction.expected_mode.value}, got {mode.value}"
            )
        return transaction

    @staticmethod
    def _check_data(transaction: Transaction, data: bytes, what: str) -> None:
        if transaction.expected_data != data:
            raise ExpectationError(
                f"{what} does not match expectation: expected "
                f"{list(transaction.expected_data)}, got {list(data)}"
            )

    def write(self, data: Iterable[int]) -> None:
        """Write ``data`` to the bus."""
        transaction = self._next(Mode.WRITE, "write")
        self._check_data(transaction, bytes(data), "spi::write data")

    def send(self, word: int) -> None:
        """Send a single word."""
        transaction = self._next(Mode.SEND, "send")
        if transaction.expected_data[0] != word:
            raise ExpectationError(
                f"spi::send data does not match expectation: expected "
                f"{transaction.expected_data[0]}, got {word}"
            )

    def read(self) -> int:
        """Read a single word."""
        transaction = self._next(Mode.READ, "read", "Read")
        if len(transaction.response) != 1:
            raise ExpectationError("mismatched response length for spi::read")
        return transaction.response[0]

    def transfer(self, data: Iterable[int]) -> bytes:
        """Write ``data`` and return the bytes clocked in at the same time."""
        sent = bytes(data)
        transaction = self._next(Mode.TRANSFER, "transfer")
        self._check_data(transaction, sent, "spi::transfer write data")
        if len(sent) != len(transaction.response):
            raise ExpectationError("mismatched response length for spi::transfer")
        return transaction.response

    def write_iter(self, words: Iterable[int]) -> None:
        """Write every word produced by ``words``."""
        transaction = self._pop("no expectation for spi::write_iter call")
        data = bytes(words)
        if transaction.expected_mode is not Mode.WRITE:
            raise ExpectationError("spi::write_iter unexpected mode")
        self._check_data(transaction, data, "spi::write_iter data")
"""Mock I²C bus with read, write and combined write-read operations."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, replace

from halmock.common import ExpectationError, Generic
from halmock.eh0.error import MockError


class Mode(enum.Enum):
    """Kind of I²C operation a transaction expects."""

    WRITE = "Write"
    READ = "Read"
    WRITE_READ = "WriteRead"


@dataclass(frozen=True)
class Transaction:
    """An expected I²C operation on an address, its data and its response.

    An attached error is raised only after the mode, address and written
    data have been checked.
    """

    expected_mode: Mode
    expected_addr: int
    expected_data: bytes = b""
    response_data: bytes = b""
    expected_err: MockError | None = None

    @classmethod
    def write(cls, addr: int, expected: Iterable[int]) -> Transaction:
        """Expect a write of ``expected`` to ``addr``."""
        return cls(Mode.WRITE, addr, bytes(expected))

    @classmethod
    def read(cls, addr: int, response: Iterable[int]) -> Transaction:
        """Expect a read from ``addr``, answering ``response``."""
        return cls(Mode.READ, addr, b"", bytes(response))

    @classmethod
    def write_read(
        cls, addr: int, expected: Iterable[int], response: Iterable[int]
    ) -> Transaction:
        """Expect a write of ``expected`` then a read answering ``response``."""
        return cls(Mode.WRITE_READ, addr, bytes(expected), bytes(response))

    def with_error(self, error: MockError) -> Transaction:
        """Return a copy of this transaction that fails with ``error``.

        On a read the response is then not returned.
        """
        return replace(self, expected_err=error)


class Mock(Generic[Transaction]):
    """Mock I²C bus that checks each operation against its expectations."""

    def _next(self, mode: Mode, address: int, name: str) -> Transaction:
        transaction = self._pop(f"no pending expectation for i2c::{name} call")
        if transaction.expected_mode is not mode:
            raise ExpectationError(
                f"i2c::{name} unexpected mode: expected "
                f"{transaction.expected_mode.value}, got {mode.value}"
            )
        if transaction.expected_addr != address:
            raise ExpectationError(
                f"i2c::{name} address mismatch: expected "
                f"{transaction.expected_addr:#04x}, got {address:#04x}"
            )
        return transaction

    @staticmethod
    def _check_data(transaction: Transaction, data: bytes, what: str) -> None:
        if transaction.expected_data != data:
            raise ExpectationError(
                f"{what} does not match expectation: expected "
                f"{list(transaction.expected_data)}, got {list(data)}"
            )

    @staticmethod
    def _respond(transaction: Transaction, length: int, what: str) -> bytes:
        if length != len(transaction.response_data):
            raise ExpectationError(
                f"{what} mismatched response length: expected "
                f"{len(transaction.response_data)}, got {length}"
            )
        if transaction.expected_err is not None:
            raise transaction.expected_err
        return transaction.response_data

    def read(self, address: int, length: int) -> bytes:
        """Read ``length`` bytes from ``address``."""
        transaction = self._next(Mode.READ, address, "read")
        return self._respond(transaction, length, "i2c:read")

    def write(self, address: int, data: Iterable[int]) -> None:
        """Write ``data`` to ``address``."""
        sent = bytes(data)
        transaction = self._next(Mode.WRITE, address, "write")
        self._check_data(transaction, sent, "i2c::write data")
        if transaction.expected_err is not None:
            raise transaction.expected_err

    def write_read(self, address: int, data: Iterable[int], length: int) -> bytes:
        """Write ``data`` to ``address``, then read ``length`` bytes."""
        sent = bytes(data)
        transaction = self._next(Mode.WRITE_READ, address, "write_read")
        self._check_data(transaction, sent, "i2c::write_read write data")
        return self._respond(transaction, length, "i2c::write_read")

    def write_iter(self, address: int, data: Iterable[int]) -> None:
        """Write every byte produced by ``data`` to ``address``."""
        self.write(address, bytes(data))

    def write_iter_read(
        self, address: int, data: Iterable[int], length: int
    ) -> bytes:
        """Write every byte produced by ``data``, then read ``length`` bytes."""
        return self.write_read(address, bytes(data), length)
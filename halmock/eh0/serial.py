"""Mock serial device with word reads, writes and flushes.

One mock serves both the non-blocking operations (``read``, ``write``,
``flush``) and the blocking ones (``bwrite_all``, ``bflush``). The blocking
operations are built on the non-blocking ones and retry while those raise
:class:`~halmock.eh0.error.WouldBlock`.
"""

from __future__ import annotations

import copy
import enum
import threading
import typing
import warnings
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from halmock.common import DoneCallDetector, ExpectationError
from halmock.eh0.error import MockError, WouldBlock

Word = typing.TypeVar("Word")

SerialError = typing.Union[MockError, WouldBlock]


class _Kind(enum.Enum):
    READ = "Read"
    READ_ERROR = "ReadError"
    WRITE = "Write"
    WRITE_ERROR = "WriteError"
    FLUSH = "Flush"
    FLUSH_ERROR = "FlushError"


@dataclass(frozen=True)
class _Mode:
    kind: _Kind
    word: typing.Any = None
    error: SerialError | None = None

    def __str__(self) -> str:
        if self.kind is _Kind.FLUSH:
            return "Flush"
        if self.kind in (_Kind.READ, _Kind.WRITE):
            return f"{self.kind.value}({self.word!r})"
        if self.kind is _Kind.WRITE_ERROR:
            return f"WriteError({self.word!r}, {self.error!r})"
        return f"{self.kind.value}({self.error!r})"


def _check_error(error: SerialError) -> SerialError:
    if not isinstance(error, (MockError, WouldBlock)):
        raise TypeError(f"expected a MockError or WouldBlock, got {error!r}")
    return error


@dataclass(frozen=True)
class Transaction(typing.Generic[Word]):
    """A group of expected serial operations: reads, writes or a flush."""

    modes: tuple[_Mode, ...]

    @classmethod
    def read(cls, word: Word) -> Transaction[Word]:
        """Expect a read that returns ``word``."""
        return cls((_Mode(_Kind.READ, word),))

    @classmethod
    def read_many(cls, words: Iterable[Word]) -> Transaction[Word]:
        """Expect one read for each of ``words``, returning them in order."""
        return cls(tuple(_Mode(_Kind.READ, word) for word in words))

    @classmethod
    def read_error(cls, error: SerialError) -> Transaction[Word]:
        """Expect a read that fails with ``error``."""
        return cls((_Mode(_Kind.READ_ERROR, error=_check_error(error)),))

    @classmethod
    def write(cls, word: Word) -> Transaction[Word]:
        """Expect a write of ``word``."""
        return cls((_Mode(_Kind.WRITE, word),))

    @classmethod
    def write_many(cls, words: Iterable[Word]) -> Transaction[Word]:
        """Expect one write for each of ``words``, in order."""
        return cls(tuple(_Mode(_Kind.WRITE, word) for word in words))

    @classmethod
    def write_error(cls, word: Word, error: SerialError) -> Transaction[Word]:
        """Expect a write of ``word`` that then fails with ``error``."""
        return cls((_Mode(_Kind.WRITE_ERROR, word, _check_error(error)),))

    @classmethod
    def flush(cls) -> Transaction[Word]:
        """Expect a flush."""
        return cls((_Mode(_Kind.FLUSH),))

    @classmethod
    def flush_error(cls, error: SerialError) -> Transaction[Word]:
        """Expect a flush that fails with ``error``."""
        return cls((_Mode(_Kind.FLUSH_ERROR, error=_check_error(error)),))


class Mock(typing.Generic[Word]):
    """Mock serial device that checks each operation against its expectations.

    Clones made with :meth:`clone` share the expectations.
    """

    def __init__(self, transactions: Iterable[Transaction[Word]] = ()) -> None:
        self._lock = threading.Lock()
        self._expected: deque[_Mode] = deque()
        self._done_called = DoneCallDetector()
        self.update_expectations(transactions)

    def update_expectations(self, transactions: Iterable[Transaction[Word]]) -> None:
        """Check that the current expectations are consumed, then replace them."""
        self._done_impl(False)
        modes = [mode for transaction in transactions for mode in transaction.modes]
        with self._lock:
            self._expected.clear()
            self._expected.extend(modes)
            self._done_called.reset()

    def expect(self, transactions: Iterable[Transaction[Word]]) -> None:
        """Deprecated alias of :meth:`update_expectations`."""
        warnings.warn(
            "The method 'expect' was renamed to 'update_expectations'",
            DeprecationWarning,
            stacklevel=2,
        )
        self.update_expectations(transactions)

    def done(self) -> None:
        """Assert that every expectation has been consumed."""
        self._done_impl(True)

    def clone(self) -> Mock[Word]:
        """Return a handle that shares this mock's expectations."""
        return copy.copy(self)

    def _done_impl(self, panic_if_already_done: bool) -> None:
        with self._lock:
            self._done_called.mark_as_called(panic_if_already_done)
            if self._expected:
                raise ExpectationError(
                    "serial mock has unsatisfied expectations after call to done"
                )

    def _pop(self, message: str) -> _Mode:
        with self._lock:
            if not self._expected:
                raise ExpectationError(message)
            return self._expected.popleft()

    def read(self) -> Word:
        """Read one word."""
        mode = self._pop("called serial::read with no expectation")
        if mode.kind is _Kind.READ:
            return mode.word
        if mode.kind is _Kind.READ_ERROR:
            raise mode.error
        raise ExpectationError(
            f"expected to perform a serial transaction '{mode}', "
            "but instead did a read"
        )

    def write(self, word: Word) -> None:
        """Write one word."""
        mode = self._pop("called serial::write with no expectation")
        if mode.kind not in (_Kind.WRITE, _Kind.WRITE_ERROR):
            raise ExpectationError(
                f"expected to perform a serial transaction '{mode}' "
                f"but instead did a write of {word!r}"
            )
        if mode.word != word:
            raise ExpectationError(
                f"serial::write expected to write {mode.word!r} "
                f"but actually wrote {word!r}"
            )
        if mode.error is not None:
            raise mode.error

    def flush(self) -> None:
        """Flush the output."""
        mode = self._pop("called serial::flush with no expectation")
        if mode.kind is _Kind.FLUSH:
            return
        if mode.kind is _Kind.FLUSH_ERROR:
            raise mode.error
        raise ExpectationError(
            f"expected to perform a serial transaction '{mode}' "
            "but instead did a flush"
        )

    def bwrite_all(self, words: Iterable[Word]) -> None:
        """Write every word, retrying each while the write would block."""
        for word in words:
            while True:
                try:
                    self.write(word)
                except WouldBlock:
                    continue
                break

    def bflush(self) -> None:
        """Flush, retrying while the flush would block."""
        while True:
            try:
                self.flush()
            except WouldBlock:
                continue
            return
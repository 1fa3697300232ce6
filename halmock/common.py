"""Expectation queue shared by the mock devices."""

from __future__ import annotations

import copy
import sys
import threading
import typing
import warnings
from collections import deque
from collections.abc import Iterable

T = typing.TypeVar("T")

_DROPPED_WITHOUT_DONE = (
    "WARNING: A mock was dropped without calling the `.done()` method."
)


class ExpectationError(AssertionError):
    """Raised when a mock is used in a way its expectations do not allow."""


class DoneCallDetector:
    """Tracks whether ``done()`` was called on a mock before it went away."""

    def __init__(self) -> None:
        self.called = False

    def mark_as_called(self, panic_if_already_done: bool) -> None:
        """Record a ``done()`` call, failing on a second one if asked to."""
        if panic_if_already_done and self.called:
            raise ExpectationError("The `.done()` method was called twice!")
        self.called = True

    def reset(self) -> None:
        """Forget any earlier ``done()`` call."""
        self.called = False

    def __del__(self) -> None:
        if not getattr(self, "called", True) and not sys.is_finalizing():
            warnings.warn(_DROPPED_WITHOUT_DONE, ResourceWarning, stacklevel=2)


class Generic(typing.Generic[T]):
    """A queue of expected transactions consumed in order by a mock.

    Clones made with :meth:`clone` share the queue, so a clone kept by the
    test can check expectations on a mock handed to a driver.
    """

    def __init__(self, expected: Iterable[T] = ()) -> None:
        self._lock = threading.Lock()
        self._expected: deque[T] = deque()
        self._done_called = DoneCallDetector()
        self.update_expectations(expected)

    def update_expectations(self, expected: Iterable[T]) -> None:
        """Check that the current expectations are consumed, then replace them."""
        self._done_impl(False)
        new_expectations = list(expected)
        with self._lock:
            self._expected.clear()
            self._expected.extend(new_expectations)
            self._done_called.reset()

    def expect(self, expected: Iterable[T]) -> None:
        """Deprecated alias of :meth:`update_expectations`."""
        warnings.warn(
            "The method 'expect' was renamed to 'update_expectations'",
            DeprecationWarning,
            stacklevel=2,
        )
        self.update_expectations(expected)

    def done(self) -> None:
        """Assert that every expectation has been consumed."""
        self._done_impl(True)

    def clone(self):
        """Return a handle that shares this mock's expectations."""
        return copy.copy(self)

    def _done_impl(self, panic_if_already_done: bool) -> None:
        with self._lock:
            self._done_called.mark_as_called(panic_if_already_done)
            if self._expected:
                raise ExpectationError("Not all expectations consumed")

    def _pop(self, message: str) -> T:
        try:
            return next(self)
        except StopIteration:
            raise ExpectationError(message) from None

    def __iter__(self):
        return self

    def __next__(self) -> T:
        with self._lock:
            if not self._expected:
                raise StopIteration
            return self._expected.popleft()
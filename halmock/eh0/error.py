"""Errors returned by the mock devices."""

from __future__ import annotations

import errno
import enum


class ErrorKind(enum.Enum):
    """Category of an I/O error."""

    NOT_FOUND = "NotFound"
    PERMISSION_DENIED = "PermissionDenied"
    CONNECTION_REFUSED = "ConnectionRefused"
    CONNECTION_RESET = "ConnectionReset"
    CONNECTION_ABORTED = "ConnectionAborted"
    NOT_CONNECTED = "NotConnected"
    ADDR_IN_USE = "AddrInUse"
    ADDR_NOT_AVAILABLE = "AddrNotAvailable"
    BROKEN_PIPE = "BrokenPipe"
    ALREADY_EXISTS = "AlreadyExists"
    WOULD_BLOCK = "WouldBlock"
    INVALID_INPUT = "InvalidInput"
    INVALID_DATA = "InvalidData"
    TIMED_OUT = "TimedOut"
    WRITE_ZERO = "WriteZero"
    INTERRUPTED = "Interrupted"
    UNSUPPORTED = "Unsupported"
    UNEXPECTED_EOF = "UnexpectedEof"
    OUT_OF_MEMORY = "OutOfMemory"
    OTHER = "Other"


_BY_EXCEPTION: tuple[tuple[type[OSError], ErrorKind], ...] = (
    (FileNotFoundError, ErrorKind.NOT_FOUND),
    (PermissionError, ErrorKind.PERMISSION_DENIED),
    (ConnectionRefusedError, ErrorKind.CONNECTION_REFUSED),
    (ConnectionResetError, ErrorKind.CONNECTION_RESET),
    (ConnectionAbortedError, ErrorKind.CONNECTION_ABORTED),
    (BrokenPipeError, ErrorKind.BROKEN_PIPE),
    (FileExistsError, ErrorKind.ALREADY_EXISTS),
    (BlockingIOError, ErrorKind.WOULD_BLOCK),
    (TimeoutError, ErrorKind.TIMED_OUT),
    (InterruptedError, ErrorKind.INTERRUPTED),
)

_BY_ERRNO: dict[int, ErrorKind] = {
    errno.ENOTCONN: ErrorKind.NOT_CONNECTED,
    errno.EADDRINUSE: ErrorKind.ADDR_IN_USE,
    errno.EADDRNOTAVAIL: ErrorKind.ADDR_NOT_AVAILABLE,
    errno.EINVAL: ErrorKind.INVALID_INPUT,
    errno.ENOMEM: ErrorKind.OUT_OF_MEMORY,
}


class MockError(Exception):
    """An I/O error produced by a mock transaction."""

    def __init__(self, kind: ErrorKind) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"expected an ErrorKind, got {kind!r}")
        super().__init__(kind)
        self.kind = kind

    @classmethod
    def from_os_error(cls, error: OSError) -> MockError:
        """Build a mock error from the category of an ``OSError``."""
        if not isinstance(error, OSError):
            raise TypeError(f"expected an OSError, got {error!r}")
        for exc_type, kind in _BY_EXCEPTION:
            if isinstance(error, exc_type):
                return cls(kind)
        return cls(_BY_ERRNO.get(error.errno, ErrorKind.OTHER))

    def __str__(self) -> str:
        return f"I/O error: {self.kind.value}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ErrorKind.{self.kind.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MockError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


class WouldBlock(Exception):
    """A non-blocking operation could not complete yet."""

    def __init__(self) -> None:
        super().__init__("operation would block")

    def __repr__(self) -> str:
        return "WouldBlock()"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WouldBlock):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(WouldBlock)
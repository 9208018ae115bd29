"""Error types raised by the client."""

from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    """Categories of failure a connection can run into."""

    SUCCESS = 0
    OOM = 1
    ARGUMENT = 2
    STATE = 3
    TIMEOUT = 4
    SYSTEM = 5
    RESOLVER = 6
    MALFORMED = 7
    CLOSED = 8
    SERVER = 9


_RECOVERABLE = frozenset(
    {ErrorCode.SUCCESS, ErrorCode.ARGUMENT, ErrorCode.STATE, ErrorCode.SERVER}
)


class MpdError(Exception):
    """An error reported by the client library or by the server."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        self.message = message if message is not None else self.code.name.lower()
        super().__init__(self.message)

    def is_fatal(self) -> bool:
        """Return True if the connection cannot be used after this error."""
        return self.code not in _RECOVERABLE

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.name}, {self.message!r})"


class ServerError(MpdError):
    """An ACK response sent by the server."""

    def __init__(self, message: str, server_code: int, at: int = 0) -> None:
        super().__init__(ErrorCode.SERVER, message)
        self.server_code = server_code
        self.at = at


class MpdOSError(MpdError):
    """A failed system call on the connection's socket."""

    def __init__(self, errno: int, message: str | None = None) -> None:
        super().__init__(ErrorCode.SYSTEM, message)
        self.errno = errno
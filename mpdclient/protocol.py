"""Low-level, non-blocking transport for the line-based server protocol."""

from __future__ import annotations

import enum
import socket
from dataclasses import dataclass
from types import TracebackType

from .errors import ErrorCode, MpdError, MpdOSError

DEFAULT_BUFFER_SIZE = 4096

_MSG_DONTWAIT = getattr(socket, "MSG_DONTWAIT", 0)
_ENCODING = "utf-8"
_DECODE_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Pair:
    """A name-value pair received from the server."""

    name: str
    value: str


class AsyncEvent(enum.IntFlag):
    """Socket events a channel is interested in or has observed."""

    READ = 1
    WRITE = 2
    HUP = 4
    ERROR = 8


def quote_argument(arg: str) -> str:
    """Quote one command argument, escaping backslashes and double quotes."""
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_command(command: str, *args: object) -> str:
    """Build a complete command line, arguments quoted, ending in a newline."""
    parts = [command]
    parts.extend(quote_argument(str(arg)) for arg in args)
    return " ".join(parts) + "\n"


class AsyncChannel:
    """Buffered, non-blocking connection that knows the protocol syntax only.

    The caller waits for the events reported by :meth:`events` (for
    example with :mod:`selectors`) and then hands the observed events to
    :meth:`io`.  Once an error has occurred it is kept and raised again
    by every operation that needs a healthy channel.
    """

    def __init__(self, sock: socket.socket, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if sock.fileno() < 0:
            raise ValueError("socket is not open")
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._sock = sock
        self._buffer_size = buffer_size
        self._input = bytearray()
        self._output = bytearray()
        self._error: MpdError | None = None
        if not _MSG_DONTWAIT:
            sock.setblocking(False)

    @property
    def error(self) -> MpdError | None:
        """The error that put this channel out of service, if any."""
        return self._error

    @property
    def pending_output(self) -> int:
        """Number of bytes waiting to be sent."""
        return len(self._output)

    def fileno(self) -> int:
        """Return the socket's file descriptor."""
        fd = self._sock.fileno()
        if fd < 0:
            raise ValueError("channel is closed")
        return fd

    def close(self) -> None:
        """Close the underlying socket."""
        self._sock.close()

    def __enter__(self) -> AsyncChannel:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def set_error(self, error: MpdError) -> bool:
        """Record an error unless one is already set; return whether it was."""
        if self._error is not None:
            return False
        self._error = error
        return True

    def _fail(self, error: MpdError) -> MpdError:
        self._error = error
        return error

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    def set_keepalive(self, keepalive: bool) -> None:
        """Enable or disable TCP keepalive on the socket."""
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, int(bool(keepalive)))
        except OSError as exc:
            raise MpdOSError(exc.errno or 0, str(exc)) from exc

    def events(self) -> AsyncEvent:
        """Return the events to wait for; empty once an error is set."""
        if self._error is not None:
            return AsyncEvent(0)
        events = AsyncEvent.HUP | AsyncEvent.ERROR
        if len(self._input) < self._buffer_size:
            events |= AsyncEvent.READ
        if self._output:
            events |= AsyncEvent.WRITE
        return events

    def _read(self) -> None:
        room = self._buffer_size - len(self._input)
        if room == 0:
            return
        try:
            data = self._sock.recv(room, _MSG_DONTWAIT)
        except (BlockingIOError, InterruptedError):
            return
        except OSError as exc:
            raise self._fail(MpdOSError(exc.errno or 0, str(exc))) from exc
        if not data:
            raise self._fail(MpdError(ErrorCode.CLOSED, "Connection closed by the server"))
        self._input += data

    def _write(self) -> None:
        if not self._output:
            return
        try:
            sent = self._sock.send(self._output, _MSG_DONTWAIT)
        except (BlockingIOError, InterruptedError):
            return
        except OSError as exc:
            raise self._fail(MpdOSError(exc.errno or 0, str(exc))) from exc
        del self._output[:sent]

    def io(self, events: AsyncEvent) -> None:
        """Perform the I/O that the observed events allow."""
        self._check()
        events = AsyncEvent(events)
        if events & (AsyncEvent.HUP | AsyncEvent.ERROR):
            raise self._fail(MpdError(ErrorCode.CLOSED, "Socket connection aborted"))
        if events & AsyncEvent.READ:
            self._read()
        if events & AsyncEvent.WRITE:
            self._write()

    def send_command(self, command: str, *args: object) -> bool:
        """Queue a command line for sending.

        Returns False without queueing anything if the output buffer has
        no room for the whole line yet; flush it with :meth:`io` and retry.
        """
        self._check()
        line = format_command(command, *args).encode(_ENCODING)
        if len(line) > self._buffer_size - len(self._output):
            return False
        self._output += line
        return True

    def recv_line(self) -> str | None:
        """Return the next complete response line without its newline, or None."""
        newline = self._input.find(b"\n")
        if newline < 0:
            if len(self._input) >= self._buffer_size:
                raise self._fail(MpdError(ErrorCode.MALFORMED, "Response line too large"))
            return None
        line = bytes(self._input[:newline])
        del self._input[: newline + 1]
        return line.decode(_ENCODING, _DECODE_ERRORS)

    def recv_raw(self, length: int) -> bytes:
        """Take up to ``length`` raw bytes from the input buffer."""
        if length < 0:
            raise ValueError("length must not be negative")
        data = bytes(self._input[:length])
        del self._input[: len(data)]
        return data
"""Synchronous connection to a music player daemon."""

from __future__ import annotations

import re
import selectors
import socket
from types import TracebackType

from .errors import ErrorCode, MpdError, MpdOSError, ServerError
from .protocol import AsyncChannel, AsyncEvent, Pair

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
DEFAULT_TIMEOUT_MS = 30_000

WELCOME_PREFIX = "OK MPD "

_VERSION_RE = re.compile(r"\s*\+?(\d+)(?:\.(\d+)(?:\.(\d+))?)?")
_ACK_RE = re.compile(r"ACK \[(\d+)@(\d+)\]\s*(?:\{[^}]*\}\s?)?(.*)")
_UNKNOWN_SERVER_ERROR = -1

_NO_PAIR = object()


def parse_welcome(line: str) -> tuple[int, int, int]:
    """Parse the server's greeting line and return its protocol version."""
    if not line.startswith(WELCOME_PREFIX):
        raise MpdError(ErrorCode.MALFORMED, "Malformed connect message received")
    match = _VERSION_RE.match(line, len(WELCOME_PREFIX))
    if match is None:
        raise MpdError(
            ErrorCode.MALFORMED, "Malformed version number in connect message"
        )
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return major, minor, patch


def _open_socket(host: str, port: int, timeout: float) -> socket.socket:
    if host.startswith(("/", "@")):
        family = getattr(socket, "AF_UNIX", None)
        if family is None:
            raise MpdError(ErrorCode.RESOLVER, "Local sockets are not supported")
        address = "\0" + host[1:] if host.startswith("@") else host
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.settimeout(timeout)
        try:
            sock.connect(address)
        except BaseException:
            sock.close()
            raise
        return sock
    return socket.create_connection((host, port), timeout=timeout)


class Connection:
    """A blocking client connection that sends commands and parses responses.

    An error raised by any operation is also kept on the connection;
    every later operation raises it again until :meth:`clear_error`
    succeeds.  Fatal errors cannot be cleared.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int = 0,
        timeout_ms: int = 0,
        password: str | None = None,
    ) -> None:
        self.host = host or DEFAULT_HOST
        self.port = port or DEFAULT_PORT
        timeout_ms = timeout_ms or DEFAULT_TIMEOUT_MS
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        try:
            sock = _open_socket(self.host, self.port, timeout_ms / 1000)
        except MpdError:
            raise
        except socket.gaierror as exc:
            raise MpdError(ErrorCode.RESOLVER, str(exc)) from exc
        except TimeoutError as exc:
            raise MpdError(ErrorCode.TIMEOUT, "Timeout") from exc
        except OSError as exc:
            raise MpdOSError(exc.errno or 0, str(exc)) from exc
        sock.setblocking(False)
        self._init_state(AsyncChannel(sock), timeout_ms / 1000)
        try:
            self._version = self._parse_welcome(self._recv_line())
            if password is not None:
                self.run_password(password)
        except BaseException:
            self.close()
            raise

    @classmethod
    def from_channel(cls, channel: AsyncChannel, welcome: str) -> Connection:
        """Wrap an already connected channel whose greeting has been read."""
        connection = cls.__new__(cls)
        connection.host = None
        connection.port = None
        connection._init_state(channel, DEFAULT_TIMEOUT_MS / 1000)
        connection._version = connection._parse_welcome(welcome)
        return connection

    def _init_state(self, channel: AsyncChannel, timeout: float) -> None:
        self._channel = channel
        self._timeout = timeout
        self._version = (0, 0, 0)
        self._error: MpdError | None = None
        self._receiving = False
        self._queued: object = _NO_PAIR

    def _parse_welcome(self, line: str) -> tuple[int, int, int]:
        try:
            return parse_welcome(line)
        except MpdError as exc:
            self._error = exc
            raise

    # -- lifetime -------------------------------------------------------

    def close(self) -> None:
        """Close the connection's socket."""
        channel = getattr(self, "_channel", None)
        if channel is not None:
            channel.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- settings and state ---------------------------------------------

    @property
    def channel(self) -> AsyncChannel:
        """The underlying non-blocking channel."""
        return self._channel

    @property
    def server_version(self) -> tuple[int, int, int]:
        """The protocol version announced by the server."""
        return self._version

    @property
    def error(self) -> MpdError | None:
        """The error currently set on this connection, if any."""
        return self._error

    @property
    def timeout_ms(self) -> int:
        """The timeout for each response, in milliseconds."""
        return round(self._timeout * 1000)

    def fileno(self) -> int:
        """Return the socket's file descriptor."""
        return self._channel.fileno()

    def set_timeout(self, timeout_ms: int) -> None:
        """Set the time to wait for the server before giving up."""
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        self._timeout = timeout_ms / 1000

    def set_keepalive(self, keepalive: bool) -> None:
        """Enable or disable TCP keepalive."""
        self._channel.set_keepalive(keepalive)

    def cmp_server_version(self, major: int, minor: int, patch: int) -> int:
        """Compare the server version with the given one: -1, 0 or 1."""
        version = self._version
        other = (major, minor, patch)
        return (version > other) - (version < other)

    def clear_error(self) -> bool:
        """Clear a recoverable error; return False if the error is fatal."""
        if self._error is None:
            return True
        if self._error.is_fatal():
            return False
        self._error = None
        return True

    # -- synchronous I/O ------------------------------------------------

    def _check(self) -> None:
        if self._error is not None:
            raise self._error

    def _fail(self, error: MpdError) -> MpdError:
        self._error = error
        return error

    def _channel_call(self, func, *args):
        try:
            return func(*args)
        except MpdError as exc:
            self._error = exc
            raise

    def _wait(self, events: AsyncEvent) -> None:
        mask = 0
        if events & AsyncEvent.READ:
            mask |= selectors.EVENT_READ
        if events & AsyncEvent.WRITE:
            mask |= selectors.EVENT_WRITE
        if not mask:
            self._channel_call(self._channel.io, AsyncEvent(0))
            raise self._fail(MpdError(ErrorCode.STATE, "Nothing to wait for"))
        with selectors.DefaultSelector() as selector:
            selector.register(self._channel.fileno(), mask)
            ready = selector.select(self._timeout)
        if not ready:
            raise self._fail(MpdError(ErrorCode.TIMEOUT, "Timeout"))
        observed = AsyncEvent(0)
        for _, ready_mask in ready:
            if ready_mask & selectors.EVENT_READ:
                observed |= AsyncEvent.READ
            if ready_mask & selectors.EVENT_WRITE:
                observed |= AsyncEvent.WRITE
        self._channel_call(self._channel.io, observed)

    def _recv_line(self) -> str:
        while True:
            line = self._channel_call(self._channel.recv_line)
            if line is not None:
                return line
            self._wait(self._channel.events())

    def _send(self, command: str, args: tuple) -> None:
        while not self._channel_call(self._channel.send_command, command, *args):
            if self._channel.pending_output == 0:
                raise self._fail(MpdError(ErrorCode.ARGUMENT, "Command too long"))
            self._wait(AsyncEvent.WRITE)
        while self._channel.pending_output:
            self._wait(AsyncEvent.WRITE)

    # -- commands and responses -----------------------------------------

    def send_command(self, command: str, *args: object) -> None:
        """Send a command with quoted arguments and start receiving its response."""
        self._check()
        if self._receiving:
            raise self._fail(
                MpdError(
                    ErrorCode.STATE,
                    "Cannot send a new command while receiving another response",
                )
            )
        self._send(command, args)
        self._receiving = True
        self._queued = _NO_PAIR

    def recv_pair(self) -> Pair | None:
        """Return the next pair of the response, or None at its end."""
        self._check()
        if self._queued is not _NO_PAIR:
            pair = self._queued
            self._queued = _NO_PAIR
            return pair  # type: ignore[return-value]
        if not self._receiving:
            raise self._fail(
                MpdError(ErrorCode.STATE, "already done processing current command")
            )
        line = self._recv_line()
        if line == "OK":
            self._receiving = False
            return None
        if line.startswith("ACK"):
            self._receiving = False
            match = _ACK_RE.match(line)
            if match is None:
                error = ServerError(line[3:].strip(), _UNKNOWN_SERVER_ERROR, 0)
            else:
                error = ServerError(
                    match.group(3), int(match.group(1)), int(match.group(2))
                )
            raise self._fail(error)
        name, separator, value = line.partition(": ")
        if not separator or not name:
            raise self._fail(
                MpdError(ErrorCode.MALFORMED, "Malformed response line received")
            )
        return Pair(name, value)

    def recv_pair_named(self, name: str) -> Pair | None:
        """Return the next pair with the given name, skipping others."""
        while (pair := self.recv_pair()) is not None:
            if pair.name == name:
                return pair
        return None

    def enqueue_pair(self, pair: Pair | None) -> None:
        """Push a pair (or the end marker None) back for the next recv_pair()."""
        if self._queued is not _NO_PAIR:
            raise RuntimeError("a pair is already queued")
        self._queued = pair

    def recv_binary(self, length: int) -> bytes:
        """Read a binary chunk of exactly ``length`` bytes and its newline."""
        self._check()
        if length < 0:
            raise ValueError("length must not be negative")
        data = bytearray()
        while len(data) < length:
            chunk = self._channel_call(self._channel.recv_raw, length - len(data))
            if chunk:
                data += chunk
            else:
                self._wait(AsyncEvent.READ)
        while not (terminator := self._channel_call(self._channel.recv_raw, 1)):
            self._wait(AsyncEvent.READ)
        if terminator != b"\n":
            raise self._fail(
                MpdError(ErrorCode.MALFORMED, "Malformed binary response")
            )
        return bytes(data)

    def response_finish(self) -> None:
        """Discard the rest of the current response, raising on errors."""
        self._check()
        self._queued = _NO_PAIR
        while self._receiving:
            self.recv_pair()

    def run(self, command: str, *args: object) -> None:
        """Send a command and wait for it to complete."""
        self.send_command(command, *args)
        self.response_finish()

    def send_password(self, password: str) -> None:
        """Send a password to gain more privileges."""
        self.send_command("password", password)

    def run_password(self, password: str) -> None:
        """Send a password and wait for the server to accept it."""
        self.send_password(password)
        self.response_finish()
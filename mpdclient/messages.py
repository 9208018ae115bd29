"""Client-to-client messaging over server channels."""

from __future__ import annotations

from dataclasses import dataclass

from .connection import Connection
from .errors import ErrorCode, MpdError
from .protocol import Pair


@dataclass
class Message:
    """A message received on a channel."""

    channel: str
    text: str | None = None

    @classmethod
    def begin(cls, pair: Pair) -> Message:
        """Start a message from its "channel" pair."""
        if pair.name != "channel":
            raise ValueError(f"not a channel pair: {pair.name}: {pair.value}")
        return cls(pair.value)

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next message."""
        if pair.name == "channel":
            return False
        if pair.name == "message":
            self.text = pair.value
        return True


def send_subscribe(connection: Connection, channel: str) -> None:
    """Subscribe to a message channel."""
    connection.send_command("subscribe", channel)


def run_subscribe(connection: Connection, channel: str) -> None:
    """Subscribe to a channel and wait for completion."""
    send_subscribe(connection, channel)
    connection.response_finish()


def send_unsubscribe(connection: Connection, channel: str) -> None:
    """Unsubscribe from a message channel."""
    connection.send_command("unsubscribe", channel)


def run_unsubscribe(connection: Connection, channel: str) -> None:
    """Unsubscribe from a channel and wait for completion."""
    send_unsubscribe(connection, channel)
    connection.response_finish()


def send_send_message(connection: Connection, channel: str, text: str) -> None:
    """Send a message to a channel."""
    connection.send_command("sendmessage", channel, text)


def run_send_message(connection: Connection, channel: str, text: str) -> None:
    """Send a message to a channel and wait for completion."""
    send_send_message(connection, channel, text)
    connection.response_finish()


def send_read_messages(connection: Connection) -> None:
    """Request the messages waiting on subscribed channels."""
    connection.send_command("readmessages")


def recv_message(connection: Connection) -> Message | None:
    """Receive the next message of the response, or None at its end."""
    pair = connection.recv_pair_named("channel")
    if pair is None:
        return None
    message = Message.begin(pair)
    while (pair := connection.recv_pair()) is not None and message.feed(pair):
        pass
    connection.enqueue_pair(pair)
    if message.text is None:
        raise MpdError(ErrorCode.MALFORMED, "No 'message' line received")
    return message


def send_channels(connection: Connection) -> None:
    """Request the list of all channels."""
    connection.send_command("channels")


def recv_channel(connection: Connection) -> str | None:
    """Return the next channel name of the response, or None at its end."""
    pair = connection.recv_pair_named("channel")
    return pair.value if pair is not None else None
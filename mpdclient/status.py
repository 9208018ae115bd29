"""Server status and statistics."""

from __future__ import annotations

from .connection import Connection


def _recv_all(connection: Connection) -> dict[str, str]:
    if connection.error is not None:
        raise connection.error
    values: dict[str, str] = {}
    while (pair := connection.recv_pair()) is not None:
        values[pair.name] = pair.value
    return values


def send_stats(connection: Connection) -> None:
    """Request database and playback statistics."""
    connection.send_command("stats")


def recv_stats(connection: Connection) -> dict[str, str]:
    """Receive the whole statistics response as a name-to-value mapping."""
    return _recv_all(connection)


def run_stats(connection: Connection) -> dict[str, str]:
    """Request and receive statistics."""
    send_stats(connection)
    return recv_stats(connection)


def send_status(connection: Connection) -> None:
    """Request the player status."""
    connection.send_command("status")


def recv_status(connection: Connection) -> dict[str, str]:
    """Receive the whole status response as a name-to-value mapping."""
    return _recv_all(connection)


def run_status(connection: Connection) -> dict[str, str]:
    """Request and receive the player status."""
    send_status(connection)
    return recv_status(connection)
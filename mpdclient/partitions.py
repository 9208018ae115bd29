"""Partition management commands."""

from __future__ import annotations

from .connection import Connection


def send_newpartition(connection: Connection, partition: str) -> None:
    """Ask the server to create a new partition."""
    connection.send_command("newpartition", partition)


def run_newpartition(connection: Connection, partition: str) -> None:
    """Create a new partition and wait for completion."""
    send_newpartition(connection, partition)
    connection.response_finish()


def send_delete_partition(connection: Connection, partition: str) -> None:
    """Ask the server to delete a partition."""
    connection.send_command("delpartition", partition)


def run_delete_partition(connection: Connection, partition: str) -> None:
    """Delete a partition and wait for completion."""
    send_delete_partition(connection, partition)
    connection.response_finish()


def send_switch_partition(connection: Connection, partition: str) -> None:
    """Ask the server to move this client to another partition."""
    connection.send_command("partition", partition)


def run_switch_partition(connection: Connection, partition: str) -> None:
    """Switch to another partition and wait for completion."""
    send_switch_partition(connection, partition)
    connection.response_finish()


def send_listpartitions(connection: Connection) -> None:
    """Request the list of partitions."""
    connection.send_command("listpartitions")


def recv_partition(connection: Connection) -> str | None:
    """Return the next partition name of the response, or None at its end."""
    pair = connection.recv_pair_named("partition")
    return pair.value if pair is not None else None
"""Cover art transfer and binary chunk size limits."""

from __future__ import annotations

import re

from .connection import Connection

_LEADING_NUMBER = re.compile(r"\s*\+?(\d+)")


def _parse_size(text: str) -> int:
    match = _LEADING_NUMBER.match(text)
    return int(match.group(1)) if match else 0


def send_albumart(connection: Connection, uri: str, offset: int) -> None:
    """Request a chunk of the cover art of ``uri`` starting at ``offset``."""
    connection.send_command("albumart", uri, int(offset))


def recv_albumart(connection: Connection, max_size: int | None = None) -> bytes | None:
    """Receive one chunk of cover art, at most ``max_size`` bytes of it.

    Returns None if the response holds no binary chunk.
    """
    pair = connection.recv_pair_named("binary")
    if pair is None:
        return None
    chunk_size = _parse_size(pair.value)
    if max_size is not None:
        chunk_size = min(chunk_size, max_size)
    return connection.recv_binary(chunk_size)


def run_albumart(
    connection: Connection, uri: str, offset: int, max_size: int | None = None
) -> bytes | None:
    """Request and receive one chunk of cover art."""
    send_albumart(connection, uri, offset)
    data = recv_albumart(connection, max_size)
    connection.response_finish()
    return data


def send_binarylimit(connection: Connection, limit: int) -> None:
    """Ask the server to send binary chunks of at most ``limit`` bytes."""
    connection.send_command("binarylimit", int(limit))


def run_binarylimit(connection: Connection, limit: int) -> None:
    """Set the binary chunk limit and wait for the server to accept it."""
    send_binarylimit(connection, limit)
    connection.response_finish()
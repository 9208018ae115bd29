"""Queries about what the server supports and tag type selection."""

from __future__ import annotations

from typing import Iterable

from .connection import Connection
from .errors import ErrorCode, MpdError

_MAX_LINE = 1024


def send_allowed_commands(connection: Connection) -> None:
    """Request the commands this client may use."""
    connection.send_command("commands")


def send_disallowed_commands(connection: Connection) -> None:
    """Request the commands this client may not use."""
    connection.send_command("notcommands")


def send_list_url_schemes(connection: Connection) -> None:
    """Request the URL schemes the server can handle."""
    connection.send_command("urlhandlers")


def send_list_tag_types(connection: Connection) -> None:
    """Request the tag types the server will send."""
    connection.send_command("tagtypes")


def _send_tag_types(
    connection: Connection, sub_command: str, tag_names: Iterable[str]
) -> None:
    names = [str(name) for name in tag_names]
    if not names:
        raise ValueError("at least one tag name is required")
    if connection.error is not None:
        raise connection.error
    line = f"tagtypes {sub_command}"
    for name in names:
        if len(line) + 1 + len(name) + 1 > _MAX_LINE:
            raise MpdError(ErrorCode.ARGUMENT, "Tag list is too long")
        line += " " + name
    connection.send_command(line)


def send_disable_tag_types(connection: Connection, tag_names: Iterable[str]) -> None:
    """Stop the server from sending the given tag types."""
    _send_tag_types(connection, "disable", tag_names)


def run_disable_tag_types(connection: Connection, tag_names: Iterable[str]) -> None:
    """Disable tag types and wait for completion."""
    send_disable_tag_types(connection, tag_names)
    connection.response_finish()


def send_enable_tag_types(connection: Connection, tag_names: Iterable[str]) -> None:
    """Have the server send the given tag types again."""
    _send_tag_types(connection, "enable", tag_names)


def run_enable_tag_types(connection: Connection, tag_names: Iterable[str]) -> None:
    """Enable tag types and wait for completion."""
    send_enable_tag_types(connection, tag_names)
    connection.response_finish()


def send_clear_tag_types(connection: Connection) -> None:
    """Disable all tag types."""
    connection.send_command("tagtypes", "clear")


def run_clear_tag_types(connection: Connection) -> None:
    """Disable all tag types and wait for completion."""
    send_clear_tag_types(connection)
    connection.response_finish()


def send_all_tag_types(connection: Connection) -> None:
    """Enable all tag types."""
    connection.send_command("tagtypes", "all")


def run_all_tag_types(connection: Connection) -> None:
    """Enable all tag types and wait for completion."""
    send_all_tag_types(connection)
    connection.response_finish()
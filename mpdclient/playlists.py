"""Stored playlist commands."""

from __future__ import annotations

import enum

from .connection import Connection

_UINT_MAX = 0xFFFFFFFF


class Whence(enum.Enum):
    """How a target position is to be read: absolute or around the current song."""

    ABSOLUTE = ""
    AFTER_CURRENT = "+"
    BEFORE_CURRENT = "-"


def _range(start: int, end: int | None) -> str:
    """Format a range; an end of None (or the largest unsigned) leaves it open."""
    if end is None or end == _UINT_MAX:
        return f"{int(start)}:"
    return f"{int(start)}:{int(end)}"


def send_list_playlists(connection: Connection) -> None:
    """Request the list of stored playlists."""
    connection.send_command("listplaylists")


def send_list_playlist(connection: Connection, name: str) -> None:
    """Request the song URIs of a stored playlist."""
    connection.send_command("listplaylist", name)


def send_list_playlist_meta(connection: Connection, name: str) -> None:
    """Request the songs of a stored playlist, with metadata."""
    connection.send_command("listplaylistinfo", name)


def send_playlist_clear(connection: Connection, name: str) -> None:
    """Remove every song from a stored playlist."""
    connection.send_command("playlistclear", name)


def run_playlist_clear(connection: Connection, name: str) -> None:
    """Clear a stored playlist and wait for completion."""
    send_playlist_clear(connection, name)
    connection.response_finish()


def send_playlist_add(connection: Connection, name: str, path: str) -> None:
    """Append a song to a stored playlist."""
    connection.send_command("playlistadd", name, path)


def run_playlist_add(connection: Connection, name: str, path: str) -> None:
    """Append a song to a stored playlist and wait for completion."""
    send_playlist_add(connection, name, path)
    connection.response_finish()


def send_playlist_add_to(connection: Connection, name: str, path: str, to: int) -> None:
    """Insert a song into a stored playlist at a position."""
    connection.send_command("playlistadd", name, path, int(to))


def run_playlist_add_to(connection: Connection, name: str, path: str, to: int) -> None:
    """Insert a song into a stored playlist and wait for completion."""
    send_playlist_add_to(connection, name, path, to)
    connection.response_finish()


def send_playlist_move(
    connection: Connection, name: str, from_pos: int, to_pos: int
) -> None:
    """Move a song within a stored playlist."""
    connection.send_command("playlistmove", name, int(from_pos), int(to_pos))


def run_playlist_move(
    connection: Connection, name: str, from_pos: int, to_pos: int
) -> None:
    """Move a song within a stored playlist and wait for completion."""
    send_playlist_move(connection, name, from_pos, to_pos)
    connection.response_finish()


def send_playlist_delete(connection: Connection, name: str, pos: int) -> None:
    """Remove the song at a position from a stored playlist."""
    connection.send_command("playlistdelete", name, int(pos))


def run_playlist_delete(connection: Connection, name: str, pos: int) -> None:
    """Remove a song from a stored playlist and wait for completion."""
    send_playlist_delete(connection, name, pos)
    connection.response_finish()


def send_playlist_delete_range(
    connection: Connection, name: str, start: int, end: int | None
) -> None:
    """Remove a range of songs from a stored playlist."""
    connection.send_command("playlistdelete", name, _range(start, end))


def run_playlist_delete_range(
    connection: Connection, name: str, start: int, end: int | None
) -> None:
    """Remove a range of songs and wait for completion."""
    send_playlist_delete_range(connection, name, start, end)
    connection.response_finish()


def send_save(connection: Connection, name: str) -> None:
    """Save the queue as a stored playlist."""
    connection.send_command("save", name)


def run_save(connection: Connection, name: str) -> None:
    """Save the queue and wait for completion."""
    send_save(connection, name)
    connection.response_finish()


def send_load(connection: Connection, name: str) -> None:
    """Append a stored playlist to the queue."""
    connection.send_command("load", name)


def run_load(connection: Connection, name: str) -> None:
    """Load a stored playlist and wait for completion."""
    send_load(connection, name)
    connection.response_finish()


def send_load_range(
    connection: Connection, name: str, start: int, end: int | None
) -> None:
    """Append a range of a stored playlist to the queue."""
    connection.send_command("load", name, _range(start, end))


def run_load_range(
    connection: Connection, name: str, start: int, end: int | None
) -> None:
    """Load a range of a stored playlist and wait for completion."""
    send_load_range(connection, name, start, end)
    connection.response_finish()


def send_load_range_to(
    connection: Connection,
    name: str,
    start: int,
    end: int | None,
    to: int,
    whence: Whence,
) -> None:
    """Insert a range of a stored playlist into the queue at a position."""
    target = f"{Whence(whence).value}{int(to)}"
    connection.send_command("load", name, _range(start, end), target)


def run_load_range_to(
    connection: Connection,
    name: str,
    start: int,
    end: int | None,
    to: int,
    whence: Whence,
) -> None:
    """Insert a playlist range into the queue and wait for completion."""
    send_load_range_to(connection, name, start, end, to, whence)
    connection.response_finish()


def send_rename(connection: Connection, from_name: str, to_name: str) -> None:
    """Rename a stored playlist."""
    connection.send_command("rename", from_name, to_name)


def run_rename(connection: Connection, from_name: str, to_name: str) -> None:
    """Rename a stored playlist and wait for completion."""
    send_rename(connection, from_name, to_name)
    connection.response_finish()


def send_rm(connection: Connection, name: str) -> None:
    """Delete a stored playlist."""
    connection.send_command("rm", name)


def run_rm(connection: Connection, name: str) -> None:
    """Delete a stored playlist and wait for completion."""
    send_rm(connection, name)
    connection.response_finish()
"""Music database queries and updates."""

from __future__ import annotations

import re

from .connection import Connection

_LEADING_INT = re.compile(r"\s*\+?(\d+)")


def _args(path: str | None) -> tuple[str, ...]:
    return () if path is None else (path,)


def send_list_all(connection: Connection, path: str | None = None) -> None:
    """Request a recursive listing without metadata."""
    connection.send_command("listall", *_args(path))


def send_list_all_meta(connection: Connection, path: str | None = None) -> None:
    """Request a recursive listing with metadata."""
    connection.send_command("listallinfo", *_args(path))


def send_list_meta(connection: Connection, path: str | None = None) -> None:
    """Request the contents of one directory with metadata."""
    connection.send_command("lsinfo", *_args(path))


def send_list_files(connection: Connection, uri: str | None = None) -> None:
    """Request all files of a directory, including unrecognized ones."""
    connection.send_command("listfiles", *_args(uri))


def send_read_comments(connection: Connection, path: str) -> None:
    """Request the comments of a song file."""
    connection.send_command("readcomments", path)


def send_update(connection: Connection, path: str | None = None) -> None:
    """Ask the server to update the database, optionally below ``path``."""
    connection.send_command("update", *_args(path))


def send_rescan(connection: Connection, path: str | None = None) -> None:
    """Like send_update(), but also rescan unmodified files."""
    connection.send_command("rescan", *_args(path))


def recv_update_id(connection: Connection) -> int:
    """Return the id of the submitted update job, or 0 if none was given."""
    pair = connection.recv_pair_named("updating_db")
    if pair is None:
        return 0
    match = _LEADING_INT.match(pair.value)
    return int(match.group(1)) if match else 0


def _run(connection: Connection) -> int:
    job_id = recv_update_id(connection)
    if job_id == 0:
        return 0
    connection.response_finish()
    return job_id


def run_update(connection: Connection, path: str | None = None) -> int:
    """Start a database update and return its job id (0 if none)."""
    send_update(connection, path)
    return _run(connection)


def run_rescan(connection: Connection, path: str | None = None) -> int:
    """Start a database rescan and return its job id (0 if none)."""
    send_rescan(connection, path)
    return _run(connection)
import socket

import pytest

from mpdclient.connection import Connection
from mpdclient.errors import ErrorCode, ServerError
from mpdclient.playlists import (
    Whence,
    run_load,
    run_playlist_move,
    run_rm,
    run_save,
    send_list_playlist_meta,
    send_list_playlists,
    send_load_range,
    send_load_range_to,
    send_playlist_add_to,
    send_playlist_delete_range,
    send_rename,
)
from mpdclient.protocol import AsyncChannel, format_command


@pytest.fixture
def link():
    client_sock, server_sock = socket.socketpair()
    server_sock.settimeout(2)
    conn = Connection.from_channel(AsyncChannel(client_sock), "OK MPD 0.23.5")
    yield conn, server_sock
    conn.close()
    server_sock.close()


def _received(server):
    return server.recv(65536)


def test_list_playlists(link):
    conn, server = link
    send_list_playlists(conn)
    assert _received(server) == format_command("listplaylists").encode()


def test_list_playlist_meta(link):
    conn, server = link
    send_list_playlist_meta(conn, "mix")
    assert _received(server) == format_command("listplaylistinfo", "mix").encode()


def test_run_save_sends_and_finishes(link):
    conn, server = link
    server.sendall(b"OK\n")
    run_save(conn, "evening")
    assert _received(server) == format_command("save", "evening").encode()
    assert conn.error is None


def test_run_load_server_error(link):
    conn, server = link
    server.sendall(b"ACK [50@0] {load} No such playlist\n")
    with pytest.raises(ServerError) as info:
        run_load(conn, "missing")
    assert info.value.server_code == 50
    assert conn.error.code == ErrorCode.SERVER


def test_playlist_move_arguments(link):
    conn, server = link
    server.sendall(b"OK\n")
    run_playlist_move(conn, "mix", 4, 7)
    assert _received(server) == format_command("playlistmove", "mix", 4, 7).encode()


def test_playlist_add_to(link):
    conn, server = link
    send_playlist_add_to(conn, "mix", "a/b.flac", 3)
    assert _received(server) == format_command("playlistadd", "mix", "a/b.flac", 3).encode()


def test_load_range_to_wire_bytes(link):
    conn, server = link
    send_load_range_to(conn, "pl", 1, 3, 0, Whence.AFTER_CURRENT)
    assert _received(server) == b'load "pl" "1:3" "+0"\n'


def test_open_range(link):
    conn, server = link
    send_playlist_delete_range(conn, "pl", 2, None)
    assert _received(server) == format_command("playlistdelete", "pl", "2:").encode()


def test_uint_max_end_is_open(link):
    conn, server = link
    send_load_range(conn, "pl", 2, 0xFFFFFFFF)
    assert _received(server) == format_command("load", "pl", "2:").encode()


def test_rename_quotes_arguments(link):
    conn, server = link
    send_rename(conn, 'old "one"', "new")
    assert _received(server) == format_command("rename", 'old "one"', "new").encode()


def test_run_rm_roundtrip(link):
    conn, server = link
    server.sendall(b"OK\n")
    run_rm(conn, "gone")
    assert _received(server) == format_command("rm", "gone").encode()
    assert conn.clear_error() is True
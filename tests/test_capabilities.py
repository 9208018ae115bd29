import socket

import pytest

from mpdclient.capabilities import (
    run_all_tag_types,
    run_clear_tag_types,
    run_disable_tag_types,
    send_allowed_commands,
    send_disallowed_commands,
    send_enable_tag_types,
    send_list_tag_types,
    send_list_url_schemes,
)
from mpdclient.connection import Connection
from mpdclient.errors import ErrorCode, MpdError, ServerError
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


@pytest.mark.parametrize(
    "func, command",
    [
        (send_allowed_commands, "commands"),
        (send_disallowed_commands, "notcommands"),
        (send_list_url_schemes, "urlhandlers"),
        (send_list_tag_types, "tagtypes"),
    ],
)
def test_simple_queries(link, func, command):
    conn, server = link
    func(conn)
    assert _received(server) == format_command(command).encode()


def test_disable_tag_types_wire_bytes(link):
    conn, server = link
    server.sendall(b"OK\n")
    run_disable_tag_types(conn, ["Artist", "Album"])
    assert _received(server) == b"tagtypes disable Artist Album\n"


def test_enable_tag_types_unquoted(link):
    conn, server = link
    send_enable_tag_types(conn, ["Title"])
    assert _received(server) == b"tagtypes enable Title\n"


def test_clear_and_all(link):
    conn, server = link
    server.sendall(b"OK\n")
    run_clear_tag_types(conn)
    assert _received(server) == format_command("tagtypes", "clear").encode()
    server.sendall(b"OK\n")
    run_all_tag_types(conn)
    assert _received(server) == format_command("tagtypes", "all").encode()


def test_tag_list_too_long(link):
    conn, _ = link
    with pytest.raises(MpdError) as info:
        send_enable_tag_types(conn, ["x" * 2000])
    assert info.value.code == ErrorCode.ARGUMENT
    assert info.value.message == "Tag list is too long"


def test_empty_tag_list_rejected(link):
    conn, _ = link
    with pytest.raises(ValueError):
        send_enable_tag_types(conn, [])


def test_existing_error_takes_precedence(link):
    conn, server = link
    server.sendall(b"ACK [5@0] {tagtypes} unknown\n")
    with pytest.raises(ServerError):
        run_clear_tag_types(conn)
    with pytest.raises(ServerError) as info:
        send_enable_tag_types(conn, ["x" * 2000])
    assert info.value.server_code == 5
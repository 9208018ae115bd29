import socket

import pytest

from mpdclient.errors import ErrorCode, MpdError
from mpdclient.protocol import (
    AsyncChannel,
    AsyncEvent,
    Pair,
    format_command,
    quote_argument,
)


@pytest.fixture
def pair_of_sockets():
    client, server = socket.socketpair()
    yield client, server
    client.close()
    server.close()


def test_pair_fields():
    pair = Pair("file", "a.mp3")
    assert (pair.name, pair.value) == ("file", "a.mp3")
    assert pair == Pair("file", "a.mp3")


def test_quote_argument_plain():
    assert quote_argument("foo bar") == '"foo bar"'


def test_quote_argument_escapes():
    assert quote_argument('a"b\\c') == '"a\\"b\\\\c"'


def test_format_command_without_arguments():
    assert format_command("status") == "status\n"


def test_format_command_with_arguments():
    assert format_command("add", "foo bar", 3) == 'add "foo bar" "3"\n'


def test_initial_events(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    assert channel.events() == AsyncEvent.HUP | AsyncEvent.ERROR | AsyncEvent.READ


def test_send_command_sets_write_event_and_reaches_peer(pair_of_sockets):
    client, server = pair_of_sockets
    channel = AsyncChannel(client)
    assert channel.send_command("play", "1") is True
    assert channel.events() & AsyncEvent.WRITE
    channel.io(AsyncEvent.WRITE)
    assert channel.pending_output == 0
    assert not channel.events() & AsyncEvent.WRITE
    expected = format_command("play", "1").encode()
    assert server.recv(100) == expected


def test_send_command_too_large_for_buffer(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client, buffer_size=4)
    assert channel.send_command("status") is False
    assert channel.pending_output == 0
    assert channel.error is None


def test_recv_lines(pair_of_sockets):
    client, server = pair_of_sockets
    channel = AsyncChannel(client)
    server.sendall(b"OK MPD 0.23.0\nfoo: bar\npartial")
    channel.io(AsyncEvent.READ)
    assert channel.recv_line() == "OK MPD 0.23.0"
    assert channel.recv_line() == "foo: bar"
    assert channel.recv_line() is None


def test_recv_line_empty_buffer(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    assert channel.recv_line() is None


def test_read_without_data_is_not_an_error(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    channel.io(AsyncEvent.READ)
    assert channel.error is None
    assert channel.events() & AsyncEvent.READ


def test_line_too_large(pair_of_sockets):
    client, server = pair_of_sockets
    channel = AsyncChannel(client, buffer_size=8)
    server.sendall(b"0123456789")
    channel.io(AsyncEvent.READ)
    assert not channel.events() & AsyncEvent.READ or channel.events() == AsyncEvent(0)
    with pytest.raises(MpdError) as info:
        channel.recv_line()
    assert info.value.code == ErrorCode.MALFORMED
    assert channel.events() == AsyncEvent(0)


def test_server_closed(pair_of_sockets):
    client, server = pair_of_sockets
    channel = AsyncChannel(client)
    server.close()
    with pytest.raises(MpdError) as info:
        channel.io(AsyncEvent.READ)
    assert info.value.code == ErrorCode.CLOSED
    assert info.value.is_fatal()
    with pytest.raises(MpdError) as again:
        channel.io(AsyncEvent.READ)
    assert again.value is info.value


def test_hangup_event(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    with pytest.raises(MpdError) as info:
        channel.io(AsyncEvent.HUP)
    assert info.value.code == ErrorCode.CLOSED
    assert channel.error is info.value


def test_set_error_only_once(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    first = MpdError(ErrorCode.TIMEOUT, "Timeout")
    assert channel.set_error(first) is True
    assert channel.set_error(MpdError(ErrorCode.STATE)) is False
    assert channel.error is first
    with pytest.raises(MpdError) as info:
        channel.send_command("status")
    assert info.value is first


def test_recv_raw(pair_of_sockets):
    client, server = pair_of_sockets
    channel = AsyncChannel(client)
    payload = b"abc\x00def"
    server.sendall(payload)
    channel.io(AsyncEvent.READ)
    first = channel.recv_raw(3)
    rest = channel.recv_raw(100)
    assert first + rest == payload
    assert first == payload[:3]
    assert channel.recv_raw(5) == b""


def test_binary_after_line(pair_of_sockets):
    client, server = pair_of_sockets
    channel = AsyncChannel(client)
    server.sendall(b"binary: 3\n\xff\xfe\xfdOK\n")
    channel.io(AsyncEvent.READ)
    assert channel.recv_line() == "binary: 3"
    assert channel.recv_raw(3) == b"\xff\xfe\xfd"
    assert channel.recv_line() == "OK"


def test_keepalive_sets_socket_option(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    channel.set_keepalive(True)
    assert client.getsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE) != 0
    channel.set_keepalive(False)
    assert client.getsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE) == 0


def test_context_manager_closes(pair_of_sockets):
    client, _ = pair_of_sockets
    with AsyncChannel(client) as channel:
        assert channel.fileno() == client.fileno()
    with pytest.raises(ValueError):
        channel.fileno()


def test_invalid_buffer_size(pair_of_sockets):
    client, _ = pair_of_sockets
    with pytest.raises(ValueError):
        AsyncChannel(client, buffer_size=0)


def test_recv_raw_negative_length(pair_of_sockets):
    client, _ = pair_of_sockets
    channel = AsyncChannel(client)
    with pytest.raises(ValueError):
        channel.recv_raw(-1)
# mpdclient

A client library for talking to a Music Player Daemon server over its
line-based protocol. It has no dependencies outside the standard library.

It is built in two layers:

- `mpdclient.protocol.AsyncChannel` is a buffered, non-blocking channel that
  knows the protocol syntax only. It quotes arguments (`quote_argument`,
  `format_command`), splits response lines (`recv_line`) and hands out raw
  bytes (`recv_raw`). The caller waits for the events returned by `events()`
  and passes what it observed to `io()`.
- `mpdclient.connection.Connection` is a blocking connection on top of a
  channel. It reads the server's greeting, sends commands with
  `send_command()`, returns `Pair(name, value)` objects from `recv_pair()`
  and `recv_pair_named()`, and raises an `MpdError` when the server answers
  with `ACK` or the socket fails.

Command modules built on `Connection`:

| Module | What it covers |
| --- | --- |
| `mpdclient.database` | `listall`, `listallinfo`, `lsinfo`, `listfiles`, `readcomments`, `update`, `rescan` |
| `mpdclient.entity` | `Directory`, `Song`, `Playlist`, `Entity`, `recv_entity()`, `iter_entities()` |
| `mpdclient.playlists` | stored playlists: list, add, move, delete, save, load, rename, remove; `Whence` |
| `mpdclient.outputs` | `Output`, listing, enabling, disabling, toggling, attributes, moving outputs |
| `mpdclient.partitions` | creating, deleting, switching and listing partitions |
| `mpdclient.mounts` | `Mount`, `Neighbor`, mounting, unmounting, neighbor listing |
| `mpdclient.messages` | `Message`, channel subscription, sending and reading messages |
| `mpdclient.status` | `status` and `stats`, returned as `dict[str, str]` |
| `mpdclient.capabilities` | `commands`, `notcommands`, `urlhandlers`, `tagtypes` and its sub-commands |
| `mpdclient.albumart` | `albumart` chunks and `binarylimit` |
| `mpdclient.audio_format` | `AudioFormat`, `SampleFormat`, `parse_audio_format()` |

Most commands come as a `send_*` function, which only sends, and a `run_*`
function, which also waits for the server's reply with
`Connection.response_finish()`.

## Installation

```
pip install .
```

## Usage

```python
from mpdclient import database, playlists, status
from mpdclient.connection import Connection
from mpdclient.entity import iter_entities

with Connection("localhost", 6600, 30000, None) as conn:
    print(conn.server_version)          # e.g. (0, 23, 5)

    print(status.run_status(conn))      # {'volume': '100', 'state': 'stop', ...}

    database.send_list_meta(conn, "")
    for entity in iter_entities(conn):
        print(entity.type, entity.value)
    conn.response_finish()

    playlists.run_playlist_add(conn, "favourites", "some/song.flac")
```

`Connection()` with no arguments connects to `localhost` port 6600 with a
30 second timeout. A host starting with `/` is taken as the path of a local
socket, and one starting with `@` as an abstract socket name.

Connecting to a server protected by a password:

```python
password = "password"
conn = Connection("localhost", 6600, 30000, password=password)
```

Commands that have no helper function can be sent directly; `run()` sends a
command and waits for it to complete:

```python
conn.run("play")
conn.run("setvol", 50)
```

Album art is fetched in chunks; `run_albumart()` returns the bytes of one
chunk, or `None` if the reply held none:

```python
from mpdclient.albumart import run_albumart

data = run_albumart(conn, "some/song.flac", 0, 8192)
```

Audio format strings as reported by the server can be parsed directly:

```python
from mpdclient.audio_format import parse_audio_format

fmt = parse_audio_format("44100:24:2")
print(fmt.sample_rate, fmt.bits, fmt.channels)   # 44100 24 2
print(parse_audio_format("dsd64:2").sample_rate) # 352800
```

## Errors

Every failure is raised as an `mpdclient.errors.MpdError`, whose `code` is
an `ErrorCode`. Replies starting with `ACK` are raised as `ServerError`,
which carries the server's error number (`server_code`) and the index of the
failing command (`at`). Failed socket calls are raised as `MpdOSError` with
an `errno`.

A `Connection` keeps the last error and raises it again from every later
operation. `clear_error()` clears it and returns `True` for recoverable
errors (argument, state and server errors); for fatal ones, as told by
`MpdError.is_fatal()`, it returns `False` and the connection has to be
closed.

## What is not included

The package is a library only; it installs no command-line program. It has
no helper functions for the queue, playback control, search, stickers or
idle notifications, and no command lists; such commands can still be sent
with `Connection.send_command()` or `Connection.run()` and their replies
read with `recv_pair()`. Status and statistics come back as plain
name-to-value dictionaries, not parsed objects.

## Tests

```
pip install .[test]
pytest
```
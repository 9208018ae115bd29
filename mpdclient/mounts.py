"""Storage mounts and neighbor discovery."""

from __future__ import annotations

from dataclasses import dataclass

from .connection import Connection
from .protocol import Pair


@dataclass
class Mount:
    """A storage mounted into the music database."""

    uri: str
    storage: str | None = None

    @classmethod
    def begin(cls, pair: Pair) -> Mount:
        """Start a mount from its "mount" pair."""
        if pair.name != "mount":
            raise ValueError(f"not a mount pair: {pair.name}: {pair.value}")
        return cls(pair.value)

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next mount."""
        if pair.name == "mount":
            return False
        if pair.name == "storage":
            self.storage = pair.value
        return True


@dataclass
class Neighbor:
    """A storage found nearby by the server."""

    uri: str
    display_name: str | None = None

    @classmethod
    def begin(cls, pair: Pair) -> Neighbor:
        """Start a neighbor from its "neighbor" pair."""
        if pair.name != "neighbor":
            raise ValueError(f"not a neighbor pair: {pair.name}: {pair.value}")
        return cls(pair.value)

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next neighbor."""
        if pair.name == "neighbor":
            return False
        if pair.name == "name":
            self.display_name = pair.value
        return True


def send_list_mounts(connection: Connection) -> None:
    """Request the list of mounts."""
    connection.send_command("listmounts")


def recv_mount(connection: Connection) -> Mount | None:
    """Receive the next mount of the response, or None at its end."""
    pair = connection.recv_pair_named("mount")
    if pair is None:
        return None
    mount = Mount.begin(pair)
    while (pair := connection.recv_pair()) is not None and mount.feed(pair):
        pass
    connection.enqueue_pair(pair)
    return mount


def send_mount(connection: Connection, uri: str, storage: str) -> None:
    """Mount a storage at the given path."""
    connection.send_command("mount", uri, storage)


def run_mount(connection: Connection, uri: str, storage: str) -> None:
    """Mount a storage and wait for completion."""
    send_mount(connection, uri, storage)
    connection.response_finish()


def send_unmount(connection: Connection, uri: str) -> None:
    """Unmount the storage at the given path."""
    connection.send_command("unmount", uri)


def run_unmount(connection: Connection, uri: str) -> None:
    """Unmount a storage and wait for completion."""
    send_unmount(connection, uri)
    connection.response_finish()


def send_list_neighbors(connection: Connection) -> None:
    """Request the list of neighbors."""
    connection.send_command("listneighbors")


def recv_neighbor(connection: Connection) -> Neighbor | None:
    """Receive the next neighbor of the response, or None at its end."""
    pair = connection.recv_pair_named("neighbor")
    if pair is None:
        return None
    neighbor = Neighbor.begin(pair)
    while (pair := connection.recv_pair()) is not None and neighbor.feed(pair):
        pass
    connection.enqueue_pair(pair)
    return neighbor
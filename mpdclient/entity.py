"""Directories, songs and playlists in the server's database listings."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Union

from .audio_format import AudioFormat, parse_audio_format
from .connection import Connection
from .errors import ErrorCode, MpdError
from .protocol import Pair

_LEADING_INT = re.compile(r"\s*\+?(\d+)")
_LEADING_FLOAT = re.compile(r"\s*\+?(\d+(?:\.\d*)?|\.\d+)")


def _parse_uint(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_seconds_ms(text: str) -> int:
    match = _LEADING_FLOAT.match(text)
    return round(float(match.group(1)) * 1000) if match else 0


def _parse_iso8601(text: str) -> int:
    """Return the POSIX time stamp of an ISO 8601 string, or 0 if invalid."""
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return 0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


def _is_local_uri(uri: str) -> bool:
    if not uri or uri.startswith("/"):
        return False
    return all(segment not in (".", "..") for segment in uri.split("/"))


@dataclass
class Directory:
    """A directory in the music database."""

    path: str
    last_modified: int = 0

    @classmethod
    def begin(cls, pair: Pair) -> Directory:
        """Start a directory from its "directory" pair."""
        if pair.name != "directory" or not _is_local_uri(pair.value):
            raise ValueError(f"not a directory pair: {pair.name}: {pair.value}")
        return cls(pair.value)

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next directory."""
        if pair.name == "directory":
            return False
        if pair.name == "Last-Modified":
            self.last_modified = _parse_iso8601(pair.value)
        return True


@dataclass
class Song:
    """A song in the database or in the queue."""

    uri: str
    tags: dict[str, list[str]] = field(default_factory=dict)
    real_uri: str | None = None
    duration_ms: int = 0
    start_ms: int = 0
    end_ms: int = 0
    last_modified: int = 0
    pos: int = 0
    id: int = 0
    prio: int = 0
    audio_format: AudioFormat | None = None

    @property
    def duration(self) -> int:
        """Duration in whole seconds; 0 if unknown."""
        return self.duration_ms // 1000

    @property
    def start(self) -> int:
        """Start of the virtual song within the file, in seconds."""
        return self.start_ms // 1000

    @property
    def end(self) -> int:
        """End of the virtual song within the file in seconds; 0 means file end."""
        return self.end_ms // 1000

    @classmethod
    def begin(cls, pair: Pair) -> Song:
        """Start a song from its "file" pair."""
        if pair.name != "file" or not pair.value:
            raise ValueError(f"not a song pair: {pair.name}: {pair.value}")
        return cls(pair.value)

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next song."""
        name, value = pair.name, pair.value
        if name == "file":
            return False
        if name == "Time":
            if self.duration_ms == 0:
                self.duration_ms = _parse_uint(value) * 1000
        elif name == "duration":
            self.duration_ms = _parse_seconds_ms(value)
        elif name == "Range":
            start, _, end = value.partition("-")
            self.start_ms = _parse_seconds_ms(start)
            self.end_ms = _parse_seconds_ms(end) if end else 0
        elif name == "Last-Modified":
            self.last_modified = _parse_iso8601(value)
        elif name == "Pos":
            self.pos = _parse_uint(value)
        elif name == "Id":
            self.id = _parse_uint(value)
        elif name == "Prio":
            self.prio = _parse_uint(value)
        elif name == "Format":
            audio_format = parse_audio_format(value)
            self.audio_format = None if audio_format.is_empty() else audio_format
        elif name == "RealUri":
            self.real_uri = value
        else:
            self.tags.setdefault(name, []).append(value)
        return True

    def get_tag(self, name: str, index: int = 0) -> str | None:
        """Return the index-th value of a tag, or None if there is none."""
        values = self.tags.get(name, [])
        return values[index] if 0 <= index < len(values) else None


@dataclass
class Playlist:
    """A stored playlist."""

    path: str
    last_modified: int = 0

    @classmethod
    def begin(cls, pair: Pair) -> Playlist:
        """Start a playlist from its "playlist" pair."""
        if pair.name != "playlist" or not pair.value:
            raise ValueError(f"not a playlist pair: {pair.name}: {pair.value}")
        return cls(pair.value)

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next playlist."""
        if pair.name == "playlist":
            return False
        if pair.name == "Last-Modified":
            self.last_modified = _parse_iso8601(pair.value)
        return True


class EntityType(enum.Enum):
    """The kind of object an entity holds."""

    UNKNOWN = "unknown"
    DIRECTORY = "directory"
    SONG = "song"
    PLAYLIST = "playlist"


_ENTITY_STARTS = {
    "file": (EntityType.SONG, Song),
    "directory": (EntityType.DIRECTORY, Directory),
    "playlist": (EntityType.PLAYLIST, Playlist),
}


@dataclass
class Entity:
    """One item of a database listing."""

    type: EntityType
    value: Union[Directory, Song, Playlist, None] = None

    def _get(self, expected: EntityType):
        if self.type is not expected:
            raise TypeError(f"entity is a {self.type.value}, not a {expected.value}")
        return self.value

    @property
    def directory(self) -> Directory:
        """The directory held by this entity."""
        return self._get(EntityType.DIRECTORY)

    @property
    def song(self) -> Song:
        """The song held by this entity."""
        return self._get(EntityType.SONG)

    @property
    def playlist(self) -> Playlist:
        """The playlist held by this entity."""
        return self._get(EntityType.PLAYLIST)

    @classmethod
    def begin(cls, pair: Pair) -> Entity:
        """Start an entity from its first pair."""
        start = _ENTITY_STARTS.get(pair.name)
        if start is None:
            return cls(EntityType.UNKNOWN)
        entity_type, factory = start
        return cls(entity_type, factory.begin(pair))

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next entity."""
        if pair.name in _ENTITY_STARTS:
            return False
        if self.value is not None:
            self.value.feed(pair)
        return True


def recv_entity(connection: Connection) -> Entity | None:
    """Receive the next entity of the response, or None at its end."""
    pair = connection.recv_pair()
    if pair is None:
        return None
    try:
        entity = Entity.begin(pair)
    except ValueError as exc:
        raise MpdError(ErrorCode.MALFORMED, "Malformed entity response line") from exc
    while (pair := connection.recv_pair()) is not None and entity.feed(pair):
        pass
    connection.enqueue_pair(pair)
    return entity


def iter_entities(connection: Connection) -> Iterator[Entity]:
    """Yield every entity of the current response."""
    while (entity := recv_entity(connection)) is not None:
        yield entity
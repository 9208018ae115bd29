"""Audio format descriptions as reported by the server."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_ULONG_MOD = 1 << 64


class SampleFormat(enum.IntEnum):
    """Special values of AudioFormat.bits."""

    UNDEFINED = 0x00
    FLOAT = 0xE0
    DSD = 0xE1


@dataclass
class AudioFormat:
    """The format of a raw PCM stream; zero means unknown."""

    sample_rate: int = 0
    bits: int = SampleFormat.UNDEFINED
    channels: int = 0

    def is_empty(self) -> bool:
        """Return True if nothing about the format is known."""
        return (
            self.sample_rate == 0
            and self.bits == SampleFormat.UNDEFINED
            and self.channels == 0
        )


def _parse_unsigned(text: str, pos: int) -> tuple[int, int]:
    """Parse a decimal number the way strtoul does; return (value, end)."""
    i = pos
    while i < len(text) and text[i] in " \t\n\v\f\r":
        i += 1
    negative = False
    if i < len(text) and text[i] in "+-":
        negative = text[i] == "-"
        i += 1
    start = i
    while i < len(text) and text[i].isascii() and text[i].isdigit():
        i += 1
    if i == start:
        return 0, pos
    value = int(text[start:i])
    if value >= _ULONG_MOD:
        value = _ULONG_MOD - 1
    elif negative:
        value = (-value) % _ULONG_MOD
    return value, i


def parse_audio_format(text: str) -> AudioFormat:
    """Parse a format string such as "44100:16:2", "48000:f:2" or "dsd64:2"."""
    if text.startswith("dsd"):
        dsd, end = _parse_unsigned(text, 3)
        if (
            end > 3
            and text[end:end + 1] == ":"
            and 32 <= dsd <= 4096
            and dsd % 2 == 0
        ):
            channels, _ = _parse_unsigned(text, end + 1)
            return AudioFormat(
                sample_rate=(dsd * 44100 // 8) & 0xFFFFFFFF,
                bits=SampleFormat.DSD,
                channels=channels & 0xFF,
            )

    sample_rate, end = _parse_unsigned(text, 0)
    sample_rate &= 0xFFFFFFFF
    if text[end:end + 1] != ":":
        return AudioFormat(sample_rate, SampleFormat.UNDEFINED, 0)

    pos: int | None = end + 1
    if text[pos:pos + 2] == "f:":
        bits: int = SampleFormat.FLOAT
        pos += 2
    elif text[pos:pos + 4] == "dsd:":
        bits = SampleFormat.DSD
        pos += 4
    else:
        bits, end = _parse_unsigned(text, pos)
        bits &= 0xFF
        pos = end + 1 if text[end:end + 1] == ":" else None

    channels = _parse_unsigned(text, pos)[0] & 0xFF if pos is not None else 0
    return AudioFormat(sample_rate, bits, channels)
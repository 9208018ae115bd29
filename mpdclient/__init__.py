"""Client library for the Music Player Daemon protocol: a non-blocking channel, a synchronous connection and command helpers."""

__version__ = "0.1.0"
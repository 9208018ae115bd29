"""Audio output listing and control."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .connection import Connection
from .protocol import Pair

_LEADING_INT = re.compile(r"\s*\+?(\d+)")


def _parse_uint(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class Output:
    """An audio output device configured on the server."""

    id: int
    name: str = ""
    plugin: str | None = None
    enabled: bool = False
    attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def begin(cls, pair: Pair) -> Output:
        """Start an output from its "outputid" pair."""
        if pair.name != "outputid":
            raise ValueError(f"not an output pair: {pair.name}: {pair.value}")
        return cls(_parse_uint(pair.value))

    def feed(self, pair: Pair) -> bool:
        """Apply a pair; return False if it starts the next output."""
        name, value = pair.name, pair.value
        if name == "outputid":
            return False
        if name == "outputname":
            self.name = value
        elif name == "outputenabled":
            self.enabled = _parse_uint(value) != 0
        elif name == "plugin":
            self.plugin = value
        elif name == "attribute":
            key, separator, attr_value = value.partition("=")
            if separator:
                self.attributes[key] = attr_value
        return True


def send_outputs(connection: Connection) -> None:
    """Request the list of audio outputs."""
    connection.send_command("outputs")


def recv_output(connection: Connection) -> Output | None:
    """Receive the next output of the response, or None at its end."""
    pair = connection.recv_pair_named("outputid")
    if pair is None:
        return None
    output = Output.begin(pair)
    while (pair := connection.recv_pair()) is not None and output.feed(pair):
        pass
    connection.enqueue_pair(pair)
    return output


def send_enable_output(connection: Connection, output_id: int) -> None:
    """Enable an output."""
    connection.send_command("enableoutput", int(output_id))


def run_enable_output(connection: Connection, output_id: int) -> None:
    """Enable an output and wait for completion."""
    send_enable_output(connection, output_id)
    connection.response_finish()


def send_disable_output(connection: Connection, output_id: int) -> None:
    """Disable an output."""
    connection.send_command("disableoutput", int(output_id))


def run_disable_output(connection: Connection, output_id: int) -> None:
    """Disable an output and wait for completion."""
    send_disable_output(connection, output_id)
    connection.response_finish()


def send_toggle_output(connection: Connection, output_id: int) -> None:
    """Toggle an output between enabled and disabled."""
    connection.send_command("toggleoutput", int(output_id))


def run_toggle_output(connection: Connection, output_id: int) -> None:
    """Toggle an output and wait for completion."""
    send_toggle_output(connection, output_id)
    connection.response_finish()


def send_output_set(
    connection: Connection, output_id: int, attribute_name: str, attribute_value: str
) -> None:
    """Set a runtime attribute of an output."""
    connection.send_command(
        "outputset", int(output_id), attribute_name, attribute_value
    )


def run_output_set(
    connection: Connection, output_id: int, attribute_name: str, attribute_value: str
) -> None:
    """Set an output attribute and wait for completion."""
    send_output_set(connection, output_id, attribute_name, attribute_value)
    connection.response_finish()


def send_move_output(connection: Connection, output_name: str) -> None:
    """Move an output from another partition into the current one."""
    connection.send_command("moveoutput", output_name)


def run_move_output(connection: Connection, output_name: str) -> None:
    """Move an output into the current partition and wait for completion."""
    send_move_output(connection, output_name)
    connection.response_finish()
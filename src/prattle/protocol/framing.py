"""Line framing for handing serialized messages to a transport."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from prattle.config.schema import WireConfig

if TYPE_CHECKING:
    from prattle.protocol.message import Message


def frame(message: Message, wire: WireConfig | None = None) -> bytes:
    """Return *message* as one terminated, encoded line."""
    wire = wire or WireConfig()
    return (message.to_wire() + wire.line_terminator).encode(wire.encoding)


def frame_all(messages: Iterable[Message], wire: WireConfig | None = None) -> bytes:
    """Frame each message in order and join the results."""
    wire = wire or WireConfig()
    return b"".join(frame(message, wire) for message in messages)

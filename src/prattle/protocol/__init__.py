"""Wire-level message model for the Prattle IM protocol."""

from prattle.protocol.framing import frame, frame_all
from prattle.protocol.kind import FieldRule, KindShape, MessageKind
from prattle.protocol.message import (
    NO_RECEIVER,
    NULL_OUTPUT,
    Message,
    make_acknowledge_message,
    make_addressed_message,
    make_broadcast_message,
    make_group_message,
    make_hello_message,
    make_individual_message,
    make_message,
    make_no_acknowledge_message,
    make_quit_message,
    make_simple_login_message,
)

__all__ = [
    "FieldRule",
    "KindShape",
    "Message",
    "MessageKind",
    "NO_RECEIVER",
    "NULL_OUTPUT",
    "frame",
    "frame_all",
    "make_acknowledge_message",
    "make_addressed_message",
    "make_broadcast_message",
    "make_group_message",
    "make_hello_message",
    "make_individual_message",
    "make_message",
    "make_no_acknowledge_message",
    "make_quit_message",
    "make_simple_login_message",
]

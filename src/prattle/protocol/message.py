"""The immutable protocol message and its factories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from prattle.protocol.kind import FieldRule, MessageKind

logger = logging.getLogger(__name__)

# Sent in place of a missing sender or text.
NULL_OUTPUT = "--"
# Reported by ``Message.msg_receiver`` when nobody is addressed.
NO_RECEIVER = "NO one"


@dataclass(frozen=True)
class Message:
    """A single transmission between an IM client and the server.

    Build instances with the ``make_*`` factories below rather than calling
    the constructor; each factory fills exactly the slots its kind uses.
    Direct construction rejects a value in a slot the kind never carries,
    but does not check that required slots are filled: a group message
    without a receiver is accepted and serializes without a receiver pair.
    """

    kind: MessageKind
    sender: str | None = None
    receiver: str | None = None
    text: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, MessageKind):
            raise TypeError(f"kind must be a MessageKind, got {self.kind!r}")
        shape = self.kind.shape
        for slot, rule in (
            ("sender", shape.sender),
            ("receiver", shape.receiver),
            ("text", shape.text),
        ):
            if rule is FieldRule.ABSENT and getattr(self, slot) is not None:
                raise ValueError(f"{self.kind.name} messages carry no {slot}")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def name(self) -> str | None:
        """Name of the message originator."""
        return self.sender

    @property
    def msg_receiver(self) -> str:
        """Name of the addressed user or group, or ``"NO one"``."""
        return NO_RECEIVER if self.receiver is None else self.receiver

    @property
    def tag(self) -> str:
        """Wire tag of this message's kind."""
        return self.kind.tag

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_acknowledge(self) -> bool:
        return self.kind is MessageKind.ACKNOWLEDGE

    def is_broadcast_message(self) -> bool:
        return self.kind is MessageKind.BROADCAST

    def is_display_message(self) -> bool:
        """Return True if the recipient should display this message's text.

        Only broadcasts qualify; group and individual messages do not.
        """
        return self.kind is MessageKind.BROADCAST

    def is_group_message(self) -> bool:
        return self.kind is MessageKind.GROUP_MESSAGE

    def is_individual_message(self) -> bool:
        return self.kind is MessageKind.INDIVIDUAL_MESSAGE

    def is_initialization(self) -> bool:
        """Return True for a client's login attempt."""
        return self.kind is MessageKind.HELLO

    def terminate(self) -> bool:
        """Return True if this message signs off from the server."""
        return self.kind is MessageKind.QUIT

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_wire(self) -> str:
        """Return the canonical single-line wire form.

        The tag is followed by length-prefixed sender and text values.  A
        receiver pair sits between them only when a receiver is present;
        missing sender or text is sent as ``--``.
        """
        parts = [self.kind.tag]
        parts.extend(_field(self.sender))
        if self.receiver is not None:
            parts.extend(_field(self.receiver))
        parts.extend(_field(self.text))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_wire()


def _field(value: str | None) -> tuple[str, str]:
    """Length token and value token for one slot."""
    if value is None:
        value = NULL_OUTPUT
    return str(wire_length(value)), value


def wire_length(value: str) -> int:
    """Length of *value* in UTF-16 code units, as peers count it.

    Characters outside the Basic Multilingual Plane count as two.
    """
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


# ----------------------------------------------------------------------
# Kind factories
# ----------------------------------------------------------------------


def make_hello_message(name: str | None) -> Message:
    """Login attempt carrying the requested screen name in the text slot."""
    return Message(MessageKind.HELLO, text=name)


def make_simple_login_message(name: str | None) -> Message:
    """Login message carrying the user's name in the sender slot."""
    return Message(MessageKind.HELLO, sender=name)


def make_acknowledge_message(name: str | None) -> Message:
    """Acknowledge that the user successfully logged in as *name*."""
    return Message(MessageKind.ACKNOWLEDGE, sender=name)


def make_no_acknowledge_message() -> Message:
    """Reject a bad login attempt."""
    return Message(MessageKind.NO_ACKNOWLEDGE)


def make_quit_message(name: str | None) -> Message:
    """Start (or, from the server, finish) logging *name* out."""
    return Message(MessageKind.QUIT, sender=name)


def make_broadcast_message(name: str | None, text: str | None) -> Message:
    """Announcement from *name* sent to every logged-in user."""
    return Message(MessageKind.BROADCAST, sender=name, text=text)


def make_group_message(
    name: str | None, group_name: str | None, text: str | None
) -> Message:
    return Message(
        MessageKind.GROUP_MESSAGE, sender=name, receiver=group_name, text=text
    )


def make_individual_message(
    sender: str | None, receiver: str | None, text: str | None
) -> Message:
    return Message(
        MessageKind.INDIVIDUAL_MESSAGE, sender=sender, receiver=receiver, text=text
    )


# ----------------------------------------------------------------------
# Dispatch by tag
# ----------------------------------------------------------------------

_UNADDRESSED: dict[MessageKind, Callable[[str | None, str | None], Message]] = {
    MessageKind.QUIT: lambda sender, text: make_quit_message(sender),
    MessageKind.HELLO: lambda sender, text: make_simple_login_message(sender),
    MessageKind.BROADCAST: make_broadcast_message,
    MessageKind.ACKNOWLEDGE: lambda sender, text: make_acknowledge_message(sender),
    MessageKind.NO_ACKNOWLEDGE: lambda sender, text: make_no_acknowledge_message(),
}

_ADDRESSED: dict[
    MessageKind, Callable[[str | None, str | None, str | None], Message]
] = {
    MessageKind.INDIVIDUAL_MESSAGE: make_individual_message,
    MessageKind.GROUP_MESSAGE: make_group_message,
}


def make_message(
    tag: str, sender: str | None, text: str | None
) -> Message | None:
    """Build a message without a receiver from its wire *tag*.

    Returns ``None`` if *tag* does not name one of the quit, hello,
    broadcast, acknowledge or no-acknowledge kinds.
    """
    kind = MessageKind.from_tag(tag)
    factory = _UNADDRESSED.get(kind) if kind is not None else None
    if factory is None:
        logger.debug("No unaddressed message kind for tag %r", tag)
        return None
    return factory(sender, text)


def make_addressed_message(
    tag: str, sender: str | None, receiver: str | None, text: str | None
) -> Message | None:
    """Build an individual or group message from its wire *tag*.

    Returns ``None`` for any other tag.
    """
    kind = MessageKind.from_tag(tag)
    factory = _ADDRESSED.get(kind) if kind is not None else None
    if factory is None:
        logger.debug("No addressed message kind for tag %r", tag)
        return None
    return factory(sender, receiver, text)

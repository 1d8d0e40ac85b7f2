"""Message kinds and the fields each kind carries on the wire."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldRule(Enum):
    """How a message slot is populated for a given kind."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    ABSENT = "absent"


@dataclass(frozen=True)
class KindShape:
    """Population rules for the sender, receiver and text slots."""

    sender: FieldRule
    receiver: FieldRule
    text: FieldRule


class MessageKind(Enum):
    """Every transmission type the protocol knows, keyed by wire tag."""

    # Client attempting to log in with a screen name.
    HELLO = "HLO"
    # Server accepting a login.
    ACKNOWLEDGE = "ACK"
    # Server rejecting a login.
    NO_ACKNOWLEDGE = "NAK"
    # Client starting a logout; server echoes it once logout completes.
    QUIT = "BYE"
    GROUP_MESSAGE = "GRM"
    INDIVIDUAL_MESSAGE = "INDV"
    # Text sent to every connected user.
    BROADCAST = "BCT"

    def __str__(self) -> str:
        return self.value

    @property
    def tag(self) -> str:
        """Short wire name of this kind."""
        return self.value

    @property
    def shape(self) -> KindShape:
        return _SHAPES[self]

    @property
    def carries_receiver(self) -> bool:
        """True if messages of this kind are addressed to a user or group."""
        return self.shape.receiver is not FieldRule.ABSENT

    @classmethod
    def from_tag(cls, tag: str) -> MessageKind | None:
        """Return the kind whose tag is exactly *tag*, or ``None``."""
        try:
            return cls(tag)
        except ValueError:
            return None


_R, _O, _A = FieldRule.REQUIRED, FieldRule.OPTIONAL, FieldRule.ABSENT

_SHAPES: dict[MessageKind, KindShape] = {
    MessageKind.HELLO: KindShape(sender=_O, receiver=_A, text=_O),
    MessageKind.ACKNOWLEDGE: KindShape(sender=_O, receiver=_A, text=_A),
    MessageKind.NO_ACKNOWLEDGE: KindShape(sender=_A, receiver=_A, text=_A),
    MessageKind.QUIT: KindShape(sender=_R, receiver=_A, text=_A),
    MessageKind.GROUP_MESSAGE: KindShape(sender=_R, receiver=_R, text=_R),
    MessageKind.INDIVIDUAL_MESSAGE: KindShape(sender=_R, receiver=_R, text=_R),
    MessageKind.BROADCAST: KindShape(sender=_R, receiver=_A, text=_R),
}

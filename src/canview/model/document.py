"""Parsed schema document handed to the model builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

from canview.model.tree import ByteOrder


class NoTransmitter(Enum):
    """Marker for a message with no declared transmitting node."""

    NO_TRANSMITTER = "no_transmitter"


NO_TRANSMITTER = NoTransmitter.NO_TRANSMITTER

Transmitter = Union[str, NoTransmitter]


@dataclass(frozen=True)
class DocumentSignal:
    """Raw signal descriptor as declared in the schema."""

    name: str
    start_bit: int
    length_bits: int
    byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN
    is_signed: bool = False
    scale: float = 1.0
    offset: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    unit: str = ""


@dataclass(frozen=True)
class DocumentMessage:
    """Raw message descriptor as declared in the schema."""

    frame_id: int
    name: str
    length_bytes: int
    transmitter: Transmitter = NO_TRANSMITTER
    signals: Sequence[DocumentSignal] = ()


@dataclass
class SchemaDocument:
    """Messages plus the comment and value table lookups of one schema.

    Lookups are keyed by message identifier and, for signal lookups, the
    signal name. Value tables are ordered sequences of ``(raw, label)``
    pairs as declared.
    """

    messages: list[DocumentMessage] = field(default_factory=list)
    signal_comments: dict[tuple[int, str], str] = field(default_factory=dict)
    message_comments: dict[int, str] = field(default_factory=dict)
    value_tables: dict[tuple[int, str], list[tuple[int, str]]] = field(default_factory=dict)

    def signal_comment(self, frame_id: int, signal_name: str) -> Optional[str]:
        return self.signal_comments.get((frame_id, signal_name))

    def message_comment(self, frame_id: int) -> Optional[str]:
        return self.message_comments.get(frame_id)

    def value_table(self, frame_id: int, signal_name: str) -> Sequence[tuple[int, str]]:
        return self.value_tables.get((frame_id, signal_name), ())

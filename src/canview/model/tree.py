"""Hierarchical model of a CAN schema: ECUs own messages, messages own signals."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, Optional, Union


class ByteOrder(Enum):
    """Byte ordering declared for a signal."""

    LITTLE_ENDIAN = "little"
    BIG_ENDIAN = "big"


class SignalKind(Enum):
    """Tag of the resolved signal representation."""

    BOOL = "bool"
    LINEAR = "linear"
    ENUM = "enum"


@dataclass(frozen=True)
class BoolType:
    """Single-bit flag."""

    kind: ClassVar[SignalKind] = SignalKind.BOOL


@dataclass(frozen=True)
class LinearType:
    """Raw integer rescaled as ``raw * multiplier + offset``."""

    multiplier: float = 1.0
    offset: float = 0.0
    kind: ClassVar[SignalKind] = SignalKind.LINEAR


@dataclass(frozen=True)
class EnumType:
    """Raw integer looked up in a value table sorted by raw value."""

    entries: tuple[tuple[int, str], ...] = ()
    kind: ClassVar[SignalKind] = SignalKind.ENUM

    def label_for(self, raw: int) -> Optional[str]:
        """Return the label of the first entry matching ``raw``."""
        for value, label in self.entries:
            if value == raw:
                return label
        return None


SignalType = Union[BoolType, LinearType, EnumType]


@dataclass(frozen=True)
class Signal:
    """A bit field inside a message payload.

    ``start_bit`` is counted from the start of the payload. The field must
    fit the payload it is decoded against; that is checked at decode time.
    """

    name: str
    start_bit: int
    length_bits: int
    signal_type: SignalType = field(default_factory=LinearType)
    byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN
    is_signed: bool = False
    unit: str = ""
    minimum: float = 0.0
    maximum: float = 0.0
    comment: Optional[str] = None

    @property
    def end_bit(self) -> int:
        """First bit past the end of the field."""
        return self.start_bit + self.length_bits

    def fits(self, payload_length: int) -> bool:
        """Check whether the field lies within a payload of the given byte length."""
        return self.end_bit <= payload_length * 8


@dataclass(frozen=True)
class Message:
    """A message as declared by the schema.

    ``frame_id`` is the raw 32-bit identifier of the schema; any flag bits
    it carries are passed through untouched.
    """

    frame_id: int
    name: str
    length_bytes: int
    signals: tuple[Signal, ...] = ()
    comment: Optional[str] = None

    def get_signal(self, name: str) -> Optional[Signal]:
        """Get a signal by name."""
        for signal in self.signals:
            if signal.name == name:
                return signal
        return None

    def __repr__(self) -> str:
        return f"Message({self.name}, id={self.frame_id:#x}, signals={len(self.signals)})"


@dataclass(frozen=True)
class Ecu:
    """A transmitting node and the messages it owns, in discovery order."""

    name: str
    messages: tuple[Message, ...] = ()

    def get_message(self, frame_id: int) -> Optional[Message]:
        """Get the first owned message with the given identifier."""
        for message in self.messages:
            if message.frame_id == frame_id:
                return message
        return None


@dataclass(frozen=True)
class TreeModel:
    """Immutable result of building a schema document."""

    ecus: tuple[Ecu, ...] = ()

    @property
    def message_count(self) -> int:
        return sum(len(ecu.messages) for ecu in self.ecus)

    @property
    def signal_count(self) -> int:
        return sum(len(message.signals) for message in self.iter_messages())

    def get_ecu(self, name: str) -> Optional[Ecu]:
        """Get an ECU by name."""
        for ecu in self.ecus:
            if ecu.name == name:
                return ecu
        return None

    def iter_messages(self) -> Iterator[Message]:
        """Iterate over all messages, ECU by ECU."""
        for ecu in self.ecus:
            yield from ecu.messages

    def find_messages(self, frame_id: int) -> list[Message]:
        """Return every message declared with ``frame_id`` across all ECUs."""
        return [m for m in self.iter_messages() if m.frame_id == frame_id]

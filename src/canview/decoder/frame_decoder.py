"""Decoding every signal of a message from one frame."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from canview.core.frame import CANFrame
from canview.decoder.signal import DecodedValue, decode
from canview.errors import DecodeError
from canview.model.tree import Message, Signal, TreeModel

logger = logging.getLogger(__name__)


@dataclass
class SignalReading:
    """Outcome of decoding one signal: a value or the error that prevented it."""

    signal: Signal
    value: Optional[DecodedValue] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        """Text shown for this reading."""
        if self.error is not None:
            return type(self.error).__name__
        return str(self.value)


@dataclass
class DecodedMessage:
    """All signal readings of a message for one payload."""

    message: Message
    payload: bytes
    timestamp: Optional[float] = None
    readings: list[SignalReading] = field(default_factory=list)

    def get(self, signal_name: str) -> Optional[SignalReading]:
        """Get a reading by signal name."""
        for reading in self.readings:
            if reading.signal.name == signal_name:
                return reading
        return None

    @property
    def errors(self) -> list[SignalReading]:
        return [r for r in self.readings if not r.ok]

    def __repr__(self) -> str:
        sig_str = ", ".join(f"{r.signal.name}={r.display}" for r in self.readings)
        return f"{self.message.name}[{self.message.frame_id:#x}]: {sig_str}"


def decode_message(
    message: Message,
    payload: bytes,
    timestamp: Optional[float] = None,
) -> DecodedMessage:
    """Decode each signal of ``message`` independently.

    A signal that does not fit the payload gets its error recorded and the
    remaining signals are still decoded.
    """
    decoded = DecodedMessage(message=message, payload=bytes(payload), timestamp=timestamp)

    for signal in message.signals:
        try:
            decoded.readings.append(SignalReading(signal, value=decode(signal, payload)))
        except DecodeError as e:
            logger.debug("Could not decode %s.%s: %s", message.name, signal.name, e)
            decoded.readings.append(SignalReading(signal, error=e))

    return decoded


class FrameDecoder:
    """Decodes incoming frames against a built model.

    Frames are matched to messages by schema identifier. When several
    ECUs declare the same identifier the first one discovered is used.
    """

    def __init__(self, model: TreeModel) -> None:
        self._model = model
        self._messages: dict[int, Message] = {}
        self._unknown_ids: set[int] = set()

        for message in model.iter_messages():
            self._messages.setdefault(message.frame_id, message)

    @property
    def model(self) -> TreeModel:
        return self._model

    @property
    def registered_ids(self) -> set[int]:
        """Set of identifiers with a message in the model."""
        return set(self._messages.keys())

    @property
    def unknown_ids(self) -> set[int]:
        """Set of frame identifiers seen without a message."""
        return self._unknown_ids.copy()

    def get_message(self, frame_id: int) -> Optional[Message]:
        return self._messages.get(frame_id)

    def decode_frame(self, frame: CANFrame) -> Optional[DecodedMessage]:
        """Decode a frame, or return None if no message matches its ID."""
        message = self._messages.get(frame.schema_id)

        if message is None:
            self._unknown_ids.add(frame.schema_id)
            return None

        return decode_message(message, frame.data, timestamp=frame.timestamp)

    def decode_batch(self, frames: list[CANFrame]) -> list[DecodedMessage]:
        """Decode multiple frames, skipping unknown IDs."""
        results = []
        for frame in frames:
            decoded = self.decode_frame(frame)
            if decoded is not None:
                results.append(decoded)
        return results

    def clear_unknown(self) -> None:
        """Clear the set of unknown IDs."""
        self._unknown_ids.clear()

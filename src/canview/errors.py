"""Exception hierarchies for schema loading and signal decoding."""

from __future__ import annotations


class SchemaError(Exception):
    """A schema document could not be produced, so no model was built."""


BuildError = SchemaError


class IncompleteDocumentError(SchemaError):
    """Schema input is empty, truncated or otherwise unrecoverable."""

    def __init__(self, detail: str = "document incomplete") -> None:
        super().__init__(detail)
        self.detail = detail


class GrammarError(SchemaError):
    """The schema parser rejected the input text."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"grammar error: {detail}")
        self.detail = detail


class DuplicateMultiplexorError(SchemaError):
    """A message declares more than one multiplexor signal."""

    def __init__(self, message_name: str, signal_names: list[str]) -> None:
        super().__init__(
            f"duplicate multiplexor definitions in message {message_name!r}: "
            f"{', '.join(signal_names)}"
        )
        self.message_name = message_name
        self.signal_names = signal_names


class DecodeError(ValueError):
    """A single signal could not be decoded from a payload."""


class RangeTooBigError(DecodeError):
    """The payload is shorter than the signal's declared bit span."""

    def __init__(self, signal_name: str, end_bit: int, payload_bits: int) -> None:
        super().__init__(
            f"signal {signal_name!r} spans bits up to {end_bit}, "
            f"payload only has {payload_bits}"
        )
        self.signal_name = signal_name
        self.end_bit = end_bit
        self.payload_bits = payload_bits

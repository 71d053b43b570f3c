"""Bit-level decoding of a single signal from a raw payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from canview.errors import RangeTooBigError
from canview.model.tree import Signal, SignalKind

INVALID_ENUM_LABEL = "INVALID VALUE"

_INT64_SIGN = 1 << 63
_UINT64_RANGE = 1 << 64


def _format_number(value: float) -> str:
    text = f"{value + 0.0:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


@dataclass(frozen=True)
class BoolValue:
    """Decoded single-bit flag."""

    value: bool

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class NumberValue:
    """Rescaled physical value and its unit."""

    value: float
    unit: str = ""

    def __str__(self) -> str:
        if self.unit:
            return f"{_format_number(self.value)} {self.unit}"
        return _format_number(self.value)


@dataclass(frozen=True)
class EnumValue:
    """Raw value and the label found for it in the value table."""

    raw: int
    label: str

    @property
    def is_valid(self) -> bool:
        return self.label != INVALID_ENUM_LABEL

    def __str__(self) -> str:
        return f"{self.raw} ({self.label})"


DecodedValue = Union[BoolValue, NumberValue, EnumValue]


def extract_raw(signal: Signal, payload: bytes) -> int:
    """Extract the signal's bit field as an integer.

    Bits are numbered from the least significant bit of the first byte
    upwards; the bit at ``start_bit`` becomes the least significant bit of
    the result. Byte order is not consulted. Signed fields are sign
    extended over ``length_bits`` bits, unsigned fields are reinterpreted
    as signed 64-bit.
    """
    if not signal.fits(len(payload)):
        raise RangeTooBigError(signal.name, signal.end_bit, len(payload) * 8)
    if signal.length_bits <= 0:
        return 0

    value = int.from_bytes(payload, byteorder="little")
    raw = (value >> signal.start_bit) & ((1 << signal.length_bits) - 1)

    if signal.is_signed:
        sign_bit = 1 << (signal.length_bits - 1)
        if raw & sign_bit:
            raw -= 1 << signal.length_bits
    elif signal.length_bits <= 64 and raw & _INT64_SIGN:
        raw -= _UINT64_RANGE
    return raw


def decode(signal: Signal, payload: bytes) -> DecodedValue:
    """Decode one signal from a payload.

    Raises:
        RangeTooBigError: the payload is too short for the signal.
    """
    raw = extract_raw(signal, payload)
    signal_type = signal.signal_type

    if signal_type.kind is SignalKind.BOOL:
        return BoolValue(raw != 0)
    if signal_type.kind is SignalKind.LINEAR:
        return NumberValue(raw * signal_type.multiplier + signal_type.offset, signal.unit)

    label = signal_type.label_for(raw)
    return EnumValue(raw, label if label is not None else INVALID_ENUM_LABEL)

"""Builds the ECU -> message -> signal tree from a parsed schema document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from canview.model.document import (
    NO_TRANSMITTER,
    DocumentMessage,
    DocumentSignal,
    SchemaDocument,
    Transmitter,
)
from canview.model.tree import (
    BoolType,
    Ecu,
    EnumType,
    LinearType,
    Message,
    Signal,
    SignalType,
    TreeModel,
)

logger = logging.getLogger(__name__)

NULL_SENDER = "NULL SENDER"


@dataclass
class BuilderConfig:
    """Configuration for the model builder."""

    null_sender_name: str = NULL_SENDER


def resolve_signal_type(
    raw: DocumentSignal,
    value_table: Sequence[tuple[int, str]],
) -> SignalType:
    """Pick the representation of a signal.

    Single-bit signals are always booleans, even with a value table
    attached. Otherwise a non-empty value table makes an enumeration and
    everything else is rescaled linearly.
    """
    if raw.length_bits == 1:
        return BoolType()
    if value_table:
        entries = sorted(
            ((int(value), str(label)) for value, label in value_table),
            key=lambda entry: entry[0],
        )
        return EnumType(tuple(entries))
    return LinearType(multiplier=raw.scale, offset=raw.offset)


def owner_name(transmitter: Transmitter, config: Optional[BuilderConfig] = None) -> str:
    """Name of the ECU owning a message sent by ``transmitter``."""
    if transmitter is NO_TRANSMITTER:
        return (config or BuilderConfig()).null_sender_name
    return str(transmitter)


def _build_signal(document: SchemaDocument, frame_id: int, raw: DocumentSignal) -> Signal:
    return Signal(
        name=raw.name,
        start_bit=raw.start_bit,
        length_bits=raw.length_bits,
        signal_type=resolve_signal_type(raw, document.value_table(frame_id, raw.name)),
        byte_order=raw.byte_order,
        is_signed=raw.is_signed,
        unit=raw.unit,
        minimum=raw.minimum,
        maximum=raw.maximum,
        comment=document.signal_comment(frame_id, raw.name),
    )


def _build_message(document: SchemaDocument, raw: DocumentMessage) -> Message:
    return Message(
        frame_id=raw.frame_id,
        name=raw.name,
        length_bytes=raw.length_bytes,
        signals=tuple(_build_signal(document, raw.frame_id, s) for s in raw.signals),
        comment=document.message_comment(raw.frame_id),
    )


def build(document: SchemaDocument, config: Optional[BuilderConfig] = None) -> TreeModel:
    """Group the document's messages under the ECUs that transmit them.

    ECUs appear in the order their first message is declared and each ECU
    keeps its messages in declaration order. Messages sharing an
    identifier are never merged. Problems with individual signals are left
    for the decoder to report.
    """
    config = config or BuilderConfig()
    owned: dict[str, list[Message]] = {}

    for raw in document.messages:
        message = _build_message(document, raw)
        name = owner_name(raw.transmitter, config)

        if name not in owned:
            logger.debug("New ECU %r discovered from message %s", name, raw.name)
            owned[name] = []
        owned[name].append(message)

    model = TreeModel(
        ecus=tuple(Ecu(name=name, messages=tuple(messages)) for name, messages in owned.items())
    )
    logger.info(
        "Built model: %d ECUs, %d messages, %d signals",
        len(model.ecus),
        model.message_count,
        model.signal_count,
    )
    return model

"""Loading DBC schemas through cantools and building models from them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import cantools

from canview.errors import (
    DuplicateMultiplexorError,
    GrammarError,
    IncompleteDocumentError,
)
from canview.model.builder import BuilderConfig, build
from canview.model.document import (
    NO_TRANSMITTER,
    DocumentMessage,
    DocumentSignal,
    SchemaDocument,
    Transmitter,
)
from canview.model.tree import ByteOrder, TreeModel

logger = logging.getLogger(__name__)

# Placeholder node the DBC format uses for "no sender".
DBC_NULL_NODE = "Vector__XXX"

EXTENDED_FRAME_FLAG = 0x80000000


@dataclass
class LoaderConfig:
    """Configuration for reading schema text."""

    database_format: str = "dbc"
    strict: bool = False
    encoding: str = "cp1252"


def _transmitter(senders: Optional[list[str]]) -> Transmitter:
    if not senders or senders[0] == DBC_NULL_NODE:
        return NO_TRANSMITTER
    return senders[0]


def _byte_order(value: str) -> ByteOrder:
    if value == "big_endian":
        return ByteOrder.BIG_ENDIAN
    return ByteOrder.LITTLE_ENDIAN


def _check_multiplexors(message: Any) -> None:
    """Reject messages declaring more than one top-level multiplexor."""
    multiplexors = [
        s.name for s in message.signals
        if getattr(s, "is_multiplexer", False) and not getattr(s, "multiplexer_ids", None)
    ]
    if len(multiplexors) > 1:
        raise DuplicateMultiplexorError(message.name, multiplexors)


def document_from_database(db: Any) -> SchemaDocument:
    """Adapt a cantools database into a schema document.

    Extended frames get bit 31 set so the raw DBC identifier is kept.
    """
    document = SchemaDocument()

    for message in db.messages:
        _check_multiplexors(message)

        frame_id = message.frame_id
        if message.is_extended_frame:
            frame_id |= EXTENDED_FRAME_FLAG

        signals = []
        for signal in message.signals:
            signals.append(DocumentSignal(
                name=signal.name,
                start_bit=signal.start,
                length_bits=signal.length,
                byte_order=_byte_order(signal.byte_order),
                is_signed=signal.is_signed,
                scale=float(signal.scale),
                offset=float(signal.offset),
                minimum=float(signal.minimum) if signal.minimum is not None else 0.0,
                maximum=float(signal.maximum) if signal.maximum is not None else 0.0,
                unit=signal.unit or "",
            ))

            if signal.comment:
                document.signal_comments[(frame_id, signal.name)] = signal.comment
            if signal.choices:
                document.value_tables[(frame_id, signal.name)] = [
                    (int(value), str(label)) for value, label in signal.choices.items()
                ]

        if message.comment:
            document.message_comments[frame_id] = message.comment

        document.messages.append(DocumentMessage(
            frame_id=frame_id,
            name=message.name,
            length_bytes=message.length,
            transmitter=_transmitter(message.senders),
            signals=signals,
        ))

    return document


def _parser_detail(error: Exception) -> str:
    """Pick the most specific cause out of a cantools load failure."""
    inner = getattr(error, "e_dbc", None)
    return str(inner if inner is not None else error)


def load_document_from_string(text: str, config: Optional[LoaderConfig] = None) -> SchemaDocument:
    """Parse schema text into a document.

    Raises:
        IncompleteDocumentError: the text is empty.
        GrammarError: the parser rejected the text.
        DuplicateMultiplexorError: a message has two multiplexor signals.
    """
    config = config or LoaderConfig()
    if not text.strip():
        raise IncompleteDocumentError("document incomplete: no schema content")

    try:
        db = cantools.database.load_string(
            text,
            database_format=config.database_format,
            strict=config.strict,
            sort_signals=None,
        )
    except Exception as e:
        raise GrammarError(_parser_detail(e)) from e

    document = document_from_database(db)
    logger.debug("Loaded schema document with %d messages", len(document.messages))
    return document


def load_document_from_bytes(data: bytes, config: Optional[LoaderConfig] = None) -> SchemaDocument:
    """Decode raw schema bytes and parse them into a document."""
    config = config or LoaderConfig()
    try:
        text = data.decode(config.encoding)
    except UnicodeDecodeError as e:
        raise IncompleteDocumentError(f"document incomplete: {e}") from e
    return load_document_from_string(text, config)


def load_document(path: Union[str, Path], config: Optional[LoaderConfig] = None) -> SchemaDocument:
    """Read and parse a schema file."""
    return load_document_from_bytes(Path(path).read_bytes(), config)


def load_model_from_string(
    text: str,
    config: Optional[LoaderConfig] = None,
    builder_config: Optional[BuilderConfig] = None,
) -> TreeModel:
    return build(load_document_from_string(text, config), builder_config)


def load_model_from_bytes(
    data: bytes,
    config: Optional[LoaderConfig] = None,
    builder_config: Optional[BuilderConfig] = None,
) -> TreeModel:
    return build(load_document_from_bytes(data, config), builder_config)


def load_model(
    path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
    builder_config: Optional[BuilderConfig] = None,
) -> TreeModel:
    """Load a schema file and build its model."""
    logger.info("Loading schema from %s", path)
    return build(load_document(path, config), builder_config)

"""Schema model: data types, builder and loader."""

from canview.model.builder import BuilderConfig, build
from canview.model.document import NO_TRANSMITTER, DocumentMessage, DocumentSignal, SchemaDocument
from canview.model.tree import (
    BoolType,
    ByteOrder,
    Ecu,
    EnumType,
    LinearType,
    Message,
    Signal,
    SignalKind,
    TreeModel,
)

__all__ = [
    "BuilderConfig",
    "build",
    "NO_TRANSMITTER",
    "DocumentMessage",
    "DocumentSignal",
    "SchemaDocument",
    "BoolType",
    "ByteOrder",
    "Ecu",
    "EnumType",
    "LinearType",
    "Message",
    "Signal",
    "SignalKind",
    "TreeModel",
]

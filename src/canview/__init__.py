"""canview - build a queryable model from a CAN schema and decode frames with it."""

__version__ = "0.1.0"

from canview.core.frame import CANFrame
from canview.decoder.frame_decoder import FrameDecoder, decode_message
from canview.decoder.signal import decode
from canview.errors import DecodeError, RangeTooBigError, SchemaError
from canview.model.builder import build
from canview.model.loader import load_model, load_model_from_bytes, load_model_from_string
from canview.model.tree import Ecu, Message, Signal, TreeModel
from canview.viewer.frame_store import FrameStore

__all__ = [
    "CANFrame",
    "FrameDecoder",
    "decode_message",
    "decode",
    "DecodeError",
    "RangeTooBigError",
    "SchemaError",
    "build",
    "load_model",
    "load_model_from_bytes",
    "load_model_from_string",
    "Ecu",
    "Message",
    "Signal",
    "TreeModel",
    "FrameStore",
]

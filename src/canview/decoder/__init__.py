"""Signal and frame decoding."""

from canview.decoder.signal import BoolValue, EnumValue, NumberValue, decode, extract_raw
from canview.decoder.frame_decoder import DecodedMessage, FrameDecoder, SignalReading, decode_message

__all__ = [
    "BoolValue",
    "EnumValue",
    "NumberValue",
    "decode",
    "extract_raw",
    "DecodedMessage",
    "FrameDecoder",
    "SignalReading",
    "decode_message",
]

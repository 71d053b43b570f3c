"""CAN frame representation."""

from dataclasses import dataclass, field
from typing import Optional
import time

MAX_DATA_LENGTH = 64


def hex_to_bytes(hex_str: str) -> bytes:
    # Allow optional "0x" prefix and whitespace between bytes
    s = "".join(hex_str.split()).lower()
    if s.startswith("0x"):
        s = s[2:]
    if len(s) % 2 != 0:
        raise ValueError(f"Hex string must have even length, got {len(s)}")
    return bytes.fromhex(s)


@dataclass(frozen=True)
class CANFrame:
    """A single timestamped frame delivered by the acquisition side.

    Attributes:
        arbitration_id: 11-bit (standard) or 29-bit (extended) message identifier.
        data: Payload bytes (up to 64 bytes for CAN FD).
        timestamp: Time when the frame was received (seconds since epoch).
        is_extended_id: True if using 29-bit extended identifier.
        dlc: Data Length Code, defaults to the payload length.
    """

    arbitration_id: int
    data: bytes = field(default_factory=bytes)
    timestamp: float = field(default_factory=time.time)
    is_extended_id: bool = False
    dlc: Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.data) > MAX_DATA_LENGTH:
            raise ValueError(
                f"CAN frame data cannot exceed {MAX_DATA_LENGTH} bytes, got {len(self.data)}"
            )

        if self.is_extended_id:
            if not (0 <= self.arbitration_id <= 0x1FFFFFFF):
                raise ValueError(
                    f"Extended arbitration ID must be 0-0x1FFFFFFF, got {self.arbitration_id:#x}"
                )
        else:
            if not (0 <= self.arbitration_id <= 0x7FF):
                raise ValueError(
                    f"Standard arbitration ID must be 0-0x7FF, got {self.arbitration_id:#x}"
                )

    @property
    def effective_dlc(self) -> int:
        """Return the effective DLC (data length code)."""
        if self.dlc is not None:
            return self.dlc
        return len(self.data)

    @property
    def schema_id(self) -> int:
        """Identifier as written in a DBC schema (bit 31 flags extended frames)."""
        if self.is_extended_id:
            return self.arbitration_id | 0x80000000
        return self.arbitration_id

    def hex_data(self) -> str:
        """Return data as a hex string."""
        return self.data.hex().upper()

    def __repr__(self) -> str:
        id_str = f"{self.arbitration_id:#05x}" if not self.is_extended_id else f"{self.arbitration_id:#010x}"
        return (
            f"CANFrame(id={id_str}, data={self.hex_data()}, "
            f"dlc={self.effective_dlc}, ts={self.timestamp:.6f})"
        )

"""Frame types shared with the acquisition side."""

from canview.core.frame import CANFrame

__all__ = ["CANFrame"]

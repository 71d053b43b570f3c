"""Frame storage and replay for display."""

from canview.viewer.frame_store import ByteChange, FrameStore, ascii_preview
from canview.viewer.replay import FrameReplayer

__all__ = ["ByteChange", "FrameStore", "ascii_preview", "FrameReplayer"]

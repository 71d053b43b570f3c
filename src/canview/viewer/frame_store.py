"""Latest-frame-per-ID store shared between acquisition and display."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Iterable, Optional

from canview.core.frame import CANFrame


class ByteChange(Enum):
    """How a payload byte moved since the previous snapshot."""

    UNCHANGED = "unchanged"
    INCREASED = "increased"
    DECREASED = "decreased"
    NEW = "new"


def ascii_preview(data: bytes) -> str:
    """Render printable ASCII bytes as-is and everything else as '.'."""
    return "".join(chr(b) if 0x21 <= b <= 0x7E else "." for b in data)


class FrameStore:
    """Keeps the most recent frame for each schema ID.

    Frames are keyed by ``CANFrame.schema_id`` so standard and extended
    frames sharing an arbitration ID are kept apart.

    The acquisition thread calls ``update`` while the display reads
    snapshots. While paused, incoming frames are discarded. The previous
    snapshot is kept so the display can show which bytes changed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frames: dict[int, CANFrame] = {}
        self._previous: dict[int, CANFrame] = {}
        self._paused = False
        self._frame_count = 0
        self._discarded = 0

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    @property
    def frame_count(self) -> int:
        """Number of frames accepted since creation or the last clear."""
        return self._frame_count

    @property
    def discarded_count(self) -> int:
        """Number of frames dropped while paused."""
        return self._discarded

    @property
    def unique_ids(self) -> set[int]:
        with self._lock:
            return set(self._frames.keys())

    def pause(self) -> None:
        with self._lock:
            self._paused = True

    def resume(self) -> None:
        with self._lock:
            self._paused = False

    def toggle_pause(self) -> bool:
        """Flip the paused state and return the new one."""
        with self._lock:
            self._paused = not self._paused
            return self._paused

    def update(self, frame: CANFrame) -> bool:
        """Store a frame as the latest for its ID. Returns False if paused."""
        with self._lock:
            if self._paused:
                self._discarded += 1
                return False
            self._frames[frame.schema_id] = frame
            self._frame_count += 1
        return True

    def update_many(self, frames: Iterable[CANFrame]) -> int:
        """Store a batch of frames, returning how many were accepted."""
        return sum(1 for frame in frames if self.update(frame))

    def latest(self, schema_id: int) -> Optional[CANFrame]:
        """Most recent frame for a schema ID, if any."""
        with self._lock:
            return self._frames.get(schema_id)

    def snapshot(self) -> list[CANFrame]:
        """Copy of the latest frames sorted by schema ID."""
        with self._lock:
            frames = list(self._frames.values())
        return sorted(frames, key=lambda f: f.schema_id)

    def commit_snapshot(self) -> None:
        """Remember the current frames as the baseline for ``byte_changes``."""
        with self._lock:
            self._previous = dict(self._frames)

    def byte_changes(self, frame: CANFrame) -> list[ByteChange]:
        """Compare each byte of ``frame`` with the previous snapshot."""
        with self._lock:
            previous = self._previous.get(frame.schema_id)

        changes = []
        for idx, byte in enumerate(frame.data):
            if previous is None or idx >= len(previous.data):
                changes.append(ByteChange.NEW)
            elif previous.data[idx] > byte:
                changes.append(ByteChange.DECREASED)
            elif previous.data[idx] < byte:
                changes.append(ByteChange.INCREASED)
            else:
                changes.append(ByteChange.UNCHANGED)
        return changes

    def clear(self) -> None:
        """Drop all stored frames and reset counters."""
        with self._lock:
            self._frames.clear()
            self._previous.clear()
            self._frame_count = 0
            self._discarded = 0

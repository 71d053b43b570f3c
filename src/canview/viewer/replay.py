from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional
import json
import time

from canview.core.frame import CANFrame, hex_to_bytes


def frame_from_dict(d: Dict[str, Any]) -> CANFrame:
    # One JSONL record: {"timestamp_ns", "can_id", "data_hex", "is_extended_id"}
    return CANFrame(
        arbitration_id=int(d["can_id"]),
        data=hex_to_bytes(d.get("data_hex", "")),
        timestamp=int(d.get("timestamp_ns", 0)) / 1e9,
        is_extended_id=bool(d.get("is_extended_id", False)),
        dlc=int(d["dlc"]) if d.get("dlc") is not None else None,
    )


@dataclass
class FrameReplayer:
    # Feeds frames recorded in a JSONL file to a consumer, standing in for
    # a live acquisition channel.

    # timing:
    #  - "none": publish as fast as possible
    #  - "relative": sleep based on deltas of recorded timestamps

    path: Path
    timing: str = "none"      # "none" | "relative"
    speed: float = 1.0
    max_sleep_s: float = 0.25 # cap sleeps to keep replay responsive

    def _iter_frames(self) -> Iterator[CANFrame]:
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                yield frame_from_dict(json.loads(line))

    def run(self, publish: Callable[[CANFrame], Any], limit: Optional[int] = None) -> int:
        if self.speed <= 0:
            raise ValueError("speed must be > 0")

        count = 0
        prev_ts: Optional[float] = None

        for frame in self._iter_frames():
            if limit is not None and count >= limit:
                break

            if self.timing == "relative" and prev_ts is not None:
                dt = frame.timestamp - prev_ts
                if dt > 0:
                    time.sleep(min(dt / self.speed, self.max_sleep_s))

            publish(frame)
            prev_ts = frame.timestamp
            count += 1

        return count

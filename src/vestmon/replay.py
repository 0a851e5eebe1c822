"""Replay captured vest notifications through the activity detector.

Captures are JSONL files written by ``vestmon stream --output``; each line
holds the characteristic UUID and the raw payload as hex.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from vestmon.analytics.activity import ActivityState
from vestmon.decoders.accel import AccelDecoder
from vestmon.samples import AccelVector, Sample, SignalKind
from vestmon.session import MonitorSession

log = logging.getLogger(__name__)


@dataclass
class ReplayRecord:
    """One accelerometer sample after it went through the session."""

    line: int
    timestamp: str
    accel: AccelVector
    activity: ActivityState
    moving: bool
    avg_movement: float


def replay_file(
    capture_path: str | Path,
    session: MonitorSession | None = None,
    verbose: bool = False,
) -> list[ReplayRecord]:
    """Feed every accelerometer notification in a capture into a session.

    Args:
        capture_path: Path to the .jsonl capture.
        session: Session to feed; a fresh one (accelerometer in auto mode)
            is used when omitted.
        verbose: Print every sample rather than only state changes.

    Returns:
        One record per accepted accelerometer sample.
    """
    path = Path(capture_path)
    if not path.exists():
        print(f"File not found: {capture_path}")
        return []

    if session is None:
        session = MonitorSession()

    records: list[ReplayRecord] = []
    total = 0
    malformed = 0

    print(f"Replaying {path.name}...\n")

    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                entry = json.loads(line)
                raw = bytes.fromhex(entry["hex_data"])
            except (json.JSONDecodeError, KeyError, ValueError):
                log.debug("Line %d: not a capture record, skipping", line_num)
                continue

            total += 1
            uuid = entry.get("uuid", "")
            if not AccelDecoder.can_decode(uuid):
                continue

            vector = AccelDecoder.decode(raw)
            if vector is None:
                malformed += 1
                continue

            before = session.activity
            if not session.ingest(Sample(SignalKind.ACCEL, vector, float(line_num))):
                continue

            record = ReplayRecord(
                line=line_num,
                timestamp=entry.get("timestamp", "?"),
                accel=vector,
                activity=session.activity,
                moving=session.detector.moving,
                avg_movement=session.detector.avg_movement,
            )
            records.append(record)

            if verbose or record.activity is not before:
                print(f"  [{record.timestamp}] {vector}  avg={record.avg_movement:.3f}  "
                      f"-> {record.activity.label}")

    print(f"\nSummary: {total} notifications, {len(records)} accel samples, "
          f"{malformed} malformed")
    return records

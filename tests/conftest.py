"""Shared fixtures and helpers for the vestmon test suite."""

from __future__ import annotations

import json
import struct
from pathlib import Path

import numpy as np
import pytest

from vestmon.calibration import SubjectCalibration, compute_health_ranges
from vestmon.protocol import ACCEL_CHAR_UUID
from vestmon.samples import AccelVector, Sample, SignalKind
from vestmon.session import MonitorSession


# ---------------------------------------------------------------------------
# Payload and sample helpers
# ---------------------------------------------------------------------------


def accel_payload(x: float = 0.0, y: float = 0.0, z: float = 1.0, mag: float = 1.0) -> bytes:
    """Build a 16-byte accelerometer notification as the firmware sends it."""
    return struct.pack("<ffff", x, y, z, mag)


def accel_sample(magnitude: float, timestamp: float = 0.0) -> Sample:
    """An accelerometer sample with the given magnitude along z."""
    return Sample(SignalKind.ACCEL, AccelVector(0.0, 0.0, magnitude, magnitude), timestamp)


# ---------------------------------------------------------------------------
# JSONL capture file helpers
# ---------------------------------------------------------------------------


def write_jsonl(path: Path, entries: list[dict]) -> Path:
    """Write a list of dicts as JSONL to the given path."""
    with open(path, "w") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")
    return path


def make_capture_entry(
    hex_data: str,
    uuid: str = ACCEL_CHAR_UUID,
    timestamp: str = "2024-06-01T12:00:00+00:00",
) -> dict:
    """Create a single JSONL capture entry."""
    return {
        "timestamp": timestamp,
        "uuid": uuid,
        "hex_data": hex_data,
        "length": len(hex_data) // 2,
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def session(rng) -> MonitorSession:
    return MonitorSession(rng=rng)


@pytest.fixture
def large_ranges():
    """Adult labrador: rest HR 60-100, active HR 100-160, temp 101.0-102.5 / 102.0-103.5."""
    return compute_health_ranges(SubjectCalibration.from_inputs("labrador", "large", 5))

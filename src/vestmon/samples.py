"""Sample types shared by the synthesizers, the live feed and the session."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class SignalKind(str, Enum):
    """The three signals carried by the vest."""

    TEMPERATURE = "temperature"
    PPG = "ppg"
    ACCEL = "accel"


@dataclass(frozen=True)
class AccelVector:
    """A single 3-axis accelerometer reading in g."""

    x: float
    y: float
    z: float
    magnitude: float

    @classmethod
    def from_axes(cls, x: float, y: float, z: float) -> AccelVector:
        """Build a vector whose magnitude is the Euclidean norm of the axes."""
        return cls(x=x, y=y, z=z, magnitude=math.sqrt(x * x + y * y + z * z))

    def __repr__(self) -> str:
        return (
            f"Accel(x={self.x:.3f}g, y={self.y:.3f}g, z={self.z:.3f}g, "
            f"mag={self.magnitude:.3f}g)"
        )


@dataclass(frozen=True)
class Sample:
    """A timestamped reading from any source.

    ``value`` is a float (°F) for temperature, an int ADC value for PPG and
    an :class:`AccelVector` for the accelerometer. Synthetic PPG samples
    also carry the heart rate they were generated at.
    """

    kind: SignalKind
    value: float | int | AccelVector
    timestamp: float
    heart_rate_bpm: float | None = None

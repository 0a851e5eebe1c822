"""Synthetic accelerometer windows for the manual activity presets.

Each profile is a sinusoidal motion signature plus uniform noise, sampled
over a fixed window. Regenerating replaces the whole window; it is not an
incremental stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

ACCEL_MAX_POINTS = 50


class ActivityProfile(str, Enum):
    """Motion signature used to synthesize a window."""

    REST = "rest"
    WALKING = "walking"
    RUNNING = "running"


@dataclass(frozen=True)
class _ProfileShape:
    x_offset: float
    y_offset: float
    x_amp: float
    y_amp: float
    z_ripple: float
    cycles: float  # full x/y cycles across the window
    noise: float  # peak-to-peak noise amplitude


# Rest holds a static posture (gravity on z); walking and running share a
# shape, running at twice the frequency and roughly twice the amplitude.
PROFILE_SHAPES = {
    ActivityProfile.REST: _ProfileShape(0.01, -0.02, 0.0, 0.0, 0.0, 0.0, 0.02),
    ActivityProfile.WALKING: _ProfileShape(0.0, 0.0, 0.15, 0.12, 0.1, 2.0, 0.05),
    ActivityProfile.RUNNING: _ProfileShape(0.0, 0.0, 0.35, 0.28, 0.2, 4.0, 0.1),
}

REST_GRAVITY = 0.98
MOVING_GRAVITY = 1.0


@dataclass
class AccelWindow:
    """Three parallel axis series of equal length."""

    x: list[float]
    y: list[float]
    z: list[float]

    def __len__(self) -> int:
        return len(self.x)


class AccelGenerator:
    """Produce a full accelerometer window for an activity profile."""

    def __init__(
        self,
        points: int = ACCEL_MAX_POINTS,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.points = points
        self.rng = rng if rng is not None else np.random.default_rng()
        self.profile = ActivityProfile.REST
        self.sample_index = 0

    def reset(self) -> None:
        self.profile = ActivityProfile.REST
        self.sample_index = 0

    def generate(self, profile: ActivityProfile | str) -> AccelWindow:
        """Synthesize a window for ``profile``."""
        profile = ActivityProfile(profile)
        shape = PROFILE_SHAPES[profile]
        t = np.arange(self.points) / self.points

        def noise() -> np.ndarray:
            return (self.rng.random(self.points) - 0.5) * shape.noise

        angle = 2.0 * np.pi * shape.cycles * t
        if profile is ActivityProfile.REST:
            x = np.full(self.points, shape.x_offset)
            y = np.full(self.points, shape.y_offset)
            z = np.full(self.points, REST_GRAVITY)
        else:
            x = shape.x_amp * np.sin(angle)
            y = shape.y_amp * np.cos(angle)
            z = MOVING_GRAVITY + shape.z_ripple * np.sin(2.0 * angle)

        x = x + noise()
        y = y + noise()
        z = z + noise()

        self.profile = profile
        self.sample_index = self.points
        return AccelWindow(x=x.tolist(), y=y.tolist(), z=z.tolist())

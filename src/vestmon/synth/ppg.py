"""Synthetic photoplethysmography (PPG) waveform.

One cardiac cycle is modelled as three pieces over a baseline of 500 ADC
units: a systolic peak, a dicrotic notch and a diastolic decay. The heart
rate is an input that sets how fast the phase advances; nothing here
estimates heart rate from the waveform.
"""

from __future__ import annotations

import math

import numpy as np

BASELINE = 500.0
SYSTOLIC_AMPLITUDE = 200.0
NOTCH_AMPLITUDE = 80.0
DIASTOLIC_AMPLITUDE = 30.0
DIASTOLIC_DECAY = 8.0

SYSTOLIC_END = 0.3
NOTCH_END = 0.5

NOISE_AMPLITUDE = 5.0  # uniform noise in [-5, +5]
TICK_SECONDS = 0.05  # 20 Hz
PPG_MAX_POINTS = 100
DEFAULT_HR_BPM = 75.0
SIGNAL_QUALITY = "Good"


def ppg_waveform(t: float) -> float:
    """Noise-free PPG value at cycle position ``t`` in [0, 1)."""
    if t < SYSTOLIC_END:
        return BASELINE + SYSTOLIC_AMPLITUDE * math.sin(t * math.pi / SYSTOLIC_END)
    if t < NOTCH_END:
        span = NOTCH_END - SYSTOLIC_END
        return BASELINE + NOTCH_AMPLITUDE * math.sin((t - SYSTOLIC_END) * math.pi / span)
    return BASELINE + DIASTOLIC_AMPLITUDE * math.exp(-(t - NOTCH_END) * DIASTOLIC_DECAY)


class PPGGenerator:
    """Advance a cardiac phase each tick and emit one integer sample.

    Args:
        heart_rate_bpm: Target heart rate driving the phase speed.
        tick_seconds: Time between samples.
        rng: Source of the additive noise.
    """

    def __init__(
        self,
        heart_rate_bpm: float = DEFAULT_HR_BPM,
        tick_seconds: float = TICK_SECONDS,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.heart_rate_bpm = heart_rate_bpm
        self.tick_seconds = tick_seconds
        self.phase = 0.0
        self.rng = rng if rng is not None else np.random.default_rng()
        self.quality = SIGNAL_QUALITY

    def reset(self, heart_rate_bpm: float | None = None) -> None:
        """Restart the cycle at phase 0, optionally with a new heart rate."""
        self.phase = 0.0
        if heart_rate_bpm is not None:
            self.heart_rate_bpm = heart_rate_bpm

    def step(self) -> int:
        """Advance one tick and return the new sample."""
        self.phase = (self.phase + (self.heart_rate_bpm / 60.0) * self.tick_seconds) % 1.0
        value = ppg_waveform(self.phase)
        value += self.rng.uniform(-NOISE_AMPLITUDE, NOISE_AMPLITUDE)
        return int(round(value))

    def __repr__(self) -> str:
        return f"PPGGenerator(hr={self.heart_rate_bpm:.0f}bpm, phase={self.phase:.3f})"

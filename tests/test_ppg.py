"""Tests for synth/ppg.py — PPG waveform synthesis."""

import math

import numpy as np
import pytest

from vestmon.synth.ppg import (
    BASELINE,
    NOISE_AMPLITUDE,
    PPGGenerator,
    ppg_waveform,
)

# rounding to an integer can add half a unit on top of the noise
TOLERANCE = NOISE_AMPLITUDE + 0.5


class TestWaveform:
    def test_cycle_starts_at_baseline(self):
        assert ppg_waveform(0.0) == pytest.approx(BASELINE)

    def test_systolic_peak(self):
        assert ppg_waveform(0.15) == pytest.approx(700.0)

    def test_dicrotic_notch_peak(self):
        assert ppg_waveform(0.4) == pytest.approx(580.0)

    def test_systolic_to_notch_is_continuous(self):
        assert ppg_waveform(0.3 - 1e-9) == pytest.approx(ppg_waveform(0.3), abs=1e-3)

    def test_diastolic_decay(self):
        assert ppg_waveform(0.5) == pytest.approx(530.0)
        assert ppg_waveform(0.75) < ppg_waveform(0.6)

    def test_wraparound_within_noise_bound(self):
        end = ppg_waveform(1.0 - 1e-9)
        assert end == pytest.approx(500.0 + 30.0 * math.exp(-4.0))
        assert abs(end - ppg_waveform(0.0)) < NOISE_AMPLITUDE


class TestPPGGenerator:
    def test_phase_advances_with_heart_rate(self, rng):
        gen = PPGGenerator(heart_rate_bpm=75, rng=rng)
        gen.step()
        assert gen.phase == pytest.approx(75 / 60 * 0.05)

    def test_sample_near_noise_free_value(self, rng):
        gen = PPGGenerator(heart_rate_bpm=60, rng=rng)
        for _ in range(50):
            value = gen.step()
            assert isinstance(value, int)
            assert abs(value - ppg_waveform(gen.phase)) <= TOLERANCE

    @pytest.mark.parametrize("hr", [1, 45, 75, 180, 300])
    def test_values_bounded_for_any_rate(self, rng, hr):
        gen = PPGGenerator(heart_rate_bpm=hr, rng=rng)
        for _ in range(200):
            value = gen.step()
            assert 0.0 <= gen.phase < 1.0
            assert BASELINE - TOLERANCE <= value <= 700.0 + TOLERANCE

    def test_reset(self, rng):
        gen = PPGGenerator(rng=rng)
        for _ in range(7):
            gen.step()
        gen.reset(125)
        assert gen.phase == 0.0
        assert gen.heart_rate_bpm == 125

    def test_reset_keeps_rate(self, rng):
        gen = PPGGenerator(heart_rate_bpm=90, rng=rng)
        gen.reset()
        assert gen.heart_rate_bpm == 90

    def test_same_seed_same_trace(self):
        a = PPGGenerator(rng=np.random.default_rng(7))
        b = PPGGenerator(rng=np.random.default_rng(7))
        assert [a.step() for _ in range(30)] == [b.step() for _ in range(30)]

    def test_quality_is_constant(self, rng):
        assert PPGGenerator(rng=rng).quality == "Good"

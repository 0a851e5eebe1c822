"""Tests for sources.py — synthetic and live sample sources."""

import pytest

from vestmon.samples import Sample, SignalKind
from vestmon.sources import LiveSource, SyntheticPPGSource, SyntheticTemperatureSource
from vestmon.synth.ppg import PPGGenerator
from vestmon.synth.temperature import START_TEMP_F, TemperatureSimulator

from tests.conftest import accel_sample


class TestSyntheticTemperatureSource:
    def test_rate_limited_polls(self, rng):
        source = SyntheticTemperatureSource(TemperatureSimulator(rng=rng))
        first = source.poll(0.0)
        assert len(first) == 1
        assert first[0].kind is SignalKind.TEMPERATURE
        assert first[0].timestamp == 0.0
        assert source.poll(1.0) == []
        assert len(source.poll(2.0)) == 1

    def test_reset_restarts_walk(self, rng):
        sim = TemperatureSimulator(rng=rng)
        source = SyntheticTemperatureSource(sim)
        for t in range(0, 40, 2):
            source.poll(float(t))
        source.reset()
        assert sim.value == START_TEMP_F


class TestSyntheticPPGSource:
    def test_one_sample_per_poll_with_heart_rate(self, rng):
        source = SyntheticPPGSource(PPGGenerator(heart_rate_bpm=90, rng=rng))
        samples = source.poll(0.05)
        assert len(samples) == 1
        assert samples[0].kind is SignalKind.PPG
        assert samples[0].heart_rate_bpm == 90
        assert isinstance(samples[0].value, int)

    def test_reset_restarts_phase(self, rng):
        gen = PPGGenerator(rng=rng)
        source = SyntheticPPGSource(gen)
        source.poll(0.0)
        source.reset()
        assert gen.phase == 0.0


class TestLiveSource:
    def test_poll_drains_queue(self):
        source = LiveSource(SignalKind.ACCEL)
        source.push(accel_sample(1.0))
        source.push(accel_sample(1.1))
        assert len(source) == 2
        samples = source.poll(0.0)
        assert [s.value.magnitude for s in samples] == [1.0, 1.1]
        assert source.poll(0.1) == []
        assert source.received == 2

    def test_rejects_other_kinds(self):
        source = LiveSource(SignalKind.ACCEL)
        source.push(Sample(SignalKind.TEMPERATURE, 101.0, 0.0))
        assert len(source) == 0

    def test_bounded_queue_keeps_newest(self):
        source = LiveSource(SignalKind.ACCEL, limit=3)
        for i in range(5):
            source.push(accel_sample(1.0 + i))
        assert [s.value.magnitude for s in source.poll(0.0)] == [3.0, 4.0, 5.0]

    def test_reset(self):
        source = LiveSource(SignalKind.ACCEL)
        source.push(accel_sample(1.0))
        source.reset()
        assert source.poll(0.0) == []

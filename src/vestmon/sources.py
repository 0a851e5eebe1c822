"""Sample sources feeding the session.

Every signal is read through a :class:`SampleSource`, so the session ingests
synthetic and live samples the same way. A signal held at a manual preset
has no source at all.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque

from vestmon.samples import Sample, SignalKind
from vestmon.synth.ppg import PPGGenerator
from vestmon.synth.temperature import TemperatureSimulator

log = logging.getLogger(__name__)

LIVE_QUEUE_LIMIT = 256


class SampleSource(ABC):
    """Something that can be polled for new samples of one signal."""

    kind: SignalKind

    @abstractmethod
    def poll(self, now: float) -> list[Sample]:
        """Return the samples that became available since the last poll.

        Args:
            now: Current time in seconds.
        """

    def reset(self) -> None:
        """Drop any internal state (called when the signal's mode changes)."""


class SyntheticTemperatureSource(SampleSource):
    """Rate-limited temperature random walk."""

    kind = SignalKind.TEMPERATURE

    def __init__(self, simulator: TemperatureSimulator) -> None:
        self.simulator = simulator

    def poll(self, now: float) -> list[Sample]:
        value = self.simulator.tick(now * 1000.0)
        if value is None:
            return []
        return [Sample(SignalKind.TEMPERATURE, value, now)]

    def reset(self) -> None:
        self.simulator.reset()


class SyntheticPPGSource(SampleSource):
    """One synthesized PPG sample per poll, tagged with its heart rate."""

    kind = SignalKind.PPG

    def __init__(self, generator: PPGGenerator) -> None:
        self.generator = generator

    def poll(self, now: float) -> list[Sample]:
        value = self.generator.step()
        return [Sample(SignalKind.PPG, value, now, heart_rate_bpm=self.generator.heart_rate_bpm)]

    def reset(self) -> None:
        self.generator.reset()


class LiveSource(SampleSource):
    """Queue of samples pushed by the BLE notification handler.

    An empty queue simply yields nothing; the session keeps showing the
    last values it received.
    """

    def __init__(self, kind: SignalKind, limit: int = LIVE_QUEUE_LIMIT) -> None:
        self.kind = kind
        self._queue: deque[Sample] = deque(maxlen=limit)
        self.received = 0

    def push(self, sample: Sample) -> None:
        if sample.kind is not self.kind:
            log.warning("Dropping %s sample pushed to %s source", sample.kind.value, self.kind.value)
            return
        if len(self._queue) == self._queue.maxlen:
            log.debug("Live %s queue full; oldest sample dropped", self.kind.value)
        self._queue.append(sample)
        self.received += 1

    def poll(self, now: float) -> list[Sample]:
        samples = list(self._queue)
        self._queue.clear()
        return samples

    def reset(self) -> None:
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)

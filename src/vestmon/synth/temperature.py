"""Body temperature random walk for demo mode."""

from __future__ import annotations

import numpy as np

START_TEMP_F = 101.5
MIN_TEMP_F = 100.5
MAX_TEMP_F = 103.5
STEP_F = 0.2  # peak-to-peak size of one random step
UPDATE_INTERVAL_MS = 2000.0
PROBE_NOISE_F = 0.1  # peak-to-peak jitter between the two probes


class TemperatureSimulator:
    """Bounded random walk, rate limited to one update per interval.

    ``tick`` may be called more often than the update interval; extra calls
    return None.
    """

    def __init__(
        self,
        start_f: float = START_TEMP_F,
        interval_ms: float = UPDATE_INTERVAL_MS,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.start_f = start_f
        self.value = start_f
        self.interval_ms = interval_ms
        self.rng = rng if rng is not None else np.random.default_rng()
        self._last_update_ms: float | None = None

    def reset(self) -> None:
        self.value = self.start_f
        self._last_update_ms = None

    def tick(self, now_ms: float) -> float | None:
        """Advance the walk if the interval has elapsed; return the new value."""
        if self._last_update_ms is not None and now_ms - self._last_update_ms < self.interval_ms:
            return None
        self.value += (self.rng.random() - 0.5) * STEP_F
        self.value = min(max(self.value, MIN_TEMP_F), MAX_TEMP_F)
        self._last_update_ms = now_ms
        return self.value

    def probe_pair(self, average_f: float) -> tuple[float, float]:
        """Two probe readings jittered around ``average_f``."""
        p1 = average_f + (self.rng.random() - 0.5) * PROBE_NOISE_F
        p2 = average_f + (self.rng.random() - 0.5) * PROBE_NOISE_F
        return p1, p2

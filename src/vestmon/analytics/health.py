"""Three-zone health verdicts for temperature and heart rate.

Inside the band for the current activity state is NORMAL, within a fixed
buffer outside the band is MONITOR, and anything beyond the buffer is ALERT.
"""

from __future__ import annotations

from enum import Enum

from vestmon.analytics.activity import ActivityState
from vestmon.calibration import Band, HealthRanges

TEMP_BUFFER_F = 1.0
HR_BUFFER_BPM = 10.0


class HealthStatus(str, Enum):
    NORMAL = "normal"
    MONITOR = "monitor"
    ALERT = "alert"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def severity(self) -> str:
        """Display class for the status badge."""
        return {
            HealthStatus.NORMAL: "normal",
            HealthStatus.MONITOR: "warning",
            HealthStatus.ALERT: "danger",
        }[self]


def _classify(value: float, band: Band, buffer: float) -> HealthStatus:
    if band.contains(value):
        return HealthStatus.NORMAL
    if value < band.min - buffer or value > band.max + buffer:
        return HealthStatus.ALERT
    return HealthStatus.MONITOR


def classify_temperature(
    avg_temp: float,
    activity: ActivityState,
    ranges: HealthRanges,
) -> HealthStatus:
    """Classify an averaged body temperature (°F)."""
    band = ranges.temp_active if activity is ActivityState.ACTIVE else ranges.temp_rest
    return _classify(avg_temp, band, TEMP_BUFFER_F)


def classify_heart_rate(
    hr: float,
    activity: ActivityState,
    ranges: HealthRanges,
) -> HealthStatus:
    """Classify a heart rate (BPM)."""
    band = ranges.hr_active if activity is ActivityState.ACTIVE else ranges.hr_rest
    return _classify(hr, band, HR_BUFFER_BPM)

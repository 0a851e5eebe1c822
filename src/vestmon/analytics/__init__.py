"""Classification of vest signals.

Modules:
    activity -- Hysteretic rest/active detection from accelerometer magnitude
    health   -- Normal/monitor/alert verdicts for temperature and heart rate
"""

from vestmon.analytics.activity import ActivityDetector, ActivityState
from vestmon.analytics.health import (
    HealthStatus,
    classify_heart_rate,
    classify_temperature,
)

__all__ = [
    # activity
    "ActivityDetector",
    "ActivityState",
    # health
    "HealthStatus",
    "classify_heart_rate",
    "classify_temperature",
]

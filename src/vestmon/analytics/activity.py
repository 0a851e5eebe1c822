"""Rest/active detection from accelerometer magnitude.

The detector tracks the absolute change between successive magnitude
samples, smooths it over the last few samples and compares the average to
a threshold that depends on the current state. Entering ACTIVE needs more
movement than staying ACTIVE, and leaving ACTIVE needs the average to drop
well below the stay threshold.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from vestmon.history import BoundedHistory

log = logging.getLogger(__name__)


class ActivityState(str, Enum):
    REST = "rest"
    ACTIVE = "active"

    @property
    def label(self) -> str:
        return "ACTIVE" if self is ActivityState.ACTIVE else "AT REST"

    @property
    def description(self) -> str:
        if self is ActivityState.ACTIVE:
            return "Biometric thresholds adjusted for exercise state"
        return "Biometric thresholds adjusted for resting state"


# ---------------------------------------------------------------------------
# Thresholds (in g of average magnitude change)
# ---------------------------------------------------------------------------

MOVEMENT_WINDOW = 5
BASE_THRESHOLD = 0.10  # enter ACTIVE above this
ACTIVE_FACTOR = 0.6  # stay ACTIVE above BASE_THRESHOLD * ACTIVE_FACTOR
EXIT_FACTOR = 0.4  # leave ACTIVE below the stay threshold * EXIT_FACTOR
GRAVITY_BASELINE = 1.0

STATUS_MOVING = "Active Movement Detected"
STATUS_AT_REST = "Subject at Rest"


class ActivityDetector:
    """Two-state {REST, ACTIVE} machine with hysteresis.

    Args:
        state: Initial state.
        auto_mode: When False the detector still reports movement but never
            changes state on its own.
    """

    def __init__(
        self,
        state: ActivityState = ActivityState.REST,
        auto_mode: bool = True,
    ) -> None:
        self.state = state
        self.auto_mode = auto_mode
        self.previous_magnitude = GRAVITY_BASELINE
        self.history: BoundedHistory[float] = BoundedHistory(MOVEMENT_WINDOW)
        self.moving = False
        self.avg_movement = 0.0

    @property
    def threshold(self) -> float:
        if self.state is ActivityState.ACTIVE:
            return BASE_THRESHOLD * ACTIVE_FACTOR
        return BASE_THRESHOLD

    @property
    def movement_status(self) -> str:
        return STATUS_MOVING if self.moving else STATUS_AT_REST

    def detect(self, current_magnitude: float) -> ActivityState:
        """Feed one magnitude sample and return the (possibly new) state."""
        if not math.isfinite(current_magnitude):
            log.warning("Ignoring non-finite accelerometer magnitude %r", current_magnitude)
            return self.state

        self.history.push(abs(current_magnitude - self.previous_magnitude))
        avg = self.history.mean()
        if avg is None:  # unreachable after the push; mean() is None only on an empty window
            return self.state
        self.avg_movement = avg

        threshold = self.threshold
        self.moving = avg > threshold

        if self.moving:
            if self.auto_mode and self.state is ActivityState.REST:
                self._transition(ActivityState.ACTIVE)
        elif (
            self.auto_mode
            and self.state is ActivityState.ACTIVE
            and avg < threshold * EXIT_FACTOR
        ):
            self._transition(ActivityState.REST)

        self.previous_magnitude = current_magnitude
        return self.state

    def force(self, state: ActivityState | str) -> ActivityState:
        """Set the state directly, bypassing hysteresis.

        The movement history and previous magnitude are left untouched.
        """
        self.state = ActivityState(state)
        log.info("Activity state forced to %s", self.state.value)
        return self.state

    def reset(self) -> None:
        """Forget the movement history (state is kept)."""
        self.history.clear()
        self.previous_magnitude = GRAVITY_BASELINE
        self.moving = False
        self.avg_movement = 0.0

    def _transition(self, state: ActivityState) -> None:
        log.info(
            "Activity %s -> %s (avg movement %.3f)",
            self.state.value, state.value, self.avg_movement,
        )
        self.state = state

    def __repr__(self) -> str:
        return (
            f"ActivityDetector({self.state.value}, "
            f"avg={self.avg_movement:.3f}, auto={self.auto_mode})"
        )

"""Monitoring session: the single owner of all mutable monitor state.

The session routes samples from each signal's source through the activity
detector and the health classifiers, keeps the bounded series the display
plots, and handles the operator's mode and calibration changes. A display
reads everything it needs from :meth:`MonitorSession.snapshot`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from vestmon.analytics.activity import STATUS_AT_REST, ActivityDetector, ActivityState
from vestmon.analytics.health import HealthStatus, classify_heart_rate, classify_temperature
from vestmon.calibration import (
    DEFAULT_RANGES,
    HealthRanges,
    SubjectCalibration,
    compute_health_ranges,
)
from vestmon.history import BoundedHistory
from vestmon.samples import AccelVector, Sample, SignalKind
from vestmon.sources import (
    LiveSource,
    SampleSource,
    SyntheticPPGSource,
    SyntheticTemperatureSource,
)
from vestmon.synth.accel import ACCEL_MAX_POINTS, AccelGenerator, ActivityProfile
from vestmon.synth.ppg import PPG_MAX_POINTS, SIGNAL_QUALITY, PPGGenerator
from vestmon.synth.temperature import TemperatureSimulator

log = logging.getLogger(__name__)


class TemperatureMode(str, Enum):
    AUTO = "auto"
    NORMAL = "normal"
    ELEVATED = "elevated"
    FEVER = "fever"


class PPGMode(str, Enum):
    AUTO = "auto"
    RESTING = "resting"
    ELEVATED = "elevated"
    TACHYCARDIA = "tachycardia"


class AccelMode(str, Enum):
    AUTO = "auto"
    REST = "rest"
    WALKING = "walking"
    RUNNING = "running"


# ---------------------------------------------------------------------------
# Manual presets
# ---------------------------------------------------------------------------

TEMP_PRESETS = {
    TemperatureMode.NORMAL: 101.5,
    TemperatureMode.ELEVATED: 102.8,
    TemperatureMode.FEVER: 104.2,
}

HR_PRESETS = {
    PPGMode.AUTO: 75.0,
    PPGMode.RESTING: 75.0,
    PPGMode.ELEVATED: 125.0,
    PPGMode.TACHYCARDIA: 180.0,
}

# mode → (displayed vector, synthesized profile, movement status text)
ACCEL_PRESETS = {
    AccelMode.REST: (AccelVector.from_axes(0.01, -0.02, 0.98), ActivityProfile.REST, "Subject at Rest"),
    AccelMode.WALKING: (AccelVector.from_axes(0.15, 0.12, 1.05), ActivityProfile.WALKING, "Walking Detected"),
    AccelMode.RUNNING: (AccelVector.from_axes(0.35, 0.28, 1.15), ActivityProfile.RUNNING, "Active Movement Detected"),
}

AUTO_SIMULATED = "Auto Mode (Simulated)"
AUTO_LIVE = "Auto Mode (Live Sensor)"

MANUAL_LABELS = {
    TemperatureMode: {
        TemperatureMode.NORMAL: "Normal",
        TemperatureMode.ELEVATED: "Elevated",
        TemperatureMode.FEVER: "Fever",
    },
    PPGMode: {
        PPGMode.RESTING: "Resting",
        PPGMode.ELEVATED: "Elevated",
        PPGMode.TACHYCARDIA: "Tachycardia",
    },
    AccelMode: {
        AccelMode.REST: "At Rest",
        AccelMode.WALKING: "Walking",
        AccelMode.RUNNING: "Running",
    },
}


# ---------------------------------------------------------------------------
# Results handed back to callers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModeChange:
    """Outcome of a mode button press.

    ``control`` echoes the identifier of the control that was activated so
    the caller can highlight it.
    """

    signal: SignalKind
    mode: str
    indicator: str
    control: str | None = None


@dataclass(frozen=True)
class RangeUpdate:
    ranges: HealthRanges
    display: dict[str, str]


@dataclass(frozen=True)
class TemperatureReading:
    """Averaged body temperature plus the two probe readings (°F)."""

    average: float
    probe1: float
    probe2: float

    @property
    def delta(self) -> float:
        return abs(self.probe1 - self.probe2)


@dataclass
class Frame:
    """Everything a display needs after a tick."""

    ppg: list[int]
    accel_x: list[float]
    accel_y: list[float]
    accel_z: list[float]
    temperature: TemperatureReading | None
    temperature_status: HealthStatus | None
    heart_rate: float | None
    heart_rate_status: HealthStatus | None
    ppg_raw: int | None
    ppg_quality: str | None
    accel: AccelVector | None
    movement_status: str
    activity: ActivityState
    auto_detection: bool
    indicators: dict[str, str] = field(default_factory=dict)
    ranges: dict[str, str] = field(default_factory=dict)

    @property
    def activity_label(self) -> str:
        return self.activity.label

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly)."""
        data = asdict(self)
        if self.temperature is not None:
            data["temperature"]["delta"] = self.temperature.delta
        data["activity_label"] = self.activity_label
        return data

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        temp = f"{self.temperature.average:.1f}F" if self.temperature else "--"
        hr = f"{self.heart_rate:.0f}bpm" if self.heart_rate is not None else "--"
        return f"Frame({self.activity_label}, temp={temp}, hr={hr}, ppg={len(self.ppg)}pts)"


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class MonitorSession:
    """Owns the synthesizers, detector, histories and calibration.

    Args:
        rng: Shared random generator for all synthesizers.
        live_accel: Queue the BLE feed pushes accelerometer samples into.
            A fresh one is created when omitted.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        live_accel: LiveSource | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

        self.temperature_sim = TemperatureSimulator(rng=self.rng)
        self.ppg_generator = PPGGenerator(heart_rate_bpm=HR_PRESETS[PPGMode.AUTO], rng=self.rng)
        self.accel_generator = AccelGenerator(rng=self.rng)
        self.detector = ActivityDetector()
        self.live_accel = live_accel if live_accel is not None else LiveSource(SignalKind.ACCEL)

        self.ppg_history: BoundedHistory[int] = BoundedHistory(PPG_MAX_POINTS)
        self.accel_history: dict[str, BoundedHistory[float]] = {
            axis: BoundedHistory(ACCEL_MAX_POINTS) for axis in ("x", "y", "z")
        }

        self.calibration: SubjectCalibration | None = None
        self.ranges: HealthRanges = DEFAULT_RANGES

        self.temperature_mode = TemperatureMode.AUTO
        self.ppg_mode = PPGMode.AUTO
        self.accel_mode = AccelMode.AUTO
        self.indicators = {
            SignalKind.TEMPERATURE.value: AUTO_SIMULATED,
            SignalKind.PPG.value: AUTO_SIMULATED,
            SignalKind.ACCEL.value: AUTO_LIVE,
        }

        self._temperature_source = SyntheticTemperatureSource(self.temperature_sim)
        self._ppg_source = SyntheticPPGSource(self.ppg_generator)
        self._sources: dict[SignalKind, SampleSource | None] = {
            SignalKind.TEMPERATURE: self._temperature_source,
            SignalKind.PPG: self._ppg_source,
            SignalKind.ACCEL: self.live_accel,
        }

        self.temperature: TemperatureReading | None = None
        self.temperature_status: HealthStatus | None = None
        self.heart_rate: float | None = None
        self.heart_rate_status: HealthStatus | None = None
        self.ppg_raw: int | None = None
        self.ppg_quality: str | None = None
        self.accel: AccelVector | None = None
        self.movement_status = STATUS_AT_REST

    @property
    def activity(self) -> ActivityState:
        return self.detector.state

    def source(self, kind: SignalKind) -> SampleSource | None:
        """The source currently selected for ``kind`` (None at a manual preset)."""
        return self._sources[kind]

    # --- sampling ---------------------------------------------------------

    def tick(self, kind: SignalKind, now: float) -> int:
        """Poll the source selected for ``kind`` and ingest what it yields.

        Returns the number of samples accepted.
        """
        source = self._sources[kind]
        if source is None:
            return 0
        return sum(1 for sample in source.poll(now) if self.ingest(sample))

    def ingest(self, sample: Sample) -> bool:
        """Route one sample to the classifiers and histories.

        Temperature and accelerometer samples are ignored unless their signal
        is in auto mode. PPG samples are always plotted; a heart-rate preset
        only keeps the sample from changing the displayed rate. Returns True
        when the sample was used.
        """
        if sample.kind is SignalKind.TEMPERATURE:
            if self.temperature_mode is not TemperatureMode.AUTO:
                log.debug("Temperature sample ignored in %s mode", self.temperature_mode.value)
                return False
            self._show_temperature(float(sample.value))
            return True

        if sample.kind is SignalKind.PPG:
            self.ppg_raw = int(sample.value)
            self.ppg_history.push(self.ppg_raw)
            if sample.heart_rate_bpm is not None and self.ppg_mode is PPGMode.AUTO:
                self.ppg_quality = SIGNAL_QUALITY
                self._show_heart_rate(sample.heart_rate_bpm)
            return True

        if self.accel_mode is not AccelMode.AUTO:
            log.debug("Accel sample ignored in %s mode", self.accel_mode.value)
            return False

        vector = sample.value
        if not isinstance(vector, AccelVector):
            log.warning("Dropping malformed accel sample %r", sample)
            return False

        self.accel = vector
        self.accel_history["x"].push(vector.x)
        self.accel_history["y"].push(vector.y)
        self.accel_history["z"].push(vector.z)

        before = self.detector.state
        after = self.detector.detect(vector.magnitude)
        self.movement_status = self.detector.movement_status
        if after is not before:
            self._reclassify()
        return True

    # --- operator controls -------------------------------------------------

    def set_temperature_mode(
        self, mode: TemperatureMode | str, control: str | None = None
    ) -> ModeChange:
        """Switch temperature between the simulated walk and a fixed preset."""
        mode = TemperatureMode(mode)
        self.temperature_mode = mode
        if mode is TemperatureMode.AUTO:
            self._temperature_source.reset()
            self._sources[SignalKind.TEMPERATURE] = self._temperature_source
        else:
            self._sources[SignalKind.TEMPERATURE] = None
            self._show_temperature(TEMP_PRESETS[mode])
        return self._mode_changed(SignalKind.TEMPERATURE, mode, control)

    def set_ppg_mode(self, mode: PPGMode | str, control: str | None = None) -> ModeChange:
        """Switch the PPG between live synthesis and a fixed heart-rate preset.

        The cardiac phase restarts on every switch.
        """
        mode = PPGMode(mode)
        self.ppg_mode = mode
        hr = HR_PRESETS[mode]
        self.ppg_generator.reset(hr)
        if mode is PPGMode.AUTO:
            self._sources[SignalKind.PPG] = self._ppg_source
        else:
            self._sources[SignalKind.PPG] = None
            self._show_heart_rate(hr)
        return self._mode_changed(SignalKind.PPG, mode, control)

    def set_accel_mode(self, mode: AccelMode | str, control: str | None = None) -> ModeChange:
        """Switch the accelerometer between the live feed and a demo preset.

        Presets regenerate the plotted window and set the movement status
        but never feed the activity detector; its movement history is
        cleared on every switch.
        """
        mode = AccelMode(mode)
        self.accel_mode = mode
        self.detector.reset()
        self.accel_generator.reset()
        self.live_accel.reset()

        if mode is AccelMode.AUTO:
            self._sources[SignalKind.ACCEL] = self.live_accel
        else:
            self._sources[SignalKind.ACCEL] = None
            vector, profile, status = ACCEL_PRESETS[mode]
            window = self.accel_generator.generate(profile)
            self.accel_history["x"].replace(window.x)
            self.accel_history["y"].replace(window.y)
            self.accel_history["z"].replace(window.z)
            self.accel = vector
            self.movement_status = status
        return self._mode_changed(SignalKind.ACCEL, mode, control)

    def set_subject_calibration(
        self,
        breed: str,
        size: str,
        age_years: float | int | str,
        weight: float | int | str | None = None,
    ) -> RangeUpdate:
        """Validate subject details and recompute the health ranges.

        Raises:
            ConfigurationError: the previous ranges stay in effect.
        """
        calibration = SubjectCalibration.from_inputs(breed, size, age_years, weight)
        self.calibration = calibration
        self.ranges = compute_health_ranges(calibration)
        log.info("Health ranges updated for %s: %s", calibration.breed, self.ranges.display())
        self._reclassify()
        return RangeUpdate(ranges=self.ranges, display=self.ranges.display())

    def set_activity_state(self, state: ActivityState | str) -> ActivityState:
        """Manual override of the activity state."""
        before = self.detector.state
        after = self.detector.force(state)
        if after is not before:
            self._reclassify()
        return after

    def set_auto_detection(self, enabled: bool) -> None:
        self.detector.auto_mode = enabled
        log.info("Automatic mode detection %s", "enabled" if enabled else "disabled")

    # --- rendering ---------------------------------------------------------

    def snapshot(self) -> Frame:
        return Frame(
            ppg=self.ppg_history.to_list(),
            accel_x=self.accel_history["x"].to_list(),
            accel_y=self.accel_history["y"].to_list(),
            accel_z=self.accel_history["z"].to_list(),
            temperature=self.temperature,
            temperature_status=self.temperature_status,
            heart_rate=self.heart_rate,
            heart_rate_status=self.heart_rate_status,
            ppg_raw=self.ppg_raw,
            ppg_quality=self.ppg_quality,
            accel=self.accel,
            movement_status=self.movement_status,
            activity=self.detector.state,
            auto_detection=self.detector.auto_mode,
            indicators=dict(self.indicators),
            ranges=self.ranges.display(),
        )

    # --- internals ---------------------------------------------------------

    def _show_temperature(self, average: float) -> None:
        probe1, probe2 = self.temperature_sim.probe_pair(average)
        self.temperature = TemperatureReading(average=average, probe1=probe1, probe2=probe2)
        self.temperature_status = classify_temperature(average, self.detector.state, self.ranges)

    def _show_heart_rate(self, hr: float) -> None:
        self.heart_rate = hr
        self.heart_rate_status = classify_heart_rate(hr, self.detector.state, self.ranges)

    def _reclassify(self) -> None:
        state = self.detector.state
        if self.temperature is not None:
            self.temperature_status = classify_temperature(self.temperature.average, state, self.ranges)
        if self.heart_rate is not None:
            self.heart_rate_status = classify_heart_rate(self.heart_rate, state, self.ranges)

    def _mode_changed(self, signal: SignalKind, mode: Enum, control: str | None) -> ModeChange:
        if mode.value == "auto":
            indicator = AUTO_LIVE if signal is SignalKind.ACCEL else AUTO_SIMULATED
        else:
            indicator = f"Manual: {MANUAL_LABELS[type(mode)][mode]}"
        self.indicators[signal.value] = indicator
        log.info("%s mode set to %s", signal.value, mode.value)
        return ModeChange(signal=signal, mode=mode.value, indicator=indicator, control=control)

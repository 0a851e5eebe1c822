"""Per-subject calibration and the health ranges derived from it.

Breed selects a temperature offset, size selects the heart-rate bands, and
an age outside [2, 10] years raises the resting heart-rate band by 10 BPM.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ConfigurationError(ValueError):
    """Invalid subject calibration input."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class Size(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    GIANT = "giant"


@dataclass(frozen=True)
class BreedInfo:
    size: Size
    base_hr: int
    temp_adjust: float  # °F


BREEDS: dict[str, BreedInfo] = {
    "labrador": BreedInfo(Size.LARGE, 70, 0.0),
    "german_shepherd": BreedInfo(Size.LARGE, 65, 0.0),
    "golden_retriever": BreedInfo(Size.LARGE, 70, 0.0),
    "beagle": BreedInfo(Size.MEDIUM, 80, 0.0),
    "bulldog": BreedInfo(Size.MEDIUM, 75, 0.2),
    "poodle": BreedInfo(Size.MEDIUM, 75, 0.0),
    "husky": BreedInfo(Size.LARGE, 65, -0.3),
    "boxer": BreedInfo(Size.LARGE, 70, 0.1),
}

# size → ((rest min, rest max), (active min, active max)) in BPM
HR_BANDS = {
    Size.SMALL: ((90, 140), (140, 220)),
    Size.MEDIUM: ((70, 110), (110, 180)),
    Size.LARGE: ((60, 100), (100, 160)),
    Size.GIANT: ((50, 90), (90, 140)),
}

TEMP_REST_MIN = 101.0
TEMP_REST_MAX = 102.5
TEMP_ACTIVE_MIN = 102.0
TEMP_ACTIVE_MAX = 103.5

ADULT_AGE_MIN = 2.0
ADULT_AGE_MAX = 10.0
AGE_HR_SHIFT = 10


@dataclass(frozen=True)
class Band:
    """Inclusive ``[min, max]`` range."""

    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def format_temp(self) -> str:
        return f"{self.min:.1f} - {self.max:.1f}°F"

    def format_hr(self) -> str:
        return f"{self.min:.0f} - {self.max:.0f} BPM"


@dataclass(frozen=True)
class HealthRanges:
    temp_rest: Band
    temp_active: Band
    hr_rest: Band
    hr_active: Band

    def display(self) -> dict[str, str]:
        """Formatted range strings for the range panel."""
        return {
            "temp_rest": self.temp_rest.format_temp(),
            "temp_active": self.temp_active.format_temp(),
            "hr_rest": self.hr_rest.format_hr(),
            "hr_active": self.hr_active.format_hr(),
        }


# In effect before the operator enters any subject details.
DEFAULT_RANGES = HealthRanges(
    temp_rest=Band(TEMP_REST_MIN, TEMP_REST_MAX),
    temp_active=Band(TEMP_ACTIVE_MIN, TEMP_ACTIVE_MAX),
    hr_rest=Band(60, 100),
    hr_active=Band(100, 180),
)


@dataclass(frozen=True)
class SubjectCalibration:
    breed: str
    size: Size
    age_years: float
    weight: float | None = None

    @property
    def breed_info(self) -> BreedInfo:
        return BREEDS[self.breed]

    @classmethod
    def from_inputs(
        cls,
        breed: str,
        size: str | Size,
        age_years: float | int | str,
        weight: float | int | str | None = None,
    ) -> SubjectCalibration:
        """Validate raw operator inputs.

        Raises:
            ConfigurationError: naming the first invalid field.
        """
        key = str(breed).strip().lower()
        if key not in BREEDS:
            raise ConfigurationError("breed", f"unknown breed {breed!r}")

        try:
            size_value = Size(str(getattr(size, "value", size)).strip().lower())
        except ValueError:
            raise ConfigurationError("size", f"unknown size {size!r}") from None

        age = _parse_non_negative("age_years", age_years)
        weight_value = None if weight is None else _parse_non_negative("weight", weight)

        return cls(breed=key, size=size_value, age_years=age, weight=weight_value)


def _parse_non_negative(field: str, raw: float | int | str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(field, f"not a number: {raw!r}") from None
    if not math.isfinite(value) or value < 0:
        raise ConfigurationError(field, f"must be a finite non-negative number, got {raw!r}")
    return value


def compute_health_ranges(calibration: SubjectCalibration) -> HealthRanges:
    """Derive temperature and heart-rate bands for a subject."""
    (rest_min, rest_max), (active_min, active_max) = HR_BANDS[calibration.size]

    if calibration.age_years < ADULT_AGE_MIN or calibration.age_years > ADULT_AGE_MAX:
        rest_min += AGE_HR_SHIFT
        rest_max += AGE_HR_SHIFT

    offset = calibration.breed_info.temp_adjust
    return HealthRanges(
        temp_rest=Band(TEMP_REST_MIN + offset, TEMP_REST_MAX + offset),
        temp_active=Band(TEMP_ACTIVE_MIN + offset, TEMP_ACTIVE_MAX + offset),
        hr_rest=Band(rest_min, rest_max),
        hr_active=Band(active_min, active_max),
    )

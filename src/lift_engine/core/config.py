"""
Configuration constants for the training calculation engine.

All adjustable parameters are centralized here for easy tuning.
Grouped coefficients that callers may override are frozen dataclasses;
the YAML loader in core/engine/config_loader.py builds overridden copies.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# UNITS AND PLATE ROUNDING
# =============================================================================

KG_TO_LB: Final[float] = 2.20462  # 1 kg = 2.20462 lb
LB_TO_KG: Final[float] = 0.453592  # used for band preset conversion

VALID_UNITS: Final[tuple[str, ...]] = ("kg", "lb")
UNIT_ALIASES: Final[dict[str, str]] = {"lbs": "lb", "kgs": "kg"}

KG_PLATE_INCREMENT: Final[float] = 2.5  # smallest usable jump in kg mode
LB_PLATE_INCREMENT: Final[float] = 5.0  # smallest usable jump in lb mode

# =============================================================================
# RPE / RIR
# =============================================================================

RPE_MIN: Final[float] = 1.0
RPE_MAX: Final[float] = 10.0
RIR_MAX: Final[float] = 10.0

# =============================================================================
# BAND ASSISTANCE PRESETS
# =============================================================================

# color -> (label, (min_lb, max_lb)); kg value is the midpoint converted
BAND_ASSISTANCE_PRESETS: Final[dict[str, tuple[str, tuple[float, float]]]] = {
    "yellow": ("Extra Light", (5.0, 15.0)),
    "red": ("Light", (15.0, 25.0)),
    "black": ("Medium", (25.0, 40.0)),
    "purple": ("Heavy", (40.0, 60.0)),
    "green": ("Extra Heavy", (60.0, 80.0)),
}

# =============================================================================
# BODYWEIGHT PROGRESSION
# =============================================================================

BODYWEIGHT_CHANGE_THRESHOLD_PCT: Final[float] = 2.0  # ignore smaller swings
ASSISTED_GRADUATE_REPS: Final[float] = 10.0  # avg reps before cutting assistance
ASSISTANCE_STEP_KG: Final[float] = 5.0
PURE_BW_ADD_WEIGHT_REPS: Final[float] = 12.0  # avg reps before adding load
FIRST_ADDED_WEIGHT_KG: Final[float] = 5.0
WEIGHTED_INCREASE_REPS: Final[float] = 8.0
WEIGHTED_STEP_KG: Final[float] = 2.5

# =============================================================================
# SET QUALITY
# =============================================================================


@dataclass(frozen=True)
class QualityThresholds:
    """RIR-deviation bands used by the set quality classifier."""

    stimulative_band: float = 1.0  # |deviation| <= band counts as on target
    excessive_below: float = -1.0  # deviation < this -> excessive
    last_set_leniency: float = 1.0  # extra RIR allowed below on the final set


DEFAULT_QUALITY_THRESHOLDS: Final[QualityThresholds] = QualityThresholds()

# =============================================================================
# WARM-UP
# =============================================================================

DEFAULT_BARBELL_KG: Final[float] = 20.0

# (upper bound of working weight kg, ramp percents); first match wins
WARMUP_RAMPS: Final[list[tuple[float, list[int]]]] = [
    (20.0, [50]),
    (50.0, [50, 75]),
    (100.0, [40, 60, 80]),
    (float("inf"), [30, 50, 70, 85]),
]

LIGHT_WARMUP_THRESHOLD_KG: Final[float] = 20.0
GENERAL_WARMUP_REPS: Final[int] = 10

# =============================================================================
# PERSONAL RECORDS
# =============================================================================

REPS_PR_MIN_WEIGHT_FRACTION: Final[float] = 0.95  # of prior best weight

# =============================================================================
# READINESS
# =============================================================================

SLEEP_OPTIMAL_MIN_H: Final[float] = 7.0
SLEEP_OPTIMAL_MAX_H: Final[float] = 9.0
SLEEP_ZERO_SCORE_H: Final[float] = 3.0  # short-sleep score reaches 0 here
SLEEP_LONG_FLOOR_H: Final[float] = 12.0  # long-sleep score bottoms out here
SLEEP_LONG_FLOOR_SCORE: Final[float] = 0.5
SLEEP_MAX_H: Final[float] = 24.0

RATING_MIN: Final[int] = 1
RATING_MAX: Final[int] = 5


@dataclass(frozen=True)
class ReadinessWeights:
    """Weights of the readiness composite; should sum to 1."""

    sleep_hours: float = 0.30
    sleep_quality: float = 0.20
    stress: float = 0.25
    nutrition: float = 0.25

    def __post_init__(self) -> None:
        for name in ("sleep_hours", "sleep_quality", "stress", "nutrition"):
            if getattr(self, name) < 0:
                raise ValueError(f"ReadinessWeights.{name} must be non-negative")
        if self.total <= 0:
            raise ValueError("ReadinessWeights must not all be zero")

    @property
    def total(self) -> float:
        return self.sleep_hours + self.sleep_quality + self.stress + self.nutrition


DEFAULT_READINESS_WEIGHTS: Final[ReadinessWeights] = ReadinessWeights()

# (min score, band, message, recommendation); first match wins
READINESS_BANDS: Final[list[tuple[int, str, str, str]]] = [
    (
        80,
        "well_recovered",
        "Well recovered",
        "Great day for progression or high-intensity work",
    ),
    (
        60,
        "adequate",
        "Adequate readiness",
        "Proceed with the planned workout",
    ),
    (
        40,
        "caution",
        "Train with caution",
        "Maintain current weights and focus on execution",
    ),
    (
        0,
        "lighter_session",
        "Low readiness",
        "Consider a lighter session: reduce volume or intensity by 10-20%",
    ),
]

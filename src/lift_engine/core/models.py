"""
Data models for lift-engine.

All core dataclasses representing logged sets, bodyweight modifiers,
exercise targets, and the derived records the engine produces.
Weights are always kilograms; the display unit never reaches a model.
"""

import math
from dataclasses import dataclass, field
from typing import Literal

from .config import RPE_MAX, RPE_MIN
from .errors import InvalidSetData, MissingBodyweight

Unit = Literal["kg", "lb"]
Modification = Literal["none", "weighted", "assisted"]
AssistanceType = Literal["machine", "band", "partner"]
BandColor = Literal["yellow", "red", "black", "purple", "green"]
SetQuality = Literal["junk", "effective", "stimulative", "excessive"]
RecordType = Literal["e1rm", "weight", "reps"]

MODIFICATIONS: tuple[str, ...] = ("none", "weighted", "assisted")
ASSISTANCE_TYPES: tuple[str, ...] = ("machine", "band", "partner")
QUALITIES: tuple[str, ...] = ("junk", "effective", "stimulative", "excessive")


def require_finite(value: float | None, name: str) -> None:
    """Reject NaN and infinities, which slip past plain range comparisons."""
    if value is not None and not math.isfinite(value):
        raise InvalidSetData(f"{name} must be a finite number, got {value}")


def require_reps(reps: int | None) -> None:
    """Reps are a whole number, at least 1."""
    if (
        reps is None
        or isinstance(reps, bool)
        or (isinstance(reps, float) and not reps.is_integer())
        or reps < 1
    ):
        raise InvalidSetData(f"reps must be a whole number of at least 1, got {reps}")


@dataclass(frozen=True)
class BodyweightLoad:
    """
    Bodyweight context of one set.

    Built as a whole by equipment.build_bodyweight_load(); never patched.
    For band assistance assistance_weight_kg holds the preset value that
    was actually subtracted, so the invariant below holds for every mode:

      none     : effective = bodyweight
      weighted : effective = bodyweight + added
      assisted : effective = max(0, bodyweight - assistance)
    """

    user_bodyweight_kg: float
    modification: Modification
    effective_load_kg: float
    added_weight_kg: float | None = None
    assistance_weight_kg: float | None = None
    assistance_type: AssistanceType | None = None
    band_color: BandColor | None = None

    def __post_init__(self) -> None:
        """Validate bodyweight data and the effective-load invariant."""
        require_finite(self.user_bodyweight_kg, "user_bodyweight_kg")
        require_finite(self.added_weight_kg, "added_weight_kg")
        require_finite(self.assistance_weight_kg, "assistance_weight_kg")
        require_finite(self.effective_load_kg, "effective_load_kg")
        if self.user_bodyweight_kg is None or self.user_bodyweight_kg <= 0:
            raise MissingBodyweight("user_bodyweight_kg must be positive")
        if self.modification not in MODIFICATIONS:
            raise InvalidSetData(f"Invalid modification: {self.modification!r}")
        if self.added_weight_kg is not None and self.added_weight_kg < 0:
            raise InvalidSetData("added_weight_kg must be non-negative")
        if self.assistance_weight_kg is not None and self.assistance_weight_kg < 0:
            raise InvalidSetData("assistance_weight_kg must be non-negative")
        if self.assistance_type is not None and self.assistance_type not in ASSISTANCE_TYPES:
            raise InvalidSetData(f"Invalid assistance_type: {self.assistance_type!r}")
        if self.effective_load_kg < 0:
            raise InvalidSetData("effective_load_kg must be non-negative")

        bw = self.user_bodyweight_kg
        if self.modification == "weighted":
            expected = bw + (self.added_weight_kg or 0.0)
        elif self.modification == "assisted":
            expected = max(0.0, bw - (self.assistance_weight_kg or 0.0))
        else:
            expected = bw
        if not math.isclose(self.effective_load_kg, expected, abs_tol=1e-6):
            raise InvalidSetData(
                f"effective_load_kg {self.effective_load_kg} does not match "
                f"{self.modification} load {expected}"
            )


@dataclass(frozen=True)
class LoggedSet:
    """
    A completed set as the user logged it.

    rpe may be None only for warm-up sets. load_kg is what every derived
    signal (E1RM, records) works with: the effective bodyweight load when
    bodyweight_data is present, the plain weight otherwise.
    """

    weight_kg: float
    reps: int
    rpe: float | None = None
    is_warmup: bool = False
    bodyweight_data: BodyweightLoad | None = None
    exercise_id: str | None = None

    def __post_init__(self) -> None:
        """Validate set data."""
        require_finite(self.weight_kg, "weight_kg")
        if self.weight_kg is None or self.weight_kg < 0:
            raise InvalidSetData("weight_kg must be non-negative")
        require_reps(self.reps)
        if self.rpe is None:
            if not self.is_warmup:
                raise InvalidSetData("rpe is required for working sets")
        elif not RPE_MIN <= self.rpe <= RPE_MAX:
            raise InvalidSetData(f"rpe must be within [1, 10], got {self.rpe}")

    @property
    def load_kg(self) -> float:
        """Load that counts toward the set's stimulus."""
        if self.bodyweight_data is not None:
            return self.bodyweight_data.effective_load_kg
        return self.weight_kg


@dataclass(frozen=True)
class BodyweightChangeContext:
    """Explains how a bodyweight change alters the same modifier's load."""

    message: str
    previous_total_kg: float
    new_total_kg: float
    suggested_adjustment: str


@dataclass(frozen=True)
class ProgressionSuggestion:
    """
    Next step for a bodyweight exercise.

    kind is one of: maintain, reduce_assistance, graduate, add_weight,
    increase_weight. suggested_value_kg is the new assistance or added
    weight where one applies.
    """

    kind: str
    message: str
    suggestion: str
    suggested_value_kg: float | None = None


@dataclass(frozen=True)
class ExerciseTarget:
    """
    Prescription for one exercise, supplied by the caller.

    target_rep_range is inclusive on both ends.
    """

    target_rep_range: tuple[int, int]
    target_rir: int = 2
    target_sets: int = 3

    def __post_init__(self) -> None:
        lo, hi = self.target_rep_range
        if lo < 1 or hi < lo:
            raise InvalidSetData(
                f"target_rep_range must satisfy 1 <= min <= max, got {self.target_rep_range}"
            )
        if self.target_rir < 0:
            raise InvalidSetData("target_rir must be non-negative")
        if self.target_sets < 1:
            raise InvalidSetData("target_sets must be at least 1")

    @property
    def target_rpe(self) -> float:
        return 10.0 - self.target_rir


@dataclass(frozen=True)
class SetQualityResult:
    """Stimulus-quality tag for one set, with the reason shown to the user."""

    quality: SetQuality
    reason: str = ""


@dataclass(frozen=True)
class SetDefaults:
    """Pre-filled values for the next set input row."""

    weight_kg: float
    reps: int
    rpe: float
    source: Literal["previous_set", "target"]


@dataclass(frozen=True)
class WarmupStep:
    """One warm-up set in a ramp leading to the working weight."""

    set_number: int
    percent_of_working: float
    target_reps: int
    purpose: str
    weight_kg: float = 0.0
    is_bar_only: bool = False
    label: str = ""

    def __post_init__(self) -> None:
        if self.set_number < 1:
            raise InvalidSetData("set_number must be at least 1")
        if not 0 <= self.percent_of_working <= 100:
            raise InvalidSetData("percent_of_working must be within [0, 100]")
        if self.target_reps < 1:
            raise InvalidSetData("target_reps must be at least 1")


@dataclass(frozen=True)
class ExerciseBest:
    """
    Historical baseline for one exercise, fetched by the caller.

    Values are kilograms / reps over working sets only.
    """

    best_e1rm_kg: float = 0.0
    best_weight_kg: float = 0.0
    best_reps: int = 0

    @property
    def has_data(self) -> bool:
        return self.best_e1rm_kg > 0 or self.best_weight_kg > 0 or self.best_reps > 0


@dataclass(frozen=True)
class PersonalRecordCandidate:
    """
    A personal record detected in one session for one exercise.

    improvement_percent is set for e1rm / weight records,
    improvement_reps for reps records.
    """

    exercise_id: str
    type: RecordType
    value: float
    previous_value: float
    improvement_percent: float | None = None
    improvement_reps: int | None = None


@dataclass(frozen=True)
class ReadinessInput:
    """
    Pre-workout check-in.

    All ratings are 1-5 where higher is better (stress_level 5 = least
    stressed). Range validation happens in readiness.score_readiness().
    """

    sleep_hours: float
    sleep_quality: int
    stress_level: int
    nutrition_rating: int


@dataclass(frozen=True)
class ReadinessResult:
    """Readiness score (0-100) and its interpretation tier."""

    score: int
    band: str
    message: str = ""
    recommendation: str = ""
    components: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError("score must be within [0, 100]")

"""
Set quality classification.

Each working set is tagged by how well it matched the prescription.
Inputs are turned into a RIR deviation:

  actual_rir = clamp(10 − rpe, 0, 10)
  deviation  = actual_rir − target_rir
    > 0 : easier than planned
    < 0 : harder / closer to failure than planned

Decision table (threshold = −1, or −2 on the last set):

  reps < min                       → effective if deviation ≤ 0, else junk
  deviation < threshold            → excessive
  min ≤ reps ≤ max, deviation ≤ 1  → stimulative
  min ≤ reps ≤ max, deviation > 1  → junk
  reps > max,       deviation ≤ 1  → effective
  reps > max,       deviation > 1  → junk

Ordering: stimulative > effective > junk / excessive.
"""

from __future__ import annotations

from typing import Sequence

from .config import DEFAULT_QUALITY_THRESHOLDS, QualityThresholds, RIR_MAX, RPE_MAX, RPE_MIN
from .errors import InvalidSetData
from .models import (
    ExerciseTarget,
    LoggedSet,
    SetDefaults,
    SetQualityResult,
    require_finite,
    require_reps,
)


def _validate_inputs(rpe: float, target_rir: float, reps: int, target_rep_range: tuple[int, int]) -> None:
    if rpe is None or not RPE_MIN <= rpe <= RPE_MAX:
        raise InvalidSetData(f"rpe must be within [1, 10], got {rpe}")
    require_reps(reps)
    require_finite(target_rir, "target_rir")
    if target_rir is None or target_rir < 0:
        raise InvalidSetData(f"target_rir must be non-negative, got {target_rir}")
    lo, hi = target_rep_range
    if lo < 1 or hi < lo:
        raise InvalidSetData(
            f"target_rep_range must satisfy 1 <= min <= max, got {target_rep_range}"
        )


def classify_set_quality(
    rpe: float,
    target_rir: float,
    reps: int,
    target_rep_range: tuple[int, int],
    is_last_set: bool = False,
    thresholds: QualityThresholds = DEFAULT_QUALITY_THRESHOLDS,
) -> SetQualityResult:
    """
    Classify one working set.

    Args:
        rpe: Logged RPE (1-10)
        target_rir: Prescribed reps in reserve
        reps: Reps performed
        target_rep_range: Inclusive (min, max) prescription
        is_last_set: Final working set; allows one more RIR point of effort
        thresholds: RIR-deviation bands

    Returns:
        SetQualityResult with quality and a short reason

    Raises:
        InvalidSetData: On out-of-range inputs
    """
    _validate_inputs(rpe, target_rir, reps, target_rep_range)
    lo, hi = target_rep_range

    actual_rir = max(0.0, min(RIR_MAX, RPE_MAX - rpe))
    deviation = actual_rir - target_rir
    excessive_below = thresholds.excessive_below
    if is_last_set:
        excessive_below -= thresholds.last_set_leniency

    if reps < lo:
        if deviation <= 0:
            return SetQualityResult(
                "effective",
                f"{reps} reps is under the {lo}-{hi} range at RPE {rpe:g}; weight may be too heavy",
            )
        return SetQualityResult(
            "junk",
            f"{reps} reps is under the {lo}-{hi} range with {actual_rir:g} reps in reserve",
        )

    if deviation < excessive_below:
        return SetQualityResult(
            "excessive",
            f"RPE {rpe:g} is past the planned effort (target RIR {target_rir:g}); extra fatigue",
        )

    if deviation > thresholds.stimulative_band:
        return SetQualityResult(
            "junk",
            f"RPE {rpe:g} is too easy for target RIR {target_rir:g}; not enough tension",
        )

    if reps <= hi:
        return SetQualityResult(
            "stimulative",
            f"{reps} reps at RPE {rpe:g} - on target",
        )
    return SetQualityResult(
        "effective",
        f"{reps} reps is above the {lo}-{hi} range; consider adding weight",
    )


def classify_logged_set(
    logged_set: LoggedSet,
    target: ExerciseTarget,
    is_last_set: bool = False,
    thresholds: QualityThresholds = DEFAULT_QUALITY_THRESHOLDS,
) -> SetQualityResult | None:
    """Classify a logged set against its target. Warm-up sets are not classified."""
    if logged_set.is_warmup:
        return None
    return classify_set_quality(
        logged_set.rpe,  # type: ignore[arg-type]
        target.target_rir,
        logged_set.reps,
        target.target_rep_range,
        is_last_set=is_last_set,
        thresholds=thresholds,
    )


def classify_session(
    sets: Sequence[LoggedSet],
    target: ExerciseTarget,
    thresholds: QualityThresholds = DEFAULT_QUALITY_THRESHOLDS,
) -> list[SetQualityResult | None]:
    """
    Classify every set of one exercise in one session.

    Results line up with sets; warm-ups get None. The final working set is
    classified with last-set leniency.
    """
    last_working = max((i for i, s in enumerate(sets) if not s.is_warmup), default=-1)
    return [
        classify_logged_set(s, target, is_last_set=(i == last_working), thresholds=thresholds)
        for i, s in enumerate(sets)
    ]


def detect_junk_volume(
    sets: Sequence[LoggedSet],
    target: ExerciseTarget,
    thresholds: QualityThresholds = DEFAULT_QUALITY_THRESHOLDS,
) -> list[LoggedSet]:
    """Working sets that classify as junk."""
    results = classify_session(sets, target, thresholds)
    return [s for s, r in zip(sets, results) if r is not None and r.quality == "junk"]


def suggest_set_defaults(
    previous_set: LoggedSet | None,
    target: ExerciseTarget,
    fallback_weight_kg: float = 0.0,
) -> SetDefaults:
    """
    Pre-fill values for the next set.

    With a previous working set: repeat its weight, reps and RPE.
    Without one: the rep-range midpoint (rounded down) at the target RPE.
    """
    if previous_set is not None and not previous_set.is_warmup:
        return SetDefaults(
            weight_kg=previous_set.weight_kg,
            reps=previous_set.reps,
            rpe=previous_set.rpe if previous_set.rpe is not None else target.target_rpe,
            source="previous_set",
        )

    if fallback_weight_kg < 0:
        raise InvalidSetData(f"fallback weight must be non-negative, got {fallback_weight_kg}")
    lo, hi = target.target_rep_range
    return SetDefaults(
        weight_kg=fallback_weight_kg,
        reps=(lo + hi) // 2,
        rpe=target.target_rpe,
        source="target",
    )

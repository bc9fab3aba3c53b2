"""
Warm-up ramp planning.

Ramp percentages scale with the working weight:

  working <  20 kg :  50             (light activation, 10 reps)
  working <  50 kg :  50, 75
  working < 100 kg :  40, 60, 80
  working ≥ 100 kg :  30, 50, 70, 85

Reps per step: ≤ 50 % → 8,  ≤ 70 % → 5,  above → 3.

Each step is round_to_increment(working × pct / 100, unit). A step that
rounds up to (or past) the working weight is dropped to the next plate
step below it, so the last warm-up is always lighter than the work set.
"""

from __future__ import annotations

from .config import (
    DEFAULT_BARBELL_KG,
    GENERAL_WARMUP_REPS,
    LIGHT_WARMUP_THRESHOLD_KG,
    WARMUP_RAMPS,
)
from .errors import InvalidSetData
from .models import WarmupStep, require_finite
from .units import format_weight, normalize_unit, round_down_to_increment, round_to_increment

EMPTY_BAR_LABEL = "Empty bar"


def _ramp_for(working_weight_kg: float) -> list[int]:
    for upper, percents in WARMUP_RAMPS:
        if working_weight_kg < upper:
            return percents
    return WARMUP_RAMPS[-1][1]


def _reps_and_purpose(percent: int, light: bool) -> tuple[int, str]:
    if light:
        return GENERAL_WARMUP_REPS, "Light activation"
    if percent <= 50:
        return 8, "Movement groove practice"
    if percent <= 70:
        return 5, "Neuromuscular preparation"
    return 3, "CNS potentiation"


def plan_warmup(
    working_weight_kg: float,
    unit: str = "kg",
    barbell_weight_kg: float = DEFAULT_BARBELL_KG,
    *,
    is_first_exercise: bool = False,
) -> list[WarmupStep]:
    """
    Build the warm-up sets leading to a working weight.

    Args:
        working_weight_kg: Weight of the first work set
        unit: Display unit, decides the plate increment
        barbell_weight_kg: Empty bar weight; 0 for dumbbells / machines
        is_first_exercise: Prepend a general 0 % warm-up

    Returns:
        Steps with non-decreasing weight_kg, each strictly below the
        working weight. Empty when working_weight_kg is 0.

    Raises:
        InvalidSetData: If a weight is negative or not finite
        InvalidUnit: If unit is not recognized
    """
    u = normalize_unit(unit)
    require_finite(working_weight_kg, "working_weight_kg")
    require_finite(barbell_weight_kg, "barbell_weight_kg")
    if working_weight_kg is None or working_weight_kg < 0:
        raise InvalidSetData(f"working weight must be non-negative, got {working_weight_kg}")
    if barbell_weight_kg is None or barbell_weight_kg < 0:
        raise InvalidSetData(f"barbell weight must be non-negative, got {barbell_weight_kg}")
    if working_weight_kg == 0:
        return []

    steps: list[WarmupStep] = []
    if is_first_exercise:
        steps.append(
            WarmupStep(
                set_number=1,
                percent_of_working=0,
                target_reps=GENERAL_WARMUP_REPS,
                purpose="General warmup - increase blood flow",
                weight_kg=0.0,
                label=EMPTY_BAR_LABEL,
            )
        )

    light = working_weight_kg < LIGHT_WARMUP_THRESHOLD_KG
    bar_fits = 0 < barbell_weight_kg < working_weight_kg

    for pct in _ramp_for(working_weight_kg):
        weight = round_to_increment(working_weight_kg * pct / 100, u)
        if weight >= working_weight_kg:
            weight = round_down_to_increment(working_weight_kg, u)

        bar_only = False
        if weight == 0:
            label = EMPTY_BAR_LABEL
        elif bar_fits and weight < barbell_weight_kg:
            weight = barbell_weight_kg
            bar_only = True
            label = f"Bar only ({format_weight(barbell_weight_kg, u)})"
        else:
            label = format_weight(weight, u)

        reps, purpose = _reps_and_purpose(pct, light)
        steps.append(
            WarmupStep(
                set_number=len(steps) + 1,
                percent_of_working=pct,
                target_reps=reps,
                purpose=purpose,
                weight_kg=weight,
                is_bar_only=bar_only,
                label=label,
            )
        )

    return steps

"""
Estimated one-rep max (E1RM).

Canonical formula, Epley (1985):

  e1rm = w                    if reps == 1
  e1rm = w × (1 + reps / 30)  otherwise

Every internal comparison (PR detection, history summaries) uses Epley so
that the same set always yields the same estimate. Brzycki and Lombardi are
shown next to it in formula_table() for display only:

  Brzycki  : w × 36 / (37 − reps)     (undefined for reps ≥ 37)
  Lombardi : w × reps^0.10
"""

from __future__ import annotations

from typing import Iterable

from .errors import InvalidSetData
from .models import LoggedSet, require_finite, require_reps


def estimate_one_rep_max(weight_kg: float, reps: int) -> float:
    """
    Estimate 1RM using the Epley formula.

    Args:
        weight_kg: Load lifted (effective load for bodyweight sets)
        reps: Reps performed

    Returns:
        Estimated 1RM in kg; equals weight_kg when reps == 1

    Raises:
        InvalidSetData: If reps is not a whole number ≥ 1, or weight_kg is
            negative or not finite
    """
    require_reps(reps)
    require_finite(weight_kg, "weight_kg")
    if weight_kg is None or weight_kg < 0:
        raise InvalidSetData(f"weight must be non-negative, got {weight_kg}")
    if reps == 1:
        return weight_kg
    return weight_kg * (1 + reps / 30)


def set_e1rm(logged_set: LoggedSet) -> float:
    """E1RM of one logged set, from its effective load."""
    return estimate_one_rep_max(logged_set.load_kg, logged_set.reps)


def best_e1rm(sets: Iterable[LoggedSet]) -> float | None:
    """
    Highest E1RM across working sets.

    Returns:
        Best estimate in kg, or None when there are no working sets
    """
    estimates = [set_e1rm(s) for s in sets if not s.is_warmup]
    if not estimates:
        return None
    return max(estimates)


def formula_table(weight_kg: float, reps: int) -> dict[str, float | None]:
    """
    E1RM under several formulas, for side-by-side display.

    Only "epley" is used for comparisons. "brzycki" is None where the
    formula is undefined.
    """
    epley = estimate_one_rep_max(weight_kg, reps)
    if reps == 1:
        return {"epley": epley, "brzycki": weight_kg, "lombardi": weight_kg}
    brzycki = weight_kg * 36 / (37 - reps) if reps < 37 else None
    lombardi = weight_kg * reps**0.10
    return {"epley": epley, "brzycki": brzycki, "lombardi": lombardi}

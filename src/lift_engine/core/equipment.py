"""
Bodyweight-modifier load system.

Bodyweight exercises (pull-ups, dips, push-ups) are tracked by their
effective load: the load that counts toward training stimulus after added
weight or assistance is applied.

Effective load formula
----------------------
  none     :  L = BW
  weighted :  L = BW + max(0, added_kg)
  assisted :  L = max(0, BW − max(0, assist_kg))

Band assistance is variable through the range of motion, so the entered
value is replaced by a fixed preset keyed by band colour. Presets are the
midpoint of each band's documented lb range, converted to kg:

  yellow  Extra Light   5–15 lb  →  4.5 kg
  red     Light        15–25 lb  →  9.1 kg
  black   Medium       25–40 lb  → 14.7 kg
  purple  Heavy        40–60 lb  → 22.7 kg
  green   Extra Heavy  60–80 lb  → 31.8 kg
"""

from __future__ import annotations

from typing import Sequence

from .config import (
    ASSISTANCE_STEP_KG,
    ASSISTED_GRADUATE_REPS,
    BAND_ASSISTANCE_PRESETS,
    BODYWEIGHT_CHANGE_THRESHOLD_PCT,
    FIRST_ADDED_WEIGHT_KG,
    LB_TO_KG,
    PURE_BW_ADD_WEIGHT_REPS,
    WEIGHTED_INCREASE_REPS,
    WEIGHTED_STEP_KG,
)
from .errors import InvalidSetData, MissingBodyweight
from .models import (
    MODIFICATIONS,
    BodyweightChangeContext,
    BodyweightLoad,
    LoggedSet,
    ProgressionSuggestion,
    require_finite,
)
from .units import to_display


# ---------------------------------------------------------------------------
# Band presets
# ---------------------------------------------------------------------------

def band_assistance_kg(color: str) -> float:
    """
    Return the fixed kg-equivalent assistance of a band colour.

    Midpoint of the band's lb range × 0.453592, rounded to 0.1 kg.

    Raises:
        InvalidSetData: If the colour is not a known preset
    """
    if color not in BAND_ASSISTANCE_PRESETS:
        valid = ", ".join(BAND_ASSISTANCE_PRESETS)
        raise InvalidSetData(f"Unknown band colour {color!r}. Valid colours: {valid}")
    lo, hi = BAND_ASSISTANCE_PRESETS[color][1]
    return round((lo + hi) / 2 * LB_TO_KG, 1)


def band_label(color: str) -> str:
    """Human-readable band name, e.g. 'Medium (25–40 lb)'."""
    if color not in BAND_ASSISTANCE_PRESETS:
        raise InvalidSetData(f"Unknown band colour {color!r}")
    label, (lo, hi) = BAND_ASSISTANCE_PRESETS[color]
    return f"{label} ({lo:g}–{hi:g} lb)"


# ---------------------------------------------------------------------------
# Effective load
# ---------------------------------------------------------------------------

def _resolve_assistance(
    assist_kg: float | None,
    assistance_type: str | None,
    band_color: str | None,
) -> float:
    """Assistance actually subtracted: band preset for bands, entered value otherwise."""
    if assistance_type == "band":
        if band_color is None:
            raise InvalidSetData("band assistance requires a band colour")
        return band_assistance_kg(band_color)
    return assist_kg or 0.0


def calculate_effective_load(
    bodyweight_kg: float,
    modification: str,
    added_kg: float | None = None,
    assist_kg: float | None = None,
    assistance_type: str | None = None,
    band_color: str | None = None,
) -> float:
    """
    Compute the effective load of a bodyweight set in kg.

    Args:
        bodyweight_kg: User's bodyweight (must be positive)
        modification: "none", "weighted" or "assisted"
        added_kg: Vest / belt / plate weight for weighted sets
        assist_kg: Machine or partner assistance for assisted sets
        assistance_type: "machine", "band" or "partner"; "band" ignores
            assist_kg in favour of the colour preset
        band_color: Band colour when assistance_type is "band"

    Returns:
        Effective load in kg (≥ 0; equals bodyweight_kg for "none")

    Raises:
        MissingBodyweight: If bodyweight_kg is missing or not positive
        InvalidSetData: On unknown modification, unknown band colour,
            negative added / assistance weight or a non-finite number
    """
    require_finite(bodyweight_kg, "bodyweight_kg")
    require_finite(added_kg, "added_kg")
    require_finite(assist_kg, "assist_kg")
    if bodyweight_kg is None or bodyweight_kg <= 0:
        raise MissingBodyweight(
            f"bodyweight exercise requires a positive bodyweight, got {bodyweight_kg}"
        )
    if modification not in MODIFICATIONS:
        raise InvalidSetData(f"Invalid modification: {modification!r}")
    if added_kg is not None and added_kg < 0:
        raise InvalidSetData(f"added weight must be non-negative, got {added_kg}")
    if assist_kg is not None and assist_kg < 0:
        raise InvalidSetData(f"assistance must be non-negative, got {assist_kg}")

    if modification == "none":
        return bodyweight_kg
    if modification == "weighted":
        return bodyweight_kg + (added_kg or 0.0)

    assist = _resolve_assistance(assist_kg, assistance_type, band_color)
    return max(0.0, bodyweight_kg - assist)


def build_bodyweight_load(
    user_bodyweight_kg: float,
    modification: str,
    added_weight_kg: float | None = None,
    assistance_weight_kg: float | None = None,
    assistance_type: str | None = None,
    band_color: str | None = None,
) -> BodyweightLoad:
    """
    Build a BodyweightLoad record from its inputs.

    Called again from scratch whenever any input changes.
    For band assistance the stored assistance is the preset value.
    """
    effective = calculate_effective_load(
        user_bodyweight_kg,
        modification,
        added_weight_kg,
        assistance_weight_kg,
        assistance_type,
        band_color,
    )

    if modification == "assisted" and assistance_type == "band":
        assistance_weight_kg = band_assistance_kg(band_color)  # type: ignore[arg-type]

    return BodyweightLoad(
        user_bodyweight_kg=user_bodyweight_kg,
        modification=modification,  # type: ignore[arg-type]
        effective_load_kg=effective,
        added_weight_kg=added_weight_kg if modification == "weighted" else None,
        assistance_weight_kg=assistance_weight_kg if modification == "assisted" else None,
        assistance_type=assistance_type if modification == "assisted" else None,  # type: ignore[arg-type]
        band_color=band_color if modification == "assisted" and assistance_type == "band" else None,  # type: ignore[arg-type]
    )


def percent_bodyweight(effective_load_kg: float, user_bodyweight_kg: float) -> int:
    """Effective load as a whole-number percentage of bodyweight."""
    if user_bodyweight_kg <= 0:
        raise MissingBodyweight("percent of bodyweight requires a positive bodyweight")
    return round(effective_load_kg / user_bodyweight_kg * 100)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def format_bodyweight_compact(load: BodyweightLoad, unit: str = "kg") -> str:
    """Compact set-row label: "BW (80.0)", "BW+25" or "BW-20"."""
    bw = to_display(load.user_bodyweight_kg, unit)
    if load.modification == "weighted":
        return f"BW+{to_display(load.added_weight_kg or 0.0, unit):.0f}"
    if load.modification == "assisted":
        return f"BW-{to_display(load.assistance_weight_kg or 0.0, unit):.0f}"
    return f"BW ({bw:.1f})"


def format_bodyweight_with_total(load: BodyweightLoad, unit: str = "kg") -> str:
    """Label with the resulting total: "BW + 25 = 105.0"."""
    bw = to_display(load.user_bodyweight_kg, unit)
    total = to_display(load.effective_load_kg, unit)
    if load.modification == "weighted":
        added = to_display(load.added_weight_kg or 0.0, unit)
        return f"BW + {added:.0f} = {total:.1f}"
    if load.modification == "assisted":
        assist = to_display(load.assistance_weight_kg or 0.0, unit)
        return f"BW - {assist:.0f} = {total:.1f}"
    return f"BW ({bw:.1f})"


# ---------------------------------------------------------------------------
# Progression helpers
# ---------------------------------------------------------------------------

def bodyweight_change_context(
    current_bodyweight_kg: float,
    previous_bodyweight_kg: float,
    previous_load: BodyweightLoad | None = None,
) -> BodyweightChangeContext | None:
    """
    Explain a bodyweight change between sessions.

    Returns None when the change is within ±2 % (noise). Otherwise reports
    what the previous modifier amounts to at the new bodyweight.
    """
    if current_bodyweight_kg <= 0 or previous_bodyweight_kg <= 0:
        raise MissingBodyweight("bodyweight change requires positive bodyweights")

    change = current_bodyweight_kg - previous_bodyweight_kg
    change_pct = change / previous_bodyweight_kg * 100
    if abs(change_pct) <= BODYWEIGHT_CHANGE_THRESHOLD_PCT:
        return None

    gained = change > 0
    verb = "gained" if gained else "lost"
    amount = f"{abs(change):.1f} kg"

    if previous_load is not None and previous_load.modification == "weighted":
        added = previous_load.added_weight_kg or 0.0
        return BodyweightChangeContext(
            message=(
                f"You've {verb} {amount} since last session. Same added weight will feel "
                f"slightly {'harder' if gained else 'easier'}."
            ),
            previous_total_kg=previous_load.effective_load_kg,
            new_total_kg=current_bodyweight_kg + added,
            suggested_adjustment=(
                "Consider same or slightly less added weight"
                if gained
                else "Same added weight or try adding more"
            ),
        )

    if previous_load is not None and previous_load.modification == "assisted":
        assist = previous_load.assistance_weight_kg or 0.0
        return BodyweightChangeContext(
            message=(
                f"You've {verb} {amount}. Same assistance will feel slightly "
                f"{'harder' if gained else 'easier'}."
            ),
            previous_total_kg=previous_load.effective_load_kg,
            new_total_kg=max(0.0, current_bodyweight_kg - assist),
            suggested_adjustment=(
                "May need slightly more assistance" if gained else "May be ready to reduce assistance"
            ),
        )

    return BodyweightChangeContext(
        message=f"You've {verb} {amount} since your last session.",
        previous_total_kg=previous_bodyweight_kg,
        new_total_kg=current_bodyweight_kg,
        suggested_adjustment=(
            "Bodyweight exercises will feel slightly harder"
            if gained
            else "Bodyweight exercises will feel slightly easier"
        ),
    )


def suggest_bodyweight_progression(recent_sets: Sequence[LoggedSet]) -> ProgressionSuggestion:
    """
    Suggest the next modifier for a bodyweight exercise.

    Rules (average reps over recent_sets, modifier of the last set):
      assisted, avg ≥ 10 → cut assistance by 5 kg (graduate at 0)
      none,     avg ≥ 12 → add 5 kg
      weighted, avg ≥ 8  → add 2.5 kg
      otherwise          → maintain
    """
    if not recent_sets:
        return ProgressionSuggestion(
            kind="maintain",
            message="Start with bodyweight",
            suggestion="Begin with pure bodyweight to establish baseline",
        )

    last = recent_sets[-1]
    modification = last.bodyweight_data.modification if last.bodyweight_data else "none"
    avg_reps = sum(s.reps for s in recent_sets) / len(recent_sets)

    if modification == "assisted" and avg_reps >= ASSISTED_GRADUATE_REPS:
        current = last.bodyweight_data.assistance_weight_kg or 0.0  # type: ignore[union-attr]
        new_assist = max(0.0, current - ASSISTANCE_STEP_KG)
        if new_assist == 0:
            return ProgressionSuggestion(
                kind="graduate",
                message="Ready to try unassisted!",
                suggestion="Try bodyweight only for your first set",
                suggested_value_kg=0.0,
            )
        return ProgressionSuggestion(
            kind="reduce_assistance",
            message=f"Reduce assistance to {new_assist:g} kg",
            suggestion=f"You've been hitting {avg_reps:.0f} reps consistently",
            suggested_value_kg=new_assist,
        )

    if modification == "none" and avg_reps >= PURE_BW_ADD_WEIGHT_REPS:
        return ProgressionSuggestion(
            kind="add_weight",
            message="Ready to add weight!",
            suggestion=f"Try BW + {FIRST_ADDED_WEIGHT_KG:g} kg",
            suggested_value_kg=FIRST_ADDED_WEIGHT_KG,
        )

    if modification == "weighted" and avg_reps >= WEIGHTED_INCREASE_REPS:
        new_added = (last.bodyweight_data.added_weight_kg or 0.0) + WEIGHTED_STEP_KG  # type: ignore[union-attr]
        return ProgressionSuggestion(
            kind="increase_weight",
            message=f"Increase to BW + {new_added:g} kg",
            suggestion="Solid reps at current weight",
            suggested_value_kg=new_added,
        )

    return ProgressionSuggestion(
        kind="maintain",
        message="Keep current load",
        suggestion="Focus on adding reps",
    )

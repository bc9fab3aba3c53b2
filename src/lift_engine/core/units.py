"""
Unit conversion and plate rounding.

Storage is always kilograms. Pounds exist only at the display edge:

  to_display(kg, "lb") = kg × 2.20462
  to_kg(lb, "lb")      = lb / 2.20462

Plate rounding works in the display unit so a lb user sees whole 5 lb
jumps, then converts back to kg for storage.
"""

import math

from .config import (
    KG_PLATE_INCREMENT,
    KG_TO_LB,
    LB_PLATE_INCREMENT,
    RIR_MAX,
    RPE_MAX,
    RPE_MIN,
    UNIT_ALIASES,
    VALID_UNITS,
)
from .errors import InvalidSetData, InvalidUnit
from .models import Unit, require_finite


def normalize_unit(unit: str) -> Unit:
    """
    Validate a display unit string.

    Accepts "kg", "lb" and the plural aliases, case-insensitive.

    Raises:
        InvalidUnit: If the unit is not recognized
    """
    if not isinstance(unit, str):
        raise InvalidUnit(unit)
    u = unit.strip().lower()
    u = UNIT_ALIASES.get(u, u)
    if u not in VALID_UNITS:
        raise InvalidUnit(unit)
    return u  # type: ignore[return-value]


def to_display(kg: float, unit: str) -> float:
    """Convert a stored kg value to the display unit."""
    u = normalize_unit(unit)
    if u == "lb":
        return kg * KG_TO_LB
    return kg


def to_kg(display_value: float, unit: str) -> float:
    """Convert a value entered in the display unit to kg."""
    u = normalize_unit(unit)
    if u == "lb":
        return display_value / KG_TO_LB
    return display_value


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between any two units."""
    return to_display(to_kg(value, from_unit), to_unit)


def plate_increment(unit: str) -> float:
    """Smallest usable plate jump in the display unit."""
    return LB_PLATE_INCREMENT if normalize_unit(unit) == "lb" else KG_PLATE_INCREMENT


def round_to_increment(kg: float, unit: str) -> float:
    """
    Round a kg value to the nearest usable plate increment.

    kg mode: nearest 2.5 kg.  lb mode: nearest 5 lb, converted back to kg.
    Ties round up. Zero and negative inputs return 0 (empty bar).

    Idempotent: round_to_increment(round_to_increment(x, u), u) equals
    round_to_increment(x, u).

    Args:
        kg: Weight in kg
        unit: Display unit ("kg" or "lb")

    Returns:
        Rounded weight in kg
    """
    u = normalize_unit(unit)
    require_finite(kg, "kg")
    if kg <= 0:
        return 0.0
    inc = plate_increment(u)
    steps = math.floor(to_display(kg, u) / inc + 0.5)
    if steps <= 0:
        return 0.0
    return to_kg(steps * inc, u)


def round_down_to_increment(kg: float, unit: str) -> float:
    """
    Largest plate increment strictly below a kg value.

    Used to keep warm-up steps under the working weight. Returns 0 when no
    positive increment fits.
    """
    u = normalize_unit(unit)
    require_finite(kg, "kg")
    if kg <= 0:
        return 0.0
    inc = plate_increment(u)
    steps = math.ceil(to_display(kg, u) / inc - 1e-9) - 1
    if steps <= 0:
        return 0.0
    return to_kg(steps * inc, u)


def format_weight(kg: float, unit: str, decimals: int = 1) -> str:
    """
    Format a kg value for display, e.g. "79.5 kg" or "175.3 lbs".

    No plate rounding is applied; call round_to_increment() first if needed.
    """
    u = normalize_unit(unit)
    value = to_display(kg, u)
    suffix = "lbs" if u == "lb" else "kg"
    return f"{value:.{decimals}f} {suffix}"


def rpe_to_rir(rpe: float) -> float:
    """RIR ≈ 10 − RPE, clamped to [0, 10]."""
    if not RPE_MIN <= rpe <= RPE_MAX:
        raise InvalidSetData(f"rpe must be within [1, 10], got {rpe}")
    return max(0.0, min(RIR_MAX, RPE_MAX - rpe))


def rir_to_rpe(rir: float) -> float:
    """RPE ≈ 10 − RIR, clamped to [1, 10]."""
    if rir < 0:
        raise InvalidSetData(f"rir must be non-negative, got {rir}")
    return max(RPE_MIN, min(RPE_MAX, RPE_MAX - rir))

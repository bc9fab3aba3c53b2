"""
JSON serialization for logged sets.

Handles conversion between dataclasses and the stored dict shape.

Stored records use camelCase keys (weightKg, reps, rpe, isWarmup,
bodyweightData). Older rows may carry snake_case keys instead; both are
accepted here, once, so nothing past this module looks a field up by two
names. Derived values (effectiveLoadKg, a cached quality) are never
trusted on read: they are rebuilt from the raw fields.
"""

import json
import math
from typing import Any

from ..core.equipment import build_bodyweight_load
from ..core.errors import EngineError
from ..core.models import BodyweightLoad, LoggedSet


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


_MISSING = object()


def _field(data: dict[str, Any], camel: str, snake: str, default: Any = _MISSING) -> Any:
    """Read one field under its camelCase or snake_case name."""
    if camel in data:
        return data[camel]
    if snake in data:
        return data[snake]
    if default is _MISSING:
        raise ValidationError(f"Missing required field: {camel}")
    return default


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def _optional_number(value: Any, name: str) -> float | None:
    if value is None:
        return None
    return _number(value, name)


def _integer(value: Any, name: str) -> int:
    number = _number(value, name)
    if not number.is_integer():
        raise ValidationError(f"{name} must be a whole number, got {value!r}")
    return int(number)


def bodyweight_load_to_dict(load: BodyweightLoad) -> dict[str, Any]:
    """
    Convert BodyweightLoad to its stored dict shape.

    Optional fields are omitted when unset.
    """
    data: dict[str, Any] = {
        "userBodyweightKg": load.user_bodyweight_kg,
        "modification": load.modification,
        "effectiveLoadKg": load.effective_load_kg,
    }
    if load.added_weight_kg is not None:
        data["addedWeightKg"] = load.added_weight_kg
    if load.assistance_weight_kg is not None:
        data["assistanceWeightKg"] = load.assistance_weight_kg
    if load.assistance_type is not None:
        data["assistanceType"] = load.assistance_type
    if load.band_color is not None:
        data["bandColor"] = load.band_color
    return data


def dict_to_bodyweight_load(data: dict[str, Any]) -> BodyweightLoad:
    """
    Convert a stored dict to BodyweightLoad.

    The effective load is recomputed from the stored inputs.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"bodyweightData must be an object, got {type(data).__name__}")

    bodyweight = _number(_field(data, "userBodyweightKg", "user_bodyweight_kg"), "userBodyweightKg")
    modification = _field(data, "modification", "modification", "none")
    added = _optional_number(_field(data, "addedWeightKg", "added_weight_kg", None), "addedWeightKg")
    assistance = _optional_number(
        _field(data, "assistanceWeightKg", "assistance_weight_kg", None), "assistanceWeightKg"
    )
    assistance_type = _field(data, "assistanceType", "assistance_type", None)
    band_color = _field(data, "bandColor", "band_color", None)

    try:
        return build_bodyweight_load(
            bodyweight,
            modification,
            added_weight_kg=added,
            assistance_weight_kg=assistance,
            assistance_type=assistance_type,
            band_color=band_color,
        )
    except EngineError as e:
        raise ValidationError(f"Invalid bodyweightData: {e}") from e


def logged_set_to_dict(logged_set: LoggedSet) -> dict[str, Any]:
    """
    Convert LoggedSet to its stored dict shape.

    Args:
        logged_set: LoggedSet to convert

    Returns:
        Dict representation (camelCase keys)
    """
    data: dict[str, Any] = {
        "weightKg": logged_set.weight_kg,
        "reps": logged_set.reps,
        "rpe": logged_set.rpe,
        "isWarmup": logged_set.is_warmup,
    }
    if logged_set.bodyweight_data is not None:
        data["bodyweightData"] = bodyweight_load_to_dict(logged_set.bodyweight_data)
    if logged_set.exercise_id is not None:
        data["exerciseId"] = logged_set.exercise_id
    return data


def dict_to_logged_set(data: dict[str, Any]) -> LoggedSet:
    """
    Convert a stored dict to LoggedSet.

    Accepts camelCase or snake_case keys. A cached "quality" field is
    ignored.

    Args:
        data: Dict representation

    Returns:
        LoggedSet instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Set record must be an object, got {type(data).__name__}")

    weight = _number(_field(data, "weightKg", "weight_kg"), "weightKg")
    reps = _integer(_field(data, "reps", "reps"), "reps")
    rpe = _optional_number(_field(data, "rpe", "rpe", None), "rpe")
    is_warmup = _field(data, "isWarmup", "is_warmup", False)
    if not isinstance(is_warmup, bool):
        raise ValidationError(f"isWarmup must be a boolean, got {is_warmup!r}")

    bw_raw = _field(data, "bodyweightData", "bodyweight_data", None)
    bodyweight_data = dict_to_bodyweight_load(bw_raw) if bw_raw is not None else None

    exercise_id = _field(data, "exerciseId", "exercise_id", None)
    if exercise_id is not None and not isinstance(exercise_id, str):
        raise ValidationError(f"exerciseId must be a string, got {exercise_id!r}")

    try:
        return LoggedSet(
            weight_kg=weight,
            reps=reps,
            rpe=rpe,
            is_warmup=is_warmup,
            bodyweight_data=bodyweight_data,
            exercise_id=exercise_id,
        )
    except EngineError as e:
        raise ValidationError(f"Invalid set: {e}") from e


def logged_set_to_json_line(logged_set: LoggedSet) -> str:
    """Serialize a set to a single JSON line (no trailing newline)."""
    return json.dumps(logged_set_to_dict(logged_set), separators=(",", ":"))


def json_line_to_logged_set(line: str) -> LoggedSet:
    """
    Deserialize a JSON line to a LoggedSet.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_logged_set(data)

"""
Pre-workout readiness score.

Four check-in inputs are normalised to [0, 1] and combined with the
ReadinessWeights coefficients:

  rating r (1-5, higher is better) → (r − 1) / 4

  sleep hours h:
    7 ≤ h ≤ 9   → 1.0
    h < 7       → max(0, (h − 3) / 4)          linear to 0 at 3 h
    9 < h < 12  → 1 − 0.5 × (h − 9) / 3        linear to 0.5 at 12 h
    h ≥ 12      → 0.5

  score = round(100 × Σ wᵢ·cᵢ / Σ wᵢ), clamped to [0, 100]

Bands: ≥ 80 well_recovered, ≥ 60 adequate, ≥ 40 caution, else
lighter_session.
"""

from __future__ import annotations

from .config import (
    DEFAULT_READINESS_WEIGHTS,
    RATING_MAX,
    RATING_MIN,
    READINESS_BANDS,
    SLEEP_LONG_FLOOR_H,
    SLEEP_LONG_FLOOR_SCORE,
    SLEEP_MAX_H,
    SLEEP_OPTIMAL_MAX_H,
    SLEEP_OPTIMAL_MIN_H,
    SLEEP_ZERO_SCORE_H,
    ReadinessWeights,
)
from .errors import InvalidReadinessInput
from .models import ReadinessInput, ReadinessResult


def sleep_hours_score(sleep_hours: float) -> float:
    """Normalised sleep-duration score in [0, 1], peaking across 7-9 h."""
    if sleep_hours is None or not 0 <= sleep_hours <= SLEEP_MAX_H:
        raise InvalidReadinessInput(f"sleep_hours must be within [0, 24], got {sleep_hours}")

    if SLEEP_OPTIMAL_MIN_H <= sleep_hours <= SLEEP_OPTIMAL_MAX_H:
        return 1.0
    if sleep_hours < SLEEP_OPTIMAL_MIN_H:
        span = SLEEP_OPTIMAL_MIN_H - SLEEP_ZERO_SCORE_H
        return max(0.0, (sleep_hours - SLEEP_ZERO_SCORE_H) / span)
    if sleep_hours >= SLEEP_LONG_FLOOR_H:
        return SLEEP_LONG_FLOOR_SCORE
    span = SLEEP_LONG_FLOOR_H - SLEEP_OPTIMAL_MAX_H
    return 1.0 - (1.0 - SLEEP_LONG_FLOOR_SCORE) * (sleep_hours - SLEEP_OPTIMAL_MAX_H) / span


def rating_score(value: float, name: str = "rating") -> float:
    """Map a 1-5 rating to [0, 1]."""
    if value is None or not RATING_MIN <= value <= RATING_MAX:
        raise InvalidReadinessInput(f"{name} must be within [1, 5], got {value}")
    return (value - RATING_MIN) / (RATING_MAX - RATING_MIN)


def interpret_readiness(score: int) -> tuple[str, str, str]:
    """
    Band, message and recommendation for a readiness score.

    Returns:
        (band, message, recommendation)
    """
    if not 0 <= score <= 100:
        raise InvalidReadinessInput(f"score must be within [0, 100], got {score}")
    for min_score, band, message, recommendation in READINESS_BANDS:
        if score >= min_score:
            return band, message, recommendation
    _, band, message, recommendation = READINESS_BANDS[-1]
    return band, message, recommendation


def score_readiness(
    sleep_hours: float,
    sleep_quality: int,
    stress_level: int,
    nutrition_rating: int,
    weights: ReadinessWeights = DEFAULT_READINESS_WEIGHTS,
) -> ReadinessResult:
    """
    Score a pre-workout check-in.

    Args:
        sleep_hours: Hours slept last night (0-24)
        sleep_quality: 1-5, 5 = best
        stress_level: 1-5, 5 = least stressed
        nutrition_rating: 1-5, 5 = best
        weights: Composite coefficients

    Returns:
        ReadinessResult with score, band, message, recommendation and the
        normalised components

    Raises:
        InvalidReadinessInput: If any input is out of range
    """
    components = {
        "sleep_hours": sleep_hours_score(sleep_hours),
        "sleep_quality": rating_score(sleep_quality, "sleep_quality"),
        "stress": rating_score(stress_level, "stress_level"),
        "nutrition": rating_score(nutrition_rating, "nutrition_rating"),
    }

    composite = (
        weights.sleep_hours * components["sleep_hours"]
        + weights.sleep_quality * components["sleep_quality"]
        + weights.stress * components["stress"]
        + weights.nutrition * components["nutrition"]
    ) / weights.total

    score = max(0, min(100, round(composite * 100)))
    band, message, recommendation = interpret_readiness(score)
    return ReadinessResult(
        score=score,
        band=band,
        message=message,
        recommendation=recommendation,
        components=components,
    )


def score_check_in(
    check_in: ReadinessInput,
    weights: ReadinessWeights = DEFAULT_READINESS_WEIGHTS,
) -> ReadinessResult:
    """score_readiness() for a ReadinessInput record."""
    return score_readiness(
        check_in.sleep_hours,
        check_in.sleep_quality,
        check_in.stress_level,
        check_in.nutrition_rating,
        weights,
    )

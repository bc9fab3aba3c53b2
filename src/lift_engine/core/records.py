"""
Personal record detection.

Per exercise and session, over working sets only, the session bests are
compared with the historical baseline in strict priority order:

  1. e1rm   : best Epley E1RM   > prior best E1RM
  2. weight : heaviest load     > prior best weight
  3. reps   : most reps         > prior best reps, counting only sets at
              ≥ 95 % of the prior best weight

At most one record is reported per exercise. An exercise without a
baseline is skipped; absent history never produces a record.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .config import REPS_PR_MIN_WEIGHT_FRACTION
from .max_estimator import set_e1rm
from .models import ExerciseBest, LoggedSet, PersonalRecordCandidate


def _improvement_percent(value: float, previous: float) -> float:
    return round((value - previous) / previous * 100, 1)


def exercise_best_from_sets(sets: Iterable[LoggedSet]) -> ExerciseBest:
    """
    Baseline from historical sets of one exercise.

    Warm-ups are ignored; returns an empty ExerciseBest when there are no
    working sets.
    """
    working = [s for s in sets if not s.is_warmup]
    if not working:
        return ExerciseBest()
    return ExerciseBest(
        best_e1rm_kg=max(set_e1rm(s) for s in working),
        best_weight_kg=max(s.load_kg for s in working),
        best_reps=max(s.reps for s in working),
    )


def _detect_for_exercise(
    exercise_id: str,
    sets: Sequence[LoggedSet],
    baseline: ExerciseBest,
) -> PersonalRecordCandidate | None:
    working = [s for s in sets if not s.is_warmup]
    if not working:
        return None

    session_e1rm = max(set_e1rm(s) for s in working)
    if baseline.best_e1rm_kg > 0 and session_e1rm > baseline.best_e1rm_kg:
        return PersonalRecordCandidate(
            exercise_id=exercise_id,
            type="e1rm",
            value=session_e1rm,
            previous_value=baseline.best_e1rm_kg,
            improvement_percent=_improvement_percent(session_e1rm, baseline.best_e1rm_kg),
        )

    session_weight = max(s.load_kg for s in working)
    if baseline.best_weight_kg > 0 and session_weight > baseline.best_weight_kg:
        return PersonalRecordCandidate(
            exercise_id=exercise_id,
            type="weight",
            value=session_weight,
            previous_value=baseline.best_weight_kg,
            improvement_percent=_improvement_percent(session_weight, baseline.best_weight_kg),
        )

    if baseline.best_reps > 0:
        min_load = baseline.best_weight_kg * REPS_PR_MIN_WEIGHT_FRACTION
        eligible = [s.reps for s in working if s.load_kg >= min_load]
        if eligible and max(eligible) > baseline.best_reps:
            reps = max(eligible)
            return PersonalRecordCandidate(
                exercise_id=exercise_id,
                type="reps",
                value=reps,
                previous_value=baseline.best_reps,
                improvement_reps=reps - baseline.best_reps,
            )

    return None


def detect_personal_records(
    session_sets: Mapping[str, Sequence[LoggedSet]],
    history: Mapping[str, ExerciseBest],
) -> list[PersonalRecordCandidate]:
    """
    Detect personal records set in one session.

    Args:
        session_sets: exercise id -> sets logged this session
        history: exercise id -> baseline from earlier sessions

    Returns:
        At most one candidate per exercise, in session order
    """
    records: list[PersonalRecordCandidate] = []
    for exercise_id, sets in session_sets.items():
        baseline = history.get(exercise_id)
        if baseline is None or not baseline.has_data:
            continue
        candidate = _detect_for_exercise(exercise_id, sets, baseline)
        if candidate is not None:
            records.append(candidate)
    return records

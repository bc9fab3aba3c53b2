"""
JSONL set logs.

One JSON object per line, each a stored set record carrying an
exerciseId. Blank lines are skipped.
"""

from pathlib import Path

from ..core.models import LoggedSet
from .serializers import ValidationError, json_line_to_logged_set, logged_set_to_json_line


def load_sets(path: str | Path) -> list[LoggedSet]:
    """
    Load every set from a JSONL log, in file order.

    Raises:
        FileNotFoundError: If the log file doesn't exist
        ValidationError: On the first malformed line (with its line number)
    """
    log_path = Path(path)
    if not log_path.exists():
        raise FileNotFoundError(f"Set log not found: {log_path}")

    sets: list[LoggedSet] = []
    with open(log_path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                sets.append(json_line_to_logged_set(line))
            except ValidationError as e:
                raise ValidationError(f"Error parsing line {line_num} in {log_path}: {e}") from e
    return sets


def group_by_exercise(sets: list[LoggedSet]) -> dict[str, list[LoggedSet]]:
    """
    Group sets by exercise id, keeping first-seen exercise order.

    Raises:
        ValidationError: If a set has no exercise id
    """
    grouped: dict[str, list[LoggedSet]] = {}
    for s in sets:
        if not s.exercise_id:
            raise ValidationError("Every set in a log must carry an exerciseId")
        grouped.setdefault(s.exercise_id, []).append(s)
    return grouped


def load_sets_by_exercise(path: str | Path) -> dict[str, list[LoggedSet]]:
    """Load a JSONL log grouped by exercise id."""
    return group_by_exercise(load_sets(path))


def append_sets(path: str | Path, sets: list[LoggedSet]) -> None:
    """Append sets to a JSONL log, creating it and its directory if needed."""
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "a", encoding="utf-8") as f:
        for s in sets:
            f.write(logged_set_to_json_line(s) + "\n")

"""Personal record command."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from ...core.records import detect_personal_records, exercise_best_from_sets
from ...io.serializers import ValidationError
from ...io.set_log import load_sets_by_exercise
from .. import views
from ..app import JsonOption, UnitOption, app, resolve_unit


@app.command()
def records(
    session_path: Annotated[
        Path,
        typer.Option("--session", "-s", help="JSONL log of the session to check"),
    ],
    history_path: Annotated[
        Path,
        typer.Option("--history", "-p", help="JSONL log of earlier sessions (baseline)"),
    ],
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Detect personal records in a session against earlier history.

    Exercises with no history are skipped.
    """
    try:
        u = resolve_unit(unit)
        session_sets = load_sets_by_exercise(session_path)
        history = {
            exercise_id: exercise_best_from_sets(sets)
            for exercise_id, sets in load_sets_by_exercise(history_path).items()
        }
        found = detect_personal_records(session_sets, history)
    except (ValueError, ValidationError, FileNotFoundError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([asdict(r) for r in found], indent=2))
        return

    if not found:
        views.print_info("No personal records this session.")
        return
    views.console.print(views.format_records_table(found, u))
    views.print_success(f"{len(found)} personal record(s)!")

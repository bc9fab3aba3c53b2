"""Set commands: e1rm, quality, warmup."""

import json
import re
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import default_barbell_kg, quality_thresholds_from_config
from ...core.max_estimator import estimate_one_rep_max, formula_table
from ...core.models import ExerciseTarget
from ...core.quality import classify_session, classify_set_quality, detect_junk_volume
from ...core.units import format_weight, to_display, to_kg
from ...core.warmup import plan_warmup
from ...io.serializers import ValidationError
from ...io.set_log import load_sets_by_exercise
from .. import views
from ..app import JsonOption, UnitOption, app, get_config, resolve_unit


def _parse_rep_range(text: str) -> tuple[int, int]:
    """Parse "8-12" (or a single "5") into an inclusive rep range."""
    m = re.fullmatch(r"\s*(\d+)\s*(?:[-–]\s*(\d+)\s*)?", text)
    if not m:
        raise ValidationError(f"Invalid rep range: {text!r}. Expected MIN-MAX, e.g. 8-12")
    lo = int(m.group(1))
    hi = int(m.group(2)) if m.group(2) is not None else lo
    return lo, hi


@app.command()
def e1rm(
    weight: Annotated[float, typer.Argument(help="Weight lifted, in the display unit")],
    reps: Annotated[int, typer.Argument(help="Reps performed")],
    unit: UnitOption = None,
    table: Annotated[
        bool,
        typer.Option("--table", "-t", help="Show other formulas next to Epley"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Estimate one-rep max (Epley).
    """
    try:
        u = resolve_unit(unit)
        weight_kg = to_kg(weight, u)
        est = estimate_one_rep_max(weight_kg, reps)
        formulas = formula_table(weight_kg, reps) if table else None
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        out: dict = {"weight_kg": round(weight_kg, 4), "reps": reps, "e1rm_kg": round(est, 2)}
        if formulas is not None:
            out["formulas_kg"] = {k: (round(v, 2) if v is not None else None) for k, v in formulas.items()}
        print(json.dumps(out, indent=2))
        return

    views.console.print(f"E1RM: [bold]{format_weight(est, u)}[/bold]  ({weight:g} {u} × {reps})")
    if formulas is not None:
        for name, value in formulas.items():
            shown = format_weight(value, u) if value is not None else "n/a"
            marker = "  (used for records)" if name == "epley" else ""
            views.console.print(f"- {name}: {shown}{marker}")


@app.command()
def quality(
    rep_range: Annotated[str, typer.Option("--range", "-r", help="Target rep range, e.g. 8-12")],
    target_rir: Annotated[int, typer.Option("--rir", help="Target reps in reserve")] = 2,
    reps: Annotated[Optional[int], typer.Option("--reps", help="Reps of a single set")] = None,
    rpe: Annotated[Optional[float], typer.Option("--rpe", help="RPE of a single set")] = None,
    last_set: Annotated[
        bool,
        typer.Option("--last", help="Single set is the final working set"),
    ] = False,
    log_path: Annotated[
        Optional[Path],
        typer.Option("--log", "-l", help="JSONL set log; classify one exercise's sets"),
    ] = None,
    exercise_id: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Exercise ID within --log"),
    ] = None,
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Classify set quality against a target rep range and RIR.

    Pass --reps and --rpe for one set, or --log and --exercise for a session.
    """
    try:
        thresholds = quality_thresholds_from_config(get_config())
        target = ExerciseTarget(target_rep_range=_parse_rep_range(rep_range), target_rir=target_rir)

        if log_path is None:
            if reps is None or rpe is None:
                views.print_error("Provide --reps and --rpe, or --log and --exercise.")
                raise typer.Exit(1)
            result = classify_set_quality(
                rpe, target.target_rir, reps, target.target_rep_range,
                is_last_set=last_set, thresholds=thresholds,
            )
            if json_out:
                print(json.dumps(asdict(result), indent=2))
                return
            style = views.QUALITY_STYLES.get(result.quality, "")
            views.console.print(f"Quality: [{style}]{result.quality}[/{style}]")
            views.console.print(f"- {result.reason}")
            return

        u = resolve_unit(unit)
        grouped = load_sets_by_exercise(log_path)
        if exercise_id is None:
            views.print_error("--exercise is required with --log.")
            raise typer.Exit(1)
        if exercise_id not in grouped:
            views.print_error(f"No sets for exercise {exercise_id!r} in {log_path}")
            raise typer.Exit(1)
        sets = grouped[exercise_id]
        results = classify_session(sets, target, thresholds)
        junk = detect_junk_volume(sets, target, thresholds)
    except (ValueError, ValidationError, FileNotFoundError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "sets": [asdict(r) if r is not None else None for r in results],
            "junk_sets": len(junk),
        }, indent=2))
        return

    views.console.print(views.format_quality_table(sets, results, u))
    if junk:
        views.print_warning(f"{len(junk)} junk set(s): too easy to drive adaptation.")


@app.command()
def warmup(
    working_weight: Annotated[float, typer.Argument(help="Working weight, in the display unit")],
    unit: UnitOption = None,
    barbell: Annotated[
        Optional[float],
        typer.Option("--barbell", help="Empty bar weight in the display unit (0 for dumbbells)"),
    ] = None,
    first: Annotated[
        bool,
        typer.Option("--first", help="First exercise of the session: add a general warm-up"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Plan warm-up sets leading to a working weight.
    """
    try:
        u = resolve_unit(unit)
        barbell_kg = to_kg(barbell, u) if barbell is not None else default_barbell_kg(get_config())
        steps = plan_warmup(to_kg(working_weight, u), u, barbell_kg, is_first_exercise=first)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([
            {
                **asdict(step),
                "weight": round(to_display(step.weight_kg, u), 2),
                "unit": u,
            }
            for step in steps
        ], indent=2))
        return

    if not steps:
        views.print_info("No warm-up needed.")
        return
    views.console.print(views.format_warmup_table(steps, u))

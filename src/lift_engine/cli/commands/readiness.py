"""Readiness check-in command."""

import json
from dataclasses import asdict
from typing import Annotated

import typer

from ...core.engine.config_loader import readiness_weights_from_config
from ...core.readiness import score_readiness
from .. import views
from ..app import JsonOption, app, get_config


@app.command()
def readiness(
    sleep_hours: Annotated[float, typer.Option("--sleep", help="Hours slept last night")],
    sleep_quality: Annotated[int, typer.Option("--sleep-quality", help="1-5, 5 = best")],
    stress: Annotated[int, typer.Option("--stress", help="1-5, 5 = least stressed")],
    nutrition: Annotated[int, typer.Option("--nutrition", help="1-5, 5 = best")],
    json_out: JsonOption = False,
) -> None:
    """
    Score pre-workout readiness from a quick check-in.
    """
    try:
        weights = readiness_weights_from_config(get_config())
        result = score_readiness(sleep_hours, sleep_quality, stress, nutrition, weights)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        out = asdict(result)
        out["components"] = {k: round(v, 4) for k, v in result.components.items()}
        print(json.dumps(out, indent=2))
        return

    views.console.print()
    views.console.print(views.format_readiness_display(result))
    views.console.print()

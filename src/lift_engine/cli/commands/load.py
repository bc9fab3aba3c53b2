"""Bodyweight load command."""

import json
from typing import Annotated, Optional

import typer

from ...core.equipment import (
    build_bodyweight_load,
    format_bodyweight_compact,
    format_bodyweight_with_total,
    percent_bodyweight,
)
from ...core.units import format_weight, to_kg
from ...io.serializers import bodyweight_load_to_dict
from .. import views
from ..app import JsonOption, UnitOption, app, resolve_unit


@app.command()
def load(
    bodyweight: Annotated[float, typer.Option("--bodyweight", "-b", help="Bodyweight in the display unit")],
    modification: Annotated[
        str,
        typer.Option("--mod", "-m", help="none, weighted or assisted"),
    ] = "none",
    added: Annotated[
        Optional[float],
        typer.Option("--added", help="Added weight (weighted) in the display unit"),
    ] = None,
    assist: Annotated[
        Optional[float],
        typer.Option("--assist", help="Assistance (assisted) in the display unit"),
    ] = None,
    assistance_type: Annotated[
        Optional[str],
        typer.Option("--assistance-type", help="machine, band or partner"),
    ] = None,
    band: Annotated[
        Optional[str],
        typer.Option("--band", help="Band colour: yellow, red, black, purple, green"),
    ] = None,
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Compute the effective load of a bodyweight exercise.
    """
    if band is not None and assistance_type is None:
        assistance_type = "band"

    try:
        u = resolve_unit(unit)
        bw_load = build_bodyweight_load(
            to_kg(bodyweight, u),
            modification,
            added_weight_kg=to_kg(added, u) if added is not None else None,
            assistance_weight_kg=to_kg(assist, u) if assist is not None else None,
            assistance_type=assistance_type,
            band_color=band,
        )
        pct = percent_bodyweight(bw_load.effective_load_kg, bw_load.user_bodyweight_kg)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        data = bodyweight_load_to_dict(bw_load)
        data["percentBodyweight"] = pct
        print(json.dumps(data, indent=2))
        return

    views.console.print(
        f"Effective load: [bold]{format_weight(bw_load.effective_load_kg, u)}[/bold] ({pct}% BW)"
    )
    views.console.print(f"- {format_bodyweight_with_total(bw_load, u)}")
    views.console.print(f"- Log label: {format_bodyweight_compact(bw_load, u)}")
    if assistance_type == "band" and assist is not None:
        views.print_warning("Band assistance uses the colour preset; --assist was ignored.")

"""Unit commands: convert, round."""

import json
from typing import Annotated

import typer

from ...core.units import convert_weight, format_weight, normalize_unit, round_to_increment, to_display, to_kg
from .. import views
from ..app import JsonOption, UnitOption, app, resolve_unit


@app.command()
def convert(
    value: Annotated[float, typer.Argument(help="Weight to convert")],
    from_unit: Annotated[str, typer.Option("--from", help="Unit of VALUE: kg or lb")] = "kg",
    to_unit: Annotated[str, typer.Option("--to", help="Target unit: kg or lb")] = "lb",
    json_out: JsonOption = False,
) -> None:
    """
    Convert a weight between kg and lb.
    """
    try:
        src = normalize_unit(from_unit)
        dst = normalize_unit(to_unit)
        result = convert_weight(value, src, dst)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "value": value,
            "from": src,
            "to": dst,
            "result": round(result, 4),
        }, indent=2))
        return

    views.console.print(f"{value:g} {src} = [bold]{result:.2f} {dst}[/bold]")


@app.command("round")
def round_weight(
    value: Annotated[float, typer.Argument(help="Weight in the display unit")],
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Round a weight to the nearest loadable plate increment (2.5 kg / 5 lb).
    """
    try:
        u = resolve_unit(unit)
        rounded_kg = round_to_increment(to_kg(value, u), u)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "value": value,
            "unit": u,
            "rounded": round(to_display(rounded_kg, u), 4),
            "rounded_kg": round(rounded_kg, 4),
        }, indent=2))
        return

    views.console.print(f"{value:g} {u} → [bold]{format_weight(rounded_kg, u)}[/bold]")

"""Shared Typer app object, shared option types, and config utility."""

from typing import Annotated, Any, Optional

import typer

from ..core.engine.config_loader import default_unit, load_engine_config
from ..core.units import normalize_unit

# Shared --unit option type used across commands that display weights
UnitOption = Annotated[
    Optional[str],
    typer.Option("--unit", "-u", help="Display unit: kg or lb (default from config)"),
]

# Shared --json flag
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-engine",
    help="Training calculations for workout logs: loads, set quality, warm-ups, records, readiness.",
    no_args_is_help=True,
)


def get_config() -> dict[str, Any]:
    """Engine config: bundled defaults merged with ~/.lift-engine/engine.yaml."""
    return load_engine_config()


def resolve_unit(unit: str | None) -> str:
    """Validated display unit: the --unit value, or the configured default."""
    if unit is None:
        unit = default_unit(get_config())
    return normalize_unit(unit)

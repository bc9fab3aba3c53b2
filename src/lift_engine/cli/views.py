"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of engine results.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import (
    LoggedSet,
    PersonalRecordCandidate,
    ReadinessResult,
    SetQualityResult,
    WarmupStep,
)
from ..core.units import format_weight

console = Console()

QUALITY_STYLES = {
    "stimulative": "bold green",
    "effective": "cyan",
    "junk": "yellow",
    "excessive": "red",
}

BAND_STYLES = {
    "well_recovered": "bold green",
    "adequate": "green",
    "caution": "yellow",
    "lighter_session": "red",
}


def format_warmup_table(steps: list[WarmupStep], unit: str) -> Table:
    """
    Create a Rich table for a warm-up plan.

    Args:
        steps: Planned warm-up steps
        unit: Display unit

    Returns:
        Rich Table object
    """
    table = Table(title="Warm-up")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("%", justify="right")
    table.add_column("Weight", style="cyan")
    table.add_column("Reps", justify="right", style="bold")
    table.add_column("Purpose", style="magenta")

    for step in steps:
        table.add_row(
            str(step.set_number),
            f"{step.percent_of_working:.0f}",
            step.label or format_weight(step.weight_kg, unit),
            str(step.target_reps),
            step.purpose,
        )

    return table


def format_quality_table(
    sets: list[LoggedSet],
    results: list[SetQualityResult | None],
    unit: str,
) -> Table:
    """Create a Rich table of logged sets with their quality tags."""
    table = Table(title="Set Quality")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Load", style="cyan")
    table.add_column("Reps", justify="right")
    table.add_column("RPE", justify="right")
    table.add_column("Quality")
    table.add_column("Reason", style="dim")

    for i, (s, result) in enumerate(zip(sets, results), 1):
        if result is None:
            quality = "[dim]warm-up[/dim]"
            reason = ""
        else:
            style = QUALITY_STYLES.get(result.quality, "")
            quality = f"[{style}]{result.quality}[/{style}]"
            reason = result.reason
        table.add_row(
            str(i),
            format_weight(s.load_kg, unit),
            str(s.reps),
            f"{s.rpe:g}" if s.rpe is not None else "-",
            quality,
            reason,
        )

    return table


def format_records_table(records: list[PersonalRecordCandidate], unit: str) -> Table:
    """Create a Rich table of detected personal records."""
    table = Table(title="Personal Records")

    table.add_column("Exercise", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("New", justify="right", style="bold")
    table.add_column("Previous", justify="right")
    table.add_column("Improvement", justify="right", style="green")

    for r in records:
        if r.type == "reps":
            new, previous = f"{r.value:.0f} reps", f"{r.previous_value:.0f} reps"
            improvement = f"+{r.improvement_reps} reps"
        else:
            new, previous = format_weight(r.value, unit), format_weight(r.previous_value, unit)
            improvement = f"+{r.improvement_percent:.1f}%"
        table.add_row(r.exercise_id, r.type, new, previous, improvement)

    return table


def format_readiness_display(result: ReadinessResult) -> str:
    """
    Format a readiness result as a text block.

    Returns:
        Formatted string with Rich markup
    """
    style = BAND_STYLES.get(result.band, "")
    lines = [
        f"Readiness: [{style}]{result.score}/100 - {result.message}[/{style}]",
        f"- {result.recommendation}",
    ]
    for name, value in result.components.items():
        lines.append(f"- {name.replace('_', ' ')}: {value * 100:.0f}%")
    return "\n".join(lines)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")

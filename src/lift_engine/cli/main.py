"""
CLI entry point using Typer.

Provides commands for training calculations:
- convert / round: Unit conversion and plate rounding
- load: Effective load of a bodyweight exercise
- e1rm: Estimated one-rep max
- quality: Set quality against a prescription
- warmup: Warm-up ramp to a working weight
- records: Personal records in a session
- readiness: Pre-workout readiness score
"""

from .app import app
from .commands import load, readiness, records, sets, units  # noqa: F401  (registers commands)

if __name__ == "__main__":
    app()

"""
Typed errors raised by the calculation engine.

All engine errors derive from ValueError so callers that already guard
numeric input with ``except ValueError`` keep working.
"""


class EngineError(ValueError):
    """Base class for every error raised by lift_engine.core."""

    pass


class InvalidSetData(EngineError):
    """Raised for reps < 1, RPE outside [1, 10], or negative weights."""

    pass


class InvalidUnit(EngineError):
    """Raised when a display unit is not 'kg' or 'lb'."""

    def __init__(self, unit: object):
        super().__init__(f"Invalid unit: {unit!r}. Must be 'kg' or 'lb'")
        self.unit = unit


class MissingBodyweight(EngineError):
    """Raised when a bodyweight-modified load has no positive bodyweight."""

    pass


class InvalidReadinessInput(EngineError):
    """Raised when a pre-workout check-in value is out of range."""

    pass

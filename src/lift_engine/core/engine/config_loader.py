"""
YAML → typed config loader.

Loads tunables from engine.yaml (bundled with the package) and optionally
merges user overrides from ~/.lift-engine/engine.yaml.

Usage:
    from lift_engine.core.engine.config_loader import load_engine_config
    cfg = load_engine_config()
    weights = readiness_weights_from_config(cfg)

Only the CLI calls this module; the calculation functions take their
coefficients as arguments. A user override file that cannot be read or
parsed triggers a warning and is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    DEFAULT_BARBELL_KG,
    DEFAULT_QUALITY_THRESHOLDS,
    DEFAULT_READINESS_WEIGHTS,
    QualityThresholds,
    ReadinessWeights,
)
from ..units import normalize_unit

SECTIONS = ("display", "warmup", "set_quality", "readiness")

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; raise on unreadable or malformed files."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise yaml.YAMLError(f"{path}: top level must be a mapping")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _section(cfg: dict[str, Any], *path: str) -> dict[str, Any]:
    """Nested mapping at *path*; missing or empty sections read as {}."""
    node: Any = cfg
    for key in path:
        node = node.get(key) if isinstance(node, dict) else None
    return node if isinstance(node, dict) else {}


def _check_config(cfg: dict[str, Any]) -> None:
    """Raise TypeError / ValueError if a section or value has the wrong shape."""
    for name in SECTIONS:
        value = cfg.get(name)
        if value is not None and not isinstance(value, dict):
            raise TypeError(f"section {name!r} must be a mapping, got {type(value).__name__}")
    readiness = cfg.get("readiness") or {}
    if readiness.get("weights") is not None and not isinstance(readiness["weights"], dict):
        raise TypeError("section 'readiness.weights' must be a mapping")
    readiness_weights_from_config(cfg)
    quality_thresholds_from_config(cfg)
    default_barbell_kg(cfg)
    normalize_unit(default_unit(cfg))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled engine.yaml (package root)."""
    return Path(__file__).resolve().parent.parent.parent / "engine.yaml"


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-engine/engine.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-engine" / "engine.yaml"
    return p if p.exists() else None


def load_engine_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge engine configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_engine/engine.yaml
    2. User override (user_path, or ~/.lift-engine/engine.yaml)

    Returns:
        Merged dict of config sections
    """
    config = _load_yaml_file(get_bundled_yaml_path())

    user = user_path if user_path is not None else get_user_yaml_path()
    if user is not None:
        try:
            user_cfg = _load_yaml_file(user)
        except (OSError, yaml.YAMLError) as e:
            warnings.warn(f"Ignoring user config {user}: {e}", stacklevel=2)
        else:
            merged = _deep_merge(config, user_cfg)
            try:
                _check_config(merged)
            except (TypeError, ValueError) as e:
                warnings.warn(f"Ignoring user config {user}: {e}", stacklevel=2)
            else:
                config = merged

    return config


def readiness_weights_from_config(cfg: dict[str, Any]) -> ReadinessWeights:
    """Build ReadinessWeights from the readiness.weights section."""
    section = _section(cfg, "readiness", "weights")
    d = DEFAULT_READINESS_WEIGHTS
    return ReadinessWeights(
        sleep_hours=float(section.get("sleep_hours", d.sleep_hours)),
        sleep_quality=float(section.get("sleep_quality", d.sleep_quality)),
        stress=float(section.get("stress", d.stress)),
        nutrition=float(section.get("nutrition", d.nutrition)),
    )


def quality_thresholds_from_config(cfg: dict[str, Any]) -> QualityThresholds:
    """Build QualityThresholds from the set_quality section."""
    section = _section(cfg, "set_quality")
    d = DEFAULT_QUALITY_THRESHOLDS
    return QualityThresholds(
        stimulative_band=float(section.get("stimulative_band", d.stimulative_band)),
        excessive_below=float(section.get("excessive_below", d.excessive_below)),
        last_set_leniency=float(section.get("last_set_leniency", d.last_set_leniency)),
    )


def default_barbell_kg(cfg: dict[str, Any]) -> float:
    """Empty barbell weight used when the warm-up command gets none."""
    return float(_section(cfg, "warmup").get("barbell_kg", DEFAULT_BARBELL_KG))


def default_unit(cfg: dict[str, Any]) -> str:
    """Display unit used when a command gets none."""
    return str(_section(cfg, "display").get("unit", "kg"))

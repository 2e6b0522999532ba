"""
YAML -> engine settings loader.

Reads an optional ``config.yaml`` from the data home and merges it over the
Python defaults in config.py.

Usage:
    from workout_cycle.core.engine.config_loader import load_engine_settings
    settings = load_engine_settings()
    ttl = settings.cache_ttl_seconds

The data home is ``$WORKOUT_CYCLE_HOME`` if set, else ``~/.workout-cycle``.
A missing file means defaults.  A file with parse errors produces a warning
and is ignored.

Example config.yaml:

    engine:
      cache_ttl_seconds: 2
      analysis_window: 6
      high_completion_rate: 0.85
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import EngineSettings

HOME_ENV_VAR = "WORKOUT_CYCLE_HOME"
CONFIG_FILENAME = "config.yaml"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(
            f"workout-cycle: ignoring unreadable config {path} ({exc})",
            stacklevel=3,
        )
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_data_home(override: Path | None = None) -> Path:
    """
    Return the data directory holding config, catalog overrides and stores.

    Args:
        override: Explicit directory (e.g. from ``--home``); wins over the env var

    Returns:
        Path (not necessarily existing)
    """
    if override is not None:
        return Path(override).expanduser()
    env = os.environ.get(HOME_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return Path("~/.workout-cycle").expanduser()


def get_user_config_path(home: Path | None = None) -> Path | None:
    """Return <home>/config.yaml if it exists, else None."""
    p = get_data_home(home) / CONFIG_FILENAME
    return p if p.exists() else None


def load_config(home: Path | None = None) -> dict[str, Any]:
    """
    Load the user config file.

    Returns:
        Config dict; empty if no file exists or it cannot be parsed.
    """
    path = get_user_config_path(home)
    if path is None:
        return {}
    return deep_merge({}, _load_yaml_file(path))


def load_engine_settings(home: Path | None = None) -> EngineSettings:
    """
    Build EngineSettings from defaults plus ``config.yaml`` overrides.

    Invalid values produce a warning and fall back to the defaults.
    """
    config = load_config(home)
    try:
        return EngineSettings.from_config(config)
    except (TypeError, ValueError) as exc:
        warnings.warn(
            f"workout-cycle: invalid engine settings ({exc}); using defaults.",
            stacklevel=2,
        )
        return EngineSettings()

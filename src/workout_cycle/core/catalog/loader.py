"""
YAML -> Exercise loader.

Loads the exercise catalog from the YAML files in the bundled
``src/workout_cycle/exercises/`` directory.  Each file groups exercises
by equipment:

    equipment: dumbbells          # default for every entry below
    exercises:
      - id: dumbbell_row
        name: One-Arm Dumbbell Row
        category: strength
        primary_muscles: [back]
        secondary_muscles: [biceps, shoulders]
        difficulty: beginner

User overrides: place YAML files with the same layout in
``<home>/exercises/``.  An entry whose id matches a bundled exercise is
merged over it (only changed keys need to be listed); any other id is added
as a new exercise.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Any

import yaml

from ..engine.config_loader import deep_merge, get_data_home
from ..models import EXPERIENCE_LEVELS, Exercise

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {"id", "name", "category", "primary_muscles", "difficulty"}
)


def _muscles(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value.strip().lower()})
    return frozenset(str(m).strip().lower() for m in value)


def exercise_from_dict(d: dict, default_equipment: str = "none") -> Exercise:
    """Convert a raw dict (from YAML) to an Exercise.

    Raises ValueError if a required field is absent or the difficulty is unknown.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"Exercise missing fields: {sorted(missing)}")

    difficulty = str(d["difficulty"]).lower()
    if difficulty not in EXPERIENCE_LEVELS:
        raise ValueError(f"unknown difficulty {difficulty!r}")

    primary = _muscles(d["primary_muscles"])
    if not primary:
        raise ValueError("primary_muscles must not be empty")

    return Exercise(
        id=str(d["id"]),
        name=str(d["name"]),
        category=str(d["category"]).lower(),
        primary_muscles=primary,
        secondary_muscles=_muscles(d.get("secondary_muscles")),
        equipment=str(d.get("equipment", default_equipment)).lower(),
        difficulty=difficulty,  # type: ignore[arg-type]
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; warn and return {} if it cannot be parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(
            f"workout-cycle: skipping catalog file '{path.name}' ({exc})",
            stacklevel=3,
        )
        return {}
    return data if isinstance(data, dict) else {}


def _raw_entries(path: Path, default_equipment: str | None = "none") -> list[dict]:
    """Return the entries of one catalog file with the file-level equipment applied.

    With ``default_equipment=None`` entries only get an equipment key when the
    file declares one, so partial overrides keep the bundled value.
    """
    raw = _load_yaml_file(path)
    if "equipment" in raw:
        default_equipment = str(raw["equipment"])
    entries = []
    for entry in raw.get("exercises") or []:
        if not isinstance(entry, dict):
            continue
        if default_equipment is not None:
            entry = {"equipment": default_equipment, **entry}
        entries.append(entry)
    return entries


def get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/workout_cycle/core/catalog/loader.py
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def get_user_exercises_dir(home: Path | None = None) -> Path | None:
    """Return <home>/exercises/ if it exists, else None."""
    p = get_data_home(home) / "exercises"
    return p if p.is_dir() else None


def load_exercises_from_yaml(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> dict[str, Exercise] | None:
    """Return {exercise_id: Exercise} loaded from the catalog YAML files.

    Args:
        bundled_dir: Catalog directory; defaults to the bundled one
        user_dir: Override directory (see get_user_exercises_dir); None for no overrides

    Returns None (rather than raising) when nothing could be loaded so the
    registry can report the failure.
    """
    if bundled_dir is None:
        bundled_dir = get_bundled_exercises_dir()

    raw_by_id: dict[str, dict] = {}
    for directory, is_user in ((bundled_dir, False), (user_dir, True)):
        if directory is None:
            continue
        for path in sorted(directory.glob("*.yaml")):
            for entry in _raw_entries(path, None if is_user else "none"):
                ex_id = str(entry.get("id", ""))
                if not ex_id:
                    warnings.warn(
                        f"workout-cycle: entry without id in '{path.name}'",
                        stacklevel=2,
                    )
                    continue
                if is_user and ex_id in raw_by_id:
                    raw_by_id[ex_id] = deep_merge(raw_by_id[ex_id], entry)
                else:
                    raw_by_id[ex_id] = entry

    result: dict[str, Exercise] = {}
    for ex_id, raw in raw_by_id.items():
        try:
            result[ex_id] = exercise_from_dict(raw)
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"workout-cycle: skipping exercise '{ex_id}': {exc}",
                stacklevel=2,
            )

    return result if result else None

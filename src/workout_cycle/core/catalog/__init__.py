"""
Exercise catalog for workout-cycle.

The catalog is the engine's only source of exercises; it is loaded from
YAML and queried by muscle, equipment, difficulty and category.
"""

from .loader import exercise_from_dict, load_exercises_from_yaml
from .registry import ExerciseCatalog, load_catalog

__all__ = [
    "ExerciseCatalog",
    "exercise_from_dict",
    "load_catalog",
    "load_exercises_from_yaml",
]

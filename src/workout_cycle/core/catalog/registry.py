"""
Exercise catalog.

Read-only view over the exercises loaded from YAML.  The engine only ever
talks to the catalog through ``query``; it never mutates it.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..config import BODYWEIGHT_TOKENS
from ..models import Exercise


class ExerciseCatalog:
    """
    Queryable collection of exercises.

    Exercises keep their insertion order, so queries are deterministic for a
    given catalog.
    """

    def __init__(self, exercises: Iterable[Exercise]) -> None:
        self._by_id: dict[str, Exercise] = {}
        for ex in exercises:
            self._by_id[ex.id] = ex

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id

    def all(self) -> list[Exercise]:
        """Return every exercise."""
        return list(self._by_id.values())

    def get(self, exercise_id: str) -> Exercise:
        """
        Return the exercise with the given id.

        Raises:
            KeyError: If exercise_id is not in the catalog
        """
        if exercise_id not in self._by_id:
            raise KeyError(f"Unknown exercise '{exercise_id}'")
        return self._by_id[exercise_id]

    def query(
        self,
        muscle: str | None = None,
        equipment: str | Iterable[str] | None = None,
        difficulty: str | None = None,
        category: str | None = None,
    ) -> list[Exercise]:
        """
        Filter the catalog.  Every argument left as None is not applied.

        Args:
            muscle: Matches primary or secondary muscles
            equipment: One token or a set of tokens the exercise may use;
                "none"/"bodyweight" match each other
            difficulty: Exact difficulty
            category: Exact category (e.g. "cardio")

        Returns:
            Matching exercises in catalog order
        """
        allowed: set[str] | None = None
        if equipment is not None:
            allowed = {equipment} if isinstance(equipment, str) else set(equipment)
            if allowed & BODYWEIGHT_TOKENS:
                allowed |= BODYWEIGHT_TOKENS

        result = []
        for ex in self._by_id.values():
            if muscle is not None and muscle not in ex.primary_muscles | ex.secondary_muscles:
                continue
            if allowed is not None and ex.equipment not in allowed:
                continue
            if difficulty is not None and ex.difficulty != difficulty:
                continue
            if category is not None and ex.category != category:
                continue
            result.append(ex)
        return result


def load_catalog(home: Path | None = None) -> ExerciseCatalog:
    """
    Build the catalog from the bundled YAML plus user overrides in ``<home>``.

    Raises:
        RuntimeError: If no exercise definitions could be loaded
    """
    from .loader import get_user_exercises_dir, load_exercises_from_yaml

    loaded = load_exercises_from_yaml(user_dir=get_user_exercises_dir(home))
    if not loaded:
        raise RuntimeError(
            "workout-cycle: no exercise definitions could be loaded from YAML. "
            "Check that src/workout_cycle/exercises/*.yaml files are present and valid."
        )
    return ExerciseCatalog(loaded.values())

"""
Exercise selection for one training day.

Picks a constraint-satisfying set of exercises for a muscle-group focus:

1. focus filter (primary muscles intersect the focus' target muscles)
2. difficulty compatibility with the user's experience level
3. equipment the user owns, plus bodyweight work
4. partition into user-equipment / bodyweight / other buckets, shuffled
5. fill up to 80% from user equipment, then bodyweight, then the rest

When the catalog cannot supply enough exercises the difficulty filter is
dropped first, then (for a targeted focus) the muscle match widens to
secondary muscles.  The equipment filter is never relaxed.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterable

from .catalog import ExerciseCatalog
from .config import (
    BASE_SETS,
    BODYWEIGHT_TOKENS,
    CARDIO,
    CARDIO_REPS,
    CARDIO_REPS_BEGINNER,
    DEFAULT_REPS,
    EXCLUDED_DIFFICULTY,
    FOCUS_MUSCLES,
    FULL_BODY,
    GOAL_REPS,
    MAX_EXERCISES,
    MIN_EXERCISES,
    MINUTES_PER_EXERCISE,
    REST_ADVANCED,
    REST_BEGINNER,
    REST_CARDIO,
    REST_DEFAULT,
    SETS_OFFSET,
    USER_EQUIPMENT_SHARE,
)
from .equipment import has_equipment
from .models import Exercise, WorkoutExercise

logger = logging.getLogger(__name__)


def normalize_focus(focus: str) -> str:
    """Lower-case a focus name and map unknown names to full body."""
    key = focus.strip().lower()
    if key not in FOCUS_MUSCLES:
        logger.debug("Unknown focus %r, using %r", focus, FULL_BODY)
        return FULL_BODY
    return key


def exercise_count(session_minutes: int, experience_level: str) -> int:
    """
    Number of exercises that fit into one session.

    Args:
        session_minutes: Planned session length
        experience_level: beginner / intermediate / advanced

    Returns:
        floor(minutes / minutes_per_exercise) clamped to [3, cap(level)]
    """
    per_exercise = MINUTES_PER_EXERCISE.get(experience_level, 6)
    cap = MAX_EXERCISES.get(experience_level, 8)
    return max(MIN_EXERCISES, min(int(session_minutes // per_exercise), cap))


def sets_for(experience_level: str) -> int:
    """Working sets per exercise: 3, one fewer for beginners, one more for advanced."""
    return BASE_SETS + SETS_OFFSET.get(experience_level, 0)


def reps_for(exercise: Exercise, goal: str, experience_level: str) -> str:
    """Rep range for the goal; timed intervals for cardio exercises."""
    if exercise.category == CARDIO:
        return CARDIO_REPS_BEGINNER if experience_level == "beginner" else CARDIO_REPS
    return GOAL_REPS.get(goal, DEFAULT_REPS)


def rest_for(exercise: Exercise) -> int:
    """Rest between sets in seconds, from the exercise's category and difficulty."""
    if exercise.category == CARDIO:
        return REST_CARDIO
    if exercise.difficulty == "advanced":
        return REST_ADVANCED
    if exercise.difficulty == "beginner":
        return REST_BEGINNER
    return REST_DEFAULT


def to_workout_exercise(
    exercise: Exercise, goal: str, experience_level: str
) -> WorkoutExercise:
    """Attach sets, reps and rest to a catalog exercise."""
    return WorkoutExercise(
        exercise_id=exercise.id,
        name=exercise.name,
        sets=sets_for(experience_level),
        reps=reps_for(exercise, goal, experience_level),
        rest_seconds=rest_for(exercise),
        target_muscles=sorted(exercise.primary_muscles),
        difficulty=exercise.difficulty,
        equipment=exercise.equipment,
    )


def _matches_focus(exercise: Exercise, focus: str, widen: bool) -> bool:
    if focus == FULL_BODY:
        return True
    if focus == CARDIO:
        return exercise.category == CARDIO
    targets = FOCUS_MUSCLES[focus]
    muscles = exercise.primary_muscles
    if widen:
        muscles = muscles | exercise.secondary_muscles
    return bool(muscles & targets)


def _difficulty_ok(exercise: Exercise, experience_level: str) -> bool:
    return exercise.difficulty != EXCLUDED_DIFFICULTY.get(experience_level)


class ExerciseSelector:
    """
    Selects exercises from a catalog.

    The random source is injected so that selections are reproducible in
    tests; each call shuffles with whatever state the generator is in.
    """

    def __init__(self, catalog: ExerciseCatalog, rng: random.Random | None = None) -> None:
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()

    def candidates(
        self,
        focus: str,
        owned_equipment: Iterable[str],
        experience_level: str,
        check_difficulty: bool = True,
        widen_muscles: bool = False,
    ) -> list[Exercise]:
        """Exercises passing the focus, difficulty and equipment filters."""
        focus = normalize_focus(focus)
        owned = set(owned_equipment)
        return [
            ex
            for ex in self.catalog.all()
            if has_equipment(ex.equipment, owned)
            and _matches_focus(ex, focus, widen_muscles)
            and (not check_difficulty or _difficulty_ok(ex, experience_level))
        ]

    def _fill(
        self, pool: list[Exercise], owned: frozenset[str], count: int
    ) -> list[Exercise]:
        chosen_equipment = owned - BODYWEIGHT_TOKENS
        user_bucket: list[Exercise] = []
        bodyweight_bucket: list[Exercise] = []
        other_bucket: list[Exercise] = []
        for ex in pool:
            if ex.equipment in chosen_equipment:
                user_bucket.append(ex)
            elif ex.is_bodyweight:
                bodyweight_bucket.append(ex)
            else:
                other_bucket.append(ex)

        for bucket in (user_bucket, bodyweight_bucket, other_bucket):
            self.rng.shuffle(bucket)

        selected = user_bucket[: min(math.floor(count * USER_EQUIPMENT_SHARE), len(user_bucket))]
        for bucket in (bodyweight_bucket, other_bucket):
            if len(selected) >= count:
                break
            selected.extend(bucket[: count - len(selected)])
        return selected

    def select_for_focus(
        self,
        focus: str,
        owned_equipment: Iterable[str],
        experience_level: str,
        desired_count: int,
        goal: str = "general_fitness",
    ) -> list[Exercise]:
        """
        Select up to ``desired_count`` exercises for one day.

        Args:
            focus: Focus name (e.g. "upper", "legs", "full body", "cardio")
            owned_equipment: Equipment tokens the user owns
            experience_level: beginner / intermediate / advanced
            desired_count: Target number of exercises
            goal: Training goal (unused by selection; kept for prescription callers)

        Returns:
            Distinct exercises; may be shorter than desired_count, or empty,
            when the catalog cannot supply more.

        Raises:
            ValueError: If desired_count is negative
        """
        if desired_count < 0:
            raise ValueError(f"desired_count must be non-negative, got {desired_count}")
        if desired_count == 0:
            return []

        owned = frozenset(owned_equipment)
        focus_key = normalize_focus(focus)

        selected = self._fill(
            self.candidates(focus_key, owned, experience_level), owned, desired_count
        )

        relaxations: list[tuple[str, dict[str, bool]]] = [
            ("difficulty filter dropped", {"check_difficulty": False}),
        ]
        if focus_key not in (FULL_BODY, CARDIO):
            relaxations.append(
                (
                    "muscle match widened to secondary muscles",
                    {"check_difficulty": False, "widen_muscles": True},
                )
            )

        for label, kwargs in relaxations:
            if len(selected) >= desired_count:
                break
            taken = {ex.id for ex in selected}
            extra = [
                ex
                for ex in self.candidates(focus_key, owned, experience_level, **kwargs)
                if ex.id not in taken
            ]
            if not extra:
                continue
            logger.info(
                "Focus %r short by %d exercises; %s",
                focus_key,
                desired_count - len(selected),
                label,
            )
            selected.extend(self._fill(extra, owned, desired_count - len(selected)))

        logger.debug(
            "Selected %d/%d exercises for %r: %s",
            len(selected),
            desired_count,
            focus_key,
            [ex.id for ex in selected],
        )
        return selected

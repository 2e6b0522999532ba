"""
Weekly schedule generation for workout-cycle.

Assigns a muscle-group focus to each training day and fills every day with
exercises from the selector.  ``build_plan`` wraps the schedule with the
plan metadata shown to the user (duration, calories, progression notes).
"""

from __future__ import annotations

import logging

from .config import (
    DEFAULT_DAYS_PER_WEEK,
    FOCUS_NOTES,
    GOAL_NAMES,
    KCAL_PER_MINUTE,
    MIN_EXERCISES,
    PLAN_DURATION_WEEKS,
    PROGRESSION_NOTES,
    SCHEDULE_1_DAY,
    SCHEDULE_2_DAYS,
    SCHEDULE_3_DAYS,
    SCHEDULE_4_DAYS,
    SCHEDULE_6_DAYS,
)
from .models import UserProfile, WeeklyScheduleDay, WorkoutPlan
from .selector import ExerciseSelector, exercise_count, normalize_focus, to_workout_exercise

logger = logging.getLogger(__name__)

LEVEL_LABELS: dict[str, str] = {
    "beginner": "for Beginners",
    "intermediate": "for Intermediate Trainees",
    "advanced": "for Advanced Trainees",
}


def days_per_week(profile: UserProfile) -> int:
    """Training days per week: the profile's explicit value or the per-level default."""
    if profile.available_days_per_week is not None:
        return profile.available_days_per_week
    return DEFAULT_DAYS_PER_WEEK.get(profile.experience_level, 3)


def get_schedule_template(days: int) -> list[str]:
    """
    Get the focus template for a given training frequency.

    Args:
        days: Training days per week (>= 1)

    Returns:
        List of focus names; may be shorter than ``days``
    """
    if days >= 6:
        return SCHEDULE_6_DAYS.copy()
    if days >= 4:
        return SCHEDULE_4_DAYS.copy()
    if days == 3:
        return SCHEDULE_3_DAYS.copy()
    if days == 2:
        return SCHEDULE_2_DAYS.copy()
    return SCHEDULE_1_DAY.copy()


def focus_rotation(days: int) -> list[str]:
    """
    Focus for every training day of the week.

    The template is cycled when ``days`` exceeds its length.

    Raises:
        ValueError: If days < 1
    """
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    template = get_schedule_template(days)
    return [template[i % len(template)] for i in range(days)]


class ScheduleBuilder:
    """Builds weekly schedules and full plans from a user profile."""

    def __init__(self, selector: ExerciseSelector) -> None:
        self.selector = selector

    def build_day(
        self, day_number: int, focus: str, profile: UserProfile
    ) -> WeeklyScheduleDay:
        """Select and prescribe the exercises of one training day."""
        count = exercise_count(profile.session_duration_minutes, profile.experience_level)
        exercises = self.selector.select_for_focus(
            focus,
            profile.equipment,
            profile.experience_level,
            count,
            profile.goal,
        )
        if len(exercises) < min(MIN_EXERCISES, count):
            logger.warning(
                "Day %d (%s): catalog supplied only %d exercises",
                day_number,
                focus,
                len(exercises),
            )
        return WeeklyScheduleDay(
            day_number=day_number,
            day_name=f"Day {day_number}",
            focus=focus,
            exercises=[
                to_workout_exercise(ex, profile.goal, profile.experience_level)
                for ex in exercises
            ],
            estimated_duration_minutes=profile.session_duration_minutes,
            notes=FOCUS_NOTES.get(normalize_focus(focus), ""),
        )

    def build(self, profile: UserProfile) -> list[WeeklyScheduleDay]:
        """
        Build the weekly schedule.

        Returns:
            Exactly ``days_per_week(profile)`` days, numbered from 1
        """
        days = days_per_week(profile)
        rotation = focus_rotation(days)
        logger.info(
            "Building %d-day schedule (%s, %s): %s",
            days,
            profile.experience_level,
            profile.goal,
            rotation,
        )
        return [
            self.build_day(i + 1, focus, profile) for i, focus in enumerate(rotation)
        ]

    def build_plan(self, profile: UserProfile) -> WorkoutPlan:
        """
        Build the weekly schedule and wrap it with plan metadata.

        Calories are estimated at a flat rate per training minute.
        """
        schedule = self.build(profile)
        days = len(schedule)
        minutes = profile.session_duration_minutes
        level = profile.experience_level

        base_name = GOAL_NAMES.get(profile.goal, "Personal Training Plan")
        equipment = sorted({ex.equipment for day in schedule for ex in day.exercises})

        return WorkoutPlan(
            name=f"{base_name} {LEVEL_LABELS.get(level, '')}".strip(),
            description=(
                f"Personal plan with {days} training days per week, {minutes} minutes "
                f"per session. Built for the {profile.goal} goal at {level} level."
            ),
            duration_weeks=PLAN_DURATION_WEEKS.get(level, 12),
            days_per_week=days,
            goal=profile.goal,
            difficulty_level=level,
            weekly_schedule=schedule,
            equipment_required=equipment,
            session_minutes=minutes,
            estimated_weekly_calories=days * minutes * KCAL_PER_MINUTE,
            progression_notes=PROGRESSION_NOTES.copy(),
        )

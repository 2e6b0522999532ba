"""
Next-workout selection within a repeating weekly plan.

The user trains through the weekly plan in order.  Which day comes next
depends only on how long ago the last session was:

  never trained   -> day 0
  same day        -> stay on the current day, light
  1..4 days       -> next day in the rotation
  5..7 days       -> restart the week, light
  more than 7     -> restart the week, light (gradual return)

All functions here are pure; the stored state changes only through
``apply_completion``, whose result the caller persists.
"""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import date

from .config import LONG_BREAK_MAX_DAYS, SHORT_BREAK_MAX_DAYS
from .models import CycleState, CycleStatistics, NextWorkoutRecommendation

# Expected workout count for the consistency percentage:
# floor(days / 2) * min(plan length, 3).
_EXPECTED_DAYS_PER_SESSION = 2
_EXPECTED_MAX_PER_WEEK = 3


def parse_date(value: str) -> date | None:
    """Parse an ISO date (or the date part of an ISO timestamp); None if invalid."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def days_since(last_workout_date: str, today: date) -> int | None:
    """
    Whole days between the last workout and today.

    Returns:
        None if the user never trained (empty or unparseable date),
        otherwise max(0, days).  Future dates count as today.
    """
    last = parse_date(last_workout_date)
    if last is None:
        return None
    return max(0, (today - last).days)


def new_cycle_state(weekly_plan: list[str], today: date) -> CycleState:
    """Fresh state at the start of a program."""
    return CycleState(
        weekly_plan=list(weekly_plan),
        current_week_number=1,
        current_day_in_week=0,
        last_workout_date="",
        total_workouts_completed=0,
        program_start_date=today.isoformat(),
    )


def determine_next_workout(
    state: CycleState, weekly_plan: list[str], today: date
) -> NextWorkoutRecommendation:
    """
    Decide which day of the weekly plan to train next.

    Args:
        state: Current cycle position (not modified)
        weekly_plan: Ordered focus names of the weekly plan
        today: Reference date

    Returns:
        NextWorkoutRecommendation.  Calling twice without a completion in
        between gives the same answer.

    Raises:
        ValueError: If weekly_plan is empty
    """
    if not weekly_plan:
        raise ValueError("weekly_plan must not be empty")

    length = len(weekly_plan)
    current = state.current_day_in_week % length
    elapsed = days_since(state.last_workout_date, today)

    if elapsed is None:
        return NextWorkoutRecommendation(
            workout_name=weekly_plan[0],
            workout_index=0,
            reason="First workout of the program",
            is_regular_progression=True,
            days_since_last_workout=0,
            suggested_intensity="normal",
        )

    if elapsed == 0:
        return NextWorkoutRecommendation(
            workout_name=weekly_plan[current],
            workout_index=current,
            reason="Already trained today; repeat lightly or rest",
            is_regular_progression=False,
            days_since_last_workout=0,
            suggested_intensity="light",
        )

    if elapsed <= SHORT_BREAK_MAX_DAYS:
        nxt = (current + 1) % length
        reason = (
            "Regular continuation of the weekly plan"
            if elapsed == 1
            else f"Short break of {elapsed} days; continuing the plan"
        )
        return NextWorkoutRecommendation(
            workout_name=weekly_plan[nxt],
            workout_index=nxt,
            reason=reason,
            is_regular_progression=True,
            days_since_last_workout=elapsed,
            suggested_intensity="normal",
        )

    if elapsed <= LONG_BREAK_MAX_DAYS:
        reason = f"Long break of {elapsed} days; starting a new week"
    else:
        reason = f"Very long break of {elapsed} days; gradual return from day one"
    return NextWorkoutRecommendation(
        workout_name=weekly_plan[0],
        workout_index=0,
        reason=reason,
        is_regular_progression=False,
        days_since_last_workout=elapsed,
        suggested_intensity="light",
    )


def apply_completion(state: CycleState, workout_index: int, today: date) -> CycleState:
    """
    Record a completed workout.

    Returns:
        New CycleState with the day pointer on ``workout_index``, today's date,
        the total incremented and the week number recomputed.

    Raises:
        ValueError: If workout_index is outside the weekly plan
    """
    length = len(state.weekly_plan)
    if not 0 <= workout_index < length:
        raise ValueError(
            f"workout_index {workout_index} outside plan of length {length}"
        )
    total = state.total_workouts_completed + 1
    return replace(
        state,
        current_day_in_week=workout_index,
        last_workout_date=today.isoformat(),
        total_workouts_completed=total,
        current_week_number=total // length + 1,
        program_start_date=state.program_start_date or today.isoformat(),
    )


def cycle_statistics(state: CycleState, today: date) -> CycleStatistics:
    """
    Progress summary for the current program.

    Consistency is completed workouts as a percentage of
    ``floor(days_in_program / 2) * min(len(weekly_plan), 3)``, clamped to
    [0, 100]; 100 while that expected count is still 0.
    """
    start = parse_date(state.program_start_date)
    days_in_program = max(0, (today - start).days) if start is not None else 0

    expected = math.floor(days_in_program / _EXPECTED_DAYS_PER_SESSION) * min(
        len(state.weekly_plan), _EXPECTED_MAX_PER_WEEK
    )
    if expected > 0:
        pct = round(state.total_workouts_completed / expected * 100)
        consistency = max(0, min(100, pct))
    else:
        consistency = 100

    return CycleStatistics(
        current_week=state.current_week_number,
        total_workouts=state.total_workouts_completed,
        days_in_program=days_in_program,
        consistency_pct=consistency,
    )

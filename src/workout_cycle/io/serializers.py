"""
JSON serialization for workout-cycle data models.

Handles conversion between dataclasses and JSON-compatible dicts.
Decoders raise ValidationError for malformed records; the stores catch it
at their boundary.
"""

import re
from dataclasses import replace
from datetime import datetime
from typing import Any

from ..core.models import (
    CycleState,
    CycleStatistics,
    KeyMetrics,
    NextWorkoutRecommendation,
    PerformanceAnalysis,
    PerformedExercise,
    PersonalRecord,
    Recommendation,
    SessionFeedback,
    SessionRecord,
    SetRecord,
    UserProfile,
    WeeklyScheduleDay,
    WorkoutExercise,
    WorkoutPlan,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate date string is ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        The same YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative or not a number
    """
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def _build(cls, **kwargs):
    """Construct a model, turning its own validation errors into ValidationError."""
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {cls.__name__}: {e}") from e


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """Convert UserProfile to JSON-compatible dict."""
    return {
        "goal": profile.goal,
        "experience_level": profile.experience_level,
        "equipment": sorted(profile.equipment),
        "available_days_per_week": profile.available_days_per_week,
        "session_duration_minutes": profile.session_duration_minutes,
    }


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        days = data.get("available_days_per_week")
        days = int(days) if days is not None else None
        minutes = int(data.get("session_duration_minutes", 45))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile: {e}") from e
    return _build(
        UserProfile,
        goal=str(data.get("goal", "general_fitness")),
        experience_level=str(data.get("experience_level", "beginner")),
        equipment=frozenset(data.get("equipment") or ["bodyweight"]),
        available_days_per_week=days,
        session_duration_minutes=minutes,
    )


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------


def workout_exercise_to_dict(ex: WorkoutExercise) -> dict[str, Any]:
    """Convert WorkoutExercise to JSON-compatible dict."""
    return {
        "exercise_id": ex.exercise_id,
        "name": ex.name,
        "sets": ex.sets,
        "reps": ex.reps,
        "rest_seconds": ex.rest_seconds,
        "target_muscles": list(ex.target_muscles),
        "difficulty": ex.difficulty,
        "equipment": ex.equipment,
    }


def dict_to_workout_exercise(data: dict[str, Any]) -> WorkoutExercise:
    """Convert dict to WorkoutExercise."""
    validate_non_negative(data.get("sets", 0), "sets")
    validate_non_negative(data.get("rest_seconds", 0), "rest_seconds")
    return WorkoutExercise(
        exercise_id=str(data["exercise_id"]),
        name=str(data["name"]),
        sets=int(data["sets"]),
        reps=str(data["reps"]),
        rest_seconds=int(data["rest_seconds"]),
        target_muscles=list(data.get("target_muscles", [])),
        difficulty=str(data.get("difficulty", "beginner")),
        equipment=str(data.get("equipment", "none")),
    )


def schedule_day_to_dict(day: WeeklyScheduleDay) -> dict[str, Any]:
    """Convert WeeklyScheduleDay to JSON-compatible dict."""
    return {
        "day_number": day.day_number,
        "day_name": day.day_name,
        "focus": day.focus,
        "exercises": [workout_exercise_to_dict(ex) for ex in day.exercises],
        "estimated_duration_minutes": day.estimated_duration_minutes,
        "notes": day.notes,
    }


def dict_to_schedule_day(data: dict[str, Any]) -> WeeklyScheduleDay:
    """
    Convert dict to WeeklyScheduleDay.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return WeeklyScheduleDay(
            day_number=int(data["day_number"]),
            day_name=str(data.get("day_name", f"Day {data['day_number']}")),
            focus=str(data["focus"]),
            exercises=[dict_to_workout_exercise(ex) for ex in data.get("exercises", [])],
            estimated_duration_minutes=int(data.get("estimated_duration_minutes", 0)),
            notes=str(data.get("notes", "")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid schedule day: {e}") from e


def workout_plan_to_dict(plan: WorkoutPlan) -> dict[str, Any]:
    """Convert WorkoutPlan to JSON-compatible dict."""
    return {
        "name": plan.name,
        "description": plan.description,
        "duration_weeks": plan.duration_weeks,
        "days_per_week": plan.days_per_week,
        "goal": plan.goal,
        "difficulty_level": plan.difficulty_level,
        "weekly_schedule": [schedule_day_to_dict(d) for d in plan.weekly_schedule],
        "equipment_required": list(plan.equipment_required),
        "session_minutes": plan.session_minutes,
        "estimated_weekly_calories": plan.estimated_weekly_calories,
        "progression_notes": list(plan.progression_notes),
    }


# ---------------------------------------------------------------------------
# Cycle
# ---------------------------------------------------------------------------


def cycle_state_to_dict(state: CycleState) -> dict[str, Any]:
    """Convert CycleState to JSON-compatible dict."""
    return {
        "weekly_plan": list(state.weekly_plan),
        "current_week_number": state.current_week_number,
        "current_day_in_week": state.current_day_in_week,
        "last_workout_date": state.last_workout_date,
        "total_workouts_completed": state.total_workouts_completed,
        "program_start_date": state.program_start_date,
    }


def dict_to_cycle_state(data: dict[str, Any]) -> CycleState:
    """
    Convert dict to CycleState.

    Raises:
        ValidationError: If data is invalid (missing plan, bad counters,
            day pointer outside the plan, malformed dates)
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Cycle state must be an object, got {type(data).__name__}")
    plan = data.get("weekly_plan")
    if not isinstance(plan, list) or not all(isinstance(p, str) for p in plan):
        raise ValidationError("weekly_plan must be a list of focus names")

    last = data.get("last_workout_date") or ""
    if last:
        validate_date(last[:10])
    start = data.get("program_start_date") or ""
    if start:
        validate_date(start[:10])

    try:
        week = int(data.get("current_week_number", 1))
        day = int(data.get("current_day_in_week", 0))
        total = int(data.get("total_workouts_completed", 0))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid cycle counters: {e}") from e

    return _build(
        CycleState,
        weekly_plan=list(plan),
        current_week_number=week,
        current_day_in_week=day,
        last_workout_date=last,
        total_workouts_completed=total,
        program_start_date=start,
    )


def next_workout_to_dict(rec: NextWorkoutRecommendation) -> dict[str, Any]:
    """Convert NextWorkoutRecommendation to JSON-compatible dict."""
    return {
        "workout_name": rec.workout_name,
        "workout_index": rec.workout_index,
        "reason": rec.reason,
        "is_regular_progression": rec.is_regular_progression,
        "days_since_last_workout": rec.days_since_last_workout,
        "suggested_intensity": rec.suggested_intensity,
    }


def cycle_statistics_to_dict(stats: CycleStatistics) -> dict[str, Any]:
    """Convert CycleStatistics to JSON-compatible dict."""
    return {
        "current_week": stats.current_week,
        "total_workouts": stats.total_workouts,
        "days_in_program": stats.days_in_program,
        "consistency_pct": stats.consistency_pct,
    }


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def set_record_to_dict(s: SetRecord) -> dict[str, Any]:
    """Convert SetRecord to JSON-compatible dict (duration only for timed sets)."""
    d: dict[str, Any] = {
        "reps": s.reps,
        "weight_kg": s.weight_kg,
        "perceived_exertion": s.perceived_exertion,
        "completed": s.completed,
        "rest_seconds": s.rest_seconds,
    }
    if s.duration_seconds is not None:
        d["duration_seconds"] = s.duration_seconds
    return d


def dict_to_set_record(data: dict[str, Any]) -> SetRecord:
    """
    Convert dict to SetRecord.

    Raises:
        ValidationError: If data is invalid
    """
    validate_non_negative(data.get("reps", 0), "reps")
    validate_non_negative(data.get("weight_kg", 0), "weight_kg")
    validate_non_negative(data.get("rest_seconds", 0), "rest_seconds")
    duration = data.get("duration_seconds")
    return _build(
        SetRecord,
        reps=int(data.get("reps", 0)),
        weight_kg=float(data.get("weight_kg", 0.0)),
        perceived_exertion=int(data.get("perceived_exertion", 5)),
        completed=bool(data.get("completed", True)),
        rest_seconds=int(data.get("rest_seconds", 60)),
        duration_seconds=int(duration) if duration is not None else None,
    )


def performed_exercise_to_dict(ex: PerformedExercise) -> dict[str, Any]:
    """Convert PerformedExercise to JSON-compatible dict."""
    return {
        "name": ex.name,
        "target_sets": ex.target_sets,
        "target_reps": ex.target_reps,
        "sets": [set_record_to_dict(s) for s in ex.sets],
        "skipped": ex.skipped,
    }


def dict_to_performed_exercise(data: dict[str, Any]) -> PerformedExercise:
    """Convert dict to PerformedExercise."""
    if "name" not in data:
        raise ValidationError("Performed exercise is missing 'name'")
    validate_non_negative(data.get("target_sets", 0), "target_sets")
    validate_non_negative(data.get("target_reps", 0), "target_reps")
    return PerformedExercise(
        name=str(data["name"]),
        target_sets=int(data.get("target_sets", 0)),
        target_reps=int(data.get("target_reps", 0)),
        sets=[dict_to_set_record(s) for s in data.get("sets", [])],
        skipped=bool(data.get("skipped", False)),
    )


def feedback_to_dict(fb: SessionFeedback) -> dict[str, Any]:
    """Convert SessionFeedback to JSON-compatible dict."""
    return {
        "overall_rating": fb.overall_rating,
        "difficulty": fb.difficulty,
        "energy_level": fb.energy_level,
        "fatigue_level": fb.fatigue_level,
        "notes": fb.notes,
    }


def dict_to_feedback(data: dict[str, Any]) -> SessionFeedback:
    """Convert dict to SessionFeedback."""
    return _build(
        SessionFeedback,
        overall_rating=int(data.get("overall_rating", 3)),
        difficulty=str(data.get("difficulty", "perfect")),
        energy_level=int(data.get("energy_level", 5)),
        fatigue_level=int(data.get("fatigue_level", 5)),
        notes=str(data.get("notes", "")),
    )


def session_record_to_dict(session: SessionRecord) -> dict[str, Any]:
    """
    Convert SessionRecord to JSON-compatible dict.

    Planned/completed totals are written only when set explicitly; otherwise
    they are re-derived from the sets on load.
    """
    d: dict[str, Any] = {
        "date": session.date,
        "duration_minutes": session.duration_minutes,
        "exercises": [performed_exercise_to_dict(ex) for ex in session.exercises],
        "feedback": feedback_to_dict(session.feedback),
    }
    if session.planned_sets is not None:
        d["planned_sets"] = session.planned_sets
    if session.completed_sets is not None:
        d["completed_sets"] = session.completed_sets
    return d


def dict_to_session_record(data: dict[str, Any]) -> SessionRecord:
    """
    Convert dict to SessionRecord.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Session must be an object, got {type(data).__name__}")
    if "date" not in data:
        raise ValidationError("Session is missing 'date'")
    validate_date(data["date"])
    validate_non_negative(data.get("duration_minutes", 0), "duration_minutes")

    try:
        exercises = [dict_to_performed_exercise(ex) for ex in data.get("exercises", [])]
        feedback = dict_to_feedback(data.get("feedback") or {})
        planned = data.get("planned_sets")
        completed = data.get("completed_sets")
        return _build(
            SessionRecord,
            date=data["date"],
            duration_minutes=float(data.get("duration_minutes", 0)),
            exercises=exercises,
            feedback=feedback,
            planned_sets=int(planned) if planned is not None else None,
            completed_sets=int(completed) if completed is not None else None,
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid session on {data['date']}: {e}") from e


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


def key_metrics_to_dict(km: KeyMetrics) -> dict[str, Any]:
    """Convert KeyMetrics to JSON-compatible dict."""
    return {
        "volume_change_pct": round(km.volume_change_pct, 2),
        "intensity_change_pct": round(km.intensity_change_pct, 2),
        "endurance_change_pct": round(km.endurance_change_pct, 2),
        "consistency_score": round(km.consistency_score, 3),
    }


def recommendation_to_dict(rec: Recommendation) -> dict[str, Any]:
    """Convert Recommendation to JSON-compatible dict."""
    d: dict[str, Any] = {
        "type": rec.type,
        "current_value": round(rec.current_value, 2),
        "recommended_value": round(rec.recommended_value, 2),
        "reason": rec.reason,
        "confidence": rec.confidence,
        "priority": rec.priority,
    }
    if rec.exercise is not None:
        d["exercise"] = rec.exercise
    return d


def performance_analysis_to_dict(analysis: PerformanceAnalysis) -> dict[str, Any]:
    """Convert PerformanceAnalysis to JSON-compatible dict."""
    return {
        "trend": analysis.trend,
        "confidence": round(analysis.confidence, 3),
        "key_metrics": key_metrics_to_dict(analysis.key_metrics),
        "recommendations": [recommendation_to_dict(r) for r in analysis.recommendations],
    }


def personal_record_to_dict(pr: PersonalRecord) -> dict[str, Any]:
    """Convert PersonalRecord to JSON-compatible dict."""
    return {"exercise": pr.exercise, "kind": pr.kind, "value": pr.value}


# ---------------------------------------------------------------------------
# Command-line set notation
# ---------------------------------------------------------------------------

_SET_PATTERN = re.compile(
    r"^(?:(?P<count>\d+)x)?(?P<reps>\d+)(?:@\+?(?P<kg>\d+(?:\.\d+)?))?"
    r"(?:/(?P<rpe>\d+))?(?P<failed>x)?$"
)


def parse_sets_string(sets_str: str) -> list[SetRecord]:
    """
    Parse a comma-separated sets string.

    Per-set format:
        reps[@kg][/rpe][x]   e.g. "8@20/7"   8 reps with 20 kg at RPE 7
                                  "10"       bodyweight, RPE 5
                                  "5@20/9x"  not completed
    A leading "Nx" repeats the set: "3x8@20/7" is three sets of 8.

    Args:
        sets_str: Sets string to parse

    Returns:
        List of SetRecord

    Raises:
        ValidationError: If format is invalid
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    sets: list[SetRecord] = []
    for part in (p.strip() for p in sets_str.split(",")):
        if not part:
            continue
        m = _SET_PATTERN.match(part.replace(" ", ""))
        if m is None:
            raise ValidationError(
                f"Invalid set '{part}'. Expected reps[@kg][/rpe][x], e.g. 8@20/7"
            )
        count = int(m.group("count") or 1)
        if count < 1:
            raise ValidationError(f"Invalid set count in '{part}'")
        record = _build(
            SetRecord,
            reps=int(m.group("reps")),
            weight_kg=float(m.group("kg") or 0.0),
            perceived_exertion=int(m.group("rpe") or 5),
            completed=m.group("failed") is None,
        )
        sets.extend(replace(record) for _ in range(count))

    if not sets:
        raise ValidationError("Sets string cannot be empty")
    return sets


def parse_exercise_spec(spec: str) -> PerformedExercise:
    """
    Parse ``NAME=SETS`` into a PerformedExercise.

    Example: "Goblet Squat=3x10@16/7" or "Push-up=12/6,10/7,8/8x".
    The number of listed sets becomes the exercise's target sets.

    Raises:
        ValidationError: If format is invalid
    """
    name, sep, sets_str = spec.partition("=")
    if not sep or not name.strip():
        raise ValidationError(f"Invalid exercise '{spec}'. Expected NAME=SETS")
    sets = parse_sets_string(sets_str)
    return PerformedExercise(
        name=name.strip(),
        target_sets=len(sets),
        target_reps=max(s.reps for s in sets),
        sets=sets,
    )

"""
Data models for workout-cycle.

All core dataclasses representing the exercise catalog, user profile,
weekly schedule, cycle position, logged sessions and derived analysis.
Catalog entries are immutable; everything the engine derives is rebuilt
wholesale rather than patched in place.
"""

from dataclasses import dataclass, field
from typing import Literal

Difficulty = Literal["beginner", "intermediate", "advanced"]
Trend = Literal["improving", "plateauing", "declining"]
Intensity = Literal["normal", "light", "catchup"]
Priority = Literal["low", "medium", "high"]
RecommendationType = Literal[
    "increase_weight",
    "increase_reps",
    "decrease_rest",
    "change_exercise",
    "add_volume",
    "reduce_intensity",
]

EXPERIENCE_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True)
class Exercise:
    """
    One catalog exercise.

    ``equipment`` is a single equipment token; "none" and "bodyweight" both
    mean no equipment is required.
    """

    id: str
    name: str
    category: str                       # "strength" | "cardio" | "core" | "flexibility"
    primary_muscles: frozenset[str]
    secondary_muscles: frozenset[str] = frozenset()
    equipment: str = "none"
    difficulty: Difficulty = "beginner"

    @property
    def is_bodyweight(self) -> bool:
        """True if the exercise needs no equipment."""
        return self.equipment in ("none", "bodyweight")


@dataclass
class UserProfile:
    """
    Training profile, built once from questionnaire answers.

    ``available_days_per_week`` may be None, in which case the schedule
    falls back to a per-experience default.
    """

    goal: str = "general_fitness"
    experience_level: str = "beginner"
    equipment: frozenset[str] = frozenset({"bodyweight"})
    available_days_per_week: int | None = None
    session_duration_minutes: int = 45

    def __post_init__(self) -> None:
        """Validate profile data."""
        if self.experience_level not in EXPERIENCE_LEVELS:
            raise ValueError(
                f"Invalid experience_level: {self.experience_level!r}. "
                f"Must be one of {EXPERIENCE_LEVELS}"
            )
        if self.session_duration_minutes <= 0:
            raise ValueError("session_duration_minutes must be positive")
        # Whole minutes; JSON numbers may arrive as floats
        self.session_duration_minutes = max(1, int(self.session_duration_minutes))
        if self.available_days_per_week is not None and not (
            1 <= self.available_days_per_week <= 7
        ):
            raise ValueError(
                f"available_days_per_week must be 1..7, got {self.available_days_per_week}"
            )
        self.equipment = frozenset(self.equipment)


@dataclass
class WorkoutExercise:
    """A catalog exercise with its prescription attached."""

    exercise_id: str
    name: str
    sets: int
    reps: str            # e.g. "8-12" or "30-45 sec"
    rest_seconds: int
    target_muscles: list[str] = field(default_factory=list)
    difficulty: str = "beginner"
    equipment: str = "none"


@dataclass
class WeeklyScheduleDay:
    """One training day of the weekly schedule."""

    day_number: int       # 1-indexed
    day_name: str
    focus: str
    exercises: list[WorkoutExercise] = field(default_factory=list)
    estimated_duration_minutes: int = 0
    notes: str = ""


@dataclass
class WorkoutPlan:
    """
    A full plan: the weekly schedule plus descriptive metadata.
    """

    name: str
    description: str
    duration_weeks: int
    days_per_week: int
    goal: str
    difficulty_level: str
    weekly_schedule: list[WeeklyScheduleDay]
    equipment_required: list[str]
    session_minutes: int
    estimated_weekly_calories: int
    progression_notes: list[str] = field(default_factory=list)


@dataclass
class CycleState:
    """
    Where the user stands within the repeating weekly plan.

    Persisted across sessions.  ``last_workout_date`` is an ISO date or ""
    when the user has never trained on this plan.
    """

    weekly_plan: list[str]
    current_week_number: int = 1
    current_day_in_week: int = 0
    last_workout_date: str = ""
    total_workouts_completed: int = 0
    program_start_date: str = ""

    def __post_init__(self) -> None:
        """Validate cycle position."""
        if self.current_week_number < 1:
            raise ValueError("current_week_number must be >= 1")
        if self.total_workouts_completed < 0:
            raise ValueError("total_workouts_completed must be non-negative")
        if self.weekly_plan and not (
            0 <= self.current_day_in_week < len(self.weekly_plan)
        ):
            raise ValueError(
                f"current_day_in_week {self.current_day_in_week} outside plan of "
                f"length {len(self.weekly_plan)}"
            )


@dataclass
class NextWorkoutRecommendation:
    """Which day of the weekly plan to train next, and how hard."""

    workout_name: str
    workout_index: int
    reason: str
    is_regular_progression: bool
    days_since_last_workout: int
    suggested_intensity: Intensity


@dataclass
class CycleStatistics:
    """Summary of progress through the current program."""

    current_week: int
    total_workouts: int
    days_in_program: int
    consistency_pct: int


@dataclass
class SetRecord:
    """A single performed set."""

    reps: int
    weight_kg: float = 0.0
    perceived_exertion: int = 5   # RPE 1-10
    completed: bool = True
    rest_seconds: int = 60
    duration_seconds: int | None = None  # timed sets only

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight_kg < 0:
            raise ValueError("weight_kg must be non-negative")
        if not 1 <= self.perceived_exertion <= 10:
            raise ValueError("perceived_exertion must be 1..10")
        if self.rest_seconds < 0:
            raise ValueError("rest_seconds must be non-negative")


@dataclass
class PerformedExercise:
    """One exercise as it was performed within a session."""

    name: str
    target_sets: int = 0
    target_reps: int = 0
    sets: list[SetRecord] = field(default_factory=list)
    skipped: bool = False


@dataclass
class SessionFeedback:
    """Post-session feedback."""

    overall_rating: int = 3                 # 1-5
    difficulty: str = "perfect"             # "too_easy" | "perfect" | "too_hard"
    energy_level: int = 5                   # 1-10, before the session
    fatigue_level: int = 5                  # 1-10, after the session
    notes: str = ""

    def __post_init__(self) -> None:
        """Validate feedback ranges."""
        if not 1 <= self.overall_rating <= 5:
            raise ValueError("overall_rating must be 1..5")
        if self.difficulty not in ("too_easy", "perfect", "too_hard"):
            raise ValueError(f"Invalid difficulty verdict: {self.difficulty!r}")
        if not 1 <= self.energy_level <= 10:
            raise ValueError("energy_level must be 1..10")
        if not 1 <= self.fatigue_level <= 10:
            raise ValueError("fatigue_level must be 1..10")


@dataclass
class SessionRecord:
    """
    A completed training session.

    ``planned_sets`` / ``completed_sets`` are the planned-vs-actual totals
    for the whole session.  When left as None they are derived from the
    performed exercises (planned = max(target_sets, logged sets)).
    """

    date: str  # ISO format: YYYY-MM-DD
    duration_minutes: float
    exercises: list[PerformedExercise] = field(default_factory=list)
    feedback: SessionFeedback = field(default_factory=SessionFeedback)
    planned_sets: int | None = None
    completed_sets: int | None = None

    def __post_init__(self) -> None:
        """Validate session data."""
        self._validate_date(self.date)
        if self.duration_minutes < 0:
            raise ValueError("duration_minutes must be non-negative")

    @staticmethod
    def _validate_date(date_str: str) -> None:
        """Validate date string is ISO format YYYY-MM-DD."""
        import re

        if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
            raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

        from datetime import datetime

        try:
            datetime.strptime(date_str, "%Y-%m-%d")
        except ValueError as e:
            raise ValueError(f"Invalid date: {date_str}") from e

    @property
    def total_planned_sets(self) -> int:
        """Planned sets for the session."""
        if self.planned_sets is not None:
            return self.planned_sets
        return sum(max(ex.target_sets, len(ex.sets)) for ex in self.exercises)

    @property
    def total_completed_sets(self) -> int:
        """Sets actually completed in the session."""
        if self.completed_sets is not None:
            return self.completed_sets
        return sum(1 for ex in self.exercises for s in ex.sets if s.completed)


@dataclass
class WindowMetrics:
    """Aggregates over one window of sessions."""

    average_volume: float = 0.0
    average_intensity: float = 0.0
    average_duration: float = 0.0
    completion_rate: float = 0.0
    average_rating: float = 0.0
    session_count: int = 0


@dataclass
class KeyMetrics:
    """Window-over-window changes plus the consistency score."""

    volume_change_pct: float = 0.0
    intensity_change_pct: float = 0.0
    endurance_change_pct: float = 0.0
    consistency_score: float = 1.0


@dataclass
class Recommendation:
    """One advisory adjustment derived from the analysis."""

    type: RecommendationType
    current_value: float
    recommended_value: float
    reason: str
    confidence: float
    priority: Priority
    exercise: str | None = None


@dataclass
class PerformanceAnalysis:
    """
    Trend classification and recommendations over recent history.

    Advisory only; never the source of truth for any stored state.
    """

    trend: Trend
    confidence: float
    key_metrics: KeyMetrics
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass
class PersonalRecord:
    """Best completed-set value for one exercise."""

    exercise: str
    kind: Literal["weight", "reps"]
    value: float

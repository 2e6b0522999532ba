"""
Configuration constants for the workout-cycle engine.

All adjustable parameters are centralized here for easy tuning.
Values that users may override through ``config.yaml`` are collected
into EngineSettings at the bottom of this module.
"""

from dataclasses import dataclass
from typing import Any, Final

# =============================================================================
# EQUIPMENT
# =============================================================================

BODYWEIGHT_TOKENS: Final[frozenset[str]] = frozenset({"none", "bodyweight"})

# Questionnaire selection -> equipment tokens used by the catalog
EQUIPMENT_MAPPING: Final[dict[str, tuple[str, ...]]] = {
    # Household items: all collapse to bodyweight work
    "bodyweight_only": ("bodyweight",),
    "mat_available": ("yoga_mat", "bodyweight"),
    "chair_available": ("bodyweight",),
    "wall_space": ("bodyweight",),
    "stairs_available": ("bodyweight",),
    "water_bottles": ("bodyweight",),
    # Home equipment
    "dumbbells": ("dumbbells",),
    "resistance_bands": ("resistance_bands",),
    "kettlebell": ("kettlebells",),
    "yoga_mat": ("yoga_mat",),
    "pullup_bar": ("pull_up_bar",),
    "exercise_ball": ("stability_ball",),
    "trx": ("trx",),
    # Gym equipment
    "free_weights": ("dumbbells", "barbells"),
    "cable_machine": ("cables",),
    "squat_rack": ("barbells",),
    "bench_press": ("barbells", "machines"),
    "leg_press": ("machines",),
    "lat_pulldown": ("machines",),
    "rowing_machine": ("machines",),
    "treadmill": ("machines",),
    "bike": ("machines",),
}

EQUIPMENT_TOKENS: Final[frozenset[str]] = frozenset(
    {
        "bodyweight",
        "dumbbells",
        "resistance_bands",
        "kettlebells",
        "yoga_mat",
        "pull_up_bar",
        "barbells",
        "machines",
        "cables",
        "trx",
        "medicine_ball",
        "stability_ball",
        "foam_roller",
    }
)

# =============================================================================
# FOCUS -> TARGET MUSCLES
# =============================================================================

FULL_BODY: Final[str] = "full body"
CARDIO: Final[str] = "cardio"

FOCUS_MUSCLES: Final[dict[str, frozenset[str]]] = {
    "upper": frozenset({"chest", "back", "shoulders", "triceps", "biceps"}),
    "lower": frozenset({"quadriceps", "hamstrings", "glutes", "calves"}),
    "legs": frozenset({"quadriceps", "hamstrings", "glutes", "calves"}),
    "legs & glutes": frozenset({"quadriceps", "hamstrings", "glutes", "calves"}),
    "push": frozenset({"chest", "shoulders", "triceps"}),
    "chest & shoulders": frozenset({"chest", "shoulders", "triceps"}),
    "pull": frozenset({"back", "biceps"}),
    "back & biceps": frozenset({"back", "biceps"}),
    "core": frozenset({"core"}),
    FULL_BODY: frozenset(
        {
            "chest",
            "back",
            "shoulders",
            "quadriceps",
            "hamstrings",
            "glutes",
            "core",
            "triceps",
            "biceps",
        }
    ),
    CARDIO: frozenset({"cardio"}),
}

FOCUS_NOTES: Final[dict[str, str]] = {
    "upper": "Upper-body strength: pushing and pulling in one session",
    "lower": "Lower-body strength and endurance",
    "legs": "Lower-body strength and endurance",
    "legs & glutes": "Lower-body strength and endurance",
    "push": "Pushing movements for chest, shoulders and triceps",
    "chest & shoulders": "Pushing movements for chest, shoulders and triceps",
    "pull": "Pulling movements for back and biceps",
    "back & biceps": "Pulling movements for back and biceps",
    "core": "Core strength and trunk stability",
    FULL_BODY: "Whole-body session covering every major muscle group",
    CARDIO: "Conditioning and calorie burn",
}

# =============================================================================
# SCHEDULE TEMPLATES
# =============================================================================

SCHEDULE_1_DAY: Final[list[str]] = [FULL_BODY]
SCHEDULE_2_DAYS: Final[list[str]] = ["upper", "lower"]
SCHEDULE_3_DAYS: Final[list[str]] = ["upper", "lower", FULL_BODY]
SCHEDULE_4_DAYS: Final[list[str]] = ["upper", "lower", "push", "pull"]
SCHEDULE_6_DAYS: Final[list[str]] = [
    "chest & shoulders",
    "back & biceps",
    "legs & glutes",
    "upper",
    FULL_BODY,
    CARDIO,
]

DEFAULT_DAYS_PER_WEEK: Final[dict[str, int]] = {
    "beginner": 3,
    "intermediate": 4,
    "advanced": 5,
}

PLAN_DURATION_WEEKS: Final[dict[str, int]] = {
    "beginner": 8,
    "intermediate": 12,
    "advanced": 16,
}

KCAL_PER_MINUTE: Final[int] = 8

PROGRESSION_NOTES: Final[list[str]] = [
    "Weeks 1-2: focus on technique and learning the movements",
    "Weeks 3-4: add load and extra reps",
    "Weeks 5-6: raise training stress and introduce harder variations",
    "Weeks 7-8: re-test and update the plan",
]

GOAL_NAMES: Final[dict[str, str]] = {
    "muscle_building": "Muscle Building Plan",
    "strength": "Strength Plan",
    "endurance": "Endurance Plan",
    "weight_loss": "Weight Loss Plan",
    "general_fitness": "General Fitness Plan",
}

# =============================================================================
# EXERCISE SELECTION
# =============================================================================

MIN_EXERCISES: Final[int] = 3
MINUTES_PER_EXERCISE: Final[dict[str, int]] = {
    "beginner": 7,       # extra time for learning form
    "intermediate": 5,
    "advanced": 4,
}
MAX_EXERCISES: Final[dict[str, int]] = {
    "beginner": 6,
    "intermediate": 8,
    "advanced": 10,
}
USER_EQUIPMENT_SHARE: Final[float] = 0.80  # max share taken from bucket (a)

# Difficulty that each experience level refuses
EXCLUDED_DIFFICULTY: Final[dict[str, str | None]] = {
    "beginner": "advanced",
    "intermediate": None,
    "advanced": "beginner",
}

# =============================================================================
# PRESCRIPTION
# =============================================================================

BASE_SETS: Final[int] = 3
SETS_OFFSET: Final[dict[str, int]] = {
    "beginner": -1,
    "intermediate": 0,
    "advanced": 1,
}

GOAL_REPS: Final[dict[str, str]] = {
    "muscle_building": "8-12",
    "strength": "4-6",
    "endurance": "12-20",
    "weight_loss": "10-15",
    "general_fitness": "8-15",
}
DEFAULT_REPS: Final[str] = "8-12"
CARDIO_REPS_BEGINNER: Final[str] = "20-30 sec"
CARDIO_REPS: Final[str] = "30-45 sec"

REST_CARDIO: Final[int] = 30
REST_ADVANCED: Final[int] = 90
REST_BEGINNER: Final[int] = 45
REST_DEFAULT: Final[int] = 60

# =============================================================================
# CYCLE ADVANCEMENT
# =============================================================================

SHORT_BREAK_MAX_DAYS: Final[int] = 4   # 2..4 days: continue the rotation
LONG_BREAK_MAX_DAYS: Final[int] = 7    # 5..7 days: restart the week
CYCLE_CACHE_TTL_SECONDS: Final[float] = 5.0

# =============================================================================
# PERFORMANCE ANALYSIS
# =============================================================================

MIN_SESSIONS_FOR_ANALYSIS: Final[int] = 3
ANALYSIS_WINDOW: Final[int] = 8
CONFIDENCE_FULL_SESSIONS: Final[int] = 20
INSUFFICIENT_HISTORY_CONFIDENCE: Final[float] = 0.3

IMPROVING_VOLUME_PCT: Final[float] = 5.0
DECLINING_VOLUME_PCT: Final[float] = -5.0
DECLINING_INTENSITY_PCT: Final[float] = -10.0

HIGH_COMPLETION_RATE: Final[float] = 0.9
LOW_COMPLETION_RATE: Final[float] = 0.7
LOW_RATING: Final[float] = 3.0

WEIGHT_INCREASE_FRACTION: Final[float] = 0.05
INTENSITY_REDUCTION_FRACTION: Final[float] = 0.10

STREAK_MAX_GAP_DAYS: Final[int] = 3


@dataclass(frozen=True)
class EngineSettings:
    """
    User-tunable subset of the constants above.

    Built from defaults; ``from_config`` applies the ``engine`` section of
    a loaded config.yaml.  Unknown keys are ignored.
    """

    cache_ttl_seconds: float = CYCLE_CACHE_TTL_SECONDS
    analysis_window: int = ANALYSIS_WINDOW
    improving_volume_pct: float = IMPROVING_VOLUME_PCT
    declining_volume_pct: float = DECLINING_VOLUME_PCT
    declining_intensity_pct: float = DECLINING_INTENSITY_PCT
    high_completion_rate: float = HIGH_COMPLETION_RATE
    low_completion_rate: float = LOW_COMPLETION_RATE
    low_rating: float = LOW_RATING

    def __post_init__(self) -> None:
        if self.cache_ttl_seconds < 0:
            raise ValueError("cache_ttl_seconds must be non-negative")
        if self.analysis_window < 1:
            raise ValueError("analysis_window must be >= 1")

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "EngineSettings":
        """Build settings from a loaded config dict (see engine.config_loader)."""
        section = config.get("engine", {}) if isinstance(config, dict) else {}
        if not isinstance(section, dict):
            return cls()
        known = {f for f in cls.__dataclass_fields__}
        kwargs: dict[str, Any] = {}
        for key, value in section.items():
            if key not in known:
                continue
            kwargs[key] = int(value) if key == "analysis_window" else float(value)
        return cls(**kwargs)

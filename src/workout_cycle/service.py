"""
WorkoutCoach: the public entry point of workout-cycle.

Wires the catalog, selector, schedule builder, cycle store and session
history together.  Every collaborator is injected so tests can pin the
date, the random source and the storage.

Usage:
    from workout_cycle.service import WorkoutCoach
    coach = WorkoutCoach.from_home()
    days = coach.generate_weekly_schedule(profile)
    rec = coach.get_next_workout_recommendation([d.focus for d in days])
    coach.record_workout_completed(rec.workout_index, rec.workout_name)
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Sequence
from datetime import date
from pathlib import Path

from .core.analysis import analyze_performance
from .core.catalog import ExerciseCatalog, load_catalog
from .core.config import EngineSettings
from .core.cycle import apply_completion, cycle_statistics, determine_next_workout
from .core.engine.config_loader import get_data_home, load_engine_settings
from .core.models import (
    CycleStatistics,
    NextWorkoutRecommendation,
    PerformanceAnalysis,
    SessionRecord,
    UserProfile,
    WeeklyScheduleDay,
    WorkoutPlan,
)
from .core.planner import ScheduleBuilder
from .core.selector import ExerciseSelector
from .io.cycle_store import CycleStateStore
from .io.serializers import (
    ValidationError,
    dict_to_schedule_day,
    dict_to_user_profile,
    schedule_day_to_dict,
    user_profile_to_dict,
)
from .io.stores import JsonFileStore, KeyValueStore, MemoryStore, SessionHistoryStore

logger = logging.getLogger(__name__)

SCHEDULE_KEY = "weekly_schedule"
PROFILE_KEY = "user_profile"


class WorkoutCoach:
    """
    Facade over schedule generation, next-workout cycling and analysis.

    Args:
        catalog: Exercise catalog
        kv: Key-value store for cycle state, history and the saved schedule
        today: Callable returning the current date
        rng: Random source for exercise selection
        settings: Engine settings (cache TTL, analysis thresholds)
        monotonic: Clock used by the cycle-state cache
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        kv: KeyValueStore | None = None,
        today: Callable[[], date] = date.today,
        rng: random.Random | None = None,
        settings: EngineSettings | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.catalog = catalog
        self.kv = kv if kv is not None else MemoryStore()
        self.today = today
        self.settings = settings if settings is not None else EngineSettings()
        self.selector = ExerciseSelector(catalog, rng)
        self.builder = ScheduleBuilder(self.selector)
        self.cycle_store = CycleStateStore(
            self.kv, ttl_seconds=self.settings.cache_ttl_seconds, clock=monotonic
        )
        self.history = SessionHistoryStore(self.kv)

    @classmethod
    def from_home(
        cls, home: Path | None = None, rng: random.Random | None = None
    ) -> "WorkoutCoach":
        """Build a coach persisting to ``<home>`` with catalog and settings from there."""
        data_home = get_data_home(home)
        return cls(
            catalog=load_catalog(data_home),
            kv=JsonFileStore(data_home / "data"),
            rng=rng,
            settings=load_engine_settings(data_home),
        )

    # ------------------------------------------------------------------
    # Schedule
    # ------------------------------------------------------------------

    def _remember(self, profile: UserProfile, days: list[WeeklyScheduleDay]) -> None:
        self.kv.set(PROFILE_KEY, user_profile_to_dict(profile))
        self.kv.set(SCHEDULE_KEY, [schedule_day_to_dict(d) for d in days])

    def generate_weekly_schedule(self, profile: UserProfile) -> list[WeeklyScheduleDay]:
        """Build a weekly schedule for the profile and remember both."""
        days = self.builder.build(profile)
        self._remember(profile, days)
        return days

    def generate_workout_plan(self, profile: UserProfile) -> WorkoutPlan:
        """Build a full plan (schedule plus metadata) and remember its schedule."""
        plan = self.builder.build_plan(profile)
        self._remember(profile, plan.weekly_schedule)
        return plan

    def _read_saved(self, key: str):
        try:
            return self.kv.get(key)
        except (OSError, ValueError) as e:
            logger.warning("Saved %s unreadable: %s", key, e)
            return None

    def saved_schedule(self) -> list[WeeklyScheduleDay]:
        """
        The last generated schedule.

        Returns:
            Schedule days; [] if nothing was saved or the document is corrupt
        """
        raw = self._read_saved(SCHEDULE_KEY)
        if not isinstance(raw, list):
            return []
        try:
            return [dict_to_schedule_day(d) for d in raw]
        except (ValidationError, AttributeError) as e:
            logger.warning("Saved schedule is corrupt, ignoring it: %s", e)
            return []

    def saved_weekly_plan(self) -> list[str]:
        """Focus names of the last generated schedule; [] if none was saved."""
        return [day.focus for day in self.saved_schedule()]

    def saved_profile(self) -> UserProfile | None:
        """Profile the last schedule was built for, or None."""
        raw = self._read_saved(PROFILE_KEY)
        if not isinstance(raw, dict):
            return None
        try:
            return dict_to_user_profile(raw)
        except ValidationError as e:
            logger.warning("Saved profile is corrupt, ignoring it: %s", e)
            return None

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def get_next_workout_recommendation(
        self, weekly_plan: Sequence[str]
    ) -> NextWorkoutRecommendation:
        """
        Recommend the next day of the weekly plan.

        Raises:
            ValueError: If weekly_plan is empty
        """
        plan = list(weekly_plan)
        if not plan:
            raise ValueError("weekly_plan must not be empty")
        today = self.today()
        state = self.cycle_store.load(plan, today)
        rec = determine_next_workout(state, plan, today)
        logger.debug("Next workout: %s", rec)
        return rec

    def record_workout_completed(
        self,
        workout_index: int,
        workout_name: str,
        weekly_plan: Sequence[str] | None = None,
    ) -> None:
        """
        Record that the workout at ``workout_index`` was done today.

        The update applies to the stored cycle state.  If there is none yet,
        ``weekly_plan`` (or the saved schedule) starts a new cycle.

        Raises:
            ValueError: If there is no plan to record against, or the index
                is outside the plan
        """
        today = self.today()
        state = self.cycle_store.read_stored()
        if state is None or (weekly_plan is not None and state.weekly_plan != list(weekly_plan)):
            plan = list(weekly_plan) if weekly_plan is not None else self.saved_weekly_plan()
            if not plan:
                raise ValueError("No weekly plan to record the workout against")
            state = self.cycle_store.load(plan, today)

        if 0 <= workout_index < len(state.weekly_plan) and (
            state.weekly_plan[workout_index] != workout_name
        ):
            logger.warning(
                "Workout name %r does not match plan day %d (%r)",
                workout_name,
                workout_index,
                state.weekly_plan[workout_index],
            )

        updated = apply_completion(state, workout_index, today)
        self.cycle_store.save(updated)
        logger.info(
            "Completed %r (day %d); total %d, week %d",
            workout_name,
            workout_index,
            updated.total_workouts_completed,
            updated.current_week_number,
        )

    def reset_cycle(self) -> None:
        """Forget the cycle state; the next recommendation starts from day 0."""
        self.cycle_store.reset()
        logger.info("Cycle state reset")

    def get_cycle_statistics(self) -> CycleStatistics | None:
        """Progress summary, or None if no cycle has been started."""
        state = self.cycle_store.read_stored()
        if state is None:
            return None
        return cycle_statistics(state, self.today())

    # ------------------------------------------------------------------
    # History and analysis
    # ------------------------------------------------------------------

    def log_session(self, session: SessionRecord) -> None:
        """Append a completed session to the history."""
        self.history.append(session)

    def analyze_recent_performance(
        self, history: Sequence[SessionRecord] | None = None
    ) -> PerformanceAnalysis:
        """Analyze the given sessions, or the stored history when None."""
        sessions = list(history) if history is not None else self.history.load_all()
        return analyze_performance(sessions, self.settings)

"""
Integration tests for the workout-cycle engine.

Each test drives real components end to end: the bundled YAML catalog,
the selector and schedule builder, the cycle-state store with its cache,
the session history and the WorkoutCoach facade.

Profile matrix exercised across scenarios:
  level     : beginner, intermediate, advanced
  equipment : bodyweight only, dumbbells, full gym
  days/week : default, 5
"""

import logging
import random
from datetime import date, timedelta
from pathlib import Path

import pytest

from workout_cycle.core.catalog import ExerciseCatalog, load_catalog
from workout_cycle.core.catalog.loader import load_exercises_from_yaml
from workout_cycle.core.config import BODYWEIGHT_TOKENS, EngineSettings
from workout_cycle.core.engine.config_loader import (
    deep_merge,
    get_data_home,
    load_engine_settings,
)
from workout_cycle.core.equipment import resolve_equipment
from workout_cycle.core.models import (
    CycleState,
    Exercise,
    PerformedExercise,
    SessionFeedback,
    SessionRecord,
    SetRecord,
    UserProfile,
)
from workout_cycle.core.planner import ScheduleBuilder
from workout_cycle.core.selector import ExerciseSelector
from workout_cycle.io.cycle_store import CYCLE_STATE_KEY, CycleStateStore
from workout_cycle.io.serializers import (
    ValidationError,
    cycle_state_to_dict,
    dict_to_cycle_state,
    dict_to_session_record,
    session_record_to_dict,
)
from workout_cycle.io.stores import (
    HISTORY_KEY,
    JsonFileStore,
    MemoryStore,
    SessionHistoryStore,
)
from workout_cycle.service import WorkoutCoach

PLAN = ["push", "pull", "legs"]
START = date(2024, 3, 1)


# ===========================================================================
# Helpers
# ===========================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeToday:
    """Manually advanced calendar."""

    def __init__(self, start: date = START) -> None:
        self.day = start

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int) -> None:
        self.day += timedelta(days=days)


@pytest.fixture(scope="module")
def catalog(tmp_path_factory) -> ExerciseCatalog:
    return load_catalog(tmp_path_factory.mktemp("home"))


@pytest.fixture
def coach(catalog):
    return WorkoutCoach(
        catalog,
        kv=MemoryStore(),
        today=FakeToday(),
        rng=random.Random(7),
        monotonic=FakeClock(),
    )


def _profile(
    level: str = "beginner",
    equipment=None,
    days: int | None = None,
    minutes: int = 45,
    goal: str = "general_fitness",
) -> UserProfile:
    return UserProfile(
        goal=goal,
        experience_level=level,
        equipment=resolve_equipment(equipment),
        available_days_per_week=days,
        session_duration_minutes=minutes,
    )


def _session(day: str, reps: int = 10, rating: int = 4) -> SessionRecord:
    return SessionRecord(
        date=day,
        duration_minutes=40,
        exercises=[
            PerformedExercise(
                name="Push-up",
                target_sets=3,
                target_reps=reps,
                sets=[SetRecord(reps=reps, perceived_exertion=6) for _ in range(3)],
            )
        ],
        feedback=SessionFeedback(overall_rating=rating),
    )


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ===========================================================================
# Catalog
# ===========================================================================


class TestCatalog:
    def test_bundled_catalog_loads(self, catalog):
        assert len(catalog) > 100
        assert "push_up" in catalog
        assert catalog.get("push_up").is_bodyweight

    def test_unknown_id_raises(self, catalog):
        with pytest.raises(KeyError):
            catalog.get("teleport_squat")

    def test_file_level_equipment_applied(self, catalog):
        assert catalog.get("dumbbell_row").equipment == "dumbbells"
        assert catalog.get("lat_pulldown").equipment == "machines"

    def test_query_bodyweight_matches_none(self, catalog):
        ids = {ex.id for ex in catalog.query(equipment="bodyweight")}
        assert {"push_up", "plank", "jumping_jacks"} <= ids
        assert "dumbbell_row" not in ids

    def test_query_combines_filters(self, catalog):
        result = catalog.query(muscle="core", category="core", difficulty="beginner")
        assert result
        for ex in result:
            assert ex.category == "core"
            assert ex.difficulty == "beginner"
            assert "core" in ex.primary_muscles | ex.secondary_muscles

    def test_user_override_merges_over_bundled(self, tmp_path):
        _write(
            tmp_path / "exercises" / "mine.yaml",
            "exercises:\n"
            "  - id: dumbbell_row\n"
            "    difficulty: advanced\n"
            "  - id: towel_wringer\n"
            "    name: Towel Wringer\n"
            "    category: strength\n"
            "    primary_muscles: [forearms]\n"
            "    difficulty: beginner\n",
        )
        catalog = load_catalog(tmp_path)
        row = catalog.get("dumbbell_row")
        assert row.difficulty == "advanced"
        assert row.equipment == "dumbbells"
        assert catalog.get("towel_wringer").is_bodyweight

    def test_invalid_entry_skipped_with_warning(self, tmp_path):
        bundled = _write(
            tmp_path / "cat" / "a.yaml",
            "equipment: none\n"
            "exercises:\n"
            "  - id: good\n"
            "    name: Good\n"
            "    category: strength\n"
            "    primary_muscles: [chest]\n"
            "    difficulty: beginner\n"
            "  - id: bad\n"
            "    name: Bad\n"
            "    category: strength\n"
            "    primary_muscles: [chest]\n"
            "    difficulty: legendary\n",
        ).parent
        with pytest.warns(UserWarning, match="bad"):
            loaded = load_exercises_from_yaml(bundled_dir=bundled)
        assert list(loaded) == ["good"]

    def test_empty_catalog_is_an_error(self, tmp_path, monkeypatch):
        (tmp_path / "empty").mkdir()
        monkeypatch.setattr(
            "workout_cycle.core.catalog.loader.get_bundled_exercises_dir",
            lambda: tmp_path / "empty",
        )
        with pytest.raises(RuntimeError):
            load_catalog(tmp_path)


# ===========================================================================
# Selector
# ===========================================================================


class TestSelector:
    def test_bodyweight_only_legs(self, catalog):
        selector = ExerciseSelector(catalog, random.Random(1))
        picked = selector.select_for_focus("legs", {"bodyweight"}, "beginner", 6)
        assert len(picked) == 6
        assert len({ex.id for ex in picked}) == 6
        for ex in picked:
            assert ex.equipment in BODYWEIGHT_TOKENS
            assert ex.difficulty != "advanced"

    def test_never_selects_unowned_equipment(self, catalog):
        selector = ExerciseSelector(catalog, random.Random(2))
        owned = resolve_equipment({"home_equipment": ["dumbbells"]})
        for focus in ("upper", "lower", "push", "pull", "core", "full body", "cardio"):
            for ex in selector.select_for_focus(focus, owned, "intermediate", 8):
                assert ex.equipment in owned | BODYWEIGHT_TOKENS

    def test_user_equipment_share_capped(self, catalog):
        selector = ExerciseSelector(catalog, random.Random(3))
        owned = resolve_equipment(["dumbbells"])
        picked = selector.select_for_focus("push", owned, "beginner", 6)
        assert len(picked) == 6
        # floor(6 * 0.8) = 4 dumbbell exercises at most
        assert sum(ex.equipment == "dumbbells" for ex in picked) == 4

    def test_cardio_focus_only_cardio(self, catalog):
        selector = ExerciseSelector(catalog, random.Random(4))
        picked = selector.select_for_focus("cardio", {"bodyweight"}, "beginner", 5)
        assert picked
        assert all(ex.category == "cardio" for ex in picked)

    def test_relaxation_keeps_strict_picks_first(self, catalog):
        # advanced refuses beginner work; only three bodyweight core
        # exercises pass the strict filters
        selector = ExerciseSelector(catalog, random.Random(5))
        picked = selector.select_for_focus("core", {"bodyweight"}, "advanced", 10)
        ids = [ex.id for ex in picked]
        assert set(ids[:3]) == {"hollow_hold", "v_up", "mountain_climbers"}
        assert {"plank", "side_plank", "dead_bug"} <= set(ids)
        assert len(ids) == len(set(ids))

    def test_same_seed_same_selection(self, catalog):
        a = ExerciseSelector(catalog, random.Random(42)).select_for_focus(
            "upper", {"bodyweight"}, "beginner", 6
        )
        b = ExerciseSelector(catalog, random.Random(42)).select_for_focus(
            "upper", {"bodyweight"}, "beginner", 6
        )
        assert [ex.id for ex in a] == [ex.id for ex in b]

    def test_zero_count_is_empty(self, catalog):
        assert ExerciseSelector(catalog).select_for_focus("upper", {"bodyweight"}, "beginner", 0) == []

    def test_negative_count_rejected(self, catalog):
        with pytest.raises(ValueError):
            ExerciseSelector(catalog).select_for_focus("upper", {"bodyweight"}, "beginner", -1)

    def test_thin_catalog_returns_what_exists(self):
        only = Exercise(
            id="plank",
            name="Plank",
            category="core",
            primary_muscles=frozenset({"core"}),
        )
        picked = ExerciseSelector(ExerciseCatalog([only])).select_for_focus(
            "core", {"bodyweight"}, "beginner", 6
        )
        assert [ex.id for ex in picked] == ["plank"]


# ===========================================================================
# Schedule builder
# ===========================================================================


class TestScheduleBuilder:
    def _builder(self, catalog, seed: int = 11) -> ScheduleBuilder:
        return ScheduleBuilder(ExerciseSelector(catalog, random.Random(seed)))

    def test_beginner_default_week(self, catalog):
        days = self._builder(catalog).build(_profile())
        assert [d.focus for d in days] == ["upper", "lower", "full body"]
        assert [d.day_number for d in days] == [1, 2, 3]
        assert [d.day_name for d in days] == ["Day 1", "Day 2", "Day 3"]
        for day in days:
            assert 3 <= len(day.exercises) <= 6
            assert day.estimated_duration_minutes == 45
            assert day.notes
            for ex in day.exercises:
                assert ex.sets == 2
                assert ex.equipment in BODYWEIGHT_TOKENS

    def test_requested_days_are_honoured(self, catalog):
        profile = _profile("intermediate", {"gym_equipment": ["free_weights"]}, days=5)
        days = self._builder(catalog).build(profile)
        assert [d.focus for d in days] == ["upper", "lower", "push", "pull", "upper"]
        for day in days:
            assert 3 <= len(day.exercises) <= 8

    def test_prescription_follows_goal(self, catalog):
        days = self._builder(catalog).build(_profile("advanced", ["free_weights"], goal="strength"))
        assert len(days) == 5
        strength_sets = [ex for d in days for ex in d.exercises]
        assert strength_sets
        for ex in strength_sets:
            assert ex.sets == 4
            assert ex.reps in ("4-6", "30-45 sec")

    def test_fractional_session_minutes(self, catalog):
        """30.5 minutes builds like 30: whole exercises, 30-minute days."""
        profile = _profile("intermediate", days=3, minutes=30.5)
        assert profile.session_duration_minutes == 30
        days = self._builder(catalog).build(profile)
        assert len(days) == 3
        for day in days:
            assert 3 <= len(day.exercises) <= 6
            assert day.estimated_duration_minutes == 30

    def test_plan_metadata(self, catalog):
        plan = self._builder(catalog).build_plan(_profile())
        assert plan.name == "General Fitness Plan for Beginners"
        assert plan.duration_weeks == 8
        assert plan.days_per_week == 3
        assert plan.estimated_weekly_calories == 3 * 45 * 8
        assert plan.equipment_required == ["none"]
        assert len(plan.progression_notes) == 4

    def test_short_day_logs_warning(self, caplog):
        only = Exercise(
            id="plank",
            name="Plank",
            category="core",
            primary_muscles=frozenset({"core"}),
        )
        builder = ScheduleBuilder(ExerciseSelector(ExerciseCatalog([only])))
        with caplog.at_level(logging.WARNING, logger="workout_cycle.core.planner"):
            day = builder.build_day(1, "core", _profile())
        assert len(day.exercises) == 1
        assert "only 1 exercises" in caplog.text


# ===========================================================================
# Cycle state store
# ===========================================================================


class TestCycleStateStore:
    def test_initializes_and_persists(self):
        kv = MemoryStore()
        store = CycleStateStore(kv, clock=FakeClock())
        state = store.load(PLAN, START)
        assert state.current_day_in_week == 0
        assert state.program_start_date == "2024-03-01"
        assert kv.get(CYCLE_STATE_KEY)["weekly_plan"] == PLAN

    def test_cache_serves_reads_within_ttl(self):
        clock = FakeClock()
        store = CycleStateStore(MemoryStore(), ttl_seconds=5.0, clock=clock)
        store.load(PLAN, START)
        clock.advance(4.9)
        store.load(PLAN, START)
        assert store.store_reads == 1
        clock.advance(0.2)
        store.load(PLAN, START)
        assert store.store_reads == 2

    def test_cache_keyed_on_plan(self):
        store = CycleStateStore(MemoryStore(), clock=FakeClock())
        store.load(PLAN, START)
        state = store.load(["upper", "lower"], START)
        assert store.store_reads == 2
        assert state.weekly_plan == ["upper", "lower"]

    def test_save_invalidates_cache(self):
        store = CycleStateStore(MemoryStore(), clock=FakeClock())
        state = store.load(PLAN, START)
        state.current_day_in_week = 2
        state.total_workouts_completed = 5
        store.save(state)
        reloaded = store.load(PLAN, START)
        assert reloaded.current_day_in_week == 2
        assert reloaded.total_workouts_completed == 5
        assert store.store_reads == 2

    def test_returned_state_is_a_copy(self):
        store = CycleStateStore(MemoryStore(), clock=FakeClock())
        state = store.load(PLAN, START)
        state.weekly_plan.append("cardio")
        assert store.load(PLAN, START).weekly_plan == PLAN

    def test_corrupt_document_reinitialized(self, caplog):
        kv = MemoryStore()
        kv.set_raw(CYCLE_STATE_KEY, "{not json")
        store = CycleStateStore(kv, clock=FakeClock())
        with caplog.at_level(logging.WARNING):
            state = store.load(PLAN, START)
        assert state.total_workouts_completed == 0
        assert "corrupt" in caplog.text
        assert kv.get(CYCLE_STATE_KEY)["weekly_plan"] == PLAN

    def test_invalid_fields_reinitialized(self):
        kv = MemoryStore({CYCLE_STATE_KEY: {"weekly_plan": PLAN, "current_day_in_week": 9}})
        state = CycleStateStore(kv, clock=FakeClock()).load(PLAN, START)
        assert state.current_day_in_week == 0

    def test_plan_change_starts_new_cycle(self):
        old = CycleState(
            weekly_plan=["upper", "lower"],
            current_day_in_week=1,
            total_workouts_completed=9,
            last_workout_date="2024-02-28",
            program_start_date="2024-01-01",
        )
        kv = MemoryStore({CYCLE_STATE_KEY: cycle_state_to_dict(old)})
        state = CycleStateStore(kv, clock=FakeClock()).load(PLAN, START)
        assert state.weekly_plan == PLAN
        assert state.total_workouts_completed == 0
        assert state.last_workout_date == ""

    def test_reset_removes_state(self):
        kv = MemoryStore()
        store = CycleStateStore(kv, clock=FakeClock())
        store.load(PLAN, START)
        store.reset()
        assert CYCLE_STATE_KEY not in kv
        assert store.read_stored() is None


# ===========================================================================
# Stores and serialization
# ===========================================================================


class TestStores:
    def test_json_file_store(self, tmp_path):
        store = JsonFileStore(tmp_path / "data")
        assert store.get("thing") is None
        store.set("thing", {"a": [1, 2]})
        assert (tmp_path / "data" / "thing.json").exists()
        assert store.get("thing") == {"a": [1, 2]}
        store.delete("thing")
        store.delete("thing")
        assert store.get("thing") is None

    def test_json_file_store_rejects_path_keys(self, tmp_path):
        with pytest.raises(ValueError):
            JsonFileStore(tmp_path).set("../escape", 1)

    def test_history_sorted_by_date(self):
        history = SessionHistoryStore(MemoryStore())
        history.append(_session("2024-03-05"))
        history.append(_session("2024-03-01"))
        assert [s.date for s in history.load_all()] == ["2024-03-01", "2024-03-05"]

    def test_corrupt_history_entry_skipped(self, caplog):
        kv = MemoryStore(
            {
                HISTORY_KEY: [
                    session_record_to_dict(_session("2024-03-01")),
                    {"date": "March first"},
                    "garbage",
                ]
            }
        )
        with caplog.at_level(logging.WARNING):
            sessions = SessionHistoryStore(kv).load_all()
        assert [s.date for s in sessions] == ["2024-03-01"]
        assert "Skipping corrupt session entry 1" in caplog.text

    def test_non_list_history_is_not_overwritten(self):
        kv = MemoryStore({HISTORY_KEY: {"oops": True}})
        history = SessionHistoryStore(kv)
        assert history.load_all() == []
        with pytest.raises(ValidationError):
            history.append(_session("2024-03-01"))
        assert kv.get(HISTORY_KEY) == {"oops": True}

    def test_session_round_trip_keeps_derived_totals(self):
        session = _session("2024-03-01")
        session.exercises[0].sets[2].completed = False
        restored = dict_to_session_record(session_record_to_dict(session))
        assert restored == session
        assert restored.total_completed_sets == 2

    @pytest.mark.parametrize(
        "data",
        [
            {"weekly_plan": "push"},
            {"weekly_plan": PLAN, "last_workout_date": "yesterday"},
            {"weekly_plan": PLAN, "current_week_number": 0},
            {"weekly_plan": PLAN, "total_workouts_completed": "many"},
        ],
    )
    def test_invalid_cycle_state_rejected(self, data):
        with pytest.raises(ValidationError):
            dict_to_cycle_state(data)

    def test_session_with_bad_rating_rejected(self):
        data = session_record_to_dict(_session("2024-03-01"))
        data["feedback"]["overall_rating"] = 9
        with pytest.raises(ValidationError):
            dict_to_session_record(data)


# ===========================================================================
# Config loading
# ===========================================================================


class TestConfigLoading:
    def test_data_home_resolution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKOUT_CYCLE_HOME", str(tmp_path / "env"))
        assert get_data_home() == tmp_path / "env"
        assert get_data_home(tmp_path / "explicit") == tmp_path / "explicit"

    def test_missing_config_gives_defaults(self, tmp_path):
        assert load_engine_settings(tmp_path) == EngineSettings()

    def test_engine_section_overrides(self, tmp_path):
        _write(tmp_path / "config.yaml", "engine:\n  analysis_window: 4\n  low_rating: 2.5\n")
        settings = load_engine_settings(tmp_path)
        assert settings.analysis_window == 4
        assert settings.low_rating == 2.5
        assert settings.cache_ttl_seconds == 5.0

    def test_unparseable_config_warns(self, tmp_path):
        _write(tmp_path / "config.yaml", "engine: [unclosed\n")
        with pytest.warns(UserWarning):
            settings = load_engine_settings(tmp_path)
        assert settings == EngineSettings()

    def test_invalid_values_warn(self, tmp_path):
        _write(tmp_path / "config.yaml", "engine:\n  analysis_window: 0\n")
        with pytest.warns(UserWarning, match="invalid engine settings"):
            settings = load_engine_settings(tmp_path)
        assert settings.analysis_window == 8

    def test_deep_merge_is_non_destructive(self):
        base = {"engine": {"a": 1, "b": 2}}
        merged = deep_merge(base, {"engine": {"b": 3}})
        assert merged == {"engine": {"a": 1, "b": 3}}
        assert base == {"engine": {"a": 1, "b": 2}}


# ===========================================================================
# WorkoutCoach
# ===========================================================================


class TestWorkoutCoach:
    def test_schedule_is_remembered(self, coach):
        days = coach.generate_weekly_schedule(_profile())
        assert coach.saved_weekly_plan() == [d.focus for d in days]

    def test_saved_schedule_and_profile(self, coach):
        profile = _profile("intermediate", ["dumbbells"], days=2, minutes=30)
        days = coach.generate_weekly_schedule(profile)
        assert coach.saved_schedule() == days
        assert coach.saved_profile() == profile

    def test_nothing_saved(self, coach):
        assert coach.saved_schedule() == []
        assert coach.saved_weekly_plan() == []
        assert coach.saved_profile() is None

    def test_corrupt_saved_schedule_ignored(self, coach):
        coach.kv.set("weekly_schedule", [{"focus": "upper"}])
        assert coach.saved_weekly_plan() == []

    def test_full_plan_is_remembered(self, coach):
        plan = coach.generate_workout_plan(_profile("intermediate"))
        assert coach.saved_weekly_plan() == ["upper", "lower", "push", "pull"]
        assert plan.days_per_week == 4

    def test_recommendation_is_idempotent(self, coach):
        first = coach.get_next_workout_recommendation(PLAN)
        second = coach.get_next_workout_recommendation(PLAN)
        assert first == second
        assert first.workout_index == 0
        assert first.reason == "First workout of the program"

    def test_empty_plan_rejected(self, coach):
        with pytest.raises(ValueError):
            coach.get_next_workout_recommendation([])

    def test_follow_the_plan_for_a_week(self, coach):
        for expected in (0, 1, 2, 0):
            rec = coach.get_next_workout_recommendation(PLAN)
            assert rec.workout_index == expected
            coach.record_workout_completed(rec.workout_index, rec.workout_name, PLAN)
            coach.today.advance(2)

        stats = coach.get_cycle_statistics()
        assert stats.total_workouts == 4
        assert stats.current_week == 2    # 4 // 3 + 1
        assert stats.days_in_program == 8

    def test_completion_visible_immediately(self, coach):
        coach.get_next_workout_recommendation(PLAN)
        coach.record_workout_completed(0, "push", PLAN)
        rec = coach.get_next_workout_recommendation(PLAN)
        assert rec.suggested_intensity == "light"
        assert rec.workout_index == 0

    def test_long_break_restarts_week(self, coach):
        coach.record_workout_completed(1, "pull", PLAN)
        coach.today.advance(6)
        rec = coach.get_next_workout_recommendation(PLAN)
        assert rec.workout_index == 0
        assert rec.is_regular_progression is False
        assert rec.days_since_last_workout == 6

    def test_record_uses_saved_schedule(self, coach):
        days = coach.generate_weekly_schedule(_profile())
        coach.record_workout_completed(1, days[1].focus)
        stats = coach.get_cycle_statistics()
        assert stats.total_workouts == 1

    def test_record_without_plan_rejected(self, coach):
        with pytest.raises(ValueError):
            coach.record_workout_completed(0, "push")

    def test_record_out_of_range_rejected(self, coach):
        with pytest.raises(ValueError):
            coach.record_workout_completed(5, "push", PLAN)

    def test_name_mismatch_warns(self, coach, caplog):
        with caplog.at_level(logging.WARNING, logger="workout_cycle.service"):
            coach.record_workout_completed(0, "legs", PLAN)
        assert "does not match" in caplog.text
        assert coach.get_cycle_statistics().total_workouts == 1

    def test_reset_starts_over(self, coach):
        coach.record_workout_completed(2, "legs", PLAN)
        coach.reset_cycle()
        assert coach.get_cycle_statistics() is None
        rec = coach.get_next_workout_recommendation(PLAN)
        assert rec.workout_index == 0
        assert rec.reason == "First workout of the program"

    def test_statistics_before_any_cycle(self, coach):
        assert coach.get_cycle_statistics() is None

    def test_log_and_analyze(self, coach):
        for i in range(3):
            coach.log_session(_session((START + timedelta(days=2 * i)).isoformat()))
        analysis = coach.analyze_recent_performance()
        assert analysis.confidence == pytest.approx(3 / 20)
        assert analysis.key_metrics.consistency_score == pytest.approx(1.0)

    def test_analysis_of_short_history(self, coach):
        coach.log_session(_session("2024-03-01"))
        analysis = coach.analyze_recent_performance()
        assert analysis.confidence == pytest.approx(0.3)
        assert analysis.recommendations == []

    def test_state_survives_new_coach(self, tmp_path):
        today = FakeToday()
        first = WorkoutCoach.from_home(tmp_path)
        first.today = today
        first.record_workout_completed(0, "push", PLAN)

        second = WorkoutCoach.from_home(tmp_path)
        second.today = today
        stats = second.get_cycle_statistics()
        assert stats is not None
        assert stats.total_workouts == 1
        assert (tmp_path / "data" / f"{CYCLE_STATE_KEY}.json").exists()

"""
Training metrics over logged sessions.

Pure functions computing per-session and per-window aggregates used by the
performance analysis: volume, intensity (RPE), duration, completion rate,
rating, spacing consistency, streaks and personal records.
"""

from __future__ import annotations

import statistics
from collections.abc import Iterable, Sequence
from datetime import date

from .config import STREAK_MAX_GAP_DAYS
from .cycle import parse_date
from .models import PersonalRecord, SessionRecord, WindowMetrics


def session_volume(session: SessionRecord) -> float:
    """
    Training volume of one session.

    Sum of reps x max(weight, 1) over completed sets, so bodyweight sets
    count their reps.
    """
    return sum(
        s.reps * max(s.weight_kg, 1.0)
        for ex in session.exercises
        for s in ex.sets
        if s.completed
    )


def session_intensity(session: SessionRecord) -> float:
    """
    Mean perceived exertion of one session.

    Mean over exercises of the mean RPE of their sets; exercises without
    logged sets are ignored.  0.0 if nothing was logged.
    """
    per_exercise = [
        statistics.fmean(s.perceived_exertion for s in ex.sets)
        for ex in session.exercises
        if ex.sets
    ]
    if not per_exercise:
        return 0.0
    return statistics.fmean(per_exercise)


def window_metrics(sessions: Sequence[SessionRecord]) -> WindowMetrics:
    """
    Aggregate metrics over one window of sessions.

    Args:
        sessions: Sessions in the window (any order)

    Returns:
        WindowMetrics; all zeros for an empty window.  Completion rate is
        completed / planned sets, 1.0 when nothing was planned.  Intensity
        averages only sessions with logged sets.
    """
    if not sessions:
        return WindowMetrics()

    planned = sum(s.total_planned_sets for s in sessions)
    completed = sum(s.total_completed_sets for s in sessions)
    with_sets = [s for s in sessions if any(ex.sets for ex in s.exercises)]

    return WindowMetrics(
        average_volume=statistics.fmean(session_volume(s) for s in sessions),
        average_intensity=(
            statistics.fmean(session_intensity(s) for s in with_sets) if with_sets else 0.0
        ),
        average_duration=statistics.fmean(s.duration_minutes for s in sessions),
        completion_rate=completed / planned if planned > 0 else 1.0,
        average_rating=statistics.fmean(s.feedback.overall_rating for s in sessions),
        session_count=len(sessions),
    )


def percentage_change(old: float, new: float) -> float:
    """
    Relative change from old to new, in percent.

    If old is 0 the change is 100 when new is positive, else 0.
    """
    if old == 0:
        return 100.0 if new > 0 else 0.0
    return (new - old) / old * 100.0


def _parsed_dates(dates: Iterable[str | date]) -> list[date]:
    result = []
    for d in dates:
        parsed = d if isinstance(d, date) else parse_date(d)
        if parsed is not None:
            result.append(parsed)
    return sorted(result)


def consistency_score(dates: Iterable[str | date]) -> float:
    """
    How evenly sessions are spaced, in [0, 1].

    1 - (population stddev of the gaps / mean gap), floored at 0.  With at
    most one gap, or when all sessions fall on the same day, spacing is
    perfectly even and the score is 1.
    """
    ordered = _parsed_dates(dates)
    gaps = [(b - a).days for a, b in zip(ordered, ordered[1:])]
    if len(gaps) <= 1:
        return 1.0
    mean_gap = statistics.fmean(gaps)
    if mean_gap == 0:
        return 1.0
    return max(0.0, 1.0 - statistics.pstdev(gaps) / mean_gap)


def current_streak(dates: Iterable[str | date], today: date) -> int:
    """
    Number of consecutive sessions ending with the most recent one.

    Sessions belong to the streak while they are at most three days apart.
    The streak is 0 if the latest session was more than three days ago.
    """
    ordered = _parsed_dates(dates)
    if not ordered:
        return 0
    if (today - ordered[-1]).days > STREAK_MAX_GAP_DAYS:
        return 0

    streak = 1
    for newer, older in zip(reversed(ordered), reversed(ordered[:-1])):
        if (newer - older).days > STREAK_MAX_GAP_DAYS:
            break
        streak += 1
    return streak


def personal_records(history: Iterable[SessionRecord]) -> list[PersonalRecord]:
    """
    Best completed-set weight and reps per exercise.

    Weight records are reported only for exercises logged with load.

    Returns:
        Records sorted by exercise name, weight before reps
    """
    best_weight: dict[str, float] = {}
    best_reps: dict[str, int] = {}
    for session in history:
        for ex in session.exercises:
            for s in ex.sets:
                if not s.completed:
                    continue
                best_weight[ex.name] = max(best_weight.get(ex.name, 0.0), s.weight_kg)
                best_reps[ex.name] = max(best_reps.get(ex.name, 0), s.reps)

    records: list[PersonalRecord] = []
    for name in sorted(best_reps):
        if best_weight.get(name, 0.0) > 0:
            records.append(PersonalRecord(exercise=name, kind="weight", value=best_weight[name]))
        records.append(PersonalRecord(exercise=name, kind="reps", value=float(best_reps[name])))
    return records

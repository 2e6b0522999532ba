"""Analysis commands: analyze."""

import json

from ...core.analysis import next_workout_adjustments
from ...core.metrics import current_streak, personal_records
from ...io.serializers import performance_analysis_to_dict, personal_record_to_dict
from .. import views
from ..app import HomeOption, JsonOption, app, get_coach


@app.command()
def analyze(
    home: HomeOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Analyze recent sessions: trend, recommendations, streak and records.
    """
    coach = get_coach(home)
    sessions = coach.history.load_all()
    analysis = coach.analyze_recent_performance(sessions)
    adjustments = next_workout_adjustments(analysis)
    streak = current_streak((s.date for s in sessions), coach.today())
    records = personal_records(sessions)

    if json_out:
        out = performance_analysis_to_dict(analysis)
        out["adjustments"] = adjustments
        out["current_streak"] = streak
        out["personal_records"] = [personal_record_to_dict(pr) for pr in records]
        out["session_count"] = len(sessions)
        print(json.dumps(out, indent=2))
        return

    if len(sessions) < 3:
        views.print_warning(
            f"Only {len(sessions)} sessions logged; analysis needs at least 3 to be meaningful."
        )
    views.print_analysis(analysis, adjustments, streak, records)
    views.console.print()

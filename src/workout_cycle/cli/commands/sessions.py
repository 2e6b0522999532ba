"""Session commands: log-session, history."""

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.models import SessionFeedback, SessionRecord
from ...io.serializers import (
    ValidationError,
    dict_to_session_record,
    parse_exercise_spec,
    session_record_to_dict,
)
from .. import views
from ..app import HomeOption, JsonOption, app, get_coach


def _load_session_file(path: Path) -> SessionRecord:
    """Read one session from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Cannot read {path}: {e}") from e
    return dict_to_session_record(data)


@app.command("log-session")
def log_session(
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Session JSON file (overrides inline options)"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date YYYY-MM-DD (default: today)"),
    ] = None,
    duration: Annotated[
        float,
        typer.Option("--duration", "-t", help="Session length in minutes"),
    ] = 45.0,
    exercise: Annotated[
        Optional[list[str]],
        typer.Option(
            "--exercise",
            "-x",
            help="NAME=SETS (repeatable), e.g. 'Push-up=3x10/7' or 'Squat=8@60/7,6@60/9x'",
        ),
    ] = None,
    rating: Annotated[
        int,
        typer.Option("--rating", "-r", help="Overall rating 1-5"),
    ] = 3,
    verdict: Annotated[
        str,
        typer.Option("--verdict", help="too_easy, perfect or too_hard"),
    ] = "perfect",
    energy: Annotated[
        int,
        typer.Option("--energy", help="Energy before the session, 1-10"),
    ] = 5,
    fatigue: Annotated[
        int,
        typer.Option("--fatigue", help="Fatigue after the session, 1-10"),
    ] = 5,
    notes: Annotated[
        str,
        typer.Option("--notes", help="Free-form notes"),
    ] = "",
    home: HomeOption = None,
) -> None:
    """
    Log a completed session to the history.
    """
    try:
        if file is not None:
            session = _load_session_file(file)
        else:
            if not exercise:
                views.print_error("Pass --file or at least one --exercise NAME=SETS")
                raise typer.Exit(1)
            session = SessionRecord(
                date=date or datetime.now().strftime("%Y-%m-%d"),
                duration_minutes=duration,
                exercises=[parse_exercise_spec(spec) for spec in exercise],
                feedback=SessionFeedback(
                    overall_rating=rating,
                    difficulty=verdict,
                    energy_level=energy,
                    fatigue_level=fatigue,
                    notes=notes,
                ),
            )
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    coach = get_coach(home)
    try:
        coach.log_session(session)
    except (ValidationError, OSError, ValueError) as e:
        views.print_error(f"Could not save session: {e}")
        raise typer.Exit(1)

    views.print_success(
        f"Logged session on {session.date}: {len(session.exercises)} exercises, "
        f"{session.total_completed_sets}/{session.total_planned_sets} sets completed."
    )


@app.command()
def history(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", help="Show only the last N sessions"),
    ] = None,
    home: HomeOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show logged sessions.
    """
    sessions = get_coach(home).history.load_all()
    if limit is not None:
        sessions = sessions[-limit:] if limit > 0 else []

    if json_out:
        print(json.dumps([session_record_to_dict(s) for s in sessions], indent=2))
        return

    views.print_history(sessions)

"""Schedule commands: schedule, show."""

import json
from typing import Annotated, Optional

import typer

from ...core.equipment import resolve_equipment
from ...core.models import EXPERIENCE_LEVELS, UserProfile
from ...io.serializers import (
    schedule_day_to_dict,
    user_profile_to_dict,
    workout_plan_to_dict,
)
from .. import views
from ..app import HomeOption, JsonOption, app, get_coach


@app.command()
def schedule(
    goal: Annotated[
        str,
        typer.Option(
            "--goal",
            "-g",
            help="muscle_building, strength, endurance, weight_loss, general_fitness",
        ),
    ] = "general_fitness",
    level: Annotated[
        str,
        typer.Option("--level", "-l", help="beginner, intermediate or advanced"),
    ] = "beginner",
    equipment: Annotated[
        Optional[list[str]],
        typer.Option(
            "--equipment",
            "-e",
            help="Owned equipment (repeatable), e.g. dumbbells, pullup_bar, free_weights",
        ),
    ] = None,
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-d", help="Training days per week (default by level)"),
    ] = None,
    minutes: Annotated[
        int,
        typer.Option("--minutes", "-m", help="Session length in minutes"),
    ] = 45,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible exercise choice"),
    ] = None,
    full: Annotated[
        bool,
        typer.Option("--full", "-f", help="Include plan metadata (duration, calories)"),
    ] = False,
    home: HomeOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Generate a weekly workout schedule and save it as the current plan.
    """
    if level not in EXPERIENCE_LEVELS:
        views.print_error(f"Unknown level '{level}'. Use one of: {', '.join(EXPERIENCE_LEVELS)}")
        raise typer.Exit(1)

    try:
        profile = UserProfile(
            goal=goal,
            experience_level=level,
            equipment=resolve_equipment(equipment or []),
            available_days_per_week=days,
            session_duration_minutes=minutes,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    coach = get_coach(home, seed)

    if full:
        plan = coach.generate_workout_plan(profile)
        if json_out:
            print(json.dumps(workout_plan_to_dict(plan), indent=2))
            return
        views.print_plan_header(plan)
        views.print_schedule(plan.weekly_schedule)
        return

    week = coach.generate_weekly_schedule(profile)
    if json_out:
        print(json.dumps([schedule_day_to_dict(d) for d in week], indent=2))
        return

    views.print_schedule(week)
    views.console.print()
    views.print_success(
        f"Saved {len(week)}-day plan: {', '.join(d.focus for d in week)}"
    )


@app.command()
def show(
    home: HomeOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the saved weekly schedule and the profile it was built for.
    """
    coach = get_coach(home)
    week = coach.saved_schedule()
    if not week:
        views.print_info("No saved schedule. Run 'schedule' first.")
        raise typer.Exit(1)
    profile = coach.saved_profile()

    if json_out:
        out = {
            "profile": user_profile_to_dict(profile) if profile is not None else None,
            "weekly_schedule": [schedule_day_to_dict(d) for d in week],
        }
        print(json.dumps(out, indent=2))
        return

    if profile is not None:
        views.print_profile(profile)
    views.print_schedule(week)

"""Cycle commands: next, complete, reset, stats."""

import json
from typing import Annotated, Optional

import typer

from ...io.serializers import cycle_statistics_to_dict, next_workout_to_dict
from .. import views
from ..app import HomeOption, JsonOption, app, get_coach

PlanOption = Annotated[
    Optional[str],
    typer.Option(
        "--plan",
        "-p",
        help="Comma-separated focus names, e.g. push,pull,legs (default: saved schedule)",
    ),
]


def _resolve_plan(plan: str | None, saved: list[str]) -> list[str]:
    """Weekly plan from --plan, else the saved schedule; exits if neither exists."""
    if plan is not None:
        names = [p.strip() for p in plan.split(",") if p.strip()]
    else:
        names = saved
    if not names:
        views.print_error("No weekly plan. Run 'schedule' first or pass --plan.")
        raise typer.Exit(1)
    return names


@app.command("next")
def next_workout(
    plan: PlanOption = None,
    home: HomeOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show which workout of the weekly plan to do next.
    """
    coach = get_coach(home)
    weekly_plan = _resolve_plan(plan, coach.saved_weekly_plan())
    rec = coach.get_next_workout_recommendation(weekly_plan)

    if json_out:
        print(json.dumps(next_workout_to_dict(rec), indent=2))
        return

    views.print_next_workout(rec)


@app.command()
def complete(
    index: Annotated[int, typer.Argument(help="Day index in the weekly plan (0-based)")],
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Workout name (default: plan day name)"),
    ] = None,
    plan: PlanOption = None,
    home: HomeOption = None,
) -> None:
    """
    Record that a workout of the weekly plan was done today.
    """
    coach = get_coach(home)
    weekly_plan = _resolve_plan(plan, coach.saved_weekly_plan())
    if not 0 <= index < len(weekly_plan):
        views.print_error(f"Index {index} outside plan of {len(weekly_plan)} days")
        raise typer.Exit(1)

    workout_name = name or weekly_plan[index]
    try:
        coach.record_workout_completed(index, workout_name, weekly_plan)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Recorded '{workout_name}' (day {index}).")
    stats = coach.get_cycle_statistics()
    if stats is not None:
        views.console.print(views.format_cycle_stats(stats))


@app.command()
def reset(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt"),
    ] = False,
    home: HomeOption = None,
) -> None:
    """
    Reset the workout cycle; the next workout starts from day 0.
    """
    if not yes and not views.confirm_action("Reset the workout cycle?"):
        views.print_info("Cancelled.")
        return
    get_coach(home).reset_cycle()
    views.print_success("Workout cycle reset.")


@app.command()
def stats(
    home: HomeOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show progress through the current cycle.
    """
    coach = get_coach(home)
    cycle_stats = coach.get_cycle_statistics()
    if cycle_stats is None:
        views.print_info("No workout cycle started yet. Run 'next' or 'complete' first.")
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(cycle_statistics_to_dict(cycle_stats), indent=2))
        return

    views.console.print()
    views.console.print(views.format_cycle_stats(cycle_stats))
    views.console.print()

"""Shared Typer app object, shared option types, and coach factory."""

import logging
import os
import random
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..service import WorkoutCoach
from . import views

LOG_LEVEL_ENV_VAR = "WORKOUT_CYCLE_LOG_LEVEL"

# Shared --home option type used across all commands
HomeOption = Annotated[
    Optional[Path],
    typer.Option(
        "--home",
        "-H",
        help="Data directory (default: $WORKOUT_CYCLE_HOME or ~/.workout-cycle)",
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="workout-cycle",
    help="Weekly workout schedules, next-session cycling and performance trends.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """
    Workout planner: build a weekly schedule, follow it day by day, and
    track how training is going.
    """
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def get_coach(home: Path | None, seed: int | None = None) -> WorkoutCoach:
    """Build a WorkoutCoach for ``home``; exits with an error if the catalog is unusable."""
    rng = random.Random(seed) if seed is not None else None
    try:
        return WorkoutCoach.from_home(home, rng=rng)
    except RuntimeError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

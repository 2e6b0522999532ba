"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of schedules, cycle progress,
session history and performance analysis.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.metrics import session_volume
from ..core.models import (
    CycleStatistics,
    NextWorkoutRecommendation,
    PerformanceAnalysis,
    PersonalRecord,
    SessionRecord,
    UserProfile,
    WeeklyScheduleDay,
    WorkoutPlan,
)

console = Console()

_TREND_STYLE = {
    "improving": "green",
    "plateauing": "yellow",
    "declining": "red",
}

_PRIORITY_STYLE = {
    "high": "bold red",
    "medium": "yellow",
    "low": "dim",
}


def format_day_table(day: WeeklyScheduleDay) -> Table:
    """
    Create a Rich table for one training day.

    Args:
        day: Schedule day to display

    Returns:
        Rich Table object
    """
    table = Table(title=f"{day.day_name}: {day.focus} (~{day.estimated_duration_minutes} min)")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right", style="bold")
    table.add_column("Rest(s)", justify="right")
    table.add_column("Muscles", style="green")
    table.add_column("Equipment", style="magenta")

    for i, ex in enumerate(day.exercises, 1):
        table.add_row(
            str(i),
            ex.name,
            str(ex.sets),
            ex.reps,
            str(ex.rest_seconds),
            ", ".join(ex.target_muscles),
            ex.equipment,
        )

    return table


def print_schedule(days: list[WeeklyScheduleDay]) -> None:
    """Print every day of a weekly schedule."""
    for day in days:
        console.print()
        console.print(format_day_table(day))
        if day.notes:
            console.print(f"  [dim]{day.notes}[/dim]")
        if not day.exercises:
            console.print("  [yellow]No exercises available for this focus.[/yellow]")


def print_profile(profile: UserProfile) -> None:
    """Print the profile a schedule was built for."""
    days = profile.available_days_per_week
    console.print()
    console.print(
        f"Profile: [cyan]{profile.goal}[/cyan], {profile.experience_level}, "
        f"{days if days is not None else 'default'} days/week, "
        f"{profile.session_duration_minutes} min"
    )
    console.print(f"- Equipment: {', '.join(sorted(profile.equipment))}")


def print_plan_header(plan: WorkoutPlan) -> None:
    """Print plan metadata above the schedule."""
    console.print()
    console.print(f"[bold cyan]{plan.name}[/bold cyan]")
    console.print(plan.description)
    console.print(
        f"- Duration: {plan.duration_weeks} weeks, {plan.days_per_week} days/week, "
        f"{plan.session_minutes} min/session"
    )
    console.print(f"- Estimated weekly calories: {plan.estimated_weekly_calories} kcal")
    console.print(f"- Equipment: {', '.join(plan.equipment_required) or 'none'}")
    if plan.progression_notes:
        console.print("- Progression:")
        for note in plan.progression_notes:
            console.print(f"    {note}")


def print_next_workout(rec: NextWorkoutRecommendation) -> None:
    """Print the next-workout recommendation."""
    style = "green" if rec.suggested_intensity == "normal" else "yellow"
    console.print()
    console.print(
        f"Next workout: [bold cyan]{rec.workout_name}[/bold cyan] (day index {rec.workout_index})"
    )
    console.print(f"- Reason: {rec.reason}")
    console.print(f"- Days since last workout: {rec.days_since_last_workout}")
    console.print(f"- Intensity: [{style}]{rec.suggested_intensity}[/{style}]")
    if not rec.is_regular_progression:
        console.print("- [dim]Off the regular rotation[/dim]")


def format_cycle_stats(stats: CycleStatistics) -> str:
    """
    Format cycle statistics as a text block.

    Args:
        stats: CycleStatistics to display

    Returns:
        Formatted string
    """
    return "\n".join(
        [
            "Cycle progress",
            f"- Week: {stats.current_week}",
            f"- Workouts completed: {stats.total_workouts}",
            f"- Days in program: {stats.days_in_program}",
            f"- Consistency: {stats.consistency_pct}%",
        ]
    )


def format_session_table(sessions: list[SessionRecord]) -> Table:
    """
    Create a Rich table displaying session history.

    Args:
        sessions: List of sessions to display

    Returns:
        Rich Table object
    """
    table = Table(title="Session History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Min", justify="right")
    table.add_column("Exercises", justify="right")
    table.add_column("Sets done", justify="right")
    table.add_column("Volume", justify="right", style="bold")
    table.add_column("Rating", justify="right")
    table.add_column("Verdict", style="magenta")

    for i, session in enumerate(sessions, 1):
        table.add_row(
            str(i),
            session.date,
            f"{session.duration_minutes:.0f}",
            str(len(session.exercises)),
            f"{session.total_completed_sets}/{session.total_planned_sets}",
            f"{session_volume(session):.0f}",
            str(session.feedback.overall_rating),
            session.feedback.difficulty,
        )

    return table


def print_history(sessions: list[SessionRecord]) -> None:
    """
    Print session history to console.

    Args:
        sessions: Sessions to display
    """
    if not sessions:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return

    console.print(format_session_table(sessions))


def print_analysis(
    analysis: PerformanceAnalysis,
    adjustments: dict[str, str],
    streak: int,
    records: list[PersonalRecord],
) -> None:
    """Print a performance analysis with streak and personal records."""
    km = analysis.key_metrics
    style = _TREND_STYLE.get(analysis.trend, "white")

    console.print()
    console.print(
        f"Trend: [{style}]{analysis.trend}[/{style}]"
        f"  (confidence {analysis.confidence:.0%})"
    )
    console.print(f"- Volume change:    {km.volume_change_pct:+.1f}%")
    console.print(f"- Intensity change: {km.intensity_change_pct:+.1f}%")
    console.print(f"- Duration change:  {km.endurance_change_pct:+.1f}%")
    console.print(f"- Consistency:      {km.consistency_score:.2f}")
    console.print(f"- Current streak:   {streak}")

    if analysis.recommendations:
        table = Table(title="Recommendations")
        table.add_column("Type", style="cyan")
        table.add_column("Current", justify="right")
        table.add_column("Recommended", justify="right")
        table.add_column("Next session", style="bold")
        table.add_column("Priority")
        table.add_column("Reason")
        for rec in analysis.recommendations:
            pstyle = _PRIORITY_STYLE.get(rec.priority, "white")
            table.add_row(
                rec.type,
                f"{rec.current_value:.1f}",
                f"{rec.recommended_value:.1f}",
                adjustments.get(rec.type, "-"),
                f"[{pstyle}]{rec.priority}[/{pstyle}]",
                rec.reason,
            )
        console.print()
        console.print(table)
    else:
        console.print("[dim]No recommendations.[/dim]")

    if records:
        table = Table(title="Personal Records")
        table.add_column("Exercise", style="cyan")
        table.add_column("Kind")
        table.add_column("Best", justify="right", style="bold")
        for pr in records:
            value = f"{pr.value:.1f} kg" if pr.kind == "weight" else f"{pr.value:.0f} reps"
            table.add_row(escape(pr.exercise), pr.kind, value)
        console.print()
        console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{escape(message)} \\[y/N]: ")
    return response.lower() in ("y", "yes")

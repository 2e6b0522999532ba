"""
CLI entry point using Typer.

Provides commands for weekly workout management:
- schedule: Generate a weekly schedule (optionally with plan metadata)
- show: Show the saved schedule
- next: Show the next workout of the weekly plan
- complete: Record a completed workout
- reset: Reset the workout cycle
- stats: Show cycle progress
- log-session: Log a completed session
- history: Show logged sessions
- analyze: Trend analysis and recommendations
"""

from .app import app
from .commands import analysis, cycle, schedule, sessions  # noqa: F401  (registers commands)

if __name__ == "__main__":
    app()

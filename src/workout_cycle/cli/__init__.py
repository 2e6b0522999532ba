"""Command-line interface for workout-cycle."""

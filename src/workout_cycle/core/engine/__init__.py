"""Configuration loading for the workout-cycle engine."""

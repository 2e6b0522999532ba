"""Serialization and storage for workout-cycle."""

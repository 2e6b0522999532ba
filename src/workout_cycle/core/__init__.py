"""Pure scheduling, cycling and analysis engine."""

"""
workout-cycle: weekly workout scheduling, next-session cycling and
performance trend analysis.
"""

__version__ = "0.3.0"

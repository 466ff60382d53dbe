"""Performance timing utilities for the analyzer."""

from .timing import PerformanceTimer, timed

__all__ = [
    "PerformanceTimer",
    "timed",
]

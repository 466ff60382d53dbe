"""Accumulators used while analyzing a stylesheet."""

from .counters import ContextCounter, FrequencyCounter, NumericAggregator, ratio

__all__ = [
    "ContextCounter",
    "FrequencyCounter",
    "NumericAggregator",
    "ratio",
]

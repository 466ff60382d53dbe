"""Reusable accumulators for stylesheet metrics.

This module provides three containers fed during a single tree walk:
- FrequencyCounter: occurrences per key, first-seen order preserved
- NumericAggregator: numeric samples with summary statistics
- ContextCounter: occurrences per key, broken down by a secondary key
"""

from collections.abc import Hashable, Iterable
from typing import Any


def ratio(part: float, total: float) -> float:
    """Return ``part / total``, or 0 when ``total`` is 0."""
    if total == 0:
        return 0
    return part / total


class FrequencyCounter:
    """Counts occurrences of keys.

    Dicts keep insertion order, so ``unique`` lists keys in the order they
    were first pushed.
    """

    def __init__(self, initial: Iterable[Hashable] | None = None):
        self._items: dict[Hashable, int] = {}
        self._total = 0
        if initial is not None:
            for item in initial:
                self.push(item)

    def push(self, item: Hashable) -> None:
        self._total += 1
        self._items[item] = self._items.get(item, 0) + 1

    def size(self) -> int:
        """Total number of pushes."""
        return self._total

    def count(self) -> dict[str, Any]:
        """Summarize the counter.

        Returns:
            Dict with ``total``, ``total_unique``, ``unique`` (key -> count)
            and ``uniqueness_ratio``.
        """
        return {
            "total": self._total,
            "total_unique": len(self._items),
            "unique": dict(self._items),
            "uniqueness_ratio": ratio(len(self._items), self._total),
        }


class NumericAggregator:
    """Collects numeric samples and reports summary statistics.

    Samples are retained in push order; every statistic is computed from
    them when ``aggregate()`` is called.
    """

    def __init__(self) -> None:
        self._items: list[float] = []
        self._sum: float = 0

    def push(self, value: float) -> None:
        self._items.append(value)
        self._sum += value

    def size(self) -> int:
        return len(self._items)

    def to_list(self) -> list[float]:
        """Raw samples in push order."""
        return list(self._items)

    def aggregate(self) -> dict[str, Any]:
        """Compute count, sum, mean, min, max, median, mode and range.

        All values are 0 when no sample was pushed.
        """
        count = len(self._items)
        if count == 0:
            return {
                "count": 0,
                "sum": 0,
                "mean": 0,
                "min": 0,
                "max": 0,
                "median": 0,
                "mode": 0,
                "range": 0,
            }

        ordered = sorted(self._items)
        minimum, maximum = ordered[0], ordered[-1]
        return {
            "count": count,
            "sum": self._sum,
            "mean": self._sum / count,
            "min": minimum,
            "max": maximum,
            "median": _median(ordered),
            "mode": _mode(self._items),
            "range": maximum - minimum,
        }


def _median(ordered: list[float]) -> float:
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def _mode(items: list[float]) -> float:
    """Most frequent value; ties go to the value seen first."""
    frequencies: dict[float, int] = {}
    for item in items:
        frequencies[item] = frequencies.get(item, 0) + 1
    highest = max(frequencies.values())
    return next(item for item, seen in frequencies.items() if seen == highest)


class ContextCounter:
    """Counts keys together with the context they appeared in.

    Used for pairs like (color literal, property name) or (unit, property).
    """

    def __init__(self) -> None:
        self._list = FrequencyCounter()
        self._items: dict[Hashable, dict[Hashable, int]] = {}
        self._contexts: dict[Hashable, FrequencyCounter] = {}

    def push(self, item: Hashable, context: Hashable) -> None:
        self._list.push(item)
        per_item = self._items.setdefault(item, {})
        per_item[context] = per_item.get(context, 0) + 1
        self._contexts.setdefault(context, FrequencyCounter()).push(item)

    def size(self) -> int:
        return self._list.size()

    def count(self) -> dict[str, Any]:
        """Summarize the counter.

        Returns:
            The FrequencyCounter summary of all keys, plus ``breakdown``
            (key -> {total, contexts: {context: count}}) and
            ``items_per_context`` (context -> FrequencyCounter summary).
        """
        summary = self._list.count()
        summary["breakdown"] = {
            item: {"total": sum(per_context.values()), "contexts": dict(per_context)}
            for item, per_context in self._items.items()
        }
        summary["items_per_context"] = {
            context: counter.count() for context, counter in self._contexts.items()
        }
        return summary

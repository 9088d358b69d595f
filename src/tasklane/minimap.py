"""Minimap data: how many tasks are active in each period of the global range."""

from __future__ import annotations

import bisect
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .dates import add_time, unit_end, unit_start
from .models import Task, TimeUnit


@dataclass(frozen=True)
class MinimapEntry:
    """Task count for one period."""

    period_start: date
    period_end: date
    count: int


def generate_periods(min_date: date, max_date: date, unit: TimeUnit) -> list[date]:
    """Start dates of every period from min_date's bucket to max_date's bucket."""
    periods: list[date] = []
    current = unit_start(min_date, unit)
    last = unit_start(max_date, unit)
    while current <= last:
        periods.append(current)
        current = add_time(current, 1, unit)
    return periods


def generate_minimap_data(
    tasks: Sequence[Task], unit: TimeUnit, min_date: date, max_date: date
) -> list[MinimapEntry]:
    """Count the tasks overlapping each period.

    Uses a difference array over the periods with binary search for each
    task's first and last period, so the cost is O(T log P + P).
    """
    if min_date > max_date:
        return []

    period_starts = generate_periods(min_date, max_date, unit)
    if not period_starts:
        return []
    period_ends = [unit_end(start, unit) for start in period_starts]

    diff = [0] * (len(period_starts) + 1)
    for task in tasks:
        task_start = task.start
        task_end = task.effective_end
        if task_end < min_date or task_start > max_date:
            continue

        # First period ending on/after the task start, last period starting on/before its end
        first = bisect.bisect_left(period_ends, task_start)
        last = bisect.bisect_right(period_starts, task_end) - 1
        if first <= last:
            diff[first] += 1
            diff[last + 1] -= 1

    entries: list[MinimapEntry] = []
    running = 0
    for i, start in enumerate(period_starts):
        running += diff[i]
        entries.append(MinimapEntry(period_start=start, period_end=period_ends[i], count=running))
    return entries

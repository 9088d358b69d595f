"""Task filtering and sorting helpers."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import date
from enum import Enum

from .models import Task
from .packing import task_duration_days


class TaskSortKey(str, Enum):
    """Orderings offered for task lists."""

    PRIORITY = "priority"
    DURATION = "duration"
    START = "start"
    NAME = "name"


def filter_tasks(
    tasks: Sequence[Task],
    *,
    status: Collection[str] | None = None,
    priority: Collection[int] | None = None,
    category: Collection[str] | None = None,
    date_range: tuple[date, date] | None = None,
) -> list[Task]:
    """Keep tasks matching every given filter; empty filters match everything."""
    result: list[Task] = []
    for task in tasks:
        if status and task.status not in status:
            continue
        if priority and task.priority not in priority:
            continue
        if category and task.category not in category:
            continue
        if date_range is not None:
            range_start, range_end = date_range
            if task.effective_end < range_start or task.start > range_end:
                continue
        result.append(task)
    return result


def sort_tasks(tasks: Sequence[Task], sort_by: TaskSortKey | str) -> list[Task]:
    """Return a sorted copy of tasks.

    priority and duration sort descending, start ascending, name
    case-insensitively.
    """
    key = TaskSortKey(sort_by)
    if key == TaskSortKey.PRIORITY:
        return sorted(tasks, key=lambda t: -(t.priority or 0))
    if key == TaskSortKey.DURATION:
        return sorted(tasks, key=lambda t: -task_duration_days(t))
    if key == TaskSortKey.START:
        return sorted(tasks, key=lambda t: t.start)
    return sorted(tasks, key=lambda t: t.name.lower())

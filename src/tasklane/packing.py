"""Row packing: place each task of a group on a collision-free row."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Protocol

from .dates import month_end, month_start, normalize_date, unit_end, week_start
from .logger import debug_enabled, get_logger
from .models import ColumnHeader, PositionedTask, Task, TimeUnit

logger = get_logger()


def task_duration_days(task: Task) -> int:
    """Duration used for ordering: whole days between start and end, at least 1."""
    if task.end is None:
        return 1
    return max(1, (task.end - task.start).days)


def packing_sort_key(task: Task) -> tuple[int, int, date]:
    """Longest first, then highest priority, then earliest start."""
    return (-task_duration_days(task), -(task.priority or 0), task.start)


def is_task_in_column(task_start: date, task_end: date, column_date: date, unit: TimeUnit) -> bool:
    """Whether a task's date range touches a column's bucket."""
    start = normalize_date(task_start)
    end = normalize_date(task_end)
    column = normalize_date(column_date)

    if unit == TimeUnit.DAY:
        return start <= column <= end
    if unit == TimeUnit.WEEK:
        bucket_start = week_start(column)
        return not (end < bucket_start or start > unit_end(bucket_start, unit))
    if unit == TimeUnit.MONTH:
        return not (end < month_start(column) or start > month_end(column))
    return False


def find_task_position(
    task: Task, headers: Sequence[ColumnHeader], unit: TimeUnit
) -> tuple[int, int] | None:
    """Find the inclusive column range a task occupies.

    Returns:
        (x_start, x_end) as 1-based header indices, or None when the task lies
        entirely outside the visible columns
    """
    x_start: int | None = None
    x_end: int | None = None
    task_end = task.effective_end

    for header in headers:
        if is_task_in_column(task.start, task_end, header.date, unit):
            if x_start is None:
                x_start = header.index
            x_end = header.index
        elif x_start is not None:
            # Columns are contiguous in time, nothing further can match
            break

    if x_start is None or x_end is None:
        return None
    return (x_start, x_end)


class RowPacker(Protocol):
    """Strategy that assigns rows to the tasks of one group."""

    def pack(
        self, tasks: Sequence[Task], headers: Sequence[ColumnHeader], unit: TimeUnit
    ) -> list[PositionedTask]:
        """Position every task that intersects the headers.

        Tasks outside the visible columns are omitted from the result.
        """
        ...


class RowOccupancy:
    """Occupied columns per row, for first-fit row search."""

    def __init__(self) -> None:
        self._rows: list[set[int]] = []

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def is_free(self, row: int, x_start: int, x_end: int) -> bool:
        occupied = self._rows[row]
        return not any(col in occupied for col in range(x_start, x_end + 1))

    def first_free_row(self, x_start: int, x_end: int) -> int:
        for row in range(len(self._rows)):
            if self.is_free(row, x_start, x_end):
                return row
        return len(self._rows)

    def occupy(self, row: int, x_start: int, x_end: int) -> None:
        while len(self._rows) <= row:
            self._rows.append(set())
        self._rows[row].update(range(x_start, x_end + 1))


class GreedyRowPacker:
    """Greedy first-fit packing, longest tasks first.

    Equivalent to greedy interval-graph colouring: always collision-free,
    not always minimal.
    """

    def pack(
        self, tasks: Sequence[Task], headers: Sequence[ColumnHeader], unit: TimeUnit
    ) -> list[PositionedTask]:
        if not tasks:
            return []

        # sorted() is stable, so full ties keep input order
        ordered = sorted(tasks, key=packing_sort_key)
        occupancy = RowOccupancy()
        positioned: list[PositionedTask] = []

        for task in ordered:
            position = find_task_position(task, headers, unit)
            if position is None:
                if debug_enabled():
                    logger.debug(f"    Dropping {task.name!r}: outside visible columns")
                continue

            x_start, x_end = position
            row = occupancy.first_free_row(x_start, x_end)
            occupancy.occupy(row, x_start, x_end)
            positioned.append(PositionedTask(task=task, x_start=x_start, x_end=x_end, y=row))

            if debug_enabled():
                logger.debug(f"    Placed {task.name!r} at columns {x_start}-{x_end}, row {row}")

        return positioned


def pack(
    tasks: Sequence[Task],
    headers: Sequence[ColumnHeader],
    unit: TimeUnit,
    packer: RowPacker | None = None,
) -> list[PositionedTask]:
    """Position the tasks of one group with the given (default greedy) packer."""
    return (packer or GreedyRowPacker()).pack(tasks, headers, unit)

"""Data models for tasklane."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class TimeUnit(str, Enum):
    """Column granularity of the board."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class GroupBy(str, Enum):
    """Task attribute used to split the board into groups."""

    NONE = "none"
    STATUS = "status"
    PRIORITY = "priority"
    CATEGORY = "category"


@dataclass(frozen=True)
class Task:
    """A time-ranged work item, already parsed and validated upstream."""

    name: str
    start: date
    end: date | None = None
    status: str | None = None
    priority: int | None = None  # 1-5
    category: str | None = None
    file_path: str = ""

    @property
    def effective_end(self) -> date:
        """End date, falling back to the start for single-day tasks."""
        return self.end if self.end is not None else self.start


@dataclass(frozen=True)
class PositionedTask:
    """A task placed on the board grid.

    x_start/x_end are inclusive 1-based column indices, y is the 0-based row
    within the task's group.
    """

    task: Task
    x_start: int
    x_end: int
    y: int

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def file_path(self) -> str:
        return self.task.file_path

    @property
    def span(self) -> int:
        """Number of columns the task covers."""
        return self.x_end - self.x_start + 1


@dataclass(frozen=True)
class ColumnHeader:
    """One column of the board."""

    date: date
    label: str
    index: int  # 1-based
    is_emphasized: bool
    is_today: bool = False


@dataclass(frozen=True)
class TaskGrid:
    """Positioned tasks of a single group."""

    group: str
    tasks: list[PositionedTask] = field(default_factory=list[PositionedTask])


@dataclass(frozen=True)
class ViewportRange:
    """Concrete date range shown on the board."""

    start_date: date
    end_date: date


@dataclass(frozen=True)
class BoardLayout:
    """Complete geometric description of a board, consumed by renderers."""

    column_headers: list[ColumnHeader]
    task_grids: list[TaskGrid]
    grid_width: int
    grid_height: int
    time_unit: TimeUnit
    viewport: ViewportRange | None

    @property
    def positioned_tasks(self) -> list[PositionedTask]:
        """All positioned tasks across every group."""
        return [task for grid in self.task_grids for task in grid.tasks]

    def grid_for(self, group: str) -> TaskGrid | None:
        """Return the grid for a group name, if present."""
        for grid in self.task_grids:
            if grid.group == group:
                return grid
        return None

"""Pytest configuration and fixtures for tasklane tests."""

from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from tasklane.layout import LayoutEngine
from tasklane.logger import reset_logger
from tasklane.models import BoardLayout, Task

# Fixed "today" so header flags and cache keys never depend on the wall clock
TODAY = date(2024, 1, 15)

STATUSES = ["Not Started", "In Progress", "Blocked", "Completed", None]
CATEGORIES = ["Backend", "Frontend", "Ops", None]


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


@pytest.fixture
def engine() -> LayoutEngine:
    """Layout engine with its own cache and a fixed today."""
    return LayoutEngine(today=TODAY)


def make_task(  # noqa: PLR0913 - mirrors Task fields
    name: str,
    start: str | date,
    end: str | date | None = None,
    *,
    status: str | None = None,
    priority: int | None = None,
    category: str | None = None,
) -> Task:
    """Create a Task from ISO strings.

    Example:
        make_task("Design", "2024-01-14", "2024-01-16", priority=3)
    """
    start_date = date.fromisoformat(start) if isinstance(start, str) else start
    end_date = date.fromisoformat(end) if isinstance(end, str) else end
    return Task(
        name=name,
        start=start_date,
        end=end_date,
        status=status,
        priority=priority,
        category=category,
        file_path=f"tasks/{name}.md",
    )


def random_tasks(
    seed: int,
    count: int,
    *,
    around: date = TODAY,
    spread_days: int = 120,
    max_duration_days: int = 45,
) -> list[Task]:
    """Generate a reproducible set of valid tasks scattered around a date."""
    rng = random.Random(seed)
    tasks: list[Task] = []
    for i in range(count):
        start = around + timedelta(days=rng.randint(-spread_days, spread_days))
        duration = timedelta(days=rng.randint(0, max_duration_days))
        end = None if rng.random() < 0.1 else start + duration
        tasks.append(
            make_task(
                f"task-{seed}-{i}",
                start,
                end,
                status=rng.choice(STATUSES),
                priority=rng.choice([None, 1, 2, 3, 4, 5]),
                category=rng.choice(CATEGORIES),
            )
        )
    return tasks


def assert_no_overlaps(layout: BoardLayout) -> None:
    """Assert that no two tasks of a group share a row and a column."""
    for grid in layout.task_grids:
        for i, first in enumerate(grid.tasks):
            for second in grid.tasks[i + 1 :]:
                if first.y != second.y:
                    continue
                assert first.x_end < second.x_start or second.x_end < first.x_start, (
                    f"Group {grid.group!r} row {first.y}: {first.name} "
                    f"[{first.x_start}-{first.x_end}] overlaps {second.name} "
                    f"[{second.x_start}-{second.x_end}]"
                )

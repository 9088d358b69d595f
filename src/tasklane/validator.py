"""Task validation ahead of layout."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from .logger import get_logger
from .models import Task

logger = get_logger()

MIN_PRIORITY = 1
MAX_PRIORITY = 5


@dataclass(frozen=True)
class TaskValidationResult:
    """Outcome of validating one task."""

    is_valid: bool
    errors: list[str] = field(default_factory=list[str])


def validate_task(task: Task) -> TaskValidationResult:
    """Check the guarantees the layout engine relies on.

    - a non-blank name
    - a start date, and an end date not before it
    - a priority between 1 and 5 when set
    """
    errors: list[str] = []

    if not task.name or not task.name.strip():
        errors.append("Task name is required")

    if not isinstance(task.start, date):
        errors.append("Task start date is required")
    elif task.end is not None:
        if not isinstance(task.end, date):
            errors.append("Invalid end date format")
        elif task.end < task.start:
            errors.append("End date cannot be before start date")

    if task.priority is not None and not MIN_PRIORITY <= task.priority <= MAX_PRIORITY:
        errors.append(f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}")

    return TaskValidationResult(is_valid=not errors, errors=errors)


def filter_valid_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Drop invalid tasks, logging why each one was skipped."""
    valid: list[Task] = []
    for task in tasks:
        result = validate_task(task)
        if result.is_valid:
            valid.append(task)
        else:
            label = task.file_path or task.name or "<unnamed>"
            logger.warning(f"Skipping task {label}: {'; '.join(result.errors)}")
    return valid

"""Load tasks from a YAML file for the command-line tools."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import Task

logger = get_logger()


class TaskInput(BaseModel):
    """One entry of the tasks file."""

    name: str
    start: date
    end: date | None = None
    status: str | None = None
    priority: int | None = Field(default=None, ge=1, le=5)
    category: str | None = None
    file_path: str | None = None  # Defaults to "<tasks file>#<index>"

    def model_post_init(self, __context: Any) -> None:
        """Validate the date range after initialization."""
        if not self.name.strip():
            raise ValueError("Task name is required")
        if self.end is not None and self.end < self.start:
            raise ValueError(f"Start date ({self.start}) cannot be after end date ({self.end})")

    def to_task(self, default_path: str) -> Task:
        return Task(
            name=self.name,
            start=self.start,
            end=self.end,
            status=self.status,
            priority=self.priority,
            category=self.category,
            file_path=self.file_path or default_path,
        )


def parse_tasks(data: Any, source: str = "<tasks>") -> list[Task]:
    """Convert parsed YAML data into tasks.

    Accepts either a mapping with a top-level ``tasks`` list or a bare list.

    Raises:
        ValidationError: If the structure or any entry is invalid
    """
    if data is None:
        return []
    entries = data.get("tasks", []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValidationError(f"{source}: 'tasks' must be a list")

    tasks: list[Task] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValidationError(f"{source}: task #{index} must be a mapping")
        try:
            task_input = TaskInput.model_validate(entry)
        except ValueError as e:  # pydantic errors and model_post_init checks
            name = entry.get("name", "<unnamed>")
            raise ValidationError(f"{source}: invalid task #{index} ({name}): {e}") from e
        tasks.append(task_input.to_task(f"{source}#{index}"))

    logger.checks(f"Loaded {len(tasks)} tasks from {source}")
    return tasks


def load_tasks(path: Path | str) -> list[Task]:
    """Load and validate tasks from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the YAML is malformed
        ValidationError: If any task entry is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tasks file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML in {path}: {e}") from e

    return parse_tasks(data, str(path))

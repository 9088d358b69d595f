"""Configuration loading for tasklane.

A single YAML file (tasklane_config.yaml) holds the board defaults and the
layout cache settings.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .models import GroupBy, TimeUnit
from .viewport import DEFAULT_NUMBER_OF_COLUMNS, ExplicitViewport

DEFAULT_CONFIG_FILENAME = "tasklane_config.yaml"


class ViewportConfig(BaseModel):
    """Explicit viewport bounds; only the start is authoritative."""

    start: date
    end: date

    def model_post_init(self, __context: Any) -> None:
        """Validate configuration after initialization."""
        if self.start >= self.end:
            raise ValueError(
                f"board.viewport.start must be before board.viewport.end: "
                f"{self.start} >= {self.end}"
            )

    def to_viewport(self) -> ExplicitViewport:
        return ExplicitViewport(min_date=self.start, max_date=self.end)


class BoardConfig(BaseModel):
    """Board defaults used when the CLI does not override them."""

    time_unit: TimeUnit = TimeUnit.DAY
    number_of_columns: int = Field(default=DEFAULT_NUMBER_OF_COLUMNS, ge=1)
    group_by: GroupBy | str = GroupBy.NONE  # "none", "status", "priority", "category"
    current_date: date | None = None  # None = today
    viewport: ViewportConfig | None = None
    available_groups: list[str] = Field(default_factory=list[str])  # Display order of groups


class CacheConfig(BaseModel):
    """Layout cache settings."""

    max_entries: int = Field(default=10, ge=1)


class TasklaneConfig(BaseModel):
    """Top-level configuration."""

    board: BoardConfig = BoardConfig()
    cache: CacheConfig = CacheConfig()


def load_config(config_path: Path | str) -> TasklaneConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to tasklane_config.yaml

    Returns:
        Validated TasklaneConfig

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        data: dict[str, Any] | None = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")

    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    # pydantic's ValidationError is a ValueError subclass
    return TasklaneConfig.model_validate(data)


def discover_config(
    tasks_path: Path | None = None, config_path: Path | None = None
) -> TasklaneConfig | None:
    """Find and load configuration.

    Search order:
    1. Explicit config_path argument
    2. Tasks file directory / tasklane_config.yaml
    3. Current directory / tasklane_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    if tasks_path is not None:
        dir_config = Path(tasks_path).parent / DEFAULT_CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(DEFAULT_CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return None

"""Options shared by every tasklane command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import TasklaneConfig, discover_config


@dataclass
class CommandOptions:
    """Global options recorded by the top-level callback."""

    config_path: Path | None = None  # From --config

    def resolve_config(self, tasks_file: Path) -> TasklaneConfig:
        """Config for a tasks file: --config, then discovery, then built-in defaults."""
        return discover_config(tasks_file, self.config_path) or TasklaneConfig()


_options = CommandOptions()


def set_config_path(path: Path | None) -> None:
    """Record the config path given with --config (None to discover)."""
    _options.config_path = path


def resolve_config(tasks_file: Path) -> TasklaneConfig:
    """Load the config that applies to a tasks file.

    Raises:
        FileNotFoundError: If --config names a missing file
        ValueError: If the config file is empty or invalid
    """
    return _options.resolve_config(tasks_file)

"""tasklane - calendar board layout for time-ranged tasks.

This package turns a list of dated tasks into the geometry of a board:
- Column headers for a window of days, weeks or months
- Tasks split into groups (status, priority, category)
- A collision-free row for every visible task within its group

Main entry points:
- LayoutEngine: Computes layouts and memoizes them in a bounded cache
- compute_board_layout: One-shot layout without a long-lived cache
- resolve_viewport: Turns a requested window into an exact column range
"""

# Cache
from .cache import LayoutCache, LayoutCacheKey

# Errors
from .exceptions import InvalidViewportError, ParseError, TasklaneError, ValidationError

# Grouping
from .grouping import GroupOrderStore, generate_available_groups, group_tasks, sort_groups

# Headers
from .headers import generate_column_headers

# Layout
from .layout import (
    LayoutEngine,
    LayoutRequest,
    compute_board_layout,
    empty_layout,
    find_overlaps,
    tasks_conflict,
)

# Core dataclasses
from .models import (
    BoardLayout,
    ColumnHeader,
    GroupBy,
    PositionedTask,
    Task,
    TaskGrid,
    TimeUnit,
    ViewportRange,
)

# Packing
from .packing import GreedyRowPacker, RowPacker, pack

# Viewport
from .viewport import (
    CenteredViewport,
    ExplicitViewport,
    ResolvedViewport,
    Viewport,
    calculate_default_viewport,
    resolve_viewport,
    snap_viewport,
    validate_date_range,
)

__all__ = [
    "BoardLayout",
    "CenteredViewport",
    "ColumnHeader",
    "ExplicitViewport",
    "GreedyRowPacker",
    "GroupBy",
    "GroupOrderStore",
    "InvalidViewportError",
    "LayoutCache",
    "LayoutCacheKey",
    "LayoutEngine",
    "LayoutRequest",
    "ParseError",
    "PositionedTask",
    "ResolvedViewport",
    "RowPacker",
    "Task",
    "TaskGrid",
    "TasklaneError",
    "TimeUnit",
    "ValidationError",
    "Viewport",
    "ViewportRange",
    "calculate_default_viewport",
    "compute_board_layout",
    "empty_layout",
    "find_overlaps",
    "generate_available_groups",
    "generate_column_headers",
    "group_tasks",
    "pack",
    "resolve_viewport",
    "snap_viewport",
    "sort_groups",
    "tasks_conflict",
    "validate_date_range",
]

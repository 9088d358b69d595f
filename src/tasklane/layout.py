"""Board layout engine: headers, grouping, row packing and caching."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from .cache import LayoutCache, LayoutCacheKey
from .grouping import group_tasks
from .headers import generate_column_headers
from .logger import changes_enabled, get_logger
from .models import BoardLayout, GroupBy, PositionedTask, Task, TaskGrid, TimeUnit, ViewportRange
from .packing import GreedyRowPacker, RowPacker
from .viewport import DEFAULT_NUMBER_OF_COLUMNS, ExplicitViewport, resolve_viewport

logger = get_logger()


class LayoutRequest(BaseModel):
    """Everything the engine needs to lay out a board."""

    model_config = ConfigDict(frozen=True)

    tasks: list[Task] = Field(default_factory=list[Task])
    time_unit: TimeUnit = TimeUnit.DAY
    current_date: date
    number_of_columns: int | None = DEFAULT_NUMBER_OF_COLUMNS
    explicit_viewport: ExplicitViewport | None = None
    group_by: GroupBy | str = GroupBy.NONE  # Unknown strings fall back to one group
    available_groups: list[str] = Field(default_factory=list[str])


def empty_layout(time_unit: TimeUnit = TimeUnit.DAY) -> BoardLayout:
    """Layout shown when the board cannot be computed."""
    return BoardLayout(
        column_headers=[],
        task_grids=[],
        grid_width=1,
        grid_height=1,
        time_unit=time_unit,
        viewport=None,
    )


def order_groups(discovered: Sequence[str], available_groups: Sequence[str]) -> list[str]:
    """Groups from available_groups first (if present), then the rest as discovered."""
    present = set(discovered)
    ordered = [group for group in dict.fromkeys(available_groups) if group in present]
    listed = set(ordered)
    ordered.extend(group for group in discovered if group not in listed)
    return ordered


def tasks_conflict(a: PositionedTask, b: PositionedTask) -> bool:
    """Whether two positioned tasks share a row and overlap in columns."""
    if a.y != b.y:
        return False
    return not (a.x_end < b.x_start or a.x_start > b.x_end)


def find_overlaps(layout: BoardLayout) -> list[tuple[str, PositionedTask, PositionedTask]]:
    """List every pair of colliding tasks as (group, first, second)."""
    overlaps: list[tuple[str, PositionedTask, PositionedTask]] = []
    for grid in layout.task_grids:
        by_row: dict[int, list[PositionedTask]] = {}
        for task in grid.tasks:
            by_row.setdefault(task.y, []).append(task)
        for row_tasks in by_row.values():
            row_tasks.sort(key=lambda t: (t.x_start, t.x_end))
            for i, first in enumerate(row_tasks):
                for second in row_tasks[i + 1 :]:
                    if second.x_start > first.x_end:
                        break
                    overlaps.append((grid.group, first, second))
    return overlaps


class LayoutEngine:
    """Computes board layouts and memoizes them in an owned cache.

    Identical requests return the same BoardLayout object so callers can
    skip re-rendering by identity.
    """

    def __init__(
        self,
        cache: LayoutCache | None = None,
        packer: RowPacker | None = None,
        today: date | None = None,
    ):
        """Initialize the engine.

        Args:
            cache: Layout cache to use (a fresh 10-entry cache by default)
            packer: Row packing strategy (greedy first-fit by default)
            today: Date flagged as "today" on headers (defaults to the real date)
        """
        self.cache = cache if cache is not None else LayoutCache()
        self.packer: RowPacker = packer or GreedyRowPacker()
        self.today = today

    def compute(self, request: LayoutRequest) -> BoardLayout:
        """Compute (or fetch from cache) the layout for a request."""
        unit = request.time_unit
        resolved = resolve_viewport(
            request.current_date, unit, request.number_of_columns, request.explicit_viewport
        )
        today = self.today or date.today()  # noqa: DTZ011

        explicit = request.explicit_viewport
        key = LayoutCacheKey.build(
            request.tasks,
            unit,
            request.current_date,
            (explicit.min_date, explicit.max_date) if explicit is not None else None,
            request.group_by,
            request.available_groups,
            resolved.column_count,
            today,
        )

        cached = self.cache.get(key)
        if cached is not None:
            logger.checks("Layout cache hit")
            return cached
        logger.checks("Layout cache miss")

        headers = generate_column_headers(
            resolved.start_date,
            resolved.end_date,
            unit,
            resolved.column_count,
            today=today,
        )

        grouped = group_tasks(request.tasks, request.group_by)
        task_grids: list[TaskGrid] = []
        for group in order_groups(list(grouped), request.available_groups):
            logger.debug(f"  Packing group {group!r} ({len(grouped[group])} tasks)")
            positioned = self.packer.pack(grouped[group], headers, unit)
            task_grids.append(TaskGrid(group=group, tasks=positioned))

        max_row = max((task.y for grid in task_grids for task in grid.tasks), default=0)
        layout = BoardLayout(
            column_headers=headers,
            task_grids=task_grids,
            grid_width=len(headers) + 1,
            grid_height=max(1, max_row) + 1,
            time_unit=unit,
            viewport=ViewportRange(start_date=resolved.start_date, end_date=resolved.end_date),
        )

        if changes_enabled():
            placed = sum(len(grid.tasks) for grid in task_grids)
            logger.changes(
                f"Computed {unit.value} layout {resolved.start_date} to {resolved.end_date}: "
                f"{len(headers)} columns, {len(task_grids)} groups, "
                f"{placed}/{len(request.tasks)} tasks visible"
            )

        self.cache.put(key, layout)
        return layout

    def compute_safe(self, request: LayoutRequest) -> BoardLayout:
        """Compute a layout, substituting the empty layout on any failure."""
        try:
            return self.compute(request)
        except Exception as e:  # noqa: BLE001 - any failure degrades to the empty board
            logger.error(f"Error loading board: {e}")
            return empty_layout(request.time_unit)

    def clear_cache(self) -> None:
        self.cache.clear()


def compute_board_layout(  # noqa: PLR0913 - mirrors LayoutRequest fields
    tasks: Sequence[Task],
    *,
    time_unit: TimeUnit = TimeUnit.DAY,
    current_date: date,
    number_of_columns: int | None = DEFAULT_NUMBER_OF_COLUMNS,
    explicit_viewport: ExplicitViewport | None = None,
    group_by: GroupBy | str = GroupBy.NONE,
    available_groups: Sequence[str] = (),
    today: date | None = None,
) -> BoardLayout:
    """Compute a layout once, without keeping a cache around."""
    request = LayoutRequest(
        tasks=list(tasks),
        time_unit=time_unit,
        current_date=current_date,
        number_of_columns=number_of_columns,
        explicit_viewport=explicit_viewport,
        group_by=group_by,
        available_groups=list(available_groups),
    )
    return LayoutEngine(today=today).compute(request)

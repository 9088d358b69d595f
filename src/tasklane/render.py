"""Plain-text and JSON renderings of a board layout."""

from __future__ import annotations

import json
from typing import Any

from .minimap import MinimapEntry
from .models import BoardLayout

DEFAULT_CELL_WIDTH = 16
GROUP_COLUMN_WIDTH = 14
EMPTY_BOARD_MESSAGE = "Error loading board"


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text.ljust(width)
    return text[: width - 1] + "~"


def render_text(layout: BoardLayout, cell_width: int = DEFAULT_CELL_WIDTH) -> str:
    """Render a layout as a fixed-width grid.

    Column 0 carries the group names; each task is drawn across the cells of
    its column range on its row.
    """
    if not layout.column_headers:
        return EMPTY_BOARD_MESSAGE

    lines: list[str] = []
    header_cells = [
        _fit(("*" if h.is_emphasized else "") + h.label, cell_width) for h in layout.column_headers
    ]
    lines.append(_fit("", GROUP_COLUMN_WIDTH) + "|" + "|".join(header_cells))
    lines.append("-" * len(lines[0]))

    for grid in layout.task_grids:
        row_count = max((task.y for task in grid.tasks), default=-1) + 1
        rows: list[list[str]] = [[" " * cell_width] * len(header_cells) for _ in range(row_count)]

        for task in grid.tasks:
            width = task.span * cell_width + (task.span - 1)
            text = _fit(f"[{task.name}]", width)
            cells = rows[task.y]
            cells[task.x_start - 1] = text
            for col in range(task.x_start, task.x_end):
                cells[col] = ""

        label = _fit(grid.group, GROUP_COLUMN_WIDTH)
        if not rows:
            lines.append(label + "|")
        for i, cells in enumerate(rows):
            prefix = label if i == 0 else " " * GROUP_COLUMN_WIDTH
            lines.append(prefix + "|" + "|".join(cell for cell in cells if cell != ""))
        lines.append("-" * len(lines[0]))

    return "\n".join(lines)


def layout_to_dict(layout: BoardLayout) -> dict[str, Any]:
    """Convert a layout to JSON-compatible primitives."""
    return {
        "time_unit": layout.time_unit.value,
        "grid_width": layout.grid_width,
        "grid_height": layout.grid_height,
        "viewport": (
            {
                "start_date": layout.viewport.start_date.isoformat(),
                "end_date": layout.viewport.end_date.isoformat(),
            }
            if layout.viewport is not None
            else None
        ),
        "column_headers": [
            {
                "date": h.date.isoformat(),
                "label": h.label,
                "index": h.index,
                "is_emphasized": h.is_emphasized,
                "is_today": h.is_today,
            }
            for h in layout.column_headers
        ],
        "task_grids": [
            {
                "group": grid.group,
                "tasks": [
                    {
                        "name": t.name,
                        "file_path": t.file_path,
                        "start": t.task.start.isoformat(),
                        "end": t.task.end.isoformat() if t.task.end else None,
                        "x_start": t.x_start,
                        "x_end": t.x_end,
                        "y": t.y,
                    }
                    for t in grid.tasks
                ],
            }
            for grid in layout.task_grids
        ],
    }


def render_json(layout: BoardLayout) -> str:
    return json.dumps(layout_to_dict(layout), indent=2)


def render_minimap(entries: list[MinimapEntry]) -> str:
    """One line per period: start date, count and a bar."""
    return "\n".join(
        f"{entry.period_start.isoformat()}  {entry.count:4d}  {'#' * entry.count}"
        for entry in entries
    )

"""Command-line interface for tasklane."""

from __future__ import annotations

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .cache import LayoutCache
from .config import BoardConfig, TasklaneConfig
from .exceptions import TasklaneError
from .layout import LayoutEngine, LayoutRequest, find_overlaps
from .loader import load_tasks
from .logger import setup_logger
from .minimap import generate_minimap_data
from .models import BoardLayout, Task, TimeUnit
from .render import render_json, render_minimap, render_text
from .validator import filter_valid_tasks
from .viewport import ExplicitViewport, validate_date_range

app = typer.Typer(
    name="tasklane",
    help="Lay out time-ranged tasks on a calendar board",
    add_completion=False,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: tasklane_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for tasklane commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _parse_date(value: str, option_name: str) -> date:
    """Parse a YYYY-MM-DD option, exiting with an error message when invalid."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        typer.echo(f"Error: Invalid --{option_name} '{value}', expected YYYY-MM-DD", err=True)
        raise typer.Exit(1) from None


def _parse_date_option(value: str | None, option_name: str) -> date | None:
    return None if value is None else _parse_date(value, option_name)


def _load_config(tasks_file: Path) -> TasklaneConfig:
    try:
        return context.resolve_config(tasks_file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _load_tasks(tasks_file: Path) -> list[Task]:
    try:
        return filter_valid_tasks(load_tasks(tasks_file))
    except (FileNotFoundError, TasklaneError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _build_request(  # noqa: PLR0913 - CLI overrides for every board setting
    tasks: list[Task],
    board: BoardConfig,
    *,
    unit: TimeUnit | None,
    columns: int | None,
    group_by: str | None,
    current_date: str | None,
    start: str | None,
    end: str | None,
) -> LayoutRequest:
    """Merge CLI options over config values into a layout request."""
    explicit: ExplicitViewport | None = board.viewport.to_viewport() if board.viewport else None
    if start is not None or end is not None:
        if start is None or end is None:
            typer.echo("Error: --start and --end must be given together", err=True)
            raise typer.Exit(1)
        try:
            explicit = validate_date_range(start, end)
        except TasklaneError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from None

    anchor = _parse_date_option(current_date, "current-date") or board.current_date
    return LayoutRequest(
        tasks=tasks,
        time_unit=unit or board.time_unit,
        current_date=anchor or date.today(),  # noqa: DTZ011
        number_of_columns=columns if columns is not None else board.number_of_columns,
        explicit_viewport=explicit,
        group_by=group_by if group_by is not None else board.group_by,
        available_groups=board.available_groups,
    )


def _compute(
    tasks_file: Path,
    *,
    unit: TimeUnit | None,
    columns: int | None,
    group_by: str | None,
    current_date: str | None,
    start: str | None,
    end: str | None,
) -> BoardLayout:
    config = _load_config(tasks_file)
    tasks = _load_tasks(tasks_file)
    request = _build_request(
        tasks,
        config.board,
        unit=unit,
        columns=columns,
        group_by=group_by,
        current_date=current_date,
        start=start,
        end=end,
    )
    engine = LayoutEngine(cache=LayoutCache(config.cache.max_entries))
    return engine.compute_safe(request)


TasksFileArg = Annotated[Path, typer.Argument(help="Path to the tasks YAML file")]
UnitOption = Annotated[
    TimeUnit | None, typer.Option("--unit", "-u", help="Column granularity: day, week or month")
]
ColumnsOption = Annotated[
    int | None, typer.Option("--columns", "-n", help="Number of columns to show", min=1)
]
GroupByOption = Annotated[
    str | None,
    typer.Option("--group-by", "-g", help="Group tasks by: none, status, priority or category"),
]
CurrentDateOption = Annotated[
    str | None,
    typer.Option("--current-date", help="Date the board is centered on (YYYY-MM-DD)"),
]
StartOption = Annotated[
    str | None, typer.Option("--start", help="Explicit viewport start (YYYY-MM-DD)")
]
EndOption = Annotated[str | None, typer.Option("--end", help="Explicit viewport end (YYYY-MM-DD)")]


@app.command()
def layout(  # noqa: PLR0913 - CLI command needs multiple options
    tasks_file: TasksFileArg = Path("tasks.yaml"),
    *,
    unit: UnitOption = None,
    columns: ColumnsOption = None,
    group_by: GroupByOption = None,
    current_date: CurrentDateOption = None,
    start: StartOption = None,
    end: EndOption = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format (text or json)")
    ] = OutputFormat.TEXT,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Compute a board layout and print it."""
    board = _compute(
        tasks_file,
        unit=unit,
        columns=columns,
        group_by=group_by,
        current_date=current_date,
        start=start,
        end=end,
    )
    rendered = render_json(board) if output_format == OutputFormat.JSON else render_text(board)

    if output:
        output.write_text(rendered, encoding="utf-8")
        typer.echo(f"Layout written to {output}")
    else:
        typer.echo(rendered)


@app.command()
def check(  # noqa: PLR0913 - CLI command needs multiple options
    tasks_file: TasksFileArg = Path("tasks.yaml"),
    *,
    unit: UnitOption = None,
    columns: ColumnsOption = None,
    group_by: GroupByOption = None,
    current_date: CurrentDateOption = None,
    start: StartOption = None,
    end: EndOption = None,
) -> None:
    """Verify that no two tasks of a group collide on the same row."""
    board = _compute(
        tasks_file,
        unit=unit,
        columns=columns,
        group_by=group_by,
        current_date=current_date,
        start=start,
        end=end,
    )
    overlaps = find_overlaps(board)
    if overlaps:
        for group, first, second in overlaps:
            typer.echo(
                f"Overlap in {group!r} row {first.y}: {first.name!r} and {second.name!r}",
                err=True,
            )
        raise typer.Exit(1)

    visible = len(board.positioned_tasks)
    typer.echo(
        f"OK: {visible} tasks in {len(board.task_grids)} groups, "
        f"{len(board.column_headers)} columns, no overlaps"
    )


@app.command()
def minimap(
    tasks_file: TasksFileArg = Path("tasks.yaml"),
    *,
    unit: UnitOption = None,
    start: Annotated[str, typer.Option("--start", help="Range start (YYYY-MM-DD)")],
    end: Annotated[str, typer.Option("--end", help="Range end (YYYY-MM-DD)")],
) -> None:
    """Print how many tasks are active in each period of a range."""
    config = _load_config(tasks_file)
    tasks = _load_tasks(tasks_file)
    range_start = _parse_date(start, "start")
    range_end = _parse_date(end, "end")

    entries = generate_minimap_data(
        tasks, unit or config.board.time_unit, range_start, range_end
    )
    typer.echo(render_minimap(entries))


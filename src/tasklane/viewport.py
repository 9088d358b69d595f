"""Viewport resolution: turn a requested window into an exact column range."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .dates import add_time, normalize_date, parse_date, unit_start
from .exceptions import InvalidViewportError
from .models import TimeUnit

DEFAULT_NUMBER_OF_COLUMNS = 7


@dataclass(frozen=True)
class ExplicitViewport:
    """A caller-chosen window; only its start is authoritative."""

    min_date: date
    max_date: date


@dataclass(frozen=True)
class CenteredViewport:
    """A window centered on an anchor date."""

    anchor: date


Viewport = ExplicitViewport | CenteredViewport


@dataclass(frozen=True)
class ResolvedViewport:
    """Concrete first/last column dates and the number of columns between them."""

    start_date: date
    end_date: date
    column_count: int


def _clamp_to_columns(start: date, unit: TimeUnit, number_of_columns: int) -> ResolvedViewport:
    """Snap the start to its bucket and derive an end exactly N-1 units later."""
    snapped = unit_start(normalize_date(start), unit)
    end = add_time(snapped, number_of_columns - 1, unit)
    return ResolvedViewport(start_date=snapped, end_date=end, column_count=number_of_columns)


def centered_start(anchor: date, unit: TimeUnit, number_of_columns: int) -> date:
    """First date of a window centered on the anchor.

    past = floor((N-1)/2) units before the anchor, the rest after it.
    """
    past_units = (number_of_columns - 1) // 2
    return add_time(normalize_date(anchor), -past_units, unit)


def resolve_viewport(
    current_date: date,
    unit: TimeUnit,
    number_of_columns: int | None,
    explicit_viewport: ExplicitViewport | None = None,
) -> ResolvedViewport:
    """Resolve the visible window to an exact column range.

    The configured column count always wins over the span implied by an
    explicit viewport.

    Args:
        current_date: Anchor used when there is no explicit viewport
        unit: Column granularity
        number_of_columns: Columns to produce (None means the default of 7)
        explicit_viewport: Optional caller-chosen window

    Returns:
        ResolvedViewport with start_date, end_date and column_count

    Raises:
        InvalidViewportError: If number_of_columns is below 1
    """
    columns = DEFAULT_NUMBER_OF_COLUMNS if number_of_columns is None else number_of_columns
    if columns < 1:
        msg = f"number_of_columns must be at least 1, got {columns}"
        raise InvalidViewportError(msg)

    viewport: Viewport = (
        explicit_viewport if explicit_viewport is not None else CenteredViewport(current_date)
    )

    if isinstance(viewport, ExplicitViewport):
        start = viewport.min_date
    else:
        start = centered_start(viewport.anchor, unit, columns)

    return _clamp_to_columns(start, unit, columns)


def calculate_default_viewport(
    current_date: date, unit: TimeUnit, number_of_columns: int = DEFAULT_NUMBER_OF_COLUMNS
) -> ExplicitViewport:
    """Centered window expressed as explicit bounds.

    Used when a caller resets the viewport, e.g. after switching time units.
    """
    past_units = (number_of_columns - 1) // 2
    future_units = number_of_columns - 1 - past_units
    anchor = normalize_date(current_date)
    return ExplicitViewport(
        min_date=add_time(anchor, -past_units, unit),
        max_date=add_time(anchor, future_units, unit),
    )


def snap_viewport(
    viewport: ExplicitViewport, unit: TimeUnit, number_of_columns: int
) -> ExplicitViewport:
    """Snap a dragged window to unit boundaries with exactly N columns."""
    resolved = _clamp_to_columns(viewport.min_date, unit, number_of_columns)
    return ExplicitViewport(min_date=resolved.start_date, max_date=resolved.end_date)


def validate_date_range(min_date: str | date, max_date: str | date) -> ExplicitViewport:
    """Validate caller-supplied viewport bounds.

    Returns:
        The parsed viewport

    Raises:
        InvalidViewportError: If a bound is unparseable or min_date >= max_date
    """
    try:
        parsed_min = parse_date(min_date)
        parsed_max = parse_date(max_date)
    except (ValueError, TypeError, AttributeError) as e:
        msg = f"Invalid viewport bounds: {min_date!r}, {max_date!r}"
        raise InvalidViewportError(msg) from e

    if parsed_min >= parsed_max:
        msg = f"Viewport start must be before end: {parsed_min} >= {parsed_max}"
        raise InvalidViewportError(msg)

    return ExplicitViewport(min_date=parsed_min, max_date=parsed_max)

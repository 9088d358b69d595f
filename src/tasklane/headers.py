"""Column header generation."""

from __future__ import annotations

from datetime import date

from .dates import (
    add_time,
    format_label,
    format_week_with_month,
    is_header_emphasized,
    is_header_today,
    month_first_in_week,
    normalize_date,
    unit_start,
)
from .models import ColumnHeader, TimeUnit


def header_label(d: date, unit: TimeUnit, emphasized: bool) -> str:
    """Label for a header; emphasized weeks name the month that starts in them."""
    if unit == TimeUnit.WEEK and emphasized:
        return format_week_with_month(d, month_first_in_week(d))
    return format_label(d, unit)


def generate_column_headers(
    start_date: date,
    end_date: date,
    unit: TimeUnit,
    target_columns: int | None = None,
    *,
    today: date | None = None,
) -> list[ColumnHeader]:
    """Build the ordered column headers for a window.

    When target_columns is given exactly that many headers are emitted;
    otherwise headers are generated until the cursor passes end_date.

    Args:
        start_date: First column date (snapped to its bucket)
        end_date: Last column date, only used without target_columns
        unit: Column granularity
        target_columns: Authoritative number of columns
        today: Date used to flag the current column (defaults to no flag)

    Returns:
        Headers with 1-based contiguous indices, one unit apart
    """
    headers: list[ColumnHeader] = []
    current = unit_start(normalize_date(start_date), unit)
    end = normalize_date(end_date)

    def make(cursor: date) -> ColumnHeader:
        emphasized = is_header_emphasized(cursor, unit)
        return ColumnHeader(
            date=cursor,
            label=header_label(cursor, unit, emphasized),
            index=len(headers) + 1,
            is_emphasized=emphasized,
            is_today=today is not None and is_header_today(cursor, today, unit),
        )

    if target_columns is not None:
        for _ in range(target_columns):
            headers.append(make(current))
            current = add_time(current, 1, unit)
        return headers

    while current <= end:
        headers.append(make(current))
        current = add_time(current, 1, unit)

    return headers

"""Calendar arithmetic for board columns."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone

from .models import TimeUnit

# Constants for date calculations
DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12
JANUARY = 1
MONDAY = 0  # date.weekday() value

# Fixed English names so labels never depend on the process locale
WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_ABBR = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def normalize_date(value: date | datetime) -> date:
    """Truncate a date or datetime to its UTC calendar day.

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def parse_date(value: str | date | datetime) -> date:
    """Parse an ISO date or datetime string into a normalized date.

    Raises:
        ValueError: If the string is not ISO formatted
    """
    if isinstance(value, (date, datetime)):
        return normalize_date(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" in text or " " in text:
        return normalize_date(datetime.fromisoformat(text))
    return date.fromisoformat(text)


def add_months(d: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = d.month - 1 + months
    year = d.year + month_index // MONTHS_PER_YEAR
    month = month_index % MONTHS_PER_YEAR + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_time(d: date, amount: int, unit: TimeUnit) -> date:
    """Add whole units to a date (week = 7 days, month = calendar month)."""
    if unit == TimeUnit.DAY:
        return d + timedelta(days=amount)
    if unit == TimeUnit.WEEK:
        return d + timedelta(days=amount * DAYS_PER_WEEK)
    if unit == TimeUnit.MONTH:
        return add_months(d, amount)
    msg = f"Unknown time unit: {unit}"
    raise ValueError(msg)


def week_start(d: date) -> date:
    """Monday of the date's week (weeks run Monday to Sunday)."""
    return d - timedelta(days=d.weekday())


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def month_end(d: date) -> date:
    return date(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def unit_start(d: date, unit: TimeUnit) -> date:
    """Snap a date to the first day of its bucket."""
    if unit == TimeUnit.WEEK:
        return week_start(d)
    if unit == TimeUnit.MONTH:
        return month_start(d)
    return d


def unit_end(d: date, unit: TimeUnit) -> date:
    """Last day of the bucket containing the date."""
    if unit == TimeUnit.WEEK:
        return week_start(d) + timedelta(days=DAYS_PER_WEEK - 1)
    if unit == TimeUnit.MONTH:
        return month_end(d)
    return d


def count_date_units(start: date, end: date, unit: TimeUnit) -> int:
    """Count the buckets between two dates, inclusive, with a minimum of 1."""
    if unit == TimeUnit.DAY:
        return max(1, (end - start).days + 1)
    if unit == TimeUnit.WEEK:
        return max(1, (week_start(end) - week_start(start)).days // DAYS_PER_WEEK + 1)
    months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
    return max(1, months + 1)


def month_first_in_week(d: date) -> date | None:
    """Return the 1st of a month falling inside the date's week, if any.

    The next month's 1st takes precedence over the current month's.
    """
    start = week_start(d)
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    current_first = month_start(start)
    next_first = add_months(current_first, 1)
    if start <= next_first <= end:
        return next_first
    if start <= current_first <= end:
        return current_first
    return None


def is_header_emphasized(d: date, unit: TimeUnit) -> bool:
    """Whether a header draws a visual separator.

    month: January; week: the week contains the 1st of a month; day: Monday.
    """
    if unit == TimeUnit.MONTH:
        return d.month == JANUARY
    if unit == TimeUnit.WEEK:
        return month_first_in_week(d) is not None
    if unit == TimeUnit.DAY:
        return d.weekday() == MONDAY
    return False


def is_header_today(d: date, today: date, unit: TimeUnit) -> bool:
    """Whether the header's bucket contains today."""
    return unit_start(d, unit) <= today <= unit_end(d, unit)


def _week_label(d: date) -> str:
    week = d.isocalendar()[1]
    return f"{d.year} - W{week:02d}"


def format_label(d: date, unit: TimeUnit) -> str:
    """Format a header label.

    day: "Mon, 15.01.24"; week: "2024 - W03"; month: "Jan 2024".
    """
    if unit == TimeUnit.DAY:
        return f"{WEEKDAY_ABBR[d.weekday()]}, {d.day:02d}.{d.month:02d}.{d.year % 100:02d}"
    if unit == TimeUnit.WEEK:
        return _week_label(d)
    if unit == TimeUnit.MONTH:
        return f"{MONTH_ABBR[d.month - 1]} {d.year}"
    return d.isoformat()


def format_week_with_month(d: date, month_date: date | None = None) -> str:
    """Format a week label with a month suffix, e.g. "2024 - W05 - Feb"."""
    shown = month_date or d
    return f"{_week_label(d)} - {MONTH_ABBR[shown.month - 1]}"

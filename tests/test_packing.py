"""Tests for column mapping and greedy row packing."""

from collections.abc import Sequence
from datetime import date

from tasklane.headers import generate_column_headers
from tasklane.models import ColumnHeader, PositionedTask, Task, TimeUnit
from tasklane.packing import (
    GreedyRowPacker,
    RowOccupancy,
    find_task_position,
    is_task_in_column,
    pack,
    packing_sort_key,
    task_duration_days,
)
from tests.conftest import make_task


def day_headers() -> list[ColumnHeader]:
    """Seven day columns, 2024-01-12 to 2024-01-18."""
    return generate_column_headers(date(2024, 1, 12), date(2024, 1, 18), TimeUnit.DAY, 7)


class TestColumnMapping:
    """Test which columns a task covers."""

    def test_day_membership(self) -> None:
        assert is_task_in_column(
            date(2024, 1, 14), date(2024, 1, 16), date(2024, 1, 16), TimeUnit.DAY
        )
        assert not is_task_in_column(
            date(2024, 1, 14), date(2024, 1, 16), date(2024, 1, 17), TimeUnit.DAY
        )

    def test_week_membership_by_intersection(self) -> None:
        # Task on Sunday Jan 21 touches the week starting Monday Jan 15
        assert is_task_in_column(
            date(2024, 1, 21), date(2024, 1, 21), date(2024, 1, 15), TimeUnit.WEEK
        )
        assert not is_task_in_column(
            date(2024, 1, 22), date(2024, 1, 23), date(2024, 1, 15), TimeUnit.WEEK
        )

    def test_month_membership_by_intersection(self) -> None:
        assert is_task_in_column(
            date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 1), TimeUnit.MONTH
        )
        assert not is_task_in_column(
            date(2024, 3, 1), date(2024, 3, 5), date(2024, 2, 1), TimeUnit.MONTH
        )

    def test_three_day_task_spans_three_columns(self) -> None:
        task = make_task("design", "2024-01-14", "2024-01-16")

        x_start, x_end = find_task_position(task, day_headers(), TimeUnit.DAY) or (0, 0)

        assert (x_start, x_end) == (3, 5)
        assert x_end - x_start == 2

    def test_single_day_task_without_end(self) -> None:
        task = make_task("standup", "2024-01-15")

        assert find_task_position(task, day_headers(), TimeUnit.DAY) == (4, 4)

    def test_task_clipped_to_window(self) -> None:
        task = make_task("epic", "2024-01-01", "2024-01-31")

        assert find_task_position(task, day_headers(), TimeUnit.DAY) == (1, 7)

    def test_task_outside_window(self) -> None:
        task = make_task("later", "2024-02-01", "2024-02-03")

        assert find_task_position(task, day_headers(), TimeUnit.DAY) is None

    def test_week_columns(self) -> None:
        headers = generate_column_headers(date(2024, 1, 15), date(2024, 1, 29), TimeUnit.WEEK, 3)
        task = make_task("handover", "2024-01-21", "2024-01-22")

        assert find_task_position(task, headers, TimeUnit.WEEK) == (1, 2)


class TestSortOrder:
    """Test the packing order heuristic."""

    def test_duration_days(self) -> None:
        assert task_duration_days(make_task("a", "2024-01-14", "2024-01-16")) == 2
        assert task_duration_days(make_task("b", "2024-01-14")) == 1
        assert task_duration_days(make_task("c", "2024-01-14", "2024-01-14")) == 1

    def test_longest_then_priority_then_start(self) -> None:
        tasks = [
            make_task("short-early", "2024-01-01", "2024-01-02"),
            make_task("long", "2024-01-05", "2024-01-15"),
            make_task("short-high", "2024-01-03", "2024-01-04", priority=5),
            make_task("short-late", "2024-01-08", "2024-01-09"),
        ]

        ordered = sorted(tasks, key=packing_sort_key)

        assert [t.name for t in ordered] == ["long", "short-high", "short-early", "short-late"]


class TestRowOccupancy:
    """Test first-fit row search."""

    def test_first_free_row(self) -> None:
        occupancy = RowOccupancy()
        assert occupancy.first_free_row(1, 3) == 0

        occupancy.occupy(0, 1, 3)
        assert occupancy.first_free_row(3, 4) == 1
        assert occupancy.first_free_row(4, 5) == 0
        assert occupancy.row_count == 1


class TestGreedyRowPacker:
    """Test row assignment."""

    def test_long_task_claims_first_row(self) -> None:
        tasks = [
            make_task("b", "2024-01-14", "2024-01-15"),
            make_task("c", "2024-01-16", "2024-01-17"),
            make_task("a", "2024-01-12", "2024-01-18"),
        ]

        positioned = GreedyRowPacker().pack(tasks, day_headers(), TimeUnit.DAY)
        rows = {p.name: p.y for p in positioned}

        assert rows == {"a": 0, "b": 1, "c": 1}

    def test_higher_priority_gets_lower_row(self) -> None:
        tasks = [
            make_task("low", "2024-01-14", "2024-01-15", priority=1),
            make_task("high", "2024-01-14", "2024-01-15", priority=5),
        ]

        positioned = GreedyRowPacker().pack(tasks, day_headers(), TimeUnit.DAY)

        assert {p.name: p.y for p in positioned} == {"high": 0, "low": 1}

    def test_full_ties_keep_input_order(self) -> None:
        tasks = [make_task(name, "2024-01-15") for name in ("first", "second", "third")]

        positioned = GreedyRowPacker().pack(tasks, day_headers(), TimeUnit.DAY)

        assert [(p.name, p.y) for p in positioned] == [("first", 0), ("second", 1), ("third", 2)]

    def test_tasks_outside_window_dropped(self) -> None:
        tasks = [
            make_task("visible", "2024-01-15"),
            make_task("before", "2023-12-01", "2023-12-05"),
        ]

        positioned = GreedyRowPacker().pack(tasks, day_headers(), TimeUnit.DAY)

        assert [p.name for p in positioned] == ["visible"]

    def test_empty_group(self) -> None:
        assert GreedyRowPacker().pack([], day_headers(), TimeUnit.DAY) == []


class TestPackFunction:
    """Test the packer seam."""

    def test_default_is_greedy(self) -> None:
        tasks = [make_task("a", "2024-01-15")]

        positioned = pack(tasks, day_headers(), TimeUnit.DAY)

        assert positioned == [PositionedTask(task=tasks[0], x_start=4, x_end=4, y=0)]

    def test_custom_packer(self) -> None:
        class OneRowPerTask:
            def pack(
                self, tasks: Sequence[Task], headers: Sequence[ColumnHeader], unit: TimeUnit
            ) -> list[PositionedTask]:
                return [
                    PositionedTask(task=task, x_start=1, x_end=len(headers), y=i)
                    for i, task in enumerate(tasks)
                ]

        tasks = [make_task("a", "2024-01-15"), make_task("b", "2024-01-16")]

        positioned = pack(tasks, day_headers(), TimeUnit.DAY, OneRowPerTask())

        assert [(p.name, p.y, p.span) for p in positioned] == [("a", 0, 7), ("b", 1, 7)]

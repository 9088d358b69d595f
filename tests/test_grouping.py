"""Tests for task grouping and group ordering."""

import pytest

from tasklane.grouping import (
    ALL_TASKS_GROUP,
    GroupOrderStore,
    coerce_group_by,
    generate_available_groups,
    group_key,
    group_tasks,
    sort_groups,
)
from tasklane.models import GroupBy
from tests.conftest import make_task


class TestGroupTasks:
    """Test partitioning tasks into groups."""

    def test_none_keeps_input_order(self) -> None:
        tasks = [
            make_task("b", "2024-01-02"),
            make_task("a", "2024-01-01"),
            make_task("c", "2024-01-03"),
        ]

        groups = group_tasks(tasks, GroupBy.NONE)

        assert list(groups) == [ALL_TASKS_GROUP]
        assert [t.name for t in groups[ALL_TASKS_GROUP]] == ["b", "a", "c"]

    def test_by_status_with_fallback(self) -> None:
        tasks = [
            make_task("a", "2024-01-01", status="In Progress"),
            make_task("b", "2024-01-01"),
            make_task("c", "2024-01-01", status="In Progress"),
        ]

        groups = group_tasks(tasks, "status")

        assert list(groups) == ["In Progress", "No Status"]
        assert [t.name for t in groups["In Progress"]] == ["a", "c"]
        assert [t.name for t in groups["No Status"]] == ["b"]

    def test_by_priority_uses_decimal_string(self) -> None:
        tasks = [
            make_task("a", "2024-01-01", priority=3),
            make_task("b", "2024-01-01"),
        ]

        groups = group_tasks(tasks, GroupBy.PRIORITY)

        assert set(groups) == {"3", "No Priority"}

    def test_by_category_with_fallback(self) -> None:
        task = make_task("a", "2024-01-01")

        assert group_key(task, GroupBy.CATEGORY) == "No Category"
        assert group_key(make_task("b", "2024-01-01", category="Ops"), "category") == "Ops"

    def test_unknown_group_by_falls_back_to_single_group(self) -> None:
        tasks = [make_task("a", "2024-01-01", status="Blocked")]

        groups = group_tasks(tasks, "owner")

        assert groups == {ALL_TASKS_GROUP: tasks}
        assert group_key(tasks[0], "owner") == ALL_TASKS_GROUP

    def test_coerce_group_by(self) -> None:
        assert coerce_group_by("priority") == GroupBy.PRIORITY
        assert coerce_group_by(None) == GroupBy.NONE
        assert coerce_group_by("") == GroupBy.NONE
        assert coerce_group_by("bogus") is None


class TestSortGroups:
    """Test domain ordering of group names."""

    def test_priority_descending_no_priority_last(self) -> None:
        groups = ["2", "No Priority", "5", "1"]

        assert sort_groups(groups, GroupBy.PRIORITY) == ["5", "2", "1", "No Priority"]

    def test_priority_accepts_prefixed_names(self) -> None:
        groups = ["Priority 1", "Priority 4"]

        assert sort_groups(groups, GroupBy.PRIORITY) == ["Priority 4", "Priority 1"]

    def test_status_domain_order_then_alphabetical(self) -> None:
        groups = ["Completed", "Zeta", "Blocked", "No Status", "Alpha"]

        assert sort_groups(groups, GroupBy.STATUS) == [
            "Blocked",
            "Completed",
            "No Status",
            "Alpha",
            "Zeta",
        ]

    def test_category_alphabetical(self) -> None:
        assert sort_groups(["Ops", "Backend", "Frontend"], GroupBy.CATEGORY) == [
            "Backend",
            "Frontend",
            "Ops",
        ]


class TestGroupOrderStore:
    """Test remembered group order per project."""

    def test_new_category_groups_appended(self) -> None:
        store = GroupOrderStore()

        assert store.stable_order(["Ops", "Backend"], "proj", GroupBy.CATEGORY) == [
            "Backend",
            "Ops",
        ]
        assert store.stable_order(
            ["Ops", "Backend", "Frontend", "Alpha"], "proj", GroupBy.CATEGORY
        ) == ["Backend", "Ops", "Alpha", "Frontend"]

    def test_absent_groups_hidden_but_remembered(self) -> None:
        store = GroupOrderStore()
        store.stable_order(["Ops", "Backend"], "proj", GroupBy.CATEGORY)

        assert store.stable_order(["Ops"], "proj", GroupBy.CATEGORY) == ["Ops"]
        assert store.get("proj", GroupBy.CATEGORY) == ["Backend", "Ops"]

    def test_manual_category_order_survives(self) -> None:
        store = GroupOrderStore()
        store.stable_order(["Backend", "Ops"], "proj", GroupBy.CATEGORY)

        assert store.move("proj", GroupBy.CATEGORY, 1, 0) == ["Ops", "Backend"]
        assert store.stable_order(["Backend", "Ops", "Docs"], "proj", GroupBy.CATEGORY) == [
            "Ops",
            "Backend",
            "Docs",
        ]

    def test_new_priority_group_triggers_resort(self) -> None:
        store = GroupOrderStore()
        store.stable_order(["3", "1"], "proj", GroupBy.PRIORITY)
        store.move("proj", GroupBy.PRIORITY, 0, 1)
        assert store.get("proj", GroupBy.PRIORITY) == ["1", "3"]

        assert store.stable_order(["1", "3", "5"], "proj", GroupBy.PRIORITY) == ["5", "3", "1"]

    def test_projects_are_isolated(self) -> None:
        store = GroupOrderStore()
        store.stable_order(["Ops", "Backend"], "one", GroupBy.CATEGORY)
        store.move("one", GroupBy.CATEGORY, 0, 1)

        assert store.stable_order(["Ops", "Backend"], "two", GroupBy.CATEGORY) == [
            "Backend",
            "Ops",
        ]

    def test_move_clamps_target(self) -> None:
        store = GroupOrderStore({"proj": {"category": ["A", "B", "C"]}})

        assert store.move("proj", "category", 0, 99) == ["B", "C", "A"]

    def test_move_invalid_source_raises(self) -> None:
        store = GroupOrderStore()

        with pytest.raises(IndexError):
            store.move("proj", GroupBy.CATEGORY, 0, 1)


class TestGenerateAvailableGroups:
    """Test listing the groups present among tasks."""

    def test_none_is_single_group(self) -> None:
        assert generate_available_groups([], GroupBy.NONE) == [ALL_TASKS_GROUP]

    def test_sorted_without_store(self) -> None:
        tasks = [
            make_task("a", "2024-01-01", priority=1),
            make_task("b", "2024-01-01"),
            make_task("c", "2024-01-01", priority=4),
            make_task("d", "2024-01-01", priority=1),
        ]

        assert generate_available_groups(tasks, GroupBy.PRIORITY) == ["4", "1", "No Priority"]

    def test_uses_store_order(self) -> None:
        store = GroupOrderStore({"proj": {"category": ["Ops", "Backend"]}})
        tasks = [
            make_task("a", "2024-01-01", category="Backend"),
            make_task("b", "2024-01-01", category="Ops"),
        ]

        groups = generate_available_groups(tasks, "category", store=store, project="proj")

        assert groups == ["Ops", "Backend"]

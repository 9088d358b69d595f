"""Task grouping and stable group ordering."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .logger import get_logger
from .models import GroupBy, Task

logger = get_logger()

ALL_TASKS_GROUP = "All Tasks"
NO_STATUS_GROUP = "No Status"
NO_PRIORITY_GROUP = "No Priority"
NO_CATEGORY_GROUP = "No Category"

# Domain order for status groups; unknown statuses sort alphabetically after these
STATUS_ORDER = [
    "Not Started",
    "In Progress",
    "Blocked",
    "Review",
    "Completed",
    "Cancelled",
    NO_STATUS_GROUP,
]


def coerce_group_by(group_by: GroupBy | str | None) -> GroupBy | None:
    """Map a raw group-by setting to GroupBy, or None when unknown."""
    if group_by is None or group_by == "":
        return GroupBy.NONE
    if isinstance(group_by, GroupBy):
        return group_by
    try:
        return GroupBy(group_by)
    except ValueError:
        return None


def group_key(task: Task, group_by: GroupBy | str | None) -> str:
    """Compute the group name a task belongs to.

    Unknown group-by values (e.g. stale persisted settings) resolve to the
    catch-all group instead of raising.
    """
    resolved = coerce_group_by(group_by)
    if resolved == GroupBy.STATUS:
        return task.status or NO_STATUS_GROUP
    if resolved == GroupBy.PRIORITY:
        return str(task.priority) if task.priority else NO_PRIORITY_GROUP
    if resolved == GroupBy.CATEGORY:
        return task.category or NO_CATEGORY_GROUP
    return ALL_TASKS_GROUP


def group_tasks(tasks: Sequence[Task], group_by: GroupBy | str | None) -> dict[str, list[Task]]:
    """Partition tasks into groups, keeping discovery order and input order."""
    resolved = coerce_group_by(group_by)
    if resolved is None:
        logger.checks(f"Unknown group_by {group_by!r}, using a single group")
    if resolved in (GroupBy.NONE, None):
        return {ALL_TASKS_GROUP: list(tasks)}

    groups: dict[str, list[Task]] = {}
    for task in tasks:
        groups.setdefault(group_key(task, resolved), []).append(task)
    return groups


def _priority_value(group: str) -> int | None:
    if group == NO_PRIORITY_GROUP:
        return None
    match = re.search(r"(\d+)$", group)
    return int(match.group(1)) if match else None


def _priority_sort_key(group: str) -> tuple[int, int, str]:
    value = _priority_value(group)
    if value is None:
        return (1, 0, group)
    return (0, -value, group)


def _status_sort_key(group: str) -> tuple[int, int, str]:
    if group in STATUS_ORDER:
        return (0, STATUS_ORDER.index(group), "")
    return (1, 0, group)


def sort_groups(groups: Iterable[str], group_by: GroupBy | str | None) -> list[str]:
    """Sort group names by their domain order.

    priority: highest first, "No Priority" last; status: STATUS_ORDER, then
    unknown statuses alphabetically; anything else alphabetically.
    """
    resolved = coerce_group_by(group_by)
    if resolved == GroupBy.PRIORITY:
        return sorted(groups, key=_priority_sort_key)
    if resolved == GroupBy.STATUS:
        return sorted(groups, key=_status_sort_key)
    return sorted(groups)


class GroupOrderStore:
    """Remembers the display order of groups per project and group-by key.

    Known groups keep their stored order. New status/priority groups trigger
    a full re-sort by domain order; other new groups are appended
    alphabetically without disturbing the existing order.
    """

    def __init__(self, orderings: dict[str, dict[str, list[str]]] | None = None) -> None:
        self.orderings: dict[str, dict[str, list[str]]] = orderings or {}

    def get(self, project: str, group_by: GroupBy | str) -> list[str]:
        return list(self.orderings.get(project, {}).get(str(_group_by_value(group_by)), []))

    def stable_order(
        self, discovered: Sequence[str], project: str, group_by: GroupBy | str
    ) -> list[str]:
        """Order discovered groups, remembering the result for next time."""
        key = str(_group_by_value(group_by))
        existing = self.orderings.setdefault(project, {}).setdefault(key, [])
        discovered_set = set(discovered)

        ordered = [group for group in existing if group in discovered_set]
        new_groups = [group for group in dict.fromkeys(discovered) if group not in existing]

        if new_groups:
            resolved = coerce_group_by(group_by)
            if resolved in (GroupBy.STATUS, GroupBy.PRIORITY):
                ordered = sort_groups([*ordered, *new_groups], resolved)
            else:
                ordered.extend(sort_groups(new_groups, resolved))
            self.orderings[project][key] = list(ordered)
            logger.changes(f"Group order for {project}/{key}: {', '.join(ordered)}")

        return ordered

    def move(
        self,
        project: str,
        group_by: GroupBy | str,
        source_index: int,
        target_index: int,
    ) -> list[str]:
        """Move a group from one position to another (drag reorder).

        Raises:
            IndexError: If source_index is out of range
        """
        key = str(_group_by_value(group_by))
        order = self.orderings.setdefault(project, {}).setdefault(key, [])
        group = order.pop(source_index)
        target = max(0, min(target_index, len(order)))
        order.insert(target, group)
        return list(order)


def _group_by_value(group_by: GroupBy | str) -> str:
    return group_by.value if isinstance(group_by, GroupBy) else group_by


def generate_available_groups(
    tasks: Sequence[Task],
    group_by: GroupBy | str | None,
    store: GroupOrderStore | None = None,
    project: str | None = None,
) -> list[str]:
    """List the groups present among tasks in display order.

    With a store and project the remembered order is used; otherwise groups
    are sorted by their domain order.
    """
    resolved = coerce_group_by(group_by)
    if resolved in (GroupBy.NONE, None):
        return [ALL_TASKS_GROUP]

    discovered = list(dict.fromkeys(group_key(task, resolved) for task in tasks))
    if store is not None and project is not None:
        return store.stable_order(discovered, project, resolved)
    return sort_groups(discovered, resolved)

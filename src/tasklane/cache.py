"""Bounded memo of computed board layouts."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .models import BoardLayout, GroupBy, Task, TimeUnit

DEFAULT_MAX_ENTRIES = 10
DEFAULT_VIEWPORT_MARKER = "default"


@dataclass(frozen=True)
class LayoutCacheKey:
    """Fingerprint of every input that affects a layout.

    Compared by value; any differing field is a cache miss. Tasks compare
    on all of their fields and available_groups in its given order.
    """

    tasks: tuple[Task, ...]
    time_unit: TimeUnit
    anchor_date: date
    viewport: tuple[date, date] | str
    group_by: str
    available_groups: tuple[str, ...]
    column_count: int
    today: date | None = None

    @classmethod
    def build(  # noqa: PLR0913 - one argument per fingerprint field
        cls,
        tasks: Sequence[Task],
        time_unit: TimeUnit,
        anchor_date: date,
        viewport: tuple[date, date] | None,
        group_by: GroupBy | str | None,
        available_groups: Sequence[str],
        column_count: int,
        today: date | None = None,
    ) -> LayoutCacheKey:
        group_by_value = group_by.value if isinstance(group_by, GroupBy) else str(group_by)
        return cls(
            tasks=tuple(tasks),
            time_unit=time_unit,
            anchor_date=anchor_date,
            viewport=viewport if viewport is not None else DEFAULT_VIEWPORT_MARKER,
            group_by=group_by_value,
            available_groups=tuple(available_groups),
            column_count=column_count,
            today=today,
        )


class LayoutCache:
    """Insertion-ordered cache holding at most max_entries layouts.

    Hits return the stored object itself and do not refresh its position;
    once the cap is exceeded the single oldest entry is evicted.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        self.max_entries = max_entries
        self._entries: OrderedDict[LayoutCacheKey, BoardLayout] = OrderedDict()

    def get(self, key: LayoutCacheKey) -> BoardLayout | None:
        return self._entries.get(key)

    def put(self, key: LayoutCacheKey, layout: BoardLayout) -> None:
        self._entries[key] = layout
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

# src/cleannest/lists/stats.py

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.models import CleaningTask, GroceryItem, TaskCategory

ALL = "all"


@dataclass(frozen=True, slots=True)
class ProgressStats:
    done: int
    total: int

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 0
        # Half-up rounding (the built-in round() is banker's rounding).
        return int(math.floor(self.done / self.total * 100 + 0.5))

    def __str__(self) -> str:
        return f"{self.done}/{self.total} ({self.percent}%)"


def filter_tasks(tasks: Iterable[CleaningTask], category: TaskCategory | str = ALL) -> list[CleaningTask]:
    if isinstance(category, str) and category.strip().lower() == ALL:
        return list(tasks)
    wanted = TaskCategory.parse(category)
    return [t for t in tasks if t.category == wanted]


def task_progress(tasks: Iterable[CleaningTask]) -> ProgressStats:
    tasks = list(tasks)
    return ProgressStats(done=sum(1 for t in tasks if t.completed), total=len(tasks))


def item_progress(items: Iterable[GroceryItem]) -> ProgressStats:
    items = list(items)
    return ProgressStats(done=sum(1 for i in items if i.purchased), total=len(items))

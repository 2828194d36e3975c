# src/cleannest/lists/tasks.py

from __future__ import annotations

import logging
from datetime import date

from ..core.models import (
    CleaningTask,
    TaskCategory,
    TaskPatch,
    clean_due_date,
    clean_optional_text,
    clean_required_text,
)
from .collection import CollectionManager
from .seed import DEMO_USER_ID, seed_tasks
from .stats import filter_tasks

logger = logging.getLogger(__name__)


class TaskCollection(CollectionManager[CleaningTask, TaskPatch]):
    """The signed-in user's cleaning tasks."""

    kind = "task"
    id_prefix = "task"

    def _seed(self) -> list[CleaningTask]:
        return seed_tasks(self._seed_owner_id or DEMO_USER_ID)

    @property
    def tasks(self) -> tuple[CleaningTask, ...]:
        return self.records

    def by_category(self, category: TaskCategory | str) -> list[CleaningTask]:
        """Tasks in one category; "all" returns every task."""
        return filter_tasks(self._records, category)

    async def add(
        self,
        *,
        title: str,
        category: TaskCategory | str,
        description: str | None = None,
        due_date: date | str | None = None,
    ) -> CleaningTask | None:
        """
        Create a task for the active user and prepend it.

        Returns None (and does nothing) when nobody is signed in, or when the
        user signs out or changes before the create delay elapses.
        """
        user = self._session.user
        if user is None:
            logger.debug("add task ignored: no active user")
            return None

        clean_title = clean_required_text("title", title)
        clean_category = TaskCategory.parse(category)
        clean_description = clean_optional_text("description", description)
        clean_due = clean_due_date(due_date)

        await self._sleep(self._delays.create)
        if self._user_left(user, "add"):
            return None

        now = self._clock()
        task = CleaningTask(
            id=self._new_id(),
            user_id=user.id,
            title=clean_title,
            description=clean_description,
            category=clean_category,
            completed=False,
            due_date=clean_due,
            created_at=now,
            updated_at=now,
        )
        self._prepend(task)
        logger.debug("task added id=%s category=%s", task.id, task.category.value)
        return task

    async def toggle_complete(self, task_id: str, completed: bool) -> bool:
        return await self.update(task_id, TaskPatch(completed=completed))

# src/cleannest/lists/seed.py

"""
Static seed data used to populate the collections on load/refetch.

Every call builds fresh record objects, so a refetch never shares state with
a previous load.
"""

from __future__ import annotations

from datetime import date, datetime

from ..core.models import CleaningTask, GroceryItem, TaskCategory, User

DEMO_USER_ID = "mock-user-123"
DEMO_USER_EMAIL = "demo@cleannest.com"


def _ts(raw: str) -> datetime:
    # fromisoformat accepts the trailing "Z" on Python 3.11+.
    return datetime.fromisoformat(raw)


def demo_user(user_id: str = DEMO_USER_ID, email: str = DEMO_USER_EMAIL) -> User:
    return User(id=user_id, email=email)


_TASK_ROWS: tuple[tuple[str, str, str | None, TaskCategory, bool, str | None, str, str], ...] = (
    (
        "1",
        "Vacuum living room",
        "Focus on under the couch and around the coffee table",
        TaskCategory.WEEKLY,
        False,
        "2024-06-26",
        "2024-06-20T10:00:00Z",
        "2024-06-20T10:00:00Z",
    ),
    (
        "2",
        "Wipe down kitchen counters",
        None,
        TaskCategory.DAILY,
        True,
        None,
        "2024-06-20T09:00:00Z",
        "2024-06-24T08:00:00Z",
    ),
    (
        "3",
        "Clean bathroom mirrors",
        "Use glass cleaner for streak-free finish",
        TaskCategory.WEEKLY,
        False,
        "2024-06-28",
        "2024-06-19T15:30:00Z",
        "2024-06-19T15:30:00Z",
    ),
    (
        "4",
        "Deep clean refrigerator",
        "Remove all items, clean shelves and drawers",
        TaskCategory.MONTHLY,
        False,
        "2024-07-01",
        "2024-06-18T12:00:00Z",
        "2024-06-18T12:00:00Z",
    ),
    (
        "5",
        "Make beds",
        None,
        TaskCategory.DAILY,
        True,
        None,
        "2024-06-24T07:00:00Z",
        "2024-06-24T07:30:00Z",
    ),
)

_ITEM_ROWS: tuple[tuple[str, str, str | None, int, bool, str, str], ...] = (
    ("1", "All-purpose cleaner", "Lysol", 2, False, "2024-06-20T10:00:00Z", "2024-06-20T10:00:00Z"),
    ("2", "Paper towels", "Bounty", 4, True, "2024-06-19T14:00:00Z", "2024-06-23T16:00:00Z"),
    ("3", "Glass cleaner", "Windex", 1, False, "2024-06-18T11:00:00Z", "2024-06-18T11:00:00Z"),
    ("4", "Toilet bowl cleaner", None, 2, False, "2024-06-17T09:00:00Z", "2024-06-17T09:00:00Z"),
    ("5", "Microfiber cloths", "Generic", 6, True, "2024-06-16T13:00:00Z", "2024-06-22T10:00:00Z"),
)


def seed_tasks(owner_id: str = DEMO_USER_ID) -> list[CleaningTask]:
    return [
        CleaningTask(
            id=task_id,
            user_id=owner_id,
            title=title,
            description=description,
            category=category,
            completed=completed,
            due_date=date.fromisoformat(due) if due else None,
            created_at=_ts(created),
            updated_at=_ts(updated),
        )
        for task_id, title, description, category, completed, due, created, updated in _TASK_ROWS
    ]


def seed_items(owner_id: str = DEMO_USER_ID) -> list[GroceryItem]:
    return [
        GroceryItem(
            id=item_id,
            user_id=owner_id,
            name=name,
            brand=brand,
            quantity=quantity,
            purchased=purchased,
            created_at=_ts(created),
            updated_at=_ts(updated),
        )
        for item_id, name, brand, quantity, purchased, created, updated in _ITEM_ROWS
    ]

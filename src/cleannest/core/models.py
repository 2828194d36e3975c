# src/cleannest/core/models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

from .errors import ValidationError

# Marks a patch field that was not supplied (None means "clear" on nullable fields).
_UNSET: Any = object()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskCategory(StrEnum):
    """How often a cleaning task recurs."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, raw: Any) -> TaskCategory:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValidationError(f"category must be one of: {allowed} (got {raw!r})") from None


@dataclass(frozen=True, slots=True)
class User:
    id: str
    email: str


@dataclass(frozen=True, slots=True)
class CleaningTask:
    id: str
    user_id: str
    title: str
    description: str | None
    category: TaskCategory
    completed: bool
    due_date: date | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class GroceryItem:
    id: str
    user_id: str
    name: str
    brand: str | None
    quantity: int
    purchased: bool
    created_at: datetime
    updated_at: datetime


# ---- field normalization (shared by add inputs and patches) ----


def clean_required_text(field_name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def clean_optional_text(field_name: str, value: Any) -> str | None:
    """Empty strings collapse to None, like an empty form field."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string or None")
    return value.strip() or None


def clean_due_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"due_date must be an ISO date (YYYY-MM-DD), got {value!r}") from None
    raise ValidationError(f"due_date must be a date, ISO string or None, got {type(value).__name__}")


def clean_quantity(value: Any) -> int:
    # bool is an int subclass; True is not a quantity.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"quantity must be an integer, got {value!r}")
    if value < 1:
        raise ValidationError(f"quantity must be >= 1, got {value}")
    return value


def clean_flag(field_name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean, got {value!r}")
    return value


# ---- patches ----


@dataclass(frozen=True, slots=True)
class TaskPatch:
    """
    Partial update of a CleaningTask.

    Omitted fields are left untouched; description=None / due_date=None clear the value.
    """

    title: Any = _UNSET
    description: Any = _UNSET
    category: Any = _UNSET
    completed: Any = _UNSET
    due_date: Any = _UNSET

    def changes(self) -> dict[str, Any]:
        """Validated field -> value mapping of everything this patch sets."""
        out: dict[str, Any] = {}
        if self.title is not _UNSET:
            out["title"] = clean_required_text("title", self.title)
        if self.description is not _UNSET:
            out["description"] = clean_optional_text("description", self.description)
        if self.category is not _UNSET:
            out["category"] = TaskCategory.parse(self.category)
        if self.completed is not _UNSET:
            out["completed"] = clean_flag("completed", self.completed)
        if self.due_date is not _UNSET:
            out["due_date"] = clean_due_date(self.due_date)
        return out

    def apply(self, task: CleaningTask, *, updated_at: datetime) -> CleaningTask:
        return replace(task, **self.changes(), updated_at=updated_at)


@dataclass(frozen=True, slots=True)
class ItemPatch:
    """Partial update of a GroceryItem. brand=None clears the brand."""

    name: Any = _UNSET
    brand: Any = _UNSET
    quantity: Any = _UNSET
    purchased: Any = _UNSET

    def changes(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name is not _UNSET:
            out["name"] = clean_required_text("name", self.name)
        if self.brand is not _UNSET:
            out["brand"] = clean_optional_text("brand", self.brand)
        if self.quantity is not _UNSET:
            out["quantity"] = clean_quantity(self.quantity)
        if self.purchased is not _UNSET:
            out["purchased"] = clean_flag("purchased", self.purchased)
        return out

    def apply(self, item: GroceryItem, *, updated_at: datetime) -> GroceryItem:
        return replace(item, **self.changes(), updated_at=updated_at)

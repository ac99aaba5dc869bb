"""Data models for the task dashboard.

Task records are immutable; the store replaces a record rather than editing
it. Priority, status and due-date vocabularies are plain string tuples so the
values shown to the user and the values compared in filters are the same.
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Tuple

PRIORITIES: Tuple[str, ...] = ("Low", "Medium", "High")
STATUSES: Tuple[str, ...] = ("All", "Completed", "Incomplete")
DUE_BUCKETS: Tuple[str, ...] = ("All", "Overdue", "Today", "Upcoming", "No Due Date")
ALL = "All"

DEFAULT_PRIORITY = "Medium"
DEFAULT_CATEGORY = "Frontend"
DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Frontend", "Backend", "Meeting", "Design", "Testing", "Documentation",
)


def new_task_id() -> str:
    """Return a fresh, collision resistant task id."""
    return uuid.uuid4().hex


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse an ISO 'YYYY-MM-DD' string; empty or None means no date.

    Raises ValueError for anything else.
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    return date.fromisoformat(raw)


@dataclass(frozen=True)
class Task:
    """A single unit of work.

    Fields:
        id: Opaque id, fixed at creation.
        name: Display label (validated non-empty by the form layer).
        priority: One of PRIORITIES.
        category: Free-form label.
        due_date: Optional calendar date; None means "no due date".
        assigned_user: Free-form assignee label.
        assigned_on: Date the task was assigned (defaults to today).
        completed: Completion flag.
    """
    id: str
    name: str
    priority: str = DEFAULT_PRIORITY
    category: str = DEFAULT_CATEGORY
    due_date: Optional[date] = None
    assigned_user: str = ""
    assigned_on: date = field(default_factory=date.today)
    completed: bool = False

    def __post_init__(self) -> None:
        if self.priority not in PRIORITIES:
            raise ValueError(f"Invalid priority: {self.priority!r}")

    def toggled(self) -> Task:
        return replace(self, completed=not self.completed)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, name={self.name}, priority={self.priority}, completed={self.completed})"


@dataclass(frozen=True)
class FilterSpec:
    """Currently selected filter predicates; "All" disables a dimension."""
    status: str = ALL
    priority: str = ALL
    category: str = ALL
    due_date: str = ALL
    assigned_user: str = ALL

    def __post_init__(self) -> None:
        if self.status not in STATUSES:
            raise ValueError(f"Invalid status filter: {self.status!r}")
        if self.priority != ALL and self.priority not in PRIORITIES:
            raise ValueError(f"Invalid priority filter: {self.priority!r}")
        if self.due_date not in DUE_BUCKETS:
            raise ValueError(f"Invalid due date filter: {self.due_date!r}")

    def with_field(self, name: str, value: str) -> FilterSpec:
        return replace(self, **{name: value})

    def is_default(self) -> bool:
        return self == FilterSpec()


TaskCollection = Tuple[Task, ...]

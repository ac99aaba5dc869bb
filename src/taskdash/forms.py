"""Task form: turns raw user input into ADD / UPDATE events.

The store never validates names; this is the boundary where empty names,
unknown priorities and malformed dates are rejected.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional

from taskdash.events import AddTask, Event, UpdateTask
from taskdash.models import (
    DEFAULT_CATEGORY, DEFAULT_PRIORITY, PRIORITIES, Task, new_task_id, parse_date,
)


class FormError(ValueError):
    """Raised when form input cannot become a task."""


@dataclass
class TaskForm:
    """Editable field values; dates are kept as the raw strings the user typed."""
    name: str = ""
    priority: str = DEFAULT_PRIORITY
    category: str = DEFAULT_CATEGORY
    due_date: str = ""
    assigned_user: str = ""
    assigned_on: str = ""

    @classmethod
    def for_new(cls, today: Optional[date] = None) -> TaskForm:
        return cls(assigned_on=(today or date.today()).isoformat())

    @classmethod
    def for_edit(cls, task: Task) -> TaskForm:
        return cls(
            name=task.name,
            priority=task.priority,
            category=task.category,
            due_date=task.due_date.isoformat() if task.due_date else "",
            assigned_user=task.assigned_user,
            assigned_on=task.assigned_on.isoformat(),
        )


def _date_field(label: str, raw: str) -> Optional[date]:
    try:
        return parse_date(raw)
    except ValueError:
        raise FormError(f"Invalid {label}: {raw!r} (expected YYYY-MM-DD)") from None


def build_event(form: TaskForm, editing: Optional[Task] = None,
                today: Optional[date] = None) -> Event:
    """Validate ``form`` and return the event to dispatch.

    Editing keeps the edited task's id and completion flag; creating gets a
    fresh id and starts incomplete.
    """
    name = form.name.strip()
    if not name:
        raise FormError("Task name required.")
    priority = form.priority.strip().capitalize()
    if priority not in PRIORITIES:
        raise FormError(f"Invalid priority: {form.priority!r} (choose {', '.join(PRIORITIES)})")
    due = _date_field("due date", form.due_date)
    assigned_on = _date_field("assigned-on date", form.assigned_on) or today or date.today()
    task = Task(
        id=editing.id if editing else new_task_id(),
        name=name,
        priority=priority,
        category=form.category.strip() or DEFAULT_CATEGORY,
        due_date=due,
        assigned_user=form.assigned_user.strip(),
        assigned_on=assigned_on,
        completed=editing.completed if editing else False,
    )
    if editing:
        return UpdateTask(task)
    return AddTask(task)

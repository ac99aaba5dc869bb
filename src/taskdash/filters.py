"""Filter evaluation over a task collection.

All predicates are combined with AND; a dimension set to "All" always
matches. Due-date buckets compare calendar dates, so the time of day never
matters.
"""
from __future__ import annotations
from datetime import date
from typing import Iterable, List, Optional, Tuple

from taskdash.models import ALL, FilterSpec, Task, TaskCollection


def due_bucket(task: Task, today: date) -> str:
    """Return 'Overdue', 'Today', 'Upcoming' or 'No Due Date' for ``task``."""
    if task.due_date is None:
        return "No Due Date"
    if task.due_date < today:
        return "Overdue"
    if task.due_date == today:
        return "Today"
    return "Upcoming"


def is_overdue(task: Task, today: date) -> bool:
    return not task.completed and task.due_date is not None and task.due_date < today


def is_due_today(task: Task, today: date) -> bool:
    return task.due_date is not None and task.due_date == today


def matches(task: Task, spec: FilterSpec, today: date) -> bool:
    if spec.status == "Completed" and not task.completed:
        return False
    if spec.status == "Incomplete" and task.completed:
        return False
    if spec.priority != ALL and task.priority != spec.priority:
        return False
    if spec.category != ALL and task.category != spec.category:
        return False
    if spec.assigned_user != ALL and task.assigned_user != spec.assigned_user:
        return False
    if spec.due_date != ALL and due_bucket(task, today) != spec.due_date:
        return False
    return True


def filter_tasks(tasks: Iterable[Task], spec: FilterSpec,
                 today: Optional[date] = None) -> TaskCollection:
    """Ordered subsequence of ``tasks`` matching every active predicate."""
    today = today or date.today()
    return tuple(t for t in tasks if matches(t, spec, today))


# -------------------- option sets --------------------
def _distinct(values: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return tuple(seen)


def category_options(tasks: Iterable[Task]) -> Tuple[str, ...]:
    """Distinct categories present, in first-seen order."""
    return _distinct(t.category for t in tasks)


def user_options(tasks: Iterable[Task]) -> Tuple[str, ...]:
    """Distinct assignees present, in first-seen order."""
    return _distinct(t.assigned_user for t in tasks)

"""Derived statistics for the dashboard and analytics pages.

Everything here is recomputed from the collection on each call. An empty
collection is a normal input and yields zero counts and 0% rates.

Percentages round half up (2.5 -> 3) to match how the dashboard has always
displayed them; Python's round() would give 2.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from taskdash.filters import is_due_today, is_overdue
from taskdash.models import Task, TaskCollection


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


@dataclass(frozen=True)
class UserStats:
    total: int = 0
    completed: int = 0

    @property
    def rate(self) -> int:
        return percent(self.completed, self.total)


@dataclass(frozen=True)
class DashboardCounts:
    total: int
    completed: int
    overdue: int
    due_today: int


# -------------------- counts --------------------
def category_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for t in tasks:
        counts[t.category] = counts.get(t.category, 0) + 1
    return counts


def priority_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for t in tasks:
        counts[t.priority] = counts.get(t.priority, 0) + 1
    return counts


def user_stats(tasks: Iterable[Task]) -> Dict[str, UserStats]:
    out: Dict[str, UserStats] = {}
    for t in tasks:
        cur = out.get(t.assigned_user, UserStats())
        out[t.assigned_user] = UserStats(cur.total + 1, cur.completed + int(t.completed))
    return out


def completion_rate(tasks: Sequence[Task]) -> int:
    done = sum(1 for t in tasks if t.completed)
    return percent(done, len(tasks))


def dashboard_counts(tasks: Sequence[Task], today: Optional[date] = None) -> DashboardCounts:
    today = today or date.today()
    return DashboardCounts(
        total=len(tasks),
        completed=sum(1 for t in tasks if t.completed),
        overdue=sum(1 for t in tasks if is_overdue(t, today)),
        due_today=sum(1 for t in tasks if is_due_today(t, today) and not t.completed),
    )


def average_tasks_per_user(tasks: Sequence[Task]) -> int:
    users = len(user_stats(tasks))
    if users == 0:
        return 0
    return round_half_up(len(tasks) / users)


def category_share(count: int, total: int) -> int:
    """Percentage of ``total`` taken by ``count`` (bar width on the analytics page)."""
    return percent(count, total)


# -------------------- dashboard lists --------------------
def recent_tasks(tasks: Iterable[Task], limit: int = 5) -> TaskCollection:
    """Most recently assigned first; ties keep collection order."""
    ordered: List[Task] = sorted(tasks, key=lambda t: t.assigned_on, reverse=True)
    return tuple(ordered[:limit])


def high_priority_open(tasks: Iterable[Task], limit: int = 5) -> TaskCollection:
    return tuple(t for t in tasks if t.priority == "High" and not t.completed)[:limit]

"""Terminal renderers for the dashboard pages.

Every ``render_*`` function returns a list of lines; the CLI prints them.
Column widths are computed on plain text and colour is applied after
padding, so ANSI codes never disturb alignment.
"""
from __future__ import annotations
import shutil
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from taskdash import stats
from taskdash.filters import is_due_today, is_overdue
from taskdash.models import Task, FilterSpec
from taskdash.theme import (
    color, BOLD, DIM, STRIKE, PRIORITY_COLOR, HEADER_COLOR, ID_COLOR, EMPTY_COLOR,
    DONE_COLOR, OVERDUE_COLOR,
)

SEP = " | "
MIN_NAME_WIDTH = 16
SHORT_ID_LEN = 8
BAR_WIDTH = 20
COLUMNS: Tuple[str, ...] = ("id", "done", "name", "priority", "category", "user", "due")
HEADER_TITLES: Dict[str, str] = {
    "id": "ID", "done": "OK", "name": "TASK", "priority": "PRIORITY",
    "category": "CATEGORY", "user": "ASSIGNEE", "due": "DUE",
}


def terminal_width() -> int:
    return shutil.get_terminal_size((120, 30)).columns


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LEN]


def bar(pct: int, width: int = BAR_WIDTH) -> str:
    filled = max(0, min(width, (pct * width) // 100))
    return "█" * filled + "░" * (width - filled)


def wrap_words(text: str, limit: int) -> List[str]:
    """Greedy word wrap; a single word longer than ``limit`` keeps its own line."""
    limit = max(1, limit)
    lines: List[str] = []
    current = ''
    for w in text.split():
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= limit:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = w
    if current:
        lines.append(current)
    return lines or ['<untitled>']


# -------------------- task table --------------------
def _due_text(task: Task, today: date) -> str:
    if task.due_date is None:
        return "-"
    text = task.due_date.isoformat()
    if is_overdue(task, today):
        return text + " !"
    if is_due_today(task, today):
        return text + " *"
    return text


def _task_cells(task: Task, today: date) -> Dict[str, str]:
    return {
        "id": short_id(task.id),
        "done": "[x]" if task.completed else "[ ]",
        "name": task.name,
        "priority": task.priority,
        "category": task.category,
        "user": task.assigned_user or "-",
        "due": _due_text(task, today),
    }


def _compute_column_widths(rows: Sequence[Dict[str, str]], term_width: int) -> Dict[str, int]:
    widths: Dict[str, int] = {}
    for col in COLUMNS:
        longest = len(HEADER_TITLES[col])
        for row in rows:
            longest = max(longest, len(row[col]))
        widths[col] = longest
    widths["name"] = max(widths["name"], MIN_NAME_WIDTH)
    sep_total = len(SEP) * (len(COLUMNS) - 1)
    fixed = sum(w for c, w in widths.items() if c != "name") + sep_total
    if fixed + widths["name"] > term_width:
        widths["name"] = max(MIN_NAME_WIDTH, term_width - fixed)
    return widths


def _style_for(col: str, task: Task, today: date) -> str:
    if task.completed:
        return DONE_COLOR + (STRIKE if col == "name" else '')
    if col == "priority":
        return PRIORITY_COLOR.get(task.priority, '')
    if col == "due" and is_overdue(task, today):
        return OVERDUE_COLOR
    if col == "id":
        return ID_COLOR
    return ''


def _pad(text: str, width: int) -> str:
    return text + ' ' * max(0, width - len(text))


def render_task_table(tasks: Sequence[Task], today: date,
                      term_width: Optional[int] = None) -> List[str]:
    if not tasks:
        return [color('(no tasks)', EMPTY_COLOR)]
    rows = [_task_cells(t, today) for t in tasks]
    widths = _compute_column_widths(rows, term_width or terminal_width())
    lines: List[str] = []
    header = SEP.join(color(_pad(HEADER_TITLES[c], widths[c]), HEADER_COLOR, BOLD) for c in COLUMNS)
    lines.append(header.rstrip())
    lines.append(SEP.join(color('-' * widths[c], HEADER_COLOR) for c in COLUMNS))
    for task, row in zip(tasks, rows):
        name_lines = wrap_words(row["name"], widths["name"])
        for idx, name_part in enumerate(name_lines):
            cells: List[str] = []
            for c in COLUMNS:
                if c == "name":
                    text = name_part
                elif idx == 0:
                    text = row[c]
                else:
                    text = ''
                cells.append(color(_pad(text, widths[c]), _style_for(c, task, today)) if text
                             else _pad(text, widths[c]))
            lines.append(SEP.join(cells).rstrip())
    return lines


def render_compact(tasks: Sequence[Task], today: date, empty: str) -> List[str]:
    """One line per task, as used by the dashboard lists."""
    if not tasks:
        return ['  ' + color(empty, EMPTY_COLOR)]
    out: List[str] = []
    for t in tasks:
        mark = color("[x]", DONE_COLOR) if t.completed else "[ ]"
        prio = color(t.priority, PRIORITY_COLOR.get(t.priority, ''))
        extra = ''
        if is_overdue(t, today):
            extra = ' ' + color('overdue', OVERDUE_COLOR)
        elif is_due_today(t, today) and not t.completed:
            extra = ' ' + color('due today', PRIORITY_COLOR['Medium'])
        out.append(f"  {mark} {color(short_id(t.id), ID_COLOR)} {t.name} ({prio}){extra}")
    return out


# -------------------- pages --------------------
def render_dashboard(tasks: Sequence[Task], today: date) -> List[str]:
    counts = stats.dashboard_counts(tasks, today)
    lines = [
        color("Dashboard", HEADER_COLOR, BOLD) + color(f"  ({today.isoformat()})", DIM),
        f"Total Tasks: {counts.total}   Completed: {counts.completed}   "
        f"Due Today: {counts.due_today}   Overdue: {counts.overdue}",
        '',
        color("Recent Tasks", HEADER_COLOR, BOLD),
    ]
    lines += render_compact(stats.recent_tasks(tasks), today, "No tasks yet")
    lines += ['', color("High Priority", HEADER_COLOR, BOLD)]
    lines += render_compact(stats.high_priority_open(tasks), today, "No high priority tasks")
    return lines


def render_filters(spec: FilterSpec) -> str:
    parts = [
        f"status={spec.status}", f"priority={spec.priority}", f"category={spec.category}",
        f"due={spec.due_date}", f"user={spec.assigned_user}",
    ]
    return color("Filters: ", DIM) + ', '.join(parts)


def render_tasks_page(all_tasks: Sequence[Task], shown: Sequence[Task], spec: FilterSpec,
                      today: date, term_width: Optional[int] = None) -> List[str]:
    title = f"All Tasks ({len(shown)})"
    if len(shown) != len(all_tasks):
        title += f" of {len(all_tasks)}"
    lines = [color(title, HEADER_COLOR, BOLD), render_filters(spec), '']
    if not shown and all_tasks:
        lines.append(color('(no tasks match the current filters)', EMPTY_COLOR))
        return lines
    return lines + render_task_table(shown, today, term_width)


def render_analytics(tasks: Sequence[Task]) -> List[str]:
    total = len(tasks)
    by_category = stats.category_counts(tasks)
    by_priority = stats.priority_counts(tasks)
    by_user = stats.user_stats(tasks)
    lines = [
        color("Analytics", HEADER_COLOR, BOLD),
        f"Completion Rate: {stats.completion_rate(tasks)}%   "
        f"Total Categories: {len(by_category)}   Team Members: {len(by_user)}   "
        f"Avg Tasks/User: {stats.average_tasks_per_user(tasks)}",
        '',
        color("Tasks by Category", HEADER_COLOR, BOLD),
    ]
    label_w = max([len(k) for k in list(by_category) + list(by_priority) + list(by_user)] + [8])
    for category, count in by_category.items():
        lines.append(f"  {_pad(category, label_w)} {bar(stats.category_share(count, total))} {count}")
    lines += ['', color("Tasks by Priority", HEADER_COLOR, BOLD)]
    for priority, count in by_priority.items():
        filled = color(bar(stats.category_share(count, total)), PRIORITY_COLOR.get(priority, ''))
        lines.append(f"  {_pad(priority, label_w)} {filled} {count}")
    lines += ['', color("Team Performance", HEADER_COLOR, BOLD)]
    if not by_user:
        lines.append('  ' + color('(no team members)', EMPTY_COLOR))
    for user, us in by_user.items():
        lines.append(f"  {_pad(user or '-', label_w)} {us.completed}/{us.total} {bar(us.rate)} {us.rate}%")
    return lines


def render_settings(members: Sequence[str], categories: Sequence[str]) -> List[str]:
    lines = [color("Settings", HEADER_COLOR, BOLD), '', color("Team Members", HEADER_COLOR, BOLD)]
    lines += ['  - ' + m for m in members] or ['  ' + color('(none)', EMPTY_COLOR)]
    lines += ['', color("Categories", HEADER_COLOR, BOLD)]
    lines += ['  - ' + c for c in categories] or ['  ' + color('(none)', EMPTY_COLOR)]
    return lines

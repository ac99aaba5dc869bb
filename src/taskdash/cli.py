"""Interactive dashboard loop.

The CLI is the view layer: it owns transient view state (current page,
active filters, the settings lists) and talks to the TaskStore only through
``get_state`` and ``dispatch``. Filters are never stored in the store.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

import click

from taskdash import views
from taskdash.config import Settings
from taskdash.events import DeleteTask, ToggleComplete
from taskdash.filters import category_options, filter_tasks, user_options
from taskdash.forms import FormError, TaskForm, build_event
from taskdash.models import (
    ALL, DEFAULT_CATEGORIES, DUE_BUCKETS, PRIORITIES, STATUSES, FilterSpec, TaskCollection,
)
from taskdash.store import TaskStore

logger = logging.getLogger(__name__)


def _clear_screen() -> None:
    # ESC[3J (scrollback) first, then home / clear / home
    click.echo("\033[3J\033[H\033[2J\033[H", nl=False)


def _enter_alt_screen() -> None:
    click.echo("\033[?1049h", nl=False)


def _leave_alt_screen() -> None:
    click.echo("\033[?1049l", nl=False)


PAGE_ALIASES = {
    'd': 'dashboard',
    'dash': 'dashboard',
    'dashboard': 'dashboard',
    't': 'tasks',
    'tasks': 'tasks',
    'a': 'analytics',
    'analytics': 'analytics',
    's': 'settings',
    'settings': 'settings',
}

FILTER_FIELDS = {
    'status': 'status',
    'priority': 'priority',
    'category': 'category',
    'cat': 'category',
    'due': 'due_date',
    'user': 'assigned_user',
}

CLEAR_WORDS = ('-', 'none')

_FIXED_CHOICES = {
    'status': STATUSES,
    'priority': (ALL,) + PRIORITIES,
    'due_date': DUE_BUCKETS,
}


def _merge_new(existing: List[str], values: Sequence[str]) -> None:
    for v in values:
        if v and v not in existing:
            existing.append(v)


class DashboardCLI:
    def __init__(self, store: TaskStore, settings: Optional[Settings] = None,
                 prompt: Callable[..., str] = click.prompt,
                 confirm: Callable[..., bool] = click.confirm):
        self.store = store
        self.settings = settings or Settings()
        self.prompt = prompt
        self.confirm = confirm
        self.page: str = 'dashboard'
        self.filters: FilterSpec = FilterSpec()
        self.message: Optional[str] = None
        tasks = store.get_state()
        self.members: List[str] = list(user_options(tasks))
        self.categories: List[str] = list(DEFAULT_CATEGORIES)
        _merge_new(self.categories, category_options(tasks))
        self._known_users = set(user_options(tasks))
        self._known_categories = set(category_options(tasks))
        self._unsubscribe = store.subscribe(self._on_change)

    @property
    def today(self) -> date:
        return self.settings.current_date()

    def _on_change(self, tasks: TaskCollection) -> None:
        # only values the change introduced; removals from the lists stick
        users, categories = user_options(tasks), category_options(tasks)
        _merge_new(self.members, [u for u in users if u not in self._known_users])
        _merge_new(self.categories, [c for c in categories if c not in self._known_categories])
        self._known_users = set(users)
        self._known_categories = set(categories)

    def close(self) -> None:
        self._unsubscribe()

    # -------------------- main loop --------------------
    def run(self) -> None:
        """REPL: redraw the current page, read a command, apply it."""
        exit_message: Optional[str] = None
        if self.settings.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                for line in self.render():
                    click.echo(line)
                if self.message:
                    click.echo("\n" + self.message)
                    self.message = None
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return...")
                    continue
                if lower in ('exit', 'quit', 'q'):
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError, click.Abort):
            exit_message = "Interrupted. Goodbye."
        finally:
            self.close()
            if self.settings.alt_screen:
                _leave_alt_screen()
            if exit_message:
                click.echo(exit_message)

    def render(self) -> List[str]:
        tasks = self.store.get_state()
        if self.page == 'tasks':
            shown = filter_tasks(tasks, self.filters, self.today)
            return views.render_tasks_page(tasks, shown, self.filters, self.today)
        if self.page == 'analytics':
            return views.render_analytics(tasks)
        if self.page == 'settings':
            return views.render_settings(self.members, self.categories)
        return views.render_dashboard(tasks, self.today)

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        logger.debug("Command %r on page %s", line, self.page)
        if cmd in PAGE_ALIASES and len(tokens) == 1:
            self.page = PAGE_ALIASES[cmd]
        elif cmd == 'add':
            self._cmd_add(tokens)
        elif cmd == 'edit':
            self._cmd_edit(tokens)
        elif cmd in ('done', 'toggle'):
            self._cmd_toggle(tokens)
        elif cmd in ('rm', 'delete'):
            self._cmd_rm(tokens)
        elif cmd == 'filter':
            self._cmd_filter(tokens)
        elif cmd == 'member':
            self._cmd_setting(tokens, self.members, 'Team member')
        elif cmd == 'cat':
            self._cmd_setting(tokens, self.categories, 'Category')
        else:
            self.message = "Unknown command. Type 'help' for instructions."

    def resolve_id(self, raw: str) -> Optional[str]:
        """Exact id, else a unique id prefix; sets ``message`` when unresolved."""
        raw = raw.rstrip('.')
        if not raw:
            self.message = "Task id required."
            return None
        ids = [t.id for t in self.store.get_state()]
        if raw in ids:
            return raw
        hits = [i for i in ids if i.startswith(raw)]
        if len(hits) == 1:
            return hits[0]
        self.message = f'Task id {raw} is ambiguous.' if hits else f'Task id {raw} not found.'
        return None

    # ---- individual command helpers ----
    def _cmd_add(self, tokens: List[str]) -> None:
        form = TaskForm.for_new(self.today)
        if len(tokens) > 1:  # inline shorthand, defaults for everything else
            form.name = ' '.join(tokens[1:])
        else:
            self._fill_form(form)
        self._submit(form)

    def _cmd_edit(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self.message = "Usage: edit <id>"
            return
        task_id = self.resolve_id(tokens[1])
        if task_id is None:
            return
        task = self.store.find(task_id)
        form = TaskForm.for_edit(task)
        self._fill_form(form)
        self._submit(form, editing=task)

    def _fill_form(self, form: TaskForm) -> None:
        form.name = self.prompt("Task name", default=form.name or '', show_default=bool(form.name))
        form.priority = self.prompt(f"Priority ({'/'.join(PRIORITIES)})", default=form.priority)
        form.category = self.prompt(f"Category [{', '.join(self.categories)}]", default=form.category)
        form.due_date = self._prompt_due(form.due_date)
        form.assigned_user = self.prompt(f"Assigned to [{', '.join(self.members)}]",
                                         default=form.assigned_user, show_default=bool(form.assigned_user))
        form.assigned_on = self.prompt("Assigned on (YYYY-MM-DD)", default=form.assigned_on)

    def _prompt_due(self, current: str) -> str:
        """Blank keeps ``current``; '-' or 'none' clears it."""
        hint = f"current {current}, '-' to clear" if current else "blank for none"
        answer = self.prompt(f"Due date (YYYY-MM-DD, {hint})", default='', show_default=False).strip()
        if answer.lower() in CLEAR_WORDS:
            return ''
        return answer or current

    def _submit(self, form: TaskForm, editing=None) -> None:
        try:
            event = build_event(form, editing=editing, today=self.today)
        except FormError as exc:
            self.message = str(exc)
            return
        self.store.dispatch(event)
        verb = 'updated' if editing else 'added'
        self.message = f'Task "{event.task.name}" {verb}.'

    def _cmd_toggle(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self.message = "Usage: done <id>"
            return
        task_id = self.resolve_id(tokens[1])
        if task_id is None:
            return
        self.store.dispatch(ToggleComplete(task_id))
        task = self.store.find(task_id)
        state = 'completed' if task and task.completed else 'reopened'
        self.message = f'Task {views.short_id(task_id)} {state}.'

    def _cmd_rm(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self.message = "Usage: rm <id>"
            return
        task_id = self.resolve_id(tokens[1])
        if task_id is None:
            return
        task = self.store.find(task_id)
        if not self.confirm(f'Delete "{task.name}"?', default=False):
            self.message = "Delete cancelled."
            return
        self.store.dispatch(DeleteTask(task_id))
        self.message = f'Task {views.short_id(task_id)} removed.'

    def _cmd_filter(self, tokens: List[str]) -> None:
        self.page = 'tasks'
        if len(tokens) == 1:
            return
        if len(tokens) == 2 and tokens[1].lower() in ('reset', 'clear'):
            self.filters = FilterSpec()
            return
        if len(tokens) < 3 or tokens[1].lower() not in FILTER_FIELDS:
            self.message = "Usage: filter <status|priority|category|due|user> <value> | filter reset"
            return
        field_name = FILTER_FIELDS[tokens[1].lower()]
        value = self._match_choice(field_name, ' '.join(tokens[2:]))
        if value is None:
            self.message = f"Invalid {tokens[1].lower()} value: {' '.join(tokens[2:])}"
            return
        self.filters = self.filters.with_field(field_name, value)

    def _match_choice(self, field_name: str, raw: str) -> Optional[str]:
        if field_name in _FIXED_CHOICES:
            choices: Sequence[str] = _FIXED_CHOICES[field_name]
        else:
            tasks = self.store.get_state()
            opts = category_options(tasks) if field_name == 'category' else user_options(tasks)
            choices = (ALL,) + opts
        for choice in choices:
            if choice.lower() == raw.lower():
                return choice
        if field_name in _FIXED_CHOICES:
            return None
        # free-form labels may name a value no task carries yet
        return raw

    def _cmd_setting(self, tokens: List[str], values: List[str], label: str) -> None:
        self.page = 'settings'
        if len(tokens) < 3 or tokens[1].lower() not in ('add', 'rm'):
            self.message = f"Usage: {tokens[0].lower()} add|rm <name>"
            return
        value = ' '.join(tokens[2:]).strip()
        if tokens[1].lower() == 'add':
            if value and value not in values:
                values.append(value)
        elif value in values:
            values.remove(value)
        else:
            self.message = f'{label} "{value}" not found.'

    # -------------------- help --------------------
    def _help(self) -> None:
        click.echo("Commands:")
        click.echo("  dash | tasks | analytics | settings   Switch page (d/t/a/s)")
        click.echo("  add                 Add a task (prompts for each field)")
        click.echo("  add <name...>       Shorthand add with default fields")
        click.echo("  edit <id>           Edit a task (prompts, current values as defaults)")
        click.echo("  done <id>           Toggle completed")
        click.echo("  rm <id>             Delete a task (asks for confirmation)")
        click.echo("  filter <field> <v>  Fields: status, priority, category, due, user")
        click.echo("  filter reset        Clear all filters")
        click.echo("  member add|rm <n>   Edit team member list")
        click.echo("  cat add|rm <label>  Edit category list")
        click.echo("  help                Show this help (press Enter to return)")
        click.echo("  exit                Quit")
        click.echo("\nIds may be shortened to any unique prefix.")

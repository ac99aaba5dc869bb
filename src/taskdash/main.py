"""Entry point for the terminal task dashboard."""
from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Optional

import click

from taskdash import views
from taskdash.cli import DashboardCLI
from taskdash.config import Settings, load_settings
from taskdash.filters import filter_tasks
from taskdash.logging_setup import setup_logging
from taskdash.models import ALL, DUE_BUCKETS, PRIORITIES, STATUSES, FilterSpec
from taskdash.store import TaskStore

logger = logging.getLogger(__name__)

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _today(settings: Settings, override: Optional[datetime]) -> date:
    return override.date() if override else settings.current_date()


@click.group(invoke_without_command=True)
@click.option("--no-seed", is_flag=True, help="Start with an empty task list.")
@click.pass_context
def main(ctx: click.Context, no_seed: bool) -> None:
    """Task dashboard. Without a subcommand, starts the interactive view."""
    settings = load_settings()
    setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)
    store = TaskStore.seeded() if settings.seed and not no_seed else TaskStore()
    logger.info("Starting with %s", store)
    ctx.obj = {"settings": settings, "store": store}
    if ctx.invoked_subcommand is None:
        DashboardCLI(store, settings).run()


@main.command("tasks")
@click.option("--status", type=click.Choice(STATUSES), default=ALL, show_default=True)
@click.option("--priority", type=click.Choice((ALL,) + PRIORITIES), default=ALL, show_default=True)
@click.option("--category", default=ALL, show_default=True)
@click.option("--user", "assigned_user", default=ALL, show_default=True)
@click.option("--due", type=click.Choice(DUE_BUCKETS), default=ALL, show_default=True)
@click.option("--today", "today_opt", type=_DATE, default=None, help="Evaluate due dates as of this date.")
@click.pass_obj
def tasks_cmd(obj, status, priority, category, assigned_user, due, today_opt) -> None:
    """Print the task list, optionally filtered."""
    store: TaskStore = obj["store"]
    today = _today(obj["settings"], today_opt)
    spec = FilterSpec(status=status, priority=priority, category=category,
                      due_date=due, assigned_user=assigned_user)
    tasks = store.get_state()
    for line in views.render_tasks_page(tasks, filter_tasks(tasks, spec, today), spec, today):
        click.echo(line)


@main.command("stats")
@click.option("--today", "today_opt", type=_DATE, default=None, help="Evaluate due dates as of this date.")
@click.pass_obj
def stats_cmd(obj, today_opt) -> None:
    """Print dashboard counts and analytics."""
    store: TaskStore = obj["store"]
    today = _today(obj["settings"], today_opt)
    tasks = store.get_state()
    for line in views.render_dashboard(tasks, today) + [''] + views.render_analytics(tasks):
        click.echo(line)


if __name__ == "__main__":
    main()

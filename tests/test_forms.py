# tests/test_forms.py

from __future__ import annotations

from datetime import date

import pytest

from taskdash.events import AddTask, UpdateTask
from taskdash.forms import FormError, TaskForm, build_event
from taskdash.models import Task
from taskdash.store import TaskStore


def test_new_form_defaults(today: date) -> None:
    form = TaskForm.for_new(today)
    assert form.priority == "Medium"
    assert form.category == "Frontend"
    assert form.due_date == ""
    assert form.assigned_on == "2025-08-20"


def test_create_builds_add_event(today: date) -> None:
    form = TaskForm.for_new(today)
    form.name = "  Write release notes "
    form.priority = "high"
    form.due_date = "2025-09-01"
    form.assigned_user = " Dana "
    event = build_event(form, today=today)
    assert isinstance(event, AddTask)
    task = event.task
    assert task.name == "Write release notes"
    assert task.priority == "High"
    assert task.due_date == date(2025, 9, 1)
    assert task.assigned_user == "Dana"
    assert task.assigned_on == today
    assert task.completed is False
    assert task.id


def test_fresh_ids_per_submission(today: date) -> None:
    form = TaskForm(name="same")
    a = build_event(form, today=today).task.id
    b = build_event(form, today=today).task.id
    assert a != b


def test_blank_assigned_on_defaults_to_today(today: date) -> None:
    event = build_event(TaskForm(name="x"), today=today)
    assert event.task.assigned_on == today


def test_edit_keeps_id_and_completed(store: TaskStore, today: date) -> None:
    original = store.find("2")
    form = TaskForm.for_edit(original)
    assert form.due_date == "2025-08-08"
    form.name = "Design dashboard v2"
    form.due_date = ""
    event = build_event(form, editing=original, today=today)
    assert isinstance(event, UpdateTask)
    assert event.task.id == "2"
    assert event.task.completed is True
    assert event.task.due_date is None
    store.dispatch(event)
    assert store.find("2").name == "Design dashboard v2"


@pytest.mark.parametrize("name", ["", "   ", "\t"])
def test_empty_name_rejected(name: str, today: date) -> None:
    with pytest.raises(FormError, match="name required"):
        build_event(TaskForm(name=name), today=today)


def test_bad_priority_rejected(today: date) -> None:
    with pytest.raises(FormError, match="priority"):
        build_event(TaskForm(name="x", priority="Urgent"), today=today)


def test_bad_date_rejected(today: date) -> None:
    with pytest.raises(FormError, match="due date"):
        build_event(TaskForm(name="x", due_date="next week"), today=today)
    with pytest.raises(FormError, match="assigned-on"):
        build_event(TaskForm(name="x", assigned_on="2025-13-01"), today=today)


def test_task_rejects_unknown_priority() -> None:
    with pytest.raises(ValueError):
        Task(id="1", name="x", priority="Critical")

# tests/test_store.py

from __future__ import annotations

from dataclasses import replace

from taskdash.events import AddTask, DeleteTask, ToggleComplete, UpdateTask
from taskdash.models import new_task_id
from taskdash.stats import completion_rate
from taskdash.store import TaskStore, reduce_tasks

from .factories import make_task


def test_add_appends_to_end() -> None:
    tasks = (make_task("a"), make_task("b"))
    new = make_task("c")
    out = reduce_tasks(tasks, AddTask(new))
    assert len(out) == len(tasks) + 1
    assert out[-1] == new
    assert out[:2] == tasks


def test_add_does_not_check_duplicate_ids() -> None:
    tasks = (make_task("a"),)
    out = reduce_tasks(tasks, AddTask(make_task("a", name="again")))
    assert [t.id for t in out] == ["a", "a"]


def test_reducer_never_mutates_input(store: TaskStore) -> None:
    before = store.get_state()
    snapshot = tuple(before)
    reduce_tasks(before, ToggleComplete("1"))
    reduce_tasks(before, DeleteTask("2"))
    reduce_tasks(before, UpdateTask(replace(before[0], name="changed")))
    assert before == snapshot


def test_delete_removes_matching_task(store: TaskStore) -> None:
    out = reduce_tasks(store.get_state(), DeleteTask("3"))
    assert [t.id for t in out] == ["1", "2", "4", "5", "6"]


def test_delete_unknown_id_is_noop(store: TaskStore) -> None:
    state = store.get_state()
    out = reduce_tasks(state, DeleteTask("nonexistent"))
    assert out == state
    assert out is state


def test_toggle_twice_restores_state(store: TaskStore) -> None:
    state = store.get_state()
    once = reduce_tasks(state, ToggleComplete("4"))
    assert once[3].completed is True
    assert once[:3] == state[:3] and once[4:] == state[4:]
    assert reduce_tasks(once, ToggleComplete("4")) == state


def test_toggle_unknown_id_is_noop(store: TaskStore) -> None:
    state = store.get_state()
    assert reduce_tasks(state, ToggleComplete("99")) is state


def test_update_replaces_in_place(store: TaskStore) -> None:
    state = store.get_state()
    edited = replace(state[2], name="Setup CI", priority="Low")
    out = reduce_tasks(state, UpdateTask(edited))
    assert out[2] == edited
    assert [t.id for t in out] == [t.id for t in state]


def test_update_unknown_id_leaves_state_unchanged(store: TaskStore) -> None:
    state = store.get_state()
    out = reduce_tasks(state, UpdateTask(make_task("missing")))
    assert out is state


def test_unknown_event_is_ignored(store: TaskStore) -> None:
    state = store.get_state()
    assert reduce_tasks(state, object()) is state
    assert reduce_tasks(state, "ADD_TASK") is state


def test_seed_scenario_toggle_task_three(store: TaskStore) -> None:
    assert len(store) == 6
    assert completion_rate(store.get_state()) == 33
    store.dispatch(ToggleComplete("3"))
    tasks = store.get_state()
    assert sum(1 for t in tasks if t.completed) == 3
    assert completion_rate(tasks) == 50


def test_dispatch_applies_events_in_order() -> None:
    store = TaskStore()
    tid = new_task_id()
    store.dispatch(AddTask(make_task(tid)))
    store.dispatch(ToggleComplete(tid))
    store.dispatch(UpdateTask(make_task(tid, name="renamed", completed=True)))
    assert store.find(tid).name == "renamed"
    store.dispatch(DeleteTask(tid))
    assert store.get_state() == ()
    assert store.find(tid) is None


def test_subscribers_notified_only_on_change(store: TaskStore) -> None:
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.dispatch(ToggleComplete("1"))
    store.dispatch(DeleteTask("nope"))
    assert len(seen) == 1
    assert seen[0] is store.get_state()
    unsubscribe()
    store.dispatch(ToggleComplete("1"))
    assert len(seen) == 1


def test_unsubscribe_twice_is_harmless(store: TaskStore) -> None:
    unsubscribe = store.subscribe(lambda tasks: None)
    unsubscribe()
    unsubscribe()


def test_new_task_ids_are_unique() -> None:
    ids = {new_task_id() for _ in range(1000)}
    assert len(ids) == 1000

"""Task store: the pure transition function and the container that owns state.

``reduce_tasks`` maps (collection, event) to a new collection and never
mutates its input. When an event matches nothing the input tuple itself is
returned, so "unchanged" can be checked by identity.

``TaskStore`` is the single owner of the current collection. Views get it by
reference, read with ``get_state`` and write with ``dispatch``; subscribers are
told synchronously whenever a dispatch actually changed the collection.
"""
from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional

from taskdash.events import AddTask, DeleteTask, Event, ToggleComplete, UpdateTask
from taskdash.models import Task, TaskCollection

logger = logging.getLogger(__name__)

Listener = Callable[[TaskCollection], None]


# -------------------- transition function --------------------
def reduce_tasks(tasks: TaskCollection, event: object) -> TaskCollection:
    """Apply one event to ``tasks`` and return the resulting collection."""
    if isinstance(event, AddTask):
        return tasks + (event.task,)
    if isinstance(event, DeleteTask):
        kept = tuple(t for t in tasks if t.id != event.task_id)
        return tasks if len(kept) == len(tasks) else kept
    if isinstance(event, ToggleComplete):
        return _replace_matching(tasks, event.task_id, lambda t: t.toggled())
    if isinstance(event, UpdateTask):
        # update only touches existing ids; an unknown id is not an insert
        return _replace_matching(tasks, event.task.id, lambda _t: event.task)
    logger.debug("Ignoring unknown event %r", event)
    return tasks


def _replace_matching(tasks: TaskCollection, task_id: str,
                      make: Callable[[Task], Task]) -> TaskCollection:
    out: List[Task] = []
    found = False
    for task in tasks:
        if task.id == task_id:
            out.append(make(task))
            found = True
        else:
            out.append(task)
    return tuple(out) if found else tasks


# -------------------- state container --------------------
class TaskStore:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: TaskCollection = tuple(tasks or ())
        self._listeners: List[Listener] = []

    @classmethod
    def seeded(cls) -> TaskStore:
        """Store pre-populated with the example tasks."""
        from taskdash.seed import seed_tasks
        return cls(seed_tasks())

    # ---- read ----
    def get_state(self) -> TaskCollection:
        return self._tasks

    def find(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # ---- write ----
    def dispatch(self, event: Event) -> None:
        """Apply ``event``; notify listeners if the collection changed."""
        before = self._tasks
        after = reduce_tasks(before, event)
        if after is before:
            logger.debug("No-op %s", type(event).__name__)
            return
        self._tasks = after
        logger.debug("Applied %s; %d tasks", type(event).__name__, len(after))
        for listener in list(self._listeners):
            listener(after)

    # ---- change notification ----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def __len__(self) -> int:
        return len(self._tasks)

    def __str__(self) -> str:
        done = sum(1 for t in self._tasks if t.completed)
        return f'Tasks: {len(self._tasks)}, Completed: {done}'

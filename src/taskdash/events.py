"""Events accepted by the task store.

Each event is a small frozen dataclass; ``Event`` is the closed union the
reducer understands. Anything else handed to the reducer is ignored.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from taskdash.models import Task


@dataclass(frozen=True)
class AddTask:
    task: Task


@dataclass(frozen=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True)
class ToggleComplete:
    task_id: str


@dataclass(frozen=True)
class UpdateTask:
    task: Task


Event = Union[AddTask, DeleteTask, ToggleComplete, UpdateTask]

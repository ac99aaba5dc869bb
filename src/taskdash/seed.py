"""Example tasks loaded into a fresh store for demos and tests."""
from __future__ import annotations
from datetime import date

from taskdash.models import Task, TaskCollection


def seed_tasks() -> TaskCollection:
    return (
        Task(id='1', name='Implement user authentication', priority='High', category='Backend',
             due_date=date(2025, 8, 10), assigned_user='Alice Johnson',
             assigned_on=date(2025, 8, 1), completed=False),
        Task(id='2', name='Design dashboard wireframes', priority='Medium', category='Design',
             due_date=date(2025, 8, 8), assigned_user='Bob Smith',
             assigned_on=date(2025, 8, 2), completed=True),
        Task(id='3', name='Setup CI/CD pipeline', priority='High', category='Backend',
             due_date=date(2025, 8, 3), assigned_user='Charlie Brown',
             assigned_on=date(2025, 7, 30), completed=False),
        Task(id='4', name='Write unit tests', priority='Medium', category='Testing',
             due_date=date(2025, 8, 12), assigned_user='Alice Johnson',
             assigned_on=date(2025, 8, 5), completed=False),
        Task(id='5', name='Update documentation', priority='Low', category='Documentation',
             due_date=date(2025, 8, 15), assigned_user='Bob Smith',
             assigned_on=date(2025, 8, 6), completed=True),
        Task(id='6', name='Client meeting preparation', priority='High', category='Meeting',
             due_date=date(2025, 8, 9), assigned_user='Charlie Brown',
             assigned_on=date(2025, 8, 7), completed=False),
    )

# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest

from taskdash.config import Settings
from taskdash.store import TaskStore

# Fixed "today" used across tests: after every seed due date.
TODAY = date(2025, 8, 20)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore.seeded()


@pytest.fixture()
def settings() -> Settings:
    return Settings(alt_screen=False, today=TODAY, seed=True)


@pytest.fixture(autouse=True)
def wide_terminal(monkeypatch) -> None:
    """Render tables at a fixed width regardless of the real terminal."""
    monkeypatch.setenv("COLUMNS", "200")

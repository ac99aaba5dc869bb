# tests/test_main.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskdash.main import main


@pytest.fixture()
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    monkeypatch.setenv("TASKDASH_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TASKDASH_ALT_SCREEN", "0")
    monkeypatch.delenv("TASKDASH_TODAY", raising=False)
    monkeypatch.delenv("TASKDASH_SEED", raising=False)
    root = logging.getLogger()
    saved = list(root.handlers)
    yield CliRunner()
    for h in list(root.handlers):
        if h not in saved:
            root.removeHandler(h)
            h.close()
    for h in saved:
        if h not in root.handlers:
            root.addHandler(h)


def test_tasks_filtered(runner: CliRunner) -> None:
    result = runner.invoke(main, ["tasks", "--status", "Incomplete", "--due", "Overdue",
                                  "--today", "2025-08-20"])
    assert result.exit_code == 0, result.output
    assert "All Tasks (4) of 6" in result.output
    assert "Setup CI/CD pipeline" in result.output
    assert "Update documentation" not in result.output


def test_tasks_rejects_bad_choice(runner: CliRunner) -> None:
    result = runner.invoke(main, ["tasks", "--priority", "Urgent"])
    assert result.exit_code != 0
    assert "Urgent" in result.output


def test_stats(runner: CliRunner) -> None:
    result = runner.invoke(main, ["stats", "--today", "2025-08-10"])
    assert result.exit_code == 0, result.output
    assert "Total Tasks: 6   Completed: 2   Due Today: 1   Overdue: 2" in result.output
    assert "Completion Rate: 33%" in result.output
    assert "Avg Tasks/User: 2" in result.output


def test_today_from_environment(runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("TASKDASH_TODAY", "2025-08-10")
    result = runner.invoke(main, ["stats"])
    assert "Due Today: 1" in result.output


def test_no_seed(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--no-seed", "stats"])
    assert result.exit_code == 0, result.output
    assert "Total Tasks: 0" in result.output
    assert "Completion Rate: 0%" in result.output


def test_interactive_session(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(main, [], input="add Ship it\ntasks\nexit\n")
    assert result.exit_code == 0, result.output
    assert "Ship it" in result.output
    assert "Goodbye." in result.output
    assert (tmp_path / "logs" / "taskdash.log").exists()

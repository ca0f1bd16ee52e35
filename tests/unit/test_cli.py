from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from roster.config import get_settings
from roster.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("ROSTER_FILE", str(tmp_path / "default.csv"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    get_settings.cache_clear()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_info_shows_effective_settings(tmp_path: Path):
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert f"roster_file={tmp_path / 'default.csv'}" in result.output
    assert "log_level=WARNING" in result.output


def test_show_prints_roster(roster_file: Path):
    result = runner.invoke(app, ["show", str(roster_file)])

    assert result.exit_code == 0
    assert "Loaded 2 student(s)" in result.output
    assert "Lovelace" in result.output
    assert "Hopper" in result.output


def test_show_filters_by_query(roster_file: Path):
    result = runner.invoke(app, ["show", str(roster_file), "--query", "HOP"])

    assert result.exit_code == 0
    assert "Hopper" in result.output
    assert "Lovelace" not in result.output


def test_show_reports_no_matches(roster_file: Path):
    result = runner.invoke(app, ["show", str(roster_file), "-q", "zz"])

    assert result.exit_code == 0
    assert "No matches." in result.output


def test_show_missing_file_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["show", str(tmp_path / "absent.csv")])

    assert result.exit_code == 1
    assert "Failed to load" in result.output


def test_shell_loads_file_and_lists(roster_file: Path):
    result = runner.invoke(app, ["shell", "--load", str(roster_file)], input="5\n0\n")

    assert result.exit_code == 0
    assert "Loaded 2 student(s)" in result.output
    assert "Hopper" in result.output
    assert "Bye." in result.output


def test_shell_exits_cleanly_on_end_of_input():
    result = runner.invoke(app, ["shell"], input="")

    assert result.exit_code == 0
    assert "Welcome to the Student Record Management System" in result.output
    assert "Bye." in result.output

"""
Pytest configuration for the roster manager.

Provides fixtures for:
- Settings isolated from the caller's environment
- Empty and pre-populated stores
- Roster files written to a temporary directory
"""

from __future__ import annotations

import io
from datetime import date
from pathlib import Path

import pytest
from rich.console import Console

from roster.config import Settings
from roster.store import RosterStore


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides; ignores any local `.env`.
    """
    return Settings(
        _env_file=None,
        log_level="DEBUG",
        roster_file=str(tmp_path / "students.csv"),
    )


@pytest.fixture
def store() -> RosterStore:
    return RosterStore()


@pytest.fixture
def seeded_store(store: RosterStore) -> RosterStore:
    """
    Store holding Ada (id 1), Grace (id 2) and Alan (id 3).
    """
    store.add("Ada", "Lovelace", date(1815, 12, 10), "Mathematics", 4.0)
    store.add("Grace", "Hopper", date(1906, 12, 9), "Computer Science", 3.9)
    store.add("Alan", "Turing", date(1912, 6, 23), "", 3.75)
    return store


@pytest.fixture
def roster_file(tmp_path: Path) -> Path:
    """
    Hand-written roster file in the persisted format.
    """
    path = tmp_path / "roster.csv"
    path.write_text(
        "#id,firstName,lastName,dob,major,gpa\n"
        "1,Ada,Lovelace,1815-12-10,Mathematics,4.00\n"
        "2,Grace,Hopper,1906-12-09,Computer Science,3.90\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def console() -> Console:
    """Console writing to memory; read it back with `console.file.getvalue()`."""
    return Console(file=io.StringIO(), width=500, color_system=None)

from __future__ import annotations

import io
from datetime import date
from pathlib import Path

import pytest
from rich.console import Console

from roster.config import Settings
from roster.prompts import PromptReader
from roster.shell import RosterShell
from roster.store import RosterStore


def _reader(console: Console, *answers: str) -> PromptReader:
    return PromptReader(console, stream=io.StringIO("".join(f"{a}\n" for a in answers)))


def _run(store: RosterStore, console: Console, settings: Settings, *answers: str) -> str:
    shell = RosterShell(store, console=console, reader=_reader(console, *answers), settings=settings)
    shell.run()
    return console.file.getvalue()


# -- PromptReader -----------------------------------------------------------


def test_read_int_reprompts_until_integer(console: Console):
    reader = _reader(console, "abc", "4.5", " 12 ")

    assert reader.read_int("ID") == 12
    assert console.file.getvalue().count("Enter an integer.") == 2


def test_read_date_reprompts_until_iso_date(console: Console):
    reader = _reader(console, "12/10/1815", "18151210", "1815-12-10")

    assert reader.read_date("DOB") == date(1815, 12, 10)
    assert console.file.getvalue().count("Date must be in YYYY-MM-DD format.") == 2


def test_read_bounded_float_enforces_bounds(console: Console):
    reader = _reader(console, "high", "4.5", "-1", "nan", "3.5")

    assert reader.read_bounded_float("GPA", 0.0, 4.0) == 3.5
    output = console.file.getvalue()
    assert output.count("Enter a numeric value.") == 1
    assert output.count("Value must be between 0.00 and 4.00") == 3


def test_read_optional_blank_is_none(console: Console):
    reader = _reader(console, "   ", " Poetry ")

    assert reader.read_optional("Major") is None
    assert reader.read_optional("Major") == "Poetry"


def test_reader_raises_eof_when_stream_ends(console: Console):
    reader = _reader(console)

    with pytest.raises(EOFError):
        reader.read_text("anything")


# -- RosterShell ------------------------------------------------------------


def test_add_then_list(store, console, test_settings):
    output = _run(
        store,
        console,
        test_settings,
        "1", "Ada", "Lovelace", "bad-date", "1815-12-10", "Mathematics", "9", "4.0",
        "5",
        "0",
    )

    assert "Added: Student{id=1, name=Ada Lovelace, dob=1815-12-10, major=Mathematics, gpa=4.00}" in output
    assert "Lovelace" in output.split("Added:")[1]
    assert output.rstrip().endswith("Bye.")
    assert len(store) == 1


def test_add_reports_invalid_data(store, console, test_settings):
    output = _run(store, console, test_settings, "1", "  ", "Lovelace", "1815-12-10", "", "3.0", "0")

    assert "Invalid data: first_name: cannot be empty" in output
    assert len(store) == 0


def test_update_blank_answers_keep_values(seeded_store, console, test_settings):
    output = _run(seeded_store, console, test_settings, "2", "1", "", "", "", "Poetry", "", "0")

    assert "Current: Student{id=1" in output
    assert "Updated." in output
    record = seeded_store.get(1)
    assert record.major == "Poetry"
    assert record.full_name == "Ada Lovelace"
    assert record.gpa == 4.0


@pytest.mark.parametrize(
    "answers, message",
    [
        (("2", "1", "", "", "1815/12/10"), "Invalid date format. Update cancelled."),
        (("2", "1", "", "", "18151210"), "Invalid date format. Update cancelled."),
        (("2", "1", "", "", "", "", "abc"), "Invalid GPA. Update cancelled."),
        (("2", "1", "", "", "", "", "7.5"), "Update failed."),
        (("2", "99"), "No student with ID 99"),
    ],
)
def test_update_failures(seeded_store, console, test_settings, answers, message):
    output = _run(seeded_store, console, test_settings, *answers, "0")

    assert message in output
    assert seeded_store.get(1).gpa == 4.0


def test_remove_view_and_search(seeded_store, console, test_settings):
    output = _run(
        seeded_store,
        console,
        test_settings,
        "3", "2",
        "3", "2",
        "4", "1",
        "4", "2",
        "6", "TUR",
        "6", "nobody",
        "0",
    )

    assert "Removed." in output
    assert "No student with ID 2" in output
    assert "Student{id=1, name=Ada Lovelace" in output
    assert "Turing" in output
    assert "No matches." in output


def test_list_empty_store(store, console, test_settings):
    output = _run(store, console, test_settings, "5", "0")

    assert "No students." in output


def test_unknown_option_and_eof_exit(store, console, test_settings):
    output = _run(store, console, test_settings, "42")

    assert "Unknown option." in output
    assert output.rstrip().endswith("Bye.")


def test_save_and_load_through_menu(seeded_store, console, test_settings):
    default_path = Path(test_settings.roster_file)
    fresh = RosterStore()

    _run(seeded_store, console, test_settings, "7", "", "0")
    output = _run(fresh, console, test_settings, "8", "", "5", "0")

    assert default_path.exists()
    assert f"Saved 3 student(s) to {default_path}" in output
    assert f"Loaded 3 student(s) from {default_path}" in output
    assert [r.id for r in fresh.list_all()] == [1, 2, 3]


def test_load_failure_is_reported(store, console, test_settings, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("1,Ada\n", encoding="utf-8")

    output = _run(store, console, test_settings, "8", str(bad), "8", str(tmp_path / "none.csv"), "0")

    assert output.count("Failed to load:") == 2
    assert len(store) == 0


def test_save_failure_is_reported(store, console, test_settings, tmp_path):
    target = tmp_path / "missing" / "out.csv"

    output = _run(store, console, test_settings, "7", str(target), "0")

    assert "Failed to save:" in output

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from roster.config import get_settings
from roster.errors import FormatError, PersistenceError
from roster.reporter import print_records
from roster.shell import RosterShell
from roster.store import RosterStore
from roster.utils.logging import configure_logging

app = typer.Typer(help="Student roster manager CLI.")


def _open_store(path: Optional[Path]) -> RosterStore:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    store = RosterStore(encoding=settings.roster_encoding)
    if path is None:
        return store
    try:
        count = store.load_from_file(path)
    except (PersistenceError, FormatError) as exc:
        typer.echo(f"Failed to load {path}: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Loaded {count} student(s) from {path}")
    return store


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | roster_file={settings.roster_file} "
        f"encoding={settings.roster_encoding} | log_level={settings.log_level} "
        f"json_logs={settings.log_json}"
    )


@app.command()
def shell(
    load: Optional[Path] = typer.Option(
        None,
        "--load",
        "-l",
        help="Roster file to load before the menu starts.",
    ),
) -> None:
    """
    Start the interactive menu (add, update, remove, view, list, search, save, load).
    """
    store = _open_store(load)
    RosterShell(store, settings=get_settings()).run()


@app.command()
def show(
    path: Path = typer.Argument(..., help="Saved roster file to print."),
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Only show students whose name contains this text (case-insensitive).",
    ),
) -> None:
    """
    Print the students in a saved roster file, sorted by ID.
    """
    store = _open_store(path)
    records = store.list_all() if query is None else store.search(query)
    print_records(
        records,
        console=Console(),
        title=escape(str(path)),
        empty_message="No matches." if query is not None else "No students.",
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

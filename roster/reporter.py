from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from roster.domain.models import StudentRecord


def build_table(records: Iterable[StudentRecord], title: Optional[str] = None) -> Table:
    """
    Render students as a rich table, one row per record in the given order.
    """
    table = Table(title=title, box=box.ROUNDED)

    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Date of Birth", style="green", no_wrap=True)
    table.add_column("Major", style="yellow")
    table.add_column("GPA", justify="right", style="bold green")

    for record in records:
        dob = record.date_of_birth.isoformat() if record.date_of_birth else "N/A"
        major = escape(record.major) if record.major else "[dim]Undeclared[/dim]"
        table.add_row(
            str(record.id),
            escape(record.full_name),
            dob,
            major,
            f"{record.gpa:.2f}",
        )

    return table


def print_records(
    records: Iterable[StudentRecord],
    console: Optional[Console] = None,
    title: Optional[str] = None,
    empty_message: str = "No students.",
) -> None:
    """Print a table of students, or ``empty_message`` when there are none."""
    console = console or Console()
    records = list(records)

    if not records:
        console.print(f"[yellow]{escape(empty_message)}[/yellow]")
        return

    table = build_table(records, title=title)
    table.caption = f"{len(records)} student(s), sorted by ID"
    console.print(table)


__all__ = ["build_table", "print_records"]

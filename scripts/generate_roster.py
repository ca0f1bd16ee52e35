"""
Sample roster generator for the roster manager.

Builds a deterministic pseudo-random set of students through `RosterStore`
and saves it in the regular roster file format, handy for demos and for
trying out `roster show` / `roster shell --load`.
"""

from __future__ import annotations

import random
import sys
import time
from datetime import date, timedelta
from pathlib import Path

import typer

from roster.store import RosterStore

app = typer.Typer(help="Generate a sample roster file.")

FIRST_NAMES = ["Ada", "Grace", "Alan", "Barbara", "Edsger", "Katherine", "Donald", "Frances"]
LAST_NAMES = ["Lovelace", "Hopper", "Turing", "Liskov", "Dijkstra", "Johnson", "Knuth", "Allen"]
MAJORS = ["Mathematics", "Computer Science", "Physics", "History, Modern", ""]


def _generate_store(rows: int, seed: int) -> RosterStore:
    rng = random.Random(seed)
    store = RosterStore()
    earliest = date(1990, 1, 1)

    for _ in range(rows):
        store.add(
            rng.choice(FIRST_NAMES),
            rng.choice(LAST_NAMES),
            earliest + timedelta(days=rng.randint(0, 365 * 15)),
            rng.choice(MAJORS),
            round(rng.uniform(0.0, 4.0), 2),
        )
    return store


def _generate_roster_file(path: Path, rows: int, seed: int) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    return _generate_store(rows, seed).save_to_file(path)


@app.command()
def main(
    rows: int = typer.Option(
        25,
        "--rows",
        "-r",
        help="Number of students to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path = typer.Option(
        Path("students.csv"),
        "--output",
        "-o",
        help="Roster file to write (overwritten if present).",
    ),
) -> None:
    """
    Generate sample students and save them as a roster file.
    """
    start = time.perf_counter()
    typer.echo(f"Generating {rows:,} students -> {output} (seed={seed})")
    written = _generate_roster_file(output, rows=rows, seed=seed)
    typer.echo(f"Wrote {written:,} students in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)

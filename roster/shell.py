"""
Interactive menu for the roster manager.

`RosterShell` maps each menu choice onto one `RosterStore` call. Input
parsing and re-prompting live in `roster.prompts`; validation, format and
persistence errors are reported and the menu keeps running.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Dict, Optional

from rich.console import Console
from rich.markup import escape

from roster.config import Settings, get_settings
from roster.domain.models import GPA_MAX, GPA_MIN
from roster.domain.text_format import parse_iso_date
from roster.errors import FormatError, PersistenceError, ValidationError
from roster.prompts import PromptReader
from roster.reporter import print_records
from roster.store import RosterStore
from roster.utils.logging import get_logger

log = get_logger(__name__)

MENU = (
    ("1", "Add student"),
    ("2", "Update student"),
    ("3", "Remove student"),
    ("4", "View student by ID"),
    ("5", "List all students"),
    ("6", "Search by name"),
    ("7", "Save to file"),
    ("8", "Load from file"),
    ("0", "Exit"),
)


class RosterShell:
    """Menu loop bound to one store."""

    def __init__(
        self,
        store: RosterStore,
        console: Optional[Console] = None,
        reader: Optional[PromptReader] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.console = console or Console()
        self.reader = reader or PromptReader(self.console)
        self.settings = settings or get_settings()
        self._handlers: Dict[str, Callable[[], None]] = {
            "1": self.handle_add,
            "2": self.handle_update,
            "3": self.handle_remove,
            "4": self.handle_view,
            "5": self.handle_list,
            "6": self.handle_search,
            "7": self.handle_save,
            "8": self.handle_load,
        }

    def say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def print_menu(self) -> None:
        self.console.print("\n[bold]Menu:[/bold]")
        for key, label in MENU:
            self.say(f"{key}) {label}")

    def run(self) -> None:
        """Serve menu choices until the user exits or input ends."""
        self.say("Welcome to the Student Record Management System")
        while True:
            self.print_menu()
            try:
                choice = self.reader.read_text("Choose an option").strip()
                if choice == "0":
                    break
                handler = self._handlers.get(choice)
                if handler is None:
                    self.say("Unknown option.")
                    continue
                handler()
            except EOFError:
                log.debug("Input closed, leaving shell")
                break
        self.say("Bye.")

    # -- handlers ---------------------------------------------------------

    def handle_add(self) -> None:
        first_name = self.reader.read_text("First name")
        last_name = self.reader.read_text("Last name")
        date_of_birth = self.reader.read_date("Date of birth (YYYY-MM-DD)")
        major = self.reader.read_text("Major (press enter for none)")
        gpa = self.reader.read_bounded_float(f"GPA ({GPA_MIN} - {GPA_MAX})", GPA_MIN, GPA_MAX)
        try:
            record = self.store.add(first_name, last_name, date_of_birth, major, gpa)
        except ValidationError as exc:
            self.say(f"Invalid data: {exc}")
            return
        self.say(f"Added: {record}")

    def handle_update(self) -> None:
        record_id = self.reader.read_int("Student ID to update")
        current = self.store.get(record_id)
        if current is None:
            self.say(f"No student with ID {record_id}")
            return
        self.say(f"Current: {current}")

        first_name = self.reader.read_optional("New first name (leave blank to keep)")
        last_name = self.reader.read_optional("New last name (leave blank to keep)")
        dob_text = self.reader.read_optional("New date of birth YYYY-MM-DD (leave blank to keep)")
        date_of_birth: Optional[date] = None
        if dob_text is not None:
            try:
                date_of_birth = parse_iso_date(dob_text)
            except ValueError:
                self.say("Invalid date format. Update cancelled.")
                return
        major = self.reader.read_optional("New major (leave blank to keep)")
        gpa_text = self.reader.read_optional("New GPA (leave blank to keep)")
        gpa: Optional[float] = None
        if gpa_text is not None:
            try:
                gpa = float(gpa_text)
            except ValueError:
                self.say("Invalid GPA. Update cancelled.")
                return

        updated = self.store.update(
            record_id,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            major=major,
            gpa=gpa,
        )
        self.say("Updated." if updated else "Update failed.")

    def handle_remove(self) -> None:
        record_id = self.reader.read_int("Student ID to remove")
        if self.store.remove(record_id):
            self.say("Removed.")
        else:
            self.say(f"No student with ID {record_id}")

    def handle_view(self) -> None:
        record_id = self.reader.read_int("Student ID to view")
        record = self.store.get(record_id)
        if record is None:
            self.say(f"No student with ID {record_id}")
        else:
            self.say(str(record))

    def handle_list(self) -> None:
        print_records(self.store.list_all(), console=self.console, title="Students")

    def handle_search(self) -> None:
        query = self.reader.read_text("Name query")
        print_records(
            self.store.search(query),
            console=self.console,
            title=f"Matches for '{escape(query)}'",
            empty_message="No matches.",
        )

    def _ask_path(self, action: str) -> str:
        default = self.settings.roster_file
        return self.reader.read_optional(f"Path to {action} (default {default})") or default

    def handle_save(self) -> None:
        path = self._ask_path("save")
        try:
            count = self.store.save_to_file(path)
        except PersistenceError as exc:
            self.say(f"Failed to save: {exc}")
            return
        self.say(f"Saved {count} student(s) to {path}")

    def handle_load(self) -> None:
        path = self._ask_path("load")
        try:
            count = self.store.load_from_file(path)
        except (PersistenceError, FormatError) as exc:
            self.say(f"Failed to load: {exc}")
            return
        self.say(f"Loaded {count} student(s) from {path}")


__all__ = ["RosterShell", "MENU"]

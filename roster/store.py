"""
In-memory student roster with text-file persistence.

`RosterStore` owns every `StudentRecord` and the id allocator. All public
methods run under one lock, so concurrent callers never observe a
half-applied add, update or load.

Usage:
    from roster.store import RosterStore

    store = RosterStore()
    ada = store.add("Ada", "Lovelace", date(1815, 12, 10), "Mathematics", 4.0)
    store.update(ada.id, major="Analytical Engines")
    store.save_to_file("students.csv")

Records handed out by the store are copies: changing one never changes the
roster, and results already returned never see later mutations.
"""

from __future__ import annotations

import enum
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from roster.domain.models import DateInput, StudentRecord
from roster.domain.text_format import HEADER_LINE, is_ignorable
from roster.errors import FormatError, PersistenceError, ValidationError
from roster.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]


class _Sentinel(enum.Enum):
    UNCHANGED = "UNCHANGED"

    def __repr__(self) -> str:
        return self.value


# Passed to `RosterStore.update` for a field that should keep its value.
UNCHANGED = _Sentinel.UNCHANGED

# Blank values for these mean "keep" in `RosterStore.update`.
_NAME_FIELDS = ("first_name", "last_name")


class RosterStore:
    """
    Identifier-keyed collection of student records.

    Ids start at 1 and only ever grow; a removed id is never handed out again,
    and loading a file moves the counter past the highest loaded id.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._lock = threading.Lock()
        self._records: Dict[int, StudentRecord] = {}
        self._next_id = 1
        self._encoding = encoding

    # -- introspection ----------------------------------------------------

    @property
    def next_id(self) -> int:
        """Id the next successful `add` will receive."""
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _sorted_records(self) -> List[StudentRecord]:
        # caller holds the lock
        return sorted(self._records.values(), key=lambda record: record.id)

    # -- CRUD -------------------------------------------------------------

    def add(
        self,
        first_name: str,
        last_name: str,
        date_of_birth: DateInput,
        major: Optional[str],
        gpa: float,
    ) -> StudentRecord:
        """
        Validate and insert a new student, returning the stored record.

        Raises `ValidationError` without consuming an id when a field is
        rejected.
        """
        with self._lock:
            record = StudentRecord.create(first_name, last_name, date_of_birth, major, gpa)
            record.assign_id(self._next_id)
            self._next_id += 1
            self._records[record.id] = record
            log.info("Student added", extra={"student_id": record.id})
            return record.model_copy()

    def remove(self, record_id: int) -> bool:
        """Delete a student; returns False when the id is unknown."""
        with self._lock:
            removed = self._records.pop(record_id, None) is not None
            if removed:
                log.info("Student removed", extra={"student_id": record_id})
            return removed

    def get(self, record_id: int) -> Optional[StudentRecord]:
        with self._lock:
            record = self._records.get(record_id)
            return record.model_copy() if record is not None else None

    def list_all(self) -> List[StudentRecord]:
        """All students ordered by id."""
        with self._lock:
            return [record.model_copy() for record in self._sorted_records()]

    def search(self, query: str) -> List[StudentRecord]:
        """
        Case-insensitive substring search on first name, last name, or
        "first last". An empty query matches every student.
        """
        needle = query.casefold()
        with self._lock:
            return [
                record.model_copy()
                for record in self._sorted_records()
                if needle in record.first_name.casefold()
                or needle in record.last_name.casefold()
                or needle in record.full_name.casefold()
            ]

    def update(
        self,
        record_id: int,
        first_name: Union[str, None, _Sentinel] = UNCHANGED,
        last_name: Union[str, None, _Sentinel] = UNCHANGED,
        date_of_birth: Union[DateInput, _Sentinel] = UNCHANGED,
        major: Union[str, None, _Sentinel] = UNCHANGED,
        gpa: Union[float, None, _Sentinel] = UNCHANGED,
    ) -> bool:
        """
        Apply the supplied fields to an existing student.

        `UNCHANGED` or None keeps a field, and so does a blank first or last
        name. An empty `major` is a real value (undeclared). Either every supplied
        field is applied or none is. Returns False for an unknown id or a
        rejected value.
        """
        supplied = {
            field: value
            for field, value in (
                ("first_name", first_name),
                ("last_name", last_name),
                ("date_of_birth", date_of_birth),
                ("major", major),
                ("gpa", gpa),
            )
            if value is not UNCHANGED
            and value is not None
            and not (field in _NAME_FIELDS and isinstance(value, str) and not value.strip())
        }

        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                log.debug("Update skipped, unknown student", extra={"student_id": record_id})
                return False

            working = current.model_copy()
            setters = {
                "first_name": working.set_first_name,
                "last_name": working.set_last_name,
                "date_of_birth": working.set_date_of_birth,
                "major": working.set_major,
                "gpa": working.set_gpa,
            }
            try:
                for field, value in supplied.items():
                    setters[field](value)
            except ValidationError as exc:
                log.warning(
                    "Update rejected",
                    extra={"student_id": record_id, "reason": str(exc)},
                )
                return False

            self._records[record_id] = working
            log.info(
                "Student updated",
                extra={"student_id": record_id, "fields": sorted(supplied)},
            )
            return True

    # -- persistence ------------------------------------------------------

    def save_to_file(self, path: PathLike) -> int:
        """
        Write a header line and one encoded line per student, ordered by id.

        The file is truncated first. Returns the number of records written;
        raises `PersistenceError` when the file cannot be written.
        """
        target = Path(path)
        with self._lock:
            records = self._sorted_records()
            try:
                # text mode writes the platform line terminator for "\n"
                with target.open("w", encoding=self._encoding) as f:
                    f.write(HEADER_LINE + "\n")
                    for record in records:
                        f.write(record.to_text() + "\n")
            except OSError as exc:
                log.warning("Save failed", extra={"path": str(target), "reason": str(exc)})
                raise PersistenceError(f"Cannot write roster file {target}: {exc}", path=target) from exc

            log.info("Roster saved", extra={"path": str(target), "count": len(records)})
            return len(records)

    def load_from_file(self, path: PathLike) -> int:
        """
        Replace the roster with the contents of a saved file.

        Blank lines and ``#`` comments are skipped; a later line wins over an
        earlier one with the same id. The id counter only moves forward. Any
        bad line raises `FormatError` and leaves the roster as it was; an
        unreadable file raises `PersistenceError`. Returns the number of
        records loaded.
        """
        source = Path(path)
        with self._lock:
            try:
                with source.open("r", encoding=self._encoding) as f:
                    lines = f.readlines()
            except UnicodeDecodeError as exc:
                log.warning("Load failed", extra={"path": str(source), "reason": str(exc)})
                raise FormatError(f"{source} is not valid {self._encoding} text") from exc
            except OSError as exc:
                log.warning("Load failed", extra={"path": str(source), "reason": str(exc)})
                raise PersistenceError(f"Cannot read roster file {source}: {exc}", path=source) from exc

            loaded: Dict[int, StudentRecord] = {}
            for line_number, raw in enumerate(lines, start=1):
                line = raw.strip()
                if is_ignorable(line):
                    continue
                try:
                    record = StudentRecord.from_text(line)
                except FormatError as exc:
                    log.warning(
                        "Load aborted, malformed line",
                        extra={"path": str(source), "line_number": line_number},
                    )
                    raise FormatError(str(exc), line=line, line_number=line_number) from exc
                loaded[record.id] = record

            self._records = loaded
            self._next_id = max(self._next_id, max(loaded, default=0) + 1)
            log.info("Roster loaded", extra={"path": str(source), "count": len(loaded)})
            return len(loaded)


__all__ = ["RosterStore", "UNCHANGED"]

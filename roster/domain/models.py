"""
Domain model for a single student record.

A record is validated on construction and on every field assignment, so a
`StudentRecord` can never hold a blank name or an out-of-range GPA. Identity
is the `id` alone; it is 0 until `RosterStore` assigns one.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import total_ordering
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from roster.domain.text_format import FIELD_COUNT, escape_field, parse_iso_date, split_line
from roster.errors import FormatError, ValidationError

GPA_MIN = 0.0
GPA_MAX = 4.0

DateInput = Union[date, str, None]


def _describe(exc: PydanticValidationError) -> str:
    """Flatten pydantic error details into a single readable message."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        # field_validator errors arrive as "Value error, <our message>"
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages)


@total_ordering
class StudentRecord(BaseModel):
    """
    One student's academic profile.

    Use `create` to build a new record and the ``set_*`` methods to change a
    field afterwards; both raise `roster.errors.ValidationError` and leave the
    record untouched when a value is rejected.
    """

    id: int = Field(0, ge=0, description="Store-assigned identifier (0 = unassigned).")
    first_name: str = Field(..., description="Given name, trimmed, never blank.")
    last_name: str = Field(..., description="Family name, trimmed, never blank.")
    date_of_birth: Optional[date] = Field(None, description="Birth date (ISO YYYY-MM-DD).")
    major: str = Field("", description="Declared major; empty means undeclared.")
    gpa: float = Field(
        ..., ge=GPA_MIN, le=GPA_MAX, allow_inf_nan=False, description="Grade point average."
    )

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _require_name(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("cannot be empty")
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _parse_date_of_birth(cls, value: Any) -> Any:
        # only real dates and YYYY-MM-DD text; no timestamps
        if value is None:
            return value
        if isinstance(value, datetime):
            raise ValueError("must be a date, not a datetime")
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            return parse_iso_date(value.strip())
        raise ValueError("must be a date or a YYYY-MM-DD string")

    @field_validator("gpa", mode="before")
    @classmethod
    def _reject_bool_gpa(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("major", mode="before")
    @classmethod
    def _normalize_major(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    # -- construction -----------------------------------------------------

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        date_of_birth: DateInput,
        major: Optional[str],
        gpa: float,
    ) -> "StudentRecord":
        """Build an unsaved record (id 0) after validating every field."""
        if date_of_birth is None:
            raise ValidationError("date_of_birth: cannot be empty")
        try:
            return cls(
                first_name=first_name,
                last_name=last_name,
                date_of_birth=date_of_birth,
                major=major,
                gpa=gpa,
            )
        except PydanticValidationError as exc:
            raise ValidationError(_describe(exc)) from exc

    # -- mutation ---------------------------------------------------------

    def _assign(self, field: str, value: Any) -> None:
        try:
            setattr(self, field, value)
        except PydanticValidationError as exc:
            raise ValidationError(_describe(exc)) from exc

    def set_first_name(self, first_name: str) -> None:
        self._assign("first_name", first_name)

    def set_last_name(self, last_name: str) -> None:
        self._assign("last_name", last_name)

    def set_date_of_birth(self, date_of_birth: DateInput) -> None:
        """Accepts a `date` or an ISO ``YYYY-MM-DD`` string."""
        if date_of_birth is None:
            raise ValidationError("date_of_birth: cannot be empty")
        self._assign("date_of_birth", date_of_birth)

    def set_major(self, major: Optional[str]) -> None:
        self._assign("major", major)

    def set_gpa(self, gpa: float) -> None:
        self._assign("gpa", gpa)

    def assign_id(self, record_id: int) -> None:
        """Reserved for `RosterStore`, the only id allocator."""
        self._assign("id", record_id)

    # -- views ------------------------------------------------------------

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def display_string(self) -> str:
        dob = self.date_of_birth.isoformat() if self.date_of_birth else "N/A"
        major = self.major or "Undeclared"
        return (
            f"Student{{id={self.id}, name={self.full_name}, dob={dob}, "
            f"major={major}, gpa={self.gpa:.2f}}}"
        )

    def __str__(self) -> str:
        return self.display_string()

    # -- identity ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StudentRecord):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, StudentRecord):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # -- text encoding ----------------------------------------------------

    def to_text(self) -> str:
        """Encode as ``id,first,last,dob,major,gpa`` with commas escaped."""
        dob = self.date_of_birth.isoformat() if self.date_of_birth else ""
        return ",".join(
            [
                str(self.id),
                escape_field(self.first_name),
                escape_field(self.last_name),
                dob,
                escape_field(self.major),
                f"{self.gpa:.2f}",
            ]
        )

    @classmethod
    def from_text(cls, line: str) -> "StudentRecord":
        """
        Decode a line produced by `to_text` (or written by hand in the same shape).

        Raises `FormatError` for a short line, a non-numeric id or gpa, an
        invalid non-empty date, or values that break the record invariants.
        Fields after the sixth are ignored.
        """
        text = line.rstrip("\r\n")
        parts = split_line(text)
        if len(parts) < FIELD_COUNT:
            raise FormatError(
                f"expected {FIELD_COUNT} fields, found {len(parts)}",
                line=text,
            )
        raw_id, first_name, last_name, raw_dob, major, raw_gpa = parts[:FIELD_COUNT]

        try:
            record_id = int(raw_id)
        except ValueError as exc:
            raise FormatError(f"id is not an integer: {raw_id!r}", line=text) from exc
        if record_id < 1:
            raise FormatError(f"id must be positive: {record_id}", line=text)

        try:
            gpa = float(raw_gpa)
        except ValueError as exc:
            raise FormatError(f"gpa is not a number: {raw_gpa!r}", line=text) from exc

        date_of_birth: Optional[date] = None
        if raw_dob.strip():
            try:
                date_of_birth = parse_iso_date(raw_dob.strip())
            except ValueError as exc:
                raise FormatError(f"invalid date: {raw_dob!r}", line=text) from exc

        try:
            return cls(
                id=record_id,
                first_name=first_name,
                last_name=last_name,
                date_of_birth=date_of_birth,
                major=major,
                gpa=gpa,
            )
        except PydanticValidationError as exc:
            raise FormatError(_describe(exc), line=text) from exc


__all__ = ["StudentRecord", "GPA_MIN", "GPA_MAX"]

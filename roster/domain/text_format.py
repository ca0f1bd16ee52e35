"""
Line format helpers for persisted student records.

The format is a minimal comma-separated scheme: a comma inside a field is
written as ``\\,`` and nothing else is escaped. Decoding keeps a backslash
that is not followed by a comma as a literal two-character sequence, so files
written by older tools still round-trip.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List

FIELD_SEPARATOR = ","
ESCAPE_CHAR = "\\"

HEADER_LINE = "#id,firstName,lastName,dob,major,gpa"
COMMENT_PREFIX = "#"
FIELD_COUNT = 6

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def escape_field(value: str | None) -> str:
    """Escape every comma in ``value``; ``None`` encodes as an empty field."""
    if value is None:
        return ""
    return value.replace(FIELD_SEPARATOR, ESCAPE_CHAR + FIELD_SEPARATOR)


def split_line(line: str) -> List[str]:
    """
    Split a persisted line into decoded fields.

    ``\\,`` decodes to a comma; a backslash before any other character is
    kept together with that character. An unescaped comma always separates
    fields.
    """
    parts: List[str] = []
    current: List[str] = []
    escaping = False

    for char in line:
        if escaping:
            if char != FIELD_SEPARATOR:
                current.append(ESCAPE_CHAR)
            current.append(char)
            escaping = False
        elif char == ESCAPE_CHAR:
            escaping = True
        elif char == FIELD_SEPARATOR:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    # dangling backslash at end of line
    if escaping:
        current.append(ESCAPE_CHAR)
    parts.append("".join(current))
    return parts


def parse_iso_date(text: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` date. Other ISO spellings (``18151210``, week
    dates) and timestamps raise `ValueError`.
    """
    if not _ISO_DATE.fullmatch(text):
        raise ValueError(f"date must be in YYYY-MM-DD format: {text!r}")
    return date.fromisoformat(text)


def is_ignorable(line: str) -> bool:
    """Blank lines and ``#`` comments carry no record."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


__all__ = [
    "FIELD_SEPARATOR",
    "ESCAPE_CHAR",
    "HEADER_LINE",
    "COMMENT_PREFIX",
    "FIELD_COUNT",
    "escape_field",
    "split_line",
    "parse_iso_date",
    "is_ignorable",
]

"""
Project-wide exception hierarchy for the roster manager.

Not-found is never an exception here: lookups return None and mutations
return False when the id is unknown.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

__all__ = [
    "RosterError",
    "ValidationError",
    "FormatError",
    "PersistenceError",
]


class RosterError(Exception):
    """Root exception for all roster errors."""


class ValidationError(RosterError, ValueError):
    """Raised when a record field fails its constraint."""


class FormatError(RosterError, ValueError):
    """
    Raised when a persisted line cannot be decoded into a record.

    ``line_number`` is 1-based and only known when the line came from a file.
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class PersistenceError(RosterError):
    """Raised when the roster file cannot be read or written."""

    def __init__(self, message: str, path: Union[str, Path, None] = None) -> None:
        self.path = path
        super().__init__(message)

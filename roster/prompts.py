"""
Console input helpers for the interactive shell.

Each reader keeps asking until it gets a usable value, so the shell only
ever hands well-formed ints, dates and floats to the store. End of input is
reported as `EOFError`, whether the text comes from the terminal or from a
supplied stream.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, TextIO

from rich.console import Console

from roster.domain.text_format import parse_iso_date


class PromptReader:
    """
    Line-oriented prompts on top of a rich `Console`.

    Parameters
    ----------
    console : Console
        Where prompts and re-prompt hints are printed.
    stream : TextIO, optional
        Read answers from this stream instead of standard input.
    """

    def __init__(self, console: Console, stream: Optional[TextIO] = None) -> None:
        self.console = console
        self._stream = stream

    def _hint(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def read_text(self, label: str) -> str:
        raw = self.console.input(f"{label}: ", markup=False, stream=self._stream)
        if self._stream is not None and raw == "":
            raise EOFError
        return raw.rstrip("\r\n")

    def read_optional(self, label: str) -> Optional[str]:
        """Blank answers mean "no value" and come back as None."""
        value = self.read_text(label).strip()
        return value or None

    def read_int(self, label: str) -> int:
        while True:
            text = self.read_text(label)
            try:
                return int(text.strip())
            except ValueError:
                self._hint("Enter an integer.")

    def read_date(self, label: str) -> date:
        while True:
            text = self.read_text(label)
            try:
                return parse_iso_date(text.strip())
            except ValueError:
                self._hint("Date must be in YYYY-MM-DD format.")

    def read_bounded_float(self, label: str, minimum: float, maximum: float) -> float:
        while True:
            text = self.read_text(label)
            try:
                value = float(text.strip())
            except ValueError:
                self._hint("Enter a numeric value.")
                continue
            if not minimum <= value <= maximum:
                self._hint(f"Value must be between {minimum:.2f} and {maximum:.2f}")
                continue
            return value


__all__ = ["PromptReader"]

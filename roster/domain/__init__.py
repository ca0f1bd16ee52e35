"""
Domain package for the roster manager.

Exports the student record model and its line format helpers. Keep this
package focused on data definitions and validation concerns.
"""

from roster.domain.models import GPA_MAX, GPA_MIN, StudentRecord
from roster.domain.text_format import HEADER_LINE, escape_field, split_line

__all__ = [
    "StudentRecord",
    "GPA_MIN",
    "GPA_MAX",
    "HEADER_LINE",
    "escape_field",
    "split_line",
]

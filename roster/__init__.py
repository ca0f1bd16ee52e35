"""
Roster - in-memory student record manager with text-file persistence.

This package provides:

- A validated student record model with a line-oriented text encoding
- A lock-guarded store with CRUD, name search and sorted listing
- Load/save of the whole roster to a comma-separated text file
- An interactive menu and a small typer CLI on top of the store
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from roster.config import Settings, get_settings
from roster.domain.models import StudentRecord
from roster.errors import FormatError, PersistenceError, RosterError, ValidationError
from roster.store import UNCHANGED, RosterStore
from roster.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "StudentRecord",
    # Store
    "RosterStore",
    "UNCHANGED",
    # Errors
    "RosterError",
    "ValidationError",
    "FormatError",
    "PersistenceError",
    # Logging
    "configure_logging",
    "get_logger",
]

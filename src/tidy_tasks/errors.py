# src/tidy_tasks/errors.py

from __future__ import annotations


class TidyTasksError(Exception):
    """Base class for errors raised by the task engine."""


class PersistenceError(TidyTasksError):
    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class PersistenceLoadError(PersistenceError):
    """Stored blob could not be read or parsed; the caller falls back to an empty list."""


class PersistenceSaveError(PersistenceError):
    """Storage write failed; in-memory state stays authoritative."""

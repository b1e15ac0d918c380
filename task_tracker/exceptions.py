"""Custom exceptions for task tracker."""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base exception for all task tracker errors."""


class ValidationError(TaskTrackerError, ValueError):
    """Invalid task data (empty title, immutable or unknown field)."""


class TaskNotFoundError(TaskTrackerError):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: int) -> None:
        """Initialize with the missing task id."""
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found.")


class DecodeError(TaskTrackerError):
    """A persisted record line could not be turned into a task."""

    def __init__(self, line: str, reason: str) -> None:
        """Initialize with the offending line and a readable reason."""
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


class StorageError(TaskTrackerError):
    """The task file could not be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        """Initialize with the file path involved."""
        self.path = path
        super().__init__(f"{path}: {message}")


class ConfigError(TaskTrackerError):
    """Configuration errors (unreadable file, bad values)."""

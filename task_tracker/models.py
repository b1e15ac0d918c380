"""Task model and related types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Priority(Enum):
    """Task priority levels, ordered by numeric value."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def from_choice(cls, choice: int) -> Priority:
        """Map a menu number (1-Low, 2-Medium, 3-High) to a priority."""
        try:
            return cls(choice)
        except ValueError:
            raise ValueError(f"Invalid priority choice {choice}. Must be 1, 2 or 3")


@dataclass
class Task:
    """A single to-do item.

    Tasks are owned by a TaskRegistry and mutated in place; the id is
    assigned by the registry and never changes afterwards.

    Attributes:
        id: Unique positive task identifier.
        title: Task title.
        description: Free text, may be empty.
        priority: Task priority level.
        deadline: Optional calendar date.
        completed: Completion status.
    """

    id: int
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    deadline: Optional[date] = None
    completed: bool = False

    @property
    def has_deadline(self) -> bool:
        return self.deadline is not None

    def is_overdue(self, today: date) -> bool:
        """Return True if the deadline has passed and the task is still open."""
        return self.deadline is not None and self.deadline < today and not self.completed

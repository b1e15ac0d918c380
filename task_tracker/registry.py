"""In-memory task collection with id lookup and sorted views."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from datetime import date, datetime
from typing import Any, Optional

from task_tracker.exceptions import TaskNotFoundError, ValidationError
from task_tracker.models import Priority, Task

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description", "priority", "deadline", "completed"})


class TaskRegistry:
    """Owns all tasks of a session.

    Tasks live in a single insertion-ordered dict keyed by id, which serves
    as both the ordered collection and the identity index: the same Task
    object is returned by lookups and by iteration, so a mutation through
    one is visible through the other, and an insert or delete is a single
    step that cannot leave the two out of sync.

    Ids come from a counter that only moves forward. Deleting the task
    with the highest id does not make that id available again.

    All public methods hold one re-entrant lock.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        """Initialize registry, indexing previously loaded tasks.

        Duplicate ids keep the first task and drop later ones.
        """
        self._lock = threading.RLock()
        self._tasks: dict[int, Task] = {}
        for task in tasks:
            if task.id in self._tasks:
                logger.warning(f"Dropping duplicate task id {task.id}: {task.title!r}")
                continue
            self._tasks[task.id] = task
        self._next_id = max(self._tasks, default=0) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.all())

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    @property
    def next_id(self) -> int:
        """Id the next created task will receive."""
        with self._lock:
            return self._next_id

    def all(self) -> list[Task]:
        """Snapshot of all tasks in insertion order."""
        with self._lock:
            return list(self._tasks.values())

    def create(
        self,
        title: str,
        description: str = "",
        priority: Priority = Priority.MEDIUM,
        deadline: Optional[date] = None,
    ) -> Task:
        """Create a task with the next id and append it to the collection."""
        _check_fields(
            {"title": title, "description": description, "priority": priority, "deadline": deadline}
        )
        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description,
                priority=priority,
                deadline=deadline,
            )
            self._tasks[task.id] = task
            self._next_id += 1
        logger.debug(f"Created task #{task.id}: {task.title!r}")
        return task

    def find(self, task_id: int) -> Task:
        """Get a task by id."""
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update(self, task_id: int, **changes: Any) -> Task:
        """Apply a partial update; fields not passed keep their value.

        Raises:
            TaskNotFoundError: no task with this id
            ValidationError: id change, unknown field or invalid value
        """
        if "id" in changes:
            raise ValidationError("Task id cannot be changed")
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown task field(s): {', '.join(sorted(unknown))}")
        _check_fields(changes)

        with self._lock:
            task = self.find(task_id)
            for name, value in changes.items():
                setattr(task, name, value)
        logger.debug(f"Updated task #{task_id}: {sorted(changes)}")
        return task

    def delete(self, task_id: int) -> bool:
        """Remove a task from the registry.

        Returns:
            True once the task is gone

        Raises:
            TaskNotFoundError: no task with this id
        """
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                raise TaskNotFoundError(task_id)
        logger.debug(f"Deleted task #{task_id}")
        return True

    def toggle_complete(self, task_id: int) -> bool:
        """Flip the completed flag and return its new value."""
        with self._lock:
            task = self.find(task_id)
            task.completed = not task.completed
            completed = task.completed
        logger.debug(f"Task #{task_id} completed={completed}")
        return completed

    def ordered_by_priority(self) -> list[Task]:
        """High to low priority; equal priorities keep insertion order."""
        # sorted() is stable
        return sorted(self.all(), key=lambda t: t.priority.value, reverse=True)

    def ordered_by_deadline(self) -> list[Task]:
        """Dated tasks earliest first, then undated tasks in insertion order."""
        tasks = self.all()
        dated = sorted((t for t in tasks if t.has_deadline), key=lambda t: t.deadline)
        undated = [t for t in tasks if not t.has_deadline]
        return dated + undated


def _check_fields(values: dict[str, Any]) -> None:
    """Validate the field values present in ``values``.

    Every value must survive a save/load cycle: text fields are single-line
    strings, the deadline is a plain date.
    """
    if "title" in values:
        title = values["title"]
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title cannot be empty")
    for name in ("title", "description"):
        if name not in values:
            continue
        text = values[name]
        if not isinstance(text, str):
            raise ValidationError(f"{name.capitalize()} must be text")
        if "\n" in text or "\r" in text:
            raise ValidationError(f"{name.capitalize()} cannot contain line breaks")
    if "priority" in values and not isinstance(values["priority"], Priority):
        raise ValidationError(f"Invalid priority {values['priority']!r}")
    if "deadline" in values:
        deadline = values["deadline"]
        # datetime is a date subclass but would persist with a time part
        if deadline is not None and (
            not isinstance(deadline, date) or isinstance(deadline, datetime)
        ):
            raise ValidationError(f"Invalid deadline {deadline!r}, expected a date")
    if "completed" in values and not isinstance(values["completed"], bool):
        raise ValidationError(f"Invalid completed flag {values['completed']!r}")

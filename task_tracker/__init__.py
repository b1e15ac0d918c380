"""Task Tracker - an interactive CLI task tracker with flat-file storage."""

from task_tracker.models import Priority, Task
from task_tracker.registry import TaskRegistry
from task_tracker.store import TaskStore

__all__ = ["Priority", "Task", "TaskRegistry", "TaskStore"]

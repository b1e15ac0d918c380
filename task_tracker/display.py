"""Display formatting for task output."""

from collections.abc import Sequence
from datetime import date

from tabulate import tabulate

from task_tracker.models import Task

DONE_MARK = "✓"
OPEN_MARK = "✗"


def format_tasks_table(tasks: Sequence[Task], tablefmt: str = "simple") -> str:
    """Format tasks as a table string."""
    if not tasks:
        return "No tasks found."

    headers = ["ID", "Status", "Title", "Priority", "Deadline", "Description"]
    rows = [
        [
            task.id,
            DONE_MARK if task.completed else OPEN_MARK,
            _truncate(task.title, 30),
            task.priority.name,
            _format_date(task.deadline),
            _truncate(task.description, 40),
        ]
        for task in tasks
    ]
    return tabulate(rows, headers=headers, tablefmt=tablefmt)


def format_task_detail(task: Task, today: date | None = None) -> str:
    """Format a single task with full details."""
    today = today or date.today()
    done = "Yes" if task.completed else "No"
    deadline = _format_date(task.deadline)
    if task.is_overdue(today):
        deadline += " (overdue)"

    return f"""
Task #{task.id}
{"─" * 40}
Title:       {task.title}
Description: {task.description or "(none)"}
Priority:    {task.priority.name}
Completed:   {done}
Deadline:    {deadline}
""".strip()


def _truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


def _format_date(d: date | None) -> str:
    if d is None:
        return "No deadline"
    return d.isoformat()

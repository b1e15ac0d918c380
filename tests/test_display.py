"""Tests for display formatting."""

from datetime import date

from task_tracker.display import format_task_detail, format_tasks_table
from task_tracker.models import Priority, Task


class TestFormatTasksTable:
    """Tests for the task list table."""

    def test_empty(self):
        assert format_tasks_table([]) == "No tasks found."

    def test_rows_contain_fields(self, sample_task):
        table = format_tasks_table([sample_task])

        assert "Test Task" in table
        assert "HIGH" in table
        assert "2026-12-31" in table
        assert "✗" in table

    def test_completed_mark_and_missing_deadline(self):
        task = Task(id=2, title="Done", completed=True)

        table = format_tasks_table([task])

        assert "✓" in table
        assert "No deadline" in table

    def test_long_title_truncated(self):
        task = Task(id=1, title="x" * 50)

        table = format_tasks_table([task])

        assert "x" * 29 + "…" in table
        assert "x" * 30 not in table

    def test_table_format_is_passed_through(self, sample_task):
        assert "+--" in format_tasks_table([sample_task], tablefmt="grid")


class TestFormatTaskDetail:
    """Tests for the single task view."""

    def test_detail(self, sample_task):
        detail = format_task_detail(sample_task, today=date(2026, 1, 1))

        assert detail.startswith("Task #1")
        assert "Priority:    HIGH" in detail
        assert "Deadline:    2026-12-31" in detail
        assert "overdue" not in detail

    def test_overdue_marker(self):
        task = Task(id=3, title="Late", priority=Priority.LOW, deadline=date(2024, 1, 1))

        assert "(overdue)" in format_task_detail(task, today=date(2024, 6, 1))

    def test_empty_description(self):
        detail = format_task_detail(Task(id=1, title="T"), today=date(2024, 1, 1))

        assert "Description: (none)" in detail

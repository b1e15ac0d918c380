"""Shared fixtures for task tracker tests."""

from datetime import date

import pytest
from task_tracker.models import Priority, Task
from task_tracker.registry import TaskRegistry


@pytest.fixture
def sample_task():
    """Create a sample task for testing."""
    return Task(
        id=1,
        title="Test Task",
        description="A test task",
        priority=Priority.HIGH,
        deadline=date(2026, 12, 31),
    )


@pytest.fixture
def registry():
    """Create an empty registry."""
    return TaskRegistry()

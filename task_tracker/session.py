"""Interactive menu loop driving a task registry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, Optional

from task_tracker.codec import parse_deadline
from task_tracker.display import format_task_detail, format_tasks_table
from task_tracker.exceptions import StorageError, TaskNotFoundError, ValidationError
from task_tracker.models import Priority, Task
from task_tracker.registry import TaskRegistry
from task_tracker.store import TaskStore

logger = logging.getLogger(__name__)

MENU = [
    "Add Task",
    "View All Tasks",
    "Edit Task",
    "Delete Task",
    "Mark Task Complete",
    "View Tasks by Priority",
    "View Tasks by Deadline",
    "Save and Exit",
]


class Session:
    """Menu-driven front end for one registry.

    The session owns the registry for its lifetime: it is built from the
    store's contents and written back to the store on "Save and Exit".
    Input and output are injectable so the loop can run without a terminal.
    """

    def __init__(
        self,
        registry: TaskRegistry,
        store: TaskStore,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[..., Any]] = None,
        table_format: str = "simple",
    ) -> None:
        """Initialize session with a registry and the store it came from."""
        self.registry = registry
        self._store = store
        self._input = input_func or input
        self._out = output or print
        self._table_format = table_format
        self._handlers: dict[int, Callable[[], bool]] = {
            1: self._add_task,
            2: self._view_tasks,
            3: self._edit_task,
            4: self._delete_task,
            5: self._mark_complete,
            6: self._view_by_priority,
            7: self._view_by_deadline,
            8: self._save_and_exit,
        }

    @classmethod
    def from_store(
        cls,
        store: TaskStore,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[..., Any]] = None,
        table_format: str = "simple",
    ) -> Session:
        """Load the store into a fresh registry and report the outcome."""
        out = output or print
        try:
            tasks = store.load()
        except StorageError as e:
            logger.error(f"Error loading tasks: {e}")
            out(f"Error loading tasks: {e}")
            out("Starting with empty task list.")
            tasks = []
        else:
            out(f"Loaded {len(tasks)} tasks from file.")
        return cls(TaskRegistry(tasks), store, input_func, out, table_format)

    def run(self) -> int:
        """Run the menu loop until the user saves and exits. Returns exit code."""
        self._out("=== Task Manager CLI ===")
        self._out("Welcome to your personal task manager!")
        try:
            while True:
                self._display_menu()
                choice = self._menu_choice()
                handler = self._handlers.get(choice)
                if handler is None:
                    self._out("Invalid choice. Please try again.")
                    continue
                if handler():
                    return 0
        except EOFError:
            self._out("")
            self._out("Input closed. Unsaved changes were discarded.")
            return 1

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def _prompt(self, text: str) -> str:
        return self._input(text).strip()

    def _confirm(self, text: str) -> bool:
        return self._prompt(text).lower().startswith("y")

    def _display_menu(self) -> None:
        self._out("\n" + "=" * 40)
        for number, label in enumerate(MENU, start=1):
            self._out(f"{number}. {label}")

    def _menu_choice(self) -> int:
        try:
            return int(self._prompt(f"Choose an option (1-{len(MENU)}): "))
        except ValueError:
            return -1

    def _priority_input(self) -> Priority:
        """Ask until a valid priority number is given."""
        while True:
            raw = self._prompt("Select priority (1-Low, 2-Medium, 3-High): ")
            try:
                return Priority.from_choice(int(raw))
            except ValueError:
                if raw.lstrip("-").isdigit():
                    self._out("Invalid choice. Please enter 1, 2, or 3.")
                else:
                    self._out("Please enter a valid number.")

    def _deadline_input(self) -> Optional[date]:
        raw = self._prompt("Enter deadline (YYYY-MM-DD) or press Enter for no deadline: ")
        try:
            return parse_deadline(raw)
        except ValueError:
            self._out("Invalid date format. No deadline set.")
            return None

    def _task_by_prompt(self, action: str) -> Optional[Task]:
        """Ask for a task id and look it up, reporting bad or unknown ids."""
        raw = self._prompt(f"Enter task ID to {action}: ")
        try:
            task_id = int(raw)
        except ValueError:
            self._out("Please enter a valid task ID.")
            return None
        try:
            return self.registry.find(task_id)
        except TaskNotFoundError as e:
            self._out(str(e))
            return None

    def _print_tasks(self, tasks: list[Task]) -> None:
        self._out(format_tasks_table(tasks, tablefmt=self._table_format))

    # ------------------------------------------------------------------
    # Menu actions; each returns True to end the session
    # ------------------------------------------------------------------

    def _add_task(self) -> bool:
        self._out("\n--- Add New Task ---")
        title = self._prompt("Enter task title: ")
        if not title:
            self._out("Task title cannot be empty!")
            return False

        description = self._prompt("Enter task description: ")
        priority = self._priority_input()
        deadline = self._deadline_input()

        try:
            task = self.registry.create(title, description, priority, deadline)
        except ValidationError as e:
            self._out(f"Validation error: {e}")
            return False
        self._out(f"Task added successfully with ID: {task.id}")
        return False

    def _view_tasks(self) -> bool:
        self._out("\n--- All Tasks ---")
        tasks = self.registry.all()
        self._print_tasks(tasks)
        if tasks:
            self._out(f"Total tasks: {len(tasks)}")
        return False

    def _edit_task(self) -> bool:
        self._out("\n--- Edit Task ---")
        if not len(self.registry):
            self._out("No tasks to edit.")
            return False

        task = self._task_by_prompt("edit")
        if task is None:
            return False

        self._out(format_task_detail(task))
        changes: dict[str, Any] = {}
        title = self._prompt("Enter new title (or press Enter to keep current): ")
        if title:
            changes["title"] = title
        description = self._prompt("Enter new description (or press Enter to keep current): ")
        if description:
            changes["description"] = description
        if self._confirm("Update priority? (y/n): "):
            changes["priority"] = self._priority_input()
        if self._confirm("Update deadline? (y/n): "):
            changes["deadline"] = self._deadline_input()

        try:
            self.registry.update(task.id, **changes)
        except (ValidationError, TaskNotFoundError) as e:
            self._out(f"Error: {e}")
            return False
        self._out("Task updated successfully!")
        return False

    def _delete_task(self) -> bool:
        self._out("\n--- Delete Task ---")
        if not len(self.registry):
            self._out("No tasks to delete.")
            return False

        task = self._task_by_prompt("delete")
        if task is None:
            return False

        self._out(f"Task to delete: {task.title}")
        if not self._confirm("Are you sure? (y/n): "):
            self._out("Delete cancelled.")
            return False

        try:
            self.registry.delete(task.id)
        except TaskNotFoundError as e:
            self._out(str(e))
            return False
        self._out("Task deleted successfully!")
        return False

    def _mark_complete(self) -> bool:
        self._out("\n--- Mark Task Complete ---")
        if not len(self.registry):
            self._out("No tasks available.")
            return False

        task = self._task_by_prompt("mark complete")
        if task is None:
            return False

        completed = self.registry.toggle_complete(task.id)
        status = "completed" if completed else "incomplete"
        self._out(f"Task marked as {status}!")
        return False

    def _view_by_priority(self) -> bool:
        self._out("\n--- Tasks by Priority ---")
        self._print_tasks(self.registry.ordered_by_priority())
        return False

    def _view_by_deadline(self) -> bool:
        self._out("\n--- Tasks by Deadline ---")
        ordered = self.registry.ordered_by_deadline()
        if not ordered:
            self._print_tasks(ordered)
            return False

        dated = [t for t in ordered if t.has_deadline]
        undated = [t for t in ordered if not t.has_deadline]
        if dated:
            self._print_tasks(dated)
        if undated:
            self._out("--- Tasks without deadlines ---")
            self._print_tasks(undated)
        return False

    def _save_and_exit(self) -> bool:
        try:
            self._store.save(self.registry.all())
        except StorageError as e:
            logger.error(f"Error saving tasks: {e}")
            self._out(f"Error saving tasks: {e}")
            self._out("Your tasks are still in memory; choose Save and Exit to retry.")
            return False
        self._out("Tasks saved successfully.")
        self._out("Thank you for using Task Manager CLI!")
        return True

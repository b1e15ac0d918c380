"""Flat-file storage for tasks."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from task_tracker.codec import decode, encode
from task_tracker.exceptions import DecodeError, StorageError
from task_tracker.models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """Reads and writes the whole task collection, one record per line.

    Every save rewrites the entire file. A missing file loads as an empty
    collection; malformed lines are skipped with a warning.
    """

    def __init__(self, file_path: str | Path = "tasks.txt") -> None:
        """Initialize store.

        Args:
            file_path: Path to the record file (need not exist yet)
        """
        self._path = Path(file_path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        """Check if the record file exists."""
        return self._path.is_file()

    def load(self) -> list[Task]:
        """Read all decodable tasks in file order.

        Returns:
            Tasks that decoded successfully (empty if the file is missing)

        Raises:
            StorageError: the file exists but cannot be read
        """
        if not self._path.exists():
            logger.info(f"No task file at {self._path}, starting empty")
            return []

        tasks: list[Task] = []
        skipped = 0
        try:
            with self._path.open(encoding="utf-8") as f:
                for lineno, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    try:
                        tasks.append(decode(line))
                    except DecodeError as e:
                        skipped += 1
                        logger.warning(
                            f"Skipping malformed record at {self._path}:{lineno}: {e}"
                        )
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(self._path, f"cannot read task file ({e})") from e

        logger.info(f"Loaded {len(tasks)} tasks from {self._path} ({skipped} skipped)")
        return tasks

    def save(self, tasks: Iterable[Task]) -> int:
        """Replace the file contents with the given tasks.

        The records go to a temporary file in the same directory which is
        then renamed over the target, so a failed save leaves the previous
        file untouched.

        Returns:
            Number of records written

        Raises:
            StorageError: a task cannot be encoded or the file cannot be written
        """
        try:
            lines = [encode(task) + "\n" for task in tasks]
        except ValueError as e:
            raise StorageError(self._path, f"cannot encode tasks ({e})") from e

        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.writelines(lines)
                f.flush()
                os.fsync(f.fileno())
            if self._path.exists():
                # mkstemp creates the file as 0600
                os.chmod(tmp_name, stat.S_IMODE(self._path.stat().st_mode))
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(self._path, f"cannot write task file ({e})") from e

        logger.info(f"Saved {len(lines)} tasks to {self._path}")
        return len(lines)

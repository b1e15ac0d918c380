"""Line codec for persisted task records.

One task is stored as one line of six ``|`` separated fields::

    <id>|<title>|<description>|<LOW|MEDIUM|HIGH>|<YYYY-MM-DD|null>|<true|false>

Fields are written verbatim. A title or description that itself contains
``|`` produces a line that no longer splits into six parts, so such a task
does not survive a save/load cycle. Records are not escaped.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from task_tracker.exceptions import DecodeError
from task_tracker.models import Priority, Task

DELIMITER = "|"
NO_DEADLINE = "null"
FIELD_COUNT = 6

_ID_RE = re.compile(r"[0-9]+")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_deadline(value: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` date.

    Returns None for an empty string and raises ValueError for anything
    that is not a valid calendar date in that exact format.
    """
    value = value.strip()
    if not value:
        return None
    if not _DATE_RE.fullmatch(value):
        raise ValueError(f"Invalid date format: '{value}'. Use: YYYY-MM-DD")
    return date.fromisoformat(value)


def encode(task: Task) -> str:
    """Serialize a task to a single record line (without newline).

    Raises:
        ValueError: the title or description contains a line break, which
            would split the record
    """
    for text in (task.title, task.description):
        if "\n" in text or "\r" in text:
            raise ValueError(f"Task #{task.id} has a line break in its text")
    deadline = task.deadline.isoformat() if task.deadline else NO_DEADLINE
    fields = [
        str(task.id),
        task.title,
        task.description,
        task.priority.name,
        deadline,
        "true" if task.completed else "false",
    ]
    return DELIMITER.join(fields)


def decode(line: str) -> Task:
    """Parse a record line into a task.

    Raises:
        DecodeError: wrong field count, bad id, unknown priority name or
            unparseable deadline.
    """
    parts = line.rstrip("\r\n").split(DELIMITER)
    if len(parts) != FIELD_COUNT:
        raise DecodeError(line, f"Expected {FIELD_COUNT} fields, got {len(parts)}")

    raw_id, title, description, raw_priority, raw_deadline, raw_completed = parts

    if not _ID_RE.fullmatch(raw_id) or int(raw_id) <= 0:
        raise DecodeError(line, f"Invalid task id '{raw_id}'")

    try:
        priority = Priority[raw_priority]
    except KeyError:
        raise DecodeError(line, f"Unknown priority '{raw_priority}'") from None

    deadline = None
    if raw_deadline != NO_DEADLINE:
        try:
            deadline = parse_deadline(raw_deadline)
        except ValueError:
            raise DecodeError(line, f"Invalid deadline '{raw_deadline}'") from None
        if deadline is None:
            raise DecodeError(line, "Empty deadline")

    return Task(
        id=int(raw_id),
        title=title,
        description=description,
        priority=priority,
        deadline=deadline,
        # anything other than "true" reads as not completed
        completed=raw_completed.strip().lower() == "true",
    )

"""Task data model for Bob CLI."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .utils.datetime import format_datetime


class TaskKind(Enum):
    """Task variants, valued by their display/storage tag."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


class TaskStatus(Enum):
    """Completion status, valued by its display glyph."""
    DONE = "X"
    NOT_DONE = " "


@dataclass
class Task:
    """A single task.

    One record type covers every variant; ``kind`` says which of the
    time fields are meaningful:

    - TODO: none
    - DEADLINE: ``due``
    - EVENT: ``start`` and ``end``

    Use the ``todo``/``deadline``/``event`` constructors rather than
    filling the fields by hand. An event's end is not checked against its
    start here, callers validate that before building one.
    """

    kind: TaskKind
    description: str
    status: TaskStatus = TaskStatus.NOT_DONE
    due: Optional[datetime] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def todo(cls, description: str) -> "Task":
        return cls(TaskKind.TODO, description)

    @classmethod
    def deadline(cls, description: str, due: datetime) -> "Task":
        return cls(TaskKind.DEADLINE, description, due=due)

    @classmethod
    def event(cls, description: str, start: datetime, end: datetime) -> "Task":
        return cls(TaskKind.EVENT, description, start=start, end=end)

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def mark_done(self):
        """Mark the task as done."""
        self.status = TaskStatus.DONE

    def mark_not_done(self):
        """Mark the task as not done."""
        self.status = TaskStatus.NOT_DONE

    def __str__(self) -> str:
        head = f"[{self.kind.value}][{self.status.value}] {self.description}"
        if self.kind == TaskKind.DEADLINE:
            return f"{head} (by: {format_datetime(self.due)})"
        if self.kind == TaskKind.EVENT:
            return (
                f"{head} (from: {format_datetime(self.start)}"
                f" to: {format_datetime(self.end)})"
            )
        return head

"""Ordered in-memory task collection and its queries."""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, List, Optional

from .task import Task, TaskKind


URGENT_DAYS = 3


class TaskList:
    """Index-addressable list of tasks, kept in insertion order.

    Indices are 0-based here; converting from what the user typed is the
    parser's job.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks is not None else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._tasks)

    def get(self, index: int) -> Task:
        """Return the task at ``index``.

        Raises:
            IndexError: If the index is out of range (negative included)
        """
        self._check_index(index)
        return self._tasks[index]

    def remove(self, index: int) -> Task:
        """Remove and return the task at ``index``.

        Raises:
            IndexError: If the index is out of range (negative included)
        """
        self._check_index(index)
        return self._tasks.pop(index)

    def _check_index(self, index: int):
        # Plain list indexing would accept negative indices
        if not self.is_valid_index(index):
            raise IndexError(f"task index {index} out of range for {len(self._tasks)} tasks")

    def all_tasks(self) -> List[Task]:
        """Return a shallow copy of the tasks in display order."""
        return list(self._tasks)

    def find_by_keyword(self, keyword: str) -> List[Task]:
        """Return tasks whose description contains ``keyword``, ignoring case."""
        needle = keyword.lower()
        return [t for t in self._tasks if needle in t.description.lower()]

    def tasks_on_date(self, day: date) -> List[Task]:
        """Return tasks occurring on ``day``.

        Deadlines match when due on that calendar date. Events match when
        their [start, end] interval overlaps any part of the day, both ends
        inclusive. Todos never match.
        """
        day_start = datetime.combine(day, time.min)
        day_end = datetime.combine(day, time.max)
        return [t for t in self._tasks if _occurs_within(t, day, day_start, day_end)]

    def urgent_tasks(self, now: datetime, days: int = URGENT_DAYS) -> List[Task]:
        """Return deadlines due in [now, now + days)."""
        horizon = now + timedelta(days=days)
        return [
            t for t in self._tasks
            if t.kind == TaskKind.DEADLINE and now <= t.due < horizon
        ]


def _occurs_within(task: Task, day: date, day_start: datetime, day_end: datetime) -> bool:
    if task.kind == TaskKind.DEADLINE:
        return task.due.date() == day
    if task.kind == TaskKind.EVENT:
        return task.end >= day_start and task.start <= day_end
    return False

"""Storage layer for Bob CLI using a pipe-separated text file.

One task per line::

    T | 0 | read book
    D | 1 | return book | 2019-10-15 0000
    E | 0 | project meeting | 2019-10-15 1400 | 2019-10-15 1600

The second field is 1 for done, 0 otherwise. Lines that cannot be parsed
are skipped on load rather than failing the whole file.

The format has no escaping. A description containing "|" comes back with
one space on each side of every pipe ("a|b" reloads as "a | b"), and a
description made only of pipes and spaces reloads as a corrupted line and
is dropped.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from .task import Task, TaskKind, TaskStatus
from .task_list import TaskList
from .utils.datetime import from_storage_string, to_storage_string


logger = logging.getLogger(__name__)

FIELD_SEPARATOR_RE = re.compile(r"\s*\|\s*")
FIELD_SEPARATOR = " | "

# Fields each kind needs: tag, done flag, description, then its timestamps
MIN_FIELDS = {
    TaskKind.TODO: 3,
    TaskKind.DEADLINE: 4,
    TaskKind.EVENT: 5,
}


class StorageError(Exception):
    """Raised when the task file cannot be read or written."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class TaskLineFormat:
    """Handles conversion between Task objects and storage lines."""

    @staticmethod
    def to_line(task: Task) -> str:
        """Convert a Task to its storage line."""
        fields = [task.kind.value, "1" if task.is_done else "0", task.description]

        if task.kind == TaskKind.DEADLINE:
            fields.append(to_storage_string(task.due))
        elif task.kind == TaskKind.EVENT:
            fields.append(to_storage_string(task.start))
            fields.append(to_storage_string(task.end))

        return FIELD_SEPARATOR.join(fields)

    @staticmethod
    def from_line(line: str) -> Optional[Task]:
        """Parse a storage line back to a Task.

        Returns:
            The task, or None if the line is blank or corrupted
        """
        line = line.strip()
        if not line:
            return None

        parts = FIELD_SEPARATOR_RE.split(line)
        # Trailing empty fields carry nothing, e.g. "T | 0 |"
        while parts and not parts[-1]:
            parts.pop()

        try:
            kind = TaskKind(parts[0])
        except ValueError:
            return None

        if len(parts) < MIN_FIELDS[kind]:
            return None

        # Timestamps are always the last fields; anything between the done
        # flag and them belongs to the description, which may contain "|".
        n_times = MIN_FIELDS[kind] - 3
        description = FIELD_SEPARATOR.join(parts[2:len(parts) - n_times])
        if not description:
            return None

        try:
            if kind == TaskKind.DEADLINE:
                task = Task.deadline(description, from_storage_string(parts[-1]))
            elif kind == TaskKind.EVENT:
                task = Task.event(
                    description,
                    from_storage_string(parts[-2]),
                    from_storage_string(parts[-1]),
                )
            else:
                task = Task.todo(description)
        except ValueError:
            return None

        task.status = TaskStatus.DONE if parts[1] == "1" else TaskStatus.NOT_DONE
        return task


class Storage:
    """File-based storage for the task list."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path).expanduser()

    def load(self) -> TaskList:
        """Load the task list from disk.

        A missing file is an empty list. Corrupted lines are skipped.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        if not self.file_path.exists():
            logger.debug(f"No task file at {self.file_path}, starting empty")
            return TaskList()

        tasks: List[Task] = []
        try:
            # Decoded per line so one undecodable line is skipped like any other
            with open(self.file_path, "rb") as f:
                for line_no, raw in enumerate(f, start=1):
                    try:
                        line = raw.decode("utf-8")
                    except UnicodeDecodeError:
                        logger.debug(f"Skipping undecodable line {line_no} in {self.file_path}")
                        continue
                    task = TaskLineFormat.from_line(line)
                    if task is not None:
                        tasks.append(task)
                    elif line.strip():
                        logger.debug(f"Skipping corrupted line {line_no} in {self.file_path}")
        except OSError as e:
            logger.error(f"Error loading tasks from {self.file_path}: {e}")
            raise StorageError(str(e), self.file_path) from e

        logger.debug(f"Loaded {len(tasks)} tasks from {self.file_path}")
        return TaskList(tasks)

    def save(self, tasks: TaskList) -> None:
        """Rewrite the whole task file from ``tasks``.

        Raises:
            StorageError: If the directory or file cannot be written
        """
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                for task in tasks:
                    f.write(TaskLineFormat.to_line(task) + "\n")
        except OSError as e:
            logger.error(f"Error saving tasks to {self.file_path}: {e}")
            raise StorageError(str(e), self.file_path) from e

        logger.debug(f"Saved {len(tasks)} tasks to {self.file_path}")

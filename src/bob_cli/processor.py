"""Command processing: parse one line, apply it, persist, report."""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from . import parser
from .commands import (
    DATE_FORMAT_HINT,
    DATE_TIME_FORMAT_HINT,
    UNKNOWN_COMMAND_ERROR,
    CommandResult,
)
from .parser import ParseError
from .storage import Storage, StorageError
from .task import Task
from .task_list import URGENT_DAYS, TaskList
from .utils.datetime import DateTimeParseError, now, resolve


logger = logging.getLogger(__name__)

ERROR_TASK_NOT_FOUND = "WRONG!!! That task number does not exist."
ERROR_DELETE_SPECIFY = "WRONG!!! Please specify a task number to delete."
ERROR_TODO_DESC = "WRONG!!! Add a description for your todo."
ERROR_DEADLINE_DESC = "WRONG!!! Add a description for your deadline task."
ERROR_EVENT_DESC = "WRONG!!! Add a description for your event."
ERROR_FIND_KEYWORD = "WRONG!!! Please specify a keyword to search for."
ERROR_EVENT_END_AFTER_START = "WRONG!!! Event end time must be after start time."
ERROR_PREFIX = "WRONG!!! "


class CommandProcessor:
    """Owns the task list and applies user commands to it.

    Every mutating command rewrites the storage file. If that write fails
    the change stays in memory and the caller gets an error result.
    """

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = now,
                 urgent_days: int = URGENT_DAYS):
        self.storage = storage
        self.clock = clock
        self.urgent_days = urgent_days
        self.startup_error: Optional[str] = None
        try:
            self.tasks = storage.load()
        except StorageError as e:
            self.startup_error = f"Could not load tasks: {e}"
            self.tasks = TaskList()

    def handle(self, line: str) -> CommandResult:
        """Process one input line and return its result."""
        line = line.strip()
        logger.debug(f"Handling command: {line!r}")

        if line.lower() == "bye":
            return CommandResult.exit()
        if line == "list":
            return CommandResult.listing(self.tasks.all_tasks())
        if line.startswith(parser.PREFIX_MARK):
            return self._mark(line)
        if line.startswith(parser.PREFIX_UNMARK):
            return self._unmark(line)
        if line == "delete":
            return CommandResult.error(ERROR_DELETE_SPECIFY)
        if line.startswith(parser.PREFIX_DELETE):
            return self._delete(line)
        if line == "todo":
            return CommandResult.error(ERROR_TODO_DESC)
        if line.startswith(parser.PREFIX_TODO):
            return self._todo(line)
        if line == "deadline":
            return CommandResult.error(ERROR_DEADLINE_DESC)
        if line.startswith(parser.PREFIX_DEADLINE):
            return self._deadline(line)
        if line == "event":
            return CommandResult.error(ERROR_EVENT_DESC)
        if line.startswith(parser.PREFIX_EVENT):
            return self._event(line)
        if line == "find":
            return CommandResult.error(ERROR_FIND_KEYWORD)
        if line.startswith(parser.PREFIX_FIND):
            return self._find(line)
        if line.startswith(parser.PREFIX_ON):
            return self._on(line)
        return CommandResult.error(UNKNOWN_COMMAND_ERROR)

    def urgent_tasks(self) -> List[Task]:
        """Deadlines due within the urgency window from now."""
        return self.tasks.urgent_tasks(self.clock(), self.urgent_days)

    def _mark(self, line: str) -> CommandResult:
        index = parser.parse_index(line, parser.PREFIX_MARK)
        if not self.tasks.is_valid_index(index):
            return CommandResult.error(ERROR_TASK_NOT_FOUND)
        task = self.tasks.get(index)
        task.mark_done()
        return self._save_then(f"Nice! I've marked this task as done:\n  {task}")

    def _unmark(self, line: str) -> CommandResult:
        index = parser.parse_index(line, parser.PREFIX_UNMARK)
        if not self.tasks.is_valid_index(index):
            return CommandResult.error(ERROR_TASK_NOT_FOUND)
        task = self.tasks.get(index)
        task.mark_not_done()
        return self._save_then(f"OK, I've marked this task as not done yet:\n  {task}")

    def _delete(self, line: str) -> CommandResult:
        index = parser.parse_index(line, parser.PREFIX_DELETE)
        if not self.tasks.is_valid_index(index):
            return CommandResult.error(ERROR_TASK_NOT_FOUND)
        removed = self.tasks.remove(index)
        return self._save_then(
            f"Noted. I've removed this task:\n  {removed}\n"
            f"Now you have {len(self.tasks)} tasks in the list."
        )

    def _todo(self, line: str) -> CommandResult:
        description = parser.parse_todo_description(line)
        if isinstance(description, ParseError):
            return CommandResult.error(ERROR_TODO_DESC)
        return self._add(Task.todo(description))

    def _deadline(self, line: str) -> CommandResult:
        args = parser.parse_deadline_args(line)
        if isinstance(args, ParseError):
            return CommandResult.error(ERROR_PREFIX + args.message)

        due = resolve(args.by)
        if isinstance(due, DateTimeParseError):
            return CommandResult.error(DATE_TIME_FORMAT_HINT)
        return self._add(Task.deadline(args.description, due))

    def _event(self, line: str) -> CommandResult:
        args = parser.parse_event_args(line)
        if isinstance(args, ParseError):
            return CommandResult.error(ERROR_PREFIX + args.message)

        # Unparseable times are reported before any ordering problem
        start = resolve(args.start)
        end = resolve(args.end)
        if isinstance(start, DateTimeParseError) or isinstance(end, DateTimeParseError):
            return CommandResult.error(DATE_TIME_FORMAT_HINT)
        if end < start:
            return CommandResult.error(ERROR_EVENT_END_AFTER_START)
        return self._add(Task.event(args.description, start, end))

    def _find(self, line: str) -> CommandResult:
        keyword = parser.parse_find_keyword(line)
        if isinstance(keyword, ParseError):
            return CommandResult.error(ERROR_FIND_KEYWORD)
        return CommandResult.matching_tasks(self.tasks.find_by_keyword(keyword))

    def _on(self, line: str) -> CommandResult:
        day = parser.parse_on_date(line)
        if isinstance(day, DateTimeParseError):
            return CommandResult.error(DATE_FORMAT_HINT)
        return CommandResult.tasks_on_date(day, self.tasks.tasks_on_date(day))

    def _add(self, task: Task) -> CommandResult:
        self.tasks.add(task)
        return self._save_then(
            f"Got it. I've added this task:\n  {task}\n"
            f"Now you have {len(self.tasks)} tasks in the list."
        )

    def _save_then(self, message: str) -> CommandResult:
        try:
            self.storage.save(self.tasks)
        except StorageError as e:
            return CommandResult.error(f"Could not save tasks: {e}")
        return CommandResult.info(message)

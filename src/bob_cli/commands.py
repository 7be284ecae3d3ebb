"""Command results passed from the processor to the front end."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from .task import Task


UNKNOWN_COMMAND_ERROR = "WRONG!!! I'm sorry, but I don't know what that means :-("

DATE_TIME_FORMAT_HINT = (
    "WRONG!!! Invalid date/time.\n"
    "Use formats like:\n"
    "  2019-10-15\n"
    "  2019-10-15 1800\n"
    "  2/12/2019 1800"
)

DATE_FORMAT_HINT = "WRONG!!! Invalid date.\nUse: on yyyy-mm-dd (e.g., on 2019-12-02)"


class ResultType(Enum):
    """Kinds of command result."""
    EXIT = "exit"
    LIST = "list"
    MATCHING_TASKS = "matching_tasks"
    TASKS_ON_DATE = "tasks_on_date"
    MESSAGE = "message"
    ERROR = "error"


@dataclass
class CommandResult:
    """Outcome of one processed command.

    ``tasks`` is set for LIST, MATCHING_TASKS and TASKS_ON_DATE, ``day``
    only for TASKS_ON_DATE, ``message`` for MESSAGE and ERROR.
    """

    type: ResultType
    message: Optional[str] = None
    tasks: List[Task] = field(default_factory=list)
    day: Optional[date] = None

    @classmethod
    def exit(cls) -> "CommandResult":
        return cls(ResultType.EXIT)

    @classmethod
    def listing(cls, tasks: List[Task]) -> "CommandResult":
        return cls(ResultType.LIST, tasks=tasks)

    @classmethod
    def matching_tasks(cls, tasks: List[Task]) -> "CommandResult":
        return cls(ResultType.MATCHING_TASKS, tasks=tasks)

    @classmethod
    def tasks_on_date(cls, day: date, tasks: List[Task]) -> "CommandResult":
        return cls(ResultType.TASKS_ON_DATE, tasks=tasks, day=day)

    @classmethod
    def info(cls, message: str) -> "CommandResult":
        return cls(ResultType.MESSAGE, message=message)

    @classmethod
    def error(cls, message: str) -> "CommandResult":
        return cls(ResultType.ERROR, message=message)

    @property
    def is_error(self) -> bool:
        return self.type == ResultType.ERROR

    @property
    def is_exit(self) -> bool:
        return self.type == ResultType.EXIT

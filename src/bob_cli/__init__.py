"""Bob CLI - a chat-style personal task tracker driven by free-text commands."""

__version__ = "0.1.0"
__author__ = "Bob CLI Team"

from .task import Task, TaskKind, TaskStatus
from .task_list import TaskList
from .storage import Storage, StorageError
from .commands import CommandResult, ResultType
from .processor import CommandProcessor

__all__ = [
    "Task",
    "TaskKind",
    "TaskStatus",
    "TaskList",
    "Storage",
    "StorageError",
    "CommandResult",
    "ResultType",
    "CommandProcessor",
    "__version__",
]

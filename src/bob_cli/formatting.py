"""Plain-text rendering of command results."""

from typing import List

from .commands import CommandResult, ResultType
from .processor import CommandProcessor
from .task import Task
from .utils.datetime import format_date


GOODBYE = "Bye. Hope to see you again soon!"
NO_MATCHING_TASKS = "No matching tasks."


def format_numbered_list(header: str, tasks: List[Task]) -> str:
    lines = [header]
    lines.extend(f"{i}.{task}" for i, task in enumerate(tasks, start=1))
    return "\n".join(lines)


def format_result(result: CommandResult) -> str:
    """Render a result the way the chat front ends display it."""
    if result.type == ResultType.EXIT:
        return GOODBYE
    if result.type == ResultType.LIST:
        return format_numbered_list("Here are the tasks in your list:", result.tasks)
    if result.type == ResultType.MATCHING_TASKS:
        return format_numbered_list("Here are the matching tasks in your list:", result.tasks)
    if result.type == ResultType.TASKS_ON_DATE:
        header = f"Here are the tasks occurring on {format_date(result.day)}:"
        if not result.tasks:
            return f"{header}\n{NO_MATCHING_TASKS}"
        return format_numbered_list(header, result.tasks)
    return result.message or ""


def format_urgent(tasks: List[Task]) -> str:
    """Render the urgent-deadline banner, or '' when nothing is urgent."""
    if not tasks:
        return ""
    return format_numbered_list("URGENT TASKS:", tasks)


def respond(processor: CommandProcessor, line: str) -> str:
    """Handle ``line`` and return the full text reply.

    Urgent deadlines are listed above every reply except the goodbye.
    """
    result = processor.handle(line)
    response = format_result(result)
    if result.is_exit:
        return response

    urgent = format_urgent(processor.urgent_tasks())
    if urgent:
        return f"{urgent}\n\n{response}"
    return response

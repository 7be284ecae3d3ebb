"""Argument parsing for Bob CLI commands.

Each ``parse_*`` function takes a full, trimmed input line that is known
to start with its command prefix and returns either the extracted
arguments or a ``ParseError``. Nothing here raises on bad user input.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Union

from .utils.datetime import DateTimeParseError, parse_iso_date


PREFIX_MARK = "mark "
PREFIX_UNMARK = "unmark "
PREFIX_DELETE = "delete "
PREFIX_TODO = "todo "
PREFIX_DEADLINE = "deadline "
PREFIX_EVENT = "event "
PREFIX_FIND = "find "
PREFIX_ON = "on "

MARKER_BY = "/by"
MARKER_FROM = "/from"
MARKER_TO = "/to"

# Returned by parse_index for anything that is not a positive task number
INVALID_INDEX = -1

INDEX_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class ParseError:
    """Represents a parsing error with a user-facing message."""
    message: str


@dataclass
class DeadlineArgs:
    description: str
    by: str


@dataclass
class EventArgs:
    description: str
    start: str
    end: str


def _rest(line: str, prefix: str) -> str:
    assert line.startswith(prefix), f"input must start with {prefix!r}"
    return line[len(prefix):].strip()


def parse_index(line: str, prefix: str) -> int:
    """Parse a 1-based task number into a 0-based index.

    Args:
        line: Full user input, e.g. "mark 2"
        prefix: Command prefix including its trailing space, e.g. "mark "

    Returns:
        The 0-based index, or INVALID_INDEX when the number is missing,
        not an integer, or less than 1
    """
    number_part = _rest(line, prefix)
    if not INDEX_RE.fullmatch(number_part):
        return INVALID_INDEX
    one_based = int(number_part)
    if one_based < 1:
        return INVALID_INDEX
    return one_based - 1


def parse_todo_description(line: str) -> Union[str, ParseError]:
    """Extract the description of a todo command."""
    description = _rest(line, PREFIX_TODO)
    if not description:
        return ParseError("Add a description for your todo.")
    return description


def parse_deadline_args(line: str) -> Union[DeadlineArgs, ParseError]:
    """Split a deadline command into description and raw due time.

    Expected shape: ``deadline <description> /by <time>``.
    """
    rest = _rest(line, PREFIX_DEADLINE)
    by_pos = rest.find(MARKER_BY)

    if by_pos == -1:
        return ParseError("A deadline must have '/by <time>'")

    description = rest[:by_pos].strip()
    by_raw = rest[by_pos + len(MARKER_BY):].strip()

    if not description:
        return ParseError("Add a description for your deadline task.")
    if not by_raw:
        return ParseError("The deadline time cannot be empty.")

    return DeadlineArgs(description, by_raw)


def parse_event_args(line: str) -> Union[EventArgs, ParseError]:
    """Split an event command into description, raw start and raw end.

    Expected shape: ``event <description> /from <start> /to <end>``. Only
    the marker positions are checked here; the times themselves are
    resolved (and ordered) by the caller.
    """
    rest = _rest(line, PREFIX_EVENT)
    from_pos = rest.find(MARKER_FROM)
    to_pos = rest.find(MARKER_TO)

    if from_pos == -1 or to_pos == -1 or to_pos < from_pos:
        return ParseError("An event must have '/from <start> /to <end>'")

    description = rest[:from_pos].strip()
    from_raw = rest[from_pos + len(MARKER_FROM):to_pos].strip()
    to_raw = rest[to_pos + len(MARKER_TO):].strip()

    if not description:
        return ParseError("Add a description for your event.")
    if not from_raw or not to_raw:
        return ParseError("The event start/end time cannot be empty.")

    return EventArgs(description, from_raw, to_raw)


def parse_find_keyword(line: str) -> Union[str, ParseError]:
    """Extract the search keyword of a find command."""
    keyword = _rest(line, PREFIX_FIND)
    if not keyword:
        return ParseError("Please specify a keyword to search for.")
    return keyword


def parse_on_date(line: str) -> Union[date, DateTimeParseError]:
    """Parse the yyyy-mm-dd date of an on command."""
    return parse_iso_date(_rest(line, PREFIX_ON))

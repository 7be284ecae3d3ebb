"""Tests for command processing end to end."""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from bob_cli.commands import (
    DATE_FORMAT_HINT,
    DATE_TIME_FORMAT_HINT,
    UNKNOWN_COMMAND_ERROR,
    ResultType,
)
from bob_cli.processor import (
    ERROR_DEADLINE_DESC,
    ERROR_DELETE_SPECIFY,
    ERROR_EVENT_DESC,
    ERROR_EVENT_END_AFTER_START,
    ERROR_FIND_KEYWORD,
    ERROR_TASK_NOT_FOUND,
    ERROR_TODO_DESC,
    CommandProcessor,
)
from bob_cli.storage import Storage, StorageError
from bob_cli.task import TaskKind


class TestBasicCommands:
    """Test exit, list and unknown commands."""

    @pytest.mark.parametrize("line", ["bye", "BYE", "  Bye  "])
    def test_bye_is_case_insensitive(self, processor, line):
        assert processor.handle(line).type == ResultType.EXIT

    def test_list_empty(self, processor):
        result = processor.handle("list")
        assert result.type == ResultType.LIST
        assert result.tasks == []

    @pytest.mark.parametrize("line", ["blah", "List", "mark", "on", "todoread book", ""])
    def test_unknown_command(self, processor, line):
        result = processor.handle(line)
        assert result.is_error
        assert result.message == UNKNOWN_COMMAND_ERROR


class TestAddCommands:
    """Test todo, deadline and event."""

    def test_todo(self, processor, data_file):
        result = processor.handle("todo read book")

        assert result.type == ResultType.MESSAGE
        assert result.message == (
            "Got it. I've added this task:\n  [T][ ] read book\n"
            "Now you have 1 tasks in the list."
        )
        assert data_file.read_text(encoding="utf-8") == "T | 0 | read book\n"

    def test_bare_todo(self, processor):
        assert processor.handle("todo").message == ERROR_TODO_DESC

    def test_deadline(self, processor):
        processor.handle("deadline return book /by 2/12/2019 1800")
        task = processor.tasks.get(0)
        assert task.kind == TaskKind.DEADLINE
        assert task.due == datetime(2019, 12, 2, 18, 0)

    def test_bare_deadline(self, processor):
        assert processor.handle("deadline").message == ERROR_DEADLINE_DESC

    def test_deadline_validation_errors_are_prefixed(self, processor):
        result = processor.handle("deadline return book")
        assert result.message == "WRONG!!! A deadline must have '/by <time>'"
        assert len(processor.tasks) == 0

    def test_deadline_bad_time(self, processor):
        result = processor.handle("deadline return book /by someday")
        assert result.message == DATE_TIME_FORMAT_HINT
        assert len(processor.tasks) == 0

    def test_deadline_truncated_time(self, processor):
        result = processor.handle("deadline return book /by 2019-10-15 180")
        assert result.message == DATE_TIME_FORMAT_HINT
        assert len(processor.tasks) == 0

    def test_event(self, processor):
        processor.handle("event camp /from 2019-10-14 0900 /to 2019-10-16 17:00")
        task = processor.tasks.get(0)
        assert task.kind == TaskKind.EVENT
        assert task.start == datetime(2019, 10, 14, 9, 0)
        assert task.end == datetime(2019, 10, 16, 17, 0)

    def test_bare_event(self, processor):
        assert processor.handle("event").message == ERROR_EVENT_DESC

    def test_event_end_before_start(self, processor):
        result = processor.handle("event camp /from 2019-10-16 /to 2019-10-14")
        assert result.message == ERROR_EVENT_END_AFTER_START
        assert len(processor.tasks) == 0

    def test_event_same_start_and_end_allowed(self, processor):
        result = processor.handle("event ping /from 2019-10-16 1200 /to 2019-10-16 1200")
        assert result.type == ResultType.MESSAGE

    def test_event_parse_error_wins_over_ordering(self, processor):
        result = processor.handle("event camp /from whenever /to 2019-10-14")
        assert result.message == DATE_TIME_FORMAT_HINT


class TestIndexCommands:
    """Test mark, unmark and delete."""

    @pytest.fixture(autouse=True)
    def two_tasks(self, processor):
        processor.handle("todo read book")
        processor.handle("deadline return book /by 2019-10-15")

    def test_mark_and_unmark(self, processor, data_file):
        result = processor.handle("mark 2")
        assert result.message == "Nice! I've marked this task as done:\n  [D][X] return book (by: Oct 15 2019)"
        assert "D | 1 | return book" in data_file.read_text(encoding="utf-8")

        result = processor.handle("unmark 2")
        assert result.message == (
            "OK, I've marked this task as not done yet:\n  [D][ ] return book (by: Oct 15 2019)"
        )
        assert not processor.tasks.get(1).is_done

    def test_delete(self, processor, data_file):
        result = processor.handle("delete 1")
        assert result.message == (
            "Noted. I've removed this task:\n  [T][ ] read book\n"
            "Now you have 1 tasks in the list."
        )
        assert data_file.read_text(encoding="utf-8") == "D | 0 | return book | 2019-10-15 0000\n"

    def test_bare_delete(self, processor):
        assert processor.handle("delete").message == ERROR_DELETE_SPECIFY

    @pytest.mark.parametrize("line", ["mark 3", "mark 0", "mark -1", "unmark abc", "delete 99", "delete x"])
    def test_invalid_index(self, processor, line):
        result = processor.handle(line)
        assert result.message == ERROR_TASK_NOT_FOUND
        assert len(processor.tasks) == 2


class TestQueries:
    """Test find and on."""

    @pytest.fixture(autouse=True)
    def some_tasks(self, processor):
        processor.handle("todo read book")
        processor.handle("deadline return Book /by 2019-10-15")
        processor.handle("event camp /from 2019-10-14 /to 2019-10-16")

    def test_find(self, processor):
        result = processor.handle("find book")
        assert result.type == ResultType.MATCHING_TASKS
        assert [t.description for t in result.tasks] == ["read book", "return Book"]

    def test_bare_find(self, processor):
        assert processor.handle("find").message == ERROR_FIND_KEYWORD

    def test_on(self, processor):
        result = processor.handle("on 2019-10-15")
        assert result.type == ResultType.TASKS_ON_DATE
        assert result.day == date(2019, 10, 15)
        assert [t.description for t in result.tasks] == ["return Book", "camp"]

    def test_on_empty_day(self, processor):
        result = processor.handle("on 2020-01-01")
        assert result.type == ResultType.TASKS_ON_DATE
        assert result.tasks == []

    def test_on_rejects_other_formats(self, processor):
        assert processor.handle("on 15/10/2019").message == DATE_FORMAT_HINT
        assert processor.handle("on 2019-1-5").message == DATE_FORMAT_HINT


class TestUrgency:
    """Test the urgent-deadline query through the processor."""

    def test_urgent_tasks_use_clock(self, processor):
        processor.handle("deadline pay rent /by 2025-01-03 2359")
        processor.handle("deadline file taxes /by 2025-01-04")
        assert [t.description for t in processor.urgent_tasks()] == ["pay rent"]


class TestStorageFailures:
    """Test load and save failures."""

    def test_load_failure_starts_empty(self, storage):
        with patch.object(Storage, "load", side_effect=StorageError("disk on fire", storage.file_path)):
            processor = CommandProcessor(storage)

        assert processor.startup_error == "Could not load tasks: disk on fire"
        assert len(processor.tasks) == 0

    def test_save_failure_keeps_change_in_memory(self, processor):
        with patch.object(Storage, "save", side_effect=StorageError("read-only", processor.storage.file_path)):
            result = processor.handle("todo read book")

        assert result.is_error
        assert result.message == "Could not save tasks: read-only"
        assert len(processor.tasks) == 1

    def test_tasks_reload_from_previous_session(self, storage):
        first = CommandProcessor(storage)
        first.handle("todo read book")
        first.handle("mark 1")

        second = CommandProcessor(storage)
        assert [str(t) for t in second.tasks] == ["[T][X] read book"]

    def test_undecodable_line_does_not_wipe_file(self, storage, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_bytes(b"T | 0 | keep me\nT | 0 | bad \xff byte\nT | 0 | keep too\n")

        processor = CommandProcessor(storage)
        processor.handle("todo new")

        assert processor.startup_error is None
        assert data_file.read_text(encoding="utf-8") == (
            "T | 0 | keep me\nT | 0 | keep too\nT | 0 | new\n"
        )

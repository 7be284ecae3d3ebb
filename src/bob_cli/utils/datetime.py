"""Date/time parsing and display helpers.

User input may arrive in several formats; this module tries them in a
fixed order and renders timestamps back for display. The storage format
is separate and always carries a time of day.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union


# (pattern, format) pairs tried in order, first match wins. strptime alone
# accepts single-digit fields, so the pattern pins the exact shape first.
DATE_TIME_FORMATS = (
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{4}"), "%Y-%m-%d %H%M"),
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}"), "%Y-%m-%d %H:%M"),
    (re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4} [0-9]{4}"), "%d/%m/%Y %H%M"),
    (re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4} [0-9]{2}:[0-9]{2}"), "%d/%m/%Y %H:%M"),
)

DATE_ONLY_FORMATS = (
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"), "%Y-%m-%d"),
    (re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4}"), "%d/%m/%Y"),
)

ISO_DATE = DATE_ONLY_FORMATS[0]

# On-disk format, e.g. 2019-12-02 1800
STORAGE_FORMAT = "%Y-%m-%d %H%M"
STORAGE_RE = DATE_TIME_FORMATS[0][0]

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass
class DateTimeParseError:
    """Represents a date/time string that matched none of the accepted formats."""
    message: str
    text: str


def now() -> datetime:
    """Return the current local wall-clock time.

    Returns:
        Naive datetime in local time
    """
    return datetime.now()


def _match(pattern: "re.Pattern", fmt: str, text: str) -> Optional[datetime]:
    if not pattern.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        # Right shape, impossible value, e.g. 2019-02-30 or 2500
        return None


def resolve(text: str) -> Union[datetime, DateTimeParseError]:
    """Parse user-supplied date/time text.

    Date+time formats are tried first, then date-only formats, which
    resolve to midnight.

    Args:
        text: Raw date/time text, surrounding whitespace is ignored

    Returns:
        The parsed datetime, or a DateTimeParseError if no format matched
    """
    s = text.strip()

    for pattern, fmt in DATE_TIME_FORMATS:
        parsed = _match(pattern, fmt, s)
        if parsed is not None:
            return parsed

    for pattern, fmt in DATE_ONLY_FORMATS:
        parsed = _match(pattern, fmt, s)
        if parsed is not None:
            return datetime.combine(parsed.date(), time.min)

    return DateTimeParseError("unparseable date/time", text)


def parse_iso_date(text: str) -> Union[date, DateTimeParseError]:
    """Parse a strict yyyy-mm-dd date (no day/month/year fallback).

    Args:
        text: Raw date text

    Returns:
        The parsed date, or a DateTimeParseError
    """
    pattern, fmt = ISO_DATE
    parsed = _match(pattern, fmt, text.strip())
    if parsed is None:
        return DateTimeParseError("unparseable date", text)
    return parsed.date()


def format_date(d: date) -> str:
    """Render a calendar date as e.g. 'Oct 15 2019'."""
    # strftime('%b') follows the process locale, month names here are fixed
    return f"{MONTH_NAMES[d.month - 1]} {d.day:02d} {d.year:04d}"


def format_datetime(dt: datetime) -> str:
    """Render a timestamp for display.

    Midnight renders as the date alone, anything else gets HH:MM appended.
    A date typed without a time and an explicit 00:00 look the same.

    Args:
        dt: Timestamp to render

    Returns:
        Display string such as 'Jan 15 2025' or 'Jan 15 2025 18:30'
    """
    if dt.time() == time.min:
        return format_date(dt.date())
    return f"{format_date(dt.date())} {dt.strftime('%H:%M')}"


def to_storage_string(dt: datetime) -> str:
    """Render a timestamp in the on-disk format."""
    return dt.strftime(STORAGE_FORMAT)


def from_storage_string(text: str) -> datetime:
    """Parse a timestamp in the on-disk format.

    Raises:
        ValueError: If the text is not in the storage format
    """
    s = text.strip()
    if not STORAGE_RE.fullmatch(s):
        raise ValueError(f"not a storage timestamp: {text!r}")
    return datetime.strptime(s, STORAGE_FORMAT)

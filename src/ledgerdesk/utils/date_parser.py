"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser

# Missing month and day of a partial date ("2024", "March 2024") fall back to
# January 1st. Parsing again with a second default year reveals a missing year.
_DEFAULT_DATETIME = datetime(1900, 1, 1)
_SECOND_DEFAULT_DATETIME = datetime(1901, 1, 1)

_PART_SEPARATOR = re.compile(r"[/\-]")


def parse_date(date_str: str) -> date:
    """Parse a date typed on the command line.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_ledger_date(raw: Optional[str]) -> Optional[date]:
    """Parse a free-form date taken from a ledger or transfer sheet.

    Native parsing is tried first; ambiguous numeric input such as
    "03/04/2024" is read month-first there. When that fails the string is
    split on "/" or "-" and read as day/month/year if the first part is
    above 12 or the last part above 31.

    Text without a year, such as a bare day number, is rejected. Invalid
    calendar dates like "31/04/2024" are rejected, not rolled over.

    Never raises: empty or unparseable input gives None.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None

    try:
        parsed = date_parser.parse(text, default=_DEFAULT_DATETIME)
        reparsed = date_parser.parse(text, default=_SECOND_DEFAULT_DATETIME)
    except (ValueError, TypeError, OverflowError):
        pass
    else:
        if parsed.year != reparsed.year:
            return None
        return parsed.date()

    parts = _PART_SEPARATOR.split(text)
    if len(parts) != 3:
        return None
    try:
        p1, p2, p3 = (int(part.strip()) for part in parts)
    except ValueError:
        return None

    if p1 > 12 or p3 > 31:
        try:
            return date(p3, p2, p1)
        except ValueError:
            return None
    return None


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from earlier to later."""
    return (later - earlier).days

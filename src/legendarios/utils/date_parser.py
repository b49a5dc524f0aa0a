"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_ISO_DAY = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})")

DateLike = Union[date, datetime, str]


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15" (a time or offset suffix is ignored)
    - Brazilian dates: "15/01/2024"
    - Relative dates: "today"/"hoje", "yesterday"/"ontem", "tomorrow"/"amanhã"

    Args:
        date_str: Date string in one of the formats above

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "hoje": today,
        "yesterday": today - timedelta(days=1),
        "ontem": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "amanhã": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    match = _ISO_DAY.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)

    try:
        return date_parser.parse(text, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def calendar_day(value: DateLike) -> date:
    """Return the calendar day a date-like value names.

    Strings are read by their literal year-month-day components and
    datetimes by their own date, so no timezone conversion can move a value
    into a neighbouring day or month.

    Raises:
        ValueError: If the value is not a date, datetime or parseable string
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date(value)
    raise ValueError(f"Cannot read a calendar day from {value!r}")


def month_start(month: int, year: int) -> date:
    """First calendar day of a month."""
    return date(year, month, 1)


def previous_period(month: int, year: int) -> tuple[int, int]:
    """Return the (month, year) before the given one."""
    previous = month_start(month, year) - relativedelta(months=1)
    return previous.month, previous.year


def current_period(today: date | None = None) -> tuple[int, int]:
    """Return (month, year) of today, or of the given day."""
    today = today or date.today()
    return today.month, today.year

"""Date and period parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from boojet.domain.errors import InvalidInputError
from boojet.domain.periods import YearMonth

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _relative_date(text: str, today: date) -> Optional[date]:
    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in simple:
        return simple[text]

    direction, _, period = text.partition(" ")
    offsets = {"last": -1, "this": 0, "next": 1}
    if direction not in offsets:
        return None
    step = offsets[direction]

    if period == "month":
        return (today + relativedelta(months=step)).replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1) + relativedelta(years=step)
    if period == "week":
        monday = today - timedelta(days=today.weekday())
        return monday + timedelta(weeks=step)
    if direction == "last" and period in _WEEKDAYS:
        days_ago = (today.weekday() - _WEEKDAYS.index(period)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2025-01-15", "January 15, 2025", etc.
    - Relative dates: "today", "yesterday", "last month", "this year",
      "next week", "last friday"

    Month and year words resolve to the first day of that period; week
    words resolve to its Monday.

    Args:
        date_str: Date string in various formats
        today: Reference date (defaults to the current date)

    Returns:
        Date object

    Raises:
        InvalidInputError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    relative = _relative_date(text, today)
    if relative is not None:
        return relative

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(f"Could not parse date '{date_str}': {e}") from e


def parse_year_month(value: str, today: Optional[date] = None) -> YearMonth:
    """Parse a month such as "2025-03", "March 2025" or "last month".

    Raises:
        InvalidInputError: If the value names no calendar month
    """
    text = value.strip()
    try:
        return YearMonth.parse(text)
    except InvalidInputError:
        pass

    today = today or date.today()
    relative = _relative_date(text.lower(), today)
    if relative is not None:
        return YearMonth.from_date(relative)

    # Day 1 keeps "February 2025" valid when today is the 30th
    default = datetime(today.year, today.month, 1)
    try:
        return YearMonth.from_date(date_parser.parse(text, default=default).date())
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(f"Could not parse month '{value}': {e}") from e


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week. "this" periods end today.
        today: Reference date (defaults to the current date)

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        InvalidInputError: If period string is not recognized
    """
    normalized = period.strip().lower()
    today = today or date.today()

    if normalized == "this-month":
        return today.replace(day=1), today
    if normalized == "this-year":
        return today.replace(month=1, day=1), today
    if normalized == "this-week":
        return today - timedelta(days=today.weekday()), today
    if normalized == "last-month":
        last_month = YearMonth.from_date(today).previous()
        return last_month.first_day, last_month.last_day
    if normalized == "last-year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)
    if normalized == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)

    raise InvalidInputError(
        f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
        "this-week, last-month, last-year, last-week"
    )

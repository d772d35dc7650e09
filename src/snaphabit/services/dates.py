"""Calendar helpers for day, week and month boundaries.

Everything works on local wall-clock dates: a ``datetime`` is reduced to
its own calendar day without timezone conversion. Months are 1-based.
"""

import calendar
from datetime import date, datetime, time, timedelta

DECEMBER = 12
JANUARY = 1
DAYS_PER_WEEK = 7


def start_of_day(value: datetime) -> datetime:
    """Return midnight on the same day."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    """Return the last representable instant of the same day."""
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def start_of_week(value: date) -> date:
    """Return the Monday of the week; Sunday closes the previous week."""
    day = _as_date(value)
    return day - timedelta(days=day.weekday())


def end_of_week(value: date) -> date:
    """Return the Sunday of the week."""
    return start_of_week(value) + timedelta(days=DAYS_PER_WEEK - 1)


def week_number(value: date) -> int:
    """Return the ISO 8601 week number."""
    return _as_date(value).isocalendar().week


def start_of_month(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


def end_of_month(year: int, month: int) -> datetime:
    last = calendar.monthrange(year, month)[1]
    return datetime.combine(date(year, month, last), time.max)


def days_in_week(value: date) -> list[date]:
    """Return Monday..Sunday for the week containing ``value``."""
    start = start_of_week(value)
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def days_in_month(year: int, month: int) -> list[date | None]:
    """Return a calendar grid for the month.

    The grid starts with one ``None`` per weekday before the first of
    the month, counting Sunday as column zero.
    """
    first = date(year, month, 1)
    leading = (first.weekday() + 1) % DAYS_PER_WEEK
    last = calendar.monthrange(year, month)[1]
    days: list[date | None] = [None] * leading
    days.extend(date(year, month, day) for day in range(1, last + 1))
    return days


def previous_week(value: date) -> date:
    return value - timedelta(days=DAYS_PER_WEEK)


def next_week(value: date) -> date:
    return value + timedelta(days=DAYS_PER_WEEK)


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == JANUARY:
        return year - 1, DECEMBER
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == DECEMBER:
        return year + 1, JANUARY
    return year, month + 1


def is_same_day(first: date, second: date) -> bool:
    """Compare calendar days, ignoring any time of day."""
    left = _as_date(first)
    right = _as_date(second)
    return (left.year, left.month, left.day) == (right.year, right.month, right.day)


def is_date_in_range(value: date, start: date, end: date) -> bool:
    return start <= value <= end


def day_key(value: date) -> str:
    """Return the canonical ``YYYY-MM-DD`` grouping key for a day."""
    return _as_date(value).isoformat()


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value

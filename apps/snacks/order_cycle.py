"""
Order cycle calculations.

Every calendar month has a purchasing cycle that closes a fixed number of
days (``SNACKS_CUTOFF_DAYS``, 7 by default) before the month's last day.
A request submitted on or before the closing day is bought with next
month's order; a request submitted after it waits for the order two
months ahead.

All functions here are pure and total over calendar inputs. Months are
1-indexed and out-of-range month numbers carry over into neighbouring
years (``(2024, 13)`` is January 2025, ``(2024, 0)`` is December 2023).

Example::

    >>> compute_effective_order_month(date(2024, 1, 24))
    datetime.date(2024, 2, 1)
    >>> compute_effective_order_month(date(2024, 1, 25))
    datetime.date(2024, 3, 1)
"""

import calendar
import re
from datetime import date, datetime, timedelta

from django.conf import settings
from django.utils import timezone

from .exceptions import InvalidMonthError

DEFAULT_CUTOFF_DAYS = 7

MONTH_PATTERN = re.compile(r'^(?P<year>\d{4})-(?P<month>\d{2})$')

# Inclusive ranges end one millisecond before the next month starts
RANGE_RESOLUTION = timedelta(milliseconds=1)


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Carry an arbitrary month number into the 1..12 range."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return year, month


def add_months(day: date, months: int) -> date:
    """Return the first day of the month ``months`` after ``day``'s month."""
    year, month = normalize_month(day.year, day.month + months)
    return date(year, month, 1)


def as_local_date(value) -> date:
    """
    Reduce a date or datetime to a calendar date.

    Aware datetimes are converted to the project's time zone first, so a
    request stored in UTC lands on the business day it was made.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def cutoff_days() -> int:
    return getattr(settings, 'SNACKS_CUTOFF_DAYS', DEFAULT_CUTOFF_DAYS)


def deadline_day(year: int, month: int, days_before_end: int = None) -> int:
    """
    Last day of ``month`` on which requests still make next month's order.

    Always a real day of the month: a cutoff longer than the month closes
    the cycle on the 1st, a negative one on the last day.
    """
    if days_before_end is None:
        days_before_end = cutoff_days()
    year, month = normalize_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return min(max(last_day - days_before_end, 1), last_day)


def compute_effective_order_month(request_date, days_before_end: int = None) -> date:
    """
    Map a request timestamp to the order month it belongs to.

    Args:
        request_date (date | datetime): When the request was made.
        days_before_end (int, optional): Cycle cutoff. Defaults to
            ``settings.SNACKS_CUTOFF_DAYS``.

    Returns:
        date: First day of the target month, one or two months after the
        request's month.
    """
    day = as_local_date(request_date)
    deadline = deadline_day(day.year, day.month, days_before_end)

    if day.day <= deadline:
        return add_months(day, 1)
    return add_months(day, 2)


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    """
    Inclusive instant range covering one month.

    Returns:
        tuple: ``(start, end)`` aware datetimes in the current time zone.
        ``start`` is midnight on the 1st, ``end`` is 23:59:59.999 on the
        month's last day.
    """
    year, month = normalize_month(year, month)
    next_year, next_month = normalize_month(year, month + 1)
    tz = timezone.get_current_timezone()

    start = timezone.make_aware(datetime(year, month, 1), tz)
    next_start = timezone.make_aware(datetime(next_year, next_month, 1), tz)
    return start, next_start - RANGE_RESOLUTION


def month_date_range(year: int, month: int) -> tuple[date, date]:
    """Inclusive ``(first day, last day)`` of a month as plain dates."""
    year, month = normalize_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def parse_month(value):
    """
    Parse a ``YYYY-MM`` month filter.

    Returns:
        tuple | None: ``(year, month)`` with the month carried into range,
        or None when ``value`` is empty (no filter).

    Raises:
        InvalidMonthError: If ``value`` is not in ``YYYY-MM`` form.
    """
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None

    match = MONTH_PATTERN.match(value)
    if not match:
        raise InvalidMonthError(f"Invalid month '{value}'. Use YYYY-MM")
    return normalize_month(int(match.group('year')), int(match.group('month')))


def format_month(year: int, month: int) -> str:
    year, month = normalize_month(year, month)
    return f'{year:04d}-{month:02d}'


def format_month_label(day: date) -> str:
    """Human label such as ``'November 2026'``."""
    return f'{calendar.month_name[day.month]} {day.year}'

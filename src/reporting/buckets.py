"""Calendar buckets for time series.

Every series produced by the reports covers its whole requested range:
buckets with no orders are present with zero values.
"""

import calendar
from datetime import date, datetime, time, timedelta

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def year_bounds(year: int) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` range covering the calendar year."""
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def days(start: date, end: date) -> list[date]:
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def months(start: date, end: date) -> list[tuple[int, int]]:
    result = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        result.append((year, month))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return result


def years(first: int, last: int) -> list[int]:
    return list(range(first, last + 1))

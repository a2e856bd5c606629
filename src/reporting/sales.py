"""Sales reports: revenue totals and zero-filled time series.

Only orders in a revenue status (shipping or delivered) count towards
revenue. Buckets are computed with ``EXTRACT`` so the same queries run on
SQLite and PostgreSQL.
"""

from datetime import datetime, timedelta

from protean.exceptions import ValidationError
from sqlalchemy import extract, func, select
from sqlalchemy.orm import Session

from ordering.order.order import REVENUE_STATUSES, Order
from ordering.order.repository import OrderRepository
from reporting.buckets import (
    MONTH_NAMES,
    days,
    days_in_month,
    month_bounds,
    months,
    start_of_day,
    year_bounds,
    years,
)
from shared.clock import utcnow
from shared.logging import get_logger

logger = get_logger(__name__)

PERIODS = ("daily", "monthly", "yearly")
YEARLY_WINDOW = 5


def _year():
    return extract("year", Order.created_at)


def _month():
    return extract("month", Order.created_at)


def _day():
    return extract("day", Order.created_at)


def _check_period(period: str) -> None:
    if period not in PERIODS:
        raise ValidationError({"period": [f"Invalid period '{period}'. Use daily, monthly, or yearly."]})


def bucket_totals(
    session: Session, keys, start: datetime | None = None, end: datetime | None = None
) -> dict[tuple[int, ...], tuple[float, int]]:
    """Revenue and order count per bucket over ``[start, end)``.

    ``keys`` are the ``EXTRACT`` expressions that define a bucket; the result
    maps each bucket's integer key tuple to ``(total, count)``.
    """
    stmt = select(*keys, func.sum(Order.total_amount), func.count(Order.id)).where(Order.status.in_(REVENUE_STATUSES))
    if start is not None:
        stmt = stmt.where(Order.created_at >= start)
    if end is not None:
        stmt = stmt.where(Order.created_at < end)

    totals = {}
    for *bucket, total, count in session.execute(stmt.group_by(*keys)):
        totals[tuple(int(part) for part in bucket)] = (float(total or 0), int(count))
    return totals


def total_revenue(session: Session) -> float:
    stmt = select(func.coalesce(func.sum(Order.total_amount), 0.0)).where(Order.status.in_(REVENUE_STATUSES))
    return float(session.scalar(stmt) or 0)


def monthly_sales(session: Session, year: int | None = None) -> list[dict]:
    """Twelve ``{name, total}`` buckets for the year, January first."""
    year = year or utcnow().year
    totals = bucket_totals(session, (_month(),), *year_bounds(year))
    return [
        {"name": name, "total": totals.get((number,), (0.0, 0))[0]}
        for number, name in enumerate(MONTH_NAMES, start=1)
    ]


def yearly_sales(session: Session) -> list[dict]:
    """One ``{name, total}`` bucket per year from the first to the last year with revenue."""
    totals = bucket_totals(session, (_year(),))
    if not totals:
        return []

    first, last = min(totals)[0], max(totals)[0]
    return [{"name": str(year), "total": totals.get((year,), (0.0, 0))[0]} for year in years(first, last)]


def order_stats(session: Session, year: int | None = None) -> dict:
    total_orders = session.scalar(select(func.count(Order.id))) or 0
    return {
        "total_orders": total_orders,
        "status_counts": OrderRepository(session).status_counts(),
        "total_revenue": total_revenue(session),
        "monthly_revenue": monthly_sales(session, year),
    }


def sales_by_period(
    session: Session,
    period: str = "monthly",
    year: int | None = None,
    month: int | None = None,
    now: datetime | None = None,
) -> dict:
    """Chart series of ``{label, value}`` rows.

    ``daily`` covers every day of ``month``/``year``, ``monthly`` the twelve
    months of ``year`` and ``yearly`` the last five years up to now.
    """
    _check_period(period)
    now = now or utcnow()
    year = year or now.year
    month = month or now.month

    if period == "daily":
        if not 1 <= month <= 12:
            raise ValidationError({"month": ["Month must be between 1 and 12"]})
        totals = bucket_totals(session, (_day(),), *month_bounds(year, month))
        data = [
            {"label": str(day), "value": totals.get((day,), (0.0, 0))[0]}
            for day in range(1, days_in_month(year, month) + 1)
        ]
    elif period == "monthly":
        data = [{"label": row["name"], "value": row["total"]} for row in monthly_sales(session, year)]
    else:
        first = now.year - (YEARLY_WINDOW - 1)
        totals = bucket_totals(session, (_year(),), year_bounds(first)[0], year_bounds(now.year)[1])
        data = [
            {"label": str(bucket), "value": totals.get((bucket,), (0.0, 0))[0]} for bucket in years(first, now.year)
        ]

    return {"period": period, "data": data}


def sales_statistics(
    session: Session,
    period: str = "monthly",
    start: datetime | None = None,
    end: datetime | None = None,
    now: datetime | None = None,
) -> dict:
    """Revenue and order counts per day, month or year over ``[start, end]``.

    Both ends are whole days; ``start`` defaults to January 1st of the
    current year and ``end`` to now.
    """
    _check_period(period)
    now = now or utcnow()
    start = start or datetime(now.year, 1, 1)
    end = end or now
    if end < start:
        raise ValidationError({"endDate": ["End date must not be before start date"]})

    first_day, last_day = start.date(), end.date()
    lower, upper = start_of_day(first_day), start_of_day(last_day + timedelta(days=1))

    if period == "daily":
        totals = bucket_totals(session, (_year(), _month(), _day()), lower, upper)
        data = []
        for day in days(first_day, last_day):
            total, count = totals.get((day.year, day.month, day.day), (0.0, 0))
            data.append({"date": day.isoformat(), "total": total, "count": count})
    elif period == "monthly":
        totals = bucket_totals(session, (_year(), _month()), lower, upper)
        data = []
        for year, month in months(first_day, last_day):
            total, count = totals.get((year, month), (0.0, 0))
            data.append({"year": year, "month": month, "total": total, "count": count})
    else:
        totals = bucket_totals(session, (_year(),), lower, upper)
        data = []
        for year in years(first_day.year, last_day.year):
            total, count = totals.get((year,), (0.0, 0))
            data.append({"year": year, "total": total, "count": count})

    logger.debug(
        "sales_statistics_computed", period=period, start=lower.isoformat(), end=upper.isoformat(), buckets=len(data)
    )
    return {"period": period, "data": data}

"""Top customer report."""

from datetime import datetime, timedelta

from protean.exceptions import ValidationError
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from identity.user.user import User
from ordering.order.order import REVENUE_STATUSES, Order
from reporting.buckets import start_of_day
from shared.clock import utcnow

PERIODS = ("daily", "weekly", "monthly", "yearly", "all")
SORT_KEYS = ("orders", "spent", "average")


def period_start(period: str, now: datetime) -> datetime | None:
    """First instant of the current day, week (from Sunday), month or year; None for ``all``."""
    today = now.date()
    if period == "daily":
        return start_of_day(today)
    if period == "weekly":
        return start_of_day(today - timedelta(days=(today.weekday() + 1) % 7))
    if period == "monthly":
        return datetime(today.year, today.month, 1)
    if period == "yearly":
        return datetime(today.year, 1, 1)
    return None


def top_customers(
    session: Session,
    period: str = "monthly",
    sort_by: str = "orders",
    limit: int = 10,
    now: datetime | None = None,
) -> list[dict]:
    if period not in PERIODS:
        raise ValidationError({"period": [f"Invalid period '{period}'"]})
    if sort_by not in SORT_KEYS:
        raise ValidationError({"sortBy": [f"Invalid sort '{sort_by}'. Use orders, spent or average."]})

    order_count = func.count(Order.id)
    spent = func.coalesce(func.sum(Order.total_amount), 0.0)
    ranking = {"orders": (order_count, spent), "spent": (spent, order_count), "average": (spent / order_count, spent)}

    stmt = (
        select(User, order_count, spent)
        .join(Order, Order.user_id == User.id)
        .where(Order.status.in_(REVENUE_STATUSES))
        .group_by(User.id)
    )
    start = period_start(period, now or utcnow())
    if start is not None:
        stmt = stmt.where(Order.created_at >= start)

    primary, secondary = ranking[sort_by]
    stmt = stmt.order_by(desc(primary), desc(secondary), User.id).limit(limit)

    result = []
    for user, orders, total in session.execute(stmt):
        total = float(total or 0)
        result.append(
            {
                "id": user.id,
                "username": user.username,
                "full_name": user.full_name or "",
                "email": user.email or "",
                "phone": user.phone or "",
                "order_count": orders,
                "total_spent": total,
                "avg_order_value": total / orders if orders else 0.0,
            }
        )
    return result

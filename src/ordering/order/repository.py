from __future__ import annotations

from protean.exceptions import ObjectNotFoundError, ValidationError
from pydantic.alias_generators import to_snake
from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.orm import joinedload, selectinload

from ordering.order.order import REVENUE_STATUSES, Order, OrderItem, OrderStatus
from shared.pagination import Page, paginate
from shared.repository import Repository

SORTABLE = {"id", "created_at", "updated_at", "total_amount", "status", "payment_status"}


def _sort_column(sort_by: str | None):
    field = to_snake(sort_by or "created_at")
    if field not in SORTABLE:
        raise ValidationError({"sortBy": [f"Cannot sort orders by '{sort_by}'"]})
    return getattr(Order, field)


def _with_lines(stmt):
    return stmt.options(
        selectinload(Order.items).selectinload(OrderItem.product),
        joinedload(Order.user),
    )


class OrderRepository(Repository[Order]):
    model = Order
    label = "Order"

    def get_detailed(self, order_id: int) -> Order:
        order = self.session.scalars(_with_lines(select(Order).where(Order.id == order_id))).unique().first()
        if order is None:
            raise ObjectNotFoundError({"_entity": f"{self.label} not found"})
        return order

    def list(
        self,
        status: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page:
        column = _sort_column(sort_by)
        stmt = select(Order)
        if status:
            stmt = stmt.where(Order.status == status)
        if search:
            term = f"%{search.removeprefix('YP').removeprefix('yp')}%"
            stmt = stmt.where(
                or_(
                    cast(Order.id, String).like(term),
                    Order.shipping_name.ilike(f"%{search}%"),
                    Order.shipping_phone.ilike(f"%{search}%"),
                )
            )
        stmt = stmt.order_by(column.asc() if sort_order == "asc" else column.desc(), Order.id.desc())
        return paginate(self.session, _with_lines(stmt), page, limit)

    def status_counts(self) -> dict[str, int]:
        counts = {status.value: 0 for status in OrderStatus}
        rows = self.session.execute(select(Order.status, func.count(Order.id)).group_by(Order.status))
        for status, count in rows:
            counts[status] = count
        return counts

    def for_user(self, user_id: int) -> list[Order]:
        stmt = _with_lines(select(Order).where(Order.user_id == user_id)).order_by(
            Order.created_at.desc(), Order.id.desc()
        )
        return list(self.session.scalars(stmt).unique())

    def recent(self, limit: int = 5) -> list[Order]:
        stmt = _with_lines(select(Order)).order_by(Order.created_at.desc(), Order.id.desc())
        return list(self.session.scalars(stmt.limit(limit)).unique())

    def totals_for_user(self, user_id: int) -> tuple[int, float]:
        """Number of orders placed by the user and the amount spent on revenue orders."""
        spent = func.coalesce(
            func.sum(case((Order.status.in_(REVENUE_STATUSES), Order.total_amount), else_=0.0)),
            0.0,
        )
        count, total = self.session.execute(
            select(func.count(Order.id), spent).where(Order.user_id == user_id)
        ).one()
        return count, float(total or 0)

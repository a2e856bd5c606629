"""Back-office dashboard figures."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalogue.product.product import Product
from identity.user.user import User, UserRole
from ordering.order.order import Order
from ordering.order.repository import OrderRepository
from reporting.sales import total_revenue

RECENT_ORDERS = 5


def store_totals(session: Session) -> dict:
    """Headline counts: revenue, orders (overall and per status), customers and products."""
    return {
        "total_sales": total_revenue(session),
        "total_orders": session.scalar(select(func.count(Order.id))) or 0,
        "orders_by_status": OrderRepository(session).status_counts(),
        "total_customers": session.scalar(select(func.count(User.id)).where(User.role == UserRole.USER.value)) or 0,
        "total_products": session.scalar(select(func.count(Product.id))) or 0,
    }


def dashboard_stats(session: Session) -> dict:
    totals = store_totals(session)
    totals["recent_orders"] = OrderRepository(session).recent(RECENT_ORDERS)
    return totals


def recent_orders(session: Session, limit: int = RECENT_ORDERS) -> list[dict]:
    """Compact ``{id, customer, date, status, total}`` rows, newest first."""
    rows = []
    for order in OrderRepository(session).recent(limit):
        customer = (order.user.full_name or order.user.username) if order.user else order.shipping_name
        rows.append(
            {
                "id": order.display_number,
                "customer": customer or "Guest",
                "date": order.created_at.date().isoformat(),
                "status": order.status,
                "total": order.total_amount,
            }
        )
    return rows

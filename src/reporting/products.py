"""Best-selling product reports."""

from datetime import datetime

from protean.exceptions import ValidationError
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session, selectinload

from catalogue.product.product import Product
from ordering.order.order import REVENUE_STATUSES, Order, OrderItem
from shared.clock import utcnow

SORT_KEYS = ("revenue", "quantity")


def _sales_rows(session: Session, criteria, sort_by: str, limit: int):
    quantity = func.sum(OrderItem.quantity)
    revenue = func.sum(OrderItem.quantity * OrderItem.price)

    stmt = (
        select(OrderItem.product_id, quantity, revenue)
        .join(Order, Order.id == OrderItem.order_id)
        .where(Order.status.in_(REVENUE_STATUSES), *criteria)
        .group_by(OrderItem.product_id)
    )
    primary, secondary = (quantity, revenue) if sort_by == "quantity" else (revenue, quantity)
    stmt = stmt.order_by(desc(primary), desc(secondary), OrderItem.product_id).limit(limit)
    return session.execute(stmt).all()


def _products_by_id(session: Session, product_ids) -> dict[int, Product]:
    if not product_ids:
        return {}
    stmt = select(Product).where(Product.id.in_(product_ids)).options(selectinload(Product.category))
    return {product.id: product for product in session.scalars(stmt)}


def top_products(
    session: Session,
    start: datetime | None = None,
    end: datetime | None = None,
    category_id: int | None = None,
    sort_by: str = "revenue",
    limit: int = 10,
    now: datetime | None = None,
) -> list[dict]:
    """Products ranked by revenue (default) or units sold over ``[start, end]``.

    The range defaults to the first of the current month up to now.
    """
    if sort_by not in SORT_KEYS:
        raise ValidationError({"sortBy": [f"Invalid sort '{sort_by}'. Use revenue or quantity."]})

    now = now or utcnow()
    start = start or datetime(now.year, now.month, 1)
    end = end or now

    criteria = [Order.created_at >= start, Order.created_at <= end]
    if category_id is not None:
        criteria.append(
            OrderItem.product_id.in_(select(Product.id).where(Product.category_id == category_id).scalar_subquery())
        )

    rows = _sales_rows(session, criteria, sort_by, limit)
    products = _products_by_id(session, [row[0] for row in rows])

    result = []
    for product_id, quantity, revenue in rows:
        product = products.get(product_id)
        quantity, revenue = int(quantity or 0), float(revenue or 0)
        result.append(
            {
                "id": product_id,
                "name": product.name if product else "Unknown Product",
                "slug": product.slug if product else "",
                "image_url": product.image_url if product else "",
                "price": product.price if product else 0.0,
                "stock": product.stock if product else 0,
                "category": product.category.name if product and product.category else "Uncategorized",
                "total_quantity": quantity,
                "total_revenue": revenue,
                "average_price": revenue / quantity if quantity else 0.0,
            }
        )
    return result


def popular_products(session: Session, limit: int = 5) -> list[dict]:
    """All-time best sellers by units sold."""
    rows = _sales_rows(session, (), "quantity", limit)
    products = _products_by_id(session, [row[0] for row in rows])

    return [
        {
            "id": product_id,
            "name": products[product_id].name,
            "slug": products[product_id].slug,
            "image_url": products[product_id].image_url,
            "price": products[product_id].price,
            "stock": products[product_id].stock,
            "total_quantity": int(quantity or 0),
            "total_revenue": float(revenue or 0),
        }
        for product_id, quantity, revenue in rows
        if product_id in products
    ]

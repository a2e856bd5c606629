"""Order status changes made from the back office."""

from sqlalchemy.orm import Session

from catalogue.product.repository import ProductRepository
from ordering.order.order import Order
from ordering.order.repository import OrderRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def update_order_status(session: Session, order_id: int, status: str) -> Order:
    """Set an order's status, restoring stock when it becomes cancelled.

    Restocking and the status change are flushed in the same unit of work.
    Cancelling an order that is already cancelled changes nothing on stock.
    """
    order = OrderRepository(session).get_detailed(order_id)
    previous = order.status

    if order.change_status(status):
        products = ProductRepository(session)
        for item in order.items:
            products.increment_stock(item.product_id, item.quantity)
            logger.info(
                "stock_restored",
                order_id=order.id,
                product_id=item.product_id,
                quantity=item.quantity,
            )
        logger.info("order_cancelled", order_id=order.id, previous_status=previous)

    session.flush()
    logger.info("order_status_changed", order_id=order.id, previous_status=previous, status=order.status)
    return order

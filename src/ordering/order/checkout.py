"""Checkout: turn a cart into an order.

Stock is taken with one conditional UPDATE per line, so two concurrent
checkouts can never drive a product below zero; the loser gets a
validation error and the request's unit of work rolls back.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from sqlalchemy.orm import Session

from catalogue.product.repository import ProductRepository
from ordering.cart.repository import CartRepository
from ordering.order.order import Order, PaymentMethod
from ordering.order.repository import OrderRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def place_order(
    session: Session,
    session_id: str,
    shipping_name: str,
    shipping_phone: str,
    shipping_address: str,
    shipping_city: str | None = None,
    payment_method: str = PaymentMethod.COD.value,
    note: str | None = None,
    user_id: int | None = None,
) -> Order:
    cart = CartRepository(session).get_by_session_id(session_id)
    if cart is None:
        raise ObjectNotFoundError({"_entity": "Cart not found"})
    if cart.is_empty:
        raise ValidationError({"cart": ["Cart is empty"]})

    order = Order.place(
        shipping_name=shipping_name,
        shipping_phone=shipping_phone,
        shipping_address=shipping_address,
        shipping_city=shipping_city,
        payment_method=payment_method,
        note=note,
        user_id=user_id,
    )

    products = ProductRepository(session)
    for item in cart.items:
        product = item.product
        if not product.is_active:
            raise ValidationError({"items": [f"{product.name} is no longer available"]})
        if not products.decrement_stock(product.id, item.quantity):
            logger.warning(
                "checkout_insufficient_stock",
                product_id=product.id,
                requested=item.quantity,
                available=product.stock,
            )
            raise ValidationError({"items": [f"Insufficient stock for {product.name}"]})
        order.add_item(product_id=product.id, quantity=item.quantity, price=product.price)

    OrderRepository(session).add(order)
    cart.clear()
    session.flush()

    logger.info(
        "order_placed",
        order_id=order.id,
        order_number=order.display_number,
        user_id=user_id,
        item_count=len(order.items),
        total_amount=order.total_amount,
    )
    return order

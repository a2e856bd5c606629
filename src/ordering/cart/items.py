"""Cart item management: add, change quantity, remove."""

from sqlalchemy.orm import Session

from catalogue.product.repository import ProductRepository
from ordering.cart.cart import CartItem
from ordering.cart.repository import CartItemRepository, CartRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def add_to_cart(session: Session, cart_id: int, product_id: int, quantity: int = 1) -> CartItem:
    ProductRepository(session).get(product_id)
    cart = CartRepository(session).get(cart_id)

    item = cart.add_item(product_id=product_id, quantity=quantity)
    session.flush()

    logger.info(
        "cart_item_added",
        cart_id=cart.id,
        product_id=product_id,
        quantity=quantity,
        line_quantity=item.quantity,
    )
    return item


def update_cart_quantity(session: Session, item_id: int, quantity: int) -> CartItem:
    item = CartItemRepository(session).get(item_id)
    item.set_quantity(quantity)
    session.flush()

    logger.info("cart_item_updated", item_id=item.id, quantity=quantity)
    return item


def remove_from_cart(session: Session, item_id: int) -> None:
    repo = CartItemRepository(session)
    repo.delete(repo.get(item_id))
    logger.info("cart_item_removed", item_id=item_id)

"""Cart lifecycle: create and get-or-create by session id."""

from sqlalchemy.orm import Session

from ordering.cart.cart import Cart
from ordering.cart.repository import CartRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def create_cart(session: Session, session_id: str | None = None, user_id: int | None = None) -> Cart:
    """Return the cart for ``session_id``, creating it when there is none.

    A fresh session id is generated when none is given.
    """
    repo = CartRepository(session)
    if session_id:
        existing = repo.get_by_session_id(session_id)
        if existing is not None:
            return existing

    cart = Cart.create(session_id=session_id, user_id=user_id)
    repo.add(cart)

    logger.info("cart_created", cart_id=cart.id, session_id=cart.session_id)
    return cart


def get_or_create_cart(session: Session, session_id: str) -> Cart:
    return create_cart(session, session_id=session_id)

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ordering.cart.cart import Cart, CartItem
from shared.repository import Repository


class CartRepository(Repository[Cart]):
    model = Cart
    label = "Cart"

    def get_by_session_id(self, session_id: str) -> Cart | None:
        stmt = (
            select(Cart)
            .where(Cart.session_id == session_id)
            .options(selectinload(Cart.items).selectinload(CartItem.product))
        )
        return self.session.scalars(stmt).first()


class CartItemRepository(Repository[CartItem]):
    model = CartItem
    label = "Cart item"

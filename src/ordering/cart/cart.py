"""Shopping cart, keyed by an anonymous session id and optionally tied to a user.

A cart holds at most one line per product: adding a product that is
already in the cart bumps the existing line's quantity.
"""

import uuid
from datetime import datetime

from protean.exceptions import ValidationError
from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue.product.product import Product
from shared.clock import utcnow
from shared.database import Base


def new_session_id() -> str:
    return uuid.uuid4().hex


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="quantity_positive"),
        UniqueConstraint("cart_id", "product_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    cart_id: Mapped[int] = mapped_column(ForeignKey("carts.id", ondelete="CASCADE"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
    quantity: Mapped[int] = mapped_column(default=1)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    product: Mapped[Product] = relationship()

    def set_quantity(self, quantity: int) -> None:
        _check_quantity(quantity)
        self.quantity = quantity
        self.updated_at = utcnow()

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity


class Cart(Base):
    __tablename__ = "carts"

    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[str | None] = mapped_column(String(255), unique=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    items: Mapped[list[CartItem]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True, order_by=CartItem.id
    )

    @classmethod
    def create(cls, session_id=None, user_id=None):
        now = utcnow()
        return cls(
            session_id=session_id or new_session_id(),
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )

    def item_for(self, product_id: int) -> CartItem | None:
        return next((item for item in self.items if item.product_id == product_id), None)

    def add_item(self, product_id: int, quantity: int = 1) -> CartItem:
        _check_quantity(quantity)

        item = self.item_for(product_id)
        if item is not None:
            item.set_quantity(item.quantity + quantity)
        else:
            now = utcnow()
            item = CartItem(product_id=product_id, quantity=quantity, created_at=now, updated_at=now)
            self.items.append(item)

        self.updated_at = utcnow()
        return item

    def clear(self) -> None:
        self.items.clear()
        self.updated_at = utcnow()

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __repr__(self):
        return f"<Cart {self.session_id}>"


def _check_quantity(quantity) -> None:
    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})

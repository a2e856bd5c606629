"""Order: a placed purchase with shipping details and a snapshot of its lines.

Line prices are copied from the product at checkout time, so later price
changes never alter an existing order. ``total_amount`` is kept in step with
the lines.

Status changes are unrestricted: any status may be set from any other.
Moving *into* ``cancelled`` from another status is the one transition that
asks the caller to put the ordered quantities back on stock.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from protean.exceptions import ValidationError
from sqlalchemy import CheckConstraint, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue.product.product import Product
from identity.user.user import User
from shared.clock import utcnow
from shared.database import Base


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPING = "shipping"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    COD = "cod"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    E_WALLET = "e_wallet"


# Orders counted as revenue by every report
REVENUE_STATUSES = (OrderStatus.SHIPPING.value, OrderStatus.DELIVERED.value)

DISPLAY_PREFIX = "YP"


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="quantity_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="RESTRICT"), index=True)
    quantity: Mapped[int]
    price: Mapped[float] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    product: Mapped[Product] = relationship()

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.PENDING.value, index=True)
    payment_status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.PENDING.value)
    payment_method: Mapped[str] = mapped_column(String(20), default=PaymentMethod.COD.value)
    shipping_name: Mapped[str] = mapped_column(String(255))
    shipping_phone: Mapped[str] = mapped_column(String(50))
    shipping_address: Mapped[str] = mapped_column(Text)
    shipping_city: Mapped[str | None] = mapped_column(String(100))
    note: Mapped[str | None] = mapped_column(Text)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    items: Mapped[list[OrderItem]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True, order_by=OrderItem.id
    )
    user: Mapped[Optional[User]] = relationship()

    @classmethod
    def place(
        cls,
        shipping_name,
        shipping_phone,
        shipping_address,
        shipping_city=None,
        payment_method=PaymentMethod.COD.value,
        note=None,
        user_id=None,
    ):
        errors = {}
        if not shipping_name or not shipping_name.strip():
            errors["shipping_name"] = ["Recipient name is required"]
        if not shipping_phone or not shipping_phone.strip():
            errors["shipping_phone"] = ["Phone number is required"]
        if not shipping_address or not shipping_address.strip():
            errors["shipping_address"] = ["Shipping address is required"]
        if errors:
            raise ValidationError(errors)

        now = utcnow()
        return cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            payment_method=_enum_value(PaymentMethod, payment_method, "payment_method"),
            shipping_name=shipping_name,
            shipping_phone=shipping_phone,
            shipping_address=shipping_address,
            shipping_city=shipping_city,
            note=note,
            total_amount=0.0,
            created_at=now,
            updated_at=now,
        )

    def add_item(self, product_id: int, quantity: int, price: float) -> OrderItem:
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = OrderItem(product_id=product_id, quantity=quantity, price=price, created_at=utcnow())
        self.items.append(item)
        self.total_amount = round(sum(line.subtotal for line in self.items), 2)
        return item

    def change_status(self, status: str) -> bool:
        """Set the order status. Returns True when stock must be restored."""
        new_status = _enum_value(OrderStatus, status, "status")
        restock = new_status == OrderStatus.CANCELLED.value and self.status != OrderStatus.CANCELLED.value

        self.status = new_status
        self.updated_at = utcnow()
        return restock

    @property
    def display_number(self) -> str:
        return f"{DISPLAY_PREFIX}{self.id}"

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED.value

    def __repr__(self):
        return f"<Order {self.display_number} {self.status}>"


def _enum_value(enum_cls, value, field: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field: [f"Invalid {field} '{value}'. Expected one of: {allowed}"]}) from None

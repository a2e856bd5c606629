"""Flash deal: a time-boxed promotion of one product with its own stock counter.

``sold_count`` is not capped by ``total_stock``; increments are accepted as
given.
"""

from datetime import datetime

from protean.exceptions import ValidationError
from sqlalchemy import CheckConstraint, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue.product.product import Product
from shared.clock import utcnow
from shared.database import Base


class FlashDeal(Base):
    __tablename__ = "flash_deals"
    __table_args__ = (CheckConstraint("end_date >= start_date", name="window_ordered"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
    start_date: Mapped[datetime]
    end_date: Mapped[datetime]
    total_stock: Mapped[int]
    sold_count: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    product: Mapped[Product] = relationship()

    @classmethod
    def create(cls, product_id, start_date, end_date, total_stock, sold_count=0):
        _check_window(start_date, end_date)
        if total_stock is None or total_stock < 0:
            raise ValidationError({"total_stock": ["Total stock cannot be negative"]})

        now = utcnow()
        return cls(
            product_id=product_id,
            start_date=start_date,
            end_date=end_date,
            total_stock=total_stock,
            sold_count=sold_count or 0,
            created_at=now,
            updated_at=now,
        )

    def update(self, **fields) -> None:
        for attr in ("product_id", "start_date", "end_date", "total_stock", "sold_count"):
            if fields.get(attr) is not None:
                setattr(self, attr, fields[attr])
        _check_window(self.start_date, self.end_date)
        self.updated_at = utcnow()

    def record_sale(self, increment: int) -> None:
        self.sold_count = (self.sold_count or 0) + increment
        self.updated_at = utcnow()

    def is_running(self, at: datetime) -> bool:
        return self.start_date <= at <= self.end_date

    @property
    def remaining(self) -> int:
        return self.total_stock - (self.sold_count or 0)


def _check_window(start_date, end_date) -> None:
    if start_date and end_date and end_date < start_date:
        raise ValidationError({"end_date": ["End date must not be before start date"]})

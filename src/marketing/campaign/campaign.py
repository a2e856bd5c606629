from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from sqlalchemy import CheckConstraint, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.clock import utcnow
from shared.database import Base


class CampaignType(Enum):
    DISCOUNT = "discount"
    FLASH_SALE = "flash_sale"
    FREE_SHIPPING = "free_shipping"
    VOUCHER = "voucher"
    BUNDLE = "bundle"


class Campaign(Base):
    """Marketing campaign with a type, an activation flag and a start/end window."""

    __tablename__ = "campaigns"
    __table_args__ = (CheckConstraint("end_date >= start_date", name="window_ordered"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(30))
    discount_value: Mapped[float | None] = mapped_column(Float)
    is_active: Mapped[bool] = mapped_column(default=True)
    start_date: Mapped[datetime]
    end_date: Mapped[datetime]
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @classmethod
    def create(cls, name, type, start_date, end_date, description=None, discount_value=None, is_active=True):
        if not name or not name.strip():
            raise ValidationError({"name": ["Name is required"]})
        _check_window(start_date, end_date)

        now = utcnow()
        return cls(
            name=name,
            description=description,
            type=CampaignType(type).value,
            discount_value=discount_value,
            is_active=is_active,
            start_date=start_date,
            end_date=end_date,
            created_at=now,
            updated_at=now,
        )

    def update(self, **fields) -> None:
        if fields.get("type") is not None:
            fields["type"] = CampaignType(fields["type"]).value

        for attr in ("name", "description", "type", "discount_value", "is_active", "start_date", "end_date"):
            if fields.get(attr) is not None:
                setattr(self, attr, fields[attr])
        _check_window(self.start_date, self.end_date)
        self.updated_at = utcnow()

    def is_running(self, at: datetime) -> bool:
        return self.is_active and self.start_date <= at <= self.end_date


def _check_window(start_date, end_date) -> None:
    if start_date is None or end_date is None:
        raise ValidationError({"start_date": ["Start and end dates are required"]})
    if end_date < start_date:
        raise ValidationError({"end_date": ["End date must not be before start date"]})

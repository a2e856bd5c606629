from datetime import datetime

from protean.exceptions import ValidationError
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.clock import utcnow
from shared.database import Base

_EDITABLE = (
    "title",
    "title_en",
    "title_zh",
    "description",
    "description_en",
    "description_zh",
    "image_url",
    "link_url",
    "is_active",
    "position",
)


class Banner(Base):
    """Promotional banner shown on the storefront, ordered by ``position``.

    ``start_date``/``end_date`` optionally bound when an active banner is displayed.
    """

    __tablename__ = "banners"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    title_en: Mapped[str | None] = mapped_column(String(255))
    title_zh: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    description_en: Mapped[str | None] = mapped_column(Text)
    description_zh: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str] = mapped_column(String(500))
    link_url: Mapped[str | None] = mapped_column(String(500))
    is_active: Mapped[bool] = mapped_column(default=True)
    position: Mapped[int] = mapped_column(default=0)
    start_date: Mapped[datetime | None]
    end_date: Mapped[datetime | None]
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @classmethod
    def create(cls, title, image_url, start_date=None, end_date=None, **fields):
        if not title or not title.strip():
            raise ValidationError({"title": ["Title is required"]})
        _check_window(start_date, end_date)

        now = utcnow()
        banner = cls(
            title=title,
            image_url=image_url,
            start_date=start_date,
            end_date=end_date,
            is_active=fields.pop("is_active", True),
            position=fields.pop("position", 0) or 0,
            created_at=now,
            updated_at=now,
        )
        for attr in ("title_en", "title_zh", "description", "description_en", "description_zh", "link_url"):
            setattr(banner, attr, fields.get(attr))
        return banner

    def update(self, **fields) -> None:
        for attr in _EDITABLE:
            if fields.get(attr) is not None:
                setattr(self, attr, fields[attr])
        for attr in ("start_date", "end_date"):
            if attr in fields:
                setattr(self, attr, fields[attr])
        _check_window(self.start_date, self.end_date)
        self.updated_at = utcnow()


def _check_window(start_date, end_date) -> None:
    if start_date and end_date and end_date < start_date:
        raise ValidationError({"end_date": ["End date must not be before start date"]})

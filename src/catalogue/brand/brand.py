from datetime import datetime

from protean.exceptions import ValidationError
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shared.clock import utcnow
from shared.database import Base


class Brand(Base):
    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    logo_url: Mapped[str | None] = mapped_column(String(500))
    is_featured: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @classmethod
    def create(cls, name, logo_url=None, is_featured=False):
        if not name or not name.strip():
            raise ValidationError({"name": ["Name is required"]})

        now = utcnow()
        return cls(
            name=name,
            logo_url=logo_url,
            is_featured=bool(is_featured),
            created_at=now,
            updated_at=now,
        )

    def update(self, **fields) -> None:
        for attr in ("name", "logo_url", "is_featured"):
            if fields.get(attr) is not None:
                setattr(self, attr, fields[attr])
        self.updated_at = utcnow()

    def __repr__(self):
        return f"<Brand {self.name}>"

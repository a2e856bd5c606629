"""Category: a node in the (shallow, unbounded) product category tree."""

from datetime import datetime
from typing import Optional

from protean.exceptions import ValidationError
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.clock import utcnow
from shared.database import Base
from shared.slugs import slugify, validate_slug


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    name_en: Mapped[str] = mapped_column(String(255))
    name_zh: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True)
    icon: Mapped[str | None] = mapped_column(String(255))
    parent_id: Mapped[int | None] = mapped_column(ForeignKey("categories.id"))
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    parent: Mapped[Optional["Category"]] = relationship(remote_side=[id], back_populates="children")
    children: Mapped[list["Category"]] = relationship(back_populates="parent")

    @classmethod
    def create(cls, name, name_en=None, name_zh=None, slug=None, icon=None, parent_id=None):
        if not name or not name.strip():
            raise ValidationError({"name": ["Name is required"]})

        slug = slug or slugify(name)
        validate_slug(slug)

        now = utcnow()
        return cls(
            name=name,
            name_en=name_en or name,
            name_zh=name_zh or name,
            slug=slug,
            icon=icon,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )

    def slug_after(self, **fields) -> str:
        """The slug this category carries once ``update(**fields)`` is applied."""
        if fields.get("slug"):
            return fields["slug"]
        name = fields.get("name")
        if name and name != self.name:
            return slugify(name)
        return self.slug

    def update(self, **fields) -> None:
        fields["slug"] = self.slug_after(**fields)
        validate_slug(fields["slug"])

        for attr in ("name", "name_en", "name_zh", "slug", "icon"):
            if fields.get(attr) is not None:
                setattr(self, attr, fields[attr])
        if "parent_id" in fields:
            self.parent_id = fields["parent_id"]
        self.updated_at = utcnow()

    def __repr__(self):
        return f"<Category {self.slug}>"

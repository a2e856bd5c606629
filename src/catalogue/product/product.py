"""Product: a sellable catalogue item with localized copy, pricing, stock and merchandising flags.

``rating`` and ``review_count`` are denormalized from the product's reviews
and refreshed whenever a review is submitted or removed.
``discount_percentage`` is stored as given; it is not reconciled with
``price`` and ``original_price``.
"""

from datetime import datetime
from typing import Optional

from protean.exceptions import ValidationError
from sqlalchemy import CheckConstraint, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue.brand.brand import Brand
from catalogue.category.category import Category
from shared.clock import utcnow
from shared.database import Base
from shared.slugs import slugify, validate_slug

FLAGS = ("is_featured", "is_hot_deal", "is_best_seller", "is_new_arrival", "free_shipping", "is_active")

_EDITABLE = (
    "name",
    "name_en",
    "name_zh",
    "slug",
    "description",
    "description_en",
    "description_zh",
    "price",
    "original_price",
    "discount_percentage",
    "image_url",
    "stock",
    *FLAGS,
)

_OPTIONAL = (
    "description",
    "description_en",
    "description_zh",
    "original_price",
    "discount_percentage",
    "category_id",
    "brand_id",
)


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="stock_non_negative"),
        CheckConstraint("price > 0", name="price_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    name_en: Mapped[str] = mapped_column(String(255))
    name_zh: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True)
    description: Mapped[str | None] = mapped_column(Text)
    description_en: Mapped[str | None] = mapped_column(Text)
    description_zh: Mapped[str | None] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float)
    original_price: Mapped[float | None] = mapped_column(Float)
    discount_percentage: Mapped[int | None]
    image_url: Mapped[str] = mapped_column(String(500), default="")
    category_id: Mapped[int | None] = mapped_column(ForeignKey("categories.id", ondelete="RESTRICT"), index=True)
    brand_id: Mapped[int | None] = mapped_column(ForeignKey("brands.id", ondelete="RESTRICT"), index=True)
    rating: Mapped[float] = mapped_column(Float, default=0.0)
    review_count: Mapped[int] = mapped_column(default=0)
    stock: Mapped[int] = mapped_column(default=0)
    is_featured: Mapped[bool] = mapped_column(default=False)
    is_hot_deal: Mapped[bool] = mapped_column(default=False)
    is_best_seller: Mapped[bool] = mapped_column(default=False)
    is_new_arrival: Mapped[bool] = mapped_column(default=False)
    free_shipping: Mapped[bool] = mapped_column(default=False)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    category: Mapped[Optional[Category]] = relationship()
    brand: Mapped[Optional[Brand]] = relationship()

    @classmethod
    def create(cls, name, price, slug=None, image_url="", stock=0, **fields):
        if not name or not name.strip():
            raise ValidationError({"name": ["Name is required"]})

        slug = slug or slugify(name)
        validate_slug(slug)
        _check_price(price)
        _check_stock(stock)

        now = utcnow()
        product = cls(
            name=name,
            name_en=fields.pop("name_en", None) or name,
            name_zh=fields.pop("name_zh", None) or name,
            slug=slug,
            price=price,
            image_url=image_url or "",
            stock=stock,
            rating=0.0,
            review_count=0,
            created_at=now,
            updated_at=now,
            **{flag: bool(fields.pop(flag, flag == "is_active")) for flag in FLAGS},
        )
        for attr in _OPTIONAL:
            setattr(product, attr, fields.get(attr))
        return product

    def slug_after(self, **fields) -> str:
        """The slug this product carries once ``update(**fields)`` is applied."""
        if fields.get("slug"):
            return fields["slug"]
        name = fields.get("name")
        if name and name != self.name:
            return slugify(name)
        return self.slug

    def update(self, **fields) -> None:
        """Apply a partial update.

        A rename without an explicit slug regenerates the slug from the new name.
        Optional fields (descriptions, ``original_price``, ``discount_percentage``,
        ``category_id`` and ``brand_id``) are cleared by passing None explicitly.
        """
        fields["slug"] = self.slug_after(**fields)
        validate_slug(fields["slug"])
        if fields.get("price") is not None:
            _check_price(fields["price"])
        if fields.get("stock") is not None:
            _check_stock(fields["stock"])

        for attr in _EDITABLE:
            if fields.get(attr) is not None:
                setattr(self, attr, fields[attr])
        for attr in _OPTIONAL:
            if attr in fields:
                setattr(self, attr, fields[attr])
        self.updated_at = utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()

    def __repr__(self):
        return f"<Product {self.slug}>"


def _check_price(price) -> None:
    if price is None or price <= 0:
        raise ValidationError({"price": ["Price must be greater than zero"]})


def _check_stock(stock) -> None:
    if stock is None or stock < 0:
        raise ValidationError({"stock": ["Stock cannot be negative"]})

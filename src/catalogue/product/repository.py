"""Product queries: filtered listings, search, recommendations and atomic stock updates."""

from __future__ import annotations

from protean.exceptions import ValidationError
from pydantic.alias_generators import to_snake
from sqlalchemy import Select, and_, func, or_, select, update
from sqlalchemy.orm import aliased, selectinload

from catalogue.product.product import FLAGS, Product
from shared.pagination import Page, paginate
from shared.repository import Repository

SORTABLE = ("id", "name", "price", "stock", "rating", "review_count", "created_at", "updated_at")
SEARCH_LIMIT = 20


def _sort_column(sort_by: str):
    field = to_snake(sort_by or "created_at")
    if field not in SORTABLE:
        raise ValidationError({"sortBy": [f"Cannot sort products by '{sort_by}'"]})
    return getattr(Product, field)


class ProductRepository(Repository[Product]):
    model = Product
    label = "Product"

    def get_by_slug(self, slug: str) -> Product | None:
        return self.find_by(slug=slug)

    def _filtered(
        self,
        category_id=None,
        brand_id=None,
        active_only=False,
        search=None,
        sort_by="created_at",
        sort_order="desc",
        **flags,
    ) -> Select:
        stmt = select(Product).options(selectinload(Product.category), selectinload(Product.brand))

        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if brand_id is not None:
            stmt = stmt.where(Product.brand_id == brand_id)
        for flag in FLAGS:
            value = flags.get(flag)
            if value is not None:
                stmt = stmt.where(getattr(Product, flag).is_(value))
        if active_only:
            stmt = stmt.where(Product.is_active.is_(True))
        if search:
            stmt = stmt.where(Product.name.ilike(f"%{search}%"))

        column = _sort_column(sort_by)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        return stmt.order_by(ordering, Product.id.desc())

    def filter(self, limit: int | None = None, **filters) -> list[Product]:
        """Unpaginated listing, optionally capped at ``limit`` rows."""
        stmt = self._filtered(**filters)
        if limit:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    def list(self, page=None, limit=None, **filters) -> Page:
        return paginate(self.session, self._filtered(**filters), page, limit)

    def search(self, term: str, limit: int = SEARCH_LIMIT) -> list[Product]:
        """Case-insensitive substring match over all localized names and descriptions."""
        pattern = f"%{term.lower()}%"
        columns = (
            Product.name,
            Product.name_en,
            Product.name_zh,
            Product.description,
            Product.description_en,
            Product.description_zh,
        )
        stmt = (
            select(Product)
            .where(Product.is_active.is_(True), or_(*(func.lower(c).like(pattern) for c in columns)))
            .order_by(Product.id)
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def related(self, product: Product, limit: int = 4) -> list[Product]:
        """Active products from the same category, best rated first."""
        if product.category_id is None:
            return []
        stmt = (
            select(Product)
            .where(
                Product.category_id == product.category_id,
                Product.id != product.id,
                Product.is_active.is_(True),
            )
            .order_by(Product.rating.desc(), Product.id)
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def frequently_bought_with(self, product_id: int, limit: int = 4) -> list[Product]:
        """Products that appear in the same orders as ``product_id``, most co-purchased first."""
        from ordering.order.order import OrderItem

        this, other = aliased(OrderItem), aliased(OrderItem)
        together = func.count(other.order_id.distinct()).label("together")
        co_purchased = (
            select(other.product_id, together)
            .join(this, and_(this.order_id == other.order_id, this.product_id == product_id))
            .where(other.product_id != product_id)
            .group_by(other.product_id)
            .subquery()
        )
        stmt = (
            select(Product)
            .join(co_purchased, co_purchased.c.product_id == Product.id)
            .where(Product.is_active.is_(True))
            .order_by(co_purchased.c.together.desc(), Product.id)
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def has_order_items(self, product_id: int) -> bool:
        from ordering.order.order import OrderItem

        return self.session.scalar(select(OrderItem.id).where(OrderItem.product_id == product_id).limit(1)) is not None

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Take ``quantity`` units off stock in one statement.

        Returns False, changing nothing, when fewer than ``quantity`` units are left.
        """
        result = self.session.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
        )
        return result.rowcount == 1

    def increment_stock(self, product_id: int, quantity: int) -> None:
        self.session.execute(
            update(Product).where(Product.id == product_id).values(stock=Product.stock + quantity)
        )

from __future__ import annotations

from sqlalchemy import func, select

from catalogue.brand.brand import Brand
from catalogue.product.product import Product
from shared.repository import Repository


class BrandRepository(Repository[Brand]):
    model = Brand
    label = "Brand"

    def list(self, is_featured: bool | None = None) -> list[Brand]:
        stmt = select(Brand)
        if is_featured is not None:
            stmt = stmt.where(Brand.is_featured.is_(is_featured))
        return list(self.session.scalars(stmt.order_by(Brand.name, Brand.id)))

    def product_count(self, brand_id: int) -> int:
        return self.session.scalar(select(func.count(Product.id)).where(Product.brand_id == brand_id)) or 0

    def product_counts(self) -> dict[int, int]:
        rows = self.session.execute(
            select(Product.brand_id, func.count(Product.id))
            .where(Product.brand_id.is_not(None))
            .group_by(Product.brand_id)
        )
        return {brand_id: count for brand_id, count in rows}

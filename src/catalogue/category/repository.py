from sqlalchemy import func, select

from catalogue.category.category import Category
from catalogue.product.product import Product
from shared.repository import Repository


class CategoryRepository(Repository[Category]):
    model = Category
    label = "Category"

    def get_by_slug(self, slug: str) -> Category | None:
        return self.find_by(slug=slug)

    def list_ordered(self) -> list[Category]:
        return list(self.session.scalars(select(Category).order_by(Category.name, Category.id)))

    def product_count(self, category_id: int) -> int:
        return self.session.scalar(select(func.count(Product.id)).where(Product.category_id == category_id)) or 0

    def product_counts(self) -> dict[int, int]:
        rows = self.session.execute(
            select(Product.category_id, func.count(Product.id))
            .where(Product.category_id.is_not(None))
            .group_by(Product.category_id)
        )
        return {category_id: count for category_id, count in rows}

    def has_children(self, category_id: int) -> bool:
        return self.exists(parent_id=category_id)

    def tree(self) -> list[dict]:
        """Nested ``{"category": Category, "children": [...]}`` nodes, roots first."""
        categories = self.list_ordered()
        nodes = {c.id: {"category": c, "children": []} for c in categories}

        roots = []
        for category in categories:
            node = nodes[category.id]
            parent = nodes.get(category.parent_id) if category.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent["children"].append(node)
        return roots

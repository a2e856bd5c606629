"""Product management: create, update and delete."""

from protean.exceptions import ValidationError
from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalogue.brand.brand import Brand
from catalogue.category.category import Category
from catalogue.product.product import Product
from catalogue.product.repository import ProductRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def _check_references(session: Session, category_id=None, brand_id=None) -> None:
    if category_id is not None and session.get(Category, category_id) is None:
        raise ValidationError({"category_id": ["Category not found"]})
    if brand_id is not None and session.get(Brand, brand_id) is None:
        raise ValidationError({"brand_id": ["Brand not found"]})


def _ensure_slug_free(repo: ProductRepository, slug: str, product_id: int | None = None) -> None:
    existing = repo.get_by_slug(slug)
    if existing is not None and existing.id != product_id:
        raise ValidationError({"slug": [f"Slug '{slug}' is already in use"]})


def create_product(session: Session, **data) -> Product:
    _check_references(session, data.get("category_id"), data.get("brand_id"))

    repo = ProductRepository(session)
    product = Product.create(**data)
    _ensure_slug_free(repo, product.slug)
    repo.add(product)

    logger.info("product_created", product_id=product.id, slug=product.slug)
    return product


def update_product(session: Session, product_id: int, **fields) -> Product:
    repo = ProductRepository(session)
    product = repo.get(product_id)

    _check_references(session, fields.get("category_id"), fields.get("brand_id"))

    _ensure_slug_free(repo, product.slug_after(**fields), product.id)
    product.update(**fields)
    session.flush()

    logger.info("product_updated", product_id=product.id)
    return product


def delete_product(session: Session, product_id: int) -> bool:
    """Delete a product, or deactivate it when orders reference it.

    Returns True when the row was removed, False when it was only deactivated.
    """
    from reviews.review.review import Review

    repo = ProductRepository(session)
    product = repo.get(product_id)

    if repo.has_order_items(product.id):
        product.deactivate()
        session.flush()
        logger.info("product_deactivated", product_id=product.id, reason="has_orders")
        return False

    session.execute(delete(Review).where(Review.product_id == product.id))
    repo.delete(product)

    logger.info("product_deleted", product_id=product_id)
    return True

"""Keeps a product's denormalized ``rating`` and ``review_count`` in step with its reviews."""

from sqlalchemy.orm import Session

from catalogue.product.product import Product
from reviews.review.repository import ReviewRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def review_stats(session: Session, product_id: int) -> dict:
    return ReviewRepository(session).stats(product_id)


def refresh_product_rating(session: Session, product_id: int) -> None:
    product = session.get(Product, product_id)
    if product is None:
        return

    stats = review_stats(session, product_id)
    product.rating = stats["average_rating"]
    product.review_count = stats["total_reviews"]
    session.flush()

    logger.info(
        "product_rating_refreshed",
        product_id=product_id,
        rating=product.rating,
        review_count=product.review_count,
    )

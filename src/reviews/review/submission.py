"""Submit a product review.

The reviewer must be signed in and the product must exist. Whether the
review counts as a verified purchase is read from the reviewer's orders.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.product.repository import ProductRepository
from identity.user.user import User
from ordering.order.order import Order, OrderItem, OrderStatus
from reviews.review.repository import ReviewRepository
from reviews.review.review import Review
from reviews.review.stats import refresh_product_rating
from shared.logging import get_logger

logger = get_logger(__name__)


def _has_purchased(session: Session, user_id: int, product_id: int) -> bool:
    stmt = (
        select(OrderItem.id)
        .join(Order, Order.id == OrderItem.order_id)
        .where(
            Order.user_id == user_id,
            OrderItem.product_id == product_id,
            Order.status != OrderStatus.CANCELLED.value,
        )
        .limit(1)
    )
    return session.scalar(stmt) is not None


def submit_review(
    session: Session,
    product_id: int,
    user: User,
    rating: int,
    title: str | None = None,
    comment: str | None = None,
) -> Review:
    ProductRepository(session).get(product_id)

    review = Review.submit(
        product_id=product_id,
        user_id=user.id,
        rating=rating,
        title=title,
        comment=comment,
        is_verified_purchase=_has_purchased(session, user.id, product_id),
    )
    ReviewRepository(session).add(review)
    refresh_product_rating(session, product_id)

    logger.info(
        "review_submitted",
        review_id=review.id,
        product_id=product_id,
        user_id=user.id,
        rating=rating,
        verified=review.is_verified_purchase,
    )
    return review

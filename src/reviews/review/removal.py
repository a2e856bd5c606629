"""Remove a review. Only its author or an admin may do so."""

from protean.exceptions import ObjectNotFoundError
from sqlalchemy.orm import Session

from identity.user.user import User
from reviews.review.repository import ReviewRepository
from reviews.review.stats import refresh_product_rating
from shared.exceptions import PermissionDenied
from shared.logging import get_logger

logger = get_logger(__name__)


def delete_review(session: Session, product_id: int, review_id: int, user: User) -> None:
    repo = ReviewRepository(session)
    review = repo.find(review_id)
    if review is None or review.product_id != product_id:
        raise ObjectNotFoundError({"_entity": "Review not found"})
    if review.user_id != user.id and not user.is_admin:
        raise PermissionDenied("You can only delete your own reviews")

    repo.delete(review)
    refresh_product_rating(session, product_id)

    logger.info("review_deleted", review_id=review_id, product_id=product_id, deleted_by=user.id)

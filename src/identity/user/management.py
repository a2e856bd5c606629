"""Back-office user administration."""

from protean.exceptions import ValidationError
from sqlalchemy.orm import Session

from identity.sessions import session_store
from identity.user.repository import UserRepository
from identity.user.user import User
from shared.exceptions import PermissionDenied
from shared.logging import get_logger

logger = get_logger(__name__)


def update_user(session: Session, user_id: int, **fields) -> User:
    repo = UserRepository(session)
    user = repo.get(user_id)

    username = fields.get("username")
    if username and username != user.username:
        if repo.get_by_username(username):
            raise ValidationError({"username": ["Username already exists"]})

    user.update(**fields)
    session.flush()

    if not user.is_active:
        session_store.delete_for_user(user.id)

    logger.info("user_updated", user_id=user.id, fields=sorted(k for k, v in fields.items() if v is not None))
    return user


def delete_user(session: Session, user_id: int) -> None:
    from reviews.review.repository import ReviewRepository
    from reviews.review.stats import refresh_product_rating

    repo = UserRepository(session)
    user = repo.get(user_id)
    if user.is_admin:
        raise PermissionDenied("Cannot delete an administrator account")

    # The user's reviews cascade away with the account, so ratings must be recomputed
    product_ids = ReviewRepository(session).product_ids_for_user(user.id)

    repo.delete(user)
    session.expire_all()
    for product_id in product_ids:
        refresh_product_rating(session, product_id)

    session_store.delete_for_user(user_id)
    logger.info("user_deleted", user_id=user_id)

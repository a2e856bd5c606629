"""User registration and credential checks."""

from protean.exceptions import ValidationError
from sqlalchemy.orm import Session

from identity.user.repository import UserRepository
from identity.user.user import User, UserRole
from shared.exceptions import AuthenticationRequired, PermissionDenied
from shared.logging import get_logger

logger = get_logger(__name__)


def register_user(
    session: Session,
    username,
    password,
    full_name=None,
    email=None,
    phone=None,
    address=None,
    role=UserRole.USER.value,
) -> User:
    repo = UserRepository(session)
    if repo.get_by_username(username.strip()):
        raise ValidationError({"username": ["Username already exists"]})

    user = User.register(
        username=username,
        password=password,
        full_name=full_name,
        email=email,
        phone=phone,
        address=address,
        role=role,
    )
    repo.add(user)

    logger.info("user_registered", user_id=user.id, username=user.username, role=user.role)
    return user


def authenticate(session: Session, username: str, password: str) -> User:
    """Return the user matching the credentials.

    Unknown usernames and wrong passwords produce the same error.
    """
    user = UserRepository(session).get_by_username(username)
    if user is None or not user.check_password(password):
        logger.info("login_failed", username=username)
        raise AuthenticationRequired("Invalid username or password")

    if not user.is_active:
        logger.info("login_rejected_inactive", user_id=user.id)
        raise PermissionDenied("Account is deactivated")

    logger.info("login_succeeded", user_id=user.id)
    return user

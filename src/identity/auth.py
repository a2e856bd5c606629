"""FastAPI dependencies resolving the logged-in user from the session cookie."""

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from identity.sessions import session_store
from identity.user.user import User
from shared.config import get_config
from shared.database import get_session
from shared.exceptions import AuthenticationRequired, PermissionDenied


def current_user(request: Request, session: Session = Depends(get_session)) -> User | None:
    token = request.cookies.get(get_config().session.cookie_name)
    if not token:
        return None

    user_id = session_store.get(token)
    if user_id is None:
        return None

    return session.get(User, user_id)


def require_user(user: User | None = Depends(current_user)) -> User:
    if user is None:
        raise AuthenticationRequired()
    if not user.is_active:
        raise PermissionDenied("Account is deactivated")
    return user


def require_admin(user: User = Depends(require_user)) -> User:
    if not user.is_admin:
        raise PermissionDenied()
    return user


def start_session(response: Response, user: User) -> str:
    config = get_config().session
    token = session_store.create(user.id)
    response.set_cookie(
        key=config.cookie_name,
        value=token,
        max_age=config.max_age,
        httponly=True,
        secure=config.secure,
        samesite="lax",
    )
    return token


def end_session(request: Request, response: Response) -> None:
    config = get_config().session
    token = request.cookies.get(config.cookie_name)
    if token:
        session_store.delete(token)
    response.delete_cookie(config.cookie_name)

from __future__ import annotations

from sqlalchemy import or_, select

from identity.user.user import User
from shared.pagination import Page, paginate
from shared.repository import Repository


class UserRepository(Repository[User]):
    model = User
    label = "User"

    def get_by_username(self, username: str) -> User | None:
        return self.find_by(username=username)

    def list(self, role=None, search=None, page=None, limit=None) -> Page:
        stmt = select(User)
        if role:
            stmt = stmt.where(User.role == role)
        if search:
            term = f"%{search}%"
            stmt = stmt.where(
                or_(
                    User.username.ilike(term),
                    User.email.ilike(term),
                    User.full_name.ilike(term),
                    User.phone.ilike(term),
                )
            )
        stmt = stmt.order_by(User.created_at.desc(), User.id.desc())
        return paginate(self.session, stmt, page, limit)

"""User account: credentials, contact details and role."""

from datetime import datetime
from enum import Enum

import bcrypt
from protean.exceptions import ValidationError
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.clock import utcnow
from shared.config import get_config
from shared.database import Base


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


def hash_password(password: str) -> str:
    rounds = get_config().session.bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long password
        return False


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True)
    password: Mapped[str] = mapped_column(String(255))
    full_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(254))
    phone: Mapped[str | None] = mapped_column(String(30))
    address: Mapped[str | None] = mapped_column(Text)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.USER.value)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    @classmethod
    def register(
        cls,
        username,
        password,
        full_name=None,
        email=None,
        phone=None,
        address=None,
        role=UserRole.USER.value,
    ):
        if not username or not username.strip():
            raise ValidationError({"username": ["Username is required"]})
        if not password:
            raise ValidationError({"password": ["Password is required"]})

        now = utcnow()
        return cls(
            username=username.strip(),
            password=hash_password(password),
            full_name=full_name,
            email=email,
            phone=phone,
            address=address,
            role=UserRole(role).value,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password)

    def set_password(self, password: str) -> None:
        self.password = hash_password(password)
        self.updated_at = utcnow()

    def update(self, **fields) -> None:
        """Apply a partial update of profile fields, role and activation flag."""
        if "role" in fields and fields["role"] is not None:
            fields["role"] = UserRole(fields["role"]).value

        for name in ("username", "full_name", "email", "phone", "address", "role", "is_active"):
            if name in fields and fields[name] is not None:
                setattr(self, name, fields[name])
        self.updated_at = utcnow()

    def __repr__(self):
        return f"<User {self.username}>"

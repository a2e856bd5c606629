"""Review: a customer's 1-5 star rating of a product, with an optional title and comment.

``is_verified_purchase`` is decided once, at submission, from the
customer's non-cancelled orders.
"""

from datetime import datetime

from protean.exceptions import ValidationError
from sqlalchemy import CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from identity.user.user import User
from shared.clock import utcnow
from shared.database import Base

MIN_RATING = 1
MAX_RATING = 5


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    rating: Mapped[int]
    title: Mapped[str | None] = mapped_column(String(200))
    comment: Mapped[str | None] = mapped_column(Text)
    is_verified_purchase: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    user: Mapped[User] = relationship()

    @classmethod
    def submit(cls, product_id, user_id, rating, title=None, comment=None, is_verified_purchase=False):
        if rating is None or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

        now = utcnow()
        return cls(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            title=title.strip() if title else title,
            comment=comment,
            is_verified_purchase=is_verified_purchase,
            created_at=now,
            updated_at=now,
        )

    def __repr__(self):
        return f"<Review {self.id} product={self.product_id} rating={self.rating}>"

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from reviews.review.review import MAX_RATING, MIN_RATING, Review
from shared.pagination import Page, paginate
from shared.repository import Repository


class ReviewRepository(Repository[Review]):
    model = Review
    label = "Review"

    def for_product(self, product_id: int, page: int | None = None, limit: int | None = None) -> Page:
        stmt = (
            select(Review)
            .where(Review.product_id == product_id)
            .options(joinedload(Review.user))
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return paginate(self.session, stmt, page, limit)

    def stats(self, product_id: int) -> dict:
        """Average, total and per-star counts for a product's reviews.

        ``distribution`` always lists every star value, highest first.
        """
        rows = self.session.execute(
            select(Review.rating, func.count(Review.id)).where(Review.product_id == product_id).group_by(Review.rating)
        ).all()
        counts = {rating: count for rating, count in rows}

        total = sum(counts.values())
        average = sum(rating * count for rating, count in counts.items()) / total if total else 0.0
        return {
            "average_rating": round(average, 1),
            "total_reviews": total,
            "distribution": [
                {"rating": rating, "count": counts.get(rating, 0)} for rating in range(MAX_RATING, MIN_RATING - 1, -1)
            ],
        }

    def product_ids_for_user(self, user_id: int) -> set[int]:
        return set(self.session.scalars(select(Review.product_id).where(Review.user_id == user_id)))

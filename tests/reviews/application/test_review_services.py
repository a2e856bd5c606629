import pytest
from catalogue.product.product import Product
from protean.exceptions import ObjectNotFoundError, ValidationError
from reviews.review.removal import delete_review
from reviews.review.repository import ReviewRepository
from reviews.review.stats import review_stats
from reviews.review.submission import submit_review
from shared.exceptions import PermissionDenied


@pytest.fixture
def product(session, make_product):
    return make_product(session, name="Xiaomi Buds 4")


@pytest.fixture
def reviewer(session, make_user):
    return make_user(session, username="reviewer")


class TestSubmitReview:
    def test_submit_updates_product_rating(self, session, product, reviewer, make_user):
        submit_review(session, product.id, reviewer, 5, title="Love it")
        submit_review(session, product.id, make_user(session), 4)
        submit_review(session, product.id, make_user(session), 4)

        session.expire_all()
        refreshed = session.get(Product, product.id)
        assert refreshed.rating == 4.3
        assert refreshed.review_count == 3

    def test_unknown_product(self, session, reviewer):
        with pytest.raises(ObjectNotFoundError):
            submit_review(session, 999, reviewer, 5)

    def test_invalid_rating_changes_nothing(self, session, product, reviewer):
        with pytest.raises(ValidationError):
            submit_review(session, product.id, reviewer, 0)

        assert ReviewRepository(session).count() == 0

    def test_purchase_makes_review_verified(self, session, product, reviewer, make_order):
        make_order(session, [(product, 1)], user=reviewer, status="delivered")

        assert submit_review(session, product.id, reviewer, 5).is_verified_purchase is True

    def test_cancelled_purchase_does_not_count(self, session, product, reviewer, make_order):
        make_order(session, [(product, 1)], user=reviewer, status="cancelled")

        assert submit_review(session, product.id, reviewer, 5).is_verified_purchase is False

    def test_someone_elses_purchase_does_not_count(self, session, product, reviewer, make_user, make_order):
        make_order(session, [(product, 1)], user=make_user(session), status="delivered")

        assert submit_review(session, product.id, reviewer, 5).is_verified_purchase is False


class TestReviewStats:
    def test_distribution_lists_every_star_highest_first(self, session, product, make_user):
        for rating in (5, 4, 4, 1):
            submit_review(session, product.id, make_user(session), rating)

        assert review_stats(session, product.id) == {
            "average_rating": 3.5,
            "total_reviews": 4,
            "distribution": [
                {"rating": 5, "count": 1},
                {"rating": 4, "count": 2},
                {"rating": 3, "count": 0},
                {"rating": 2, "count": 0},
                {"rating": 1, "count": 1},
            ],
        }

    def test_no_reviews(self, session, product):
        stats = review_stats(session, product.id)

        assert stats["average_rating"] == 0.0
        assert stats["total_reviews"] == 0
        assert [row["count"] for row in stats["distribution"]] == [0, 0, 0, 0, 0]

    def test_listing_is_newest_first(self, session, product, make_user):
        first = submit_review(session, product.id, make_user(session), 3)
        second = submit_review(session, product.id, make_user(session), 4)

        page = ReviewRepository(session).for_product(product.id)
        assert [review.id for review in page.items] == [second.id, first.id]


class TestDeleteReview:
    def test_author_deletes_and_rating_is_refreshed(self, session, product, reviewer, make_user):
        mine = submit_review(session, product.id, reviewer, 1)
        submit_review(session, product.id, make_user(session), 5)

        delete_review(session, product.id, mine.id, reviewer)

        session.expire_all()
        refreshed = session.get(Product, product.id)
        assert refreshed.rating == 5.0
        assert refreshed.review_count == 1

    def test_last_review_resets_rating(self, session, product, reviewer):
        review = submit_review(session, product.id, reviewer, 2)
        delete_review(session, product.id, review.id, reviewer)

        session.expire_all()
        assert session.get(Product, product.id).rating == 0.0
        assert session.get(Product, product.id).review_count == 0

    def test_admin_may_delete_any_review(self, session, product, reviewer, make_user):
        review = submit_review(session, product.id, reviewer, 2)
        admin = make_user(session, role="admin")

        delete_review(session, product.id, review.id, admin)
        assert ReviewRepository(session).count() == 0

    def test_other_customer_may_not_delete(self, session, product, reviewer, make_user):
        review = submit_review(session, product.id, reviewer, 2)

        with pytest.raises(PermissionDenied):
            delete_review(session, product.id, review.id, make_user(session))

    def test_review_of_another_product_is_not_found(self, session, product, reviewer, make_product):
        review = submit_review(session, product.id, reviewer, 2)
        other = make_product(session)

        with pytest.raises(ObjectNotFoundError):
            delete_review(session, other.id, review.id, reviewer)

    def test_unknown_review(self, session, product, reviewer):
        with pytest.raises(ObjectNotFoundError):
            delete_review(session, product.id, 999, reviewer)

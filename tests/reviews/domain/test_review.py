import pytest
from protean.exceptions import ValidationError
from reviews.review.review import Review


class TestReviewSubmission:
    def test_submit(self):
        review = Review.submit(product_id=1, user_id=2, rating=4, title="  Good phone ", comment="Fast delivery")

        assert review.rating == 4
        assert review.title == "Good phone"
        assert review.comment == "Fast delivery"
        assert review.is_verified_purchase is False
        assert review.created_at == review.updated_at

    def test_title_and_comment_are_optional(self):
        review = Review.submit(product_id=1, user_id=2, rating=5)

        assert review.title is None
        assert review.comment is None

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_are_inclusive(self, rating):
        assert Review.submit(product_id=1, user_id=2, rating=rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 6, -1, None])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError) as exc:
            Review.submit(product_id=1, user_id=2, rating=rating)

        assert exc.value.messages == {"rating": ["Rating must be between 1 and 5"]}

"""FastAPI routes for product reviews."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from catalogue.product.repository import ProductRepository
from identity.auth import require_user
from identity.user.user import User
from reviews.api.schemas import ReviewListResponse, ReviewResponse, ReviewStatsResponse, SubmitReviewRequest
from reviews.review.removal import delete_review
from reviews.review.repository import ReviewRepository
from reviews.review.stats import review_stats
from reviews.review.submission import submit_review
from shared.database import get_session
from shared.schemas import PaginationSchema

review_router = APIRouter(prefix="/products/{product_id}/reviews", tags=["reviews"])


@review_router.get("", response_model=ReviewListResponse)
def list_reviews(
    product_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
) -> ReviewListResponse:
    ProductRepository(session).get(product_id)
    result = ReviewRepository(session).for_product(product_id, page=page, limit=limit)
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r) for r in result.items],
        pagination=PaginationSchema.from_page(result),
        stats=ReviewStatsResponse.model_validate(review_stats(session, product_id)),
    )


@review_router.post("", status_code=201, response_model=ReviewResponse)
def create_review(
    product_id: int,
    body: SubmitReviewRequest,
    user: User = Depends(require_user),
    session: Session = Depends(get_session),
) -> ReviewResponse:
    review = submit_review(session, product_id, user, **body.model_dump())
    return ReviewResponse.model_validate(review)


@review_router.delete("/{review_id}", status_code=204)
def remove_review(
    product_id: int,
    review_id: int,
    user: User = Depends(require_user),
    session: Session = Depends(get_session),
) -> Response:
    delete_review(session, product_id, review_id, user)
    return Response(status_code=204)

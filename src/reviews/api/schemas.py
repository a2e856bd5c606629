"""Pydantic request/response schemas for the Reviews API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel, PaginationSchema

# --- Request Schemas ---


class SubmitReviewRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"rating": 5, "title": "Great value", "comment": "Arrived quickly and works as described."}]
        }
    }

    rating: int = Field(..., ge=1, le=5)
    title: str | None = Field(None, max_length=200)
    comment: str | None = Field(None, max_length=5000)


# --- Response Schemas ---


class ReviewAuthor(CamelModel):
    id: int
    username: str
    full_name: str | None = None


class ReviewResponse(CamelModel):
    id: int
    product_id: int
    user_id: int
    rating: int
    title: str | None = None
    comment: str | None = None
    is_verified_purchase: bool
    created_at: datetime
    user: ReviewAuthor | None = None


class RatingCount(CamelModel):
    rating: int
    count: int


class ReviewStatsResponse(CamelModel):
    average_rating: float
    total_reviews: int
    distribution: list[RatingCount]


class ReviewListResponse(CamelModel):
    reviews: list[ReviewResponse]
    pagination: PaginationSchema
    stats: ReviewStatsResponse

"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from reviews.feedback.feedback_vote import FeedbackVote
from reviews.feedback.reading import FeedbackSummary
from reviews.review.review import Review
from reviews.review.stats import AggregateStats
from reviews.settings import ReviewSettings


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    rating: int | str | None = None  # "5" and "5 stars" are both accepted
    title: str | None = None
    body: str | None = None
    reviewer_name: str | None = None
    show_identifier: bool = True
    on_behalf_of: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "rating": "5 stars",
                    "title": "Does what it says",
                    "body": "Sturdy, quiet and easy to clean.",
                    "reviewer_name": "Sam",
                    "show_identifier": True,
                }
            ]
        }
    }


class UpdateReviewRequest(BaseModel):
    rating: int | str | None = None
    title: str | None = None
    body: str | None = None
    reviewer_name: str | None = None
    show_identifier: bool | None = None


class CastVoteRequest(BaseModel):
    helpful: bool = True


class ChangeVoteRequest(BaseModel):
    helpful: bool


class UpdateReviewSettingsRequest(BaseModel):
    auto_approve: bool | None = None
    track_locale: bool | None = None
    auto_approve_feedback: bool | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewResponse(BaseModel):
    review_id: str
    product_id: str
    user_id: str | None = None
    rating: int
    title: str | None = None
    body: str
    display_name: str
    show_identifier: bool
    moderation_state: str
    is_edited: bool = False
    helpful_count: int = 0
    unhelpful_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    # Moderator-only audit fields
    locale: str | None = None
    origin_address: str | None = None

    @classmethod
    def from_review(
        cls,
        review: Review,
        summary: FeedbackSummary | None = None,
        include_private: bool = False,
    ) -> ReviewResponse:
        return cls(
            review_id=str(review.id),
            product_id=str(review.product_id),
            user_id=str(review.user_id) if review.user_id else None,
            rating=review.rating.score,
            title=review.title,
            body=review.body,
            display_name=review.display_name,
            show_identifier=bool(review.show_identifier),
            moderation_state=review.moderation_state,
            is_edited=bool(review.is_edited),
            helpful_count=summary.helpful_count if summary else 0,
            unhelpful_count=summary.unhelpful_count if summary else 0,
            created_at=review.created_at,
            updated_at=review.updated_at,
            locale=review.locale if include_private else None,
            origin_address=review.origin_address if include_private else None,
        )


class StatsResponse(BaseModel):
    product_id: str
    review_count: int
    average_rating: int | float
    rating_distribution: dict[str, int]

    @classmethod
    def from_stats(cls, stats: AggregateStats) -> StatsResponse:
        return cls(**stats.as_dict())


class ProductReviewsResponse(BaseModel):
    product_id: str
    reviews: list[ReviewResponse]
    count: int
    average: int | float
    rating_distribution: dict[str, int]


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    count: int


class VoteResponse(BaseModel):
    vote_id: str
    review_id: str
    user_id: str
    helpful: bool
    moderation_state: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_vote(cls, vote: FeedbackVote) -> VoteResponse:
        return cls(
            vote_id=str(vote.id),
            review_id=str(vote.review_id),
            user_id=str(vote.user_id),
            helpful=bool(vote.helpful),
            moderation_state=vote.moderation_state,
            created_at=vote.created_at,
            updated_at=vote.updated_at,
        )


class VoteListResponse(BaseModel):
    votes: list[VoteResponse]
    count: int


class ReviewSettingsResponse(BaseModel):
    auto_approve: bool
    track_locale: bool
    auto_approve_feedback: bool

    @classmethod
    def from_settings(cls, settings: ReviewSettings) -> ReviewSettingsResponse:
        return cls(**settings.as_dict())


class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
    detail: str
    existing_id: str | None = Field(default=None)

"""FastAPI routes for the Reviews & Moderation bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). The caller is resolved once per
request by ``current_actor`` and passed explicitly into every command and
read function.
"""

from fastapi import APIRouter, Depends, Query, Request, Response
from protean.utils.globals import current_domain

from reviews.api.deps import current_actor, origin_address, request_locale
from reviews.api.schemas import (
    CastVoteRequest,
    ChangeVoteRequest,
    ProductReviewsResponse,
    ReviewListResponse,
    ReviewResponse,
    ReviewSettingsResponse,
    StatsResponse,
    SubmitReviewRequest,
    UpdateReviewRequest,
    UpdateReviewSettingsRequest,
    VoteListResponse,
    VoteResponse,
)
from reviews.feedback.changing import ChangeVote
from reviews.feedback.feedback_vote import FeedbackVote
from reviews.feedback.moderation import ModerateVote
from reviews.feedback.reading import feedback_summary, list_votes
from reviews.feedback.removal import DeleteVote
from reviews.feedback.voting import CastVote, cast
from reviews.policy import Action, Actor, authorize
from reviews.review.editing import UpdateReview
from reviews.review.moderation import ModerateReview, moderate
from reviews.review.reading import get_review, list_product_reviews, list_reviews, list_user_reviews
from reviews.review.removal import DeleteReview, remove
from reviews.review.review import Review
from reviews.review.stats import product_stats
from reviews.review.submission import SubmitReview, submit
from reviews.settings import get_settings, update_settings

review_router = APIRouter(prefix="/reviews", tags=["reviews"])
product_review_router = APIRouter(prefix="/products", tags=["reviews"])
user_review_router = APIRouter(prefix="/users", tags=["reviews"])
feedback_router = APIRouter(prefix="/feedback", tags=["feedback"])
settings_router = APIRouter(prefix="/review-settings", tags=["settings"])


def _review_response(review: Review, actor: Actor) -> ReviewResponse:
    return ReviewResponse.from_review(
        review,
        summary=feedback_summary(review.id),
        include_private=actor.is_moderator,
    )


def _load_review(review_id: str) -> Review:
    return current_domain.repository_for(Review).get(review_id)


# ---------------------------------------------------------------------------
# Product-scoped review routes
# ---------------------------------------------------------------------------
@product_review_router.get("/{product_id}/reviews", response_model=ProductReviewsResponse)
async def list_reviews_for_product(
    product_id: str,
    precision: int | None = Query(default=None, ge=0, le=6),
    actor: Actor = Depends(current_actor),
) -> ProductReviewsResponse:
    """Approved reviews of a product with count and average rating."""
    listing = list_product_reviews(product_id, precision=precision)
    return ProductReviewsResponse(
        product_id=product_id,
        reviews=[_review_response(review, actor) for review in listing.reviews],
        count=listing.count,
        average=listing.average,
        rating_distribution={str(k): v for k, v in listing.stats.rating_distribution.items()},
    )


@product_review_router.get("/{product_id}/reviews/stats", response_model=StatsResponse)
async def product_review_stats(
    product_id: str,
    precision: int | None = Query(default=None, ge=0, le=6),
) -> StatsResponse:
    """Review count, average rating and distribution over approved reviews."""
    return StatsResponse.from_stats(product_stats(product_id, precision=precision))


@product_review_router.post("/{product_id}/reviews", status_code=201, response_model=ReviewResponse)
async def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    request: Request,
    actor: Actor = Depends(current_actor),
) -> ReviewResponse:
    """Submit a review of a product."""
    command = SubmitReview(
        product_id=product_id,
        actor_id=actor.user_id,
        actor_is_moderator=actor.is_moderator,
        on_behalf_of=body.on_behalf_of,
        rating=str(body.rating) if body.rating is not None else None,
        title=body.title,
        body=body.body,
        reviewer_name=body.reviewer_name,
        show_identifier=body.show_identifier,
        locale=request_locale(request),
        origin_address=origin_address(request),
    )
    review_id = submit(command)
    return _review_response(_load_review(review_id), actor)


# ---------------------------------------------------------------------------
# User-scoped review routes
# ---------------------------------------------------------------------------
@user_review_router.get("/{user_id}/reviews", response_model=ReviewListResponse)
async def list_reviews_for_user(user_id: str, actor: Actor = Depends(current_actor)) -> ReviewListResponse:
    """A user's reviews; unpublished ones only for the user and moderators."""
    items = list_user_reviews(user_id, actor)
    return ReviewListResponse(
        reviews=[_review_response(review, actor) for review in items],
        count=len(items),
    )


# ---------------------------------------------------------------------------
# Review routes
# ---------------------------------------------------------------------------
@review_router.get("", response_model=ReviewListResponse)
async def index_reviews(
    state: str | None = None,
    product_id: str | None = None,
    actor: Actor = Depends(current_actor),
) -> ReviewListResponse:
    """All reviews for moderators, approved reviews for everyone else."""
    items = list_reviews(actor, state=state, product_id=product_id)
    return ReviewListResponse(
        reviews=[_review_response(review, actor) for review in items],
        count=len(items),
    )


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def show_review(review_id: str, actor: Actor = Depends(current_actor)) -> ReviewResponse:
    return _review_response(get_review(review_id, actor), actor)


@review_router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    body: UpdateReviewRequest,
    actor: Actor = Depends(current_actor),
) -> ReviewResponse:
    """Edit the content of a review."""
    command = UpdateReview(
        review_id=review_id,
        actor_id=actor.user_id,
        actor_is_moderator=actor.is_moderator,
        rating=str(body.rating) if body.rating is not None else None,
        title=body.title,
        body=body.body,
        reviewer_name=body.reviewer_name,
        show_identifier=body.show_identifier,
    )
    current_domain.process(command, asynchronous=False)
    return _review_response(_load_review(review_id), actor)


@review_router.delete("/{review_id}", status_code=204)
async def delete_review(review_id: str, actor: Actor = Depends(current_actor)) -> Response:
    """Delete a review together with its feedback votes."""
    command = DeleteReview(
        review_id=review_id,
        actor_id=actor.user_id,
        actor_is_moderator=actor.is_moderator,
    )
    remove(command)
    return Response(status_code=204)


def _moderate_review(review_id: str, action: str, actor: Actor) -> ReviewResponse:
    moderate(
        ModerateReview(
            review_id=review_id,
            actor_id=actor.user_id,
            actor_is_moderator=actor.is_moderator,
            action=action,
        )
    )
    return _review_response(_load_review(review_id), actor)


@review_router.put("/{review_id}/approve", response_model=ReviewResponse)
async def approve_review(review_id: str, actor: Actor = Depends(current_actor)) -> ReviewResponse:
    return _moderate_review(review_id, "Approve", actor)


@review_router.put("/{review_id}/reject", response_model=ReviewResponse)
async def reject_review(review_id: str, actor: Actor = Depends(current_actor)) -> ReviewResponse:
    return _moderate_review(review_id, "Reject", actor)


@review_router.put("/{review_id}/reopen", response_model=ReviewResponse)
async def reopen_review(review_id: str, actor: Actor = Depends(current_actor)) -> ReviewResponse:
    return _moderate_review(review_id, "Reopen", actor)


# ---------------------------------------------------------------------------
# Feedback routes
# ---------------------------------------------------------------------------
def _load_vote(vote_id: str) -> FeedbackVote:
    return current_domain.repository_for(FeedbackVote).get(vote_id)


@review_router.post("/{review_id}/feedback", status_code=201, response_model=VoteResponse)
async def cast_vote(
    review_id: str,
    body: CastVoteRequest,
    actor: Actor = Depends(current_actor),
) -> VoteResponse:
    """Mark a review as helpful or unhelpful."""
    vote_id = cast(
        CastVote(
            review_id=review_id,
            actor_id=actor.user_id,
            actor_is_moderator=actor.is_moderator,
            helpful=body.helpful,
        )
    )
    return VoteResponse.from_vote(_load_vote(vote_id))


@review_router.get("/{review_id}/feedback", response_model=VoteListResponse)
async def review_votes(review_id: str, actor: Actor = Depends(current_actor)) -> VoteListResponse:
    """Every vote on a review (moderators only)."""
    votes = list_votes(review_id, actor)
    return VoteListResponse(votes=[VoteResponse.from_vote(v) for v in votes], count=len(votes))


@feedback_router.put("/{vote_id}", response_model=VoteResponse)
async def change_vote(
    vote_id: str,
    body: ChangeVoteRequest,
    actor: Actor = Depends(current_actor),
) -> VoteResponse:
    """Flip an existing vote."""
    command = ChangeVote(
        vote_id=vote_id,
        actor_id=actor.user_id,
        actor_is_moderator=actor.is_moderator,
        helpful=body.helpful,
    )
    current_domain.process(command, asynchronous=False)
    return VoteResponse.from_vote(_load_vote(vote_id))


@feedback_router.delete("/{vote_id}", status_code=204)
async def delete_vote(vote_id: str, actor: Actor = Depends(current_actor)) -> Response:
    command = DeleteVote(
        vote_id=vote_id,
        actor_id=actor.user_id,
        actor_is_moderator=actor.is_moderator,
    )
    current_domain.process(command, asynchronous=False)
    return Response(status_code=204)


def _moderate_vote(vote_id: str, action: str, actor: Actor) -> VoteResponse:
    command = ModerateVote(
        vote_id=vote_id,
        actor_id=actor.user_id,
        actor_is_moderator=actor.is_moderator,
        action=action,
    )
    current_domain.process(command, asynchronous=False)
    return VoteResponse.from_vote(_load_vote(vote_id))


@feedback_router.put("/{vote_id}/approve", response_model=VoteResponse)
async def approve_vote(vote_id: str, actor: Actor = Depends(current_actor)) -> VoteResponse:
    return _moderate_vote(vote_id, "Approve", actor)


@feedback_router.put("/{vote_id}/reject", response_model=VoteResponse)
async def reject_vote(vote_id: str, actor: Actor = Depends(current_actor)) -> VoteResponse:
    return _moderate_vote(vote_id, "Reject", actor)


@feedback_router.put("/{vote_id}/reopen", response_model=VoteResponse)
async def reopen_vote(vote_id: str, actor: Actor = Depends(current_actor)) -> VoteResponse:
    return _moderate_vote(vote_id, "Reopen", actor)


# ---------------------------------------------------------------------------
# Settings routes
# ---------------------------------------------------------------------------
@settings_router.get("", response_model=ReviewSettingsResponse)
async def show_settings(actor: Actor = Depends(current_actor)) -> ReviewSettingsResponse:
    authorize(actor, Action.MANAGE_SETTINGS)
    return ReviewSettingsResponse.from_settings(get_settings())


@settings_router.put("", response_model=ReviewSettingsResponse)
async def change_settings(
    body: UpdateReviewSettingsRequest,
    actor: Actor = Depends(current_actor),
) -> ReviewSettingsResponse:
    """Change review settings at runtime (moderators only)."""
    authorize(actor, Action.MANAGE_SETTINGS)
    changes = body.model_dump(exclude_none=True)
    return ReviewSettingsResponse.from_settings(update_settings(**changes))

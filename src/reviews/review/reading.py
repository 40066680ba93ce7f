"""Read operations on reviews, gated by the authorization policy.

Public listings only ever contain approved reviews. Owners and moderators can
additionally see pending and rejected reviews.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from reviews.policy import Action, Actor, authorize, can, read_action_for
from reviews.review.review import Review
from reviews.review.stats import AggregateStats, approved_reviews_for, compute_stats
from reviews.shared.moderation import ModerationState, parse_state
from reviews.shared.query import fetch_all


@dataclass(frozen=True)
class ProductReviewListing:
    reviews: list[Review]
    stats: AggregateStats

    @property
    def count(self) -> int:
        return self.stats.review_count

    @property
    def average(self):
        return self.stats.average_rating


def _newest_first(items: list[Review]) -> list[Review]:
    return sorted(items, key=lambda r: r.created_at, reverse=True)


def get_review(review_id, actor: Actor) -> Review:
    """Load a review the actor is allowed to see.

    Raises ``ObjectNotFoundError`` for unknown ids and ``Forbidden`` for
    unpublished reviews of other users.
    """
    review = current_domain.repository_for(Review).get(review_id)
    authorize(actor, read_action_for(review), review)
    return review


def list_product_reviews(product_id, precision: int | None = None) -> ProductReviewListing:
    """The public review set of a product together with its statistics."""
    approved = _newest_first(approved_reviews_for(product_id))
    stats = compute_stats(product_id, [r.rating.score for r in approved], precision)
    return ProductReviewListing(reviews=approved, stats=stats)


def list_user_reviews(user_id, actor: Actor) -> list[Review]:
    """A user's reviews: every state for the user and moderators, approved otherwise."""
    repo = current_domain.repository_for(Review)
    filters = {"user_id": str(user_id)}

    is_self = actor.user_id is not None and actor.user_id == str(user_id)
    if not (is_self or actor.is_moderator):
        filters["moderation_state"] = ModerationState.APPROVED.value

    return _newest_first(fetch_all(repo, **filters))


def list_reviews(actor: Actor, state: str | None = None, product_id=None) -> list[Review]:
    """Site-wide listing.

    Moderators see every review and may filter by state; everyone else gets
    the approved subset and may only ask for the Approved state.
    """
    repo = current_domain.repository_for(Review)
    filters = {}
    if product_id:
        filters["product_id"] = str(product_id)

    if state is not None:
        requested = parse_state(state)
        if requested != ModerationState.APPROVED:
            authorize(actor, Action.LIST_ALL_REVIEWS)
        filters["moderation_state"] = requested.value
    elif not can(actor, Action.LIST_ALL_REVIEWS):
        filters["moderation_state"] = ModerationState.APPROVED.value

    return _newest_first(fetch_all(repo, **filters))

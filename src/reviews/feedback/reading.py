"""Feedback read side: vote counts per review and the moderator vote list."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from reviews.feedback.feedback_vote import FeedbackVote
from reviews.policy import Action, Actor, authorize
from reviews.review.review import Review
from reviews.shared.moderation import ModerationState
from reviews.shared.query import fetch_all


@dataclass(frozen=True)
class FeedbackSummary:
    review_id: str
    helpful_count: int = 0
    unhelpful_count: int = 0

    @property
    def total(self) -> int:
        return self.helpful_count + self.unhelpful_count


def feedback_summary(review_id) -> FeedbackSummary:
    """Count approved helpful and unhelpful votes on a review."""
    votes = fetch_all(
        current_domain.repository_for(FeedbackVote),
        review_id=str(review_id),
        moderation_state=ModerationState.APPROVED.value,
    )
    helpful = sum(1 for vote in votes if vote.helpful)
    return FeedbackSummary(
        review_id=str(review_id),
        helpful_count=helpful,
        unhelpful_count=len(votes) - helpful,
    )


def list_votes(review_id, actor: Actor) -> list[FeedbackVote]:
    """Every vote on a review, in any state. Moderators only."""
    review = current_domain.repository_for(Review).get(review_id)
    authorize(actor, Action.LIST_VOTES, review)

    votes = fetch_all(current_domain.repository_for(FeedbackVote), review_id=str(review.id))
    return sorted(votes, key=lambda v: v.created_at)

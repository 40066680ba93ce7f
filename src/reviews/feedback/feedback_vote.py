"""FeedbackVote aggregate: a helpful/unhelpful mark on a review.

Votes reference their review by id and go through the same moderation state
machine as reviews. Only approved votes count towards a review's feedback
summary.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String

from reviews.domain import reviews
from reviews.feedback.events import FeedbackVoteCast, FeedbackVoteChanged, FeedbackVoteModerated
from reviews.shared.moderation import (
    ACTION_TARGETS,
    ModerationAction,
    ModerationState,
    assert_can_transition,
    initial_state,
)


def vote_key_for(user_id, review_id) -> str:
    """Uniqueness key for a user's vote on a review."""
    return f"{user_id}:{review_id}"


@reviews.aggregate
class FeedbackVote:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    helpful = Boolean(default=True)
    moderation_state = String(choices=ModerationState, default=ModerationState.APPROVED.value)

    # One vote per user and review
    vote_key = String(max_length=255, unique=True)

    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def cast(cls, review_id, user_id, helpful, auto_approve=True):
        now = datetime.now(UTC)
        state = initial_state(auto_approve)

        vote = cls(
            review_id=review_id,
            user_id=user_id,
            helpful=bool(helpful),
            moderation_state=state.value,
            vote_key=vote_key_for(user_id, review_id),
            created_at=now,
            updated_at=now,
        )

        vote.raise_(
            FeedbackVoteCast(
                vote_id=str(vote.id),
                review_id=str(review_id),
                user_id=str(user_id),
                helpful=bool(helpful),
                moderation_state=state.value,
                cast_at=now,
            )
        )
        return vote

    @property
    def state(self) -> ModerationState:
        return ModerationState(self.moderation_state)

    @property
    def is_approved(self) -> bool:
        return self.state == ModerationState.APPROVED

    def change(self, helpful):
        """Set the vote to helpful or unhelpful. Re-sending the same value is a no-op."""
        helpful = bool(helpful)
        if helpful == self.helpful:
            return

        now = datetime.now(UTC)
        self.helpful = helpful
        self.updated_at = now

        self.raise_(
            FeedbackVoteChanged(
                vote_id=str(self.id),
                review_id=str(self.review_id),
                helpful=helpful,
                changed_at=now,
            )
        )

    def moderate(self, action: ModerationAction, moderator_id):
        previous = self.state
        target = ACTION_TARGETS[action]
        assert_can_transition(previous, target)

        now = datetime.now(UTC)
        self.moderation_state = target.value
        self.updated_at = now

        self.raise_(
            FeedbackVoteModerated(
                vote_id=str(self.id),
                review_id=str(self.review_id),
                previous_state=previous.value,
                moderation_state=target.value,
                moderator_id=str(moderator_id),
                moderated_at=now,
            )
        )

"""DeleteReview: permanently delete a review and its feedback votes.

The owner or a moderator may delete. The review and every vote on it are
removed in the same unit of work.
"""

import structlog
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.feedback.feedback_vote import FeedbackVote
from reviews.policy import Action, Actor, authorize
from reviews.review.moderation import moderation_locks
from reviews.review.review import Review
from reviews.shared.query import fetch_all

logger = structlog.get_logger(__name__)


@reviews.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)


@reviews.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        authorize(actor, Action.DELETE_REVIEW, review)

        vote_repo = current_domain.repository_for(FeedbackVote)
        votes = fetch_all(vote_repo, review_id=str(review.id))
        for vote in votes:
            vote_repo._dao.delete(vote)

        repo._dao.delete(review)

        logger.info(
            "Review deleted",
            review_id=str(command.review_id),
            product_id=str(review.product_id),
            votes_deleted=len(votes),
            actor_id=actor.user_id,
        )


def remove(command: DeleteReview) -> None:
    """Delete under the review's lock so no vote is cast between the cascade and the commit."""
    with moderation_locks.hold(str(command.review_id)):
        current_domain.process(command, asynchronous=False)

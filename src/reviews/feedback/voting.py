"""CastVote: mark an approved review as helpful or unhelpful.

Anonymous users and the review's author cannot vote. A user votes at most
once per review; flipping an existing vote goes through ChangeVote.
"""

import structlog
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.exceptions import ReviewNotApproved
from reviews.feedback.feedback_vote import FeedbackVote, vote_key_for
from reviews.feedback.guard import DuplicateVoteGuard, vote_locks
from reviews.policy import Action, Actor, authorize
from reviews.review.moderation import moderation_locks
from reviews.review.review import Review
from reviews.settings import get_settings

logger = structlog.get_logger(__name__)


@reviews.command(part_of="FeedbackVote")
class CastVote:
    review_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)
    helpful = Boolean(default=True)


@reviews.command_handler(part_of=FeedbackVote)
class CastVoteHandler:
    @handle(CastVote)
    def cast_vote(self, command):
        actor = Actor.from_command(command)
        review = current_domain.repository_for(Review).get(command.review_id)

        authorize(actor, Action.CREATE_VOTE, review)

        if not review.is_approved:
            raise ReviewNotApproved(str(review.id))

        guard = DuplicateVoteGuard(current_domain.repository_for(FeedbackVote))
        guard.check(actor.user_id, review.id)

        vote = FeedbackVote.cast(
            review_id=str(review.id),
            user_id=actor.user_id,
            helpful=command.helpful,
            auto_approve=get_settings().auto_approve_feedback,
        )
        guard.add(vote)

        logger.info(
            "Feedback vote cast",
            vote_id=str(vote.id),
            review_id=str(review.id),
            user_id=actor.user_id,
            helpful=vote.helpful,
        )
        return str(vote.id)


def cast(command: CastVote) -> str:
    """Process a vote with check-then-create serialized per user and review.

    The review's lock is held too, so a vote cannot land on a review that is
    being deleted or moderated at the same time.
    """
    with moderation_locks.hold(str(command.review_id)):
        if not command.actor_id:
            return current_domain.process(command, asynchronous=False)

        with vote_locks.hold(vote_key_for(command.actor_id, command.review_id)):
            return current_domain.process(command, asynchronous=False)

"""DeleteVote: permanently remove a feedback vote (voter or moderator)."""

import structlog
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.feedback.feedback_vote import FeedbackVote
from reviews.policy import Action, Actor, authorize

logger = structlog.get_logger(__name__)


@reviews.command(part_of="FeedbackVote")
class DeleteVote:
    vote_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)


@reviews.command_handler(part_of=FeedbackVote)
class DeleteVoteHandler:
    @handle(DeleteVote)
    def delete_vote(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(FeedbackVote)
        vote = repo.get(command.vote_id)

        authorize(actor, Action.DELETE_VOTE, vote)

        repo._dao.delete(vote)

        logger.info(
            "Feedback vote deleted",
            vote_id=str(command.vote_id),
            review_id=str(vote.review_id),
            actor_id=actor.user_id,
        )

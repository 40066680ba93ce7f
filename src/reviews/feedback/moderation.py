"""ModerateVote: approve, reject or reopen a feedback vote (moderators only)."""

import structlog
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.feedback.feedback_vote import FeedbackVote
from reviews.policy import Action, Actor, authorize
from reviews.shared.moderation import parse_action

logger = structlog.get_logger(__name__)


@reviews.command(part_of="FeedbackVote")
class ModerateVote:
    vote_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)
    action = String(required=True)  # "Approve", "Reject" or "Reopen"


@reviews.command_handler(part_of=FeedbackVote)
class ModerateVoteHandler:
    @handle(ModerateVote)
    def moderate_vote(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(FeedbackVote)
        vote = repo.get(command.vote_id)

        authorize(actor, Action.MODERATE_VOTE, vote)
        action = parse_action(command.action)

        vote.moderate(action, moderator_id=actor.user_id)
        repo.add(vote)

        logger.info(
            "Feedback vote moderated",
            vote_id=str(vote.id),
            action=action.value,
            moderation_state=vote.moderation_state,
            moderator_id=actor.user_id,
        )
        return str(vote.id)

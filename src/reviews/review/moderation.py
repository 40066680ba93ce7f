"""ModerateReview: approve, reject or reopen a review.

Only moderators may change a review's moderation state. Transitions on the
same review are serialized by ``moderate``.
"""

import structlog
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.policy import Action, Actor, authorize
from reviews.review.review import Review
from reviews.shared.locks import KeyedLocks
from reviews.shared.moderation import ModerationAction, parse_action

logger = structlog.get_logger(__name__)

moderation_locks = KeyedLocks()


@reviews.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)
    action = String(required=True)  # "Approve", "Reject" or "Reopen"


@reviews.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        authorize(actor, Action.MODERATE_REVIEW, review)
        action = parse_action(command.action)

        previous_state = review.moderation_state
        if action == ModerationAction.APPROVE:
            review.approve(moderator_id=actor.user_id)
        elif action == ModerationAction.REJECT:
            review.reject(moderator_id=actor.user_id)
        else:  # ModerationAction.REOPEN
            review.reopen(moderator_id=actor.user_id)

        repo.add(review)

        logger.info(
            "Review moderated",
            review_id=str(review.id),
            action=action.value,
            previous_state=previous_state,
            moderation_state=review.moderation_state,
            moderator_id=actor.user_id,
        )
        return str(review.id)


def moderate(command: ModerateReview) -> str:
    """Process a moderation command with transitions serialized per review."""
    with moderation_locks.hold(str(command.review_id)):
        return current_domain.process(command, asynchronous=False)

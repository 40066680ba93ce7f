"""UpdateReview: change the content of an existing review.

The owner and moderators may edit rating, title, body, reviewer name and the
show-identifier flag. Product, author and moderation state never change here.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.policy import Action, Actor, authorize
from reviews.review.review import Review
from reviews.review.validation import CONTENT_FIELDS, validate_draft

logger = structlog.get_logger(__name__)


@reviews.command(part_of="Review")
class UpdateReview:
    review_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)
    rating = String(max_length=50)
    title = String(max_length=500)
    body = Text()
    reviewer_name = String(max_length=500)
    show_identifier = Boolean()


@reviews.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        authorize(actor, Action.UPDATE_REVIEW, review)

        # Only fields that were sent take part in the update
        patch = {name: getattr(command, name) for name in CONTENT_FIELDS if getattr(command, name) is not None}
        if not patch:
            raise ValidationError({"review": ["Nothing to update"]})

        changes = validate_draft(patch, partial=True)
        review.update_content(changes, edited_by=actor.user_id)
        repo.add(review)

        logger.info(
            "Review updated",
            review_id=str(review.id),
            fields=sorted(changes),
            actor_id=actor.user_id,
        )
        return str(review.id)

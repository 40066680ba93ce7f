"""SubmitReview: submit a new product review.

Enforces one-review-per-user-per-product at handler level (cross-instance
check requires a repository query). Anonymous reviews are accepted and never
deduplicated. Moderators may submit on behalf of an existing user.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.directory import get_directory
from reviews.domain import reviews
from reviews.policy import Action, Actor, authorize
from reviews.review.guard import DuplicateSubmissionGuard, submission_locks
from reviews.review.review import Review, submission_key_for
from reviews.review.validation import PRODUCT_NOT_FOUND, USER_NOT_FOUND, validate_draft
from reviews.settings import get_settings

logger = structlog.get_logger(__name__)


@reviews.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)
    on_behalf_of = Identifier()
    rating = String(max_length=50)  # Raw input, e.g. "5" or "5 stars"
    title = String(max_length=500)
    body = Text()
    reviewer_name = String(max_length=500)
    show_identifier = Boolean(default=True)
    locale = String(max_length=35)
    origin_address = String(max_length=64)


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        actor = Actor.from_command(command)
        authorize(actor, Action.CREATE_REVIEW)

        author_id = actor.user_id
        if command.on_behalf_of:
            authorize(actor, Action.CREATE_REVIEW_ON_BEHALF)
            author_id = str(command.on_behalf_of)

        repo = current_domain.repository_for(Review)
        guard = DuplicateSubmissionGuard(repo)
        guard.check(author_id, command.product_id)

        errors = {}
        try:
            content = validate_draft(
                {
                    "rating": command.rating,
                    "title": command.title,
                    "body": command.body,
                    "reviewer_name": command.reviewer_name,
                    "show_identifier": command.show_identifier,
                }
            )
        except ValidationError as exc:
            content = None
            errors.update(exc.messages)

        directory = get_directory()
        if directory.find_product(str(command.product_id)) is None:
            errors.setdefault("product_id", []).append(PRODUCT_NOT_FOUND)
        if command.on_behalf_of and directory.find_user(author_id) is None:
            errors.setdefault("on_behalf_of", []).append(USER_NOT_FOUND)

        if errors:
            raise ValidationError(errors)

        settings = get_settings()
        review = Review.submit(
            product_id=command.product_id,
            user_id=author_id,
            locale=command.locale if settings.track_locale else None,
            origin_address=command.origin_address,
            auto_approve=settings.auto_approve,
            **content,
        )
        guard.add(review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            user_id=author_id,
            moderation_state=review.moderation_state,
        )
        return str(review.id)


def submit(command: SubmitReview) -> str:
    """Process a submission with check-then-create serialized per user and product."""
    author_id = command.on_behalf_of or command.actor_id
    if not author_id:
        return current_domain.process(command, asynchronous=False)

    with submission_locks.hold(submission_key_for(author_id, command.product_id)):
        return current_domain.process(command, asynchronous=False)

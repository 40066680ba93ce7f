"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """A user (or a moderator on their behalf) submitted a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier()
    rating = Integer(required=True)
    title = String()
    body = Text(required=True)
    show_identifier = Boolean(default=True)
    moderation_state = String(required=True)
    submitted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewEdited:
    """The review content was changed by its owner or a moderator."""

    __version__ = 1

    review_id = Identifier(required=True)
    rating = Integer()
    title = String()
    body = Text()
    edited_by = Identifier()
    edited_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewApproved:
    """A moderator approved the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    previous_state = String(required=True)
    moderator_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewRejected:
    """A moderator rejected the review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_state = String(required=True)
    moderator_id = Identifier(required=True)
    rejected_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewReopened:
    """A moderator sent the review back to the pending queue."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_state = String(required=True)
    moderator_id = Identifier(required=True)
    reopened_at = DateTime(required=True)

"""Domain events for the FeedbackVote aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from reviews.domain import reviews


@reviews.event(part_of="FeedbackVote")
class FeedbackVoteCast:
    """A user marked a review helpful or unhelpful."""

    __version__ = 1

    vote_id = Identifier(required=True)
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    helpful = Boolean()
    moderation_state = String(required=True)
    cast_at = DateTime(required=True)


@reviews.event(part_of="FeedbackVote")
class FeedbackVoteChanged:
    """A vote was flipped between helpful and unhelpful."""

    __version__ = 1

    vote_id = Identifier(required=True)
    review_id = Identifier(required=True)
    helpful = Boolean()
    changed_at = DateTime(required=True)


@reviews.event(part_of="FeedbackVote")
class FeedbackVoteModerated:
    """A moderator moved a vote to a new moderation state."""

    __version__ = 1

    vote_id = Identifier(required=True)
    review_id = Identifier(required=True)
    previous_state = String(required=True)
    moderation_state = String(required=True)
    moderator_id = Identifier(required=True)
    moderated_at = DateTime(required=True)

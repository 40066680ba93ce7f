"""Reviews-specific error types.

Field-level input problems are raised as ``protean.exceptions.ValidationError``
and missing entities as ``protean.exceptions.ObjectNotFoundError``. The types
below cover policy denials and state conflicts, which callers need to tell
apart from bad input.
"""


class ReviewsError(Exception):
    """Base class for Reviews domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Forbidden(ReviewsError):
    """The actor is not permitted to perform the action."""

    def __init__(self, message: str = "You are not allowed to perform this action"):
        super().__init__(message)


class AlreadyReviewed(ReviewsError):
    """The user already has a review for this product."""

    def __init__(self, existing_review_id: str):
        super().__init__("You have already reviewed this product")
        self.existing_review_id = str(existing_review_id)


class DuplicateVote(ReviewsError):
    """The user already voted on this review."""

    def __init__(self, existing_vote_id: str):
        super().__init__("You have already voted on this review")
        self.existing_vote_id = str(existing_vote_id)


class ReviewNotApproved(ReviewsError):
    """Feedback can only be left on approved reviews."""

    def __init__(self, review_id: str):
        super().__init__("Feedback can only be left on approved reviews")
        self.review_id = str(review_id)

"""Duplicate-submission guard: one review per user and product.

``DuplicateSubmissionGuard.check`` runs inside the SubmitReview handler.
Concurrent submissions for the same pair are serialized by
``submission_locks`` (held by ``reviews.review.submission.submit`` across the
whole unit of work), and the unique ``Review.submission_key`` backs the rule
at the storage layer.
"""

from protean.exceptions import ValidationError

from reviews.exceptions import AlreadyReviewed
from reviews.review.review import Review, submission_key_for
from reviews.shared.locks import KeyedLocks

submission_locks = KeyedLocks()


class DuplicateSubmissionGuard:
    def __init__(self, repo):
        self.repo = repo

    def existing_review_id(self, user_id, product_id) -> str | None:
        existing = self.repo._dao.query.filter(
            user_id=str(user_id),
            product_id=str(product_id),
        ).all()
        if existing.items:
            return str(existing.items[0].id)
        return None

    def check(self, user_id, product_id) -> None:
        """Allow the submission, or raise ``AlreadyReviewed`` with the existing id.

        Anonymous submissions are never deduplicated.
        """
        if not user_id:
            return

        existing_id = self.existing_review_id(user_id, product_id)
        if existing_id is not None:
            raise AlreadyReviewed(existing_id)

    def add(self, review: Review) -> None:
        """Persist a new review, reporting a lost uniqueness race as ``AlreadyReviewed``."""
        try:
            self.repo.add(review)
        except ValidationError as exc:
            messages = getattr(exc, "messages", None) or {}
            if "submission_key" not in messages or not review.user_id:
                raise
            existing_id = self.existing_review_id(review.user_id, review.product_id)
            raise AlreadyReviewed(existing_id or submission_key_for(review.user_id, review.product_id)) from exc

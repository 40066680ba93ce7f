"""Duplicate-vote guard: one vote per user and review.

Mirrors ``reviews.review.guard`` for feedback votes. ``vote_locks`` serialize
concurrent votes inside one process and the unique ``FeedbackVote.vote_key``
backs the rule at the storage layer.
"""

from protean.exceptions import ValidationError

from reviews.exceptions import DuplicateVote
from reviews.feedback.feedback_vote import FeedbackVote, vote_key_for
from reviews.shared.locks import KeyedLocks

vote_locks = KeyedLocks()


class DuplicateVoteGuard:
    def __init__(self, repo):
        self.repo = repo

    def existing_vote_id(self, user_id, review_id) -> str | None:
        existing = self.repo._dao.query.filter(
            user_id=str(user_id),
            review_id=str(review_id),
        ).all()
        if existing.items:
            return str(existing.items[0].id)
        return None

    def check(self, user_id, review_id) -> None:
        existing_id = self.existing_vote_id(user_id, review_id)
        if existing_id is not None:
            raise DuplicateVote(existing_id)

    def add(self, vote: FeedbackVote) -> None:
        """Persist a new vote, reporting a lost uniqueness race as ``DuplicateVote``."""
        try:
            self.repo.add(vote)
        except ValidationError as exc:
            messages = getattr(exc, "messages", None) or {}
            if "vote_key" not in messages:
                raise
            existing_id = self.existing_vote_id(vote.user_id, vote.review_id)
            raise DuplicateVote(existing_id or vote_key_for(vote.user_id, vote.review_id)) from exc

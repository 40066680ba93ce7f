"""Review aggregate (CQRS): the core of the Reviews & Moderation domain.

The Review aggregate owns a user's rating and comment on a product and its
moderation state. Feedback votes are a separate aggregate that references a
review by id.

State Machine (see reviews.shared.moderation):
    PENDING → APPROVED | REJECTED
    APPROVED ⇄ REJECTED (moderator override)
    APPROVED | REJECTED → PENDING (reopen)
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text, ValueObject

from reviews.domain import reviews
from reviews.review.events import (
    ReviewApproved,
    ReviewEdited,
    ReviewRejected,
    ReviewReopened,
    ReviewSubmitted,
)
from reviews.shared.moderation import (
    ModerationState,
    assert_can_transition,
    initial_state,
)

ANONYMOUS_DISPLAY_NAME = "Anonymous"


def submission_key_for(user_id, product_id) -> str:
    """Uniqueness key for a signed-in user's review of a product."""
    return f"{user_id}:{product_id}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@reviews.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@reviews.aggregate
class Review:
    """A rating and comment left on a product, subject to moderation."""

    # Core identifiers
    product_id = Identifier(required=True)
    user_id = Identifier()

    # Content
    rating = ValueObject(Rating, required=True)
    title = String(max_length=200)
    body = Text(required=True)
    reviewer_name = String(max_length=100)
    show_identifier = Boolean(default=True)

    # Submission context
    locale = String(max_length=35)
    origin_address = String(max_length=64)

    # Status
    moderation_state = String(choices=ModerationState, default=ModerationState.PENDING.value)

    # One review per user and product; anonymous reviews get a per-review key
    submission_key = String(max_length=255, unique=True)

    # Editing
    is_edited = Boolean(default=False)
    edited_at = DateTime()

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def body_must_not_be_blank(self):
        if self.body is not None and len(self.body.strip()) == 0:
            raise ValidationError({"body": ["Review text cannot be blank"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        product_id,
        rating,
        body,
        user_id=None,
        title=None,
        reviewer_name=None,
        show_identifier=True,
        locale=None,
        origin_address=None,
        auto_approve=False,
    ):
        """Submit a new review. Content is expected to be validated already."""
        now = datetime.now(UTC)
        state = initial_state(auto_approve)

        review = cls(
            product_id=product_id,
            user_id=user_id,
            rating=Rating(score=rating),
            title=title,
            body=body,
            reviewer_name=reviewer_name,
            show_identifier=show_identifier,
            locale=locale,
            origin_address=origin_address,
            moderation_state=state.value,
            submission_key=submission_key_for(user_id, product_id) if user_id else None,
            is_edited=False,
            created_at=now,
            updated_at=now,
        )
        if review.submission_key is None:
            review.submission_key = f"anonymous:{review.id}"

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id) if user_id else None,
                rating=rating,
                title=title,
                body=body,
                show_identifier=show_identifier,
                moderation_state=state.value,
                submitted_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def state(self) -> ModerationState:
        return ModerationState(self.moderation_state)

    @property
    def is_approved(self) -> bool:
        return self.state == ModerationState.APPROVED

    @property
    def display_name(self) -> str:
        """Name shown publicly next to the review."""
        if not self.show_identifier:
            return ANONYMOUS_DISPLAY_NAME
        return self.reviewer_name or ANONYMOUS_DISPLAY_NAME

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def update_content(self, changes: dict, edited_by=None):
        """Apply validated content changes.

        Only rating, title, body, reviewer_name and show_identifier can change;
        the moderation state is left alone.
        """
        now = datetime.now(UTC)

        with atomic_change(self):
            if "rating" in changes:
                self.rating = Rating(score=changes["rating"])
            if "title" in changes:
                self.title = changes["title"]
            if "body" in changes:
                self.body = changes["body"]
            if "reviewer_name" in changes:
                self.reviewer_name = changes["reviewer_name"]
            if "show_identifier" in changes:
                self.show_identifier = changes["show_identifier"]

            self.is_edited = True
            self.edited_at = now
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                rating=self.rating.score,
                title=self.title,
                body=self.body,
                edited_by=str(edited_by) if edited_by else None,
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def _transition(self, target: ModerationState):
        previous = self.state
        assert_can_transition(previous, target)

        now = datetime.now(UTC)
        self.moderation_state = target.value
        self.updated_at = now
        return previous, now

    def approve(self, moderator_id):
        """Publish the review."""
        previous, now = self._transition(ModerationState.APPROVED)

        self.raise_(
            ReviewApproved(
                review_id=str(self.id),
                product_id=str(self.product_id),
                rating=self.rating.score,
                previous_state=previous.value,
                moderator_id=str(moderator_id),
                approved_at=now,
            )
        )

    def reject(self, moderator_id):
        """Hide the review from the public."""
        previous, now = self._transition(ModerationState.REJECTED)

        self.raise_(
            ReviewRejected(
                review_id=str(self.id),
                product_id=str(self.product_id),
                previous_state=previous.value,
                moderator_id=str(moderator_id),
                rejected_at=now,
            )
        )

    def reopen(self, moderator_id):
        """Send the review back to the pending queue."""
        previous, now = self._transition(ModerationState.PENDING)

        self.raise_(
            ReviewReopened(
                review_id=str(self.id),
                product_id=str(self.product_id),
                previous_state=previous.value,
                moderator_id=str(moderator_id),
                reopened_at=now,
            )
        )

"""Authorization policy: who may do what to a review or feedback vote.

Every command handler and read function receives the acting ``Actor``
explicitly. The actor's ``Role`` is resolved once against the target's
``user_id`` and looked up in a single decision table.
"""

from dataclasses import dataclass
from enum import Enum

from reviews.exceptions import Forbidden
from reviews.shared.moderation import ModerationState


class Role(Enum):
    ANONYMOUS = "Anonymous"
    OWNER = "Owner"
    OTHER = "Other"
    MODERATOR = "Moderator"


class Action(Enum):
    CREATE_REVIEW = "create_review"
    CREATE_REVIEW_ON_BEHALF = "create_review_on_behalf"
    READ_APPROVED_REVIEW = "read_approved_review"
    READ_UNPUBLISHED_REVIEW = "read_unpublished_review"
    UPDATE_REVIEW = "update_review"
    MODERATE_REVIEW = "moderate_review"
    DELETE_REVIEW = "delete_review"
    LIST_ALL_REVIEWS = "list_all_reviews"
    CREATE_VOTE = "create_vote"
    UPDATE_VOTE = "update_vote"
    DELETE_VOTE = "delete_vote"
    MODERATE_VOTE = "moderate_vote"
    LIST_VOTES = "list_votes"
    MANAGE_SETTINGS = "manage_settings"


@dataclass(frozen=True)
class Actor:
    """The caller of an operation: anonymous, a signed-in user, or a moderator."""

    user_id: str | None = None
    is_moderator: bool = False

    @classmethod
    def anonymous(cls) -> "Actor":
        return cls()

    @classmethod
    def user(cls, user_id) -> "Actor":
        return cls(user_id=str(user_id))

    @classmethod
    def moderator(cls, user_id) -> "Actor":
        return cls(user_id=str(user_id), is_moderator=True)

    @classmethod
    def from_command(cls, command) -> "Actor":
        """Rebuild the actor carried by a command's ``actor_id``/``actor_is_moderator``."""
        user_id = str(command.actor_id) if command.actor_id else None
        return cls(user_id=user_id, is_moderator=bool(user_id and command.actor_is_moderator))

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


# Columns: Anonymous, Owner, Other, Moderator
_DECISIONS = {
    Action.CREATE_REVIEW: (True, True, True, True),
    Action.CREATE_REVIEW_ON_BEHALF: (False, False, False, True),
    Action.READ_APPROVED_REVIEW: (True, True, True, True),
    Action.READ_UNPUBLISHED_REVIEW: (False, True, False, True),
    Action.UPDATE_REVIEW: (False, True, False, True),
    Action.MODERATE_REVIEW: (False, False, False, True),
    Action.DELETE_REVIEW: (False, True, False, True),
    Action.LIST_ALL_REVIEWS: (False, False, False, True),
    # The owner of a review cannot vote on it; for the remaining vote actions
    # the owner is the voter.
    Action.CREATE_VOTE: (False, False, True, True),
    Action.UPDATE_VOTE: (False, True, False, True),
    Action.DELETE_VOTE: (False, True, False, True),
    Action.MODERATE_VOTE: (False, False, False, True),
    Action.LIST_VOTES: (False, False, False, True),
    Action.MANAGE_SETTINGS: (False, False, False, True),
}

_COLUMNS = {
    Role.ANONYMOUS: 0,
    Role.OWNER: 1,
    Role.OTHER: 2,
    Role.MODERATOR: 3,
}


def resolve_role(actor: Actor, target=None) -> Role:
    """Resolve the actor's role relative to ``target`` (anything with ``user_id``)."""
    if actor.is_moderator:
        return Role.MODERATOR
    if actor.is_anonymous:
        return Role.ANONYMOUS

    owner_id = getattr(target, "user_id", None) if target is not None else None
    if owner_id is not None and str(owner_id) == actor.user_id:
        return Role.OWNER
    return Role.OTHER


def read_action_for(review) -> Action:
    """Reading an approved review is public; anything else is restricted."""
    if review.moderation_state == ModerationState.APPROVED.value:
        return Action.READ_APPROVED_REVIEW
    return Action.READ_UNPUBLISHED_REVIEW


def can(actor: Actor, action: Action, target=None) -> bool:
    return _DECISIONS[action][_COLUMNS[resolve_role(actor, target)]]


def authorize(actor: Actor, action: Action, target=None) -> None:
    """Raise ``Forbidden`` unless ``actor`` may perform ``action`` on ``target``."""
    if not can(actor, action, target):
        raise Forbidden()

"""Moderation state machine shared by reviews and feedback votes.

States:
    PENDING → APPROVED | REJECTED
    APPROVED → REJECTED | PENDING (reopen)
    REJECTED → APPROVED | PENDING (reopen)

There are no self-transitions. Who may trigger a transition is decided by the
authorization policy, not here.
"""

from enum import Enum

from protean.exceptions import ValidationError


class ModerationState(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ModerationAction(Enum):
    APPROVE = "Approve"
    REJECT = "Reject"
    REOPEN = "Reopen"


ACTION_TARGETS = {
    ModerationAction.APPROVE: ModerationState.APPROVED,
    ModerationAction.REJECT: ModerationState.REJECTED,
    ModerationAction.REOPEN: ModerationState.PENDING,
}

_VALID_TRANSITIONS = {
    ModerationState.PENDING: {ModerationState.APPROVED, ModerationState.REJECTED},
    ModerationState.APPROVED: {ModerationState.REJECTED, ModerationState.PENDING},
    ModerationState.REJECTED: {ModerationState.APPROVED, ModerationState.PENDING},
}


def initial_state(auto_approve: bool) -> ModerationState:
    return ModerationState.APPROVED if auto_approve else ModerationState.PENDING


def can_transition(current: ModerationState, target: ModerationState) -> bool:
    return target in _VALID_TRANSITIONS.get(current, set())


def assert_can_transition(current: ModerationState, target: ModerationState) -> None:
    if not can_transition(current, target):
        raise ValidationError(
            {"moderation_state": [f"Cannot transition from {current.value} to {target.value}"]}
        )


def parse_action(value) -> ModerationAction:
    """Accept an action enum or its value ("Approve", "approve", ...)."""
    if isinstance(value, ModerationAction):
        return value
    for action in ModerationAction:
        if str(value).strip().lower() == action.value.lower():
            return action
    raise ValidationError({"action": [f"Unknown moderation action: {value}"]})


def parse_state(value) -> ModerationState:
    """Accept a state enum or its value ("Pending", "approved", ...)."""
    if isinstance(value, ModerationState):
        return value
    for state in ModerationState:
        if str(value).strip().lower() == state.value.lower():
            return state
    raise ValidationError({"state": [f"Unknown moderation state: {value}"]})

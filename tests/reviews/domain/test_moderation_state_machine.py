"""Tests for the moderation state machine shared by reviews and votes."""

import pytest
from protean.exceptions import ValidationError
from reviews.shared.moderation import (
    ModerationAction,
    ModerationState,
    assert_can_transition,
    can_transition,
    initial_state,
    parse_action,
    parse_state,
)

PENDING = ModerationState.PENDING
APPROVED = ModerationState.APPROVED
REJECTED = ModerationState.REJECTED


class TestInitialState:
    def test_pending_by_default(self):
        assert initial_state(auto_approve=False) == PENDING

    def test_approved_with_auto_approve(self):
        assert initial_state(auto_approve=True) == APPROVED


class TestTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            (PENDING, APPROVED),
            (PENDING, REJECTED),
            (APPROVED, REJECTED),
            (APPROVED, PENDING),
            (REJECTED, APPROVED),
            (REJECTED, PENDING),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        assert_can_transition(current, target)

    @pytest.mark.parametrize("state", [PENDING, APPROVED, REJECTED])
    def test_self_transition_is_rejected(self, state):
        assert not can_transition(state, state)
        with pytest.raises(ValidationError) as exc:
            assert_can_transition(state, state)
        assert "moderation_state" in exc.value.messages


class TestParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Approve", ModerationAction.APPROVE),
            ("reject", ModerationAction.REJECT),
            (" REOPEN ", ModerationAction.REOPEN),
            (ModerationAction.APPROVE, ModerationAction.APPROVE),
        ],
    )
    def test_parse_action(self, raw, expected):
        assert parse_action(raw) == expected

    def test_unknown_action(self):
        with pytest.raises(ValidationError) as exc:
            parse_action("Publish")
        assert "action" in exc.value.messages

    def test_parse_state(self):
        assert parse_state("approved") == APPROVED
        assert parse_state(REJECTED) == REJECTED

    def test_unknown_state(self):
        with pytest.raises(ValidationError) as exc:
            parse_state("Archived")
        assert "state" in exc.value.messages

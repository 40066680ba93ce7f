"""Tests for the FeedbackVote aggregate."""

import pytest
from protean.exceptions import ValidationError
from reviews.feedback.events import FeedbackVoteCast, FeedbackVoteChanged, FeedbackVoteModerated
from reviews.feedback.feedback_vote import FeedbackVote
from reviews.shared.moderation import ModerationAction, ModerationState


def _make_vote(**overrides):
    defaults = {"review_id": "rev-001", "user_id": "user-002", "helpful": True}
    defaults.update(overrides)
    return FeedbackVote.cast(**defaults)


class TestCast:
    def test_auto_approved_by_default(self):
        vote = _make_vote()
        assert vote.is_approved

    def test_pending_without_auto_approve(self):
        vote = _make_vote(auto_approve=False)
        assert vote.state == ModerationState.PENDING

    def test_vote_key(self):
        assert _make_vote().vote_key == "user-002:rev-001"

    def test_unhelpful(self):
        vote = _make_vote(helpful=False)
        assert vote.helpful is False

    def test_raises_cast_event(self):
        vote = _make_vote()
        event = vote._events[-1]
        assert isinstance(event, FeedbackVoteCast)
        assert event.vote_id == str(vote.id)
        assert event.helpful is True


class TestChange:
    def test_flip(self):
        vote = _make_vote()
        vote._events.clear()
        vote.change(False)

        assert vote.helpful is False
        assert isinstance(vote._events[-1], FeedbackVoteChanged)

    def test_same_value_is_noop(self):
        vote = _make_vote()
        vote._events.clear()
        vote.change(True)
        assert vote._events == []


class TestModerate:
    def test_reject_then_reopen(self):
        vote = _make_vote()
        vote.moderate(ModerationAction.REJECT, moderator_id="mod-1")
        assert vote.state == ModerationState.REJECTED

        vote.moderate(ModerationAction.REOPEN, moderator_id="mod-1")
        assert vote.state == ModerationState.PENDING

        event = vote._events[-1]
        assert isinstance(event, FeedbackVoteModerated)
        assert event.previous_state == "Rejected"
        assert event.moderation_state == "Pending"

    def test_invalid_transition(self):
        vote = _make_vote()
        with pytest.raises(ValidationError):
            vote.moderate(ModerationAction.APPROVE, moderator_id="mod-1")

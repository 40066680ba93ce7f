"""Tests for the authorization decision table and role resolution."""

from types import SimpleNamespace

import pytest
from reviews.exceptions import Forbidden
from reviews.policy import Action, Actor, Role, authorize, can, read_action_for, resolve_role

OWNER = Actor.user("user-owner")
OTHER = Actor.user("user-other")
ANONYMOUS = Actor.anonymous()
MODERATOR = Actor.moderator("mod-1")

OWNED = SimpleNamespace(user_id="user-owner")


class TestResolveRole:
    def test_moderator_wins_over_ownership(self):
        actor = Actor.moderator("user-owner")
        assert resolve_role(actor, OWNED) == Role.MODERATOR

    def test_anonymous(self):
        assert resolve_role(ANONYMOUS, OWNED) == Role.ANONYMOUS

    def test_owner(self):
        assert resolve_role(OWNER, OWNED) == Role.OWNER

    def test_other(self):
        assert resolve_role(OTHER, OWNED) == Role.OTHER

    def test_no_target_means_other(self):
        assert resolve_role(OWNER) == Role.OTHER

    def test_target_without_owner_means_other(self):
        assert resolve_role(OWNER, SimpleNamespace(user_id=None)) == Role.OTHER


class TestDecisionTable:
    @pytest.mark.parametrize(
        "action, anonymous, owner, other, moderator",
        [
            (Action.CREATE_REVIEW, True, True, True, True),
            (Action.CREATE_REVIEW_ON_BEHALF, False, False, False, True),
            (Action.READ_APPROVED_REVIEW, True, True, True, True),
            (Action.READ_UNPUBLISHED_REVIEW, False, True, False, True),
            (Action.UPDATE_REVIEW, False, True, False, True),
            (Action.MODERATE_REVIEW, False, False, False, True),
            (Action.DELETE_REVIEW, False, True, False, True),
            (Action.CREATE_VOTE, False, False, True, True),
            (Action.UPDATE_VOTE, False, True, False, True),
            (Action.DELETE_VOTE, False, True, False, True),
            (Action.MODERATE_VOTE, False, False, False, True),
            (Action.LIST_VOTES, False, False, False, True),
            (Action.MANAGE_SETTINGS, False, False, False, True),
        ],
    )
    def test_decisions(self, action, anonymous, owner, other, moderator):
        assert can(ANONYMOUS, action, OWNED) is anonymous
        assert can(OWNER, action, OWNED) is owner
        assert can(OTHER, action, OWNED) is other
        assert can(MODERATOR, action, OWNED) is moderator

    def test_every_action_has_a_decision(self):
        for action in Action:
            can(MODERATOR, action, OWNED)


class TestAuthorize:
    def test_allowed_returns_none(self):
        assert authorize(OWNER, Action.UPDATE_REVIEW, OWNED) is None

    def test_denied_raises_forbidden(self):
        with pytest.raises(Forbidden):
            authorize(OTHER, Action.UPDATE_REVIEW, OWNED)


class TestReadAction:
    def test_approved_review_is_public(self):
        review = SimpleNamespace(moderation_state="Approved")
        assert read_action_for(review) == Action.READ_APPROVED_REVIEW

    @pytest.mark.parametrize("state", ["Pending", "Rejected"])
    def test_unpublished_review_is_restricted(self, state):
        review = SimpleNamespace(moderation_state=state)
        assert read_action_for(review) == Action.READ_UNPUBLISHED_REVIEW


class TestActorFromCommand:
    def test_anonymous_command(self):
        command = SimpleNamespace(actor_id=None, actor_is_moderator=True)
        assert Actor.from_command(command) == Actor.anonymous()

    def test_moderator_command(self):
        command = SimpleNamespace(actor_id="mod-9", actor_is_moderator=True)
        assert Actor.from_command(command) == Actor.moderator("mod-9")

    def test_user_command(self):
        command = SimpleNamespace(actor_id="user-9", actor_is_moderator=False)
        actor = Actor.from_command(command)
        assert actor.user_id == "user-9"
        assert not actor.is_moderator
        assert not actor.is_anonymous

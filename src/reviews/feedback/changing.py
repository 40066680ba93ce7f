"""ChangeVote: flip an existing vote between helpful and unhelpful."""

from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.feedback.feedback_vote import FeedbackVote
from reviews.policy import Action, Actor, authorize


@reviews.command(part_of="FeedbackVote")
class ChangeVote:
    vote_id = Identifier(required=True)
    actor_id = Identifier()
    actor_is_moderator = Boolean(default=False)
    helpful = Boolean(default=True)


@reviews.command_handler(part_of=FeedbackVote)
class ChangeVoteHandler:
    @handle(ChangeVote)
    def change_vote(self, command):
        actor = Actor.from_command(command)
        repo = current_domain.repository_for(FeedbackVote)
        vote = repo.get(command.vote_id)

        authorize(actor, Action.UPDATE_VOTE, vote)

        vote.change(command.helpful)
        repo.add(vote)
        return str(vote.id)

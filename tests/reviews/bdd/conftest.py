"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from reviews.exceptions import Forbidden
from reviews.review.moderation import ModerateReview, moderate
from reviews.review.review import Review
from reviews.review.submission import SubmitReview, submit
from reviews.settings import update_settings


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{product_id}" exists'))
def product_exists(directory, product_id):
    directory.add_product(product_id)


@given("reviews are auto-approved")
def reviews_auto_approved():
    update_settings(auto_approve=True)


@given(
    parsers.cfparse('user "{user_id}" has reviewed "{product_id}" with rating {rating:d}'),
    target_fixture="review_id",
)
def existing_review(user_id, product_id, rating):
    return submit(
        SubmitReview(
            product_id=product_id,
            actor_id=user_id,
            rating=str(rating),
            body="Written before the scenario started.",
        )
    )


@given("the review has been approved")
def review_approved(review_id):
    moderate(ModerateReview(review_id=review_id, actor_id="mod-bdd", actor_is_moderator=True, action="Approve"))


@given("the review has been rejected")
def review_rejected(review_id):
    moderate(ModerateReview(review_id=review_id, actor_id="mod-bdd", actor_is_moderator=True, action="Reject"))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the review is "{state}"'))
def review_in_state(review_id, state):
    assert current_domain.repository_for(Review).get(review_id).moderation_state == state


@then("the request is forbidden")
def request_forbidden(error):
    assert isinstance(error["exc"], Forbidden)


@then(parsers.cfparse('a validation error is reported for "{field}"'))
def validation_error_for(error, field):
    assert error["exc"] is not None
    assert field in error["exc"].messages

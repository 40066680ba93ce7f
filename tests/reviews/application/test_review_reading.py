"""Application tests for review listings, lookups and product statistics."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from reviews.exceptions import Forbidden
from reviews.policy import Actor
from reviews.review.moderation import ModerateReview, moderate
from reviews.review.reading import get_review, list_product_reviews, list_reviews, list_user_reviews
from reviews.review.stats import product_stats
from reviews.review.submission import SubmitReview, submit
from reviews.settings import update_settings
from reviews.shared.query import PAGE_SIZE

MODERATOR = Actor.moderator("mod-1")


def _submit(product_id, actor_id, rating="4"):
    return submit(SubmitReview(product_id=product_id, actor_id=actor_id, rating=rating, body="Review text."))


def _moderate(review_id, action):
    moderate(ModerateReview(review_id=review_id, actor_id="mod-1", actor_is_moderator=True, action=action))


class TestProductListing:
    def test_only_approved_reviews_are_listed(self, product_id):
        approved = _submit(product_id, "user-rd-1", rating="5")
        _submit(product_id, "user-rd-2", rating="1")
        rejected = _submit(product_id, "user-rd-3", rating="1")
        _moderate(approved, "Approve")
        _moderate(rejected, "Reject")

        listing = list_product_reviews(product_id)
        assert [str(r.id) for r in listing.reviews] == [approved]
        assert listing.count == 1
        assert listing.average == 5

    def test_newest_first(self, product_id):
        first = _submit(product_id, "user-rd-1")
        second = _submit(product_id, "user-rd-2")
        _moderate(first, "Approve")
        _moderate(second, "Approve")

        listing = list_product_reviews(product_id)
        assert [str(r.id) for r in listing.reviews] == [second, first]

    def test_empty_product(self, product_id):
        listing = list_product_reviews(product_id)
        assert listing.reviews == []
        assert listing.count == 0
        assert listing.average == 0


class TestProductStats:
    def test_no_approved_reviews(self, product_id):
        _submit(product_id, "user-st-1")
        stats = product_stats(product_id)
        assert stats.review_count == 0
        assert stats.average_rating == 0

    def test_approval_adds_and_rejection_removes(self, product_id):
        review_id = _submit(product_id, "user-st-1", rating="3")
        _moderate(review_id, "Approve")
        assert product_stats(product_id).review_count == 1

        _moderate(review_id, "Reject")
        assert product_stats(product_id).review_count == 0
        assert list_product_reviews(product_id).reviews == []

    def test_average_and_distribution(self, product_id):
        for user, rating in (("user-st-1", "4"), ("user-st-2", "5"), ("user-st-3", "5")):
            _moderate(_submit(product_id, user, rating=rating), "Approve")

        stats = product_stats(product_id, precision=2)
        assert stats.review_count == 3
        assert stats.average_rating == 4.67
        assert stats.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 1, 5: 2}
        assert product_stats(product_id, precision=0).average_rating == 5

    @pytest.mark.slow
    def test_counts_every_review_past_one_page(self, product_id):
        update_settings(auto_approve=True)
        total = PAGE_SIZE * 2 + 50
        for i in range(total):
            _submit(product_id, f"user-pg-{i}", rating=str(i % 5 + 1))

        stats = product_stats(product_id)
        assert stats.review_count == total
        assert stats.average_rating == 3.0
        assert stats.rating_distribution == {score: total // 5 for score in range(1, 6)}
        assert len(list_product_reviews(product_id).reviews) == total


class TestFetchAll:
    def test_pages_are_ordered_and_complete(self, product_id, monkeypatch):
        from protean import current_domain
        from reviews.review.review import Review
        from reviews.shared import query

        monkeypatch.setattr(query, "PAGE_SIZE", 2)
        ids = {_submit(product_id, f"user-fa-{i}") for i in range(5)}

        fetched = [str(r.id) for r in query.fetch_all(current_domain.repository_for(Review), product_id=product_id)]
        assert fetched == sorted(ids)


class TestGetReview:
    def test_pending_review_visible_to_owner_and_moderator(self, product_id):
        review_id = _submit(product_id, "user-get-1")
        assert str(get_review(review_id, Actor.user("user-get-1")).id) == review_id
        assert str(get_review(review_id, MODERATOR).id) == review_id

    @pytest.mark.parametrize("actor", [Actor.anonymous(), Actor.user("user-get-2")])
    def test_pending_review_hidden_from_others(self, product_id, actor):
        review_id = _submit(product_id, "user-get-1")
        with pytest.raises(Forbidden):
            get_review(review_id, actor)

    def test_approved_review_is_public(self, product_id):
        review_id = _submit(product_id, "user-get-1")
        _moderate(review_id, "Approve")
        assert str(get_review(review_id, Actor.anonymous()).id) == review_id

    def test_unknown_review(self):
        with pytest.raises(ObjectNotFoundError):
            get_review("rev-missing", MODERATOR)


class TestUserListing:
    def test_owner_sees_every_state(self, product_id, directory):
        directory.add_product("prod-ul-2")
        approved = _submit(product_id, "user-ul-1")
        _moderate(approved, "Approve")
        _submit("prod-ul-2", "user-ul-1")

        assert len(list_user_reviews("user-ul-1", Actor.user("user-ul-1"))) == 2
        assert len(list_user_reviews("user-ul-1", MODERATOR)) == 2

    def test_others_see_approved_only(self, product_id, directory):
        directory.add_product("prod-ul-2")
        approved = _submit(product_id, "user-ul-1")
        _moderate(approved, "Approve")
        _submit("prod-ul-2", "user-ul-1")

        visible = list_user_reviews("user-ul-1", Actor.user("user-ul-9"))
        assert [str(r.id) for r in visible] == [approved]


class TestSiteWideListing:
    def test_moderator_filters_by_state(self, product_id):
        pending = _submit(product_id, "user-sw-1")
        approved = _submit(product_id, "user-sw-2")
        _moderate(approved, "Approve")

        assert [str(r.id) for r in list_reviews(MODERATOR, state="pending")] == [pending]
        assert len(list_reviews(MODERATOR, product_id=product_id)) == 2

    def test_public_listing_is_approved_only(self, product_id):
        _submit(product_id, "user-sw-1")
        approved = _submit(product_id, "user-sw-2")
        _moderate(approved, "Approve")

        assert [str(r.id) for r in list_reviews(Actor.anonymous(), product_id=product_id)] == [approved]
        assert [str(r.id) for r in list_reviews(Actor.anonymous(), state="Approved", product_id=product_id)] == [
            approved
        ]

    def test_non_moderator_cannot_list_pending(self):
        with pytest.raises(Forbidden):
            list_reviews(Actor.user("user-sw-1"), state="Pending")

    def test_unknown_state(self):
        with pytest.raises(ValidationError):
            list_reviews(MODERATOR, state="Archived")

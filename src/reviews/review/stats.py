"""Rating aggregation: review count, average and distribution per product.

Statistics are recomputed from the approved reviews on every call; nothing is
cached or stored. Cost is linear in the number of approved reviews of the
product.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from protean.utils.globals import current_domain

from reviews.review.review import Review
from reviews.shared.moderation import ModerationState
from reviews.shared.query import fetch_all


@dataclass(frozen=True)
class AggregateStats:
    product_id: str
    review_count: int = 0
    average_rating: float | int = 0
    rating_distribution: dict[int, int] = field(default_factory=lambda: {score: 0 for score in range(1, 6)})

    def as_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "review_count": self.review_count,
            "average_rating": self.average_rating,
            "rating_distribution": {str(k): v for k, v in self.rating_distribution.items()},
        }


def average(scores: list[int], precision: int | None = None) -> float | int:
    """Mean of ``scores``; 0 for an empty list.

    ``precision=None`` keeps full float precision, ``precision=0`` rounds
    half-up to the nearest integer, any other value rounds half-up to that
    many decimal places.
    """
    if not scores:
        return 0

    mean = Decimal(sum(scores)) / Decimal(len(scores))
    if precision is None:
        return float(mean)
    if precision < 0:
        raise ValueError("precision cannot be negative")

    rounded = mean.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    return int(rounded) if precision == 0 else float(rounded)


def compute_stats(product_id, scores: list[int], precision: int | None = None) -> AggregateStats:
    distribution = {score: 0 for score in range(1, 6)}
    for score in scores:
        distribution[score] = distribution.get(score, 0) + 1

    return AggregateStats(
        product_id=str(product_id),
        review_count=len(scores),
        average_rating=average(scores, precision),
        rating_distribution=distribution,
    )


def approved_reviews_for(product_id) -> list[Review]:
    repo = current_domain.repository_for(Review)
    return fetch_all(
        repo,
        product_id=str(product_id),
        moderation_state=ModerationState.APPROVED.value,
    )


def product_stats(product_id, precision: int | None = None) -> AggregateStats:
    """Statistics over the approved reviews of ``product_id``."""
    scores = [review.rating.score for review in approved_reviews_for(product_id)]
    return compute_stats(product_id, scores, precision)

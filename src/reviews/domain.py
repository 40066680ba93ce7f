"""Reviews & Moderation bounded context: product reviews and their feedback.

Handles the review lifecycle (submission, duplicate prevention, moderation),
helpful/unhelpful feedback votes with their own moderation, on-demand rating
aggregation, and the authorization policy that gates every operation.
"""

import structlog
from protean.domain import Domain

from reviews.utils.logging import configure_logging

configure_logging()

reviews = Domain(name="reviews")

logger = structlog.get_logger(__name__)

"""Derived user rating of a content: the plain mean of its review scores."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from cinelog_api.core.errors import ContentNotFound
from cinelog_api.models.reviews import RatingSummary
from cinelog_api.services.repositories.contents_repo import ContentsRepo
from cinelog_api.services.repositories.reviews_repo import ReviewsRepo

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal('0.1')


def mean_score(count: int, total: int) -> Optional[float]:
    """Unweighted mean; None (not 0) when there is nothing to average."""
    if count <= 0:
        return None
    return total / count


def round_rating(value: Optional[float]) -> Optional[float]:
    """Round half-up to one decimal (6.25 -> 6.3, unlike round())."""
    if value is None:
        return None
    rounded = Decimal(repr(value)).quantize(ONE_DECIMAL, ROUND_HALF_UP)
    return float(rounded)


class RatingAggregator:
    """Recompute ``contents.user_rating`` from the current reviews."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.contents = ContentsRepo(db)
        self.reviews = ReviewsRepo(db)

    async def recompute(
        self,
        content_id: int,
        *,
        session=None,
    ) -> RatingSummary:
        """Recalculate and store the rating of one content.

        Must run in the session of the review write that triggered it so
        that no reader sees the review without the matching rating.
        """
        count, total = await self.reviews.score_totals(
            content_id, session=session)
        mean = mean_score(count, total)
        user_rating = round_rating(mean)

        stored = await self.contents.set_user_rating(
            content_id,
            user_rating,
            count,
            session=session,
        )
        if not stored:
            raise ContentNotFound(str(content_id))

        logger.info(
            'rating_recomputed',
            extra={'content_id': content_id,
                   'user_rating': user_rating,
                   'reviews_count': count})
        return RatingSummary(
            content_id=content_id,
            user_rating=user_rating,
            mean=mean,
            reviews_count=count,
        )

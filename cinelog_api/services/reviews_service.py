"""Reviews service: one review per author and content, kept in step with
the content's derived rating."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cinelog_api.core.errors import (
    ContentNotFound,
    Forbidden,
    InvalidScore,
    ReviewNotFound,
    StorageError,
)
from cinelog_api.db.mongo import parse_object_id, run_in_transaction
from cinelog_api.models.caller import Caller
from cinelog_api.models.reviews import (
    MAX_SCORE,
    MIN_SCORE,
    ReviewItem,
    ReviewListResponse,
    ReviewSort,
    ReviewSubmitResponse,
)
from cinelog_api.services.rating_aggregator import RatingAggregator
from cinelog_api.services.repositories.contents_repo import ContentsRepo
from cinelog_api.services.repositories.review_votes_repo import (
    ReviewVotesRepo,
)
from cinelog_api.services.repositories.reviews_repo import ReviewsRepo

logger = logging.getLogger(__name__)


def validate_score(score: Any) -> int:
    """Accept only real integers in [1, 10]; bools and floats are refused."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScore(f'{score!r} is not an integer')
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidScore(f'{score} is outside {MIN_SCORE}..{MAX_SCORE}')
    return score


def to_item(doc: Dict[str, Any]) -> ReviewItem:
    return ReviewItem(
        review_id=str(doc['_id']),
        content_id=doc['content_id'],
        author_id=doc['author_id'],
        score=int(doc['score']),
        comment=doc.get('comment'),
        useful_votes=int(doc.get('useful_votes', 0)),
        created_at=doc['created_at'],
    )


class ReviewsService:
    """Business-logic for reviews (submit, moderation, listings)."""

    def __init__(
            self,
            db: AsyncIOMotorDatabase,
            aggregator: Optional[RatingAggregator] = None) -> None:
        self.db = db
        self.repo = ReviewsRepo(db)
        self.votes_repo = ReviewVotesRepo(db)
        self.contents = ContentsRepo(db)
        self.aggregator = aggregator or RatingAggregator(db)

    # ---------- SUBMIT (create or overwrite) ----------

    async def submit_review(
            self,
            content_id: int,
            author_id: int,
            score: int,
            comment: Optional[str] = None) -> ReviewSubmitResponse:
        """Create the author's review, or overwrite score and comment of
        the one they already wrote, then recompute the content rating."""
        score = validate_score(score)

        async def unit(session):
            if not await self.contents.exists(content_id, session=session):
                raise ContentNotFound(str(content_id))
            review_id, created = await self.repo.upsert(
                author_id,
                content_id,
                score,
                comment,
                session=session,
            )
            await self.aggregator.recompute(content_id, session=session)
            return ReviewSubmitResponse(review_id=review_id, created=created)

        try:
            result = await run_in_transaction(
                self.db, unit, name='review_submit')
        except PyMongoError as error:
            raise StorageError(f'review_submit: {error}') from error

        logger.info(
            'review_submitted',
            extra={'review_id': result.review_id,
                   'content_id': content_id,
                   'created': result.created})
        return result

    # ---------- GET ONE ----------

    async def get_review(self, review_id: str) -> ReviewItem:
        oid = parse_object_id(review_id)
        if oid is None:
            raise ReviewNotFound(review_id)
        try:
            doc = await self.repo.get_by_id(oid)
        except PyMongoError as error:
            raise StorageError(f'review_get: {error}') from error
        if doc is None:
            raise ReviewNotFound(review_id)
        return to_item(doc)

    # ---------- DELETE ----------

    async def delete_review(self, review_id: str, caller: Caller) -> None:
        """Delete by author or admin; drops the votes and re-rates."""
        oid = parse_object_id(review_id)
        if oid is None:
            raise ReviewNotFound(review_id)

        async def unit(session):
            doc = await self.repo.get_by_id(oid, session=session)
            if doc is None:
                raise ReviewNotFound(review_id)
            if not caller.may_act_for(doc['author_id']):
                raise Forbidden('only the author or an admin may delete')
            await self.votes_repo.delete_many_by_reviews(
                [oid], session=session)
            await self.repo.delete_and_return(oid, session=session)
            await self.aggregator.recompute(
                doc['content_id'], session=session)
            return doc['content_id']

        try:
            content_id = await run_in_transaction(
                self.db, unit, name='review_delete')
        except PyMongoError as error:
            raise StorageError(f'review_delete: {error}') from error

        logger.info(
            'review_deleted',
            extra={'review_id': review_id,
                   'content_id': content_id,
                   'by_admin': caller.is_admin})

    # ---------- ADMIN EDIT ----------

    async def admin_update_review(
            self,
            review_id: str,
            score: int,
            comment: Optional[str],
            caller: Caller) -> ReviewItem:
        """Moderator edit of score and comment; creation date is kept."""
        if not caller.is_admin:
            raise Forbidden('admin only')
        score = validate_score(score)
        oid = parse_object_id(review_id)
        if oid is None:
            raise ReviewNotFound(review_id)

        async def unit(session):
            doc = await self.repo.get_by_id(oid, session=session)
            if doc is None:
                raise ReviewNotFound(review_id)
            await self.repo.update_score(
                oid, score, comment, session=session)
            await self.aggregator.recompute(
                doc['content_id'], session=session)
            return {**doc, 'score': score, 'comment': comment}

        try:
            doc = await run_in_transaction(
                self.db, unit, name='review_admin_update')
        except PyMongoError as error:
            raise StorageError(f'review_admin_update: {error}') from error

        logger.info(
            'review_moderated',
            extra={'review_id': review_id, 'moderator_id': caller.user_id})
        return to_item(doc)

    # ---------- LISTS ----------

    async def list_by_content(
            self,
            content_id: int,
            limit: Optional[int] = None,
            offset: int = 0,
            sort: ReviewSort = ReviewSort.new) -> ReviewListResponse:
        """Reviews of a content, newest first (or most useful first)."""
        try:
            if not await self.contents.exists(content_id):
                raise ContentNotFound(str(content_id))
            docs = await self.repo.list_by_content(
                content_id,
                limit,
                offset,
                sort=ReviewSort(sort).value,
            )
            total = await self.repo.count_by_content(content_id)
        except PyMongoError as error:
            raise StorageError(f'review_list: {error}') from error
        return ReviewListResponse(items=[to_item(d) for d in docs],
                                  total=total)

    async def list_by_author(
            self,
            author_id: int,
            caller: Caller) -> ReviewListResponse:
        if not caller.may_act_for(author_id):
            raise Forbidden('only the author or an admin may list')
        try:
            docs = await self.repo.list_by_author(author_id)
        except PyMongoError as error:
            raise StorageError(f'review_list_author: {error}') from error
        items: List[ReviewItem] = [to_item(d) for d in docs]
        return ReviewListResponse(items=items, total=len(items))

    async def list_all(
            self,
            caller: Caller,
            limit: int = 50,
            offset: int = 0) -> ReviewListResponse:
        """Moderation queue: every review, newest first."""
        if not caller.is_admin:
            raise Forbidden('admin only')
        try:
            docs = await self.repo.list_all(limit, offset)
            total = await self.repo.count_all()
        except PyMongoError as error:
            raise StorageError(f'review_list_all: {error}') from error
        return ReviewListResponse(items=[to_item(d) for d in docs],
                                  total=total)

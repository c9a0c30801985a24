"""Usefulness votes on reviews: a strict per-voter toggle."""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cinelog_api.core.errors import (
    ReviewNotFound,
    SelfVoteForbidden,
    StorageError,
)
from cinelog_api.db.mongo import parse_object_id, run_in_transaction
from cinelog_api.models.votes import VoteStateResponse, VoteToggleResponse
from cinelog_api.services.repositories.review_votes_repo import (
    ReviewVotesRepo,
)
from cinelog_api.services.repositories.reviews_repo import ReviewsRepo

logger = logging.getLogger(__name__)


class VotesService:
    """Keep ``reviews.useful_votes`` equal to the number of vote rows."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db
        self.reviews = ReviewsRepo(db)
        self.repo = ReviewVotesRepo(db)

    async def toggle_vote(
            self,
            review_id: str,
            voter_id: int) -> VoteToggleResponse:
        """Add the voter's vote if absent, remove it if present.

        Removal is tried first (delete is its own existence check); the
        insert relies on the unique (review_id, voter_id) index, so a
        concurrent twin makes the unit replay and take the delete branch.
        """
        oid = parse_object_id(review_id)
        if oid is None:
            raise ReviewNotFound(review_id)

        async def unit(session):
            review = await self.reviews.get_by_id(oid, session=session)
            if review is None:
                raise ReviewNotFound(review_id)
            if review['author_id'] == voter_id:
                raise SelfVoteForbidden(review_id)

            if await self.repo.delete_vote(oid, voter_id, session=session):
                voted, delta = False, -1
            else:
                await self.repo.insert_vote(oid, voter_id, session=session)
                voted, delta = True, 1

            useful_votes = await self.reviews.inc_useful_votes(
                oid, delta, session=session)
            if useful_votes is None:
                # review vanished mid-unit; abort the vote change too
                raise ReviewNotFound(review_id)
            return VoteToggleResponse(
                review_id=review_id,
                voted=voted,
                useful_votes=useful_votes,
            )

        try:
            result = await run_in_transaction(
                self.db, unit, name='vote_toggle')
        except PyMongoError as error:
            raise StorageError(f'vote_toggle: {error}') from error

        logger.info(
            'vote_toggled',
            extra={'review_id': review_id,
                   'voted': result.voted,
                   'useful_votes': result.useful_votes})
        return result

    async def has_voted(
            self,
            review_id: str,
            voter_id: int) -> VoteStateResponse:
        oid = parse_object_id(review_id)
        if oid is None:
            raise ReviewNotFound(review_id)
        try:
            if await self.reviews.get_by_id(oid) is None:
                raise ReviewNotFound(review_id)
            voted = await self.repo.exists(oid, voter_id)
        except PyMongoError as error:
            raise StorageError(f'vote_state: {error}') from error
        return VoteStateResponse(review_id=review_id, voted=voted)

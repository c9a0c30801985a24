from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase


class ReviewVotesRepo:
    """Usefulness votes; one row per (review_id, voter_id)."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["review_votes"]

    async def exists(
            self,
            review_id: ObjectId,
            voter_id: int,
            session=None) -> bool:
        d = await self.col.find_one(
            {"review_id": review_id, "voter_id": voter_id},
            {"_id": 1},
            session=session,
        )
        return d is not None

    async def insert_vote(
            self,
            review_id: ObjectId,
            voter_id: int,
            session=None) -> None:
        """Raises DuplicateKeyError when the voter already voted."""
        await self.col.insert_one(
            {"review_id": review_id,
             "voter_id": voter_id,
             "created_at": datetime.now(timezone.utc)},
            session=session,
        )

    async def delete_vote(
            self,
            review_id: ObjectId,
            voter_id: int,
            session=None) -> bool:
        res = await self.col.delete_one(
            {"review_id": review_id, "voter_id": voter_id},
            session=session,
        )
        return res.deleted_count == 1

    async def delete_many_by_reviews(
            self,
            review_ids: List[ObjectId],
            session=None) -> None:
        if not review_ids:
            return
        await self.col.delete_many(
            {"review_id": {"$in": review_ids}},
            session=session)

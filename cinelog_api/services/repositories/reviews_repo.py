"""Mongo repository for reviews collection."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

NEWEST_FIRST = [('created_at', -1), ('_id', -1)]
MOST_USEFUL_FIRST = [('useful_votes', -1), *NEWEST_FIRST]


class ReviewsRepo:
    """CRUD, counters and score totals for reviews."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['reviews']

    async def upsert(
        self,
        author_id: int,
        content_id: int,
        score: int,
        comment: Optional[str],
        *,
        session=None,
    ) -> Tuple[str, bool]:
        """Write the author's review for a content.

        Returns ``(review_id, created)``. An existing review keeps its id,
        ``created_at`` and ``useful_votes``; only score and comment change.
        """
        key = {'author_id': author_id, 'content_id': content_id}
        result = await self.col.update_one(
            key,
            {
                '$set': {'score': score, 'comment': comment},
                '$setOnInsert': {
                    'created_at': datetime.now(timezone.utc),
                    'useful_votes': 0,
                },
            },
            upsert=True,
            session=session,
        )
        if result.upserted_id is not None:
            return str(result.upserted_id), True
        doc = await self.col.find_one(key, {'_id': 1}, session=session)
        return str(doc['_id']), False

    async def get_by_id(
        self,
        review_id: ObjectId,
        *,
        session=None,
    ) -> Optional[Dict[str, Any]]:
        """Get single review by its id."""
        return await self.col.find_one({'_id': review_id}, session=session)

    async def update_score(
        self,
        review_id: ObjectId,
        score: int,
        comment: Optional[str],
        *,
        session=None,
    ) -> bool:
        """Overwrite score and comment; creation date is left alone."""
        result = await self.col.update_one(
            {'_id': review_id},
            {'$set': {'score': score, 'comment': comment}},
            session=session,
        )
        return result.matched_count == 1

    async def delete_and_return(
        self,
        review_id: ObjectId,
        *,
        session=None,
    ) -> Optional[Dict[str, Any]]:
        """Delete review and return its content_id (for the rating)."""
        return await self.col.find_one_and_delete(
            {'_id': review_id},
            projection={'content_id': 1, '_id': 1},
            session=session,
        )

    async def inc_useful_votes(
        self,
        review_id: ObjectId,
        delta: int,
        *,
        session=None,
    ) -> Optional[int]:
        """Adjust the useful-votes counter and return the new value."""
        doc = await self.col.find_one_and_update(
            {'_id': review_id},
            {'$inc': {'useful_votes': delta}},
            projection={'useful_votes': 1, '_id': 0},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        return None if doc is None else int(doc['useful_votes'])

    async def score_totals(
        self,
        content_id: int,
        *,
        session=None,
    ) -> Tuple[int, int]:
        """Return ``(count, sum)`` of scores for a content."""
        pipeline = [
            {'$match': {'content_id': content_id}},
            {
                '$group': {
                    '_id': '$content_id',
                    'count': {'$sum': 1},
                    'total': {'$sum': '$score'},
                },
            },
        ]
        docs = await self.col.aggregate(
            pipeline, session=session).to_list(length=1)
        if not docs:
            return 0, 0
        return int(docs[0]['count']), int(docs[0]['total'])

    async def list_by_content(
        self,
        content_id: int,
        limit: Optional[int],
        offset: int,
        sort: str = 'new',
    ) -> List[Dict[str, Any]]:
        """List content reviews; ``limit=None`` returns all of them.

        Mongo reads ``limit(0)`` as "no limit", so an empty page is
        answered here.
        """
        if limit is not None and limit <= 0:
            return []
        order = MOST_USEFUL_FIRST if sort == 'top' else NEWEST_FIRST
        cursor = self.col.find({'content_id': content_id}).sort(order)
        if offset:
            cursor = cursor.skip(offset)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [doc async for doc in cursor]

    async def count_by_content(self, content_id: int) -> int:
        return await self.col.count_documents({'content_id': content_id})

    async def list_by_author(self, author_id: int) -> List[Dict[str, Any]]:
        cursor = self.col.find({'author_id': author_id}).sort(NEWEST_FIRST)
        return [doc async for doc in cursor]

    async def list_all(
        self,
        limit: int,
        offset: int,
    ) -> List[Dict[str, Any]]:
        if limit <= 0:
            return []
        cursor = self.col.find({}).sort(NEWEST_FIRST).skip(offset).limit(limit)
        return [doc async for doc in cursor]

    async def count_all(self) -> int:
        return await self.col.count_documents({})

    async def ids_by_content(
        self,
        content_id: int,
        *,
        session=None,
    ) -> List[ObjectId]:
        cursor = self.col.find(
            {'content_id': content_id},
            {'_id': 1},
            session=session,
        )
        return [doc['_id'] async for doc in cursor]

    async def delete_many_by_content(
        self,
        content_id: int,
        *,
        session=None,
    ) -> int:
        result = await self.col.delete_many(
            {'content_id': content_id},
            session=session,
        )
        return result.deleted_count

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase


class ListItemsRepo:
    """Membership of contents in personal lists."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['list_items']

    async def add(self, list_id: ObjectId, content_id: int) -> bool:
        """True when the content was not in the list yet."""
        res = await self.col.update_one(
            {'list_id': list_id, 'content_id': content_id},
            {'$setOnInsert': {'created_at': datetime.now(timezone.utc)}},
            upsert=True,
        )
        return res.upserted_id is not None

    async def remove(self, list_id: ObjectId, content_id: int) -> bool:
        res = await self.col.delete_one(
            {'list_id': list_id, 'content_id': content_id})
        return res.deleted_count == 1

    async def content_ids(self, list_id: ObjectId) -> List[int]:
        """Contents of a list, most recently added first."""
        cursor = self.col.find(
            {'list_id': list_id},
            {'_id': 0, 'content_id': 1},
        ).sort([('created_at', -1), ('_id', -1)])
        return [int(doc['content_id']) async for doc in cursor]

    async def counts(self, list_ids: List[ObjectId]) -> Dict[ObjectId, int]:
        if not list_ids:
            return {}
        pipeline = [
            {'$match': {'list_id': {'$in': list_ids}}},
            {'$group': {'_id': '$list_id', 'count': {'$sum': 1}}},
        ]
        docs = await self.col.aggregate(pipeline).to_list(length=None)
        return {doc['_id']: int(doc['count']) for doc in docs}

    async def delete_many_by_list(
        self,
        list_id: ObjectId,
        *,
        session=None,
    ) -> None:
        await self.col.delete_many({'list_id': list_id}, session=session)

    async def delete_many_by_content(
        self,
        content_id: int,
        *,
        session=None,
    ) -> None:
        await self.col.delete_many({'content_id': content_id},
                                   session=session)

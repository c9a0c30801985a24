"""Mongo repository for the contents collection."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

SEQUENCE_NAME = 'contents'


class ContentsRepo:
    """CRUD helpers for catalogued movies and series."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['contents']
        self._counters = db['counters']

    async def next_id(self, *, session=None) -> int:
        """Allocate the next integer content id."""
        doc = await self._counters.find_one_and_update(
            {'_id': SEQUENCE_NAME},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        return int(doc['seq'])

    async def insert(
        self,
        fields: Dict[str, Any],
        *,
        session=None,
    ) -> int:
        """Insert a content with a fresh id; ratings start unknown."""
        content_id = await self.next_id(session=session)
        doc = {
            **fields,
            '_id': content_id,
            'user_rating': None,
            'reviews_count': 0,
            'created_at': datetime.now(timezone.utc),
        }
        await self.col.insert_one(doc, session=session)
        return content_id

    async def get_by_id(
        self,
        content_id: int,
        *,
        session=None,
    ) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({'_id': content_id}, session=session)

    async def exists(self, content_id: int, *, session=None) -> bool:
        doc = await self.col.find_one(
            {'_id': content_id},
            {'_id': 1},
            session=session,
        )
        return doc is not None

    async def get_many(
        self,
        content_ids: Iterable[int],
    ) -> List[Dict[str, Any]]:
        """Fetch several contents; order is not preserved."""
        cursor = self.col.find({'_id': {'$in': list(content_ids)}})
        return [doc async for doc in cursor]

    @staticmethod
    def _filter(
        media_type: Optional[str],
        search: Optional[str],
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if media_type:
            query['media_type'] = media_type
        if search:
            query['title'] = {'$regex': re.escape(search), '$options': 'i'}
        return query

    async def list_filtered(
        self,
        media_type: Optional[str],
        search: Optional[str],
        limit: int,
        offset: int,
    ) -> List[Dict[str, Any]]:
        """List contents, newest release first."""
        cursor = (
            self.col.find(self._filter(media_type, search))
            .sort([('release_year', -1), ('_id', -1)])
            .skip(offset)
            .limit(limit)
        )
        return [doc async for doc in cursor]

    async def count(
        self,
        media_type: Optional[str],
        search: Optional[str],
    ) -> int:
        return await self.col.count_documents(
            self._filter(media_type, search))

    async def set_user_rating(
        self,
        content_id: int,
        user_rating: Optional[float],
        reviews_count: int,
        *,
        session=None,
    ) -> bool:
        """Store the derived rating; False when the content is missing."""
        result = await self.col.update_one(
            {'_id': content_id},
            {'$set': {
                'user_rating': user_rating,
                'reviews_count': reviews_count,
            }},
            session=session,
        )
        return result.matched_count == 1

    async def replace_fields(
        self,
        content_id: int,
        fields: Dict[str, Any],
        *,
        session=None,
    ) -> Optional[Dict[str, Any]]:
        """Overwrite descriptive fields; None when the content is missing."""
        return await self.col.find_one_and_update(
            {'_id': content_id},
            {'$set': fields},
            return_document=ReturnDocument.AFTER,
            session=session,
        )

    async def delete(self, content_id: int, *, session=None) -> bool:
        result = await self.col.delete_one(
            {'_id': content_id},
            session=session,
        )
        return result.deleted_count == 1

"""Mongo repository for personal lists."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase


class ListsRepo:
    """CRUD helpers for the list headers (name, description, owner)."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['lists']

    async def insert(
        self,
        owner_id: int,
        name: str,
        description: Optional[str],
    ) -> str:
        result = await self.col.insert_one({
            'owner_id': owner_id,
            'name': name,
            'description': description,
            'created_at': datetime.now(timezone.utc),
        })
        return str(result.inserted_id)

    async def get_owned(
        self,
        list_id: ObjectId,
        owner_id: int,
        *,
        session=None,
    ) -> Optional[Dict[str, Any]]:
        """Get a list only if it belongs to ``owner_id``."""
        return await self.col.find_one(
            {'_id': list_id, 'owner_id': owner_id},
            session=session,
        )

    async def list_by_owner(self, owner_id: int) -> List[Dict[str, Any]]:
        cursor = self.col.find({'owner_id': owner_id}).sort(
            [('created_at', -1), ('_id', -1)])
        return [doc async for doc in cursor]

    async def update(
        self,
        list_id: ObjectId,
        owner_id: int,
        name: str,
        description: Optional[str],
    ) -> bool:
        result = await self.col.update_one(
            {'_id': list_id, 'owner_id': owner_id},
            {'$set': {'name': name, 'description': description}},
        )
        return result.matched_count == 1

    async def delete(
        self,
        list_id: ObjectId,
        owner_id: int,
        *,
        session=None,
    ) -> bool:
        result = await self.col.delete_one(
            {'_id': list_id, 'owner_id': owner_id},
            session=session,
        )
        return result.deleted_count == 1

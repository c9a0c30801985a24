from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase


class FavoritesRepo:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["favorites"]

    async def upsert(self, user_id: int, content_id: int) -> bool:
        """
        True when a new favorite was stored, False when it already existed.
        """
        now = datetime.now(timezone.utc)
        res = await self.col.update_one(
            {"user_id": user_id, "content_id": content_id},
            {"$setOnInsert": {"created_at": now}},
            upsert=True,
        )
        return res.upserted_id is not None

    async def delete(self, user_id: int, content_id: int) -> bool:
        res = await self.col.delete_one(
            {"user_id": user_id, "content_id": content_id})
        return res.deleted_count == 1

    async def exists(self, user_id: int, content_id: int) -> bool:
        doc = await self.col.find_one(
            {"user_id": user_id, "content_id": content_id}, {"_id": 1})
        return doc is not None

    async def list_by_user(
            self,
            user_id: int,
            limit: int,
            offset: int) -> List[Dict[str, Any]]:
        cur = (self.col.find({"user_id": user_id},
                             {"_id": 0, "content_id": 1, "created_at": 1})
               .sort([("created_at", -1), ("_id", -1)])
               .skip(offset).limit(limit))
        return [d async for d in cur]

    async def count_by_user(self, user_id: int) -> int:
        return await self.col.count_documents({"user_id": user_id})

    async def delete_many_by_content(self, content_id: int,
                                     session=None) -> None:
        await self.col.delete_many({"content_id": content_id},
                                   session=session)

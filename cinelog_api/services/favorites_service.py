"""Service layer for managing user favorites."""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cinelog_api.core.errors import ContentNotFound, StorageError
from cinelog_api.models.favorites import (
    FavoriteDeleteResponse,
    FavoriteItem,
    FavoriteListResponse,
    FavoritePutResponse,
    FavoriteStateResponse,
)
from .repositories.contents_repo import ContentsRepo
from .repositories.favorites_repo import FavoritesRepo


class FavoritesService:
    """Add, remove and list a user's favorite contents."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.repo = FavoritesRepo(db)
        self.contents = ContentsRepo(db)

    async def add_favorite(
        self,
        user_id: int,
        content_id: int,
    ) -> FavoritePutResponse:
        """Mark a content as favorite; repeating it is harmless."""
        try:
            if not await self.contents.exists(content_id):
                raise ContentNotFound(str(content_id))
            created = await self.repo.upsert(
                user_id=user_id,
                content_id=content_id,
            )
            return FavoritePutResponse(ok=True, created=created)
        except PyMongoError as error:
            raise StorageError(f'favorite_add: {error}') from error

    async def remove_favorite(
        self,
        user_id: int,
        content_id: int,
    ) -> FavoriteDeleteResponse:
        try:
            deleted = await self.repo.delete(
                user_id=user_id,
                content_id=content_id,
            )
            return FavoriteDeleteResponse(ok=True, deleted=deleted)
        except PyMongoError as error:
            raise StorageError(f'favorite_remove: {error}') from error

    async def is_favorite(
        self,
        user_id: int,
        content_id: int,
    ) -> FavoriteStateResponse:
        try:
            found = await self.repo.exists(user_id, content_id)
        except PyMongoError as error:
            raise StorageError(f'favorite_state: {error}') from error
        return FavoriteStateResponse(content_id=content_id, is_favorite=found)

    async def list_favorites(
        self,
        user_id: int,
        limit: int,
        offset: int,
    ) -> FavoriteListResponse:
        """List user favorites, most recently added first."""
        try:
            docs = await self.repo.list_by_user(
                user_id=user_id,
                limit=limit,
                offset=offset,
            )
            total = await self.repo.count_by_user(user_id=user_id)
        except PyMongoError as error:
            raise StorageError(f'favorite_list: {error}') from error
        items = [FavoriteItem(content_id=doc['content_id'],
                              created_at=doc['created_at']) for doc in docs]
        return FavoriteListResponse(items=items, total=total)

"""Service layer for the content catalog (movies and series)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cinelog_api.core.errors import ContentNotFound, Forbidden, StorageError
from cinelog_api.db.mongo import run_in_transaction
from cinelog_api.models.caller import Caller
from cinelog_api.models.contents import (
    ContentCreateRequest,
    ContentCreateResponse,
    ContentItem,
    ContentListResponse,
    ContentUpdateRequest,
    MediaType,
)
from cinelog_api.services.repositories.contents_repo import ContentsRepo
from cinelog_api.services.repositories.favorites_repo import FavoritesRepo
from cinelog_api.services.repositories.list_items_repo import ListItemsRepo
from cinelog_api.services.repositories.review_votes_repo import (
    ReviewVotesRepo,
)
from cinelog_api.services.repositories.reviews_repo import ReviewsRepo

logger = logging.getLogger(__name__)


def to_content_item(doc: Dict[str, Any]) -> ContentItem:
    return ContentItem(
        content_id=doc['_id'],
        title=doc['title'],
        media_type=doc['media_type'],
        release_year=doc.get('release_year'),
        overview=doc.get('overview'),
        poster_url=doc.get('poster_url'),
        genres=doc.get('genres') or [],
        user_rating=doc.get('user_rating'),
        external_rating=doc.get('external_rating'),
        reviews_count=int(doc.get('reviews_count', 0)),
    )


class ContentsService:
    """Read access for everyone, writes for admins."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db
        self.repo = ContentsRepo(db)
        self.reviews = ReviewsRepo(db)
        self.votes = ReviewVotesRepo(db)
        self.favorites = FavoritesRepo(db)
        self.list_items = ListItemsRepo(db)

    async def create_content(
        self,
        data: ContentCreateRequest,
        caller: Caller,
    ) -> ContentCreateResponse:
        if not caller.is_admin:
            raise Forbidden('admin only')
        fields = data.model_dump(mode='json')
        try:
            content_id = await self.repo.insert(fields)
        except PyMongoError as error:
            raise StorageError(f'content_create: {error}') from error
        logger.info('content_created', extra={'content_id': content_id})
        return ContentCreateResponse(content_id=content_id)

    async def update_content(
        self,
        content_id: int,
        data: ContentUpdateRequest,
        caller: Caller,
    ) -> ContentItem:
        """Replace title, type and the other catalog fields.

        ``user_rating`` and ``reviews_count`` belong to the reviews and are
        left as they are.
        """
        if not caller.is_admin:
            raise Forbidden('admin only')
        try:
            doc = await self.repo.replace_fields(
                content_id, data.model_dump(mode='json'))
        except PyMongoError as error:
            raise StorageError(f'content_update: {error}') from error
        if doc is None:
            raise ContentNotFound(str(content_id))
        logger.info('content_updated', extra={'content_id': content_id})
        return to_content_item(doc)

    async def get_content(self, content_id: int) -> ContentItem:
        try:
            doc = await self.repo.get_by_id(content_id)
        except PyMongoError as error:
            raise StorageError(f'content_get: {error}') from error
        if doc is None:
            raise ContentNotFound(str(content_id))
        return to_content_item(doc)

    async def list_contents(
        self,
        media_type: Optional[MediaType] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> ContentListResponse:
        kind = media_type.value if media_type else None
        try:
            docs = await self.repo.list_filtered(kind, search, limit, offset)
            total = await self.repo.count(kind, search)
        except PyMongoError as error:
            raise StorageError(f'content_list: {error}') from error
        items: List[ContentItem] = [to_content_item(d) for d in docs]
        return ContentListResponse(items=items, total=total)

    async def delete_content(self, content_id: int, caller: Caller) -> None:
        """Remove a content with its reviews, votes and memberships."""
        if not caller.is_admin:
            raise Forbidden('admin only')

        async def unit(session):
            if not await self.repo.exists(content_id, session=session):
                raise ContentNotFound(str(content_id))
            review_ids = await self.reviews.ids_by_content(
                content_id, session=session)
            await self.votes.delete_many_by_reviews(
                review_ids, session=session)
            await self.reviews.delete_many_by_content(
                content_id, session=session)
            await self.favorites.delete_many_by_content(
                content_id, session=session)
            await self.list_items.delete_many_by_content(
                content_id, session=session)
            await self.repo.delete(content_id, session=session)
            return len(review_ids)

        try:
            removed_reviews = await run_in_transaction(
                self.db, unit, name='content_delete')
        except PyMongoError as error:
            raise StorageError(f'content_delete: {error}') from error
        logger.info(
            'content_deleted',
            extra={'content_id': content_id,
                   'removed_reviews': removed_reviews})

"""Personal lists: named, owner-private collections of contents."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cinelog_api.core.errors import (
    ContentNotFound,
    Forbidden,
    ListNotFound,
    StorageError,
)
from cinelog_api.db.mongo import parse_object_id, run_in_transaction
from cinelog_api.models.caller import Caller
from cinelog_api.models.lists import (
    ListCreateResponse,
    ListDetail,
    ListItemDeleteResponse,
    ListItemPutResponse,
    ListSummary,
    ListWriteRequest,
)
from cinelog_api.services.contents_service import to_content_item
from cinelog_api.services.repositories.contents_repo import ContentsRepo
from cinelog_api.services.repositories.list_items_repo import ListItemsRepo
from cinelog_api.services.repositories.lists_repo import ListsRepo

logger = logging.getLogger(__name__)


def to_summary(doc: Dict[str, Any], items_count: int) -> ListSummary:
    return ListSummary(
        list_id=str(doc['_id']),
        owner_id=doc['owner_id'],
        name=doc['name'],
        description=doc.get('description'),
        items_count=items_count,
        created_at=doc['created_at'],
    )


class ListsService:
    """Lists are visible to their owner only; admins may browse them."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db
        self.repo = ListsRepo(db)
        self.items = ListItemsRepo(db)
        self.contents = ContentsRepo(db)

    async def _owned(self, list_id: str, owner_id: int) -> Dict[str, Any]:
        oid = parse_object_id(list_id)
        doc = None if oid is None else await self.repo.get_owned(
            oid, owner_id)
        if doc is None:
            # strangers get the same answer as for a missing list
            raise ListNotFound(list_id)
        return doc

    async def create_list(
        self,
        owner_id: int,
        data: ListWriteRequest,
    ) -> ListCreateResponse:
        try:
            list_id = await self.repo.insert(
                owner_id, data.name, data.description)
        except PyMongoError as error:
            raise StorageError(f'list_create: {error}') from error
        logger.info('list_created', extra={'list_id': list_id})
        return ListCreateResponse(list_id=list_id)

    async def lists_for_user(
        self,
        user_id: int,
        caller: Caller,
    ) -> List[ListSummary]:
        """Lists of ``user_id`` with item counts, newest first."""
        if not caller.may_act_for(user_id):
            raise Forbidden('only the owner or an admin may list')
        try:
            docs = await self.repo.list_by_owner(user_id)
            counts = await self.items.counts([d['_id'] for d in docs])
        except PyMongoError as error:
            raise StorageError(f'list_list: {error}') from error
        return [to_summary(d, counts.get(d['_id'], 0)) for d in docs]

    async def get_list(self, list_id: str, caller: Caller) -> ListDetail:
        try:
            doc = await self._owned(list_id, caller.user_id)
            content_ids = await self.items.content_ids(doc['_id'])
            by_id = {c['_id']: c
                     for c in await self.contents.get_many(content_ids)}
        except PyMongoError as error:
            raise StorageError(f'list_get: {error}') from error
        summary = to_summary(doc, len(content_ids))
        return ListDetail(
            **summary.model_dump(),
            contents=[to_content_item(by_id[cid])
                      for cid in content_ids if cid in by_id],
        )

    async def update_list(
        self,
        list_id: str,
        data: ListWriteRequest,
        caller: Caller,
    ) -> None:
        try:
            doc = await self._owned(list_id, caller.user_id)
            await self.repo.update(
                doc['_id'], caller.user_id, data.name, data.description)
        except PyMongoError as error:
            raise StorageError(f'list_update: {error}') from error

    async def delete_list(self, list_id: str, caller: Caller) -> None:
        """Delete a list together with its items."""
        oid = parse_object_id(list_id)
        if oid is None:
            raise ListNotFound(list_id)

        async def unit(session):
            if await self.repo.get_owned(
                    oid, caller.user_id, session=session) is None:
                raise ListNotFound(list_id)
            await self.items.delete_many_by_list(oid, session=session)
            await self.repo.delete(oid, caller.user_id, session=session)

        try:
            await run_in_transaction(self.db, unit, name='list_delete')
        except PyMongoError as error:
            raise StorageError(f'list_delete: {error}') from error
        logger.info('list_deleted', extra={'list_id': list_id})

    async def add_content(
        self,
        list_id: str,
        content_id: int,
        caller: Caller,
    ) -> ListItemPutResponse:
        try:
            doc = await self._owned(list_id, caller.user_id)
            if not await self.contents.exists(content_id):
                raise ContentNotFound(str(content_id))
            created = await self.items.add(doc['_id'], content_id)
        except PyMongoError as error:
            raise StorageError(f'list_add: {error}') from error
        return ListItemPutResponse(ok=True, created=created)

    async def remove_content(
        self,
        list_id: str,
        content_id: int,
        caller: Caller,
    ) -> ListItemDeleteResponse:
        try:
            doc = await self._owned(list_id, caller.user_id)
            deleted = await self.items.remove(doc['_id'], content_id)
        except PyMongoError as error:
            raise StorageError(f'list_remove: {error}') from error
        return ListItemDeleteResponse(ok=True, deleted=deleted)

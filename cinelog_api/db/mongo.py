import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from cinelog_api.core.config import settings
from cinelog_api.core.errors import ConflictDuplicate

logger = logging.getLogger(__name__)

T = TypeVar("T")

_client: AsyncIOMotorClient | None = None


async def get_client() -> AsyncIOMotorClient:
    """
    Singleton Motor client with explicit timeouts and pool limits.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongo_dsn,
            appname="cinelog-api",
            tz_aware=True,
            maxPoolSize=50,
            minPoolSize=0,
            serverSelectionTimeoutMS=3000,
            connectTimeoutMS=3000,
            socketTimeoutMS=5000,
            retryWrites=True,
        )
        # fail fast in the logs, but do not block startup
        try:
            await _client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("mongo_ping_failed", extra={"err": str(e)})
    return _client


async def get_mongo_db() -> AsyncIOMotorDatabase:
    client = await get_client()
    return client[settings.mongo_db]


def parse_object_id(value) -> ObjectId | None:
    """Return an ObjectId, or None for anything that cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if value is None:
        # ObjectId(None) would mint a fresh id
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


async def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


@asynccontextmanager
async def transaction(db):
    """Yield a session bound to an open transaction, or None when disabled.

    Repositories accept ``session=None`` and then run each statement on its
    own, which is what single-node deployments and tests get.
    """
    if not settings.mongo_transactions:
        yield None
        return
    async with await db.client.start_session() as session:
        async with session.start_transaction():
            yield session


def _is_retryable(error: PyMongoError) -> bool:
    if isinstance(error, DuplicateKeyError):
        return True
    return error.has_error_label("TransientTransactionError")


async def run_in_transaction(
        db,
        unit: Callable[[Any], Awaitable[T]],
        *,
        name: str) -> T:
    """Run ``unit(session)`` as one atomic unit of work.

    A losing uniqueness race or a transient write conflict aborts the whole
    unit and replays it, so the replay observes the winner's row and takes
    the other branch. Domain errors raised by ``unit`` are not retried.
    """
    attempts = settings.mongo_txn_retries
    for attempt in range(1, attempts + 1):
        try:
            async with transaction(db) as session:
                return await unit(session)
        except PyMongoError as error:
            if not _is_retryable(error):
                raise
            logger.warning(
                "unit_of_work_retry",
                extra={"unit": name, "attempt": attempt, "err": str(error)})
    raise ConflictDuplicate(name)


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the uniqueness constraints and listing indexes."""
    await db["contents"].create_index(
        [("media_type", ASCENDING), ("release_year", DESCENDING)],
        name="contents_type_year")

    await db["reviews"].create_index(
        [("author_id", ASCENDING), ("content_id", ASCENDING)],
        unique=True, name="reviews_author_content")
    await db["reviews"].create_index(
        [("content_id", ASCENDING), ("created_at", DESCENDING)],
        name="reviews_content_created_desc")
    await db["reviews"].create_index(
        [("content_id", ASCENDING),
         ("useful_votes", DESCENDING),
         ("created_at", DESCENDING)],
        name="reviews_content_useful_desc")

    await db["review_votes"].create_index(
        [("review_id", ASCENDING), ("voter_id", ASCENDING)],
        unique=True, name="review_votes_review_voter")

    await db["favorites"].create_index(
        [("user_id", ASCENDING), ("content_id", ASCENDING)],
        unique=True, name="favorites_user_content")
    await db["favorites"].create_index(
        [("user_id", ASCENDING), ("created_at", DESCENDING)],
        name="favorites_user_created_desc")

    await db["lists"].create_index(
        [("owner_id", ASCENDING), ("created_at", DESCENDING)],
        name="lists_owner_created_desc")
    await db["list_items"].create_index(
        [("list_id", ASCENDING), ("content_id", ASCENDING)],
        unique=True, name="list_items_list_content")

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from cinelog_api.core.context import set_caller_id
from cinelog_api.db.mongo import get_mongo_db
from cinelog_api.models.caller import Caller
from cinelog_api.services.contents_service import ContentsService
from cinelog_api.services.favorites_service import FavoritesService
from cinelog_api.services.lists_service import ListsService
from cinelog_api.services.rating_aggregator import RatingAggregator
from cinelog_api.services.reviews_service import ReviewsService
from cinelog_api.services.votes_service import VotesService

TRUTHY = {"1", "true", "yes"}


def parse_user_id(raw: str) -> int:
    try:
        user_id = int(raw)
    except (TypeError, ValueError):
        user_id = 0
    if user_id < 1:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid X-User-Id")
    return user_id


async def caller_context(
        x_user_id: str = Header(..., alias="X-User-Id"),
        x_user_admin: Optional[str] = Header(None, alias="X-User-Admin"),
) -> Caller:
    """Identity resolved upstream by the identity provider."""
    caller = Caller(
        user_id=parse_user_id(x_user_id),
        is_admin=(x_user_admin or "").strip().lower() in TRUTHY,
    )
    set_caller_id(caller.user_id)
    return caller


async def get_db() -> AsyncIOMotorDatabase:
    return await get_mongo_db()


async def get_rating_aggregator(db=Depends(get_db)) -> RatingAggregator:
    return RatingAggregator(db)


async def get_reviews_service(
        db=Depends(get_db),
        aggregator: RatingAggregator = Depends(get_rating_aggregator),
) -> ReviewsService:
    return ReviewsService(db, aggregator)


async def get_votes_service(db=Depends(get_db)) -> VotesService:
    return VotesService(db)


async def get_contents_service(db=Depends(get_db)) -> ContentsService:
    return ContentsService(db)


async def get_favorites_service(db=Depends(get_db)) -> FavoritesService:
    return FavoritesService(db)


async def get_lists_service(db=Depends(get_db)) -> ListsService:
    return ListsService(db)

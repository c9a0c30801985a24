from http import HTTPStatus
from fastapi import APIRouter, Depends, Query

from cinelog_api.api.http_utils import handle_runtime_errors
from cinelog_api.dependencies import caller_context, get_favorites_service
from cinelog_api.models.caller import Caller
from cinelog_api.services.favorites_service import FavoritesService
from cinelog_api.models.favorites import (
    FavoritePutResponse, FavoriteDeleteResponse, FavoriteListResponse,
    FavoriteStateResponse,
)

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])


@router.put(
    "/{content_id}",
    response_model=FavoritePutResponse,
    status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def add_favorite(
    content_id: int,
    caller: Caller = Depends(caller_context),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.add_favorite(user_id=caller.user_id,
                                  content_id=content_id)


@router.delete(
    "/{content_id}",
    response_model=FavoriteDeleteResponse,
    status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def remove_favorite(
    content_id: int,
    caller: Caller = Depends(caller_context),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.remove_favorite(user_id=caller.user_id,
                                     content_id=content_id)


@router.get(
    "/{content_id}",
    response_model=FavoriteStateResponse,
    status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def favorite_state(
    content_id: int,
    caller: Caller = Depends(caller_context),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.is_favorite(user_id=caller.user_id,
                                 content_id=content_id)


@router.get(
    "",
    response_model=FavoriteListResponse,
    status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_favorites(
    caller: Caller = Depends(caller_context),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    svc: FavoritesService = Depends(get_favorites_service),
):
    return await svc.list_favorites(
        user_id=caller.user_id, limit=limit, offset=offset)

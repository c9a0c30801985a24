from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from cinelog_api.api.http_utils import handle_runtime_errors
from cinelog_api.dependencies import caller_context, get_contents_service
from cinelog_api.models.caller import Caller
from cinelog_api.models.contents import (
    ContentCreateRequest,
    ContentCreateResponse,
    ContentItem,
    ContentListResponse,
    ContentUpdateRequest,
    MediaType,
)
from cinelog_api.services.contents_service import ContentsService

router = APIRouter(prefix="/api/v1/contents", tags=["contents"])


@router.get("", response_model=ContentListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_contents(
    media_type: Optional[MediaType] = Query(None),
    search: Optional[str] = Query(None, min_length=1, max_length=200),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    svc: ContentsService = Depends(get_contents_service),
):
    return await svc.list_contents(media_type=media_type,
                                   search=search,
                                   limit=limit,
                                   offset=offset)


@router.post("", response_model=ContentCreateResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_content(
    body: ContentCreateRequest,
    caller: Caller = Depends(caller_context),
    svc: ContentsService = Depends(get_contents_service),
):
    return await svc.create_content(data=body, caller=caller)


@router.get("/{content_id}", response_model=ContentItem,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_content(
    content_id: int,
    svc: ContentsService = Depends(get_contents_service),
):
    return await svc.get_content(content_id)


@router.put("/{content_id}", response_model=ContentItem,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def update_content(
    content_id: int,
    body: ContentUpdateRequest,
    caller: Caller = Depends(caller_context),
    svc: ContentsService = Depends(get_contents_service),
):
    return await svc.update_content(content_id=content_id,
                                    data=body,
                                    caller=caller)


@router.delete("/{content_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_content(
    content_id: int,
    caller: Caller = Depends(caller_context),
    svc: ContentsService = Depends(get_contents_service),
):
    await svc.delete_content(content_id=content_id, caller=caller)
    return Response(status_code=HTTPStatus.NO_CONTENT)

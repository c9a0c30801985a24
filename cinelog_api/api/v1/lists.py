from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Response

from cinelog_api.api.http_utils import handle_runtime_errors
from cinelog_api.dependencies import caller_context, get_lists_service
from cinelog_api.models.caller import Caller
from cinelog_api.models.lists import (
    ListCreateResponse,
    ListDetail,
    ListItemDeleteResponse,
    ListItemPutResponse,
    ListSummary,
    ListWriteRequest,
)
from cinelog_api.services.lists_service import ListsService

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])


@router.post("", response_model=ListCreateResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_list(
    body: ListWriteRequest,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    return await svc.create_list(owner_id=caller.user_id, data=body)


@router.get("", response_model=List[ListSummary],
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def my_lists(
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    return await svc.lists_for_user(user_id=caller.user_id, caller=caller)


@router.get("/users/{user_id}", response_model=List[ListSummary],
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def user_lists(
    user_id: int,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    return await svc.lists_for_user(user_id=user_id, caller=caller)


@router.get("/{list_id}", response_model=ListDetail,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_list(
    list_id: str,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    return await svc.get_list(list_id=list_id, caller=caller)


@router.put("/{list_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def update_list(
    list_id: str,
    body: ListWriteRequest,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    await svc.update_list(list_id=list_id, data=body, caller=caller)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{list_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_list(
    list_id: str,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    await svc.delete_list(list_id=list_id, caller=caller)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.put("/{list_id}/contents/{content_id}",
            response_model=ListItemPutResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def add_to_list(
    list_id: str,
    content_id: int,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    return await svc.add_content(list_id=list_id,
                                 content_id=content_id,
                                 caller=caller)


@router.delete("/{list_id}/contents/{content_id}",
               response_model=ListItemDeleteResponse,
               status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def remove_from_list(
    list_id: str,
    content_id: int,
    caller: Caller = Depends(caller_context),
    svc: ListsService = Depends(get_lists_service),
):
    return await svc.remove_content(list_id=list_id,
                                    content_id=content_id,
                                    caller=caller)

from http import HTTPStatus

from fastapi import APIRouter, Depends, Query

from cinelog_api.api.http_utils import handle_runtime_errors
from cinelog_api.dependencies import caller_context, get_reviews_service
from cinelog_api.models.caller import Caller
from cinelog_api.models.reviews import (
    ReviewItem,
    ReviewListResponse,
    ReviewUpdateRequest,
)
from cinelog_api.services.reviews_service import ReviewsService

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/reviews",
            response_model=ReviewListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_all_reviews(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    caller: Caller = Depends(caller_context),
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.list_all(caller=caller, limit=limit, offset=offset)


@router.put("/reviews/{review_id}",
            response_model=ReviewItem,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def moderate_review(
    review_id: str,
    body: ReviewUpdateRequest,
    caller: Caller = Depends(caller_context),
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.admin_update_review(review_id=review_id,
                                         score=body.score,
                                         comment=body.comment,
                                         caller=caller)

from http import HTTPStatus
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from cinelog_api.api.http_utils import handle_runtime_errors
from cinelog_api.dependencies import (
    caller_context,
    get_reviews_service,
    get_votes_service,
)
from cinelog_api.models.caller import Caller
from cinelog_api.models.reviews import (
    ReviewItem,
    ReviewListResponse,
    ReviewSort,
    ReviewSubmitRequest,
    ReviewSubmitResponse,
)
from cinelog_api.models.votes import VoteStateResponse, VoteToggleResponse
from cinelog_api.services.reviews_service import ReviewsService
from cinelog_api.services.votes_service import VotesService

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


@router.post("", response_model=ReviewSubmitResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def submit_review(
    body: ReviewSubmitRequest,
    response: Response,
    caller: Caller = Depends(caller_context),
    svc: ReviewsService = Depends(get_reviews_service),
):
    result = await svc.submit_review(content_id=body.content_id,
                                     author_id=caller.user_id,
                                     score=body.score,
                                     comment=body.comment)
    if not result.created:
        # resubmission overwrote the caller's existing review
        response.status_code = HTTPStatus.OK
    return result


@router.get("/contents/{content_id}",
            response_model=ReviewListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_reviews_for_content(
    content_id: int,
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort: ReviewSort = Query(ReviewSort.new),
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.list_by_content(content_id=content_id,
                                     limit=limit,
                                     offset=offset,
                                     sort=sort)


@router.get("/authors/{author_id}",
            response_model=ReviewListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def list_reviews_for_author(
    author_id: int,
    caller: Caller = Depends(caller_context),
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.list_by_author(author_id=author_id, caller=caller)


@router.get("/{review_id}", response_model=ReviewItem,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def get_review(
    review_id: str = Path(..., description="Mongo ObjectId"),
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.get_review(review_id)


@router.delete("/{review_id}",
               status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_review(
    review_id: str,
    caller: Caller = Depends(caller_context),
    svc: ReviewsService = Depends(get_reviews_service),
):
    await svc.delete_review(review_id=review_id, caller=caller)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/{review_id}/vote",
             response_model=VoteToggleResponse,
             status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def toggle_vote(
    review_id: str,
    caller: Caller = Depends(caller_context),
    svc: VotesService = Depends(get_votes_service),
):
    return await svc.toggle_vote(review_id=review_id,
                                 voter_id=caller.user_id)


@router.get("/{review_id}/vote",
            response_model=VoteStateResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors()
async def has_voted(
    review_id: str,
    caller: Caller = Depends(caller_context),
    svc: VotesService = Depends(get_votes_service),
):
    return await svc.has_voted(review_id=review_id,
                               voter_id=caller.user_id)

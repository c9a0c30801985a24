from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt

MIN_SCORE = 1
MAX_SCORE = 10


class ReviewSubmitRequest(BaseModel):
    content_id: int
    score: StrictInt = Field(ge=MIN_SCORE, le=MAX_SCORE)
    comment: Optional[str] = Field(default=None, max_length=10_000)


class ReviewSubmitResponse(BaseModel):
    review_id: str
    created: bool


class ReviewUpdateRequest(BaseModel):
    score: StrictInt = Field(ge=MIN_SCORE, le=MAX_SCORE)
    comment: Optional[str] = Field(default=None, max_length=10_000)


class ReviewItem(BaseModel):
    review_id: str
    content_id: int
    author_id: int
    score: int
    comment: Optional[str] = None
    useful_votes: int
    created_at: datetime


class ReviewListResponse(BaseModel):
    items: List[ReviewItem]
    total: int


class ReviewSort(str, Enum):
    new = "new"
    top = "top"


class RatingSummary(BaseModel):
    content_id: int
    user_rating: Optional[float]  # rounded, as stored on the content
    mean: Optional[float]         # full precision
    reviews_count: int

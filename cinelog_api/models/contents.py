from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class MediaType(str, Enum):
    movie = "movie"
    series = "series"


class ContentCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    media_type: MediaType
    release_year: Optional[int] = Field(default=None, ge=1870, le=2100)
    overview: Optional[str] = None
    poster_url: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    # rating reported by the external catalog, independent of reviews
    external_rating: Optional[float] = Field(default=None, ge=0, le=10)


class ContentUpdateRequest(ContentCreateRequest):
    """Full replacement of the descriptive fields; ratings are derived."""


class ContentCreateResponse(BaseModel):
    content_id: int


class ContentItem(BaseModel):
    content_id: int
    title: str
    media_type: MediaType
    release_year: Optional[int] = None
    overview: Optional[str] = None
    poster_url: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    user_rating: Optional[float] = None  # None = no reviews yet
    external_rating: Optional[float] = None
    reviews_count: int = 0


class ContentListResponse(BaseModel):
    items: List[ContentItem]
    total: int

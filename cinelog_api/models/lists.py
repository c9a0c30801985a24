from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from cinelog_api.models.contents import ContentItem


class ListWriteRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2_000)


class ListCreateResponse(BaseModel):
    list_id: str


class ListSummary(BaseModel):
    list_id: str
    owner_id: int
    name: str
    description: Optional[str] = None
    items_count: int = 0
    created_at: datetime


class ListDetail(ListSummary):
    contents: List[ContentItem] = Field(default_factory=list)


class ListItemPutResponse(BaseModel):
    ok: bool
    created: bool


class ListItemDeleteResponse(BaseModel):
    ok: bool
    deleted: bool

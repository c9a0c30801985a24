from datetime import datetime
from typing import List

from pydantic import BaseModel


class FavoritePutResponse(BaseModel):
    ok: bool
    created: bool


class FavoriteDeleteResponse(BaseModel):
    ok: bool
    deleted: bool


class FavoriteStateResponse(BaseModel):
    content_id: int
    is_favorite: bool


class FavoriteItem(BaseModel):
    content_id: int
    created_at: datetime


class FavoriteListResponse(BaseModel):
    items: List[FavoriteItem]
    total: int

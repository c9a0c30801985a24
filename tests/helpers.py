import itertools
from typing import Dict

from httpx import AsyncClient

ADMIN_ID = 1
_user_ids = itertools.count(100)


def new_user() -> int:
    return next(_user_ids)


def uid_header(user_id: int) -> Dict[str, str]:
    return {"X-User-Id": str(user_id)}


def admin_header(user_id: int = ADMIN_ID) -> Dict[str, str]:
    return {"X-User-Id": str(user_id), "X-User-Admin": "true"}


async def new_content(client: AsyncClient,
                      title: str = "Heat",
                      media_type: str = "movie",
                      release_year: int = 1995) -> int:
    r = await client.post("/api/v1/contents",
                          json={"title": title,
                                "media_type": media_type,
                                "release_year": release_year},
                          headers=admin_header())
    assert r.status_code == 201
    return r.json()["content_id"]


async def read_content(client: AsyncClient, content_id: int) -> dict:
    r = await client.get(f"/api/v1/contents/{content_id}")
    assert r.status_code == 200
    return r.json()


async def submit(client: AsyncClient, content_id: int, user_id: int,
                 score, comment=None):
    return await client.post("/api/v1/reviews",
                             json={"content_id": content_id,
                                   "score": score,
                                   "comment": comment},
                             headers=uid_header(user_id))

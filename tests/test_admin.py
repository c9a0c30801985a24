import pytest

from tests.helpers import (
    admin_header,
    new_content,
    new_user,
    read_content,
    submit,
    uid_header,
)

BASE = "/api/v1/admin/reviews"


async def test_moderation_queue_is_admin_only(client):
    content = await new_content(client)
    for score in (2, 9):
        await submit(client, content, new_user(), score)

    r = await client.get(BASE, headers=admin_header())
    assert r.status_code == 200 and r.json()["total"] == 2

    r = await client.get(BASE, headers=uid_header(new_user()))
    assert r.status_code == 403


async def test_admin_edit_recomputes_rating_and_keeps_date(client):
    content, author = await new_content(client), new_user()
    rid = (await submit(client, content, author, 2, "spam")).json()[
        "review_id"]
    before = (await client.get(f"/api/v1/reviews/{rid}")).json()

    r = await client.put(f"{BASE}/{rid}",
                         json={"score": 6, "comment": None},
                         headers=admin_header())

    assert r.status_code == 200
    assert r.json()["score"] == 6 and r.json()["comment"] is None
    assert r.json()["created_at"] == before["created_at"]
    assert (await read_content(client, content))["user_rating"] == 6.0


async def test_admin_edit_validation_and_authorization(client):
    content, author = await new_content(client), new_user()
    rid = (await submit(client, content, author, 5)).json()["review_id"]

    r = await client.put(f"{BASE}/{rid}", json={"score": 11},
                         headers=admin_header())
    assert r.status_code == 422

    r = await client.put(f"{BASE}/{rid}", json={"score": 6},
                         headers=uid_header(author))
    assert r.status_code == 403

    r = await client.put(f"{BASE}/{'0' * 24}", json={"score": 6},
                         headers=admin_header())
    assert r.status_code == 404


@pytest.mark.parametrize("score", [True, "8", 8.0, 0])
async def test_admin_edit_refuses_non_integer_scores(client, score):
    content, author = await new_content(client), new_user()
    rid = (await submit(client, content, author, 5)).json()["review_id"]

    r = await client.put(f"{BASE}/{rid}", json={"score": score},
                         headers=admin_header())

    assert r.status_code == 422
    r = await client.get(f"/api/v1/reviews/{rid}")
    assert r.json()["score"] == 5
    assert (await read_content(client, content))["user_rating"] == 5.0

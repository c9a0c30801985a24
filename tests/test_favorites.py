from tests.helpers import new_content, new_user, uid_header

BASE = "/api/v1/favorites"


async def test_favorite_create_returns_created_true(client):
    user, content = new_user(), await new_content(client)
    r = await client.put(f"{BASE}/{content}", headers=uid_header(user))
    assert r.status_code == 200 and r.json() == {"ok": True, "created": True}


async def test_favorite_put_twice_is_not_created_again(client):
    user, content = new_user(), await new_content(client)
    await client.put(f"{BASE}/{content}", headers=uid_header(user))
    r = await client.put(f"{BASE}/{content}", headers=uid_header(user))
    assert r.status_code == 200 and r.json() == {"ok": True, "created": False}


async def test_favorite_unknown_content_returns_404(client):
    r = await client.put(f"{BASE}/98765", headers=uid_header(new_user()))
    assert r.status_code == 404


async def test_favorite_state_follows_put_and_delete(client):
    user, content = new_user(), await new_content(client)

    r = await client.get(f"{BASE}/{content}", headers=uid_header(user))
    assert r.json() == {"content_id": content, "is_favorite": False}

    await client.put(f"{BASE}/{content}", headers=uid_header(user))
    r = await client.get(f"{BASE}/{content}", headers=uid_header(user))
    assert r.json()["is_favorite"] is True


async def test_favorites_pagination_pages_do_not_overlap(client):
    user = new_user()
    contents = [await new_content(client, f"T{i}") for i in range(5)]
    for cid in contents:
        await client.put(f"{BASE}/{cid}", headers=uid_header(user))

    r1 = await client.get(f"{BASE}?limit=2&offset=0", headers=uid_header(user))
    r2 = await client.get(f"{BASE}?limit=2&offset=2", headers=uid_header(user))

    ids1 = {i["content_id"] for i in r1.json()["items"]}
    ids2 = {i["content_id"] for i in r2.json()["items"]}
    assert ids1.isdisjoint(ids2)
    assert r1.json()["total"] == 5


async def test_favorite_delete_then_delete_again_deleted_false(client):
    user, content = new_user(), await new_content(client)
    await client.put(f"{BASE}/{content}", headers=uid_header(user))
    r1 = await client.delete(f"{BASE}/{content}", headers=uid_header(user))
    r2 = await client.delete(f"{BASE}/{content}", headers=uid_header(user))
    assert r1.json() == {"ok": True, "deleted": True}
    assert r2.json() == {"ok": True, "deleted": False}

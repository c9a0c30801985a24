import pytest
from fastapi import HTTPException

from cinelog_api.dependencies import caller_context, parse_user_id


@pytest.mark.parametrize("raw", ["not-a-number", "0", "-3", ""])
def test_parse_user_id_invalid_returns_422(raw):
    with pytest.raises(HTTPException) as e:
        parse_user_id(raw)
    assert e.value.status_code == 422


@pytest.mark.parametrize("flag, is_admin", [
    (None, False), ("false", False), ("true", True),
    ("1", True), ("YES", True), ("nope", False),
])
async def test_caller_context_admin_flag(flag, is_admin):
    caller = await caller_context(x_user_id="7", x_user_admin=flag)
    assert caller.user_id == 7 and caller.is_admin is is_admin


async def test_missing_user_id_header_returns_422_on_endpoint(client):
    r = await client.put("/api/v1/favorites/1")
    assert r.status_code == 422


async def test_health_and_request_id_echo(client):
    r = await client.get("/health", headers={"X-Request-Id": "abc123"})
    assert r.status_code == 200 and r.json() == {"status": "ok"}
    assert r.headers["X-Request-Id"] == "abc123"

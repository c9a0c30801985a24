"""Tests for usefulness votes: toggle law, self votes and counters."""

from __future__ import annotations

import pytest
from bson import ObjectId

from tests.helpers import new_content, new_user, submit, uid_header

BASE = "/api/v1/reviews"


async def _review(client, author: int) -> str:
    content = await new_content(client)
    r = await submit(client, content, author, 7)
    return r.json()["review_id"]


async def test_toggle_vote_on_and_off(client):
    u1, u2 = new_user(), new_user()
    rid = await _review(client, u1)

    r = await client.post(f"{BASE}/{rid}/vote", headers=uid_header(u2))
    assert r.status_code == 200
    assert r.json() == {"review_id": rid, "voted": True, "useful_votes": 1}

    r = await client.post(f"{BASE}/{rid}/vote", headers=uid_header(u2))
    assert r.json() == {"review_id": rid, "voted": False, "useful_votes": 0}


async def test_self_vote_is_rejected_and_counter_untouched(client):
    u1 = new_user()
    rid = await _review(client, u1)

    r = await client.post(f"{BASE}/{rid}/vote", headers=uid_header(u1))

    assert r.status_code == 400
    assert r.json()["detail"] == "self_vote_forbidden"
    review = (await client.get(f"{BASE}/{rid}")).json()
    assert review["useful_votes"] == 0


@pytest.mark.parametrize("calls, voted, useful", [
    (1, True, 1),
    (2, False, 0),
    (3, True, 1),
    (4, False, 0),
])
async def test_toggle_parity(client, calls, voted, useful):
    author, voter = new_user(), new_user()
    rid = await _review(client, author)

    for _ in range(calls):
        r = await client.post(f"{BASE}/{rid}/vote",
                              headers=uid_header(voter))

    assert r.json()["voted"] is voted
    assert r.json()["useful_votes"] == useful
    state = await client.get(f"{BASE}/{rid}/vote", headers=uid_header(voter))
    assert state.json() == {"review_id": rid, "voted": voted}


async def test_counter_matches_number_of_voters(client, db):
    author = new_user()
    rid = await _review(client, author)
    voters = [new_user() for _ in range(4)]
    for v in voters:
        await client.post(f"{BASE}/{rid}/vote", headers=uid_header(v))
    await client.post(f"{BASE}/{rid}/vote", headers=uid_header(voters[0]))

    review = (await client.get(f"{BASE}/{rid}")).json()
    rows = await db["review_votes"].count_documents(
        {"review_id": ObjectId(rid)})
    assert review["useful_votes"] == rows == 3


async def test_has_voted_initially_false(client):
    author, voter = new_user(), new_user()
    rid = await _review(client, author)

    r = await client.get(f"{BASE}/{rid}/vote", headers=uid_header(voter))

    assert r.status_code == 200 and r.json()["voted"] is False


async def test_vote_on_unknown_review_returns_404(client):
    user = new_user()
    r = await client.post(f"{BASE}/{ObjectId()}/vote", headers=uid_header(user))
    assert r.status_code == 404
    r = await client.get(f"{BASE}/{ObjectId()}/vote", headers=uid_header(user))
    assert r.status_code == 404


async def test_deleting_review_drops_its_votes(client, db):
    author, voter = new_user(), new_user()
    rid = await _review(client, author)
    await client.post(f"{BASE}/{rid}/vote", headers=uid_header(voter))

    await client.delete(f"{BASE}/{rid}", headers=uid_header(author))

    assert await db["review_votes"].count_documents(
        {"review_id": ObjectId(rid)}) == 0


async def test_editing_review_keeps_useful_votes(client):
    content, author, voter = await new_content(client), new_user(), new_user()
    rid = (await submit(client, content, author, 5)).json()["review_id"]
    await client.post(f"{BASE}/{rid}/vote", headers=uid_header(voter))

    await submit(client, content, author, 6)

    review = (await client.get(f"{BASE}/{rid}")).json()
    assert review["score"] == 6 and review["useful_votes"] == 1

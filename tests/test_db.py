import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, OperationFailure

from cinelog_api.core.config import settings
from cinelog_api.core.errors import ConflictDuplicate, ReviewNotFound
from cinelog_api.db.mongo import parse_object_id, run_in_transaction


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(oid) is oid
    assert parse_object_id(str(oid)) == oid
    assert parse_object_id("xyz") is None
    assert parse_object_id(None) is None
    assert parse_object_id(12) is None


async def test_unit_replayed_after_duplicate_key(db):
    calls = []

    async def unit(session):
        calls.append(session)
        if len(calls) == 1:
            raise DuplicateKeyError("E11000 duplicate key")
        return "second branch"

    assert await run_in_transaction(db, unit, name="t") == "second branch"
    assert calls == [None, None]


async def test_unit_gives_up_with_conflict(db, monkeypatch):
    monkeypatch.setattr(settings, "mongo_txn_retries", 2)
    calls = []

    async def unit(session):
        calls.append(1)
        raise DuplicateKeyError("E11000 duplicate key")

    with pytest.raises(ConflictDuplicate):
        await run_in_transaction(db, unit, name="t")
    assert len(calls) == 2


async def test_non_retryable_errors_propagate(db):
    async def storage_failure(session):
        raise OperationFailure("disk full")

    async def domain_failure(session):
        raise ReviewNotFound("r")

    with pytest.raises(OperationFailure):
        await run_in_transaction(db, storage_failure, name="t")
    with pytest.raises(ReviewNotFound):
        await run_in_transaction(db, domain_failure, name="t")


async def test_unique_indexes_reject_duplicates(db):
    await db["reviews"].insert_one({"author_id": 1, "content_id": 1})
    with pytest.raises(DuplicateKeyError):
        await db["reviews"].insert_one({"author_id": 1, "content_id": 1})

    rid = ObjectId()
    await db["review_votes"].insert_one({"review_id": rid, "voter_id": 2})
    with pytest.raises(DuplicateKeyError):
        await db["review_votes"].insert_one({"review_id": rid, "voter_id": 2})


class RecordingTransaction:
    def __init__(self, events):
        self.events = events

    async def __aenter__(self):
        self.events.append("txn_enter")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # an exception leaving this block aborts the transaction
        self.events.append(("txn_exit", exc_type))
        return False


class RecordingSession:
    def __init__(self, events):
        self.events = events

    def start_transaction(self):
        self.events.append("start_transaction")
        return RecordingTransaction(self.events)

    async def __aenter__(self):
        self.events.append("session_enter")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.events.append(("session_exit", exc_type))
        return False


class RecordingClient:
    def __init__(self):
        self.events = []
        self.sessions = []

    async def start_session(self):
        self.events.append("start_session")
        session = RecordingSession(self.events)
        self.sessions.append(session)
        return session


class RecordingDb:
    def __init__(self):
        self.client = RecordingClient()


@pytest.fixture
def transactional(monkeypatch):
    monkeypatch.setattr(settings, "mongo_transactions", True)
    return RecordingDb()


async def test_unit_runs_inside_live_transaction(transactional):
    seen = []

    async def unit(session):
        seen.append(session)
        return "done"

    assert await run_in_transaction(transactional, unit, name="t") == "done"
    assert seen == transactional.client.sessions
    assert transactional.client.events == [
        "start_session", "session_enter", "start_transaction", "txn_enter",
        ("txn_exit", None), ("session_exit", None),
    ]


async def test_domain_error_leaves_transaction_with_exception(transactional):
    async def unit(session):
        raise ReviewNotFound("r")

    with pytest.raises(ReviewNotFound):
        await run_in_transaction(transactional, unit, name="t")

    events = transactional.client.events
    assert ("txn_exit", ReviewNotFound) in events
    assert events.count("start_session") == 1


async def test_duplicate_key_replays_in_a_fresh_transaction(transactional):
    async def unit(session):
        if len(transactional.client.sessions) == 1:
            raise DuplicateKeyError("E11000 duplicate key")
        return session

    session = await run_in_transaction(transactional, unit, name="t")

    first, second = transactional.client.sessions
    assert session is second and first is not second
    assert ("txn_exit", DuplicateKeyError) in transactional.client.events
    assert transactional.client.events[-2:] == [
        ("txn_exit", None), ("session_exit", None)]

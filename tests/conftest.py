import uuid

import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from cinelog_api.core.config import settings
from cinelog_api.db.mongo import ensure_indexes
from cinelog_api.dependencies import get_db
from cinelog_api.main import app


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    # in-memory Mongo has no sessions; run each statement on its own
    monkeypatch.setattr(settings, "mongo_transactions", False)
    monkeypatch.setattr(settings, "sentry_dsn", "")


@pytest.fixture
async def db():
    """Fresh in-memory database with production indexes."""
    database = AsyncMongoMockClient()[f"cinelog_test_{uuid.uuid4().hex}"]
    await ensure_indexes(database)
    return database


@pytest.fixture
async def client(db):
    async def override_db():
        return db

    app.dependency_overrides[get_db] = override_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport,
                           base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

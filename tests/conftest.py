import os

# до импорта приложения: engine создаётся при импорте community_hub.common.db
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_community_hub.db"
os.environ["APP_ENV"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient

from community_hub.common.db import Base, engine, import_models
from community_hub.main import app


@pytest.fixture(autouse=True)
async def reset_db():
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_submission(client):
    async def _make(submission_id="s1", **overrides):
        payload = {
            "id": submission_id,
            "userEmail": "owner@example.org",
            "fileName": "photo.jpg",
            "fileType": "image",
            "fileSize": 1024,
        }
        payload.update(overrides)
        resp = await client.post("/submissions", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_admin(client):
    async def _make(email="mod@example.org", role="validator_admin", status=None, password="secret-pass"):
        payload = {
            "name": email.split("@")[0].title(),
            "email": email,
            "password": password,
            "adminRole": role,
            "country": "KZ",
        }
        if status:
            payload["accountStatus"] = status
        resp = await client.post("/admin/register", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["admin"]

    return _make

import pytest

from database import Database
from settings import settings


@pytest.fixture
def connect_calls(monkeypatch):
    calls = []

    async def fake_connect(database_url, database_name):
        calls.append((database_url, database_name))
        Database._initialized = True

    Database._initialized = False
    monkeypatch.setattr(Database, "connect_db", fake_connect)
    return calls


async def test_health_does_not_connect_lazily(client, connect_calls):
    response = await client.get("/health")

    assert response.status_code == 200
    assert connect_calls == []
    assert Database._initialized is False


async def test_first_storage_request_connects_once(client, alice, connect_calls):
    first = await client.get("/workouts", headers=alice)
    second = await client.get("/workouts", headers=alice)

    assert first.status_code == 200
    assert second.status_code == 200
    assert connect_calls == [(settings.DATABASE_URL, settings.DATABASE_NAME)]


async def test_failed_lazy_connect_still_answers(client, alice, monkeypatch):
    async def broken_connect(database_url, database_name):
        raise ConnectionError("no server")

    Database._initialized = False
    monkeypatch.setattr(Database, "connect_db", broken_connect)

    response = await client.get("/", headers=alice)

    assert response.status_code == 200


async def test_security_headers_on_every_response(client):
    response = await client.get("/health")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert "no-store" not in response.headers.get("cache-control", "")
    assert "strict-transport-security" not in response.headers


async def test_authenticated_responses_are_not_cached(client, alice, make_workout):
    await make_workout()

    listing = await client.get("/workouts", headers=alice)
    report = await client.get("/workouts/report", params={"year": 2024, "month": 3}, headers=alice)

    for response in (listing, report):
        assert response.status_code == 200
        assert "no-store" in response.headers["cache-control"]
        assert response.headers["pragma"] == "no-cache"

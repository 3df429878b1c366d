import os

os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENV", "testing")

from datetime import datetime, timezone

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from database import Database
from app.dependencies import get_clock
from app.models.mongodb import ExerciseEntry, WorkoutDocument
from app.services.auth import create_access_token

# 2024-03-05 14:30 UTC
FIXED_NOW = datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
async def db():
    client = AsyncMongoMockClient()
    await Database.init_models(client["gymportal_test"])
    yield client
    Database._initialized = False


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
async def client():
    from main import app

    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def bearer(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


@pytest.fixture
def alice():
    return bearer("alice")


@pytest.fixture
def bob():
    return bearer("bob")


@pytest.fixture
def make_workout():
    async def _make(
        owner_id="alice",
        title="Full Body",
        durations=(20, 15),
        logged_date=datetime(2024, 3, 1, 8, 0),
        **fields
    ):
        workout = WorkoutDocument(owner_id=owner_id, title=title, logged_date=logged_date, **fields)
        workout.set_exercises([
            ExerciseEntry(name=f"Exercise {i}", sets=3, reps=10, duration=d)
            for i, d in enumerate(durations)
        ])
        await workout.insert()
        return workout

    return _make

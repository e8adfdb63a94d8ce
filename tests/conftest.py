"""
Shared fixtures

Tests run against a file-backed SQLite database through aiosqlite. The
environment has to be in place before soilwatch is imported because the
settings and the engine are built at import time.
"""
import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="soilwatch-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-soilwatch-suite-0123456789"
os.environ["JSON_LOGS"] = "false"
os.environ["ENVIRONMENT"] = "test"

import httpx  # noqa: E402
import pytest  # noqa: E402

from soilwatch.core.database import AsyncSessionLocal, Base, engine  # noqa: E402
from soilwatch import models  # noqa: E402,F401
from soilwatch.auth.security import create_access_token, generate_webhook_token  # noqa: E402
from soilwatch.models import Sensor, User  # noqa: E402

# Every metric comfortably inside its ideal band
IDEAL_READING = {
    "soilHumidity": 40.0,
    "temperature": 24.0,
    "condutivity": 1.0,
    "ph": 6.5,
    "nitrogen": 35.0,
    "phosphorus": 25.0,
    "potassium": 200.0,
}


@pytest.fixture
async def db_session():
    """Fresh schema per test, plus a session on it"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def make_user(db_session):
    """Insert a user directly; password hashing is not needed below the HTTP layer"""
    counter = {"n": 0}

    async def _make_user(name: str = "Grower") -> User:
        counter["n"] += 1
        user = User(name=name, email=f"user{counter['n']}@example.com", password_hash="not-a-hash")
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
async def make_sensor(db_session):
    async def _make_sensor(user_id=None, name: str = "Probe") -> Sensor:
        sensor = Sensor(
            user_id=user_id,
            sensor_name=name,
            location="Bed 1",
            webhook_token=generate_webhook_token(),
        )
        db_session.add(sensor)
        await db_session.commit()
        return sensor

    return _make_sensor


@pytest.fixture
async def client(db_session):
    """HTTP client bound to the app in-process"""
    from soilwatch.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    """Bearer header for a user id"""
    def _auth_headers(user_id: int) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _auth_headers


@pytest.fixture
def ideal_reading():
    return dict(IDEAL_READING)

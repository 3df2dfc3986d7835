import os
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

# IMPORTANT:
# Set env vars BEFORE importing app.core.config/app.main (settings load at import time)
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_social_graph.db")
os.environ.setdefault("JWT_SECRET", "dev-test-secret")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:5173")

from app.main import app as fastapi_app  # noqa: E402
from app.db.base_class import Base  # noqa: E402
import app.db.base  # noqa: F401,E402  (register models)
from app.db.session import engine, AsyncSessionLocal, get_db_session  # noqa: E402
from app.models.user import User  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def _schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def db_session(_schema):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(db_session):
    """
    Overrides app.db.session.get_db_session so every request in a test
    shares the test session.
    """

    async def _override_get_db_session():
        yield db_session

    fastapi_app.dependency_overrides[get_db_session] = _override_get_db_session

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    fastapi_app.dependency_overrides.pop(get_db_session, None)


# --- helpers ---

def _unique(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


@pytest.fixture
def unique_str():
    return _unique


@pytest.fixture
def user_factory(unique_str):
    async def _create(
        client: AsyncClient,
        *,
        email: str | None = None,
        full_name: str | None = None,
        password: str = "SuperSecret123",
    ):
        email = email or f"{unique_str('user')}@example.com"
        full_name = full_name or unique_str("User")
        r = await client.post(
            "/auth/register",
            json={"email": email, "full_name": full_name, "password": password},
        )
        assert r.status_code == 201, r.text
        data = r.json()
        assert "id" in data
        return {
            "id": data["id"],
            "email": email,
            "full_name": full_name,
            "password": password,
        }

    return _create


@pytest.fixture
def login_helper():
    async def _login(client: AsyncClient, *, email: str, password: str):
        client.cookies.clear()
        r = await client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        token = client.cookies.get("access_token")
        assert token, "Login did not set access_token cookie"
        return token

    return _login


@pytest.fixture
def onboard_helper():
    async def _onboard(client: AsyncClient, *, full_name: str):
        r = await client.put(
            "/auth/onboarding",
            json={
                "full_name": full_name,
                "bio": "Learning every day",
                "native_language": "english",
                "learning_language": "spanish",
                "location": "Lisbon",
            },
        )
        assert r.status_code == 200, r.text
        return r.json()

    return _onboard


@pytest.fixture
def authed_user(user_factory, login_helper, onboard_helper):
    """Registers, logs in and onboards a user; returns its record with `token`."""

    async def _create(client: AsyncClient, *, onboard: bool = True, **kwargs):
        user = await user_factory(client, **kwargs)
        token = await login_helper(client, email=user["email"], password=user["password"])
        if onboard:
            await onboard_helper(client, full_name=user["full_name"])
        user["token"] = token
        return user

    return _create


@pytest.fixture
def act_as():
    def _set(client: AsyncClient, user: dict | None):
        client.cookies.clear()
        if user:
            client.cookies.set("access_token", user["token"])

    return _set


@pytest.fixture
def make_user(db_session):
    """Inserts a user row directly, for service-level tests."""

    async def _make(full_name: str, *, onboarded: bool = True) -> User:
        user = User(
            email=f"{_unique(full_name.lower())}@example.com",
            full_name=full_name,
            password_hash="not-a-real-hash",
            is_onboarded=onboarded,
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make

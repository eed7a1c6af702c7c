"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own aiosqlite in-memory engine. StaticPool keeps
   one connection alive so every session sees the same database.
2. get_db is overridden to hand out sessions from that engine, so the
   app under test and the test's own `db_session` share state.
3. Auth is NOT overridden. The access gate runs for real; `auth_headers`
   mints a token with the app's own TokenService, so tests that don't
   care about login skip the bcrypt round-trip.
"""

import os

# Must be set before todogate.config is imported
os.environ.setdefault("TODOGATE_DATABASE_URL", "sqlite+aiosqlite://")

from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from todogate.db.engine import get_db, init_db
from todogate.main import app

TEST_DB_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session on the test database, for direct service/store tests
    and for inspecting what the API wrote."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with get_db overridden; auth pipeline untouched."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def tokens():
    """The app's process-wide TokenService."""
    return app.state.token_service


@pytest.fixture
def auth_headers(tokens):
    """Authorization header carrying a valid token for a test identity."""
    token = tokens.issue(SimpleNamespace(id=1, name="tester"))
    return {"Authorization": f"Bearer {token}"}

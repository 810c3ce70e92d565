"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os

# must be set before notesapp builds its settings, engine and logging config
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ["NOTESAPP_SKIP_LIFESPAN_DB"] = "1"

from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notesapp.core import redis_client as redis_client_module  # noqa: E402
from notesapp.core.models import BaseModel, Note, User  # noqa: E402
from notesapp.database import enable_sqlite_foreign_keys, get_db_session  # noqa: E402
from notesapp.main import app  # noqa: E402
from notesapp.security.jwt import create_access_token  # noqa: E402
from notesapp.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "secret123"


class FakeRedisClient:
    """In-memory stand-in for RedisClient, so tests never open a socket."""

    def __init__(self, available: bool = True):
        self.available = available
        self.blacklist: dict[str, int] = {}

    async def connect(self):
        if not self.available:
            raise ConnectionError("redis down")

    async def disconnect(self):
        pass

    async def ping(self):
        await self.connect()
        return True

    async def add_to_blacklist(self, token_jti, expire):
        if not self.available:
            return False
        self.blacklist[token_jti] = expire
        return True

    async def is_token_blacklisted(self, token_jti):
        await self.connect()
        return token_jti in self.blacklist


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Replace the process-wide Redis client for every test."""
    client = FakeRedisClient()
    monkeypatch.setattr(redis_client_module, "_redis_client", client)
    return client


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Session bound to the per-test database."""
    session_maker = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(test_session):
    """App with get_db_session pointed at the test session."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    """Async HTTP client running in the test's event loop."""
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _make_user(session, username: str) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_user(test_session):
    """Note owner used by most tests."""
    return await _make_user(test_session, f"alice_{uuid4().hex[:6]}")


@pytest.fixture
async def other_user(test_session):
    """A second user who owns nothing the tests look at."""
    return await _make_user(test_session, f"bob_{uuid4().hex[:6]}")


@pytest.fixture
def auth_headers(test_user):
    return auth_headers_for(test_user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers_for(other_user)


@pytest.fixture
def make_note(test_session):
    """Factory inserting notes directly through the ORM."""

    async def _make(author: User, title="Test Note", content="Some content", tags=(), is_public=False):
        note = Note(title=title, content=content, author_id=author.id, is_public=is_public)
        note.set_tags(list(tags))
        test_session.add(note)
        await test_session.commit()
        return note

    return _make

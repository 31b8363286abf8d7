"""Shared fixtures: in-memory database, cache double, storage root, HTTP client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from files_manager.config import Settings
from files_manager.database import build_engine, build_session_factory, get_db, get_session_factory
from files_manager.dependencies import get_cache, get_settings
from files_manager.main import app
from files_manager.models import Base, User
from files_manager.services.blob_writer import BlobWriter
from files_manager.services.file_store import FileStore


class FakeCache:
    """Dict-backed stand-in for the Redis session cache."""

    def __init__(self, values=None):
        self.values = dict(values or {})

    async def get(self, key):
        return self.values.get(key)

    async def ping(self):
        return True


class RecordingQueue:
    """JobQueue double that records submissions instead of scheduling them."""

    def __init__(self):
        self.submitted = []

    def submit(self, job_type, user_id, params):
        self.submitted.append((job_type, user_id, params))


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite shared by every session of a test.

    Yields:
        AsyncEngine with all tables created.
    """
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    user = User(email="test@example.com")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    user = User(email="other@example.com")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
def store(db):
    return FileStore(db)


@pytest.fixture
def storage_root(tmp_path):
    """Storage root that does not exist yet."""
    return tmp_path / "files_manager"


@pytest.fixture
def blobs(storage_root):
    return BlobWriter(str(storage_root))


@pytest.fixture
def queue():
    return RecordingQueue()


@pytest.fixture
def cache(user, other_user):
    return FakeCache({
        "auth_user-token": str(user.id),
        "auth_other-token": str(other_user.id),
    })


@pytest.fixture
def user_headers():
    return {"X-Token": "user-token"}


@pytest.fixture
def other_headers():
    return {"X-Token": "other-token"}


@pytest_asyncio.fixture
async def client(session_factory, cache, storage_root):
    """HTTP client against the app with every collaborator replaced.

    Yields:
        httpx AsyncClient bound to the ASGI app.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    test_settings = Settings(FOLDER_PATH=str(storage_root))
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
